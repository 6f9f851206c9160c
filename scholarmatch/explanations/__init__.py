"""Explanation generation for scholarship matches."""

from scholarmatch.explanations.orchestrator import (
    DEGRADED_EXPLANATION,
    NOT_CONFIGURED_EXPLANATION,
    ExplanationOrchestrator,
)
from scholarmatch.explanations.provider import (
    ExplanationProvider,
    OpenAIExplanationProvider,
    build_explanation_provider,
)

__all__ = [
    "DEGRADED_EXPLANATION",
    "NOT_CONFIGURED_EXPLANATION",
    "ExplanationOrchestrator",
    "ExplanationProvider",
    "OpenAIExplanationProvider",
    "build_explanation_provider",
]
