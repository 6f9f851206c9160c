"""Concurrent explanation fan-out for a student's matches."""

import asyncio
import logging
from typing import List, Optional, Sequence

from scholarmatch.errors import ProviderError
from scholarmatch.explanations.provider import ExplanationProvider
from scholarmatch.matching.requirements import ScholarshipProfile
from scholarmatch.profile.models import StudentProfile

logger = logging.getLogger(__name__)

NOT_CONFIGURED_EXPLANATION = "Explanation unavailable - AI explanations are not configured."
DEGRADED_EXPLANATION = "Explanation unavailable - please try again later."


class ExplanationOrchestrator:
    """Attaches an explanation to every match, one provider call each.

    All calls for a request run concurrently and are awaited together. A
    failing call only degrades its own item. There is no retry.
    """

    def __init__(self, provider: Optional[ExplanationProvider] = None):
        self.provider = provider

    @property
    def enabled(self) -> bool:
        return self.provider is not None

    async def explain_all(
        self, student: StudentProfile, scholarships: Sequence[ScholarshipProfile]
    ) -> List[str]:
        """Return one explanation per scholarship, in the same order."""
        if self.provider is None:
            return [NOT_CONFIGURED_EXPLANATION] * len(scholarships)

        explanations = await asyncio.gather(
            *(self._explain_one(student, s) for s in scholarships)
        )
        return list(explanations)

    async def _explain_one(self, student: StudentProfile, scholarship: ScholarshipProfile) -> str:
        try:
            return await self.provider.generate_explanation(student, scholarship)
        except ProviderError as e:
            logger.warning(f"Explanation failed for {scholarship.id}: {e}")
            return DEGRADED_EXPLANATION
        except Exception as e:
            logger.error(f"Unexpected explanation error for {scholarship.id}: {e}")
            return DEGRADED_EXPLANATION
