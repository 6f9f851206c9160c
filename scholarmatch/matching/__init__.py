"""Matching module for eligibility matching and match reasons."""

from scholarmatch.matching.matcher import EligibilityMatcher, find_matches, is_match
from scholarmatch.matching.reasons import compose_match_reasons
from scholarmatch.matching.requirements import (
    UNCONSTRAINED,
    BooleanRequirement,
    EqualsRequirement,
    MandatoryAllowlist,
    OptionalAllowlist,
    ScholarshipProfile,
    require_equals,
)

__all__ = [
    "EligibilityMatcher",
    "find_matches",
    "is_match",
    "compose_match_reasons",
    "UNCONSTRAINED",
    "BooleanRequirement",
    "EqualsRequirement",
    "MandatoryAllowlist",
    "OptionalAllowlist",
    "ScholarshipProfile",
    "require_equals",
]
