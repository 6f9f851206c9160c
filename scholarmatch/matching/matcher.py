"""Eligibility matching engine.

Combines the per-facet predicates with AND semantics. Matches are boolean:
a scholarship is either eligible or not, and results are ordered by
scholarship id only so that listings are deterministic.
"""

import logging
from typing import Iterable, List, Optional, Sequence, Tuple

from scholarmatch.matching.predicates import PREDICATES, Predicate
from scholarmatch.matching.requirements import ScholarshipProfile
from scholarmatch.profile.models import StudentProfile

logger = logging.getLogger(__name__)


def is_match(student: StudentProfile, scholarship: ScholarshipProfile) -> bool:
    """Return True if the student satisfies every eligibility facet."""
    return all(predicate(student, scholarship) for _, predicate in PREDICATES)


def find_matches(
    student: StudentProfile, catalog: Iterable[ScholarshipProfile]
) -> List[ScholarshipProfile]:
    """Filter a catalog down to the scholarships the student is eligible for.

    Args:
        student: Student snapshot
        catalog: Fully hydrated scholarships

    Returns:
        Eligible scholarships ordered by id ascending
    """
    return EligibilityMatcher().match_batch(student, catalog)


class EligibilityMatcher:
    """Matches student profiles against scholarship eligibility requirements."""

    def __init__(self, predicates: Optional[Sequence[Tuple[str, Predicate]]] = None):
        """Initialize the matcher.

        Args:
            predicates: Named predicates to evaluate. Defaults to all facets.
        """
        self.predicates = list(predicates) if predicates is not None else list(PREDICATES)

    def is_match(self, student: StudentProfile, scholarship: ScholarshipProfile) -> bool:
        return all(predicate(student, scholarship) for _, predicate in self.predicates)

    def failed_facets(
        self, student: StudentProfile, scholarship: ScholarshipProfile
    ) -> List[str]:
        """Return the names of every facet the student does not satisfy."""
        return [
            name for name, predicate in self.predicates
            if not predicate(student, scholarship)
        ]

    def match_batch(
        self, student: StudentProfile, catalog: Iterable[ScholarshipProfile]
    ) -> List[ScholarshipProfile]:
        """Match a student against a whole catalog.

        Rejections are logged at DEBUG level with the failing facets.
        """
        matches = []
        total = 0
        for scholarship in catalog:
            total += 1
            if self.is_match(student, scholarship):
                matches.append(scholarship)
            elif logger.isEnabledFor(logging.DEBUG):
                failed = self.failed_facets(student, scholarship)
                logger.debug(f"{scholarship.id} rejected for {student.id}: {', '.join(failed)}")

        matches.sort(key=lambda s: s.id)
        logger.info(f"Matched {total} scholarships, {len(matches)} eligible")
        return matches
