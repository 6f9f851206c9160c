"""Match service: loads data, matches, explains and assembles the response."""

import asyncio
from typing import Optional

from scholarmatch.explanations.orchestrator import ExplanationOrchestrator
from scholarmatch.matching.matcher import EligibilityMatcher
from scholarmatch.matching.reasons import compose_match_reasons
from scholarmatch.schemas import ScholarshipMatch, ScholarshipSummary, StudentMatchesResponse
from scholarmatch.storage.repository import MatchingStore


class MatchingService:
    """Builds the match listing for one student."""

    def __init__(
        self,
        store: MatchingStore,
        orchestrator: Optional[ExplanationOrchestrator] = None,
        matcher: Optional[EligibilityMatcher] = None,
    ):
        self.store = store
        self.orchestrator = orchestrator or ExplanationOrchestrator()
        self.matcher = matcher or EligibilityMatcher()

    async def get_student_matches(self, student_id: str) -> StudentMatchesResponse:
        """Return every scholarship the student is eligible for.

        Raises:
            StudentNotFoundError: Unknown student id. Raised before matching runs.
            StoreError: The store failed.
        """
        # Store calls block, keep them off the event loop.
        student = await asyncio.to_thread(self.store.load_student, student_id)
        catalog = await asyncio.to_thread(self.store.load_all_scholarships_with_requirements)

        matches = self.matcher.match_batch(student, catalog)
        explanations = await self.orchestrator.explain_all(student, matches)

        items = [
            ScholarshipMatch(
                scholarship=ScholarshipSummary.from_profile(scholarship),
                match_reasons=compose_match_reasons(student, scholarship),
                explanation=explanation,
            )
            for scholarship, explanation in zip(matches, explanations)
        ]

        return StudentMatchesResponse(
            student_id=student.id,
            student_name=student.name,
            total_matches=len(items),
            total_potential_aid=sum(s.amount for s in matches),
            matches=items,
        )
