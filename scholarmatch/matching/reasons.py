"""Human-readable match reasons for confirmed matches.

Reasons are emitted in a fixed facet order: GPA, first-generation,
financial need, gender, residency, community service, field of study,
military affiliation, ethnicity. Enrollment and citizenship status are
eligibility gates only and never produce a reason.

Note: the first-generation and financial-need reasons are reported when the
student's own flag is true, not when it equals the scholarship's required
value. A scholarship requiring ``financial_need=False`` matched by a student
without need therefore yields no financial-need reason.
"""

from typing import List, Union

from scholarmatch.matching.requirements import ScholarshipProfile
from scholarmatch.profile.models import StudentProfile

FIRST_GENERATION_REASON = "First-generation student status"
FINANCIAL_NEED_REASON = "Financial need demonstrated"
MILITARY_REASON = "Military affiliation requirement met"
ETHNICITY_REASON = "Ethnicity requirement met"


def format_number(value: Union[int, float]) -> str:
    """Render a number without a trailing ``.0`` (3.0 -> "3", 3.5 -> "3.5")."""
    return f"{value:.15g}"


def compose_match_reasons(
    student: StudentProfile, scholarship: ScholarshipProfile
) -> List[str]:
    """Explain why a matched scholarship applies to the student.

    Args:
        student: Student snapshot
        scholarship: A scholarship the student already matched

    Returns:
        Ordered reason strings, one per constrained and satisfied facet
    """
    reasons = [
        f"GPA requirement met ({format_number(student.gpa)} >= "
        f"{format_number(scholarship.gpa_minimum)})"
    ]

    if scholarship.first_generation.is_constrained and student.first_generation:
        reasons.append(FIRST_GENERATION_REASON)

    if scholarship.financial_need.is_constrained and student.financial_need:
        reasons.append(FINANCIAL_NEED_REASON)

    gender = scholarship.gender
    if gender.is_constrained and student.gender == gender.value:
        reasons.append(f"{gender.value} student requirement met")

    residency = scholarship.residency
    if residency.is_constrained and student.residency == residency.value:
        reasons.append(f"{residency.value} residency requirement met")

    minimum = scholarship.community_service_hours_minimum
    hours = student.community_service_hours
    if minimum is not None and hours is not None and hours >= minimum:
        reasons.append(
            f"{hours} hours of community service (exceeds {minimum} minimum)"
        )

    if scholarship.fields_of_study.is_constrained and student.major:
        reasons.append(f"{student.major} major alignment")

    if scholarship.military_affiliations.is_constrained and student.military_affiliation is not None:
        reasons.append(MILITARY_REASON)

    if scholarship.ethnicities.is_constrained and student.ethnicity:
        reasons.append(ETHNICITY_REASON)

    return reasons
