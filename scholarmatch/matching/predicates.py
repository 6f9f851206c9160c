"""Eligibility predicates, one per facet.

Every predicate is a pure function ``(student, scholarship) -> bool``.
"""

from typing import Callable, List, Tuple

from scholarmatch.matching.requirements import ScholarshipProfile
from scholarmatch.profile.models import StudentProfile

Predicate = Callable[[StudentProfile, ScholarshipProfile], bool]


def meets_gpa(student: StudentProfile, scholarship: ScholarshipProfile) -> bool:
    return student.gpa >= scholarship.gpa_minimum


def meets_enrollment_status(student: StudentProfile, scholarship: ScholarshipProfile) -> bool:
    return scholarship.enrollment_statuses.permits(student.enrollment_status)


def meets_citizenship_status(student: StudentProfile, scholarship: ScholarshipProfile) -> bool:
    return scholarship.citizenship_statuses.permits(student.citizenship_status)


def meets_field_of_study(student: StudentProfile, scholarship: ScholarshipProfile) -> bool:
    return scholarship.fields_of_study.permits(student.major)


def meets_first_generation(student: StudentProfile, scholarship: ScholarshipProfile) -> bool:
    return scholarship.first_generation.permits(student.first_generation)


def meets_financial_need(student: StudentProfile, scholarship: ScholarshipProfile) -> bool:
    return scholarship.financial_need.permits(student.financial_need)


def meets_gender(student: StudentProfile, scholarship: ScholarshipProfile) -> bool:
    return scholarship.gender.permits(student.gender)


def meets_residency(student: StudentProfile, scholarship: ScholarshipProfile) -> bool:
    return scholarship.residency.permits(student.residency)


def meets_community_service(student: StudentProfile, scholarship: ScholarshipProfile) -> bool:
    minimum = scholarship.community_service_hours_minimum
    if minimum is None:
        return True
    hours = student.community_service_hours
    return hours is not None and hours >= minimum


def meets_military_affiliation(student: StudentProfile, scholarship: ScholarshipProfile) -> bool:
    return scholarship.military_affiliations.permits(student.military_affiliation)


def meets_ethnicity(student: StudentProfile, scholarship: ScholarshipProfile) -> bool:
    """Any overlap is enough; the student need not cover the whole list."""
    return scholarship.ethnicities.permits_any(student.ethnicity)


# Cheapest first: scalar comparisons, then set memberships.
PREDICATES: List[Tuple[str, Predicate]] = [
    ("gpa", meets_gpa),
    ("first_generation", meets_first_generation),
    ("financial_need", meets_financial_need),
    ("gender", meets_gender),
    ("residency", meets_residency),
    ("community_service", meets_community_service),
    ("enrollment_status", meets_enrollment_status),
    ("citizenship_status", meets_citizenship_status),
    ("fields_of_study", meets_field_of_study),
    ("military_affiliation", meets_military_affiliation),
    ("ethnicity", meets_ethnicity),
]
