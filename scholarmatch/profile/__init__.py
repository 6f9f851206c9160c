"""Profile module for student profile management."""

from scholarmatch.profile.models import (
    CitizenshipStatus,
    EnrollmentStatus,
    Gender,
    MilitaryAffiliation,
    Residency,
    StudentCreate,
    StudentProfile,
    derive_financial_need,
)

__all__ = [
    "CitizenshipStatus",
    "EnrollmentStatus",
    "Gender",
    "MilitaryAffiliation",
    "Residency",
    "StudentCreate",
    "StudentProfile",
    "derive_financial_need",
]
