"""Pydantic models for student profile data."""

from datetime import datetime
from enum import Enum
from typing import FrozenSet, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from scholarmatch.config import FINANCIAL_NEED_INCOME_THRESHOLD


class EnrollmentStatus(str, Enum):
    """Enrollment status options."""

    FULL_TIME = "full_time"
    PART_TIME = "part_time"
    HIGH_SCHOOL_SENIOR = "high_school_senior"


class CitizenshipStatus(str, Enum):
    """Citizenship/residency status options."""

    CITIZEN = "citizen"
    PERMANENT_RESIDENT = "permanent_resident"
    DACA = "daca"
    INTERNATIONAL = "international"


class Gender(str, Enum):
    """Gender options."""

    MALE = "male"
    FEMALE = "female"
    NON_BINARY = "non_binary"
    OTHER = "other"


class Residency(str, Enum):
    """Tuition residency classification."""

    IN_STATE = "in_state"
    OUT_OF_STATE = "out_of_state"
    INTERNATIONAL = "international"


class MilitaryAffiliation(str, Enum):
    """Military affiliation options."""

    VETERAN = "veteran"
    ACTIVE_DUTY = "active_duty"
    RESERVE = "reserve"
    DEPENDENT = "dependent"


def derive_financial_need(household_income: Optional[int]) -> bool:
    """Financial need is demonstrated below the household income threshold.

    Unknown income never demonstrates need.
    """
    if household_income is None:
        return False
    return household_income < FINANCIAL_NEED_INCOME_THRESHOLD


class StudentCreate(BaseModel):
    """Registration payload for a new student."""

    model_config = ConfigDict(use_enum_values=True, extra="ignore")

    name: str = Field(..., min_length=1, description="Student's name")
    email: str = Field(
        ..., pattern=r"^[^\s@]+@[^\s@]+\.[^\s@]+$", description="Email address"
    )
    gpa: float = Field(..., ge=0.0, le=4.0, description="GPA on 4.0 scale")
    enrollment_status: EnrollmentStatus
    citizenship_status: CitizenshipStatus
    major: Optional[str] = Field(None, description="Primary major")
    graduation_year: Optional[int] = Field(None, ge=0, description="Expected graduation year")
    gender: Optional[Gender] = None
    ethnicity: list[str] = Field(
        default_factory=list, description="Ethnicity/race (can be multiple)"
    )
    household_income: Optional[int] = Field(None, ge=0, description="Annual household income")
    first_generation: bool = Field(False, description="First generation college student")
    military_affiliation: Optional[MilitaryAffiliation] = None
    residency: Optional[Residency] = None
    community_service_hours: Optional[int] = Field(None, ge=0)
    state: Optional[str] = Field(None, description="US state if applicable")

    @field_validator("ethnicity")
    @classmethod
    def _dedupe_ethnicity(cls, value: list[str]) -> list[str]:
        # Duplicates collapse; first occurrence wins.
        return list(dict.fromkeys(value))


class StudentProfile(BaseModel):
    """Read-only snapshot of a registered student used for matching."""

    model_config = ConfigDict(use_enum_values=True, frozen=True)

    id: str
    name: str
    email: Optional[str] = None
    gpa: float = Field(..., ge=0.0, le=4.0)
    enrollment_status: EnrollmentStatus
    citizenship_status: CitizenshipStatus
    major: Optional[str] = None
    gender: Optional[Gender] = None
    residency: Optional[Residency] = None
    military_affiliation: Optional[MilitaryAffiliation] = None
    financial_need: bool = False
    first_generation: bool = False
    community_service_hours: Optional[int] = Field(None, ge=0)
    ethnicity: FrozenSet[str] = frozenset()
    graduation_year: Optional[int] = None
    state: Optional[str] = None
    created_at: Optional[datetime] = None
