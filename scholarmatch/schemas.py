"""Pydantic schemas for catalog input and API responses."""

from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from scholarmatch.matching.requirements import (
    BooleanRequirement,
    EqualsRequirement,
    MandatoryAllowlist,
    OptionalAllowlist,
    ScholarshipProfile,
)
from scholarmatch.profile.models import (
    CitizenshipStatus,
    EnrollmentStatus,
    Gender,
    MilitaryAffiliation,
    Residency,
)


class ScholarshipCreate(BaseModel):
    """A catalog entry with its eligibility requirements.

    Null scalar requirements and empty optional lists mean "no constraint".
    Enrollment and citizenship lists must name at least one allowed value.
    """

    model_config = ConfigDict(use_enum_values=True)

    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    amount: int = Field(..., gt=0, description="Award amount in whole dollars")
    provider: str
    deadline: date
    url: Optional[str] = None
    gpa_minimum: float = Field(..., ge=0.0, le=4.0)
    first_generation: Optional[bool] = None
    financial_need: Optional[bool] = None
    gender: Optional[Gender] = None
    residency: Optional[Residency] = None
    community_service_hours_minimum: Optional[int] = Field(None, ge=0)
    enrollment_statuses: List[EnrollmentStatus] = Field(..., min_length=1)
    citizenship_statuses: List[CitizenshipStatus] = Field(..., min_length=1)
    fields_of_study: List[str] = Field(default_factory=list)
    military_affiliations: List[MilitaryAffiliation] = Field(default_factory=list)
    ethnicities: List[str] = Field(default_factory=list)

    def to_profile(self) -> ScholarshipProfile:
        return ScholarshipProfile(
            id=self.id,
            name=self.name,
            amount=self.amount,
            provider=self.provider,
            deadline=self.deadline,
            url=self.url,
            gpa_minimum=self.gpa_minimum,
            first_generation=BooleanRequirement.from_nullable(self.first_generation),
            financial_need=BooleanRequirement.from_nullable(self.financial_need),
            gender=EqualsRequirement(self.gender),
            residency=EqualsRequirement(self.residency),
            community_service_hours_minimum=self.community_service_hours_minimum,
            enrollment_statuses=MandatoryAllowlist.of(self.enrollment_statuses),
            citizenship_statuses=MandatoryAllowlist.of(self.citizenship_statuses),
            fields_of_study=OptionalAllowlist.of(self.fields_of_study),
            military_affiliations=OptionalAllowlist.of(self.military_affiliations),
            ethnicities=OptionalAllowlist.of(self.ethnicities),
        )


class ScholarshipSummary(BaseModel):
    id: str
    name: str
    amount: int
    provider: str
    deadline: date
    url: Optional[str] = None

    @classmethod
    def from_profile(cls, scholarship: ScholarshipProfile) -> "ScholarshipSummary":
        return cls(
            id=scholarship.id,
            name=scholarship.name,
            amount=scholarship.amount,
            provider=scholarship.provider,
            deadline=scholarship.deadline,
            url=scholarship.url,
        )


class ScholarshipMatch(BaseModel):
    scholarship: ScholarshipSummary
    match_reasons: List[str] = Field(default_factory=list)
    explanation: str


class StudentMatchesResponse(BaseModel):
    """Response body for ``GET /students/{id}/matches``."""

    student_id: str
    student_name: str
    total_matches: int
    total_potential_aid: int
    matches: List[ScholarshipMatch] = Field(default_factory=list)


class StudentCreated(BaseModel):
    id: str
    name: str
    email: str
    created_at: datetime


class ScholarshipListItem(BaseModel):
    id: str
    name: str
    amount: int
    deadline: date
    provider: str


class ScholarshipList(BaseModel):
    scholarships: List[ScholarshipListItem] = Field(default_factory=list)
    total: int = 0
