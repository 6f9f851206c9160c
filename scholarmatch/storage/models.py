"""SQLAlchemy models for the ScholarMatch database."""

from datetime import date, datetime, timezone
from typing import List, Optional

from sqlalchemy import (
    Boolean,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Base class for all models."""

    pass


class Student(Base):
    """Registered student applicants."""

    __tablename__ = "students"

    id: Mapped[str] = mapped_column(String(16), primary_key=True)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    gpa: Mapped[float] = mapped_column(Float, nullable=False)
    enrollment_status: Mapped[str] = mapped_column(String(32), nullable=False)
    citizenship_status: Mapped[str] = mapped_column(String(32), nullable=False)
    major: Mapped[Optional[str]] = mapped_column(String(255))
    graduation_year: Mapped[Optional[int]] = mapped_column(Integer)
    gender: Mapped[Optional[str]] = mapped_column(String(32))
    household_income: Mapped[Optional[int]] = mapped_column(Integer)
    financial_need: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    first_generation: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    military_affiliation: Mapped[Optional[str]] = mapped_column(String(32))
    residency: Mapped[Optional[str]] = mapped_column(String(32))
    community_service_hours: Mapped[Optional[int]] = mapped_column(Integer)
    state: Mapped[Optional[str]] = mapped_column(String(64))
    created_at: Mapped[datetime] = mapped_column(DateTime, default=_utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=_utcnow, onupdate=_utcnow, nullable=False
    )

    ethnicities: Mapped[List["StudentEthnicity"]] = relationship(
        cascade="all, delete-orphan", lazy="selectin"
    )

    def __repr__(self) -> str:
        return f"<Student(id={self.id!r}, name={self.name!r})>"


class StudentEthnicity(Base):
    __tablename__ = "student_ethnicities"

    student_id: Mapped[str] = mapped_column(
        ForeignKey("students.id", ondelete="CASCADE"), primary_key=True
    )
    ethnicity: Mapped[str] = mapped_column(String(64), primary_key=True)


class Scholarship(Base):
    """Scholarship catalog with scalar eligibility requirements.

    Nullable requirement columns mean "no constraint". List-valued
    requirements live in the per-facet tables below.
    """

    __tablename__ = "scholarships"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(500), nullable=False)
    amount: Mapped[int] = mapped_column(Integer, nullable=False)  # Whole dollars
    provider: Mapped[str] = mapped_column(String(255), nullable=False)
    deadline: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    url: Mapped[Optional[str]] = mapped_column(Text)
    gpa_minimum: Mapped[float] = mapped_column(Float, nullable=False)
    first_generation: Mapped[Optional[bool]] = mapped_column(Boolean)
    financial_need: Mapped[Optional[bool]] = mapped_column(Boolean)
    gender: Mapped[Optional[str]] = mapped_column(String(32))
    residency: Mapped[Optional[str]] = mapped_column(String(32))
    community_service_hours_minimum: Mapped[Optional[int]] = mapped_column(Integer)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=_utcnow, nullable=False)

    enrollment_statuses: Mapped[List["ScholarshipEnrollmentStatus"]] = relationship(
        cascade="all, delete-orphan", lazy="selectin"
    )
    citizenship_statuses: Mapped[List["ScholarshipCitizenship"]] = relationship(
        cascade="all, delete-orphan", lazy="selectin"
    )
    fields_of_study: Mapped[List["ScholarshipFieldOfStudy"]] = relationship(
        cascade="all, delete-orphan", lazy="selectin"
    )
    military_affiliations: Mapped[List["ScholarshipMilitaryAffiliation"]] = relationship(
        cascade="all, delete-orphan", lazy="selectin"
    )
    ethnicities: Mapped[List["ScholarshipEthnicity"]] = relationship(
        cascade="all, delete-orphan", lazy="selectin"
    )

    def __repr__(self) -> str:
        return f"<Scholarship(id={self.id!r}, name={self.name!r}, provider={self.provider!r})>"


class ScholarshipEnrollmentStatus(Base):
    __tablename__ = "scholarship_enrollment_status_eligibility"

    scholarship_id: Mapped[str] = mapped_column(
        ForeignKey("scholarships.id", ondelete="CASCADE"), primary_key=True
    )
    value: Mapped[str] = mapped_column("enrollment_status", String(32), primary_key=True)


class ScholarshipCitizenship(Base):
    __tablename__ = "scholarship_citizenship_eligibility"

    scholarship_id: Mapped[str] = mapped_column(
        ForeignKey("scholarships.id", ondelete="CASCADE"), primary_key=True
    )
    value: Mapped[str] = mapped_column("citizenship_status", String(32), primary_key=True)


class ScholarshipFieldOfStudy(Base):
    __tablename__ = "scholarship_fields_of_study"

    scholarship_id: Mapped[str] = mapped_column(
        ForeignKey("scholarships.id", ondelete="CASCADE"), primary_key=True
    )
    value: Mapped[str] = mapped_column("field_of_study", String(255), primary_key=True)


class ScholarshipMilitaryAffiliation(Base):
    __tablename__ = "scholarship_military_affiliation_eligibility"

    scholarship_id: Mapped[str] = mapped_column(
        ForeignKey("scholarships.id", ondelete="CASCADE"), primary_key=True
    )
    value: Mapped[str] = mapped_column("military_affiliation", String(32), primary_key=True)


class ScholarshipEthnicity(Base):
    __tablename__ = "scholarship_ethnicity_eligibility"

    scholarship_id: Mapped[str] = mapped_column(
        ForeignKey("scholarships.id", ondelete="CASCADE"), primary_key=True
    )
    value: Mapped[str] = mapped_column("ethnicity", String(64), primary_key=True)
