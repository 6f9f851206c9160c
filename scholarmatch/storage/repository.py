"""Data access for matching.

``MatchingStore`` is the read contract the matching service depends on.
``SqlMatchingStore`` implements it (plus registration and catalog writes)
on top of SQLAlchemy.
"""

import logging
from contextlib import contextmanager
from typing import Dict, Iterator, List, Optional, Protocol, Type

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from scholarmatch.errors import DuplicateEmailError, StoreError, StudentNotFoundError
from scholarmatch.matching.requirements import (
    BooleanRequirement,
    EqualsRequirement,
    MandatoryAllowlist,
    OptionalAllowlist,
    RequirementFacet,
    ScholarshipProfile,
)
from scholarmatch.profile.models import StudentCreate, StudentProfile, derive_financial_need
from scholarmatch.schemas import ScholarshipCreate
from scholarmatch.storage.database import get_session_factory, session_scope
from scholarmatch.storage.models import (
    Base,
    Scholarship,
    ScholarshipCitizenship,
    ScholarshipEnrollmentStatus,
    ScholarshipEthnicity,
    ScholarshipFieldOfStudy,
    ScholarshipMilitaryAffiliation,
    Student,
    StudentEthnicity,
)

logger = logging.getLogger(__name__)

STUDENT_ID_PREFIX = "stu_"

FACET_TABLES: Dict[RequirementFacet, Type[Base]] = {
    RequirementFacet.ENROLLMENT_STATUS: ScholarshipEnrollmentStatus,
    RequirementFacet.CITIZENSHIP_STATUS: ScholarshipCitizenship,
    RequirementFacet.FIELDS_OF_STUDY: ScholarshipFieldOfStudy,
    RequirementFacet.MILITARY_AFFILIATION: ScholarshipMilitaryAffiliation,
    RequirementFacet.ETHNICITY: ScholarshipEthnicity,
}


class MatchingStore(Protocol):
    """Read-only contract required by the matching service."""

    def load_student(self, student_id: str) -> StudentProfile:
        """Return the student snapshot or raise ``StudentNotFoundError``."""
        ...

    def load_all_scholarships_with_requirements(self) -> List[ScholarshipProfile]:
        ...

    def count_requirement_set(self, scholarship_id: str, facet: RequirementFacet) -> int:
        ...


def next_student_id(existing_ids: List[str]) -> str:
    """Return the next sequential id (stu_001, stu_002, ...).

    Ids without a numeric suffix are ignored.
    """
    highest = 0
    for student_id in existing_ids:
        suffix = student_id[len(STUDENT_ID_PREFIX):]
        if student_id.startswith(STUDENT_ID_PREFIX) and suffix.isdigit():
            highest = max(highest, int(suffix))
    return f"{STUDENT_ID_PREFIX}{highest + 1:03d}"


def _to_student_profile(row: Student) -> StudentProfile:
    return StudentProfile(
        id=row.id,
        name=row.name,
        email=row.email,
        gpa=row.gpa,
        enrollment_status=row.enrollment_status,
        citizenship_status=row.citizenship_status,
        major=row.major,
        gender=row.gender,
        residency=row.residency,
        military_affiliation=row.military_affiliation,
        financial_need=row.financial_need,
        first_generation=row.first_generation,
        community_service_hours=row.community_service_hours,
        ethnicity=frozenset(e.ethnicity for e in row.ethnicities),
        graduation_year=row.graduation_year,
        state=row.state,
        created_at=row.created_at,
    )


def _to_scholarship_profile(row: Scholarship) -> ScholarshipProfile:
    return ScholarshipProfile(
        id=row.id,
        name=row.name,
        amount=row.amount,
        provider=row.provider,
        deadline=row.deadline,
        url=row.url,
        gpa_minimum=row.gpa_minimum,
        first_generation=BooleanRequirement.from_nullable(row.first_generation),
        financial_need=BooleanRequirement.from_nullable(row.financial_need),
        gender=EqualsRequirement(row.gender),
        residency=EqualsRequirement(row.residency),
        community_service_hours_minimum=row.community_service_hours_minimum,
        enrollment_statuses=MandatoryAllowlist.of(r.value for r in row.enrollment_statuses),
        citizenship_statuses=MandatoryAllowlist.of(r.value for r in row.citizenship_statuses),
        fields_of_study=OptionalAllowlist.of(r.value for r in row.fields_of_study),
        military_affiliations=OptionalAllowlist.of(r.value for r in row.military_affiliations),
        ethnicities=OptionalAllowlist.of(r.value for r in row.ethnicities),
    )


class SqlMatchingStore:
    """SQLAlchemy-backed store for students and the scholarship catalog."""

    def __init__(self, session_factory: Optional[sessionmaker[Session]] = None):
        """Initialize the store.

        Args:
            session_factory: Session factory to use. Defaults to the module engine.
        """
        self.session_factory = session_factory or get_session_factory()

    @contextmanager
    def _session(self, action: str) -> Iterator[Session]:
        try:
            with session_scope(self.session_factory) as session:
                yield session
        except SQLAlchemyError as e:
            logger.error(f"Database error while trying to {action}: {e}")
            raise StoreError(f"Failed to {action}") from e

    def load_student(self, student_id: str) -> StudentProfile:
        with self._session("load student") as session:
            row = session.get(Student, student_id)
            if row is None:
                raise StudentNotFoundError(student_id)
            return _to_student_profile(row)

    def load_all_scholarships_with_requirements(self) -> List[ScholarshipProfile]:
        # Requirement sets are eager-loaded with one query per facet table.
        with self._session("load scholarships") as session:
            rows = session.scalars(select(Scholarship).order_by(Scholarship.id)).all()
            scholarships = [_to_scholarship_profile(row) for row in rows]
        logger.debug(f"Loaded {len(scholarships)} scholarships with requirements")
        return scholarships

    def count_requirement_set(self, scholarship_id: str, facet: RequirementFacet) -> int:
        facet = RequirementFacet(facet)
        table = FACET_TABLES[facet]
        with self._session(f"count {facet.value} requirements") as session:
            count = session.scalar(
                select(func.count()).select_from(table).where(
                    table.scholarship_id == scholarship_id
                )
            )
        return count or 0

    def list_scholarships(self) -> List[ScholarshipProfile]:
        """Return the whole catalog ordered by id."""
        return self.load_all_scholarships_with_requirements()

    def create_student(self, data: StudentCreate) -> StudentProfile:
        """Register a student, assigning the next sequential id.

        A concurrent registration can claim the same id first; the id is
        then allocated again once before giving up.

        Raises:
            DuplicateEmailError: If the email is already registered.
            StoreError: On any other database failure.
        """
        for attempt in range(2):
            try:
                profile = self._insert_student(data)
                break
            except IntegrityError as e:
                if self._email_registered(data.email):
                    logger.warning(f"Lost registration race for {data.email}")
                    raise DuplicateEmailError(data.email) from e
                if attempt == 1:
                    logger.error(f"Student id collision persisted for {data.email}: {e}")
                    raise StoreError("Failed to create student") from e
                logger.warning(f"Student id collision registering {data.email}, retrying")
            except SQLAlchemyError as e:
                logger.error(f"Database error while trying to create student: {e}")
                raise StoreError("Failed to create student") from e

        logger.info(f"Registered student {profile.id}")
        return profile

    def _email_registered(self, email: str) -> bool:
        with self._session("look up student email") as session:
            return session.scalar(select(Student.id).where(Student.email == email)) is not None

    def _insert_student(self, data: StudentCreate) -> StudentProfile:
        with session_scope(self.session_factory) as session:
            existing = session.scalar(select(Student.id).where(Student.email == data.email))
            if existing is not None:
                raise DuplicateEmailError(data.email)

            student_id = next_student_id(
                list(session.scalars(
                    select(Student.id).where(Student.id.like(f"{STUDENT_ID_PREFIX}%"))
                ))
            )
            row = Student(
                id=student_id,
                email=data.email,
                name=data.name,
                gpa=data.gpa,
                enrollment_status=data.enrollment_status,
                citizenship_status=data.citizenship_status,
                major=data.major,
                graduation_year=data.graduation_year,
                gender=data.gender,
                household_income=data.household_income,
                financial_need=derive_financial_need(data.household_income),
                first_generation=data.first_generation,
                military_affiliation=data.military_affiliation,
                residency=data.residency,
                community_service_hours=data.community_service_hours,
                state=data.state,
                ethnicities=[StudentEthnicity(ethnicity=e) for e in data.ethnicity],
            )
            session.add(row)
            session.flush()
            return _to_student_profile(row)

    def add_scholarship(self, data: ScholarshipCreate) -> ScholarshipProfile:
        """Insert or replace a catalog entry and its requirement sets."""
        with self._session("save scholarship") as session:
            existing = session.get(Scholarship, data.id)
            if existing is not None:
                session.delete(existing)
                session.flush()

            row = Scholarship(
                id=data.id,
                name=data.name,
                amount=data.amount,
                provider=data.provider,
                deadline=data.deadline,
                url=data.url,
                gpa_minimum=data.gpa_minimum,
                first_generation=data.first_generation,
                financial_need=data.financial_need,
                gender=data.gender,
                residency=data.residency,
                community_service_hours_minimum=data.community_service_hours_minimum,
                enrollment_statuses=[
                    ScholarshipEnrollmentStatus(value=v) for v in dict.fromkeys(data.enrollment_statuses)
                ],
                citizenship_statuses=[
                    ScholarshipCitizenship(value=v) for v in dict.fromkeys(data.citizenship_statuses)
                ],
                fields_of_study=[
                    ScholarshipFieldOfStudy(value=v) for v in dict.fromkeys(data.fields_of_study)
                ],
                military_affiliations=[
                    ScholarshipMilitaryAffiliation(value=v)
                    for v in dict.fromkeys(data.military_affiliations)
                ],
                ethnicities=[
                    ScholarshipEthnicity(value=v) for v in dict.fromkeys(data.ethnicities)
                ],
            )
            session.add(row)
        return data.to_profile()
