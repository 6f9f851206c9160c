from __future__ import annotations

from datetime import date
from typing import Any, Callable, Iterator

import pytest

from scholarmatch.matching.requirements import (
    BooleanRequirement,
    EqualsRequirement,
    MandatoryAllowlist,
    OptionalAllowlist,
    ScholarshipProfile,
)
from scholarmatch.profile.models import StudentProfile
from scholarmatch.storage.database import create_engine, get_session_factory, init_db
from scholarmatch.storage.repository import SqlMatchingStore

MANDATORY_FACETS = ("enrollment_statuses", "citizenship_statuses")
OPTIONAL_FACETS = ("fields_of_study", "military_affiliations", "ethnicities")
BOOLEAN_FACETS = ("first_generation", "financial_need")
EQUALS_FACETS = ("gender", "residency")


def build_student(**overrides: Any) -> StudentProfile:
    data: dict[str, Any] = {
        "id": "stu_001",
        "name": "Ada Lovelace",
        "email": "ada@example.com",
        "gpa": 3.8,
        "enrollment_status": "full_time",
        "citizenship_status": "citizen",
        "first_generation": False,
        "financial_need": False,
    }
    data.update(overrides)
    return StudentProfile(**data)


def build_scholarship(**overrides: Any) -> ScholarshipProfile:
    """Build a scholarship; plain sets/bools/strings are wrapped in requirement types."""
    data: dict[str, Any] = {
        "id": "sch_001",
        "name": "General Merit Award",
        "amount": 1000,
        "provider": "Test Foundation",
        "deadline": date(2027, 1, 1),
        "gpa_minimum": 3.0,
        "enrollment_statuses": {"full_time"},
        "citizenship_statuses": {"citizen"},
    }
    data.update(overrides)

    for key in MANDATORY_FACETS:
        if not isinstance(data[key], MandatoryAllowlist):
            data[key] = MandatoryAllowlist.of(data[key])
    for key in OPTIONAL_FACETS:
        if key in data and not isinstance(data[key], OptionalAllowlist):
            data[key] = OptionalAllowlist.of(data[key])
    for key in BOOLEAN_FACETS:
        if key in data and not isinstance(data[key], BooleanRequirement):
            data[key] = BooleanRequirement.from_nullable(data[key])
    for key in EQUALS_FACETS:
        if key in data and not isinstance(data[key], EqualsRequirement):
            data[key] = EqualsRequirement(data[key])

    return ScholarshipProfile(**data)


@pytest.fixture
def make_student() -> Callable[..., StudentProfile]:
    return build_student


@pytest.fixture
def make_scholarship() -> Callable[..., ScholarshipProfile]:
    return build_scholarship


@pytest.fixture
def store() -> Iterator[SqlMatchingStore]:
    engine = create_engine("sqlite:///:memory:")
    init_db(engine=engine)
    yield SqlMatchingStore(get_session_factory(engine))
    engine.dispose()
