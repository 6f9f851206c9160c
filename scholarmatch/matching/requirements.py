"""Scholarship eligibility requirement types.

Scalar requirements are explicit tri-states instead of nullable values, so
"no constraint" can never be confused with missing student data. List-valued
requirements come in two variants:

- ``MandatoryAllowlist``: the student's value must be listed. An empty list
  admits nobody.
- ``OptionalAllowlist``: an empty list means the facet is unconstrained.
"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import FrozenSet, Iterable, Optional


class BooleanRequirement(str, Enum):
    """Tri-state requirement on a boolean student attribute."""

    UNCONSTRAINED = "unconstrained"
    REQUIRE_TRUE = "require_true"
    REQUIRE_FALSE = "require_false"

    @classmethod
    def from_nullable(cls, value: Optional[bool]) -> "BooleanRequirement":
        """Build from a nullable column value (None means unconstrained)."""
        if value is None:
            return cls.UNCONSTRAINED
        return cls.REQUIRE_TRUE if value else cls.REQUIRE_FALSE

    def to_nullable(self) -> Optional[bool]:
        if self is BooleanRequirement.UNCONSTRAINED:
            return None
        return self is BooleanRequirement.REQUIRE_TRUE

    @property
    def is_constrained(self) -> bool:
        return self is not BooleanRequirement.UNCONSTRAINED

    def permits(self, value: bool) -> bool:
        if not self.is_constrained:
            return True
        return value == self.to_nullable()


@dataclass(frozen=True)
class EqualsRequirement:
    """Requirement that a student attribute equals one exact value.

    ``EqualsRequirement()`` is unconstrained; ``EqualsRequirement("female")``
    requires equality. Comparison is exact and case-sensitive.
    """

    value: Optional[str] = None

    @property
    def is_constrained(self) -> bool:
        return self.value is not None

    def permits(self, value: Optional[str]) -> bool:
        if self.value is None:
            return True
        return value is not None and value == self.value


UNCONSTRAINED = EqualsRequirement()


def require_equals(value: str) -> EqualsRequirement:
    """Shorthand for a constrained ``EqualsRequirement``."""
    return EqualsRequirement(value)


@dataclass(frozen=True)
class MandatoryAllowlist:
    """Allow-list that must contain the student's value."""

    values: FrozenSet[str] = frozenset()

    @classmethod
    def of(cls, values: Iterable[str]) -> "MandatoryAllowlist":
        return cls(frozenset(values))

    def permits(self, value: Optional[str]) -> bool:
        return value is not None and value in self.values

    def __len__(self) -> int:
        return len(self.values)


@dataclass(frozen=True)
class OptionalAllowlist:
    """Allow-list where an empty set means no constraint."""

    values: FrozenSet[str] = frozenset()

    @classmethod
    def of(cls, values: Iterable[str]) -> "OptionalAllowlist":
        return cls(frozenset(values))

    @property
    def is_constrained(self) -> bool:
        return bool(self.values)

    def permits(self, value: Optional[str]) -> bool:
        if not self.values:
            return True
        return value is not None and value in self.values

    def permits_any(self, values: Iterable[str]) -> bool:
        """True if unconstrained or at least one of ``values`` is listed."""
        if not self.values:
            return True
        return not self.values.isdisjoint(values)

    def __len__(self) -> int:
        return len(self.values)


class RequirementFacet(str, Enum):
    """List-valued requirement facets stored per scholarship."""

    ENROLLMENT_STATUS = "enrollment_status"
    CITIZENSHIP_STATUS = "citizenship_status"
    FIELDS_OF_STUDY = "fields_of_study"
    MILITARY_AFFILIATION = "military_affiliation"
    ETHNICITY = "ethnicity"


@dataclass(frozen=True)
class ScholarshipProfile:
    """A scholarship with all of its eligibility facets hydrated."""

    id: str
    name: str
    amount: int
    provider: str
    deadline: date
    gpa_minimum: float
    url: Optional[str] = None

    first_generation: BooleanRequirement = BooleanRequirement.UNCONSTRAINED
    financial_need: BooleanRequirement = BooleanRequirement.UNCONSTRAINED
    gender: EqualsRequirement = UNCONSTRAINED
    residency: EqualsRequirement = UNCONSTRAINED
    community_service_hours_minimum: Optional[int] = None

    enrollment_statuses: MandatoryAllowlist = field(default_factory=MandatoryAllowlist)
    citizenship_statuses: MandatoryAllowlist = field(default_factory=MandatoryAllowlist)
    fields_of_study: OptionalAllowlist = field(default_factory=OptionalAllowlist)
    military_affiliations: OptionalAllowlist = field(default_factory=OptionalAllowlist)
    ethnicities: OptionalAllowlist = field(default_factory=OptionalAllowlist)
