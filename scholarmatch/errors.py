"""Exception hierarchy for ScholarMatch."""


class ScholarMatchError(Exception):
    """Base class for all ScholarMatch errors."""


class StudentNotFoundError(ScholarMatchError):
    """Raised when a student id does not exist."""

    def __init__(self, student_id: str):
        super().__init__(f"Student not found: {student_id}")
        self.student_id = student_id


class StoreError(ScholarMatchError):
    """Raised when the underlying data store fails."""


class ConflictError(ScholarMatchError):
    """Raised when a write would violate a uniqueness constraint."""


class DuplicateEmailError(ConflictError):
    """Raised when registering a student with an email already in use."""

    def __init__(self, email: str):
        super().__init__("Email already exists")
        self.email = email


class ProviderError(ScholarMatchError):
    """Explanation provider failure."""


class ProviderUnauthorizedError(ProviderError):
    """The provider rejected the configured credentials."""


class ProviderRateLimitedError(ProviderError):
    """The provider is throttling requests."""


class ProviderUnavailableError(ProviderError):
    """The provider could not be reached or is temporarily down."""
