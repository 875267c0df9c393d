class DomainError(Exception):
    """Base exception for business rule violations.

    `kind` is a stable tag the HTTP layer exposes to clients.
    """

    kind = "domain_error"


class InvalidInputError(DomainError):
    """Raised when input data is missing or violates domain rules."""

    kind = "invalid_input"


class InvalidDateFormatError(DomainError):
    """Raised when a civil day / month string is malformed."""

    kind = "invalid_date_format"


class NotFoundError(DomainError):
    """Raised when a referenced entity is absent or soft-deleted."""

    kind = "not_found"


class StudentNotFoundError(NotFoundError):
    def __init__(self, student_id: str):
        super().__init__("Student not found")
        self.student_id = student_id


class StoreUnavailableError(DomainError):
    """Raised when the record store cannot be reached or fails a query."""

    kind = "store_unavailable"
