class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class ScanRejected(DomainError):
    """A scan that was refused before anything was written.

    `code` is stable so callers can pick a specific message for the user.
    """

    code = "scan_rejected"
    retryable = False


class InvalidBadgeFormat(ScanRejected, ValidationError):
    code = "invalid_badge"


class UnknownBadge(ScanRejected):
    code = "unknown_badge"


class UnknownClassroom(ScanRejected):
    code = "unknown_classroom"


class NoScheduleToday(ScanRejected):
    code = "no_schedule"


class AmbiguousSchedule(ScanRejected):
    code = "ambiguous_schedule"


class TooSoon(ScanRejected):
    code = "too_soon"
    retryable = True

    def __init__(self, message: str, *, retry_after_seconds: int = 0):
        super().__init__(message)
        self.retry_after_seconds = retry_after_seconds


class DuplicateDirection(ScanRejected):
    code = "duplicate_scan"


class PersistenceFailure(DomainError):
    """Writing to storage failed. Nothing was recorded, so the scan can be retried."""

    code = "persistence_failure"
    retryable = True


class NotificationFailure(DomainError):
    """Creating a notification failed. Logged only, never shown to the scanning user."""
