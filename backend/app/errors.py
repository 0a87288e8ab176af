"""LiftLog exceptions."""


class LiftLogError(Exception):
    """Base exception for LiftLog errors."""
    pass


class NotFoundError(LiftLogError):
    """Raised when a requested record does not exist."""
    pass


class InvalidQueryError(LiftLogError):
    """Raised when request parameters fail validation."""
    pass


class UnauthorizedSubmitterError(LiftLogError):
    """Raised when a submitter is not on the allow-list."""

    def __init__(self, submitter: str | None):
        super().__init__(f"submitter not allowed: {submitter!r}")
        self.submitter = submitter
