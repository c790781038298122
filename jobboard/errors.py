"""
Domain errors raised by the job data-access layer.

Callers (an HTTP layer, a script) are expected to map these to their own
responses; nothing in this package catches them.
"""

from typing import List


class JobBoardError(Exception):
    """Base class for all jobboard errors."""
    pass


class ValidationError(JobBoardError):
    """Raised when caller-supplied data or filters are malformed."""

    def __init__(self, errors: List[str]):
        self.errors = list(errors)
        super().__init__("; ".join(self.errors))


class InvalidUpdateError(JobBoardError):
    """Raised when a partial update has no fields to set."""
    pass


class NotFoundError(JobBoardError):
    """Raised when no row matches the requested id."""
    pass


class ConstraintError(JobBoardError):
    """Raised when the database rejects a statement (foreign key, unique, check)."""
    pass
