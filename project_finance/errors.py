"""Error taxonomy for the project finance tracker.

Every failure surfaced by the stores, handlers and aggregators derives from
FinanceTrackerError so callers can report it once, synchronously, with an
optional hint on how to recover.
"""

from typing import Optional


class FinanceTrackerError(Exception):
    """Base exception for project finance errors with user-friendly messages."""

    def __init__(self, message: str, recovery_hint: Optional[str] = None):
        """
        Initialize the error.

        Args:
            message: Error message to display
            recovery_hint: Optional hint for recovering from the error
        """
        self.message = message
        self.recovery_hint = recovery_hint
        super().__init__(message)


class ValidationError(FinanceTrackerError):
    """A required field is missing or invalid; the operation was not attempted."""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        recovery_hint: Optional[str] = None,
    ):
        self.field = field
        super().__init__(message, recovery_hint)


class NotFoundError(FinanceTrackerError):
    """A referenced project or record does not exist."""

    def __init__(self, entity: str, entity_id: str):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(
            f"{entity} '{entity_id}' not found",
            recovery_hint=f"Check the {entity.lower()} id and try again",
        )


class StoreError(FinanceTrackerError):
    """The underlying store failed to read or write."""

    pass


class ViewUnavailableError(StoreError):
    """The store has no precomputed spending view to read from."""

    pass


class ImportServiceError(FinanceTrackerError):
    """The bulk-import webhook failed or returned an unusable payload."""

    pass
