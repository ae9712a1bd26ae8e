"""
Custom exceptions for the tasksense engine.

Provides:
- Typed exception hierarchy for the few genuine failure modes
- Error context preservation for debugging

Empty or partial extraction results are not errors and never raise.
"""

from typing import Any


class TaskSenseError(Exception):
    """Base exception for all tasksense errors."""

    def __init__(self, message: str, context: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            return f"{self.message} | context={self.context}"
        return self.message


# =============================================================================
# Input Errors
# =============================================================================


class ValidationError(TaskSenseError):
    """Caller input validation failed."""

    pass


class InvalidIntervalError(ValidationError):
    """Recurrence interval is not a positive integer."""

    def __init__(self, interval: Any, context: dict[str, Any] | None = None):
        ctx = {'interval': interval}
        ctx.update(context or {})
        super().__init__(
            f"Recurrence interval must be a positive integer, got {interval!r}",
            context=ctx,
        )
        self.interval = interval


# =============================================================================
# Repository Errors
# =============================================================================


class RepositoryError(TaskSenseError):
    """Base class for task repository / lifecycle errors."""

    pass


class TaskNotFoundError(RepositoryError):
    """No task is stored under the requested id."""

    pass


class TaskAlreadyCompletedError(RepositoryError):
    """The task occurrence has already been completed."""

    pass
