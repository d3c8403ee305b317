"""Validation result type with consistent, predictable behavior.
"""

from __future__ import annotations

from typing import Any


class ValidationResult:
    """Outcome of a single validation call.

    Results are immutable and created fresh for every ``validate`` call.
    A failed result carries a message that is meant to be shown directly
    to an end user (for example in an API error response).

    The ``success`` instance attribute shadows the ``success()`` class
    constructor, so both ``ValidationResult.success()`` and
    ``result.success`` read naturally.
    """

    def __init__(self, success: bool, message: str | None = None):
        """Initialize the result.

        Args:
            success: Whether validation passed
            message: Failure message (absent on success)
        """
        object.__setattr__(self, "success", success)
        object.__setattr__(self, "message", message)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"ValidationResult is immutable (cannot set '{name}')")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"ValidationResult is immutable (cannot delete '{name}')")

    def __bool__(self) -> bool:
        """Allow 'if result:' usage to check success."""
        return self.success

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ValidationResult):
            return NotImplemented
        return self.success == other.success and self.message == other.message

    def __hash__(self) -> int:
        return hash((self.success, self.message))

    def __repr__(self) -> str:
        if self.success:
            return "ValidationResult(success=True)"
        return f"ValidationResult(success=False, message={self.message!r})"

    @classmethod
    def success(cls) -> ValidationResult:
        """Create a successful validation result.

        Returns:
            Successful ValidationResult with no message
        """
        return cls(True)

    @classmethod
    def fail(cls, message: str | None = None) -> ValidationResult:
        """Create a failed validation result.

        Args:
            message: Human-readable reason for the failure

        Returns:
            Failed ValidationResult
        """
        return cls(False, message)
