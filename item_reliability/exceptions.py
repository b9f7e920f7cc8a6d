"""
Exceptions raised by reliability calculations.

Undefined statistics (zero total-score variance, constant items) are not
errors: they come back as ``nan``/``inf`` so callers can detect and report
them.
"""

from typing import Any, Dict, Optional


class ReliabilityError(Exception):
    """Base exception for reliability analysis errors.

    Attributes:
        message: Human-readable error description
        context: Additional values describing the failing input
        original_error: The underlying exception that caused this error
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        original_error: Optional[Exception] = None,
    ):
        self.message = message
        self.context = context or {}
        self.original_error = original_error
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        msg = self.message
        if self.context:
            ctx_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            msg = f"{msg} (context: {ctx_str})"
        if self.original_error:
            msg = f"{msg} - caused by: {str(self.original_error)}"
        return msg


class InvalidInputKindError(ReliabilityError):
    """Input is neither a rectangular numeric table nor a correlation matrix."""


class InsufficientColumnsError(ReliabilityError):
    """Fewer items than the operation needs.

    Attributes:
        required: Minimum number of columns for the operation
        actual: Number of columns available after filtering
    """

    def __init__(
        self,
        message: str,
        required: int,
        actual: int,
        context: Optional[Dict[str, Any]] = None,
    ):
        self.required = required
        self.actual = actual
        merged = {"required": required, "actual": actual}
        merged.update(context or {})
        super().__init__(message, context=merged)
