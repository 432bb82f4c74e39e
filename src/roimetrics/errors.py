"""Exceptions raised by the metrics engine."""

from typing import Any


class RoiMetricsError(Exception):
    """Base exception for roimetrics errors.

    Attributes:
        field: Name of the input field the error relates to
        message: Error description
    """

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(f"[{field}] {message}")


class InvalidInputError(RoiMetricsError):
    """Raised when an input value is negative, non-finite or unparsable.

    Never transient: retrying with the same input fails the same way.
    """

    def __init__(self, field: str, value: Any, reason: str):
        self.value = value
        super().__init__(field, f"{reason} (got {value!r})")
