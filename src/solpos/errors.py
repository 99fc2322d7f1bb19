"""solpos error types.

Every error is terminal for the ``calculate()`` call that raised it; the
caller may correct the inputs and call again.

Example:
    try:
        sp = Solpos(dt, 91.0, -84.43)
    except ValidationError as e:
        print(f"{e.field} must be within {e.valid_range}")
"""

from __future__ import annotations


class SolposError(Exception):
    """Base class for all solpos errors."""


class ParameterTypeError(SolposError, TypeError):
    """An optional construction parameter has the wrong type.

    Attributes:
        key: Option name (e.g. "press").
        expected: Human-readable expected type.
    """

    def __init__(self, key: str, expected: str):
        self.key = key
        self.expected = expected
        super().__init__(f"wrong type {key}, expected {expected}")


class ValidationError(SolposError, ValueError):
    """An input is outside the range required by the active functions.

    Attributes:
        field: Name of the offending request field.
        value: The rejected value.
        valid_range: Human-readable valid range, e.g. "[1950-2050]".
    """

    def __init__(self, field: str, value: object, valid_range: str):
        self.field = field
        self.value = value
        self.valid_range = valid_range
        super().__init__(f"Please fix {field} {valid_range}: got {value}")


class NoFunctionError(SolposError):
    """The function mask is zero, so there is nothing to calculate."""

    def __init__(self) -> None:
        super().__init__("No function set")
