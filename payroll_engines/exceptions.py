"""
Typed exceptions for the payroll engine.

    PayrollEngineError (base)
    |
    +-- FormatError        malformed HH:MM time strings
    +-- ValidationError    negative wages/hours, bad slot steps,
                           open days without operating hours

Invalid slot assignments are not errors: the template editor ignores them
and returns the template unchanged.
"""


class PayrollEngineError(Exception):
    """Base exception for all payroll engine errors."""

    code: str = "PAYROLL_ENGINE_ERROR"

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class FormatError(PayrollEngineError, ValueError):
    """A clock-time string could not be parsed."""

    code: str = "INVALID_TIME_FORMAT"

    def __init__(self, value: object):
        self.value = value
        super().__init__(f"Invalid time {value!r}: expected HH:MM")


class ValidationError(PayrollEngineError, ValueError):
    """An input value is outside the range the engine accepts."""

    code: str = "VALIDATION_ERROR"

    def __init__(self, message: str, field: str | None = None):
        self.field = field
        super().__init__(message)
