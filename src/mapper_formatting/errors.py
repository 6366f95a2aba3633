"""
Formatting errors.

Registration misuse (wrong argument kinds) raises TypeError immediately.
Everything below surfaces at map time.
"""

from typing import Any

__all__ = [
    "FormatterConfigurationError",
    "FormattingError",
    "UnsupportedValueError",
]


class FormattingError(Exception):
    """Base class for formatting failures."""


class FormatterConfigurationError(FormattingError):
    """Raised when a formatter cannot be constructed.

    Reasons:
    - No zero-argument constructor and no construction override
    - A factory returned something that is not a ValueFormatter

    Construction is lazy, so this is raised at the first formatting call
    that needs the formatter, never at registration.
    """

    def __init__(self, formatter_type: type, reason: str):
        self.formatter_type = formatter_type
        self.reason = reason
        super().__init__(
            f"Cannot construct formatter '{formatter_type.__qualname__}': {reason}"
        )


class UnsupportedValueError(FormattingError, TypeError):
    """Raised by a formatter that cannot handle the value it was given."""

    def __init__(self, formatter: Any, value: Any, expected: str):
        self.formatter = formatter
        self.value = value
        self.expected = expected
        super().__init__(
            f"{type(formatter).__name__} expects {expected}, "
            f"got {type(value).__name__}: {value!r}"
        )
