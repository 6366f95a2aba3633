"""
Built-in Formatters - Common value formatter implementations.

Provides:
- DateFormatter: date/datetime via strftime
- NumberFormatter: real numbers and decimals via a format spec
- TemplateFormatter: str.format template over value and member name
"""

from datetime import date, datetime
from decimal import Decimal
from numbers import Real
from typing import TYPE_CHECKING

from ..context import ResolutionContext
from ..errors import UnsupportedValueError

if TYPE_CHECKING:
    from ..configuration import FormattingConfiguration

__all__ = [
    "DateFormatter",
    "NumberFormatter",
    "TemplateFormatter",
    "register_builtin_formatters",
]


class DateFormatter:
    """Formats dates, short US form by default."""

    def __init__(self, pattern: str = "%m/%d/%Y") -> None:
        self.pattern = pattern

    def format_value(self, context: ResolutionContext) -> str:
        value = context.source_value
        if not isinstance(value, date):
            raise UnsupportedValueError(self, value, "a date or datetime")
        return value.strftime(self.pattern)


class NumberFormatter:
    """Formats real numbers and decimals with a format spec (default: ``,.2f``)."""

    def __init__(self, spec: str = ",.2f") -> None:
        self.spec = spec

    def format_value(self, context: ResolutionContext) -> str:
        value = context.source_value
        # bool is an int subclass but never a number here
        if isinstance(value, bool) or not isinstance(value, (Real, Decimal)):
            raise UnsupportedValueError(self, value, "a real number")
        return format(value, self.spec)


class TemplateFormatter:
    """Formats through a template with ``{value}`` and ``{member}`` fields."""

    def __init__(self, template: str = "{value}") -> None:
        self.template = template

    def format_value(self, context: ResolutionContext) -> str:
        return self.template.format(value=context.source_value, member=context.member_name)


def register_builtin_formatters(configuration: "FormattingConfiguration") -> None:
    """Register DateFormatter for date and datetime source values."""
    for source_type in (date, datetime):
        configuration.for_source_type(source_type).add_formatter(DateFormatter)
