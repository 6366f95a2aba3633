"""
Formatter Protocol - Contract for value formatters.

A value formatter turns the value carried by a ResolutionContext into the
string assigned to a destination member. Formatters can be registered:
- by class (constructed lazily, once per formatting call)
- by instance (shared across every call)
- as a plain expression (callable taking the context)
"""

from collections.abc import Callable
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from .context import ResolutionContext

__all__ = [
    "FormatExpression",
    "FormatterFactory",
    "ValueFormatter",
]


@runtime_checkable
class ValueFormatter(Protocol):
    """Contract for value formatters.

    Implementations read ``context.source_value`` and return a string.
    They must not mutate the context, and instances registered directly
    are shared between calls, so per-call state belongs in locals.

    Example:
        class ShoutFormatter:
            def format_value(self, context: ResolutionContext) -> str:
                return str(context.source_value).upper()
    """

    def format_value(self, context: "ResolutionContext") -> str:
        """Format the context's current value.

        Args:
            context: Immutable resolution context

        Returns:
            Formatted string
        """
        ...


# Inline formatter registered without a class
FormatExpression = Callable[["ResolutionContext"], str]

# Global construction strategy: formatter class -> instance
FormatterFactory = Callable[[type], ValueFormatter]
