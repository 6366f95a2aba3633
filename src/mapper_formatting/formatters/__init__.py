"""
Formatters - Formatter registration, resolution and execution.

Example:
    from mapper_formatting.formatters import (
        FormatterInstanceProvider,
        FormatterRegistry,
        FormatterResolver,
        FormattingPipeline,
    )

    registry = FormatterRegistry()
    registry.add_global_formatter(HardEncoder)

    pipeline = FormattingPipeline(FormatterResolver(registry), FormatterInstanceProvider())
    pipeline.apply(ResolutionContext(14, "Value", int))
"""

from .entries import (
    ByExpression,
    ByInstance,
    ByType,
    FormatterEntry,
    FormatterHandle,
    FormatterRef,
    to_ref,
)
from .members import MemberFormatterConfig
from .pipeline import FormattingPipeline
from .provider import FormatterInstanceProvider
from .registry import FormatterRegistry
from .resolver import FormatterResolver

__all__ = [
    "ByExpression",
    "ByInstance",
    "ByType",
    "FormatterEntry",
    "FormatterHandle",
    "FormatterInstanceProvider",
    "FormatterRef",
    "FormatterRegistry",
    "FormatterResolver",
    "FormattingPipeline",
    "MemberFormatterConfig",
    "to_ref",
]
