"""
Mapper Formatting - Formatter resolution and application for object mapping.

The mapping engine calls resolve_and_apply() for every scalar destination
member; configuration code registers formatters beforehand.

Example:
    import mapper_formatting as fmt

    fmt.add_global_formatter(HardEncoder)
    fmt.add_format_expression(lambda ctx: f"{ctx.source_value} Medium")
    fmt.for_source_type(int).skip_formatter(HardEncoder)
    fmt.for_type_map(Model, ModelDto).for_member(
        "Label", lambda opt: opt.format_null_value_as("n/a")
    )

    fmt.resolve_and_apply(14, "Value", int, fmt.MemberId(Model, ModelDto, "Value"))
"""

from typing import Any

from .configuration import (
    FormattingConfiguration,
    SourceTypeExpression,
    TypeMapExpression,
    get_configuration,
    initialize,
    reset,
)
from .context import MemberId, ResolutionContext
from .contracts import FormatExpression, FormatterFactory, ValueFormatter
from .errors import FormatterConfigurationError, FormattingError, UnsupportedValueError
from .formatters import FormatterHandle, MemberFormatterConfig
from .logging import configure_logging

__all__ = [
    "FormatExpression",
    "FormatterConfigurationError",
    "FormatterFactory",
    "FormatterHandle",
    "FormattingConfiguration",
    "FormattingError",
    "MemberFormatterConfig",
    "MemberId",
    "ResolutionContext",
    "SourceTypeExpression",
    "TypeMapExpression",
    "UnsupportedValueError",
    "ValueFormatter",
    "add_format_expression",
    "add_formatter_for_source_type",
    "add_global_formatter",
    "configure_logging",
    "for_member",
    "for_source_type",
    "for_type_map",
    "get_configuration",
    "initialize",
    "reset",
    "resolve_and_apply",
    "set_global_instance_provider",
    "skip_formatter_for_source_type",
]


def add_global_formatter(formatter: Any) -> FormatterHandle[FormattingConfiguration]:
    """Append a formatter class, instance or expression to the global chain."""
    return get_configuration().add_global_formatter(formatter)


def add_format_expression(expression: FormatExpression) -> FormatterHandle[FormattingConfiguration]:
    """Append an inline expression to the global chain."""
    return get_configuration().add_format_expression(expression)


def for_source_type(source_type: type) -> SourceTypeExpression:
    return get_configuration().for_source_type(source_type)


def add_formatter_for_source_type(
    source_type: type, formatter: Any
) -> FormatterHandle[FormattingConfiguration]:
    return get_configuration().add_formatter_for_source_type(source_type, formatter)


def skip_formatter_for_source_type(source_type: type, formatter_type: type) -> None:
    get_configuration().skip_formatter_for_source_type(source_type, formatter_type)


def for_member(member: MemberId) -> MemberFormatterConfig:
    return get_configuration().for_member(member)


def for_type_map(source_type: type, destination_type: type) -> TypeMapExpression:
    return get_configuration().for_type_map(source_type, destination_type)


def set_global_instance_provider(factory: FormatterFactory | None) -> None:
    """Construct class-registered formatters through ``factory`` (None: default)."""
    get_configuration().construct_formatters_using(factory)


def resolve_and_apply(
    source_value: Any,
    member_name: str,
    source_type: type | None = None,
    member: MemberId | None = None,
) -> Any:
    """Format one mapped value with the process-wide configuration."""
    return get_configuration().resolve_and_apply(source_value, member_name, source_type, member)
