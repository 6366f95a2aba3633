"""
Formatting Configuration - The owned, process-wide formatting state.

One FormattingConfiguration bundles the registry, the member overrides,
the instance provider and the pipeline built over them. The process-wide
configuration is never cleared in place: reset() and initialize() publish
a fresh object, so a reader holding the previous one keeps a consistent
view until it fetches the new one.

Usage:
    cfg = get_configuration()
    cfg.add_global_formatter(HardEncoder)
    cfg.for_source_type(int).skip_formatter(HardEncoder)
    cfg.for_type_map(Model, ModelDto).for_member(
        "Value", lambda opt: opt.format_null_value_as("n/a")
    )

    cfg.resolve_and_apply(14, "Value", int, MemberId(Model, ModelDto, "Value"))
"""

import itertools
import threading
from collections.abc import Callable
from typing import Any

from .config import FormattingSettings, settings as default_settings
from .context import MemberId, ResolutionContext
from .contracts import FormatExpression, FormatterFactory
from .formatters import (
    ByExpression,
    FormatterEntry,
    FormatterHandle,
    FormatterInstanceProvider,
    FormatterRegistry,
    FormatterResolver,
    FormattingPipeline,
    MemberFormatterConfig,
)
from .logging import get_logger

__all__ = [
    "FormattingConfiguration",
    "SourceTypeExpression",
    "TypeMapExpression",
    "get_configuration",
    "initialize",
    "reset",
]

logger = get_logger(__name__)


class SourceTypeExpression:
    """Fluent configuration for one source type.

    Example:
        cfg.for_source_type(date).add_formatter(ShortDateFormatter)
        cfg.for_source_type(int).skip_formatter(SampleFormatter)
    """

    __slots__ = ("_registry", "source_type")

    def __init__(self, registry: FormatterRegistry, source_type: type) -> None:
        self._registry = registry
        self.source_type = source_type

    def add_formatter(self, formatter: Any) -> FormatterHandle["SourceTypeExpression"]:
        handle = self._registry.add_formatter_for_source_type(self.source_type, formatter)
        return FormatterHandle(handle.entry, self)

    def add_format_expression(
        self, expression: FormatExpression
    ) -> FormatterHandle["SourceTypeExpression"]:
        if not callable(expression):
            raise TypeError(f"Format expression must be callable, got {expression!r}")
        return self.add_formatter(ByExpression(expression))

    def skip_formatter(self, formatter_type: type) -> "SourceTypeExpression":
        self._registry.skip_formatter_for_source_type(self.source_type, formatter_type)
        return self


class TypeMapExpression:
    """Member-level formatting for one source/destination type pair.

    Example:
        cfg.for_type_map(Model, ModelDto) \\
            .for_member("ValueTwo", lambda opt: opt.skip_formatter(SampleFormatter)) \\
            .for_member("Label", lambda opt: opt.format_null_value_as("none"))
    """

    __slots__ = ("_configuration", "source_type", "destination_type")

    def __init__(
        self,
        configuration: "FormattingConfiguration",
        source_type: type,
        destination_type: type,
    ) -> None:
        self._configuration = configuration
        self.source_type = source_type
        self.destination_type = destination_type

    def member_id(self, member_name: str) -> MemberId:
        return MemberId(self.source_type, self.destination_type, member_name)

    def member(self, member_name: str) -> MemberFormatterConfig:
        """Overrides for ``member_name``, created on first access."""
        return self._configuration.for_member(self.member_id(member_name))

    def for_member(
        self,
        member_name: str,
        options: Callable[[MemberFormatterConfig], Any],
    ) -> "TypeMapExpression":
        """Apply ``options`` to the overrides of ``member_name``."""
        options(self.member(member_name))
        return self


class FormattingConfiguration:
    """Formatting state for one mapping configuration.

    Configuration methods are meant for a single-threaded setup phase.
    resolve_and_apply() only reads state and may run concurrently.
    """

    def __init__(self, settings: FormattingSettings | None = None) -> None:
        self.settings = settings if settings is not None else default_settings

        # One counter orders every registration made through this object
        self._sequence = itertools.count(1)

        self.registry = FormatterRegistry(self._sequence)
        self.provider = FormatterInstanceProvider()
        self._members: dict[MemberId, MemberFormatterConfig] = {}
        self.resolver = FormatterResolver(self.registry)
        self.pipeline = FormattingPipeline(
            self.resolver,
            self.provider,
            self._members,
            null_text=self.settings.null_text,
        )

    # -- Global and source-type registration --------------------------------

    def add_global_formatter(self, formatter: Any) -> FormatterHandle["FormattingConfiguration"]:
        handle = self.registry.add_global_formatter(formatter)
        return FormatterHandle(handle.entry, self)

    def add_format_expression(
        self, expression: FormatExpression
    ) -> FormatterHandle["FormattingConfiguration"]:
        handle = self.registry.add_format_expression(expression)
        return FormatterHandle(handle.entry, self)

    def for_source_type(self, source_type: type) -> SourceTypeExpression:
        return SourceTypeExpression(self.registry, source_type)

    def add_formatter_for_source_type(
        self, source_type: type, formatter: Any
    ) -> FormatterHandle["FormattingConfiguration"]:
        handle = self.registry.add_formatter_for_source_type(source_type, formatter)
        return FormatterHandle(handle.entry, self)

    def skip_formatter_for_source_type(self, source_type: type, formatter_type: type) -> None:
        self.registry.skip_formatter_for_source_type(source_type, formatter_type)

    # -- Member registration ------------------------------------------------

    def for_member(self, member: MemberId) -> MemberFormatterConfig:
        """Overrides for ``member``, created on first access."""
        if not isinstance(member, MemberId):
            raise TypeError(f"Expected MemberId, got {member!r}")
        config = self._members.get(member)
        if config is None:
            config = MemberFormatterConfig(member, self._sequence)
            self._members[member] = config
        return config

    def for_type_map(self, source_type: type, destination_type: type) -> TypeMapExpression:
        return TypeMapExpression(self, source_type, destination_type)

    def member_configs(self) -> dict[MemberId, MemberFormatterConfig]:
        return dict(self._members)

    # -- Construction -------------------------------------------------------

    def construct_formatters_using(self, factory: FormatterFactory | None) -> None:
        """Build every class-registered formatter through ``factory``.

        Entries with their own ``constructed_by`` override keep it.
        """
        self.provider.use_factory(factory)

    # -- Map time -----------------------------------------------------------

    def resolve(self, source_type: type, member: MemberId | None = None) -> list[FormatterEntry]:
        """Formatter chain for ``source_type`` and destination ``member``."""
        return self.resolver.resolve(source_type, self.pipeline.member_config(member))

    def apply(self, context: ResolutionContext) -> Any:
        return self.pipeline.apply(context)

    def resolve_and_apply(
        self,
        source_value: Any,
        member_name: str,
        source_type: type | None = None,
        member: MemberId | None = None,
    ) -> Any:
        """Format one mapped value.

        Args:
            source_value: Value read from the source member
            member_name: Source member name
            source_type: Runtime source type (default: type of the value)
            member: Destination member identity

        Returns:
            Formatted string, or the value itself when nothing converts it
        """
        if source_type is None:
            source_type = type(source_value)
        context = ResolutionContext(source_value, member_name, source_type, member)
        return self.pipeline.apply(context)


# Process-wide configuration; replaced wholesale, never cleared in place
_lock = threading.Lock()
_current = FormattingConfiguration()


def get_configuration() -> FormattingConfiguration:
    """The current process-wide configuration."""
    return _current


def reset(settings: FormattingSettings | None = None) -> FormattingConfiguration:
    """Discard all formatters, skips, member overrides and factories.

    Values already formatted are unaffected.
    """
    global _current
    fresh = FormattingConfiguration(settings)
    with _lock:
        _current = fresh
    logger.info("configuration_reset")
    return fresh


def initialize(
    configure: Callable[[FormattingConfiguration], Any],
    settings: FormattingSettings | None = None,
) -> FormattingConfiguration:
    """Build a fresh configuration with ``configure`` and publish it.

    The previous configuration stays current until ``configure`` returns,
    and stays current if it raises.
    """
    global _current
    fresh = FormattingConfiguration(settings)
    configure(fresh)
    with _lock:
        _current = fresh
    logger.info("configuration_initialized", members=len(fresh.member_configs()))
    return fresh
