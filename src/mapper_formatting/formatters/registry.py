"""
Formatter Registry - Global and source-type formatter chains.

The registry holds:
- Global chain: applied to every scalar destination member
- Source-type chains: applied only when the source value's runtime type
  is exactly the registered type
- Source-type skip sets: formatter classes removed from the inherited
  chain for that source type

Registration is a configuration-phase operation and is not synchronized.
"""

import itertools
from collections.abc import Iterator
from typing import Any

from ..contracts import FormatExpression
from ..logging import get_logger
from .entries import ByExpression, FormatterEntry, FormatterHandle, to_ref

__all__ = ["FormatterRegistry"]

logger = get_logger(__name__)


def _require_class(formatter_type: Any) -> type:
    if not isinstance(formatter_type, type):
        raise TypeError(f"Skipped formatter must be a class, got {formatter_type!r}")
    return formatter_type


class FormatterRegistry:
    """Registry for formatter chains.

    Example:
        registry = FormatterRegistry()

        # Global chain, in application order
        registry.add_global_formatter(HardEncoder)
        registry.add_global_formatter(SoftEncoder())
        registry.add_format_expression(lambda ctx: f"{ctx.source_value} Medium")

        # Source-type chain
        registry.add_formatter_for_source_type(date, ShortDateFormatter)
        registry.skip_formatter_for_source_type(int, HardEncoder)
    """

    def __init__(self, sequence: Iterator[int] | None = None) -> None:
        self._sequence = sequence if sequence is not None else itertools.count(1)

        # Global chain in registration order
        self._global: list[FormatterEntry] = []

        # source type -> chain in registration order
        self._by_source_type: dict[type, list[FormatterEntry]] = {}

        # source type -> skipped formatter classes
        self._skipped: dict[type, set[type]] = {}

    def next_sequence(self) -> int:
        """Next registration sequence number."""
        return next(self._sequence)

    def add_global_formatter(self, formatter: Any) -> FormatterHandle["FormatterRegistry"]:
        """Append a formatter to the global chain.

        Args:
            formatter: Formatter class, formatter instance or expression

        Returns:
            Handle accepting a ``constructed_by`` override
        """
        entry = FormatterEntry(to_ref(formatter), self.next_sequence())
        self._global.append(entry)
        logger.debug("formatter_registered", scope="global", formatter=entry.label)
        return FormatterHandle(entry, self)

    def add_format_expression(
        self, expression: FormatExpression
    ) -> FormatterHandle["FormatterRegistry"]:
        """Append an inline expression to the global chain."""
        if not callable(expression):
            raise TypeError(f"Format expression must be callable, got {expression!r}")
        return self.add_global_formatter(ByExpression(expression))

    def add_formatter_for_source_type(
        self, source_type: type, formatter: Any
    ) -> FormatterHandle["FormatterRegistry"]:
        """Append a formatter to the chain of ``source_type``."""
        entry = FormatterEntry(to_ref(formatter), self.next_sequence())
        self._by_source_type.setdefault(source_type, []).append(entry)
        logger.debug(
            "formatter_registered",
            scope="source_type",
            source_type=source_type.__qualname__,
            formatter=entry.label,
        )
        return FormatterHandle(entry, self)

    def skip_formatter_for_source_type(self, source_type: type, formatter_type: type) -> None:
        """Exclude ``formatter_type`` from every chain resolved for ``source_type``."""
        self._skipped.setdefault(source_type, set()).add(_require_class(formatter_type))
        logger.debug(
            "source_type_skip_registered",
            source_type=source_type.__qualname__,
            formatter=formatter_type.__qualname__,
        )

    def global_entries(self) -> list[FormatterEntry]:
        """Global chain in application order."""
        return sorted(self._global, key=lambda e: e.sequence)

    def entries_for(self, source_type: type) -> list[FormatterEntry]:
        """Chain registered for exactly ``source_type``."""
        return sorted(self._by_source_type.get(source_type, ()), key=lambda e: e.sequence)

    def skipped_for(self, source_type: type) -> frozenset[type]:
        """Formatter classes skipped for ``source_type``."""
        return frozenset(self._skipped.get(source_type, ()))

    def source_types(self) -> list[type]:
        """Source types with a chain or a skip set."""
        return list(dict.fromkeys([*self._by_source_type, *self._skipped]))

    def reset(self) -> None:
        """Clear this registry's chains and skip sets in place.

        Member overrides, the instance provider and the sequence counter
        live on the owning configuration and are untouched. To discard a
        whole configuration atomically use mapper_formatting.reset().
        """
        self._global.clear()
        self._by_source_type.clear()
        self._skipped.clear()
