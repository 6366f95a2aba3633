"""
Member formatter configuration - Per-destination-member overrides.
"""

import itertools
from collections.abc import Iterator
from typing import Any

from ..context import MemberId
from ..contracts import FormatExpression
from ..logging import get_logger
from .entries import ByExpression, FormatterEntry, FormatterHandle, to_ref

__all__ = ["MemberFormatterConfig"]

logger = get_logger(__name__)

# Distinguishes "no substitute" from a substitute of None
_UNSET: Any = object()


class MemberFormatterConfig:
    """Formatting overrides for one destination member.

    - Added formatters run after the inherited (source-type + global) chain
    - Skipped formatter classes are removed from the inherited chain only
    - A null substitute replaces the whole chain when the value is None

    Example:
        member = MemberFormatterConfig(MemberId(Model, ModelDto, "Value"))
        member.skip_formatter(HardEncoder)
        member.add_formatter(SampleFormatter)
        member.format_null_value_as("n/a")
    """

    def __init__(self, member: MemberId, sequence: Iterator[int] | None = None) -> None:
        self.member = member
        self._sequence = sequence if sequence is not None else itertools.count(1)
        self._added: list[FormatterEntry] = []
        self._skipped: set[type] = set()
        self._null_substitute: Any = _UNSET

    def add_formatter(self, formatter: Any) -> FormatterHandle["MemberFormatterConfig"]:
        """Append a member-level formatter.

        Args:
            formatter: Formatter class, formatter instance or expression
        """
        entry = FormatterEntry(to_ref(formatter), next(self._sequence))
        self._added.append(entry)
        logger.debug(
            "member_formatter_registered",
            member=str(self.member),
            formatter=entry.label,
        )
        return FormatterHandle(entry, self)

    def add_format_expression(
        self, expression: FormatExpression
    ) -> FormatterHandle["MemberFormatterConfig"]:
        """Append a member-level inline expression."""
        if not callable(expression):
            raise TypeError(f"Format expression must be callable, got {expression!r}")
        return self.add_formatter(ByExpression(expression))

    def skip_formatter(self, formatter_type: type) -> "MemberFormatterConfig":
        """Remove ``formatter_type`` from the inherited chain for this member."""
        if not isinstance(formatter_type, type):
            raise TypeError(f"Skipped formatter must be a class, got {formatter_type!r}")
        self._skipped.add(formatter_type)
        logger.debug(
            "member_skip_registered",
            member=str(self.member),
            formatter=formatter_type.__qualname__,
        )
        return self

    def format_null_value_as(self, literal: str) -> "MemberFormatterConfig":
        """Return ``literal`` verbatim whenever the source value is None."""
        self._null_substitute = literal
        logger.debug("null_substitute_configured", member=str(self.member))
        return self

    @property
    def added_entries(self) -> list[FormatterEntry]:
        """Member-level formatters in call order."""
        return sorted(self._added, key=lambda e: e.sequence)

    @property
    def skipped(self) -> frozenset[type]:
        return frozenset(self._skipped)

    @property
    def has_null_substitute(self) -> bool:
        return self._null_substitute is not _UNSET

    @property
    def null_substitute(self) -> Any:
        """Configured substitute, None when unset."""
        return None if self._null_substitute is _UNSET else self._null_substitute
