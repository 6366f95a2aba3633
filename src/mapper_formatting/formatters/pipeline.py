"""
Formatting Pipeline - Runs a resolved formatter chain against a value.

Steps for one destination member:
1. Null substitute configured and value is None: return it, run nothing
2. Resolve the chain (source-type, global, member)
3. Thread the value left to right: each formatter's output is the next
   formatter's source_value
4. Empty chain: default string conversion

Formatter exceptions propagate unmodified.
"""

from collections.abc import Mapping
from typing import Any

from ..context import MemberId, ResolutionContext
from ..logging import get_logger
from .entries import ByExpression, ByInstance, FormatterEntry
from .members import MemberFormatterConfig
from .provider import FormatterInstanceProvider
from .resolver import FormatterResolver

__all__ = ["FormattingPipeline"]

logger = get_logger(__name__)


class FormattingPipeline:
    """Executes formatter chains.

    Safe for concurrent apply() calls once configuration is complete,
    provided shared formatter instances keep no per-call state.
    """

    __slots__ = ("_resolver", "_provider", "_members", "_null_text")

    def __init__(
        self,
        resolver: FormatterResolver,
        provider: FormatterInstanceProvider,
        members: Mapping[MemberId, MemberFormatterConfig] | None = None,
        null_text: str | None = None,
    ) -> None:
        """Initialize the pipeline.

        Args:
            resolver: Chain resolver
            provider: Constructs formatters registered by class
            members: Member overrides keyed by destination member
            null_text: Text for a None value that nothing formats
        """
        self._resolver = resolver
        self._provider = provider
        self._members = members if members is not None else {}
        self._null_text = null_text

    def member_config(self, member: MemberId | None) -> MemberFormatterConfig | None:
        if member is None:
            return None
        return self._members.get(member)

    def apply(self, context: ResolutionContext) -> Any:
        """Format ``context.source_value`` for its destination member.

        Returns:
            Final string, or the original value when it is None and no
            formatter, substitute or null text applies
        """
        member = self.member_config(context.destination_member)

        if member is not None and member.has_null_substitute and context.source_value is None:
            return member.null_substitute

        chain = self._resolver.resolve(context.source_type, member)
        return self.run(chain, context)

    def run(self, chain: list[FormatterEntry], context: ResolutionContext) -> Any:
        """Thread ``context.source_value`` through ``chain``."""
        if not chain:
            return self._passthrough(context.source_value)

        value = context.source_value
        for entry in chain:
            value = self._invoke(entry, context.with_value(value))
        return value

    def _invoke(self, entry: FormatterEntry, context: ResolutionContext) -> str:
        ref = entry.ref
        if isinstance(ref, ByExpression):
            return ref.expression(context)
        if isinstance(ref, ByInstance):
            return ref.formatter.format_value(context)
        formatter = self._provider.resolve(ref.formatter_type, ref.construct)
        return formatter.format_value(context)

    def _passthrough(self, value: Any) -> Any:
        if value is None:
            return self._null_text
        return str(value)
