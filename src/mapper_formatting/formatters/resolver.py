"""
Formatter Resolver - Computes the chain for one destination member.

Resolution order:
1. Source-type chain (exact runtime type), in registration order
2. Global chain, in registration order
3. Drop class entries skipped for the source type
4. Drop class entries skipped for the member
5. Append member-added formatters (never dropped)
"""

from ..logging import debug_enabled, get_logger
from .entries import FormatterEntry
from .members import MemberFormatterConfig
from .registry import FormatterRegistry

__all__ = ["FormatterResolver"]

logger = get_logger(__name__)


class FormatterResolver:
    """Builds ordered formatter lists from a registry and member overrides."""

    __slots__ = ("_registry",)

    def __init__(self, registry: FormatterRegistry) -> None:
        self._registry = registry

    def resolve(
        self,
        source_type: type,
        member: MemberFormatterConfig | None = None,
    ) -> list[FormatterEntry]:
        """Resolve the formatter chain.

        Args:
            source_type: Runtime type of the source value
            member: Overrides for the destination member, if any

        Returns:
            Ordered entries; may be empty, may contain duplicates
        """
        registry = self._registry
        inherited = registry.entries_for(source_type) + registry.global_entries()

        type_skips = registry.skipped_for(source_type)
        if type_skips:
            inherited = [e for e in inherited if not e.is_skipped_by(type_skips)]

        if member is None:
            chain = inherited
        else:
            if member.skipped:
                inherited = [e for e in inherited if not e.is_skipped_by(member.skipped)]
            chain = inherited + member.added_entries

        if debug_enabled(logger):
            logger.debug(
                "formatter_chain_resolved",
                source_type=source_type.__qualname__,
                member=str(member.member) if member is not None else None,
                chain=[e.label for e in chain],
            )
        return chain
