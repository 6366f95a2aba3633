"""
Resolution context passed through a formatter chain.
"""

from dataclasses import dataclass, replace
from typing import Any

__all__ = ["MemberId", "ResolutionContext"]


@dataclass(slots=True, frozen=True)
class MemberId:
    """Identity of one destination member within one type mapping.

    Attributes:
        source_type: Source side of the type mapping
        destination_type: Destination side of the type mapping
        member_name: Destination member name
    """
    source_type: type
    destination_type: type
    member_name: str

    def __str__(self) -> str:
        return (
            f"{self.source_type.__name__}->"
            f"{self.destination_type.__name__}.{self.member_name}"
        )


@dataclass(slots=True, frozen=True)
class ResolutionContext:
    """Immutable per-invocation value bundle.

    Attributes:
        source_value: Current value (the running value inside a chain)
        member_name: Name of the source member being mapped
        source_type: Runtime type of the original source value
        destination_member: Destination member identity, if known
    """
    source_value: Any
    member_name: str
    source_type: type
    destination_member: MemberId | None = None

    def with_value(self, value: Any) -> "ResolutionContext":
        """Copy of this context carrying a new running value."""
        return replace(self, source_value=value)
