"""
Formatter entries - Registration records for formatter chains.

A formatter reference is one of three closed variants:
- ByType: a formatter class, constructed lazily (optionally by an override)
- ByInstance: a concrete formatter, shared by every call
- ByExpression: an inline callable taking the context

Only ByType entries carry a type identity that skip rules can match.
"""

from collections.abc import Callable
from dataclasses import dataclass, replace
from typing import Any, Generic, TypeVar

from ..contracts import FormatExpression, ValueFormatter

__all__ = [
    "ByExpression",
    "ByInstance",
    "ByType",
    "FormatterEntry",
    "FormatterHandle",
    "FormatterRef",
    "to_ref",
]

OwnerT = TypeVar("OwnerT")


@dataclass(slots=True, frozen=True)
class ByType:
    """Formatter referenced by class.

    Attributes:
        formatter_type: Class to construct
        construct: Zero-argument override used instead of the provider
    """
    formatter_type: type
    construct: Callable[[], ValueFormatter] | None = None


@dataclass(slots=True, frozen=True)
class ByInstance:
    """Formatter referenced by a shared instance."""
    formatter: ValueFormatter


@dataclass(slots=True, frozen=True)
class ByExpression:
    """Anonymous formatter expression."""
    expression: FormatExpression


FormatterRef = ByType | ByInstance | ByExpression


def to_ref(formatter: Any) -> FormatterRef:
    """Classify a user-supplied formatter reference.

    Classes become ByType, ValueFormatter instances ByInstance, and any
    other callable ByExpression.

    Raises:
        TypeError: If the argument is none of these
    """
    if isinstance(formatter, (ByType, ByInstance, ByExpression)):
        return formatter
    if isinstance(formatter, type):
        return ByType(formatter)
    if isinstance(formatter, ValueFormatter):
        return ByInstance(formatter)
    if callable(formatter):
        return ByExpression(formatter)
    raise TypeError(
        f"{formatter!r} is not a formatter class, formatter instance or expression"
    )


@dataclass(slots=True)
class FormatterEntry:
    """Ordered registration record.

    The sequence number is the only ordering key inside a chain.
    """
    ref: FormatterRef
    sequence: int

    @property
    def formatter_type(self) -> type | None:
        """Declared formatter class, None for instances and expressions."""
        if isinstance(self.ref, ByType):
            return self.ref.formatter_type
        return None

    def is_skipped_by(self, skipped: set[type] | frozenset[type]) -> bool:
        """True if a skip set removes this entry from an inherited chain."""
        formatter_type = self.formatter_type
        return formatter_type is not None and formatter_type in skipped

    @property
    def label(self) -> str:
        """Short description for logs."""
        ref = self.ref
        if isinstance(ref, ByType):
            suffix = " (constructed_by)" if ref.construct else ""
            return f"{ref.formatter_type.__qualname__}{suffix}"
        if isinstance(ref, ByInstance):
            return f"{type(ref.formatter).__qualname__} instance"
        return f"expression#{self.sequence}"


class FormatterHandle(Generic[OwnerT]):
    """Returned by every formatter registration.

    Allows attaching a construction override to that one registration:

        registry.add_global_formatter(CustomFormatter).constructed_by(
            lambda: CustomFormatter(10)
        )
    """

    __slots__ = ("_entry", "_owner")

    def __init__(self, entry: FormatterEntry, owner: OwnerT) -> None:
        self._entry = entry
        self._owner = owner

    @property
    def entry(self) -> FormatterEntry:
        return self._entry

    def constructed_by(self, factory: Callable[[], ValueFormatter]) -> OwnerT:
        """Construct this entry's formatter with ``factory``.

        Takes precedence over the global instance provider for this entry
        only.

        Returns:
            The object the formatter was registered on, for chaining

        Raises:
            TypeError: If the entry was not registered by class
        """
        if not isinstance(self._entry.ref, ByType):
            raise TypeError(
                f"constructed_by() applies to formatters registered by class, "
                f"not {self._entry.label}"
            )
        if not callable(factory):
            raise TypeError(f"Construction override must be callable, got {factory!r}")
        self._entry.ref = replace(self._entry.ref, construct=factory)
        return self._owner
