"""
Formatter Instance Provider - Constructs formatters registered by class.

Precedence when a ByType entry is resolved:
1. Per-registration override (``constructed_by``)
2. Global factory (``construct_formatters_using``)
3. Zero-argument construction
"""

import inspect
from collections.abc import Callable

from ..contracts import FormatterFactory, ValueFormatter
from ..errors import FormatterConfigurationError
from ..logging import debug_enabled, get_logger

__all__ = ["FormatterInstanceProvider"]

logger = get_logger(__name__)


class FormatterInstanceProvider:
    """Strategy for building formatter instances.

    Nothing is cached: every resolve() builds a new instance.
    """

    __slots__ = ("_factory",)

    def __init__(self, factory: FormatterFactory | None = None) -> None:
        self._factory = factory

    @property
    def factory(self) -> FormatterFactory | None:
        """Global factory, None when default construction applies."""
        return self._factory

    def use_factory(self, factory: FormatterFactory | None) -> None:
        """Install a global factory (None restores default construction)."""
        if factory is not None and not callable(factory):
            raise TypeError(f"Formatter factory must be callable, got {factory!r}")
        self._factory = factory
        logger.debug("instance_provider_set", custom=factory is not None)

    def resolve(
        self,
        formatter_type: type,
        construct: Callable[[], ValueFormatter] | None = None,
    ) -> ValueFormatter:
        """Build a formatter for ``formatter_type``.

        Args:
            formatter_type: Registered formatter class
            construct: Per-registration override, if any

        Returns:
            Formatter instance

        Raises:
            FormatterConfigurationError: If no usable construction exists
        """
        if construct is not None:
            instance = construct()
            source = "override"
        elif self._factory is not None:
            instance = self._factory(formatter_type)
            source = "factory"
        else:
            instance = self._construct_default(formatter_type)
            source = "default"

        if not isinstance(instance, ValueFormatter):
            logger.warning(
                "formatter_construction_failed",
                formatter=formatter_type.__qualname__,
                source=source,
            )
            raise FormatterConfigurationError(
                formatter_type,
                f"{source} construction returned {type(instance).__name__}, "
                f"which has no format_value()",
            )

        if debug_enabled(logger):
            logger.debug(
                "formatter_constructed",
                formatter=formatter_type.__qualname__,
                source=source,
            )
        return instance

    def _construct_default(self, formatter_type: type) -> ValueFormatter:
        """Invoke the zero-argument constructor."""
        try:
            inspect.signature(formatter_type).bind()
        except TypeError as e:
            logger.warning(
                "formatter_construction_failed",
                formatter=formatter_type.__qualname__,
                source="default",
                error=str(e),
            )
            raise FormatterConfigurationError(
                formatter_type,
                "no zero-argument constructor and no construction override",
            ) from e
        except ValueError:
            # Builtins without a signature; let the call decide
            pass
        return formatter_type()
