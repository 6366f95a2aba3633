"""
Built-in implementations - Ready-made value formatters.

Nothing is registered automatically; call register_builtin_formatters()
or register individual formatters during configuration.
"""

from .formatters import (
    DateFormatter,
    NumberFormatter,
    TemplateFormatter,
    register_builtin_formatters,
)

__all__ = [
    "DateFormatter",
    "NumberFormatter",
    "TemplateFormatter",
    "register_builtin_formatters",
]
