"""Pick-list option resolution."""

from asana_hooks.options.resolver import (
    DEFAULT_SOURCES,
    OptionResolver,
    OptionSource,
    UnknownOptionKind,
    to_options,
)

__all__ = [
    "DEFAULT_SOURCES",
    "OptionResolver",
    "OptionSource",
    "UnknownOptionKind",
    "to_options",
]
