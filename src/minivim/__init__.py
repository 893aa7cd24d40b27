"""Terminal-agnostic modal text editor engine."""

__all__ = [
    "adapters",
    "actions",
    "buffer",
    "config",
    "engine",
    "keymaps",
    "modes",
    "runtime",
    "storage",
]

__version__ = "0.1.0"
