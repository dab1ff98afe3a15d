"""Meet results import and athlete season lifecycle for WV Runs."""

__version__ = "0.1.0"

from wvruns.logging import (
    bind_context,
    clear_context,
    configure_logging,
    get_logger,
)

__all__ = [
    "configure_logging",
    "get_logger",
    "bind_context",
    "clear_context",
]
