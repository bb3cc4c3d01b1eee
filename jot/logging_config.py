"""
Logging configuration for jot.

Library modules log through `logging.getLogger(__name__)` and stay quiet by
default; debug mode sends everything to stderr through rich.
"""

import logging
import os

from rich.console import Console
from rich.logging import RichHandler

DEBUG_ENV_VAR = "JOT_DEBUG"


def configure_logging(debug: bool = False) -> None:
    """Install the root handler once per process."""
    if debug or os.environ.get(DEBUG_ENV_VAR):
        enable_debug_mode()
    else:
        logging.basicConfig(level=logging.WARNING, format="%(message)s")


def enable_debug_mode() -> None:
    """Enable debug-level logging to stderr."""
    handler = RichHandler(console=Console(stderr=True), show_path=False, rich_tracebacks=True)
    logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s", handlers=[handler], force=True)
    logging.getLogger("jot").setLevel(logging.DEBUG)
