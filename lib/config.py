"""Shared console, debug logger and environment settings."""

import logging
import os

from rich.console import Console

console = Console()

DEBUG_LOG_PATH = "/tmp/raycaster_debug.log"


def debug_logger(enabled: bool, path: str = DEBUG_LOG_PATH) -> logging.Logger:
    """Return the ``raycaster.debug`` logger, attaching a file handler when enabled.

    Args:
        enabled: Attach the file handler and set DEBUG level.
        path: Log file, appended to.

    The handler is only attached once per process.
    """
    dbg = logging.getLogger("raycaster.debug")
    if enabled and not dbg.handlers:
        fh = logging.FileHandler(path, mode="a")
        fh.setFormatter(logging.Formatter("%(asctime)s  %(message)s", datefmt="%H:%M:%S"))
        dbg.addHandler(fh)
        dbg.setLevel(logging.DEBUG)
        dbg.debug("=== new session ===")
    return dbg


def env_settings() -> dict:
    """Read RAYCASTER_* overrides from the environment (after load_dotenv()).

    Returns a dict with ``map`` (path or None) and ``scale`` (int or None).
    Raises ValueError for a non-integer RAYCASTER_SCALE.
    """
    scale = os.environ.get("RAYCASTER_SCALE")
    if scale is not None:
        try:
            scale = int(scale)
        except ValueError:
            raise ValueError(f"RAYCASTER_SCALE must be an integer, got {scale!r}") from None
    return {
        "map": os.environ.get("RAYCASTER_MAP") or None,
        "scale": scale,
    }
