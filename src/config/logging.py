"""Root logger setup."""

import logging

from src.config.settings import get_settings

_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
_configured = False


def configure_logging() -> None:
    """Attach a single stream handler to the root logger (idempotent)."""
    global _configured

    level = getattr(logging, get_settings().LOG_LEVEL.upper(), logging.INFO)
    root = logging.getLogger()
    root.setLevel(level)
    if _configured:
        return

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    root.addHandler(handler)
    _configured = True
