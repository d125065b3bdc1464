"""
Logging helpers shared by the capture and icon pipelines.

Modules call ``log()`` instead of holding their own logger so every message
lands on the single ``appstore_preview`` logger.
"""
from __future__ import annotations

import logging
from typing import Optional

LOGGER_NAME = "appstore_preview"

_logger = logging.getLogger(LOGGER_NAME)


def log(message: str, level: int = logging.INFO) -> None:
    """Log a message on the package logger."""
    _logger.log(level, message)


def configure_logging(level: int = logging.INFO, fmt: Optional[str] = None) -> logging.Logger:
    """
    Attach a timestamped stream handler to the package logger.

    Safe to call more than once; only the first call installs a handler.
    """
    if not any(getattr(h, "_appstore_preview", False) for h in _logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter(fmt or "[%(asctime)s] %(levelname)s %(message)s", datefmt="%H:%M:%S")
        )
        handler._appstore_preview = True  # type: ignore[attr-defined]
        _logger.addHandler(handler)
    _logger.setLevel(level)
    return _logger
