"""Loguru sink configuration for the CLI and API entry points."""

from __future__ import annotations

import sys
from pathlib import Path

from loguru import logger

from config import Settings


def configure_logging(settings: Settings, level: str | None = None) -> None:
    """
    Replace the default loguru sink with one honoring the configured level.

    Args:
        settings: Application settings (log_level, log_file)
        level: Explicit level overriding settings.log_level
    """
    effective = level or settings.log_level

    logger.remove()
    logger.add(
        sys.stderr,
        level=effective,
        format="<dim>{time:HH:mm:ss}</dim> | <level>{level: <8}</level> | {message}",
    )

    if settings.log_file:
        Path(settings.log_file).parent.mkdir(parents=True, exist_ok=True)
        logger.add(settings.log_file, level=effective, rotation="10 MB", encoding="utf-8")
