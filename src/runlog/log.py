"""Configuracion del logger."""

from __future__ import annotations

import sys
from pathlib import Path

from loguru import logger


def setup_logger(
    level: str = "WARNING",
    log_file: Path | None = None,
    rotation: str = "1 MB",
    retention: str = "30 days",
) -> None:
    """Configure loguru with a stderr sink and an optional file sink.

    Args:
        level: Minimum level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file: Optional log file path. If None, only console logging.
        rotation: File rotation size or interval.
        retention: How long rotated files are kept.
    """
    logger.remove()

    logger.add(
        sys.stderr,
        format="<level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
        level=level,
        colorize=True,
    )

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_file,
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}",
            level=level,
            rotation=rotation,
            retention=retention,
            encoding="utf-8",
        )

    logger.debug(f"Logger initialized with level={level}")
