"""Configuracion de ejecucion del registro de corridas."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

STORE_ENV_VAR = "RUNLOG_STORE"
DEFAULT_STORE = "runs.csv"
DEFAULT_LOG_LEVEL = "WARNING"


@dataclass(frozen=True)
class AppConfig:
    """Resolved settings for one process."""

    store_path: Path
    log_level: str = DEFAULT_LOG_LEVEL
    log_file: Path | None = None


def load_config(
    store: str | None = None,
    log_level: str | None = None,
    log_file: str | None = None,
) -> AppConfig:
    """Merge explicit values over the environment over defaults."""
    raw_store = store or os.environ.get(STORE_ENV_VAR) or DEFAULT_STORE
    return AppConfig(
        store_path=Path(raw_store).expanduser(),
        log_level=(log_level or DEFAULT_LOG_LEVEL).upper(),
        log_file=Path(log_file).expanduser() if log_file else None,
    )
