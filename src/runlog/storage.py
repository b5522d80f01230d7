"""Persistencia en archivo plano del registro de corridas."""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import replace
from datetime import date, datetime
from pathlib import Path
from tempfile import NamedTemporaryFile

from loguru import logger

from runlog.model import InputType, Run

HEADER = "# date,distanceMiles,durationSeconds,inputType"
DATE_FORMAT = "%Y-%m-%d"
MIN_FIELDS = 4


class StoreError(RuntimeError):
    """Raised when the run log cannot be written."""


class MalformedLineError(ValueError):
    """A data line that cannot be turned into a run."""


class RunStore:
    """Reads and rewrites the whole run log as one delimited text file."""

    def __init__(self, path: Path) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> list[Run]:
        """Load every well-formed run from the file.

        A missing file means no history yet. Lines that cannot be parsed are
        skipped with a warning and loading continues. If reading fails part
        way through, the runs read so far are returned.
        """
        runs: list[Run] = []
        if not self._path.exists():
            return runs

        try:
            # Bytes invalidos pasan a U+FFFD: solo falla el parseo de esa linea.
            with self._path.open(encoding="utf-8", errors="replace") as fh:
                for line_no, line in enumerate(fh, start=1):
                    text = line.strip()
                    if not text or text.startswith("#"):
                        continue
                    try:
                        runs.append(parse_line(text))
                    except MalformedLineError as exc:
                        logger.warning(
                            f"Skipping malformed line {line_no} in {self._path}: {exc}"
                        )
        except OSError as exc:
            logger.error(f"Error loading runs from {self._path}: {exc}")
        return runs

    def save(self, runs: Iterable[Run]) -> None:
        """Replace the file with the given runs.

        Raises:
            StoreError: If the file cannot be written.
        """
        lines = [HEADER, *(format_line(r) for r in runs)]
        tmp_path: Path | None = None
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with NamedTemporaryFile(
                "w",
                dir=self._path.parent,
                prefix=f".{self._path.name}.",
                suffix=".tmp",
                delete=False,
                encoding="utf-8",
            ) as tmp:
                tmp_path = Path(tmp.name)
                tmp.write("\n".join(lines) + "\n")
            tmp_path.replace(self._path)
            tmp_path = None
        except OSError as exc:
            logger.error(f"Error saving runs to {self._path}: {exc}")
            raise StoreError(f"Could not save runs to {self._path}: {exc}") from exc
        finally:
            if tmp_path is not None:
                tmp_path.unlink(missing_ok=True)


def format_line(run: Run) -> str:
    """Serialize one run as ``yyyy-mm-dd,miles,seconds,TAG``."""
    return (
        f"{run.day.strftime(DATE_FORMAT)},{run.distance_mi:.4f},"
        f"{run.duration_s},{run.input_type.value}"
    )


def parse_line(text: str) -> Run:
    """Parse one data line; extra trailing fields are ignored.

    Raises:
        MalformedLineError: On too few fields, an unparsable field, or a
            negative or non-finite distance or duration.
    """
    parts = [p.strip() for p in text.split(",")]
    if len(parts) < MIN_FIELDS:
        raise MalformedLineError(
            f"expected {MIN_FIELDS} fields, got {len(parts)}"
        )
    day = _parse_day(parts[0])
    try:
        miles = float(parts[1])
    except ValueError as exc:
        raise MalformedLineError(f"bad distance {parts[1]!r}") from exc
    if not math.isfinite(miles) or miles < 0:
        raise MalformedLineError(f"bad distance {parts[1]!r}")
    try:
        duration_s = int(parts[2])
    except ValueError as exc:
        raise MalformedLineError(f"bad duration {parts[2]!r}") from exc
    if duration_s < 0:
        raise MalformedLineError(f"negative duration {parts[2]!r}")
    try:
        input_type = InputType(parts[3])
    except ValueError as exc:
        raise MalformedLineError(f"unknown input type {parts[3]!r}") from exc

    # La distancia ya esta en millas; el tag queda solo como metadato.
    return replace(Run.from_miles(day, miles, duration_s), input_type=input_type)


def _parse_day(raw: str) -> date:
    try:
        return datetime.strptime(raw, DATE_FORMAT).date()
    except ValueError as exc:
        raise MalformedLineError(f"bad date {raw!r}") from exc
