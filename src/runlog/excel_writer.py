"""Exportacion a Excel formateada del historial de corridas."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pandas as pd
from openpyxl.styles import Alignment, Border, Font, Side

from runlog.model import Run
from runlog.stats import runs_to_frame

_DAY_NAMES: tuple[str, ...] = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
_SECONDS_PER_DAY = 86400


@dataclass(frozen=True)
class _Column:
    header: str
    width: int
    number_format: str | None = None


# Orden de exportacion: columna del DataFrame -> formato en la hoja.
_COLUMNS: dict[str, _Column] = {
    "weekday": _Column("Day", 6),
    "date": _Column("Date", 12, "yyyy-mm-dd"),
    "distance_mi": _Column("Miles", 10, "0.00"),
    "distance_km": _Column("Km", 10, "0.00"),
    "duration_s": _Column("Duration", 11, "[h]:mm:ss"),
    "pace_min_per_mile": _Column("Pace\n(min/mi)", 10, "0.00"),
    "input_type": _Column("Entered as", 11),
}
_BY_HEADER: dict[str, _Column] = {c.header: c for c in _COLUMNS.values()}

_THIN = Side(style="thin")
_BORDER = Border(left=_THIN, right=_THIN, top=_THIN, bottom=_THIN)


@dataclass(frozen=True)
class HistoryLayout:
    """Layout configuration for the history sheet."""

    sheet_name: str = "Run history"


def _history_frame(runs: Sequence[Run]) -> pd.DataFrame:
    """Historial de la mas reciente a la mas antigua, listo para Excel."""
    df = runs_to_frame(runs)
    if df.empty:
        return pd.DataFrame(columns=list(_COLUMNS))

    df = df.sort_values("date", ascending=False, kind="stable").reset_index(drop=True)
    df.insert(0, "weekday", [_DAY_NAMES[d.weekday()] for d in df["date"]])
    # Excel guarda duraciones como fraccion de dia; 0 es "sin registrar".
    df["duration_s"] = [s / _SECONDS_PER_DAY if s else None for s in df["duration_s"]]
    df["pace_min_per_mile"] = [p if p else None for p in df["pace_min_per_mile"]]
    return df[list(_COLUMNS)]


def write_history_xlsx(
    runs: Sequence[Run], out_path: Path, layout: HistoryLayout | None = None
) -> None:
    """Write the run history as a formatted Excel file.

    Args:
        runs: Runs to export, in any order.
        out_path: Output path for the XLSX file.
        layout: Sheet layout parameters.
    """
    layout = layout or HistoryLayout()
    out_path.parent.mkdir(parents=True, exist_ok=True)

    export_df = _history_frame(runs).rename(
        columns={name: col.header for name, col in _COLUMNS.items()}
    )

    with pd.ExcelWriter(out_path, engine="openpyxl") as writer:
        export_df.to_excel(writer, index=False, sheet_name=layout.sheet_name)
        _format_sheet(writer.book[layout.sheet_name])


def _format_sheet(ws: Any) -> None:
    """Apply borders, widths and number formats to a worksheet.

    Columns whose header is not a known export column only get borders and
    alignment.
    """
    header_font = Font(bold=True)
    center = Alignment(horizontal="center", vertical="center", wrap_text=True)
    for column in ws.iter_cols():
        header_cell, *body = column
        header_cell.font = header_font
        header_cell.alignment = center
        header_cell.border = _BORDER

        spec = _BY_HEADER.get(str(header_cell.value))
        if spec is not None:
            ws.column_dimensions[header_cell.column_letter].width = spec.width
        for cell in body:
            cell.alignment = Alignment(horizontal="center", vertical="center")
            cell.border = _BORDER
            if spec is not None and spec.number_format:
                cell.number_format = spec.number_format
