from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import cast

from openpyxl import Workbook, load_workbook
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from runlog.excel_writer import HistoryLayout, _format_sheet, write_history_xlsx
from runlog.model import Run


def test_write_history_xlsx_happy_path_and_formatting(tmp_path: Path) -> None:
    runs = [
        Run.from_miles(date(2025, 1, 6), 3.0, 1800),
        Run.from_kilometers(date(2025, 1, 8), 5.0),
    ]
    out = tmp_path / "nested" / "history.xlsx"
    write_history_xlsx(runs, out, HistoryLayout())

    wb = load_workbook(out)
    ws = cast(Worksheet, wb[HistoryLayout().sheet_name])

    headers = [cell.value for cell in ws[1]]
    assert headers == [
        "Day",
        "Date",
        "Miles",
        "Km",
        "Duration",
        "Pace\n(min/mi)",
        "Entered as",
    ]

    # Newest first: 2025-01-08 is a Wednesday.
    assert ws.cell(row=2, column=1).value == "Wed"
    assert str(ws.cell(row=2, column=2).value).startswith("2025-01-08")
    assert ws.cell(row=2, column=7).value == "KM"
    assert ws.cell(row=2, column=5).value is None

    assert ws.cell(row=3, column=1).value == "Mon"
    assert ws.cell(row=3, column=3).value == 3.0
    assert ws.cell(row=3, column=6).value == 10.0

    assert ws.column_dimensions["A"].width == 6
    miles_letter = get_column_letter(headers.index("Miles") + 1)
    assert ws.column_dimensions[miles_letter].width == 10
    assert ws.cell(row=3, column=5).number_format == "[h]:mm:ss"
    assert ws.cell(row=1, column=1).font.bold is True


def test_write_history_xlsx_without_runs_writes_header_only(tmp_path: Path) -> None:
    out = tmp_path / "empty.xlsx"
    write_history_xlsx([], out)
    ws = load_workbook(out)[HistoryLayout().sheet_name]
    assert ws.max_row == 1
    assert ws.cell(row=1, column=2).value == "Date"


def test_format_sheet_handles_missing_headers() -> None:
    wb = Workbook()
    ws = cast(Worksheet, wb.active)
    ws.append(["Solo"])
    ws.append([1])

    _format_sheet(ws)

    assert ws.cell(row=1, column=1).font.bold is True
    assert ws.cell(row=2, column=1).alignment.horizontal == "center"
    assert ws.cell(row=2, column=1).number_format == "General"
    assert ws.cell(row=1, column=1).border.top.style == "thin"
