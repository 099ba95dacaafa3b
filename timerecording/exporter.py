from __future__ import annotations

import csv
from datetime import date, datetime
from pathlib import Path
from typing import IO, Any, Dict, Iterable, List, Mapping, Optional, Union

from openpyxl import Workbook
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from .errors import ValidationError
from .weeks import iso_week_number, weekday_abbreviation

ReportRow = Dict[str, Any]
Target = Union[Path, IO[bytes]]

# header, key, column width
ENTRY_COLUMNS = [
    ("Datum", "date", 12),
    ("KW", "kw", 5),
    ("Wochentag", "day_name", 12),
    ("Tagesart", "day_type", 15),
    ("Auftragsnr", "order_nr", 15),
    ("Investierte Zeit (h)", "duration", 22),
    ("Kommentar", "comment", 30),
    ("User", "user", 20),
]

NO_DATA_MESSAGE = "No data to export."


def _stringify(value: Any) -> str:
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    if value is None:
        return ""
    return str(value)


def _as_date(value: Any) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value))


def entry_rows(entries: Iterable[Mapping[str, Any]]) -> List[ReportRow]:
    """Flatten stored entries into export rows with ISO week and weekday columns."""
    rows = []
    for entry in entries:
        day = _as_date(entry["date"])
        rows.append(
            {
                "date": day.isoformat(),
                "kw": iso_week_number(day),
                "day_name": weekday_abbreviation(day),
                "day_type": entry["day_type"],
                "order_nr": entry["order_nr"],
                # raw number so the sheet can sum it
                "duration": float(entry["duration"]),
                "comment": entry.get("comment") or None,
                "user": entry["project_manager"],
            }
        )
    return rows


def default_export_name(manager: Optional[str] = None, today: Optional[date] = None) -> str:
    stamp = (today or date.today()).isoformat()
    if manager is None:
        return f"TimeRecording_GLOBAL_{stamp}.xlsx"
    return f"TimeRecording_{'_'.join(manager.split())}_{stamp}.xlsx"


def write_entries_xlsx(entries: Iterable[Mapping[str, Any]], target: Target, sheet_title: str = "Time Records") -> int:
    rows = entry_rows(entries)
    if not rows:
        raise ValidationError(NO_DATA_MESSAGE)

    wb = Workbook()
    ws = wb.active
    ws.title = sheet_title
    ws.append([header for header, _, _ in ENTRY_COLUMNS])
    for index, (_, _, width) in enumerate(ENTRY_COLUMNS, start=1):
        ws.column_dimensions[get_column_letter(index)].width = width
    for cell in ws[1]:
        cell.font = Font(bold=True)
    for row in rows:
        ws.append([row[key] for _, key, _ in ENTRY_COLUMNS])

    if isinstance(target, Path):
        target.parent.mkdir(parents=True, exist_ok=True)
    wb.save(target)
    return len(rows)


def export_csv(rows: Iterable[ReportRow], output_path: Path) -> Path:
    rows = list(rows)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with output_path.open("w", newline="", encoding="utf-8") as handle:
        if not rows:
            return output_path
        writer = csv.DictWriter(handle, fieldnames=list(rows[0].keys()))
        writer.writeheader()
        for row in rows:
            writer.writerow({key: _stringify(value) for key, value in row.items()})
    return output_path


def export_xlsx(rows: Iterable[ReportRow], output_path: Path, title: str) -> Path:
    rows = list(rows)
    wb = Workbook()
    ws = wb.active
    ws.title = title[:31]
    if rows:
        headers = list(rows[0].keys())
        ws.append(headers)
        for cell in ws[1]:
            cell.font = Font(bold=True)
        for row in rows:
            ws.append([_cell_value(row.get(h)) for h in headers])
    output_path.parent.mkdir(parents=True, exist_ok=True)
    wb.save(output_path)
    return output_path


def _cell_value(value: Any) -> Any:
    if isinstance(value, (int, float, str, date)) or value is None:
        return value
    return _stringify(value)


def export_pdf(rows: Iterable[ReportRow], output_path: Path, title: str) -> Path:
    rows = list(rows)
    styles = getSampleStyleSheet()
    story: list = [Paragraph(title, styles["Title"]), Spacer(1, 12)]

    if rows:
        headers = list(rows[0].keys())
        data = [headers] + [[_stringify(row.get(h)) for h in headers] for row in rows]
        table = Table(data, repeatRows=1)
        table.setStyle(
            TableStyle(
                [
                    ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
                    ("BACKGROUND", (0, 0), (-1, 0), colors.lightgrey),
                    ("GRID", (0, 0), (-1, -1), 0.25, colors.grey),
                    ("FONTSIZE", (0, 0), (-1, -1), 8),
                ]
            )
        )
        story.append(table)
    else:
        story.append(Paragraph("No rows returned", styles["Normal"]))

    output_path.parent.mkdir(parents=True, exist_ok=True)
    SimpleDocTemplate(str(output_path), pagesize=landscape(A4), title=title).build(story)
    return output_path


def export_report(rows: Iterable[ReportRow], output_path: Path, title: str) -> Path:
    suffix = output_path.suffix.lower()
    if suffix == ".csv":
        return export_csv(rows, output_path)
    if suffix == ".xlsx":
        return export_xlsx(rows, output_path, title=title)
    if suffix == ".pdf":
        return export_pdf(rows, output_path, title=title)
    raise ValueError("Unsupported export format. Use .csv, .xlsx or .pdf")
