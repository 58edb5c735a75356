from __future__ import annotations

import csv
import json
from dataclasses import fields
from decimal import Decimal
from pathlib import Path
from typing import Any, Dict, Iterable, List

from reportlab.lib import colors
from reportlab.lib.pagesizes import landscape, letter
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from .errors import ValidationError
from .summary import SummaryRow
from .views import format_currency

ReportRow = Dict[str, Any]

PDF_COLUMNS = [
    ("Project", "name"),
    ("Status", "status_label"),
    ("Price", "price"),
    ("Labor", "labor_cost"),
    ("Material", "material_cost"),
    ("Expenses", "manual_expense_cost"),
    ("Receipts", "receipt_cost"),
    ("Total cost", "total_cost"),
    ("Profit", "profit"),
]

SUMMARY_FIELDS = [field.name for field in fields(SummaryRow)]


def summary_rows(rows: Iterable[SummaryRow]) -> List[ReportRow]:
    return [row.as_dict() for row in rows]


def _plain(value: Any) -> Any:
    # Decimals are written as exact strings.
    return str(value) if isinstance(value, Decimal) else value


def export_csv(rows: Iterable[ReportRow], output_path: Path) -> Path:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with output_path.open("w", newline="", encoding="utf-8") as handle:
        writer = csv.DictWriter(handle, fieldnames=SUMMARY_FIELDS, extrasaction="ignore")
        writer.writeheader()
        writer.writerows({key: _plain(value) for key, value in row.items()} for row in rows)
    return output_path


def export_json(rows: Iterable[ReportRow], output_path: Path) -> Path:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    payload = [{key: _plain(value) for key, value in row.items()} for row in rows]
    output_path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
    return output_path


def export_pdf(rows: Iterable[ReportRow], output_path: Path, title: str) -> Path:
    styles = getSampleStyleSheet()
    rows_list = list(rows)

    table_rows: List[List[str]] = [[header for header, _ in PDF_COLUMNS]]
    for row in rows_list:
        table_rows.append(
            [
                format_currency(row[key]) if isinstance(row.get(key), Decimal) else str(row.get(key, ""))
                for _, key in PDF_COLUMNS
            ]
        )

    story: List[Any] = [Paragraph(title, styles["Title"]), Spacer(1, 8)]
    if rows_list:
        table = Table(table_rows, repeatRows=1)
        table.setStyle(
            TableStyle(
                [
                    ("BACKGROUND", (0, 0), (-1, 0), colors.whitesmoke),
                    ("GRID", (0, 0), (-1, -1), 0.25, colors.lightgrey),
                    ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
                    ("FONTSIZE", (0, 0), (-1, -1), 8.5),
                    ("ALIGN", (2, 1), (-1, -1), "RIGHT"),
                    ("LEFTPADDING", (0, 0), (-1, -1), 5),
                    ("RIGHTPADDING", (0, 0), (-1, -1), 5),
                ]
            )
        )
        story.append(table)
    else:
        story.append(Paragraph("No projects.", styles["Normal"]))

    doc = SimpleDocTemplate(
        str(output_path),
        pagesize=landscape(letter),
        leftMargin=0.5 * inch,
        rightMargin=0.5 * inch,
        topMargin=0.5 * inch,
        bottomMargin=0.5 * inch,
    )
    output_path.parent.mkdir(parents=True, exist_ok=True)
    doc.build(story)
    return output_path


def export_report(rows: Iterable[ReportRow], output_path: Path, title: str = "Project Summary") -> Path:
    suffix = output_path.suffix.lower()
    if suffix == ".csv":
        return export_csv(rows, output_path)
    if suffix == ".json":
        return export_json(rows, output_path)
    if suffix == ".pdf":
        return export_pdf(rows, output_path, title=title)
    raise ValidationError(f"Unsupported export format {suffix or output_path.name!r}. Use .csv, .json or .pdf")
