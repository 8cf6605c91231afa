"""Read-only exporters for calculation results.

Exporters only format what the engines already produced; nothing here
recomputes a schedule. Currency cells in the spreadsheet and PDF exports go
through an injected formatter so the file shows the same text as the screen.
"""

from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import Any, Dict, Iterable, List

import xlsxwriter
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from .config import EXPORT_FILENAME
from .data_models import CalculationState, LoanSummary, PaymentEntry
from .formatter import METHOD_LABELS, Formatter, build_summary_rows, format_currency
from .summary import interest_delta, select_summary

TIMELINE_HEADERS = ["Month", "Payment", "Principal", "Interest", "Remaining Balance"]


def default_filename(state: CalculationState, ext: str) -> str:
    return EXPORT_FILENAME.format(months=state.months, ext=ext)


def serialize_schedule(schedule: Iterable[PaymentEntry]) -> List[Dict[str, Any]]:
    """Convert schedule entries into JSON-serialisable dictionaries."""
    serialized = []
    for entry in schedule:
        serialized.append(
            {
                "month": entry.month,
                "payment": entry.payment,
                "principal": entry.principal_portion,
                "interest": entry.interest_portion,
                "balance": entry.remaining_balance,
                "principal_ratio": entry.principal_ratio,
                "interest_ratio": entry.interest_ratio,
                "is_discounted": entry.is_discounted,
            }
        )
    return serialized


def serialize_summary(summary: LoanSummary, include_schedule: bool = True) -> Dict[str, Any]:
    data: Dict[str, Any] = {
        "method": summary.method,
        "monthly_payment": summary.monthly_payment,
        "total_interest": summary.total_interest,
        "total_payment": summary.total_payment,
    }
    if include_schedule:
        data["schedule"] = serialize_schedule(summary.schedule)
    return data


def serialize_state(state: CalculationState) -> Dict[str, Any]:
    """Convert a full calculation (both methods) into plain dictionaries."""
    return {
        "principal": state.principal,
        "annual_rate": state.annual_rate,
        "months": state.months,
        "intro_discount_rate": state.intro_discount_rate,
        "intro_discount_months": state.intro_discount_months,
        "provision_rate": state.provision_rate,
        "provision_amount": state.provision_amount,
        "net_disbursement": state.net_disbursement,
        "interest_delta": interest_delta(state.flat, state.effective),
        "flat": serialize_summary(state.flat),
        "effective": serialize_summary(state.effective),
    }


def export_to_json(path: Path, state: CalculationState, method: str) -> None:
    """Export the selected method's summary and schedule to a JSON file."""
    summary = select_summary(state, method)
    data = {
        "summary": {
            "principal": state.principal,
            "net_disbursement": state.net_disbursement,
            "months": state.months,
            "annual_rate": state.annual_rate,
            "provision_rate": state.provision_rate,
            "intro_discount_rate": state.intro_discount_rate,
            "intro_discount_months": state.intro_discount_months,
            **serialize_summary(summary, include_schedule=False),
        },
        "schedule": serialize_schedule(summary.schedule),
    }
    with path.open("w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)


def export_to_csv(path: Path, schedule: Iterable[PaymentEntry]) -> None:
    """Export a schedule to a CSV file."""
    header = [
        "Month",
        "Payment",
        "Principal",
        "Interest",
        "Remaining_Balance",
        "Principal_Ratio",
        "Interest_Ratio",
        "Discounted",
    ]
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(header)
        for e in schedule:
            writer.writerow(
                [
                    e.month,
                    e.payment,
                    e.principal_portion,
                    e.interest_portion,
                    e.remaining_balance,
                    e.principal_ratio,
                    e.interest_ratio,
                    e.is_discounted,
                ]
            )


def export_to_xlsx(
    path: Path,
    state: CalculationState,
    method: str,
    formatter: Formatter = format_currency,
) -> None:
    """Export a two-sheet workbook: ``Summary`` and ``Timeline``."""
    summary = select_summary(state, method)
    workbook = xlsxwriter.Workbook(str(path))
    try:
        header_fmt = workbook.add_format({"bold": True, "bg_color": "#DCE6F1", "border": 1})
        title_fmt = workbook.add_format({"bold": True})
        right_fmt = workbook.add_format({"align": "right"})

        summary_sheet = workbook.add_worksheet("Summary")
        for r, row in enumerate(build_summary_rows(state, method, formatter, include_header=True)):
            summary_sheet.write_row(r, 0, row, header_fmt if r == 0 else None)
        summary_sheet.set_column(0, 0, 30)
        summary_sheet.set_column(1, 1, 32)

        timeline_sheet = workbook.add_worksheet("Timeline")
        timeline_sheet.write(0, 0, f"Timeline ({METHOD_LABELS[method]})", title_fmt)
        timeline_sheet.write_row(1, 0, TIMELINE_HEADERS, header_fmt)
        for r, e in enumerate(summary.schedule, start=2):
            timeline_sheet.write_number(r, 0, e.month)
            timeline_sheet.write_row(
                r,
                1,
                [
                    formatter(e.payment),
                    formatter(e.principal_portion),
                    formatter(e.interest_portion),
                    formatter(e.remaining_balance),
                ],
                right_fmt,
            )
        timeline_sheet.set_column(0, 0, 12)
        timeline_sheet.set_column(1, 3, 22)
        timeline_sheet.set_column(4, 4, 26)
    finally:
        workbook.close()


def _pdf_table(rows, col_widths=None, header=True) -> Table:
    table = Table(rows, hAlign="LEFT", colWidths=col_widths, repeatRows=1 if header else 0)
    style = [
        ("BOX", (0, 0), (-1, -1), 1, colors.black),
        ("INNERGRID", (0, 0), (-1, -1), 0.5, colors.grey),
        ("FONTSIZE", (0, 0), (-1, -1), 9),
    ]
    if header:
        style += [
            ("BACKGROUND", (0, 0), (-1, 0), colors.Color(20 / 255, 20 / 255, 22 / 255)),
            ("TEXTCOLOR", (0, 0), (-1, 0), colors.Color(245 / 255, 245 / 255, 245 / 255)),
        ]
    table.setStyle(TableStyle(style))
    return table


def export_to_pdf(
    path: Path,
    state: CalculationState,
    method: str,
    formatter: Formatter = format_currency,
) -> None:
    """Export an A4 report: the summary table followed by the timeline."""
    summary = select_summary(state, method)
    styles = getSampleStyleSheet()
    doc = SimpleDocTemplate(str(path), pagesize=A4, leftMargin=40, rightMargin=40, topMargin=40, bottomMargin=40)

    summary_rows = [list(row) for row in build_summary_rows(state, method, formatter, include_header=True)]
    timeline_rows = [TIMELINE_HEADERS] + [
        [
            str(e.month),
            formatter(e.payment),
            formatter(e.principal_portion),
            formatter(e.interest_portion),
            formatter(e.remaining_balance),
        ]
        for e in summary.schedule
    ]
    timeline = _pdf_table(timeline_rows, col_widths=[50, 110, 110, 100, 130])
    timeline.setStyle(TableStyle([("ALIGN", (1, 0), (-1, -1), "RIGHT")]))

    story = [
        Paragraph("<b>Loan Summary</b>", styles["Title"]),
        Spacer(1, 6),
        _pdf_table(summary_rows, col_widths=[200, 260]),
        Spacer(1, 18),
        Paragraph(f"<b>Timeline ({METHOD_LABELS[method]})</b>", styles["Heading3"]),
        Spacer(1, 6),
        timeline,
    ]
    doc.build(story)
