"""CSV and PDF renderings of the member list."""

from __future__ import annotations

import csv
import io
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from choir_registry.domain.entities import Member
from choir_registry.utils import now_in_app_timezone

REPORT_TITLE = "Choir Members"
CSV_CONTENT_TYPE = "text/csv; charset=utf-8"
PDF_CONTENT_TYPE = "application/pdf"


@dataclass(frozen=True)
class ReportColumn:
    title: str
    extract: Callable[[Member], object]
    in_pdf: bool = True


def _joined(values: Sequence[str]) -> str:
    return ", ".join(values)


def _text(value: object) -> str:
    return "" if value is None else str(value)


COLUMNS: tuple[ReportColumn, ...] = (
    ReportColumn("Full Name", lambda m: m.full_name),
    ReportColumn("Gender", lambda m: m.gender),
    ReportColumn("Marital Status", lambda m: m.status, in_pdf=False),
    ReportColumn("Part", lambda m: m.part),
    ReportColumn("Zone", lambda m: m.zone),
    ReportColumn("Area", lambda m: m.area),
    ReportColumn("Parish", lambda m: m.parish),
    ReportColumn("Parish Address", lambda m: m.parish_address, in_pdf=False),
    ReportColumn("Phone No", lambda m: m.phone_no),
    ReportColumn("Residential Address", lambda m: m.residential_address, in_pdf=False),
    ReportColumn("State of Origin", lambda m: m.state_of_origin, in_pdf=False),
    ReportColumn("Home Town", lambda m: m.home_town, in_pdf=False),
    ReportColumn("Occupation", lambda m: m.occupation, in_pdf=False),
    ReportColumn("Join Year", lambda m: m.join_year),
    ReportColumn("Position", lambda m: _joined(m.position)),
    ReportColumn("Instruments", lambda m: _joined(m.instruments)),
    ReportColumn(
        "Registered",
        lambda m: m.created_at.strftime("%Y-%m-%d") if m.created_at else "",
        in_pdf=False,
    ),
)


def render_members_csv(members: Sequence[Member]) -> bytes:
    """Return ``members`` as a UTF-8 CSV document with a header row."""

    buffer = io.StringIO()
    writer = csv.writer(buffer)
    writer.writerow([column.title for column in COLUMNS])
    for member in members:
        writer.writerow([_text(column.extract(member)) for column in COLUMNS])
    # The BOM lets spreadsheet applications detect UTF-8.
    return buffer.getvalue().encode("utf-8-sig")


def render_members_pdf(members: Sequence[Member]) -> bytes:
    """Return ``members`` as an A4 landscape PDF table."""

    styles = getSampleStyleSheet()
    cell_style = styles["BodyText"].clone("MemberCell", fontSize=7, leading=8.5)
    header_style = cell_style.clone("MemberHeader", fontName="Helvetica-Bold", textColor=colors.white)
    columns = [column for column in COLUMNS if column.in_pdf]

    rows: list[list[object]] = [
        [Paragraph("S/N", header_style)]
        + [Paragraph(column.title, header_style) for column in columns]
    ]
    for index, member in enumerate(members, start=1):
        rows.append(
            [Paragraph(str(index), cell_style)]
            + [
                Paragraph(_escape(_text(column.extract(member))), cell_style)
                for column in columns
            ]
        )

    buffer = io.BytesIO()
    document = SimpleDocTemplate(
        buffer,
        pagesize=landscape(A4),
        leftMargin=10 * mm,
        rightMargin=10 * mm,
        topMargin=12 * mm,
        bottomMargin=12 * mm,
        title=REPORT_TITLE,
    )
    generated = now_in_app_timezone().strftime("%Y-%m-%d %H:%M")
    table = Table(rows, repeatRows=1)
    table.setStyle(
        TableStyle(
            [
                ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#4F81BD")),
                ("GRID", (0, 0), (-1, -1), 0.25, colors.grey),
                ("VALIGN", (0, 0), (-1, -1), "TOP"),
                ("ROWBACKGROUNDS", (0, 1), (-1, -1), [colors.white, colors.HexColor("#F2F2F2")]),
            ]
        )
    )
    document.build(
        [
            Paragraph(REPORT_TITLE, styles["Title"]),
            Paragraph(f"Generated {generated} - {len(members)} members", styles["Normal"]),
            Spacer(1, 6 * mm),
            table,
        ]
    )
    return buffer.getvalue()


def _escape(value: str) -> str:
    return value.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


__all__ = [
    "COLUMNS",
    "CSV_CONTENT_TYPE",
    "PDF_CONTENT_TYPE",
    "render_members_csv",
    "render_members_pdf",
]
