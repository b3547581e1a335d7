from __future__ import annotations

import io
import logging
import os
import re
from datetime import datetime
from typing import Any, Optional, Sequence

from bidi.algorithm import get_display
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFError, TTFont
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from services.export import EXAM_LABELS, format_grade
from services.grade_stats import CourseRecord, GradeStats

logger = logging.getLogger(__name__)

BRAND_COLOR = colors.HexColor("#0369A1")

# TTFs with Hebrew glyphs, looked up when REPORT_FONT_PATH is not set
FONT_CANDIDATES = (
    "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
    "/usr/share/fonts/dejavu/DejaVuSans.ttf",
    "/usr/share/fonts/TTF/DejaVuSans.ttf",
    "/usr/share/fonts/dejavu-sans-fonts/DejaVuSans.ttf",
    "/usr/share/fonts/truetype/freefont/FreeSans.ttf",
    "/System/Library/Fonts/Supplemental/Arial Unicode.ttf",
    "/Library/Fonts/Arial Unicode.ttf",
    "C:/Windows/Fonts/arial.ttf",
)


class ReportFontError(RuntimeError):
    """No usable Hebrew-capable TTF for the report."""


def report_filename(display_name: Optional[str]) -> str:
    name = re.sub(r"[^\w\-]+", "_", (display_name or "Student").strip()) or "Student"
    return f"Circademic_Report_{name}.pdf"


def find_report_font(font_path: Optional[str] = None) -> str:
    """
    Path of the TTF to draw the report with.

    An explicit font_path must exist; otherwise the first FONT_CANDIDATES
    entry found on disk is used. Raises ReportFontError when there is none,
    since the standard PDF fonts cannot draw Hebrew.
    """
    if font_path:
        if not os.path.isfile(font_path):
            raise ReportFontError(f"Report font not found: {font_path}")
        return font_path
    for candidate in FONT_CANDIDATES:
        if os.path.isfile(candidate):
            return candidate
    raise ReportFontError("No Hebrew-capable TTF found, set REPORT_FONT_PATH")


def _bold_variant(path: str) -> str:
    stem, ext = os.path.splitext(path)
    bold = f"{stem}-Bold{ext}"
    return bold if os.path.isfile(bold) else path


def register_report_fonts(font_path: Optional[str] = None) -> tuple[str, str]:
    """Register the regular / bold report fonts with reportlab and return their names."""
    regular = find_report_font(font_path)
    logger.debug(f"Report font: {regular}")
    names = []
    for path in (regular, _bold_variant(regular)):
        name = re.sub(r"\W+", "", os.path.splitext(os.path.basename(path))[0])
        if name not in pdfmetrics.getRegisteredFontNames():
            try:
                pdfmetrics.registerFont(TTFont(name, path))
            except (TTFError, OSError) as e:
                raise ReportFontError(f"Could not load report font {path}: {e}") from e
        names.append(name)
    return names[0], names[1]


def rtl(value: Any) -> str:
    """Cell text in visual order: reportlab draws left to right, Hebrew runs are reversed."""
    return get_display(str(value))


def _cells(rows: Sequence[Sequence[Any]]) -> list:
    return [[rtl(cell) for cell in row] for row in rows]


def _table_style(font: str, bold: str) -> TableStyle:
    return TableStyle([
        ("BACKGROUND",    (0, 0), (-1,  0), BRAND_COLOR),
        ("TEXTCOLOR",     (0, 0), (-1,  0), colors.white),
        ("FONTNAME",      (0, 0), (-1,  0), bold),
        ("FONTNAME",      (0, 1), (-1, -1), font),
        ("FONTSIZE",      (0, 0), (-1, -1), 9),
        ("ALIGN",         (0, 0), (-1, -1), "CENTER"),
        ("GRID",          (0, 0), (-1, -1), 0.5, colors.grey),
        ("ROWBACKGROUNDS",(0, 1), (-1, -1), [colors.white, colors.HexColor("#F0F9FF")]),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 5),
    ])


def build_report_pdf(
    profile: Any,
    courses: Sequence[CourseRecord],
    stats: GradeStats,
    font_path: Optional[str] = None,
) -> bytes:
    """
    Render the student report (details, summary, semesters, grade sheet) to PDF bytes.

    `profile` is anything with display_name / email / institution / major /
    total_credits_needed / target_average attributes (the User model).
    Long grade sheets flow onto extra pages on their own.
    """
    font, bold = register_report_fonts(font_path)

    buf = io.BytesIO()
    doc = SimpleDocTemplate(
        buf,
        pagesize=A4,
        leftMargin=15 * mm, rightMargin=15 * mm,
        topMargin=15 * mm, bottomMargin=15 * mm,
        title="Circademic Report",
    )
    styles = getSampleStyleSheet()
    for style_name in ("Title", "Heading2", "Normal"):
        styles[style_name].fontName = bold if style_name != "Normal" else font

    elems = []

    # Header
    elems.append(Paragraph("Circademic", styles["Title"]))
    elems.append(Paragraph(
        f"Academic report  |  {datetime.now().strftime('%d/%m/%Y')}",
        styles["Normal"],
    ))
    elems.append(Spacer(1, 6 * mm))

    # Student details
    elems.append(Paragraph("Student details", styles["Heading2"]))
    details = Table(
        _cells([
            ["Name", profile.display_name or "", "Email", profile.email or ""],
            ["Institution", profile.institution or "", "Major", profile.major or ""],
        ]),
        colWidths=[28 * mm, 60 * mm, 28 * mm, 60 * mm],
    )
    details.setStyle(TableStyle([
        ("FONTNAME", (0, 0), (-1, -1), font),
        ("FONTNAME", (0, 0), (0, -1), bold),
        ("FONTNAME", (2, 0), (2, -1), bold),
        ("FONTSIZE", (0, 0), (-1, -1), 9),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 4),
    ]))
    elems.append(details)
    elems.append(Spacer(1, 5 * mm))

    # Summary
    elems.append(Paragraph("Summary", styles["Heading2"]))
    target = profile.target_average if profile.target_average else "-"
    best = f"{stats.max_grade.name} ({stats.max_grade.grade:g})" if stats.max_grade else "-"
    summary = Table(
        _cells([
            ["Weighted average", "Target average", "Credits earned", "Degree completed", "Best course"],
            [
                f"{stats.average:.2f}",
                target,
                f"{stats.total_credits} / {profile.total_credits_needed}",
                f"{stats.completed_percentage}%",
                best,
            ],
        ]),
        colWidths=[34 * mm, 30 * mm, 32 * mm, 34 * mm, 46 * mm],
    )
    summary.setStyle(_table_style(font, bold))
    elems.append(summary)
    elems.append(Spacer(1, 5 * mm))

    # Per semester
    if stats.semester_averages:
        elems.append(Paragraph("Semesters", styles["Heading2"]))
        sem_rows = [["Semester", "Average", "Credits"]]
        for s in stats.semester_averages:
            sem_rows.append([s.semester, f"{s.average:.2f}", s.credits])
        sem_table = Table(_cells(sem_rows), colWidths=[40 * mm, 40 * mm, 40 * mm])
        sem_table.setStyle(_table_style(font, bold))
        elems.append(sem_table)
        elems.append(Spacer(1, 5 * mm))

    # Grade sheet
    elems.append(Paragraph("Grade sheet", styles["Heading2"]))
    rows = [["Course", "Credits", "Semester", "Category", "Sitting", "Grade"]]
    for c in courses:
        rows.append([
            c.name,
            c.credits,
            c.semester,
            c.category,
            EXAM_LABELS.get(c.exam_type, c.exam_type),
            format_grade(c),
        ])
    if len(rows) == 1:
        rows.append(["-", "", "", "", "", ""])
    sheet = Table(
        _cells(rows),
        colWidths=[62 * mm, 20 * mm, 22 * mm, 28 * mm, 20 * mm, 24 * mm],
        repeatRows=1,
    )
    sheet.setStyle(_table_style(font, bold))
    elems.append(sheet)

    doc.build(elems)
    return buf.getvalue()
