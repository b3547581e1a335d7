import io
from types import SimpleNamespace

import pytest
from pypdf import PdfReader

from services.grade_stats import CourseRecord, calculate_stats
from services.report import ReportFontError, build_report_pdf, find_report_font, report_filename, rtl


def profile(**kw):
    values = dict(
        display_name="Dana Levi",
        email="dana@example.com",
        institution="Technion",
        major="Computer Science",
        total_credits_needed=120,
        target_average=85,
    )
    values.update(kw)
    return SimpleNamespace(**values)


def records(n):
    return [
        CourseRecord(name=f"Course {i}", credits=3, grade=60 + i % 40, semester=1 + i % 8, category="חובה")
        for i in range(n)
    ]


def pdf_text(pdf):
    return "".join(page.extract_text() for page in PdfReader(io.BytesIO(pdf)).pages)


def test_report_is_a_pdf(report_font):
    courses = records(5)
    pdf = build_report_pdf(profile(), courses, calculate_stats(courses, 120), font_path=report_font)
    assert pdf.startswith(b"%PDF")


def test_report_without_courses(report_font):
    pdf = build_report_pdf(profile(target_average=None), [], calculate_stats([], 120), font_path=report_font)
    assert pdf.startswith(b"%PDF")


def test_long_grade_sheet_spans_pages(report_font):
    courses = records(120)
    pdf = build_report_pdf(profile(), courses, calculate_stats(courses, 120), font_path=report_font)
    # page objects plus the single page tree node
    assert pdf.count(b"/Type /Page") > 2


def test_hebrew_labels_are_drawn(report_font):
    courses = [
        CourseRecord(name="Data Structures", credits=4, grade=92, semester=2, category="בחירה", exam_type="B"),
        CourseRecord(name="Gym", credits=1, grade=0, semester=1, category="ספורט", is_binary=True, is_pass=True),
    ]
    pdf = build_report_pdf(
        profile(institution="הטכניון"), courses, calculate_stats(courses, 120), font_path=report_font
    )

    # embedded TrueType, not the standard fonts
    assert b"/FontFile2" in pdf
    text = pdf_text(pdf)
    for label in ("בחירה", "ספורט", "עבר", "הטכניון"):
        assert label in text or rtl(label) in text
    assert "Data Structures" in text


def test_hebrew_is_laid_out_right_to_left():
    assert rtl("חובה") == "הבוח"
    assert rtl("Course 1") == "Course 1"
    assert rtl(92) == "92"


def test_missing_configured_font_fails_loudly():
    courses = records(2)
    with pytest.raises(ReportFontError):
        build_report_pdf(profile(), courses, calculate_stats(courses, 120), font_path="/nonexistent/font.ttf")


def test_no_system_font_fails_loudly(monkeypatch):
    monkeypatch.setattr("services.report.FONT_CANDIDATES", ("/nonexistent/a.ttf",))
    with pytest.raises(ReportFontError):
        find_report_font()


def test_report_filename():
    assert report_filename("Dana Levi") == "Circademic_Report_Dana_Levi.pdf"
    assert report_filename(None) == "Circademic_Report_Student.pdf"
    assert report_filename("   ") == "Circademic_Report_Student.pdf"
