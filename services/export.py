from __future__ import annotations

from typing import Iterable

import pandas as pd

from services.grade_stats import CourseRecord

CSV_FILENAME = "my_courses.csv"

CSV_COLUMNS = ["שם הקורס", "נקודות זכות", "ציון", "סמסטר", "קטגוריה", "מועד"]

EXAM_LABELS = {"A": "א'", "B": "ב'"}


def format_grade(record: CourseRecord) -> str:
    if record.is_binary:
        return "עבר" if record.is_pass else "נכשל"
    grade = float(record.grade)
    return str(int(grade)) if grade.is_integer() else f"{grade:g}"


def courses_to_frame(courses: Iterable[CourseRecord]) -> pd.DataFrame:
    rows = [
        [
            c.name,
            c.credits,
            format_grade(c),
            c.semester,
            c.category,
            EXAM_LABELS.get(c.exam_type, c.exam_type),
        ]
        for c in courses
    ]
    return pd.DataFrame(rows, columns=CSV_COLUMNS)


def courses_to_csv(courses: Iterable[CourseRecord]) -> bytes:
    """
    Comma separated, UTF-8 with a byte-order mark so spreadsheet apps
    pick up the Hebrew headers correctly.
    """
    text = courses_to_frame(courses).to_csv(index=False, lineterminator="\n")
    return text.encode("utf-8-sig")
