from __future__ import annotations

from services.what_if import SIMULATED_SEMESTER, SIMULATED_CATEGORY

# Semesters offered by the course form
SEMESTER_CHOICES = list(range(1, 9))


def format_semester_label(semester_num: int, semesters_per_year: int | None = None) -> str:
    # Converting a global semester index (1...n) into UI friendly label
    # If semesters_per_year is given, labels become
    # 3 -> שנה 2 - סמסטר 1
    if semester_num == SIMULATED_SEMESTER:
        return SIMULATED_CATEGORY
    if not semesters_per_year or semesters_per_year < 1:
        return f"סמסטר {semester_num}"

    year = (semester_num - 1) // semesters_per_year + 1
    term = (semester_num - 1) % semesters_per_year + 1
    return f"שנה {year} - סמסטר {term}"
