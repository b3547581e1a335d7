# utils/forms.py

from __future__ import annotations

import math
from typing import Any, Dict, List, Mapping, Optional, Tuple

from models.course import CATEGORIES, EXAM_TYPES

COURSE_DEFAULTS: Dict[str, Any] = {
    "name": "",
    "credits": 3,
    "grade": 80,
    "semester": 1,
    "category": CATEGORIES[0],
    "exam_type": "A",
    "is_binary": False,
    "is_pass": False,
}


def safe_float(val) -> Optional[float]:
    """Finite float or None ("nan" / "inf" count as junk)."""
    try:
        if val is None or str(val).strip() == "":
            return None
        f = float(val)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(f):
        return None
    return f


def _safe_int(val) -> Optional[int]:
    f = safe_float(val)
    if f is None or not f.is_integer():
        return None
    return int(f)


def _checkbox(form: Mapping[str, Any], key: str) -> bool:
    return (form.get(key) or "").strip().lower() in ("1", "on", "true", "yes")


def parse_course_form(form: Mapping[str, Any]) -> Tuple[Dict[str, Any], List[str]]:
    """
    Validate a submitted course form.
    Returns (values, errors). Empty errors => values are safe to save.

    Values always hold something displayable so the form can be re-rendered
    with what the user typed.
    """
    errors: List[str] = []

    name = (form.get("name") or "").strip()
    credits_raw = (form.get("credits") or "").strip()
    grade_raw = (form.get("grade") or "").strip()
    semester_raw = (form.get("semester") or "").strip()
    category = (form.get("category") or "").strip() or CATEGORIES[0]
    exam_type = (form.get("exam_type") or "").strip() or "A"
    is_binary = _checkbox(form, "is_binary")
    is_pass = _checkbox(form, "is_pass") if is_binary else False

    if not name:
        errors.append("שם הקורס הוא שדה חובה.")

    credits = _safe_int(credits_raw)
    if credits is None:
        errors.append("נקודות הזכות חייבות להיות מספר שלם.")
    elif credits <= 0:
        errors.append("נקודות הזכות חייבות להיות חיוביות.")

    grade = safe_float(grade_raw)
    if grade is None:
        # pass/fail courses may leave the grade empty
        if is_binary:
            grade = 0.0
        else:
            errors.append("הציון חייב להיות מספר.")
    elif grade < 0 or grade > 100:
        errors.append("הציון חייב להיות בין 0 ל-100.")

    semester = _safe_int(semester_raw)
    if semester is None or semester < 1:
        errors.append("הסמסטר חייב להיות מספר שלם חיובי.")

    if category not in CATEGORIES:
        errors.append("קטגוריה לא חוקית.")

    if exam_type not in EXAM_TYPES:
        errors.append("מועד לא חוקי.")

    values = {
        "name": name,
        "credits": credits if credits is not None else credits_raw,
        "grade": grade if grade is not None else grade_raw,
        "semester": semester if semester is not None else semester_raw,
        "category": category,
        "exam_type": exam_type,
        "is_binary": is_binary,
        "is_pass": is_pass,
    }
    return values, errors


def parse_profile_form(form: Mapping[str, Any]) -> Tuple[Dict[str, Any], List[str]]:
    errors: List[str] = []

    display_name = (form.get("display_name") or "").strip()
    institution = (form.get("institution") or "").strip()
    major = (form.get("major") or "").strip()
    credits_raw = (form.get("total_credits_needed") or "").strip()
    target_raw = (form.get("target_average") or "").strip()

    if not display_name:
        errors.append("שם מלא הוא שדה חובה.")

    total_credits_needed = _safe_int(credits_raw)
    if total_credits_needed is None or total_credits_needed <= 0:
        errors.append("סך נקודות הזכות לתואר חייב להיות מספר שלם חיובי.")

    target_average = None
    if target_raw:
        target_average = safe_float(target_raw)
        if target_average is None or target_average < 0 or target_average > 100:
            errors.append("ממוצע היעד חייב להיות בין 0 ל-100.")

    values = {
        "display_name": display_name,
        "institution": institution,
        "major": major,
        "total_credits_needed": total_credits_needed,
        "target_average": target_average,
    }
    return values, errors


def parse_number(raw: Any, default: float, low: float = 0, high: float = 100) -> float:
    """Lenient numeric field for the calculators: out-of-range is clamped, junk -> default."""
    val = safe_float(raw)
    if val is None:
        return default
    return min(max(val, low), high)
