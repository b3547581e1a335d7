from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, List, Sequence

from services.grade_stats import CourseRecord, GradeStats, calculate_stats

# Markers for simulated rows, so they never collide with a real semester/category
SIMULATED_SEMESTER = 99
SIMULATED_CATEGORY = "סימולציה"
DEFAULT_CREDITS = 3

# Flask session key holding the hypothetical rows
WHAT_IF_SESSION_KEY = "what_if"


@dataclass(frozen=True)
class WhatIfEntry:
    grade: float
    credits: int = DEFAULT_CREDITS
    name: str = "Simulated"

    def to_record(self) -> CourseRecord:
        return CourseRecord(
            name=self.name,
            credits=self.credits,
            grade=self.grade,
            semester=SIMULATED_SEMESTER,
            category=SIMULATED_CATEGORY,
            is_binary=False,
        )


def simulate(
    courses: Sequence[CourseRecord],
    entries: Iterable[WhatIfEntry],
    total_credits_needed: int,
) -> GradeStats:
    """Stats for the real courses plus hypothetical ones. Inputs are left untouched."""
    combined = list(courses) + [e.to_record() for e in entries]
    return calculate_stats(combined, total_credits_needed)


# -----------------------------
# Session (de)serialisation
# -----------------------------
# note: what-if rows live in the Flask session only, never in the DB

def parse_entries(raw: Any) -> List[WhatIfEntry]:
    entries: List[WhatIfEntry] = []
    for item in raw or []:
        if not isinstance(item, dict):
            continue
        try:
            grade = float(item["grade"])
            credits = int(item.get("credits") or DEFAULT_CREDITS)
        except (KeyError, TypeError, ValueError):
            continue
        entries.append(WhatIfEntry(grade=grade, credits=credits, name=str(item.get("name") or "Simulated")))
    return entries


def entries_to_session(entries: Iterable[WhatIfEntry]) -> List[dict]:
    return [{"grade": e.grade, "credits": e.credits, "name": e.name} for e in entries]
