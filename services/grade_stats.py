from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Iterable, Optional, Tuple

# A numeric course at or above this grade is credited towards the degree
PASSING_GRADE = 55


# -----------------------------
# Input / output containers
# -----------------------------
# no Flask / SQLAlchemy imports in this module

@dataclass(frozen=True)
class CourseRecord:
    name: str
    credits: int
    grade: float
    semester: int
    category: str
    is_binary: bool = False
    is_pass: bool = False
    exam_type: str = "A"

    @property
    def is_earned(self) -> bool:
        if self.is_binary:
            return bool(self.is_pass)
        return self.grade >= PASSING_GRADE


@dataclass(frozen=True)
class SemesterAverage:
    semester: int
    average: float
    credits: int


@dataclass(frozen=True)
class CategoryAverage:
    category: str
    average: float
    credits: int


@dataclass(frozen=True)
class GradeExtreme:
    name: str
    grade: float


@dataclass(frozen=True)
class GradeStats:
    average: float
    total_credits: int
    completed_percentage: float
    semester_averages: Tuple[SemesterAverage, ...] = ()
    category_averages: Tuple[CategoryAverage, ...] = ()
    max_grade: Optional[GradeExtreme] = None
    min_grade: Optional[GradeExtreme] = None

    @property
    def current_semester(self) -> int:
        # last semester that has graded courses; 1 before anything is entered
        if not self.semester_averages:
            return 1
        return self.semester_averages[-1].semester

    def to_dict(self) -> dict:
        return {
            "average": self.average,
            "total_credits": self.total_credits,
            "completed_percentage": self.completed_percentage,
            "semester_averages": [
                {"semester": s.semester, "average": s.average, "credits": s.credits}
                for s in self.semester_averages
            ],
            "category_averages": [
                {"category": c.category, "average": c.average, "credits": c.credits}
                for c in self.category_averages
            ],
            "max_grade": _extreme_dict(self.max_grade),
            "min_grade": _extreme_dict(self.min_grade),
        }


# -----------------------------
# Helpers
# -----------------------------

def _extreme_dict(extreme: Optional[GradeExtreme]) -> Optional[dict]:
    if extreme is None:
        return None
    return {"name": extreme.name, "grade": extreme.grade}


def round_half_up(value: float, places: int) -> float:
    """Round like a calculator does (0.125 -> 0.13), not banker's rounding."""
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))


def _weighted(score: float, credits: int) -> float:
    return score / credits if credits > 0 else 0.0


# -----------------------------
# Aggregation
# -----------------------------

def calculate_stats(courses: Iterable[CourseRecord], total_credits_needed: int) -> GradeStats:
    """
    Aggregate course records into the dashboard statistics.

    Rules:
    - binary (pass/fail) courses never enter any average
    - a course is "earned" when grade >= PASSING_GRADE, or when binary and passed
    - best / worst course: first encountered wins on ties
    - empty (or all-binary) input -> average 0

    Per-semester and per-category averages are returned unrounded; only the
    overall average and the completion percentage are rounded.
    """
    total_weighted = 0.0
    total_credits_for_avg = 0
    total_credits_earned = 0

    # running [weighted score, credits] per key (dicts keep first-seen order)
    by_semester: Dict[int, list] = {}
    by_category: Dict[str, list] = {}

    best: Optional[CourseRecord] = None
    worst: Optional[CourseRecord] = None

    for course in courses:
        if course.is_earned:
            total_credits_earned += course.credits

        if course.is_binary:
            continue

        weighted = course.grade * course.credits
        total_weighted += weighted
        total_credits_for_avg += course.credits

        sem = by_semester.setdefault(course.semester, [0.0, 0])
        sem[0] += weighted
        sem[1] += course.credits

        cat = by_category.setdefault(course.category, [0.0, 0])
        cat[0] += weighted
        cat[1] += course.credits

        if best is None or course.grade > best.grade:
            best = course
        if worst is None or course.grade < worst.grade:
            worst = course

    average = _weighted(total_weighted, total_credits_for_avg)

    if total_credits_needed and total_credits_needed > 0:
        completed = total_credits_earned / total_credits_needed * 100
    else:
        completed = 0.0
    completed = min(max(completed, 0.0), 100.0)

    semester_averages = tuple(
        SemesterAverage(semester=s, average=_weighted(score, credits), credits=credits)
        for s, (score, credits) in sorted(by_semester.items())
    )
    category_averages = tuple(
        CategoryAverage(category=c, average=_weighted(score, credits), credits=credits)
        for c, (score, credits) in by_category.items()
    )

    return GradeStats(
        average=round_half_up(average, 2),
        total_credits=total_credits_earned,
        completed_percentage=round_half_up(completed, 1),
        semester_averages=semester_averages,
        category_averages=category_averages,
        max_grade=GradeExtreme(best.name, best.grade) if best else None,
        min_grade=GradeExtreme(worst.name, worst.grade) if worst else None,
    )
