from __future__ import annotations

import math
from dataclasses import dataclass

from services.grade_stats import PASSING_GRADE


def calculate_shield(shield_grade: float, shield_weight: float, exam_grade: float) -> float:
    """Final grade when the shield (magen) grade counts for shield_weight percent."""
    fraction = shield_weight / 100
    return shield_grade * fraction + exam_grade * (1 - fraction)


def calculate_required_exam(
    shield_grade: float,
    shield_weight: float,
    target: float = PASSING_GRADE,
) -> float:
    """
    Exam grade needed so that calculate_shield(...) == target.

    target = shield * w + exam * (1 - w)  =>  exam = (target - shield * w) / (1 - w)
    A 100% shield weight leaves the exam with no say: returns 0.
    """
    fraction = shield_weight / 100
    exam_fraction = 1 - fraction
    if exam_fraction == 0:
        return 0.0
    return (target - shield_grade * fraction) / exam_fraction


def required_exam_display(shield_grade: float, shield_weight: float, target: float = PASSING_GRADE) -> int:
    # whole exam points, never negative
    return max(0, math.ceil(calculate_required_exam(shield_grade, shield_weight, target)))


@dataclass(frozen=True)
class ShieldResult:
    shield_grade: float
    shield_weight: float
    exam_grade: float
    final_grade: float
    required_exam: int

    def to_dict(self) -> dict:
        return {
            "shield_grade": self.shield_grade,
            "shield_weight": self.shield_weight,
            "exam_grade": self.exam_grade,
            "final_grade": self.final_grade,
            "required_exam": self.required_exam,
        }


def evaluate_shield(shield_grade: float, shield_weight: float, exam_grade: float) -> ShieldResult:
    return ShieldResult(
        shield_grade=shield_grade,
        shield_weight=shield_weight,
        exam_grade=exam_grade,
        final_grade=calculate_shield(shield_grade, shield_weight, exam_grade),
        required_exam=required_exam_display(shield_grade, shield_weight),
    )
