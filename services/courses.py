from __future__ import annotations

import logging
from typing import List

from sqlalchemy.exc import SQLAlchemyError

from extensions import db
from models.course import Course
from services.grade_stats import CourseRecord, GradeStats, calculate_stats

logger = logging.getLogger(__name__)


def load_user_courses(user_id: int) -> List[Course]:
    """All courses owned by user_id, oldest first. A failed read yields an empty list."""
    try:
        return (
            Course.query
            .filter_by(user_id=user_id)
            .order_by(Course.semester.asc(), Course.id.asc())
            .all()
        )
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error(f"Error fetching courses for user {user_id}: {e}")
        return []


def filter_courses(courses: List[Course], search: str) -> List[Course]:
    term = (search or "").strip().lower()
    if not term:
        return list(courses)
    return [c for c in courses if term in c.name.lower()]


def to_records(courses: List[Course]) -> List[CourseRecord]:
    return [c.to_record() for c in courses]


def stats_for_user(user) -> tuple[List[CourseRecord], GradeStats]:
    records = to_records(load_user_courses(user.id))
    return records, calculate_stats(records, user.total_credits_needed)
