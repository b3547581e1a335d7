import logging

from flask import render_template, redirect, url_for, request, abort, flash, Response
from flask_login import login_required, current_user
from sqlalchemy.exc import SQLAlchemyError

from . import main_bp
from extensions import db
from models.course import Course, CATEGORIES, EXAM_TYPES
from services.courses import load_user_courses, filter_courses, to_records
from services.export import CSV_FILENAME, courses_to_csv
from utils.forms import COURSE_DEFAULTS, parse_course_form
from utils.semesters import SEMESTER_CHOICES

logger = logging.getLogger(__name__)


def _get_own_course(course_id: int) -> Course:
    # Ensure course belongs to current user
    course = Course.query.filter_by(
        id=course_id,
        user_id=current_user.id,
    ).first()
    if course is None:
        abort(404)
    return course


def _render_form(values, course=None, status=200):
    return render_template(
        "course_form.html",
        values=values,
        course=course,
        categories=CATEGORIES,
        exam_types=EXAM_TYPES,
        semesters=SEMESTER_CHOICES,
        active_tab="courses",
    ), status


@main_bp.route("/courses")
@login_required
def list_courses():
    search = (request.args.get("q") or "").strip()
    courses = filter_courses(load_user_courses(current_user.id), search)
    return render_template(
        "courses.html",
        courses=courses,
        search=search,
        active_tab="courses",
    )


@main_bp.route("/courses/new", methods=["GET", "POST"])
@login_required
def add_course():
    if request.method == "GET":
        return _render_form(dict(COURSE_DEFAULTS))

    values, errors = parse_course_form(request.form)
    if errors:
        for e in errors:
            flash(e, "error")
        return _render_form(values, status=400)

    user_id = current_user.id
    course = Course(user_id=user_id, **values)
    try:
        db.session.add(course)
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error(f"Error adding course for user {user_id}: {e}")
        flash("שמירת הקורס נכשלה. נסה שנית.", "error")
        return _render_form(values, status=500)

    flash("הקורס נוסף.", "success")
    return redirect(url_for("main.list_courses"))


@main_bp.route("/courses/<int:course_id>/edit", methods=["GET", "POST"])
@login_required
def edit_course(course_id: int):
    course = _get_own_course(course_id)

    if request.method == "GET":
        values = {key: getattr(course, key) for key in COURSE_DEFAULTS}
        return _render_form(values, course=course)

    values, errors = parse_course_form(request.form)
    if errors:
        for e in errors:
            flash(e, "error")
        return _render_form(values, course=course, status=400)

    for key, val in values.items():
        setattr(course, key, val)
    try:
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error(f"Error updating course {course_id}: {e}")
        flash("עדכון הקורס נכשל. נסה שנית.", "error")
        return _render_form(values, course=course, status=500)

    flash("הקורס עודכן.", "success")
    return redirect(url_for("main.list_courses"))


@main_bp.route("/courses/<int:course_id>/delete", methods=["POST"])
@login_required
def delete_course(course_id: int):
    course = _get_own_course(course_id)
    try:
        db.session.delete(course)
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error(f"Error deleting course {course_id}: {e}")
        flash("מחיקת הקורס נכשלה.", "error")
        return redirect(url_for("main.list_courses"))

    flash("הקורס נמחק.", "success")
    return redirect(url_for("main.list_courses"))


@main_bp.route("/courses/export.csv")
@login_required
def export_courses_csv():
    payload = courses_to_csv(to_records(load_user_courses(current_user.id)))
    return Response(
        payload,
        mimetype="text/csv; charset=utf-8",
        headers={"Content-Disposition": f"attachment; filename={CSV_FILENAME}"},
    )
