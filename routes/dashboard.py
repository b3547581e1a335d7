import logging

from flask import render_template, redirect, url_for, request, flash
from flask_login import current_user, login_required
from sqlalchemy.exc import SQLAlchemyError

from . import main_bp
from extensions import db
from services.blog import list_posts
from services.courses import stats_for_user
from utils.forms import parse_profile_form

logger = logging.getLogger(__name__)


@main_bp.route("/")
def home():
    # uses templates/home.html
    return render_template("home.html")


@main_bp.route("/start")
def get_started():
    if current_user.is_authenticated:
        return redirect(url_for("main.dashboard"))
    return redirect(url_for("auth.login"))


@main_bp.route("/dashboard")
@login_required
def dashboard():
    # overview tab: stat cards + semester trend + category breakdown
    records, stats = stats_for_user(current_user)
    return render_template(
        "dashboard.html",
        stats=stats,
        course_count=len(records),
        active_tab="overview",
    )


@main_bp.route("/profile", methods=["GET", "POST"])
@login_required
def profile():
    if request.method == "POST":
        values, errors = parse_profile_form(request.form)
        if errors:
            for e in errors:
                flash(e, "error")
            return render_template("profile.html", values=values), 400

        user_id = current_user.id
        for key, val in values.items():
            setattr(current_user, key, val)
        try:
            db.session.commit()
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.error(f"Error updating profile for user {user_id}: {e}")
            flash("שמירת הפרופיל נכשלה. נסה שנית.", "error")
            return redirect(url_for("main.profile"))

        flash("הפרופיל עודכן.", "success")
        return redirect(url_for("main.dashboard"))

    values = {
        "display_name": current_user.display_name,
        "institution": current_user.institution,
        "major": current_user.major,
        "total_credits_needed": current_user.total_credits_needed,
        "target_average": current_user.target_average,
    }
    return render_template("profile.html", values=values)


@main_bp.route("/blog")
def blog():
    return render_template("blog.html", posts=list_posts())
