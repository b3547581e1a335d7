from flask import render_template, redirect, url_for, request, flash, session
from flask_login import login_required, current_user

from . import main_bp
from services.courses import stats_for_user
from services.shield import evaluate_shield
from services.what_if import (
    DEFAULT_CREDITS,
    WHAT_IF_SESSION_KEY,
    WhatIfEntry,
    entries_to_session,
    parse_entries,
    simulate,
)
from utils.forms import parse_number, safe_float

# calculator defaults
DEFAULT_SHIELD_GRADE = 85
DEFAULT_SHIELD_WEIGHT = 30
DEFAULT_EXAM_GRADE = 0


def current_what_if_entries():
    return parse_entries(session.get(WHAT_IF_SESSION_KEY))


def read_shield_args(args):
    return evaluate_shield(
        parse_number(args.get("shield"), DEFAULT_SHIELD_GRADE),
        parse_number(args.get("weight"), DEFAULT_SHIELD_WEIGHT),
        parse_number(args.get("exam"), DEFAULT_EXAM_GRADE),
    )


@main_bp.route("/tools")
@login_required
def tools():
    records, stats = stats_for_user(current_user)
    entries = current_what_if_entries()
    what_if_stats = simulate(records, entries, current_user.total_credits_needed)

    return render_template(
        "tools.html",
        stats=stats,
        entries=entries,
        what_if_stats=what_if_stats,
        shield=read_shield_args(request.args),
        active_tab="tools",
    )


@main_bp.route("/tools/what-if", methods=["POST"])
@login_required
def add_what_if():
    grade_raw = (request.form.get("grade") or "").strip()
    credits_raw = (request.form.get("credits") or "").strip()

    grade = safe_float(grade_raw)
    if grade is None:
        flash("יש להזין ציון צפוי.", "error")
        return redirect(url_for("main.tools"))
    if grade < 0 or grade > 100:
        flash("הציון חייב להיות בין 0 ל-100.", "error")
        return redirect(url_for("main.tools"))

    try:
        credits = int(credits_raw) if credits_raw else DEFAULT_CREDITS
    except ValueError:
        credits = DEFAULT_CREDITS
    if credits <= 0:
        credits = DEFAULT_CREDITS

    entries = current_what_if_entries()
    entries.append(WhatIfEntry(grade=grade, credits=credits))
    session[WHAT_IF_SESSION_KEY] = entries_to_session(entries)
    return redirect(url_for("main.tools"))


@main_bp.route("/tools/what-if/<int:index>/delete", methods=["POST"])
@login_required
def remove_what_if(index: int):
    entries = current_what_if_entries()
    if 0 <= index < len(entries):
        entries.pop(index)
        session[WHAT_IF_SESSION_KEY] = entries_to_session(entries)
    return redirect(url_for("main.tools"))


@main_bp.route("/tools/what-if/clear", methods=["POST"])
@login_required
def clear_what_if():
    session.pop(WHAT_IF_SESSION_KEY, None)
    return redirect(url_for("main.tools"))
