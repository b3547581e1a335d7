import logging

from flask import Blueprint, render_template, request, redirect, url_for, flash, session
from flask_login import login_user, logout_user, login_required, current_user
from sqlalchemy.exc import SQLAlchemyError

from extensions import db, oauth
from models.user import User
from services.profiles import AccountLinkError, create_password_user, upsert_google_user
from services.what_if import WHAT_IF_SESSION_KEY

auth_bp = Blueprint("auth", __name__, url_prefix="/auth")
logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


@auth_bp.route("/register", methods=["GET", "POST"])
def register():
    if current_user.is_authenticated:
        return redirect(url_for("main.dashboard"))

    if request.method == "POST":
        email = (request.form.get("email") or "").strip().lower()
        password = request.form.get("password") or ""
        name = (request.form.get("name") or "").strip()
        institution = (request.form.get("institution") or "").strip()
        major = (request.form.get("major") or "").strip()

        if not all([email, password, name, institution, major]):
            flash("יש למלא את כל השדות.", "error")
            return render_template("register.html", form=request.form), 400

        if len(password) < MIN_PASSWORD_LENGTH:
            flash(f"הסיסמה חייבת להכיל לפחות {MIN_PASSWORD_LENGTH} תווים.", "error")
            return render_template("register.html", form=request.form), 400

        # check if user already exists
        existing = User.query.filter_by(email=email).first()
        if existing:
            flash("כתובת האימייל כבר רשומה במערכת.", "error")
            return redirect(url_for("auth.register"))

        try:
            user = create_password_user(
                email=email,
                password=password,
                display_name=name,
                institution=institution,
                major=major,
            )
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.error(f"Registration failed for {email}: {e}")
            flash("ההרשמה נכשלה. נסה שנית.", "error")
            return render_template("register.html", form=request.form), 500

        login_user(user)
        return redirect(url_for("main.dashboard"))

    return render_template("register.html", form={})


@auth_bp.route("/login", methods=["GET", "POST"])
def login():
    if current_user.is_authenticated:
        return redirect(url_for("main.dashboard"))

    if request.method == "POST":
        email = (request.form.get("email") or "").strip().lower()
        password = request.form.get("password") or ""

        user = User.query.filter_by(email=email).first()

        if user and user.check_password(password):
            login_user(user)
            return redirect(url_for("main.dashboard"))

        flash("אימייל או סיסמה שגויים.", "error")
        return render_template("login.html", email=email), 401

    return render_template("login.html", email="")


@auth_bp.route("/login/google")
def login_google():
    redirect_uri = url_for("auth.authorize_google", _external=True)
    return oauth.google.authorize_redirect(redirect_uri)


@auth_bp.route("/login/google/callback")
def authorize_google():
    try:
        token = oauth.google.authorize_access_token()
        user_info = token.get("userinfo") or oauth.google.userinfo()
    except Exception as e:
        logger.error(f"Google Auth Error: {e}")
        flash("שגיאה בהתחברות עם גוגל", "error")
        return redirect(url_for("auth.login"))

    if not user_info or not user_info.get("sub"):
        flash("שגיאה בהתחברות עם גוגל", "error")
        return redirect(url_for("auth.login"))

    try:
        user = upsert_google_user(user_info)
    except AccountLinkError as e:
        logger.warning(f"Refused Google account link: {e}")
        flash("קיים חשבון עם כתובת המייל הזו. התחבר עם סיסמה.", "error")
        return redirect(url_for("auth.login"))
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error(f"Error creating profile for Google user: {e}")
        flash("שגיאה ביצירת הפרופיל. נסה שנית.", "error")
        return redirect(url_for("auth.login"))

    login_user(user)
    return redirect(url_for("main.dashboard"))


@auth_bp.route("/logout")
@login_required
def logout():
    logout_user()
    session.pop(WHAT_IF_SESSION_KEY, None)
    flash("התנתקת מהמערכת.", "success")
    return redirect(url_for("main.home"))
