from __future__ import annotations

from typing import Any, Mapping, Optional

from flask import current_app

from extensions import db
from models.user import User, UNSET_PROFILE_FIELD


def create_password_user(
    *,
    email: str,
    password: str,
    display_name: str,
    institution: str,
    major: str,
) -> User:
    user = User(
        email=email,
        display_name=display_name,
        institution=institution,
        major=major,
        total_credits_needed=current_app.config["DEFAULT_CREDITS_NEEDED"],
    )
    user.set_password(password)
    db.session.add(user)
    db.session.commit()
    return user


class AccountLinkError(Exception):
    """A Google identity matched an existing account by an unverified email."""


def _email_verified(user_info: Mapping[str, Any]) -> bool:
    # ID tokens carry a bool, some userinfo responses the string "true"
    return user_info.get("email_verified") in (True, "true")


def upsert_google_user(user_info: Mapping[str, Any]) -> User:
    """
    First Google login creates a minimal profile; later logins refresh name/photo.
    An existing account with the same email is linked only when Google has
    verified that email, otherwise AccountLinkError is raised.
    """
    google_id = user_info["sub"]
    email = user_info.get("email") or ""
    name: Optional[str] = user_info.get("name")

    user = User.query.filter_by(google_id=google_id).first()
    if user is None and email:
        user = User.query.filter_by(email=email).first()
        if user is not None:
            if not _email_verified(user_info):
                raise AccountLinkError(f"Unverified Google email {email} matches user {user.id}")
            user.google_id = google_id

    if user is None:
        user = User(
            google_id=google_id,
            email=email,
            display_name=name or "Student",
            institution=UNSET_PROFILE_FIELD,
            major=UNSET_PROFILE_FIELD,
            total_credits_needed=current_app.config["DEFAULT_CREDITS_NEEDED"],
            photo_url=user_info.get("picture"),
        )
        db.session.add(user)
    else:
        if name:
            user.display_name = name
        user.photo_url = user_info.get("picture") or user.photo_url

    db.session.commit()
    return user
