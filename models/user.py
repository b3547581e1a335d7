import logging
from datetime import datetime

from flask_login import UserMixin
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.security import generate_password_hash, check_password_hash

from extensions import db, login_manager

logger = logging.getLogger(__name__)

UNSET_PROFILE_FIELD = "לא מוגדר"


class User(UserMixin, db.Model):
    __tablename__ = "user"

    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(150), unique=True, nullable=False)

    # null for accounts created through Google sign-in
    password_hash = db.Column(db.String(255), nullable=True)
    google_id = db.Column(db.String(255), unique=True, nullable=True)

    # profile
    display_name = db.Column(db.String(150), nullable=False, default="Student")
    institution = db.Column(db.String(150), nullable=False, default="")
    major = db.Column(db.String(150), nullable=False, default="")
    total_credits_needed = db.Column(db.Integer, nullable=False, default=120)
    target_average = db.Column(db.Float, nullable=True)
    photo_url = db.Column(db.String(1024), nullable=True)

    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    # relationship (explicit instead of backref)
    courses = db.relationship(
        "Course",
        back_populates="user",
        cascade="all, delete-orphan",
        lazy=True,
    )

    def set_password(self, password: str) -> None:
        # use PBKDF2 instead of the default scrypt
        self.password_hash = generate_password_hash(
            password,
            method="pbkdf2:sha256",
            salt_length=16,
        )

    def check_password(self, password: str) -> bool:
        if not self.password_hash:
            return False
        return check_password_hash(self.password_hash, password)

    def __repr__(self) -> str:
        return f"<User {self.email}>"


@login_manager.user_loader
def load_user(user_id: str):
    # A failed profile read signs the visitor out instead of erroring the page
    try:
        return db.session.get(User, int(user_id))
    except (SQLAlchemyError, ValueError) as e:
        logger.error(f"Error loading user profile {user_id}: {e}")
        return None
