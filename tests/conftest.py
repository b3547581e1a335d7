import pytest

from app import create_app
from config import TestConfig
from extensions import db
from models.course import Course
from models.user import User
from services.report import ReportFontError, find_report_font

PASSWORD = "secret123"


@pytest.fixture
def app():
    app = create_app(TestConfig)
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


def make_user(app, email="student@example.com", **profile):
    with app.app_context():
        user = User(
            email=email,
            display_name=profile.pop("display_name", "Dana Levi"),
            institution=profile.pop("institution", "Technion"),
            major=profile.pop("major", "Computer Science"),
            total_credits_needed=profile.pop("total_credits_needed", 120),
            **profile,
        )
        user.set_password(PASSWORD)
        db.session.add(user)
        db.session.commit()
        return user.id


def add_course(app, user_id, **fields):
    values = {
        "name": "Algorithms",
        "credits": 3,
        "grade": 80,
        "semester": 1,
        "category": "חובה",
        "exam_type": "A",
        "is_binary": False,
        "is_pass": False,
    }
    values.update(fields)
    with app.app_context():
        course = Course(user_id=user_id, **values)
        db.session.add(course)
        db.session.commit()
        return course.id


def login(client, email="student@example.com", password=PASSWORD):
    return client.post("/auth/login", data={"email": email, "password": password})


@pytest.fixture
def user_id(app):
    return make_user(app)


@pytest.fixture
def auth_client(client, user_id):
    response = login(client)
    assert response.status_code == 302
    return client


@pytest.fixture
def report_font():
    try:
        return find_report_font()
    except ReportFontError:
        pytest.skip("no Hebrew-capable TTF installed")
