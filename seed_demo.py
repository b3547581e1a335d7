from app import create_app
from extensions import db
from models.course import Course
from models.user import User

DEMO_EMAIL = "demo@circademic.local"
DEMO_PASSWORD = "demo1234"

# (name, credits, grade, semester, category, exam_type, is_binary, is_pass)
DEMO_COURSES = [
    ("מבוא למדעי המחשב", 5, 88, 1, "חובה", "A", False, False),
    ("חדו\"א 1", 5, 74, 1, "חובה", "B", False, False),
    ("אלגברה לינארית", 4, 81, 1, "חובה", "A", False, False),
    ("חינוך גופני", 1, 0, 1, "ספורט", "A", True, True),
    ("מבני נתונים", 4, 92, 2, "חובה", "A", False, False),
    ("הסתברות", 4, 67, 2, "חובה", "A", False, False),
    ("מבוא לפסיכולוגיה", 2, 95, 2, "כללי", "A", False, False),
    ("אלגוריתמים", 4, 79, 3, "חובה", "A", False, False),
    ("למידת מכונה", 3, 90, 3, "בחירה", "A", False, False),
]


def main():
    app = create_app()
    with app.app_context():
        user = User.query.filter_by(email=DEMO_EMAIL).first()
        if user is None:
            user = User(
                email=DEMO_EMAIL,
                display_name="Demo Student",
                institution="האוניברסיטה הפתוחה",
                major="מדעי המחשב",
                total_credits_needed=120,
                target_average=85,
            )
            user.set_password(DEMO_PASSWORD)
            db.session.add(user)
            db.session.flush()  # ensures user.id is available without committing yet

        print(f"Using User id={user.id}, email={user.email!r}")

        Course.query.filter_by(user_id=user.id).delete()

        for name, credits, grade, semester, category, exam_type, is_binary, is_pass in DEMO_COURSES:
            db.session.add(
                Course(
                    user_id=user.id,
                    name=name,
                    credits=credits,
                    grade=grade,
                    semester=semester,
                    category=category,
                    exam_type=exam_type,
                    is_binary=is_binary,
                    is_pass=is_pass,
                )
            )

        db.session.commit()
        print(f"Seeded {len(DEMO_COURSES)} courses. Log in with {DEMO_EMAIL} / {DEMO_PASSWORD}")


if __name__ == "__main__":
    main()
