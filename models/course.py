from extensions import db
from services.grade_stats import CourseRecord

# Fixed category labels offered by the course form
CATEGORIES = ("חובה", "בחירה", "כללי", "ספורט")

# First / second examination sitting (Moed A / Moed B)
EXAM_TYPES = ("A", "B")


class Course(db.Model):
    __tablename__ = "course"

    id = db.Column(db.Integer, primary_key=True)

    user_id = db.Column(
        db.Integer,
        db.ForeignKey("user.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    name = db.Column(db.String(255), nullable=False)
    credits = db.Column(db.Integer, nullable=False)
    grade = db.Column(db.Float, nullable=False, default=0)
    semester = db.Column(db.Integer, nullable=False, default=1)
    category = db.Column(db.String(32), nullable=False, default=CATEGORIES[0])
    exam_type = db.Column(db.String(1), nullable=False, default="A")

    # pass/fail course: no numeric grade in the average
    is_binary = db.Column(db.Boolean, nullable=False, default=False)
    is_pass = db.Column(db.Boolean, nullable=True)

    user = db.relationship("User", back_populates="courses", lazy=True)

    def to_record(self) -> CourseRecord:
        return CourseRecord(
            name=self.name,
            credits=self.credits,
            grade=self.grade,
            semester=self.semester,
            category=self.category,
            is_binary=bool(self.is_binary),
            is_pass=bool(self.is_pass),
            exam_type=self.exam_type,
        )

    def __repr__(self) -> str:
        return f"<Course {self.name}>"
