from models.user import User  # noqa: F401
from models.course import Course  # noqa: F401
