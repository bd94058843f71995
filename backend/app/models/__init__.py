from app.models.user import User
from app.models.institute import Institute
from app.models.student import Student
from app.models.course import Course
from app.models.result import Result

__all__ = ["User", "Institute", "Student", "Course", "Result"]
