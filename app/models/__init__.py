# Database models

from app.models.academic import Degree, Department, Teacher
from app.models.course import (
    ALLOWED_TOTAL_PERIODS,
    CourseClass,
    Semester,
    Subject,
    TeacherAssignment,
)
from app.models.rate import (
    DEFAULT_STANDARD_STUDENT_RANGE,
    STUDENT_RANGES,
    ClassCoefficient,
    HourlyRate,
    TeacherCoefficient,
)

__all__ = [
    "Degree",
    "Department",
    "Teacher",
    "ALLOWED_TOTAL_PERIODS",
    "CourseClass",
    "Semester",
    "Subject",
    "TeacherAssignment",
    "DEFAULT_STANDARD_STUDENT_RANGE",
    "STUDENT_RANGES",
    "ClassCoefficient",
    "HourlyRate",
    "TeacherCoefficient",
]
