"""Subject, Semester, CourseClass and TeacherAssignment models."""

from decimal import Decimal
from uuid import UUID

from sqlalchemy import Boolean, ForeignKey, Integer, Numeric, String, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.database import BaseModel

ALLOWED_TOTAL_PERIODS = (30, 45, 60, 90, 135)


class Subject(BaseModel):
    """Subject with its nominal periods and difficulty coefficient."""

    __tablename__ = "subjects"

    code: Mapped[str] = mapped_column(String(20), unique=True, nullable=False)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    credits: Mapped[int] = mapped_column(Integer, nullable=False)
    coefficient: Mapped[Decimal] = mapped_column(Numeric(5, 2), nullable=False)
    total_periods: Mapped[int] = mapped_column(Integer, nullable=False)  # one of ALLOWED_TOTAL_PERIODS
    department_id: Mapped[UUID | None] = mapped_column(
        Uuid,
        ForeignKey("departments.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    # Relationships
    course_classes: Mapped[list["CourseClass"]] = relationship(
        "CourseClass", back_populates="subject"
    )

    def __repr__(self) -> str:
        return f"<Subject(id={self.id}, code={self.code})>"


class Semester(BaseModel):
    """Semester of an academic year."""

    __tablename__ = "semesters"
    __table_args__ = (
        UniqueConstraint(
            "academic_year", "term_number", "is_supplementary", name="uq_semester_term"
        ),
    )

    academic_year: Mapped[str] = mapped_column(String(9), nullable=False, index=True)
    term_number: Mapped[int] = mapped_column(Integer, nullable=False)  # 1-3
    is_supplementary: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        server_default="false",
    )

    # Relationships
    course_classes: Mapped[list["CourseClass"]] = relationship(
        "CourseClass", back_populates="semester"
    )

    @property
    def name(self) -> str:
        """Return semester name like 'Term 1' or 'Term 2 (supplementary)'."""
        suffix = " (supplementary)" if self.is_supplementary else ""
        return f"Term {self.term_number}{suffix}"

    def __repr__(self) -> str:
        return f"<Semester(id={self.id}, year={self.academic_year}, term={self.term_number})>"


class CourseClass(BaseModel):
    """One offering of a subject in a semester."""

    __tablename__ = "course_classes"

    code: Mapped[str] = mapped_column(String(30), unique=True, nullable=False)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    student_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    subject_id: Mapped[UUID] = mapped_column(
        Uuid,
        ForeignKey("subjects.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    semester_id: Mapped[UUID] = mapped_column(
        Uuid,
        ForeignKey("semesters.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )

    # Relationships
    subject: Mapped["Subject"] = relationship("Subject", back_populates="course_classes")
    semester: Mapped["Semester"] = relationship("Semester", back_populates="course_classes")
    assignments: Mapped[list["TeacherAssignment"]] = relationship(
        "TeacherAssignment", back_populates="course_class"
    )

    def __repr__(self) -> str:
        return f"<CourseClass(id={self.id}, code={self.code})>"


class TeacherAssignment(BaseModel):
    """Links a teacher to the course class they teach."""

    __tablename__ = "teacher_assignments"
    __table_args__ = (
        UniqueConstraint("course_class_id", name="uq_assignment_course_class"),
    )

    teacher_id: Mapped[UUID] = mapped_column(
        Uuid,
        ForeignKey("teachers.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    course_class_id: Mapped[UUID] = mapped_column(
        Uuid,
        ForeignKey("course_classes.id", ondelete="CASCADE"),
        nullable=False,
    )

    # Relationships
    teacher: Mapped["Teacher"] = relationship("Teacher", back_populates="assignments")
    course_class: Mapped["CourseClass"] = relationship(
        "CourseClass", back_populates="assignments"
    )

    def __repr__(self) -> str:
        return f"<TeacherAssignment(teacher={self.teacher_id}, class={self.course_class_id})>"


from app.models.academic import Teacher
