"""Degree, Department and Teacher models."""

from uuid import UUID

from sqlalchemy import ForeignKey, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.database import BaseModel


class Degree(BaseModel):
    """Academic degree (Bachelor, Master, Doctor, ...)."""

    __tablename__ = "degrees"

    full_name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    short_name: Mapped[str] = mapped_column(String(20), unique=True, nullable=False)

    # Relationships
    teachers: Mapped[list["Teacher"]] = relationship("Teacher", back_populates="degree")
    coefficients: Mapped[list["TeacherCoefficient"]] = relationship(
        "TeacherCoefficient", back_populates="degree"
    )

    def __repr__(self) -> str:
        return f"<Degree(id={self.id}, name={self.full_name})>"


class Department(BaseModel):
    """Faculty department."""

    __tablename__ = "departments"

    full_name: Mapped[str] = mapped_column(String(200), unique=True, nullable=False)
    short_name: Mapped[str] = mapped_column(String(20), unique=True, nullable=False)
    description: Mapped[str | None] = mapped_column(String(500))

    # Relationships
    teachers: Mapped[list["Teacher"]] = relationship("Teacher", back_populates="department")

    def __repr__(self) -> str:
        return f"<Department(id={self.id}, name={self.full_name})>"


class Teacher(BaseModel):
    """Teacher paid per converted teaching period."""

    __tablename__ = "teachers"

    code: Mapped[str] = mapped_column(String(20), unique=True, nullable=False, index=True)
    full_name: Mapped[str] = mapped_column(String(200), nullable=False)
    degree_id: Mapped[UUID] = mapped_column(
        Uuid,
        ForeignKey("degrees.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    department_id: Mapped[UUID] = mapped_column(
        Uuid,
        ForeignKey("departments.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )

    # Relationships
    degree: Mapped["Degree"] = relationship("Degree", back_populates="teachers")
    department: Mapped["Department"] = relationship("Department", back_populates="teachers")
    assignments: Mapped[list["TeacherAssignment"]] = relationship(
        "TeacherAssignment", back_populates="teacher"
    )

    def __repr__(self) -> str:
        return f"<Teacher(id={self.id}, code={self.code})>"


from app.models.course import TeacherAssignment
from app.models.rate import TeacherCoefficient
