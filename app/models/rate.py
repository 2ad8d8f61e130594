"""Per academic year payroll configuration models."""

from decimal import Decimal
from uuid import UUID

from sqlalchemy import ForeignKey, Numeric, String, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.database import BaseModel

# Class size bands, ordered from smallest to largest
STUDENT_RANGES = (
    "<20",
    "20-29",
    "30-39",
    "40-49",
    "50-59",
    "60-69",
    "70-79",
    "80-89",
    "90-99",
    "100+",
)
DEFAULT_STANDARD_STUDENT_RANGE = "40-49"


class HourlyRate(BaseModel):
    """Amount paid per converted period in an academic year."""

    __tablename__ = "hourly_rates"

    academic_year: Mapped[str] = mapped_column(String(9), unique=True, nullable=False)
    rate_per_hour: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)

    def __repr__(self) -> str:
        return f"<HourlyRate(year={self.academic_year}, rate={self.rate_per_hour})>"


class ClassCoefficient(BaseModel):
    """Standard class size of an academic year."""

    __tablename__ = "class_coefficients"

    academic_year: Mapped[str] = mapped_column(String(9), unique=True, nullable=False)
    standard_student_range: Mapped[str] = mapped_column(String(10), nullable=False)

    def __repr__(self) -> str:
        return f"<ClassCoefficient(year={self.academic_year}, range={self.standard_student_range})>"


class TeacherCoefficient(BaseModel):
    """Pay multiplier of a degree in an academic year."""

    __tablename__ = "teacher_coefficients"
    __table_args__ = (
        UniqueConstraint("academic_year", "degree_id", name="uq_teacher_coefficient_year_degree"),
    )

    academic_year: Mapped[str] = mapped_column(String(9), nullable=False, index=True)
    degree_id: Mapped[UUID] = mapped_column(
        Uuid,
        ForeignKey("degrees.id", ondelete="CASCADE"),
        nullable=False,
    )
    coefficient: Mapped[Decimal] = mapped_column(Numeric(4, 2), nullable=False)

    # Relationships
    degree: Mapped["Degree"] = relationship("Degree", back_populates="coefficients")

    def __repr__(self) -> str:
        return f"<TeacherCoefficient(year={self.academic_year}, coefficient={self.coefficient})>"


from app.models.academic import Degree
