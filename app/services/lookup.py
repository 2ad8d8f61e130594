"""Rate and coefficient lookup for an academic year.

Policy:
- hourly rate: required, no default
- class coefficient (standard student range): required
- teacher coefficient: falls back to ``settings.DEFAULT_TEACHER_COEFFICIENT``
  (1.0) when the degree has no record for the year, unless
  ``settings.TEACHER_COEFFICIENT_REQUIRED`` is set, in which case a missing
  record fails any computation that would apply it.

A fallback is returned as ``DefaultedCoefficient`` so report consumers can
tell configured values from fallbacks.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from uuid import UUID

from app.core.config import settings
from app.core.exceptions import ConfigurationMissingError
from app.services.calculator import to_decimal
from app.services.repository import PayrollRepository

logger = logging.getLogger(__name__)

HOURLY_RATE = "hourlyRate"
CLASS_COEFFICIENT = "classCoefficient"
TEACHER_COEFFICIENT = "teacherCoefficient"


@dataclass(frozen=True)
class ResolvedCoefficient:
    """Teacher coefficient backed by a stored record."""

    value: Decimal
    record_id: UUID

    @property
    def is_default(self) -> bool:
        return False


@dataclass(frozen=True)
class DefaultedCoefficient:
    """Teacher coefficient synthesized because no record exists."""

    value: Decimal
    record_id: None = None

    @property
    def is_default(self) -> bool:
        return True


TeacherCoefficientValue = ResolvedCoefficient | DefaultedCoefficient


@dataclass(frozen=True)
class YearConfiguration:
    """Year-level settings shared by every teacher in a report."""

    academic_year: str
    rate_per_hour: Decimal
    standard_student_range: str


@dataclass(frozen=True)
class PayrollRates:
    """Everything needed to price one teacher's classes in one year."""

    rate_per_hour: Decimal
    teacher_coefficient: TeacherCoefficientValue
    standard_student_range: str


class TeacherCoefficientTable:
    """Teacher coefficients of one academic year, loaded once and keyed by degree."""

    def __init__(
        self,
        academic_year: str,
        coefficients: dict[UUID, ResolvedCoefficient],
        required: bool,
        default: Decimal,
    ):
        self.academic_year = academic_year
        self.required = required
        self.default = default
        self._coefficients = coefficients
        self._defaulted: set[UUID] = set()

    def resolve(self, degree_id: UUID, *, applied: bool = True) -> TeacherCoefficientValue:
        """
        Return the coefficient of ``degree_id``.

        ``applied`` tells whether the value will price at least one class. A
        missing record only fails under the required policy when it is applied,
        so teachers without classes still appear in reports.
        """
        coefficient = self._coefficients.get(degree_id)
        if coefficient is not None:
            return coefficient

        if self.required and applied:
            raise ConfigurationMissingError(TEACHER_COEFFICIENT, self.academic_year)

        if degree_id not in self._defaulted:
            self._defaulted.add(degree_id)
            logger.info(
                "No teacher coefficient for degree %s in %s, using default %s",
                degree_id,
                self.academic_year,
                self.default,
            )
        return DefaultedCoefficient(value=self.default)


async def load_year_configuration(
    repo: PayrollRepository,
    academic_year: str,
) -> YearConfiguration:
    """Load the hourly rate and standard student range, both required."""
    hourly_rate = await repo.get_hourly_rate(academic_year)
    if hourly_rate is None:
        raise ConfigurationMissingError(HOURLY_RATE, academic_year)

    class_coefficient = await repo.get_class_coefficient(academic_year)
    if class_coefficient is None:
        raise ConfigurationMissingError(CLASS_COEFFICIENT, academic_year)

    return YearConfiguration(
        academic_year=academic_year,
        rate_per_hour=to_decimal(hourly_rate.rate_per_hour),
        standard_student_range=class_coefficient.standard_student_range,
    )


async def load_teacher_coefficients(
    repo: PayrollRepository,
    academic_year: str,
    required: bool | None = None,
) -> TeacherCoefficientTable:
    """Load every teacher coefficient of a year in a single query."""
    records = await repo.list_teacher_coefficients(academic_year)
    coefficients = {
        record.degree_id: ResolvedCoefficient(
            value=to_decimal(record.coefficient),
            record_id=record.id,
        )
        for record in records
    }
    return TeacherCoefficientTable(
        academic_year=academic_year,
        coefficients=coefficients,
        required=settings.TEACHER_COEFFICIENT_REQUIRED if required is None else required,
        default=to_decimal(settings.DEFAULT_TEACHER_COEFFICIENT),
    )


async def lookup_rates(
    repo: PayrollRepository,
    academic_year: str,
    degree_id: UUID,
    required: bool | None = None,
) -> PayrollRates:
    """Return hourly rate, teacher coefficient and standard range for one degree."""
    config = await load_year_configuration(repo, academic_year)
    table = await load_teacher_coefficients(repo, academic_year, required=required)

    return PayrollRates(
        rate_per_hour=config.rate_per_hour,
        teacher_coefficient=table.resolve(degree_id),
        standard_student_range=config.standard_student_range,
    )
