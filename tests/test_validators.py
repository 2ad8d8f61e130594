"""Tests for academic year and student range validators."""

import pytest
from pydantic import BaseModel, ValidationError

from app.schemas.validators import AcademicYear, StudentRange, validate_academic_year


class AcademicYearModel(BaseModel):
    """Test model with academic year."""
    academic_year: AcademicYear


class StudentRangeModel(BaseModel):
    """Test model with student range."""
    standard_student_range: StudentRange


class TestAcademicYearValidator:
    """Tests for academic year validation."""

    def test_valid_academic_year(self):
        """Test consecutive years."""
        model = AcademicYearModel(academic_year="2025-2026")
        assert model.academic_year == "2025-2026"

    def test_invalid_single_year(self):
        """Test a single year."""
        with pytest.raises(ValidationError):
            AcademicYearModel(academic_year="2025")

    def test_invalid_separator(self):
        """Test a slash separator."""
        with pytest.raises(ValidationError) as exc_info:
            AcademicYearModel(academic_year="2025/2026")
        assert "Invalid academic year" in str(exc_info.value)

    def test_invalid_non_consecutive(self):
        """Test years that do not follow each other."""
        with pytest.raises(ValidationError) as exc_info:
            AcademicYearModel(academic_year="2025-2027")
        assert "End year must directly follow start year" in str(exc_info.value)

    def test_invalid_reversed(self):
        """Test reversed years."""
        with pytest.raises(ValueError):
            validate_academic_year("2026-2025")


class TestStudentRangeValidator:
    """Tests for class size band validation."""

    @pytest.mark.parametrize("value", ["<20", "40-49", "100+"])
    def test_valid_range(self, value: str):
        """Test known bands."""
        model = StudentRangeModel(standard_student_range=value)
        assert model.standard_student_range == value

    @pytest.mark.parametrize("value", ["40", "40-50", "100", ""])
    def test_invalid_range(self, value: str):
        """Test unknown bands."""
        with pytest.raises(ValidationError) as exc_info:
            StudentRangeModel(standard_student_range=value)
        assert "Invalid student range" in str(exc_info.value)
