"""Tests for class size band resolution."""

from decimal import Decimal

import pytest

from app.models.rate import STUDENT_RANGES
from app.services.calculator import resolve_class_coefficient, student_range_index

SAMPLE_COUNTS = (0, 19, 20, 29, 30, 45, 99, 100, 500)

# A class size inside each band, in band order
BAND_REPRESENTATIVES = (10, 25, 35, 45, 55, 65, 75, 85, 95, 120)


class TestStudentRangeIndex:
    """Tests for mapping a student count to its band."""

    @pytest.mark.parametrize(
        "student_count,expected",
        [
            (0, 0),
            (19, 0),
            (20, 1),
            (29, 1),
            (30, 2),
            (45, 3),
            (99, 8),
            (100, 9),
            (150, 9),
            (500, 9),
        ],
    )
    def test_band_index(self, student_count: int, expected: int):
        """Test band boundaries."""
        assert student_range_index(student_count) == expected

    def test_representatives_cover_every_band(self):
        """Test that each band has a representative class size."""
        indexes = [student_range_index(n) for n in BAND_REPRESENTATIVES]
        assert indexes == list(range(len(STUDENT_RANGES)))


class TestResolveClassCoefficient:
    """Tests for the class coefficient."""

    def test_standard_band_is_neutral(self):
        """Test that a class in the standard band has coefficient 0."""
        assert resolve_class_coefficient(45, "40-49") == Decimal("0")

    def test_empty_class_below_standard(self):
        """Test 0 students against 40-49."""
        assert resolve_class_coefficient(0, "40-49") == Decimal("-0.3")

    def test_small_class(self):
        """Test 25 students against 40-49."""
        assert resolve_class_coefficient(25, "40-49") == Decimal("-0.2")

    def test_large_class(self):
        """Test 150 students against 40-49."""
        assert resolve_class_coefficient(150, "40-49") == Decimal("0.6")

    def test_exact_decimal(self):
        """Test that the result is an exact multiple of 0.1."""
        assert resolve_class_coefficient(75, "40-49") == Decimal("0.3")
        assert str(resolve_class_coefficient(75, "40-49")) == "0.3"

    @pytest.mark.parametrize("standard_range", ["", "45-54", "40 - 49", "100"])
    def test_unknown_standard_range_is_neutral(self, standard_range: str):
        """Test that an unknown standard range resolves to 0 without raising."""
        assert resolve_class_coefficient(45, standard_range) == Decimal("0")

    def test_unknown_range_logs_warning(self, caplog: pytest.LogCaptureFixture):
        """Test that an unknown standard range is logged."""
        with caplog.at_level("WARNING", logger="app.services.calculator"):
            resolve_class_coefficient(45, "bogus")
        assert "Unresolvable class size band" in caplog.text

    @pytest.mark.parametrize("student_count", SAMPLE_COUNTS)
    @pytest.mark.parametrize("standard_range", STUDENT_RANGES)
    def test_multiple_of_step_within_bounds(self, student_count: int, standard_range: str):
        """Test that every coefficient is k * 0.1 with |k| <= 9."""
        coefficient = resolve_class_coefficient(student_count, standard_range)

        assert Decimal("-0.9") <= coefficient <= Decimal("0.9")
        assert coefficient % Decimal("0.1") == 0
        expected = (
            student_range_index(student_count) - STUDENT_RANGES.index(standard_range)
        ) * Decimal("0.1")
        assert coefficient == expected

    @pytest.mark.parametrize("i", range(len(STUDENT_RANGES)))
    @pytest.mark.parametrize("j", range(len(STUDENT_RANGES)))
    def test_antisymmetric(self, i: int, j: int):
        """Test that swapping class band and standard band flips the sign."""
        forward = resolve_class_coefficient(BAND_REPRESENTATIVES[i], STUDENT_RANGES[j])
        backward = resolve_class_coefficient(BAND_REPRESENTATIVES[j], STUDENT_RANGES[i])
        assert forward == -backward
