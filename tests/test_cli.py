"""Tests for management CLI commands."""

from decimal import Decimal

import pytest
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app import cli
from app.core.database import Base
from app.models.academic import Degree
from app.models.rate import TeacherCoefficient
from tests.conftest import ACADEMIC_YEAR


class TestMain:
    """Tests for command dispatch."""

    def test_registers_every_table(self):
        """Test that the CLI sees every model table."""
        assert {
            "degrees",
            "departments",
            "teachers",
            "subjects",
            "semesters",
            "course_classes",
            "teacher_assignments",
            "hourly_rates",
            "class_coefficients",
            "teacher_coefficients",
        } <= set(Base.metadata.tables)

    def test_semester_table_columns(self):
        """Test the columns create-tables emits for semesters."""
        assert set(Base.metadata.tables["semesters"].columns.keys()) == {
            "id",
            "created_at",
            "updated_at",
            "academic_year",
            "term_number",
            "is_supplementary",
        }

    def test_usage(self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]):
        """Test that running without a command prints usage."""
        monkeypatch.setattr("sys.argv", ["app.cli"])

        with pytest.raises(SystemExit) as exc_info:
            cli.main()

        assert exc_info.value.code == 1
        assert "seed-teacher-coefficients <academic_year>" in capsys.readouterr().out

    def test_unknown_command(
        self,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ):
        """Test that an unknown command fails."""
        monkeypatch.setattr("sys.argv", ["app.cli", "drop-everything"])

        with pytest.raises(SystemExit):
            cli.main()

        assert "Unknown command: drop-everything" in capsys.readouterr().out

    def test_seed_invalid_academic_year(
        self,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ):
        """Test that the academic year is validated before seeding."""
        monkeypatch.setattr("sys.argv", ["app.cli", "seed-teacher-coefficients", "2025-2027"])

        with pytest.raises(SystemExit) as exc_info:
            cli.main()

        assert exc_info.value.code == 1
        assert "End year must directly follow start year" in capsys.readouterr().out


class TestSeedTeacherCoefficients:
    """Tests for the seed command."""

    async def test_seed(
        self,
        db: AsyncSession,
        setup_database: async_sessionmaker,
        doctor: Degree,
        master: Degree,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ):
        """Test seeding suggested coefficients for every degree."""
        monkeypatch.setattr(cli, "async_session_maker", setup_database)

        await cli.seed_teacher_coefficients(ACADEMIC_YEAR)

        assert f"Created 2 teacher coefficients for {ACADEMIC_YEAR}" in capsys.readouterr().out
        result = await db.execute(
            select(TeacherCoefficient).where(TeacherCoefficient.academic_year == ACADEMIC_YEAR)
        )
        by_degree = {c.degree_id: c.coefficient for c in result.scalars().all()}
        assert by_degree == {doctor.id: Decimal("1.7"), master.id: Decimal("1.5")}

    async def test_seed_nothing_to_do(
        self,
        db: AsyncSession,
        setup_database: async_sessionmaker,
        doctor: Degree,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ):
        """Test that existing coefficients are left alone."""
        db.add(
            TeacherCoefficient(
                academic_year=ACADEMIC_YEAR,
                degree_id=doctor.id,
                coefficient=Decimal("2.0"),
            )
        )
        await db.commit()
        monkeypatch.setattr(cli, "async_session_maker", setup_database)

        await cli.seed_teacher_coefficients(ACADEMIC_YEAR)

        assert "Every degree already has a coefficient" in capsys.readouterr().out
