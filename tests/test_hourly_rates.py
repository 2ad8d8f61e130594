"""Tests for Hourly Rates API."""

import uuid
from decimal import Decimal

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.rate import HourlyRate


# ============== Fixtures ==============


@pytest.fixture
async def hourly_rate(db: AsyncSession) -> HourlyRate:
    """Create a test hourly rate."""
    hourly_rate = HourlyRate(academic_year="2025-2026", rate_per_hour=Decimal("15000"))
    db.add(hourly_rate)
    await db.commit()
    await db.refresh(hourly_rate)
    return hourly_rate


# ============== Tests ==============


class TestListHourlyRates:
    """Tests for listing hourly rates."""

    async def test_list_empty(self, client: AsyncClient):
        """Test listing hourly rates when none exist."""
        response = await client.get("/api/v1/hourly-rates")

        assert response.status_code == 200
        data = response.json()
        assert data["items"] == []
        assert data["total"] == 0

    async def test_list_newest_first(self, client: AsyncClient, db: AsyncSession):
        """Test that rates are ordered by academic year descending."""
        db.add_all(
            [
                HourlyRate(academic_year="2024-2025", rate_per_hour=Decimal("12000")),
                HourlyRate(academic_year="2025-2026", rate_per_hour=Decimal("15000")),
            ]
        )
        await db.commit()

        response = await client.get("/api/v1/hourly-rates")

        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 2
        assert [r["academic_year"] for r in data["items"]] == ["2025-2026", "2024-2025"]


class TestCreateHourlyRate:
    """Tests for creating hourly rates."""

    async def test_create(self, client: AsyncClient):
        """Test creating an hourly rate."""
        response = await client.post(
            "/api/v1/hourly-rates",
            json={"academic_year": "2025-2026", "rate_per_hour": "15000"},
        )

        assert response.status_code == 201
        data = response.json()
        assert data["academic_year"] == "2025-2026"
        assert Decimal(data["rate_per_hour"]) == Decimal("15000")

    async def test_create_duplicate_year(self, client: AsyncClient, hourly_rate: HourlyRate):
        """Test that a year has at most one rate."""
        response = await client.post(
            "/api/v1/hourly-rates",
            json={"academic_year": "2025-2026", "rate_per_hour": "20000"},
        )

        assert response.status_code == 400
        assert "already exists" in response.json()["detail"]

    @pytest.mark.parametrize("rate", ["999", "1000001", "-5"])
    async def test_create_rate_out_of_range(self, client: AsyncClient, rate: str):
        """Test that rates outside 1000..1000000 are rejected."""
        response = await client.post(
            "/api/v1/hourly-rates",
            json={"academic_year": "2025-2026", "rate_per_hour": rate},
        )

        assert response.status_code == 422

    @pytest.mark.parametrize("academic_year", ["2025", "2025/2026", "2025-2027"])
    async def test_create_invalid_academic_year(self, client: AsyncClient, academic_year: str):
        """Test that malformed academic years are rejected."""
        response = await client.post(
            "/api/v1/hourly-rates",
            json={"academic_year": academic_year, "rate_per_hour": "15000"},
        )

        assert response.status_code == 422


class TestGetHourlyRate:
    """Tests for reading hourly rates."""

    async def test_get_by_id(self, client: AsyncClient, hourly_rate: HourlyRate):
        """Test getting an hourly rate by ID."""
        response = await client.get(f"/api/v1/hourly-rates/{hourly_rate.id}")

        assert response.status_code == 200
        assert response.json()["id"] == str(hourly_rate.id)

    async def test_get_by_year(self, client: AsyncClient, hourly_rate: HourlyRate):
        """Test getting the hourly rate of an academic year."""
        response = await client.get("/api/v1/hourly-rates/academic-year/2025-2026")

        assert response.status_code == 200
        assert response.json()["id"] == str(hourly_rate.id)

    async def test_get_by_year_not_found(self, client: AsyncClient):
        """Test getting the rate of an unconfigured year."""
        response = await client.get("/api/v1/hourly-rates/academic-year/2030-2031")

        assert response.status_code == 404

    async def test_get_not_found(self, client: AsyncClient):
        """Test getting a non-existent hourly rate."""
        response = await client.get(f"/api/v1/hourly-rates/{uuid.uuid4()}")

        assert response.status_code == 404
        assert response.json()["detail"] == "Hourly rate not found"


class TestUpdateHourlyRate:
    """Tests for updating hourly rates."""

    async def test_update_rate(self, client: AsyncClient, hourly_rate: HourlyRate):
        """Test updating the rate."""
        response = await client.patch(
            f"/api/v1/hourly-rates/{hourly_rate.id}",
            json={"rate_per_hour": "18000"},
        )

        assert response.status_code == 200
        assert Decimal(response.json()["rate_per_hour"]) == Decimal("18000")

    async def test_update_to_taken_year(
        self,
        client: AsyncClient,
        db: AsyncSession,
        hourly_rate: HourlyRate,
    ):
        """Test that a rate cannot move to a year that already has one."""
        db.add(HourlyRate(academic_year="2024-2025", rate_per_hour=Decimal("12000")))
        await db.commit()

        response = await client.patch(
            f"/api/v1/hourly-rates/{hourly_rate.id}",
            json={"academic_year": "2024-2025"},
        )

        assert response.status_code == 400


class TestDeleteHourlyRate:
    """Tests for deleting hourly rates."""

    async def test_delete(self, client: AsyncClient, hourly_rate: HourlyRate):
        """Test deleting an hourly rate."""
        response = await client.delete(f"/api/v1/hourly-rates/{hourly_rate.id}")
        assert response.status_code == 204

        response = await client.get(f"/api/v1/hourly-rates/{hourly_rate.id}")
        assert response.status_code == 404
