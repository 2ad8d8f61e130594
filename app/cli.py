"""CLI commands for management tasks."""

import asyncio
import sys

from app import models  # noqa: F401
from app.core.database import Base, async_session_maker, engine
from app.core.logging import configure_logging
from app.schemas.validators import validate_academic_year
from app.services import teacher_coefficient as coefficient_service


async def create_tables() -> None:
    """Create all database tables."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    await engine.dispose()

    print("✓ Tables created")


async def seed_teacher_coefficients(academic_year: str) -> None:
    """Create suggested teacher coefficients for degrees without one in a year."""
    async with async_session_maker() as db:
        created = await coefficient_service.seed_teacher_coefficients(db, academic_year)
    await engine.dispose()

    if not created:
        print(f"Every degree already has a coefficient for {academic_year}")
        return

    print(f"✓ Created {len(created)} teacher coefficients for {academic_year}")
    for teacher_coefficient in created:
        print(f"  {teacher_coefficient.degree_id}: {teacher_coefficient.coefficient}")


def main() -> None:
    """CLI entry point."""
    configure_logging()

    if len(sys.argv) < 2:
        print("Usage: python -m app.cli <command>")
        print("Commands:")
        print("  create-tables")
        print("  seed-teacher-coefficients <academic_year>")
        sys.exit(1)

    command = sys.argv[1]

    if command == "create-tables":
        asyncio.run(create_tables())
    elif command == "seed-teacher-coefficients":
        if len(sys.argv) != 3:
            print("Usage: python -m app.cli seed-teacher-coefficients <academic_year>")
            sys.exit(1)

        try:
            academic_year = validate_academic_year(sys.argv[2])
        except ValueError as e:
            print(f"Error: {e}")
            sys.exit(1)
        asyncio.run(seed_teacher_coefficients(academic_year))
    else:
        print(f"Unknown command: {command}")
        sys.exit(1)


if __name__ == "__main__":
    main()
