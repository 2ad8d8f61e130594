"""Test configuration and fixtures."""

from collections.abc import AsyncGenerator
from decimal import Decimal

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from app.core.database import Base, build_engine, get_db
from app.models import (
    ClassCoefficient,
    CourseClass,
    Degree,
    Department,
    HourlyRate,
    Semester,
    Subject,
    Teacher,
    TeacherAssignment,
    TeacherCoefficient,
)
from main import app
from tests.fakes import Faculty, InMemoryPayrollRepository, build_faculty

# In-memory SQLite, one fresh database per test
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

ACADEMIC_YEAR = "2025-2026"


@pytest_asyncio.fixture(scope="function")
async def test_engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create a fresh database with all tables for each test."""
    engine = build_engine(TEST_DATABASE_URL)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def setup_database(test_engine: AsyncEngine) -> AsyncGenerator[async_sessionmaker, None]:
    """Point the app's database dependency at the test database."""
    test_session_maker = async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        """Override database dependency for tests."""
        async with test_session_maker() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    yield test_session_maker
    app.dependency_overrides.pop(get_db, None)


@pytest_asyncio.fixture
async def db(setup_database: async_sessionmaker) -> AsyncGenerator[AsyncSession, None]:
    """Get database session for tests."""
    async with setup_database() as session:
        yield session


@pytest_asyncio.fixture
async def client(setup_database: async_sessionmaker) -> AsyncGenerator[AsyncClient, None]:
    """Get async HTTP client."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest.fixture
def repo() -> InMemoryPayrollRepository:
    """Empty in-memory repository for engine tests."""
    return InMemoryPayrollRepository()


# ============== Reference Data ==============


@pytest_asyncio.fixture
async def doctor(db: AsyncSession) -> Degree:
    """Create the Doctor degree."""
    degree = Degree(full_name="Doctor", short_name="PhD")
    db.add(degree)
    await db.commit()
    await db.refresh(degree)
    return degree


@pytest_asyncio.fixture
async def master(db: AsyncSession) -> Degree:
    """Create the Master degree."""
    degree = Degree(full_name="Master", short_name="MSc")
    db.add(degree)
    await db.commit()
    await db.refresh(degree)
    return degree


@pytest_asyncio.fixture
async def department(db: AsyncSession) -> Department:
    """Create a test department."""
    department = Department(full_name="Computer Science", short_name="CS")
    db.add(department)
    await db.commit()
    await db.refresh(department)
    return department


@pytest_asyncio.fixture
async def teacher(db: AsyncSession, doctor: Degree, department: Department) -> Teacher:
    """Create a teacher holding a doctorate."""
    teacher = Teacher(
        code="GV001",
        full_name="Alice Nguyen",
        degree_id=doctor.id,
        department_id=department.id,
    )
    db.add(teacher)
    await db.commit()
    await db.refresh(teacher)
    return teacher


@pytest_asyncio.fixture
async def semester(db: AsyncSession) -> Semester:
    """Create term 1 of the test academic year."""
    semester = Semester(academic_year=ACADEMIC_YEAR, term_number=1, is_supplementary=False)
    db.add(semester)
    await db.commit()
    await db.refresh(semester)
    return semester


@pytest_asyncio.fixture
async def subject(db: AsyncSession, department: Department) -> Subject:
    """Create a 60-period subject with coefficient 1.2."""
    subject = Subject(
        code="CS101",
        name="Algorithms",
        credits=4,
        coefficient=Decimal("1.2"),
        total_periods=60,
        department_id=department.id,
    )
    db.add(subject)
    await db.commit()
    await db.refresh(subject)
    return subject


@pytest_asyncio.fixture
async def course_class(db: AsyncSession, subject: Subject, semester: Semester) -> CourseClass:
    """Create a course class of 25 students."""
    course_class = CourseClass(
        code="CS101-01",
        name="Algorithms 01",
        student_count=25,
        subject_id=subject.id,
        semester_id=semester.id,
    )
    db.add(course_class)
    await db.commit()
    await db.refresh(course_class)
    return course_class


@pytest_asyncio.fixture
async def assignment(
    db: AsyncSession,
    teacher: Teacher,
    course_class: CourseClass,
) -> TeacherAssignment:
    """Assign the test teacher to the test course class."""
    assignment = TeacherAssignment(teacher_id=teacher.id, course_class_id=course_class.id)
    db.add(assignment)
    await db.commit()
    await db.refresh(assignment)
    return assignment


@pytest_asyncio.fixture
async def year_configuration(db: AsyncSession, doctor: Degree) -> None:
    """Configure hourly rate 15000, standard range 40-49 and Doctor 1.5."""
    db.add_all(
        [
            HourlyRate(academic_year=ACADEMIC_YEAR, rate_per_hour=Decimal("15000")),
            ClassCoefficient(academic_year=ACADEMIC_YEAR, standard_student_range="40-49"),
            TeacherCoefficient(
                academic_year=ACADEMIC_YEAR,
                degree_id=doctor.id,
                coefficient=Decimal("1.5"),
            ),
        ]
    )
    await db.commit()


@pytest.fixture
def faculty(repo: InMemoryPayrollRepository) -> Faculty:
    """In-memory institution configured for the test academic year."""
    return build_faculty(ACADEMIC_YEAR, repo)
