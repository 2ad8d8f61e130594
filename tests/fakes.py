"""In-memory PayrollRepository for engine tests."""

from collections.abc import Sequence
from dataclasses import dataclass
from decimal import Decimal
from uuid import UUID, uuid4

from app.models.academic import Degree, Department, Teacher
from app.models.course import CourseClass, Semester, Subject, TeacherAssignment
from app.models.rate import ClassCoefficient, HourlyRate, TeacherCoefficient


class InMemoryPayrollRepository:
    """
    PayrollRepository over plain lists of transient ORM objects.

    The ``add_*`` / ``set_*`` helpers build the data; the async methods
    answer the same queries as the SQLAlchemy implementation, with the same
    ordering.
    """

    def __init__(self):
        self.degrees: list[Degree] = []
        self.departments: list[Department] = []
        self.teachers: list[Teacher] = []
        self.semesters: list[Semester] = []
        self.assignments: list[TeacherAssignment] = []
        self.hourly_rates: dict[str, HourlyRate] = {}
        self.class_coefficients: dict[str, ClassCoefficient] = {}
        self.teacher_coefficients: list[TeacherCoefficient] = []
        self.teacher_coefficient_queries = 0

    # ============== Builders ==============

    def add_degree(self, full_name: str, short_name: str) -> Degree:
        degree = Degree(id=uuid4(), full_name=full_name, short_name=short_name)
        self.degrees.append(degree)
        return degree

    def add_department(self, full_name: str, short_name: str) -> Department:
        department = Department(id=uuid4(), full_name=full_name, short_name=short_name)
        self.departments.append(department)
        return department

    def add_teacher(
        self,
        code: str,
        full_name: str,
        degree: Degree,
        department: Department,
    ) -> Teacher:
        teacher = Teacher(
            id=uuid4(),
            code=code,
            full_name=full_name,
            degree_id=degree.id,
            department_id=department.id,
        )
        teacher.degree = degree
        teacher.department = department
        self.teachers.append(teacher)
        return teacher

    def add_semester(
        self,
        academic_year: str,
        term_number: int,
        is_supplementary: bool = False,
    ) -> Semester:
        semester = Semester(
            id=uuid4(),
            academic_year=academic_year,
            term_number=term_number,
            is_supplementary=is_supplementary,
        )
        self.semesters.append(semester)
        return semester

    def add_subject(
        self,
        name: str,
        total_periods: int = 45,
        coefficient: str = "1.0",
        credits: int = 3,
    ) -> Subject:
        return Subject(
            id=uuid4(),
            code=name.upper()[:10],
            name=name,
            credits=credits,
            coefficient=Decimal(coefficient),
            total_periods=total_periods,
        )

    def assign(
        self,
        teacher: Teacher,
        subject: Subject,
        semester: Semester,
        student_count: int,
        code: str | None = None,
    ) -> TeacherAssignment:
        """Create a course class of ``subject`` in ``semester`` taught by ``teacher``."""
        course_class = CourseClass(
            id=uuid4(),
            code=code or f"C{len(self.assignments) + 1:03d}",
            name=f"{subject.name} {len(self.assignments) + 1}",
            student_count=student_count,
            subject_id=subject.id,
            semester_id=semester.id,
        )
        course_class.subject = subject
        course_class.semester = semester

        assignment = TeacherAssignment(
            id=uuid4(),
            teacher_id=teacher.id,
            course_class_id=course_class.id,
        )
        assignment.teacher = teacher
        assignment.course_class = course_class
        self.assignments.append(assignment)
        return assignment

    def set_hourly_rate(self, academic_year: str, rate_per_hour: str) -> HourlyRate:
        hourly_rate = HourlyRate(
            id=uuid4(),
            academic_year=academic_year,
            rate_per_hour=Decimal(rate_per_hour),
        )
        self.hourly_rates[academic_year] = hourly_rate
        return hourly_rate

    def set_class_coefficient(self, academic_year: str, standard_range: str) -> ClassCoefficient:
        class_coefficient = ClassCoefficient(
            id=uuid4(),
            academic_year=academic_year,
            standard_student_range=standard_range,
        )
        self.class_coefficients[academic_year] = class_coefficient
        return class_coefficient

    def set_teacher_coefficient(
        self,
        academic_year: str,
        degree: Degree,
        coefficient: str,
    ) -> TeacherCoefficient:
        teacher_coefficient = TeacherCoefficient(
            id=uuid4(),
            academic_year=academic_year,
            degree_id=degree.id,
            coefficient=Decimal(coefficient),
        )
        self.teacher_coefficients.append(teacher_coefficient)
        return teacher_coefficient

    # ============== PayrollRepository ==============

    async def get_teacher(self, teacher_id: UUID) -> Teacher | None:
        return next((t for t in self.teachers if t.id == teacher_id), None)

    async def get_department(self, department_id: UUID) -> Department | None:
        return next((d for d in self.departments if d.id == department_id), None)

    async def get_semester(self, semester_id: UUID) -> Semester | None:
        return next((s for s in self.semesters if s.id == semester_id), None)

    async def list_semesters(self, academic_year: str) -> list[Semester]:
        semesters = [s for s in self.semesters if s.academic_year == academic_year]
        return sorted(semesters, key=lambda s: (s.term_number, s.is_supplementary))

    async def list_departments(self) -> list[Department]:
        return sorted(self.departments, key=lambda d: d.full_name)

    async def list_department_teachers(self, department_id: UUID) -> list[Teacher]:
        teachers = [t for t in self.teachers if t.department_id == department_id]
        return sorted(teachers, key=lambda t: t.full_name)

    async def get_hourly_rate(self, academic_year: str) -> HourlyRate | None:
        return self.hourly_rates.get(academic_year)

    async def get_class_coefficient(self, academic_year: str) -> ClassCoefficient | None:
        return self.class_coefficients.get(academic_year)

    async def list_teacher_coefficients(self, academic_year: str) -> list[TeacherCoefficient]:
        self.teacher_coefficient_queries += 1
        return [c for c in self.teacher_coefficients if c.academic_year == academic_year]

    async def list_assignments(
        self,
        semester_ids: Sequence[UUID],
        teacher_ids: Sequence[UUID] | None = None,
    ) -> list[TeacherAssignment]:
        assignments = [
            a
            for a in self.assignments
            if a.course_class.semester_id in semester_ids
            and (teacher_ids is None or a.teacher_id in teacher_ids)
        ]
        return sorted(assignments, key=lambda a: a.course_class.code)

    async def list_academic_years(self) -> list[str]:
        return sorted({s.academic_year for s in self.semesters})


@dataclass
class Faculty:
    """A small institution for report tests, see ``build_faculty``."""

    repo: InMemoryPayrollRepository
    doctor: Degree
    master: Degree
    computer_science: Department
    mathematics: Department
    alice: Teacher
    binh: Teacher
    chi: Teacher
    term_1: Semester
    term_2: Semester
    term_2_supplementary: Semester


def build_faculty(academic_year: str, repo: InMemoryPayrollRepository | None = None) -> Faculty:
    """
    Build two departments and three teachers with 15000 per period.

    - Alice (Doctor, 1.5, Computer Science): term 1 class of 25 students in
      a 60-period subject (57.6 periods, 1296000) and term 2 class of 45
      students in a 45-period subject (45 periods, 1012500)
    - Binh (Master, no coefficient record, Computer Science): term 1 class
      of 75 students in a 45-period subject (58.5 periods, 877500)
    - Chi (Doctor, Mathematics): no classes
    """
    repo = repo or InMemoryPayrollRepository()
    repo.set_hourly_rate(academic_year, "15000")
    repo.set_class_coefficient(academic_year, "40-49")

    doctor = repo.add_degree("Doctor", "PhD")
    master = repo.add_degree("Master", "MSc")
    repo.set_teacher_coefficient(academic_year, doctor, "1.5")

    # Inserted out of display order on purpose
    mathematics = repo.add_department("Mathematics", "MATH")
    computer_science = repo.add_department("Computer Science", "CS")

    binh = repo.add_teacher("GV002", "Binh Tran", master, computer_science)
    alice = repo.add_teacher("GV001", "Alice Nguyen", doctor, computer_science)
    chi = repo.add_teacher("GV003", "Chi Le", doctor, mathematics)

    term_2_supplementary = repo.add_semester(academic_year, 2, is_supplementary=True)
    term_2 = repo.add_semester(academic_year, 2)
    term_1 = repo.add_semester(academic_year, 1)

    algorithms = repo.add_subject("Algorithms", total_periods=60, coefficient="1.2")
    databases = repo.add_subject("Databases", total_periods=45, coefficient="1.0")

    repo.assign(alice, algorithms, term_1, student_count=25, code="CS101-01")
    repo.assign(alice, databases, term_2, student_count=45, code="CS201-01")
    repo.assign(binh, databases, term_1, student_count=75, code="CS201-02")

    return Faculty(
        repo=repo,
        doctor=doctor,
        master=master,
        computer_science=computer_science,
        mathematics=mathematics,
        alice=alice,
        binh=binh,
        chi=chi,
        term_1=term_1,
        term_2=term_2,
        term_2_supplementary=term_2_supplementary,
    )
