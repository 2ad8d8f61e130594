"""Payroll errors.

Every failure of the payroll engine is one of these. They carry the HTTP
status the API should answer with, so the web layer can translate them in a
single exception handler.
"""


class PayrollError(Exception):
    """Base exception for payroll computation and administration."""

    status_code: int = 500

    def __init__(self, message: str, status_code: int | None = None):
        self.message = message
        if status_code:
            self.status_code = status_code
        super().__init__(self.message)


class NotFoundError(PayrollError):
    """
    Raised when a referenced entity has no data at all.

    Examples:
    - Unknown teacher, department or semester
    - Department without teachers
    - Academic year without semesters
    """

    status_code = 404

    def __init__(self, message: str = "Resource not found"):
        super().__init__(message, self.status_code)


class ConfigurationMissingError(PayrollError):
    """
    Raised when required reference data is absent for an academic year.

    This is an administrative setup gap, not a data-integrity problem:
    the caller should configure ``kind`` for ``academic_year`` and retry.
    """

    status_code = 404

    def __init__(self, kind: str, academic_year: str):
        self.kind = kind
        self.academic_year = academic_year
        super().__init__(
            f"Configure {kind} for academic year {academic_year} first",
            self.status_code,
        )


class InvalidRequestError(PayrollError):
    """Raised when identifiers are valid but inconsistent with each other."""

    status_code = 400

    def __init__(self, message: str = "Invalid request"):
        super().__init__(message, self.status_code)
