from typing import Any, Optional

from fastapi import HTTPException
from app.constants.error_codes import ErrorCode


class AppException(HTTPException):
    def __init__(
        self,
        status_code: int,
        message: str,
        error_code: ErrorCode,
        details: Any = None,
    ):
        super().__init__(status_code=status_code, detail=message)
        self.error_code = error_code
        self.details = details


class DatabaseError(Exception):
    """A statement or connection failure reported by the database driver.

    ``code`` is the backend's native error code (SQLSTATE on PostgreSQL,
    the extended result code name on SQLite) or ``None`` when the driver
    did not supply one, e.g. for pool acquisition timeouts.
    """

    def __init__(self, message: str, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.code = code

    def __repr__(self):
        return f"<DatabaseError code={self.code} message={self.message!r}>"


UNIQUE_VIOLATION_CODES = {
    "23505",                     # PostgreSQL unique_violation
    "SQLITE_CONSTRAINT_UNIQUE",
}


def is_unique_violation(error: DatabaseError) -> bool:
    return error.code in UNIQUE_VIOLATION_CODES
