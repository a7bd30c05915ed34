"""Custom exception classes"""

import enum
from typing import Any, Optional


class ValidationErrorKind(str, enum.Enum):
    """Submission rule that was violated; the value is the caller-facing message"""
    INVALID_NAME = "Invalid name"
    INVALID_EMAIL = "Invalid email"
    INVALID_PHONE = "Invalid phone"
    INVALID_ADDRESS = "Invalid address"
    INVALID_DATE = "Invalid date"
    INVALID_END_DATE = "Invalid end date"
    INVALID_INSTITUTION = "Invalid institution"
    INVALID_TITLE = "Invalid title"
    INVALID_COMPANY = "Invalid company"
    INVALID_POSITION = "Invalid position"
    INVALID_DESCRIPTION = "Invalid description"
    INVALID_CV_DATA = "Invalid CV data"


class CandidateIntakeException(Exception):
    """Base exception for the candidate intake service"""

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        details: Optional[dict[str, Any]] = None
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class ValidationException(CandidateIntakeException):
    """Submission rejected before any write"""

    def __init__(self, kind: ValidationErrorKind, details: Optional[dict[str, Any]] = None):
        self.kind = kind
        super().__init__(kind.value, status_code=400, details=details)


class StorageException(CandidateIntakeException):
    """Exception for storage backend failures"""

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        details: Optional[dict[str, Any]] = None
    ):
        super().__init__(message, status_code=status_code, details=details)


class DuplicateException(StorageException):
    """Exception for uniqueness violations (e.g. duplicate email)"""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message, status_code=409, details=details)


class NotFoundException(StorageException):
    """Exception for records that do not exist"""

    def __init__(self, message: str):
        super().__init__(message, status_code=404)


class ConnectivityException(StorageException):
    """Exception for an unreachable or uninitialized database"""

    def __init__(self, message: str):
        super().__init__(message, status_code=503)
