"""Translation of storage backend errors into service exceptions"""

import enum
import functools
from types import MappingProxyType
from typing import Any, Awaitable, Callable, Mapping, TypeVar

from sqlalchemy.exc import (
    DBAPIError,
    DisconnectionError,
    IntegrityError,
    InterfaceError,
    NoResultFound,
    OperationalError,
)

from backend.app.core.exceptions import (
    CandidateIntakeException,
    ConnectivityException,
    DuplicateException,
    NotFoundException,
    StorageException,
)
from backend.app.core.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

UNIQUE_VIOLATION_SQLSTATE = "23505"


class StorageErrorCode(str, enum.Enum):
    """Backend-independent classification of a storage failure"""
    UNIQUE_VIOLATION = "unique_violation"
    NOT_FOUND = "not_found"
    CONNECTIVITY = "connectivity"
    UNKNOWN = "unknown"


STORAGE_ERROR_MESSAGES: Mapping[StorageErrorCode, str] = MappingProxyType({
    StorageErrorCode.UNIQUE_VIOLATION: "The email already exists in the database",
    StorageErrorCode.NOT_FOUND: "Could not find the candidate record with the provided ID.",
    StorageErrorCode.CONNECTIVITY: (
        "Could not connect to the database. "
        "Please make sure the database server is running."
    ),
})


def _driver_error(exc: Exception) -> Any:
    return exc.orig if isinstance(exc, DBAPIError) and exc.orig is not None else exc


def _sqlstate(exc: Exception) -> Any:
    driver_error = _driver_error(exc)
    return getattr(driver_error, "sqlstate", None) or getattr(driver_error, "pgcode", None)


def classify_storage_error(exc: Exception) -> StorageErrorCode:
    """
    Map a raw backend exception to a storage error code

    Args:
        exc: Exception raised by SQLAlchemy or the database driver

    Returns:
        Storage error code
    """
    if isinstance(exc, IntegrityError):
        if _sqlstate(exc) == UNIQUE_VIOLATION_SQLSTATE or "unique" in str(_driver_error(exc)).lower():
            return StorageErrorCode.UNIQUE_VIOLATION
        return StorageErrorCode.UNKNOWN

    if isinstance(exc, NoResultFound):
        return StorageErrorCode.NOT_FOUND

    if isinstance(exc, (OperationalError, InterfaceError, DisconnectionError, OSError)):
        return StorageErrorCode.CONNECTIVITY

    return StorageErrorCode.UNKNOWN


def translate_storage_error(exc: Exception) -> StorageException:
    """Build the service exception for a raw backend exception"""
    code = classify_storage_error(exc)

    if code == StorageErrorCode.UNIQUE_VIOLATION:
        return DuplicateException(STORAGE_ERROR_MESSAGES[code])
    if code == StorageErrorCode.NOT_FOUND:
        return NotFoundException(STORAGE_ERROR_MESSAGES[code])
    if code == StorageErrorCode.CONNECTIVITY:
        return ConnectivityException(STORAGE_ERROR_MESSAGES[code])

    # Unclassified failures keep the backend's own message
    return StorageException(str(_driver_error(exc)))


def storage_operation(
    method: Callable[..., Awaitable[T]]
) -> Callable[..., Awaitable[T]]:
    """
    Decorate a repository coroutine so backend errors surface as StorageException

    The session is rolled back on failure, discarding only the failed
    write; anything committed earlier stays committed.
    """

    @functools.wraps(method)
    async def wrapper(self, *args, **kwargs) -> T:
        try:
            return await method(self, *args, **kwargs)
        except CandidateIntakeException:
            await self.session.rollback()
            raise
        except Exception as exc:
            await self.session.rollback()
            translated = translate_storage_error(exc)
            logger.error(
                f"{type(self).__name__}.{method.__name__} failed: {translated.message}",
                exc_info=True
            )
            raise translated from exc

    return wrapper
