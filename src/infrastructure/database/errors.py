"""Classification and translation of database driver errors."""

from collections.abc import Awaitable, Callable
from functools import wraps
from typing import ParamSpec, TypeVar

import structlog
from sqlalchemy.exc import DBAPIError, SQLAlchemyError

from core.exceptions import DataServiceError

logger = structlog.get_logger()

P = ParamSpec("P")
T = TypeVar("T")

# PostgreSQL SQLSTATE for "undefined_table"
UNDEFINED_TABLE_SQLSTATE = "42P01"

_MISSING_RELATION_MARKERS = (
    "no such table",  # SQLite
    "could not find the table",  # PostgREST schema cache
    "pgrst205",
)


def is_missing_relation(exc: BaseException) -> bool:
    """Tell whether a driver error means the queried table does not exist."""
    if not isinstance(exc, DBAPIError):
        return False

    orig = exc.orig
    code = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if code:
        # an undefined column also reads "... of relation ... does not exist"
        return code == UNDEFINED_TABLE_SQLSTATE

    message = str(orig).lower()
    if "relation" in message and "does not exist" in message:
        return True
    return any(marker in message for marker in _MISSING_RELATION_MARKERS)


def describe(exc: SQLAlchemyError) -> str:
    """Short description of a database error without the SQL statement."""
    if isinstance(exc, DBAPIError) and exc.orig is not None:
        return f"{type(exc).__name__}: {exc.orig}"
    return f"{type(exc).__name__}: {exc}"


def translate_errors(
    operation: str,
) -> Callable[[Callable[P, Awaitable[T]]], Callable[P, Awaitable[T]]]:
    """Re-raise SQLAlchemy errors from a repository call as ``DataServiceError``."""

    def decorator(func: Callable[P, Awaitable[T]]) -> Callable[P, Awaitable[T]]:
        @wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            try:
                return await func(*args, **kwargs)
            except SQLAlchemyError as exc:
                reason = describe(exc)
                logger.warning("data_service_error", operation=operation, reason=reason)
                raise DataServiceError(operation, reason) from exc

        return wrapper

    return decorator
