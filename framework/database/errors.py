"""Translate storage errors into the application's exception taxonomy."""

from sqlalchemy.exc import IntegrityError, NoResultFound, SQLAlchemyError
from framework.exceptions.handler import (
    BusinessException,
    ConflictError,
    InternalError,
    NotFoundError,
    ValidationError,
)
from framework.logging.logger import get_logger

logger = get_logger("database")

# MySQL server error codes
MYSQL_DUPLICATE_ENTRY = 1062
MYSQL_FK_PARENT_ROW = 1451  # Cannot delete or update a parent row
MYSQL_FK_CHILD_ROW = 1452  # Cannot add or update a child row

_DUPLICATE_MARKERS = ("duplicate entry", "unique constraint")
_FOREIGN_KEY_MARKERS = ("foreign key constraint",)


def _error_code(exc: SQLAlchemyError):
    orig = getattr(exc, "orig", None)
    args = getattr(orig, "args", None)
    if args and isinstance(args[0], int):
        return args[0]
    return None


def translate_db_error(exc: SQLAlchemyError) -> BusinessException:
    """Map a SQLAlchemy error to ConflictError, ValidationError, NotFoundError or InternalError."""
    if isinstance(exc, NoResultFound):
        return NotFoundError("Resource not found")

    if isinstance(exc, IntegrityError):
        code = _error_code(exc)
        message = str(exc.orig if exc.orig is not None else exc).lower()
        if code == MYSQL_DUPLICATE_ENTRY or any(m in message for m in _DUPLICATE_MARKERS):
            logger.warning(f"Duplicate key: {message}")
            return ConflictError("Resource already exists")
        if code in (MYSQL_FK_PARENT_ROW, MYSQL_FK_CHILD_ROW) or any(m in message for m in _FOREIGN_KEY_MARKERS):
            logger.warning(f"Foreign key violation: {message}")
            return ValidationError("Referenced resource is invalid or still in use")

    logger.error(f"Database error: {exc}")
    return InternalError(f"Database error: {exc}")
