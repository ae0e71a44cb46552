"""
Exceptions shared by services and the API layer
"""
from contextlib import contextmanager
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)


class StorageError(RuntimeError):
    """An underlying database query failed"""

    def __init__(self, operation: str, original: Exception):
        super().__init__(f"Storage failure while {operation}: {original}")
        self.operation = operation
        self.original = original


@contextmanager
def storage_errors(db: Session, operation: str):
    """
    Roll back and re-raise any SQLAlchemy failure as StorageError.

    Usage:
        with storage_errors(self.db, "creating an assistance"):
            ...
    """
    try:
        yield
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Database error while {operation}: {e}")
        raise StorageError(operation, e) from e
