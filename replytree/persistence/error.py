"""Persistence layer error translation."""

from contextlib import contextmanager
from typing import Iterator

import logfire
from sqlalchemy.exc import SQLAlchemyError

from replytree.domain.error import DependencyError


@contextmanager
def storage_errors(operation: str) -> Iterator[None]:
    """Translate database driver failures into DependencyError.

    Args:
        operation: Repository operation name, for the log and error message

    Raises:
        DependencyError: If the wrapped block raises a SQLAlchemy or OS error
    """
    try:
        yield
    except (SQLAlchemyError, OSError) as e:
        logfire.error(
            "Storage operation failed",
            operation=operation,
            error=str(e),
            error_type=type(e).__name__,
        )
        raise DependencyError(f"{operation} failed: {e}") from e
