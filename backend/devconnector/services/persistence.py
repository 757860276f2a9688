import logging
from contextlib import contextmanager
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from devconnector.core.errors import ServerError

logger = logging.getLogger(__name__)


@contextmanager
def persistence_errors(db: Session, action: str):
    """
    Turn database failures inside the block into a generic ServerError.

    The session is rolled back so it is usable again, and the original
    error is logged server-side only.
    """
    try:
        yield
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Database error while trying to %s", action)
        raise ServerError()


def parse_id(value: str | int) -> int | None:
    """Parse a path identifier, returning None for malformed values"""
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        return None
    return parsed if parsed > 0 else None
