"""
Database helper utilities for the Academic Metrics Engine
"""

import logging
from contextlib import contextmanager

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from database import DatabaseError
from utils.exceptions import ConflictError

logger = logging.getLogger(__name__)

@contextmanager
def unit_of_work(session):
    """Commit everything written inside the block, or nothing.

    Engine errors raised inside the block roll back and propagate unchanged;
    store failures roll back and surface as DatabaseError.
    """
    try:
        yield session
        session.commit()
    except IntegrityError as e:
        session.rollback()
        logger.warning("Integrity error, unit of work rolled back: %s", e.orig)
        if 'UNIQUE constraint failed' in str(e) or 'duplicate key' in str(e):
            raise ConflictError("Duplicate entry found") from e
        raise DatabaseError("Database constraint violation") from e
    except SQLAlchemyError as e:
        session.rollback()
        logger.exception("Unit of work failed")
        raise DatabaseError(f"Database operation failed: {str(e)}") from e
    except Exception:
        session.rollback()
        raise
