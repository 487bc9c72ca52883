# patent_search/db/session_manager.py
from contextlib import contextmanager
from typing import Generator
import logging

from sqlalchemy.orm import Session

from patent_search.db.database import Database

logger = logging.getLogger(__name__)


@contextmanager
def db_session(database: Database) -> Generator[Session, None, None]:
    """
    Context manager for database sessions outside of request handling.
    Commits on success, rolls back and re-raises on any error, and always
    closes the session.

    Yields:
        A SQLAlchemy session.

    Usage:
        with db_session(database) as session:
            session.add(...)
    """
    session = database.session()
    try:
        yield session
        session.commit()
    except Exception as e:
        session.rollback()
        logger.error(f"Database session error: {str(e)}")
        raise
    finally:
        session.close()
