"""Engine and session factory for the movie discovery database."""
from contextlib import contextmanager
from typing import Callable, Iterator, Optional

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from moviediscovery_recommendation_service.config import get_database_url

DATABASE_URL = get_database_url()

if DATABASE_URL is None:
    raise ValueError("DATABASE_URL is not configured. Set the DATABASE_URL environment variable.")

engine = create_engine(
    DATABASE_URL,
    pool_pre_ping=True,
    pool_recycle=3600,
    echo=False  # Set to True for SQL debugging
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@contextmanager
def session_scope(session_factory: Optional[Callable[[], Session]] = None) -> Iterator[Session]:
    """
    Open a session for the duration of a request.

    Args:
        session_factory: Factory to open the session with (default: SessionLocal)

    Yields:
        Database session, closed on exit
    """
    db = (session_factory or SessionLocal)()
    try:
        yield db
    finally:
        db.close()
