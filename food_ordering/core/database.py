"""
Database configuration and connection management
"""
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker, Session
from food_ordering.core.config import settings


def build_engine(url: str, **kwargs):
    """Create an engine; SQLite connections are shared with the request threadpool"""
    if url.startswith("sqlite"):
        kwargs.setdefault("connect_args", {"check_same_thread": False})
    return create_engine(url, pool_pre_ping=True, echo=settings.SQL_ECHO, **kwargs)


# SQLAlchemy setup
engine = build_engine(settings.DATABASE_URL)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()

def get_db() -> Iterator[Session]:
    """Get database session"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

@contextmanager
def transaction(db: Session) -> Iterator[Session]:
    """Commit on success, roll back every pending write on any error"""
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise

def create_tables(bind=None):
    """Create all database tables"""
    # Register every model on Base.metadata
    from food_ordering import models  # noqa: F401
    Base.metadata.create_all(bind=bind or engine)

def drop_tables(bind=None):
    """Drop all database tables (for testing/reset)"""
    from food_ordering import models  # noqa: F401
    Base.metadata.drop_all(bind=bind or engine)
