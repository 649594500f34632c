"""Database helpers: engine, session factory and schema initialization."""

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from core.config import DATABASE_URL
from .models import Base


def build_engine(url: str = DATABASE_URL):
    """Create an engine; SQLite connections are shared across FastAPI threads."""
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    return create_engine(url, connect_args=connect_args)


engine = build_engine()
SessionLocal = sessionmaker(bind=engine)


def init_db(bind=None):
    """Create the document table if it does not exist yet."""
    Base.metadata.create_all(bind=bind or engine)


def get_session():
    """Yield a SQLAlchemy session for the request scope.

    Use this generator as a FastAPI dependency to ensure the session is
    properly closed after the request completes.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
