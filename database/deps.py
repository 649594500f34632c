"""Dependency helpers exposing sessions and repositories to FastAPI routes."""

from fastapi import Depends
from sqlalchemy.orm import Session

from core.repository import KeyValueRepository
from .database import get_session


def get_db():
    """Yield a DB session for FastAPI dependency injection."""
    yield from get_session()


def get_repository(db: Session = Depends(get_db)) -> KeyValueRepository:
    """Wrap the request session in the document repository the engines use."""
    return KeyValueRepository(db)
