"""Database package: ORM model and session helpers."""

from .database import (
    engine,
    SessionLocal,
    build_engine,
    init_db,
    get_session,
)
from . import models

__all__ = [
    "engine",
    "SessionLocal",
    "build_engine",
    "init_db",
    "get_session",
    "models",
]
