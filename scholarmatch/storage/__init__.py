"""Storage module for database operations."""

from scholarmatch.storage.database import create_engine, get_session_factory, init_db, session_scope
from scholarmatch.storage.repository import MatchingStore, SqlMatchingStore
from scholarmatch.storage.seed import seed_catalog

__all__ = [
    "create_engine",
    "get_session_factory",
    "init_db",
    "session_scope",
    "MatchingStore",
    "SqlMatchingStore",
    "seed_catalog",
]
