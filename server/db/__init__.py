"""Database layer: SQLAlchemy models, session and blob store."""

from server.db.models import Base, Blob
from server.db.session import get_session_factory, init_db, reset_engine
from server.db.blob_store import SqlBlobStore

__all__ = [
    "Base",
    "Blob",
    "SqlBlobStore",
    "get_session_factory",
    "init_db",
    "reset_engine",
]
