"""BlobStore backed by the `blobs` table."""

import logging
from typing import Any, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from server.db.models import Blob
from study.storage import BlobStore, StorageError

logger = logging.getLogger("flashdeck.storage")


class SqlBlobStore(BlobStore):
    """Key-value blobs in a SQL database, one row per key."""

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    def get(self, key: str) -> Optional[Any]:
        try:
            with self.session_factory() as db:
                row = db.get(Blob, key)
                return None if row is None else row.value
        except SQLAlchemyError as e:
            logger.exception("Reading blob %s failed", key)
            raise StorageError('unavailable', str(e), key) from e

    def set(self, key: str, value: Any) -> None:
        try:
            with self.session_factory() as db:
                row = db.get(Blob, key)
                if row is None:
                    db.add(Blob(key=key, value=value))
                else:
                    row.value = value
                db.commit()
        except SQLAlchemyError as e:
            logger.exception("Writing blob %s failed", key)
            raise StorageError('write_failed', str(e), key) from e

    def delete(self, key: str) -> None:
        try:
            with self.session_factory() as db:
                row = db.get(Blob, key)
                if row is not None:
                    db.delete(row)
                    db.commit()
        except SQLAlchemyError as e:
            raise StorageError('write_failed', str(e), key) from e
