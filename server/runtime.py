from __future__ import annotations

import threading
from typing import TYPE_CHECKING, Optional

from study.storage import BlobStore, CardStore, JsonFileBlobStore

if TYPE_CHECKING:
    from server.config import Settings


class Runtime:
   """
   Process-wide runtime cache for the card store.

   - Blob backend: built from settings (JSON files or SQL table)
   - Card store: loaded once, cached; writes go straight to the backend
   """

   def __init__(self, settings: "Settings"):
      self.settings = settings
      self._store_lock = threading.Lock()
      self._store: Optional[CardStore] = None

   # ----------------------------
   # Store
   # ----------------------------
   def get_store(self) -> CardStore:
      if self._store is not None:
         return self._store
      with self._store_lock:
         if self._store is None:
               self._store = CardStore(
                  build_blob_store(self.settings),
                  collection=self.settings.collection,
               )
      return self._store


def build_blob_store(settings: "Settings") -> BlobStore:
    """Blob backend selected by settings.storage_backend."""
    if settings.storage_backend == "sql":
        from server.db.blob_store import SqlBlobStore
        from server.db.session import get_session_factory, init_db
        init_db(settings)
        return SqlBlobStore(get_session_factory(settings))
    return JsonFileBlobStore(settings.data_dir)


def runtime_from_settings(settings: "Settings") -> Runtime:
    """Build Runtime from Settings. Used by get_runtime dependency."""
    return Runtime(settings)
