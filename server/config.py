"""Configuration for the Flashdeck API server."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from study.storage import DEFAULT_COLLECTION

_TRUE = ("1", "true", "yes")
_FALSE = ("0", "false", "no")


@dataclass
class Settings:
    """
    Storage location and scheduling unit for the server.

    Defaults resolve relative to the project root.
    Every field is overridable at construction for testing.
    """
    data_dir: Optional[Path] = None
    collection: Optional[str] = None
    unit_is_minutes: Optional[bool] = None
    storage_backend: Optional[str] = None  # file | sql
    database_url: Optional[str] = None
    cors_origins: List[str] = field(default_factory=lambda: ["http://localhost:3000"])

    def __post_init__(self):
        project_root = Path(__file__).resolve().parent.parent

        if self.data_dir is None:
            env_dir = os.environ.get("FLASHDECK_DATA_DIR")
            self.data_dir = Path(env_dir) if env_dir else project_root / "flashdeck_data"
        self.data_dir = Path(self.data_dir)

        if self.collection is None:
            self.collection = os.environ.get("FLASHDECK_COLLECTION", DEFAULT_COLLECTION)

        if self.unit_is_minutes is None:
            # Minutes (demo mode) unless told otherwise
            self.unit_is_minutes = True
            unit = os.environ.get("FLASHDECK_UNIT", "").lower()
            demo = os.environ.get("DEMO_MODE", "").lower()
            if unit in ("minutes", "days"):
                self.unit_is_minutes = unit == "minutes"
            elif demo in _TRUE:
                self.unit_is_minutes = True
            elif demo in _FALSE:
                self.unit_is_minutes = False

        if self.storage_backend is None:
            backend = os.environ.get("FLASHDECK_STORAGE", "file").lower()
            self.storage_backend = backend if backend in ("file", "sql") else "file"

        if self.database_url is None:
            self.database_url = os.environ.get(
                "DATABASE_URL", f"sqlite:///{self.data_dir / 'flashdeck.db'}"
            )

    @property
    def unit_label(self) -> str:
        return "minutes" if self.unit_is_minutes else "days"
