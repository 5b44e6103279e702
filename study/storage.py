"""Blob-backed card storage: the whole collection is read and written at once."""

import json
import logging
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Optional

from study.models import Card, new_card
from study.scheduler import due_cards

logger = logging.getLogger("flashdeck.storage")

DEFAULT_COLLECTION = 'flashcards_v1'


@dataclass(eq=False)
class StorageError(Exception):
    """Structured storage failure. The in-memory collection is left intact."""
    kind: str  # unreadable | corrupt | write_failed | unavailable
    message: str
    key: Optional[str] = None

    def __str__(self) -> str:
        where = f" [{self.key}]" if self.key else ""
        return f"{self.kind}{where}: {self.message}"


class BlobStore(ABC):
    """Key-value store of JSON-compatible values."""

    @abstractmethod
    def get(self, key: str) -> Optional[Any]:
        """Return the stored value, or None when the key is absent."""

    @abstractmethod
    def set(self, key: str, value: Any) -> None:
        """Replace the value stored under key."""

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove key; absent keys are ignored."""


class JsonFileBlobStore(BlobStore):
    """
    One JSON file per key under a root directory.

    Writes are atomic: temp write + rename.
    """

    def __init__(self, root):
        self.root = Path(root)

    def _path(self, key: str) -> Path:
        return self.root / f"{key}.json"

    def get(self, key: str) -> Optional[Any]:
        path = self._path(key)
        if not path.exists():
            return None
        try:
            with open(path, 'r', encoding='utf-8') as f:
                return json.load(f)
        except OSError as e:
            raise StorageError('unreadable', str(e), key) from e
        except json.JSONDecodeError as e:
            raise StorageError('corrupt', f"{path.name}: {e}", key) from e

    def set(self, key: str, value: Any) -> None:
        path = self._path(key)
        tmp = path.with_suffix(path.suffix + '.tmp')
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp, 'w', encoding='utf-8') as f:
                json.dump(value, f, ensure_ascii=False, indent=2)
            tmp.replace(path)
        except (OSError, TypeError, ValueError) as e:
            tmp.unlink(missing_ok=True)
            raise StorageError('write_failed', str(e), key) from e

    def delete(self, key: str) -> None:
        try:
            self._path(key).unlink(missing_ok=True)
        except OSError as e:
            raise StorageError('write_failed', str(e), key) from e


class CardStore:
    """
    Card collection kept in a single blob.

    Loads the whole collection on init; every mutation saves the whole
    collection (get-all / set-all). The in-memory list is only replaced
    after a save succeeds. Each read-modify-write holds the store lock.
    """

    def __init__(self, blobs: BlobStore, collection: str = DEFAULT_COLLECTION):
        self.blobs = blobs
        self.collection = collection
        self._lock = threading.RLock()
        self._cards: List[Card] = self.load()

    def load(self) -> List[Card]:
        """Read the collection from the blob store."""
        raw = self.blobs.get(self.collection)
        if raw is None:
            return []
        if not isinstance(raw, list):
            raise StorageError('corrupt', "collection is not a JSON array", self.collection)
        try:
            cards = [Card.from_dict(item) for item in raw]
        except (TypeError, AttributeError) as e:
            raise StorageError('corrupt', f"bad card record: {e}", self.collection) from e
        logger.debug("Loaded %d card(s) from %s", len(cards), self.collection)
        return cards

    def save(self, cards: List[Card]) -> None:
        """Replace the stored collection, then the in-memory copy."""
        cards = list(cards)
        with self._lock:
            try:
                self.blobs.set(self.collection, [c.to_dict() for c in cards])
            except StorageError:
                logger.exception("Saving %s failed", self.collection)
                raise
            self._cards = cards

    def all_cards(self) -> List[Card]:
        return list(self._cards)

    def get_card(self, card_id: str) -> Optional[Card]:
        for card in self._cards:
            if card.card_id == card_id:
                return card
        return None

    def count(self) -> int:
        return len(self._cards)

    def due_cards(self, now: int) -> List[Card]:
        return list(due_cards(self._cards, now))

    def add_card(self, question: str, answer: str, now: Optional[int] = None) -> Card:
        """Create a card and put it at the front (newest first)."""
        card = new_card(question, answer, now)
        with self._lock:
            self.save([card] + self._cards)
        logger.info("Added card %s", card.card_id)
        return card

    def update_card(self, card: Card) -> None:
        """Replace the stored card with the same card_id."""
        with self._lock:
            if self.get_card(card.card_id) is None:
                raise KeyError(f"Card not found: {card.card_id}")
            self.save([card if c.card_id == card.card_id else c for c in self._cards])

    def merge_cards(self, cards: List[Card]) -> int:
        """
        Upsert cards by card_id; new ones go to the front.

        Returns the number of cards that were not already stored.
        """
        incoming = {c.card_id: c for c in cards}
        with self._lock:
            merged = [incoming.pop(c.card_id, c) for c in self._cards]
            added = list(incoming.values())
            self.save(added + merged)
        return len(added)

    def reset(self) -> int:
        """Delete every card. Returns how many were removed."""
        with self._lock:
            removed = len(self._cards)
            try:
                self.blobs.delete(self.collection)
            except StorageError:
                logger.exception("Resetting %s failed", self.collection)
                raise
            self._cards = []
        logger.info("Reset %s: removed %d card(s)", self.collection, removed)
        return removed
