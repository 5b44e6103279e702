"""Data model for the study engine: the Card dataclass."""

import time
import uuid
from dataclasses import dataclass, asdict, fields
from typing import Dict, Optional

DEFAULT_INTERVAL = 1
DEFAULT_EASE = 2.5

# Keys written by the browser build of the deck (localStorage blob).
_CAMEL_CASE_KEYS = {
    'id': 'card_id',
    'lastReviewed': 'last_reviewed',
    'nextReview': 'next_review',
}


def now_ms() -> int:
    """Wall-clock time as integer epoch milliseconds."""
    return int(time.time() * 1000)


def make_card_id() -> str:
    """Random opaque card ID, 16 hex chars."""
    return uuid.uuid4().hex[:16]


@dataclass(frozen=True)
class Card:
    """
    A question/answer card with its review schedule.

    Timestamps are epoch milliseconds. interval is a count of the
    process-wide unit (minutes or days), never stored with the card.
    next_review may be None for partial data; such a card counts as due.
    """
    card_id: str
    question: str
    answer: str
    created: int
    last_reviewed: Optional[int] = None
    interval: int = DEFAULT_INTERVAL
    ease: float = DEFAULT_EASE
    lapses: int = 0
    next_review: Optional[int] = None

    def to_dict(self) -> Dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict) -> 'Card':
        data = {_CAMEL_CASE_KEYS.get(k, k): v for k, v in data.items()}
        # Filter to known fields only
        known = {f.name for f in fields(cls)}
        data = {k: v for k, v in data.items() if k in known}
        return cls(**data)


def new_card(question: str, answer: str, now: Optional[int] = None) -> Card:
    """
    Create a brand-new card, due immediately.

    Raises:
        ValueError if question or answer is blank.
    """
    question = (question or '').strip()
    answer = (answer or '').strip()
    if not question or not answer:
        raise ValueError("Please provide question and answer")
    created = now_ms() if now is None else now
    return Card(
        card_id=make_card_id(),
        question=question,
        answer=answer,
        created=created,
        last_reviewed=None,
        interval=DEFAULT_INTERVAL,
        ease=DEFAULT_EASE,
        lapses=0,
        next_review=created,
    )
