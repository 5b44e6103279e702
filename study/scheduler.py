"""Spaced repetition scheduler and due-card selection."""

import math
from dataclasses import dataclass, replace
from typing import Dict, Iterable, Optional, Tuple

from study.models import Card
from study.ratings import Rating

MIN_EASE = 1.3
MIN_INTERVAL = 1

MINUTE_MS = 60 * 1000
DAY_MS = 24 * 60 * 60 * 1000


@dataclass(frozen=True)
class Transition:
    """How one rating moves a card's interval and ease."""
    interval_factor: Optional[float]  # None resets to MIN_INTERVAL
    ease_delta: float
    is_lapse: bool = False


TRANSITIONS: Dict[Rating, Transition] = {
    Rating.AGAIN: Transition(interval_factor=None, ease_delta=-0.20, is_lapse=True),
    Rating.HARD: Transition(interval_factor=1.2, ease_delta=-0.05),
    Rating.GOOD: Transition(interval_factor=2.0, ease_delta=0.0),
    Rating.EASY: Transition(interval_factor=2.5, ease_delta=0.15),
}


def unit_length_ms(unit_is_minutes: bool) -> int:
    return MINUTE_MS if unit_is_minutes else DAY_MS


def round_half_up(value: float) -> int:
    """Round to nearest integer, ties away from zero (inputs are >= 0)."""
    return int(math.floor(value + 0.5))


def schedule(card: Card, rating: Rating, now: int, unit_is_minutes: bool) -> Card:
    """
    Apply one rating to a card and return the rescheduled copy.

    Args:
        card:            Card to rate (left untouched)
        rating:          Rating, or anything Rating.parse accepts
        now:             Review time, epoch ms
        unit_is_minutes: True for minute intervals, False for days

    Returns:
        New Card with interval, ease, lapses, last_reviewed and next_review
        updated. next_review is always now + interval * unit.
    """
    rule = TRANSITIONS[Rating.parse(rating)]

    if rule.interval_factor is None:
        interval = MIN_INTERVAL
    else:
        interval = max(MIN_INTERVAL, round_half_up(card.interval * rule.interval_factor))

    ease = max(MIN_EASE, round(card.ease + rule.ease_delta, 4))
    lapses = card.lapses + 1 if rule.is_lapse else card.lapses

    return replace(
        card,
        interval=interval,
        ease=ease,
        lapses=lapses,
        last_reviewed=now,
        next_review=now + interval * unit_length_ms(unit_is_minutes),
    )


def effective_next_review(card: Card) -> int:
    """next_review, with a missing value read as 0 (due since forever)."""
    return card.next_review or 0


def due_cards(cards: Iterable[Card], now: int) -> Tuple[Card, ...]:
    """Return cards with next_review <= now, most overdue first."""
    due = [c for c in cards if effective_next_review(c) <= now]
    due.sort(key=effective_next_review)
    return tuple(due)
