"""Deck summary numbers for the sidebar and `stats` command."""

from typing import Dict, List

from study.models import Card
from study.scheduler import due_cards


def unit_label(unit_is_minutes: bool) -> str:
    return 'minutes' if unit_is_minutes else 'days'


def deck_stats(cards: List[Card], now: int, unit_is_minutes: bool) -> Dict:
    """
    Summarize a card collection.

    Returns:
        Dict with: total, due, unit, never_reviewed, total_lapses,
        average_ease (None for an empty deck)
    """
    total = len(cards)
    average_ease = None
    if total:
        average_ease = round(sum(c.ease for c in cards) / total, 2)
    return {
        'total': total,
        'due': len(due_cards(cards, now)),
        'unit': unit_label(unit_is_minutes),
        'never_reviewed': sum(1 for c in cards if c.last_reviewed is None),
        'total_lapses': sum(c.lapses for c in cards),
        'average_ease': average_ease,
    }
