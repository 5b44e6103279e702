"""Study engine service wrappers -- all return JSON-serializable dicts."""

from typing import Dict

from study.analytics import deck_stats
from study.ratings import Rating
from study.scheduler import schedule
from study.storage import CardStore


def _describe_interval(interval: int, unit_is_minutes: bool) -> str:
    unit = 'minute' if unit_is_minutes else 'day'
    return f"{interval} {unit}{'' if interval == 1 else 's'}"


def list_cards(store: CardStore) -> Dict:
    """Return every card, newest first."""
    cards = store.all_cards()
    return {
        'count': len(cards),
        'cards': [c.to_dict() for c in cards],
    }


def add_card(store: CardStore, question: str, answer: str, now: int) -> Dict:
    """
    Create a new card, due immediately.

    Raises:
        ValueError if question or answer is blank.
    """
    card = store.add_card(question, answer, now)
    return card.to_dict()


def get_due_cards(store: CardStore, now: int) -> Dict:
    """Return the due cards, most overdue first."""
    due = store.due_cards(now)
    return {
        'due_count': len(due),
        'cards': [c.to_dict() for c in due],
    }


def review_card(
    store: CardStore,
    card_id: str,
    rating,
    now: int,
    unit_is_minutes: bool,
) -> Dict:
    """
    Apply a rating to a card and persist the new schedule.

    Returns:
        {card, next_review_in}

    Raises:
        KeyError if card_id not found.
        ValueError if rating is not a valid rating.
    """
    parsed = Rating.parse(rating)
    card = store.get_card(card_id)
    if card is None:
        raise KeyError(f"Card not found: {card_id}")

    updated = schedule(card, parsed, now, unit_is_minutes)
    store.update_card(updated)

    return {
        'card': updated.to_dict(),
        'next_review_in': _describe_interval(updated.interval, unit_is_minutes),
    }


def reset_cards(store: CardStore) -> Dict:
    """Delete the whole collection."""
    return {'deleted': store.reset()}


def get_stats(store: CardStore, now: int, unit_is_minutes: bool) -> Dict:
    return deck_stats(store.all_cards(), now, unit_is_minutes)
