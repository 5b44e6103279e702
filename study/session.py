"""Interactive review session runner with injectable IO."""

import logging
from datetime import datetime
from typing import Callable, Dict, List, Optional

from study.models import Card, now_ms
from study.ratings import Rating
from study.scheduler import schedule
from study.storage import CardStore

logger = logging.getLogger("flashdeck.session")

# Button order shown to the user: 1=Again ... 4=Easy
BUTTONS = {str(r.value + 1): r for r in Rating}


def format_timestamp(ms: Optional[int]) -> str:
    if ms is None:
        return 'never'
    return datetime.fromtimestamp(ms / 1000).strftime('%Y-%m-%d %H:%M')


def read_rating(
    input_fn: Callable[[str], str],
    output_fn: Callable[[str], None],
) -> Optional[Rating]:
    """Prompt until a valid rating is entered. Returns None on 'q'."""
    prompt = "Rate  1) Again  2) Hard  3) Good  4) Easy: "
    while True:
        raw = input_fn(prompt).strip().lower()
        if raw == 'q':
            return None
        if raw in BUTTONS:
            return BUTTONS[raw]
        if raw.isalpha():
            try:
                return Rating.parse(raw)
            except ValueError:
                pass
        output_fn("  Enter 1-4 or a/h/g/e.")


def run_review_session(
    storage: CardStore,
    due: List[Card],
    unit_is_minutes: bool = True,
    input_fn: Callable = input,
    output_fn: Callable = print,
    now_fn: Callable[[], int] = now_ms,
) -> Dict:
    """
    Run an interactive review session over the due cards.

    Flow per card:
        1. Show question, wait for Enter ('q' quits, 's' skips)
        2. Show answer
        3. Read a rating
        4. Reschedule and persist the card

    Returns:
        Summary dict: {reviewed, skipped, again, hard, good, easy}
    """
    summary = {'reviewed': 0, 'skipped': 0}
    for r in Rating:
        summary[r.name.lower()] = 0
    unit = 'min' if unit_is_minutes else 'd'

    output_fn(f"\n{'='*60}")
    output_fn(f"REVIEW SESSION -- {len(due)} card(s) due")
    output_fn(f"{'='*60}")
    output_fn("Press Enter to reveal, 's' to skip, 'q' to quit.\n")

    for idx, card in enumerate(due, 1):
        output_fn(f"\n--- Card {idx}/{len(due)} ---")
        output_fn(f"  {card.question}")

        try:
            command = input_fn("\n[reveal] ").strip().lower()
        except (EOFError, KeyboardInterrupt):
            output_fn("\nSession ended.")
            break

        if command == 'q':
            output_fn("Ending session early.")
            break
        if command == 's':
            summary['skipped'] += 1
            output_fn("  (skipped)")
            continue

        output_fn(f"  Answer: {card.answer}")

        try:
            rating = read_rating(input_fn, output_fn)
        except (EOFError, KeyboardInterrupt):
            output_fn("\nSession ended.")
            break
        if rating is None:
            output_fn("Ending session early.")
            break

        updated = schedule(card, rating, now_fn(), unit_is_minutes)
        storage.update_card(updated)
        logger.debug("Rated %s %s -> interval=%d ease=%.2f",
                     card.card_id, rating.name, updated.interval, updated.ease)

        output_fn(f"  Next review: {format_timestamp(updated.next_review)} "
                  f"(interval: {updated.interval}{unit}, ease: {updated.ease:.2f})")

        summary['reviewed'] += 1
        summary[rating.name.lower()] += 1

    output_fn(f"\n{'='*60}")
    output_fn(f"Reviewed {summary['reviewed']}, skipped {summary['skipped']}.")
    return summary
