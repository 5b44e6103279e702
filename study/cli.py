"""
Study mode CLI.

Usage:
    python -m study.cli add "What is a lapse?" "Forgetting a card (rated Again)"
    python -m study.cli due
    python -m study.cli review [--days | --minutes]
    python -m study.cli browse
    python -m study.cli stats
    python -m study.cli reset [--yes]
    python -m study.cli import cards.json
    python -m study.cli export cards.json

Defaults come from the same Settings the API server reads
(FLASHDECK_DATA_DIR, FLASHDECK_COLLECTION, FLASHDECK_UNIT, DEMO_MODE,
FLASHDECK_STORAGE, DATABASE_URL). Global options --data-dir, --collection
and --days/--minutes override them; -v/--verbose turns on debug logging.
"""

import argparse
import json
import logging
import sys

from server.config import Settings
from server.runtime import build_blob_store
from study.analytics import deck_stats
from study.models import Card, now_ms
from study.session import format_timestamp, run_review_session
from study.storage import CardStore, StorageError


def _open_store(args) -> CardStore:
    settings = args.settings
    return CardStore(build_blob_store(settings), collection=settings.collection)


def _unit_is_minutes(args) -> bool:
    return args.settings.unit_is_minutes


def cmd_add(args):
    """Add a card."""
    store = _open_store(args)
    card = store.add_card(args.question, args.answer)
    print(f"Added card {card.card_id}: {card.question[:70]}")


def cmd_due(args):
    """Show due cards."""
    store = _open_store(args)
    due = store.due_cards(now_ms())
    if not due:
        print("No cards due -- try adding some!")
        return
    print(f"\n{len(due)} card(s) due for review:\n")
    for i, card in enumerate(due, 1):
        print(f"  {i}. [{card.card_id}] {card.question[:80]}")
        print(f"     next={format_timestamp(card.next_review)}  interval={card.interval}  "
              f"ease={card.ease:.2f}  lapses={card.lapses}")


def cmd_review(args):
    """Run interactive review session."""
    store = _open_store(args)
    due = store.due_cards(now_ms())
    if not due:
        print("No cards due -- try adding some!")
        return
    run_review_session(store, due, unit_is_minutes=_unit_is_minutes(args))


def cmd_browse(args):
    """List every card."""
    store = _open_store(args)
    cards = store.all_cards()
    if not cards:
        print("No cards yet. Add your first card.")
        return
    for card in cards:
        print(f"\n[{card.card_id}] {card.question}")
        print(f"  Next: {format_timestamp(card.next_review or card.created)}")
        print(f"  Answer: {card.answer}")


def cmd_stats(args):
    """Show deck statistics."""
    store = _open_store(args)
    stats = deck_stats(store.all_cards(), now_ms(), _unit_is_minutes(args))
    print(f"\nDeck: {store.collection}")
    print(f"  Total cards:    {stats['total']}")
    print(f"  Due now:        {stats['due']}")
    print(f"  Unit:           {stats['unit']}")
    print(f"  Never reviewed: {stats['never_reviewed']}")
    print(f"  Total lapses:   {stats['total_lapses']}")
    if stats['average_ease'] is not None:
        print(f"  Average ease:   {stats['average_ease']:.2f}")


def cmd_reset(args):
    """Delete every card."""
    store = _open_store(args)
    if not args.yes:
        reply = input("Reset all cards? This cannot be undone. [y/N] ")
        if reply.strip().lower() not in ('y', 'yes'):
            print("Reset cancelled.")
            return
    removed = store.reset()
    print(f"Removed {removed} card(s).")


def cmd_import(args):
    """Merge cards from a JSON array file."""
    with open(args.file, 'r', encoding='utf-8') as f:
        data = json.load(f)
    if not isinstance(data, list):
        raise ValueError(f"{args.file}: expected a JSON array of cards")
    try:
        cards = [Card.from_dict(item) for item in data]
    except (TypeError, AttributeError) as e:
        raise ValueError(f"{args.file}: bad card record: {e}") from e
    store = _open_store(args)
    added = store.merge_cards(cards)
    print(f"Imported {len(cards)} card(s): {added} new, {len(cards) - added} updated.")


def cmd_export(args):
    """Write the collection to a JSON array file."""
    store = _open_store(args)
    cards = store.all_cards()
    with open(args.file, 'w', encoding='utf-8') as f:
        json.dump([c.to_dict() for c in cards], f, ensure_ascii=False, indent=2)
    print(f"Exported {len(cards)} card(s) to {args.file}")


COMMANDS = {
    'add': cmd_add,
    'due': cmd_due,
    'review': cmd_review,
    'browse': cmd_browse,
    'stats': cmd_stats,
    'reset': cmd_reset,
    'import': cmd_import,
    'export': cmd_export,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Flashcards -- spaced repetition study deck",
        prog="python -m study.cli",
    )
    parser.add_argument(
        '--data-dir', default=None,
        help="Directory holding the deck (default: $FLASHDECK_DATA_DIR or flashdeck_data)",
    )
    parser.add_argument(
        '--collection', default=None,
        help="Collection name (default: $FLASHDECK_COLLECTION or flashcards_v1)",
    )
    unit = parser.add_mutually_exclusive_group()
    unit.add_argument('--days', dest='unit_is_minutes', action='store_false', default=None,
                      help='Schedule intervals in days')
    unit.add_argument('--minutes', dest='unit_is_minutes', action='store_true', default=None,
                      help='Schedule intervals in minutes (default: $FLASHDECK_UNIT / $DEMO_MODE)')
    parser.add_argument('-v', '--verbose', action='store_true', help='Debug logging')

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    add_parser = subparsers.add_parser('add', help='Add a card')
    add_parser.add_argument('question')
    add_parser.add_argument('answer')

    subparsers.add_parser('due', help='Show cards due for review')
    subparsers.add_parser('review', help='Run interactive review session')
    subparsers.add_parser('browse', help='List all cards')
    subparsers.add_parser('stats', help='Show deck statistics')

    reset_parser = subparsers.add_parser('reset', help='Delete every card')
    reset_parser.add_argument('--yes', action='store_true', help='Skip confirmation')

    import_parser = subparsers.add_parser('import', help='Merge cards from a JSON file')
    import_parser.add_argument('file')

    export_parser = subparsers.add_parser('export', help='Write cards to a JSON file')
    export_parser.add_argument('file')

    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    handler = COMMANDS.get(args.command)
    if handler is None:
        parser.print_help()
        return 1

    args.settings = Settings(
        data_dir=args.data_dir,
        collection=args.collection,
        unit_is_minutes=args.unit_is_minutes,
    )

    try:
        handler(args)
    except StorageError as e:
        print(f"Storage error: {e}", file=sys.stderr)
        return 1
    except (ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
