"""Recall rating scale for the study engine."""

from enum import IntEnum


class Rating(IntEnum):
    """Self-rated recall quality, ordered from worst to best."""
    AGAIN = 0  # forgotten; counts as a lapse
    HARD = 1
    GOOD = 2
    EASY = 3

    @classmethod
    def parse(cls, value) -> 'Rating':
        """
        Coerce user input into a Rating.

        Accepts a Rating, its integer value (0-3), its name in any case,
        or a one-letter shortcut (a/h/g/e). Digit strings are rejected:
        keypad buttons are numbered 1-4 and are mapped by the caller.

        Raises:
            ValueError if the value names no rating.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, bool):
            raise ValueError(f"Not a rating: {value!r}")
        if isinstance(value, int):
            try:
                return cls(value)
            except ValueError:
                raise ValueError(f"Rating must be 0-3, got {value}") from None
        if isinstance(value, str):
            key = value.strip().upper()
            if key in cls.__members__:
                return cls[key]
            for member in cls:
                if key and member.name.startswith(key) and len(key) == 1:
                    return member
        raise ValueError(f"Not a rating: {value!r}")

    @property
    def label(self) -> str:
        return self.name.capitalize()
