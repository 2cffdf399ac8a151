"""
Quote catalog for the Lambda Gateway backend.

A fixed, read-only sequence of quotes with uniform random selection.
The backing tuple is never mutated, so concurrent callers need no locking.
"""

import random
from dataclasses import asdict, dataclass
from typing import Dict, Optional, Sequence, Tuple


@dataclass(frozen=True)
class Quote:
    text: str
    author: str

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)


QUOTES: Tuple[Quote, ...] = (
    Quote("The only way to do great work is to love what you do.", "Steve Jobs"),
    Quote("Innovation distinguishes between a leader and a follower.", "Steve Jobs"),
    Quote("Code is like humor. When you have to explain it, it's bad.", "Cory House"),
    Quote("First, solve the problem. Then, write the code.", "John Johnson"),
    Quote("Experience is the name everyone gives to their mistakes.", "Oscar Wilde"),
    Quote("Simplicity is the soul of efficiency.", "Austin Freeman"),
    Quote("Make it work, make it right, make it fast.", "Kent Beck"),
    Quote(
        "Any fool can write code that a computer can understand. "
        "Good programmers write code that humans can understand.",
        "Martin Fowler",
    ),
)


class QuoteCatalog:
    def __init__(self, quotes: Sequence[Quote] = QUOTES, rng: Optional[random.Random] = None):
        """
        Args:
            quotes (Sequence[Quote]): Non-empty quotes to choose from.
            rng (Optional[random.Random]): Random source; seed one for reproducible tests.

        Raises:
            ValueError: If `quotes` is empty.
        """
        if not quotes:
            raise ValueError("QuoteCatalog needs at least one quote")
        self._quotes: Tuple[Quote, ...] = tuple(quotes)
        self._rng = rng or random.Random()

    @property
    def quotes(self) -> Tuple[Quote, ...]:
        return self._quotes

    def __len__(self) -> int:
        return len(self._quotes)

    def random_quote(self) -> Quote:
        """Return one quote chosen uniformly at random."""
        return self._rng.choice(self._quotes)
