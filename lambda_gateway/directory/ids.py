from __future__ import annotations
"""
Strategies for user-id generation in lambda_gateway.

Provided strategies:
- RandomIdStrategy: 64 bits from `secrets` -> Base36 (default)
- UUID4IdStrategy: uuid4 hex (122 random bits)
- SequentialIdStrategy: process-local monotonically increasing integer -> Base36, optional prefix

Collision bounds:
- RandomIdStrategy: for n live ids the probability of any collision is at most
  n^2 / 2^65 (birthday bound over 2^64 values); ~2.7e-8 at one million users.
  UserDirectory re-draws on a collision with a live id, so stored ids stay unique.
- UUID4IdStrategy: n^2 / 2^123.
- SequentialIdStrategy: collision-free within a single process; restarts begin again at `start`.

Configuration (via lambda_gateway.config):
- ID_STRATEGY: "random" (default), "uuid4", "sequential"
- ID_PREFIX: optional prefix for SequentialIdStrategy
"""

import itertools
import logging
import secrets
import threading
import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, Optional, Type

log = logging.getLogger(__name__)

_BASE36_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyz"
_BASE36_BASE = len(_BASE36_ALPHABET)


def _base36_encode(num: int) -> str:
    """
    Convert a non-negative integer to a lower-case Base36 string.
    0 -> "0", 35 -> "z", 36 -> "10"
    """
    if num < 0:
        raise ValueError("num must be non-negative")
    if num == 0:
        return "0"
    out = []
    while num > 0:
        num, rem = divmod(num, _BASE36_BASE)
        out.append(_BASE36_ALPHABET[rem])
    return "".join(reversed(out))


class BaseIdStrategy(ABC):
    """Abstract base for user-id generation strategies."""

    @abstractmethod
    def generate(self) -> str:  # pragma: no cover
        """Return a new opaque id string."""
        raise NotImplementedError


@dataclass(frozen=True)
class RandomIdStrategy(BaseIdStrategy):
    """Random Base36 ids drawn from `bits` bits of OS entropy."""
    bits: int = 64

    def generate(self) -> str:
        return _base36_encode(secrets.randbits(self.bits))


@dataclass(frozen=True)
class UUID4IdStrategy(BaseIdStrategy):
    """uuid4 hex ids."""
    def generate(self) -> str:
        return uuid.uuid4().hex


@dataclass
class SequentialIdStrategy(BaseIdStrategy):
    """
    Monotonic counter encoded to Base36 with an optional prefix ("u1", "u2", ...).
    Use when uniqueness must be guaranteed rather than probabilistic.
    """
    start: int = 1
    prefix: str = ""
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)
    _counter: Optional[itertools.count] = field(default=None, repr=False)

    def __post_init__(self):
        self._counter = itertools.count(self.start)

    def generate(self) -> str:
        with self._lock:
            n = next(self._counter)
        return f"{self.prefix}{_base36_encode(n)}"


# Strategy registry and factory
ID_STRATEGY_REGISTRY: Dict[str, Type[BaseIdStrategy]] = {
    "random": RandomIdStrategy,
    "uuid4": UUID4IdStrategy,
    "sequential": SequentialIdStrategy,
}


def get_id_strategy(name: Optional[str] = None, prefix: str = "") -> BaseIdStrategy:
    """
    Resolve an id strategy by name. Unknown names fall back to "random".
    `prefix` only applies to the sequential strategy.
    """
    key = (name or "random").strip().lower()
    cls = ID_STRATEGY_REGISTRY.get(key)
    if cls is None:
        log.warning("Unknown id strategy %r; falling back to 'random'", key)
        cls = RandomIdStrategy
    log.debug("Using id strategy: %s -> %s", key, cls.__name__)

    if cls is SequentialIdStrategy:
        return SequentialIdStrategy(prefix=prefix)
    return cls()
