"""Seeded pseudo-random stream shared by every generation stage."""
from __future__ import annotations

import hashlib
import random
from typing import Optional, Sequence, TypeVar

T = TypeVar("T")

# Seeds handed out when the caller does not provide one; matches the range
# offered by the map selector.
SEED_RANGE = 1_000_000


def derive_seed(*parts: object) -> int:
    """Hash arbitrary parts into a stable seed in ``[0, SEED_RANGE)``."""

    payload = "|".join(str(part) for part in parts)
    digest = hashlib.sha256(payload.encode("utf-8")).hexdigest()
    return int(digest[:16], 16) % SEED_RANGE


def random_seed() -> int:
    return random.SystemRandom().randrange(SEED_RANGE)


class SeededRandomSource:
    """Linear congruential generator with a 233280-state period.

    Small enough to reproduce bit-for-bit on any platform: every value is an
    exact integer ratio, so two sources built from the same seed return the
    same floats in the same order.
    """

    MULTIPLIER = 9301
    INCREMENT = 49297
    MODULUS = 233280

    __slots__ = ("seed", "_state", "draws")

    def __init__(self, seed: Optional[int] = None) -> None:
        if seed is None:
            seed = random_seed()
        self.seed = int(seed)
        self._state = self.seed % self.MODULUS
        self.draws = 0

    def next(self) -> float:
        self._state = (self._state * self.MULTIPLIER + self.INCREMENT) % self.MODULUS
        self.draws += 1
        return self._state / self.MODULUS

    def randrange(self, count: int) -> int:
        return int(self.next() * count)

    def choice(self, options: Sequence[T]) -> T:
        if not options:
            raise IndexError("Cannot choose from an empty sequence")
        return options[self.randrange(len(options))]


__all__ = ["SeededRandomSource", "derive_seed", "random_seed", "SEED_RANGE"]
