"""A binary relation kept transitively closed on every insertion."""

from __future__ import annotations

from collections.abc import Hashable, Iterator
from itertools import chain, islice
from typing import Generic, TypeVar

T = TypeVar("T", bound=Hashable)


class TrRel(Generic[T]):
    """Transitive relation with forward and reverse successor maps."""

    def __init__(self, anti_reflexive: bool = True) -> None:
        self.map: dict[T, set[T]] = {}
        self.reverse_map: dict[T, set[T]] = {}
        self.precursor_set: list[tuple[T, T]] = []
        self.anti_reflexive = anti_reflexive

    def insert(self, x: T, y: T) -> bool:
        """Add ``(x, y)`` and its consequences; return True if it was not already present."""
        if x == y:
            return False
        if y in self.map.get(x, ()):
            return False

        self.precursor_set.append((x, y))

        x_reverse = self.reverse_map.get(x, set())
        self.reverse_map[x] = set()
        y_forward = self.map.get(y, set())
        self.map[y] = set()

        for x_prime in chain(x_reverse, (x,)):
            if x_prime != y:
                targets = self.map.setdefault(x_prime, set())
                targets.update(a for a in chain(y_forward, (y,)) if a != x_prime)

        for y_prime in chain(y_forward, (y,)):
            if y_prime != x:
                sources = self.reverse_map.setdefault(y_prime, set())
                sources.update(a for a in chain(x_reverse, (x,)) if a != y_prime)

        self.reverse_map[x] = x_reverse
        self.map[y] = y_forward
        return True

    def iter_all(self) -> Iterator[tuple[T, T]]:
        """Yield every pair in the relation."""
        for x, targets in self.map.items():
            for y in targets:
                yield x, y

    def contains(self, x: T, y: T) -> bool:
        return y in self.map.get(x, ())

    def count_estimate(self) -> int:
        """Estimate the number of pairs from a small sample of rows."""
        sample_size = 3
        total = sum(len(s) for s in islice(self.map.values(), sample_size))
        return total * len(self.map) // max(min(sample_size, len(self.map)), 1)

    def count_exact(self) -> int:
        return sum(len(s) for s in self.map.values())