"""Semi-naive indices over a binary transitive relation.

A relation moves through three roles during evaluation: ``new`` collects
freshly inserted pairs, ``delta`` holds the pairs discovered in the last
round, and ``total`` holds everything known so far. Only ``new`` accepts
inserts; ``delta`` and ``total`` are read through the index views.
"""

from __future__ import annotations

from collections.abc import Callable, Hashable, Iterator
from dataclasses import dataclass
from itertools import islice
from typing import Generic, TypeVar

from relstructs.reiterable import ReiterableIterator
from relstructs.utils import (
    move_hash_map_of_hash_set_contents_disjoint,
    move_hash_map_of_list_contents,
)

T = TypeVar("T", bound=Hashable)


class TrRelIndCommon(Generic[T]):
    """Storage shared by all indices of one binary transitive relation.

    ``map`` sends each element to the set of its successors, ``reverse_map``
    sends each element to the list of its predecessors. ``is_new`` tells
    whether this is the insert-only ``new`` relation.
    """

    def __init__(self, is_new: bool = False, anti_reflexive: bool = True) -> None:
        self.is_new = is_new
        self.anti_reflexive = anti_reflexive
        self.map: dict[T, set[T]] = {}
        self.reverse_map: dict[T, list[T]] = {}

    @classmethod
    def make_new(cls) -> TrRelIndCommon[T]:
        """Return an empty relation ready to accept inserts."""
        return cls(is_new=True, anti_reflexive=True)

    def _require_new(self, operation: str) -> None:
        if not self.is_new:
            raise ValueError(f"TrRelIndCommon: {operation} called on Old")

    def _require_old(self, operation: str) -> None:
        if self.is_new:
            raise ValueError(f"TrRelIndCommon: {operation} called on New")

    def _reset(
        self,
        is_new: bool,
        anti_reflexive: bool,
        forward: dict[T, set[T]] | None = None,
        backward: dict[T, list[T]] | None = None,
    ) -> None:
        self.is_new = is_new
        self.anti_reflexive = anti_reflexive
        self.map = forward if forward is not None else {}
        self.reverse_map = backward if backward is not None else {}

    def insert(self, x: T, y: T) -> bool:
        """Record ``(x, y)``; return True if it was not already recorded."""
        self._require_new("insert")
        targets = self.map.setdefault(x, set())
        if y in targets:
            return False
        targets.add(y)
        self.reverse_map.setdefault(y, []).append(x)
        return True

    def contains(self, x: T, y: T) -> bool:
        return y in self.map.get(x, ())

    def iter_all(self) -> Iterator[tuple[T, T]]:
        """Yield every stored pair."""
        for x, targets in self.map.items():
            for y in targets:
                yield x, y

    def count_estimate(self) -> int:
        """Estimate the number of pairs from a small sample of rows."""
        sample_size = 3
        total = sum(len(s) for s in islice(self.map.values(), sample_size))
        return total * len(self.map) // max(min(sample_size, len(self.map)), 1)

    def is_empty(self) -> bool:
        return not self.map


def init_indices(
    new: TrRelIndCommon[T], delta: TrRelIndCommon[T], total: TrRelIndCommon[T]
) -> None:
    """Prepare ``new`` for inserts; ``delta`` and ``total`` must not be New."""
    if delta.is_new:
        raise ValueError("init_indices: delta must not be New")
    if total.is_new:
        raise ValueError("init_indices: total must not be New")
    new._reset(True, delta.anti_reflexive)


def _join(
    target: dict[T, set[T]],
    target_rev: dict[T, list[T]],
    rel1: dict[T, set[T]],
    rel2_rev: dict[T, list[T]],
    can_add: Callable[[T, T], bool],
) -> bool:
    """Add ``(w, y)`` for each ``(w, x)`` in ``rel2_rev`` and ``(x, y)`` in ``rel1``."""
    changed = False
    if len(rel1) < len(rel2_rev):
        joined = ((x, rel2_rev.get(x), ys) for x, ys in rel1.items())
    else:
        joined = ((x, ws, rel1.get(x)) for x, ws in rel2_rev.items())
    for _, ws, ys in joined:
        if ws is None or ys is None:
            continue
        for w in ws:
            entry = target.setdefault(w, set())
            for y in ys:
                if not can_add(w, y) or y in entry:
                    continue
                entry.add(y)
                target_rev.setdefault(y, []).append(w)
                changed = True
            if not entry:
                del target[w]
    return changed


def merge_delta_to_total_new_to_delta(
    new: TrRelIndCommon[T], delta: TrRelIndCommon[T], total: TrRelIndCommon[T]
) -> None:
    """Fold ``delta`` into ``total`` and turn ``new`` into the next ``delta``.

    The next delta holds the pairs of ``new`` and everything they imply
    together with ``total`` that is not yet known.
    """
    new._require_new("merge")
    anti_reflexive = total.anti_reflexive

    total_map, total_rev = ({}, {}) if total.is_new else (total.map, total.reverse_map)
    delta_map, delta_rev = ({}, {}) if delta.is_new else (delta.map, delta.reverse_map)
    move_hash_map_of_hash_set_contents_disjoint(delta_map, total_map)
    move_hash_map_of_list_contents(delta_rev, total_rev)

    new_map = new.map
    delta_delta_map: dict[T, set[T]] = {k: set(v) for k, v in new_map.items()}
    delta_delta_rev: dict[T, list[T]] = new.reverse_map
    new._reset(True, anti_reflexive)

    delta_total_map: dict[T, set[T]] = {}
    delta_total_rev: dict[T, list[T]] = {}
    delta_new_map: dict[T, set[T]] = {}
    delta_new_rev: dict[T, list[T]] = {}

    def can_add(x: T, y: T) -> bool:
        if anti_reflexive and x == y:
            return False
        return (
            y not in delta_delta_map.get(x, ())
            and y not in delta_total_map.get(x, ())
            and y not in total_map.get(x, ())
        )

    while True:
        changed_1 = _join(delta_new_map, delta_new_rev, delta_delta_map, total_rev, can_add)
        changed_2 = _join(delta_new_map, delta_new_rev, total_map, delta_delta_rev, can_add)
        changed_3 = _join(delta_new_map, delta_new_rev, new_map, delta_delta_rev, can_add)
        changed = changed_1 or changed_2 or changed_3

        move_hash_map_of_hash_set_contents_disjoint(delta_delta_map, delta_total_map)
        move_hash_map_of_list_contents(delta_delta_rev, delta_total_rev)

        delta_delta_map, delta_new_map = delta_new_map, delta_delta_map
        delta_delta_rev, delta_new_rev = delta_new_rev, delta_delta_rev

        if not changed:
            break

    total._reset(False, anti_reflexive, total_map, total_rev)
    delta._reset(False, anti_reflexive, delta_total_map, delta_total_rev)


@dataclass(frozen=True)
class TrRelInd0(Generic[T]):
    """Index keyed by the first column, yielding successors."""

    common: TrRelIndCommon[T]

    def _forward(self) -> dict[T, set[T]]:
        self.common._require_old("TrRelInd0")
        return self.common.map

    def index_get(self, key: tuple[T]) -> Iterator[tuple[T]] | None:
        (x,) = key
        targets = self._forward().get(x)
        if targets is None:
            return None
        return ((y,) for y in targets)

    def iter_all(self) -> Iterator[tuple[tuple[T], Iterator[tuple[T]]]]:
        for x, targets in self._forward().items():
            yield (x,), ((y,) for y in targets)

    def __len__(self) -> int:
        return len(self._forward())


@dataclass(frozen=True)
class TrRelInd1(Generic[T]):
    """Index keyed by the second column, yielding predecessors."""

    common: TrRelIndCommon[T]

    def index_get(self, key: tuple[T]) -> Iterator[tuple[T]] | None:
        (y,) = key
        sources = self.common.reverse_map.get(y)
        if sources is None:
            return None
        return ((x,) for x in sources)

    def iter_all(self) -> Iterator[tuple[tuple[T], Iterator[tuple[T]]]]:
        for y, sources in self.common.reverse_map.items():
            yield (y,), ((x,) for x in sources)

    def __len__(self) -> int:
        return len(self.common.reverse_map)


@dataclass(frozen=True)
class TrRelIndNone(Generic[T]):
    """Index with an empty key, yielding every pair."""

    common: TrRelIndCommon[T]

    def index_get(self, key: tuple[()] = ()) -> ReiterableIterator[tuple[T, T]]:
        return ReiterableIterator(self.common.iter_all)

    def iter_all(self) -> Iterator[tuple[tuple[()], ReiterableIterator[tuple[T, T]]]]:
        yield (), self.index_get(())

    def __len__(self) -> int:
        return 1


@dataclass(frozen=True)
class TrRelIndFull(Generic[T]):
    """Index keyed by the whole pair."""

    common: TrRelIndCommon[T]

    def contains_key(self, key: tuple[T, T]) -> bool:
        x, y = key
        return self.common.contains(x, y)

    def index_get(self, key: tuple[T, T]) -> Iterator[tuple[()]] | None:
        return iter([()]) if self.contains_key(key) else None

    def iter_all(self) -> Iterator[tuple[tuple[T, T], Iterator[tuple[()]]]]:
        for pair in self.common.iter_all():
            yield pair, iter([()])

    def __len__(self) -> int:
        return self.common.count_estimate()


@dataclass(frozen=True)
class TrRelIndFullWrite(Generic[T]):
    """Writer that inserts whole pairs into a New relation."""

    common: TrRelIndCommon[T]

    def insert_if_not_present(self, key: tuple[T, T]) -> bool:
        x, y = key
        return self.common.insert(x, y)

    def index_insert(self, key: tuple[T, T], value: tuple[()] = ()) -> None:
        x, y = key
        self.common.insert(x, y)