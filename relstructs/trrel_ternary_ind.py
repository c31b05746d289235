"""Semi-naive indices over a ternary relation, transitive in its last two columns.

Each value of the first column owns a binary transitive relation over the
last two columns. Optional reverse maps send a second-column or third-column
value to the first-column values that use it. They are needed by the indices
keyed on those columns.
"""

from __future__ import annotations

import math
from collections.abc import Hashable, Iterator
from dataclasses import dataclass
from itertools import islice
from typing import Generic, TypeVar

from relstructs.reiterable import ReiterableIterator
from relstructs.trrel_binary_ind import (
    TrRelInd0,
    TrRelInd1,
    TrRelIndCommon,
)
from relstructs.trrel_binary_ind import (
    merge_delta_to_total_new_to_delta as _merge_binary,
)
from relstructs.utils import move_hash_map_of_hash_set_contents

T0 = TypeVar("T0", bound=Hashable)
T1 = TypeVar("T1", bound=Hashable)


class TrRel2IndCommon(Generic[T0, T1]):
    """Storage shared by all indices of one ternary transitive relation."""

    def __init__(self, has_reverse_map1: bool = False, has_reverse_map2: bool = False) -> None:
        self.map: dict[T0, TrRelIndCommon[T1]] = {}
        self.reverse_map1: dict[T1, set[T0]] | None = {} if has_reverse_map1 else None
        self.reverse_map2: dict[T1, set[T0]] | None = {} if has_reverse_map2 else None

    def _reverse_map1(self) -> dict[T1, set[T0]]:
        if self.reverse_map1 is None:
            raise ValueError("reverse map for column 1 is not maintained")
        return self.reverse_map1

    def _reverse_map2(self) -> dict[T1, set[T0]]:
        if self.reverse_map2 is None:
            raise ValueError("reverse map for column 2 is not maintained")
        return self.reverse_map2


def merge_delta_to_total_new_to_delta(
    new: TrRel2IndCommon[T0, T1],
    delta: TrRel2IndCommon[T0, T1],
    total: TrRel2IndCommon[T0, T1],
) -> None:
    """Fold ``delta`` into ``total`` and turn ``new`` into the next ``delta``."""
    new_delta_map: dict[T0, TrRelIndCommon[T1]] = {}

    for key, delta_trrel in delta.map.items():
        new_trrel = new.map.pop(key, None)
        if new_trrel is None:
            new_trrel = TrRelIndCommon.make_new()
        total_trrel = total.map.get(key)
        if total_trrel is None:
            total_trrel = TrRelIndCommon(is_new=False, anti_reflexive=delta_trrel.anti_reflexive)
            _merge_binary(new_trrel, delta_trrel, total_trrel)
            total.map[key] = total_trrel
        else:
            _merge_binary(new_trrel, delta_trrel, total_trrel)
        if not delta_trrel.is_empty():
            new_delta_map[key] = delta_trrel

    for key, new_trrel in new.map.items():
        next_delta: TrRelIndCommon[T1] = TrRelIndCommon()
        total_trrel = total.map.get(key)
        if total_trrel is None:
            # The scratch total is discarded; the key reaches ``total`` next round.
            total_trrel = TrRelIndCommon()
        _merge_binary(new_trrel, next_delta, total_trrel)
        new_delta_map[key] = next_delta

    new.map = {}
    delta.map = new_delta_map

    if delta.reverse_map1 is not None:
        move_hash_map_of_hash_set_contents(delta.reverse_map1, total._reverse_map1())
        delta.reverse_map1, new.reverse_map1 = new._reverse_map1(), delta.reverse_map1

    if delta.reverse_map2 is not None:
        move_hash_map_of_hash_set_contents(delta.reverse_map2, total._reverse_map2())
        delta.reverse_map2, new.reverse_map2 = new._reverse_map2(), delta.reverse_map2


def _sampled_len(common: TrRel2IndCommon[T0, T1], sizes: Iterator[int]) -> int:
    sample_size = 3
    total = sum(islice(sizes, sample_size))
    map_len = len(common.map)
    return total * map_len // max(min(sample_size, map_len), 1)


@dataclass(frozen=True)
class TrRel2Ind0(Generic[T0, T1]):
    """Index keyed by the first column, yielding pairs of the last two columns."""

    common: TrRel2IndCommon[T0, T1]

    def index_get(self, key: tuple[T0]) -> ReiterableIterator[tuple[T1, T1]] | None:
        (x0,) = key
        trrel = self.common.map.get(x0)
        if trrel is None:
            return None
        return ReiterableIterator(trrel.iter_all)

    def iter_all(self) -> Iterator[tuple[tuple[T0], Iterator[tuple[T1, T1]]]]:
        for x0, trrel in self.common.map.items():
            yield (x0,), trrel.iter_all()

    def __len__(self) -> int:
        sample_size = 4
        total = sum(trrel.count_estimate() for trrel in self.common.map.values())
        map_len = len(self.common.map)
        return total * map_len // max(min(sample_size, map_len), 1)


@dataclass(frozen=True)
class TrRel2Ind0_1(Generic[T0, T1]):
    """Index keyed by the first two columns, yielding the third."""

    common: TrRel2IndCommon[T0, T1]

    def index_get(self, key: tuple[T0, T1]) -> Iterator[tuple[T1]] | None:
        x0, x1 = key
        trrel = self.common.map.get(x0)
        if trrel is None:
            return None
        targets = trrel.map.get(x1)
        if targets is None:
            return None
        return ((x2,) for x2 in targets)

    def iter_all(self) -> Iterator[tuple[tuple[T0, T1], Iterator[tuple[T1]]]]:
        for x0, trrel in self.common.map.items():
            for x1, targets in trrel.map.items():
                yield (x0, x1), ((x2,) for x2 in targets)

    def __len__(self) -> int:
        return _sampled_len(self.common, (len(TrRelInd0(t)) for t in self.common.map.values()))


@dataclass(frozen=True)
class TrRel2Ind0_2(Generic[T0, T1]):
    """Index keyed by the first and third columns, yielding the second."""

    common: TrRel2IndCommon[T0, T1]

    def index_get(self, key: tuple[T0, T1]) -> Iterator[tuple[T1]] | None:
        x0, x2 = key
        trrel = self.common.map.get(x0)
        if trrel is None:
            return None
        sources = trrel.reverse_map.get(x2)
        if sources is None:
            return None
        return ((x1,) for x1 in sources)

    def iter_all(self) -> Iterator[tuple[tuple[T0, T1], Iterator[tuple[T1]]]]:
        for x0, trrel in self.common.map.items():
            for x2, sources in trrel.reverse_map.items():
                yield (x0, x2), ((x1,) for x1 in sources)

    def __len__(self) -> int:
        return _sampled_len(self.common, (len(TrRelInd1(t)) for t in self.common.map.values()))


@dataclass(frozen=True)
class TrRel2Ind1(Generic[T0, T1]):
    """Index keyed by the second column, yielding first and third columns."""

    common: TrRel2IndCommon[T0, T1]

    def _pairs(self, x1: T1, x0s: set[T0]) -> Iterator[tuple[T0, T1]]:
        for x0 in x0s:
            trrel = self.common.map.get(x0)
            if trrel is None:
                continue
            for x2 in trrel.map.get(x1, ()):
                yield x0, x2

    def index_get(self, key: tuple[T1]) -> ReiterableIterator[tuple[T0, T1]] | None:
        (x1,) = key
        x0s = self.common._reverse_map1().get(x1)
        if x0s is None:
            return None
        return ReiterableIterator(lambda: self._pairs(x1, x0s))

    def iter_all(self) -> Iterator[tuple[tuple[T1], ReiterableIterator[tuple[T0, T1]]]]:
        for x1 in list(self.common._reverse_map1()):
            found = self.index_get((x1,))
            if found is not None:
                yield (x1,), found

    def __len__(self) -> int:
        return len(self.common._reverse_map1())


@dataclass(frozen=True)
class TrRel2Ind2(Generic[T0, T1]):
    """Index keyed by the third column, yielding first and second columns."""

    common: TrRel2IndCommon[T0, T1]

    def _pairs(self, x2: T1, x0s: set[T0]) -> Iterator[tuple[T0, T1]]:
        for x0 in x0s:
            trrel = self.common.map.get(x0)
            if trrel is None:
                continue
            for x1 in trrel.reverse_map.get(x2, ()):
                yield x0, x1

    def index_get(self, key: tuple[T1]) -> ReiterableIterator[tuple[T0, T1]] | None:
        (x2,) = key
        x0s = self.common._reverse_map2().get(x2)
        if x0s is None:
            return None
        return ReiterableIterator(lambda: self._pairs(x2, x0s))

    def iter_all(self) -> Iterator[tuple[tuple[T1], ReiterableIterator[tuple[T0, T1]]]]:
        for x2 in list(self.common._reverse_map2()):
            found = self.index_get((x2,))
            if found is not None:
                yield (x2,), found

    def __len__(self) -> int:
        return len(self.common._reverse_map2())


@dataclass(frozen=True)
class TrRel2Ind1_2(Generic[T0, T1]):
    """Index keyed by the last two columns, yielding the first."""

    common: TrRel2IndCommon[T0, T1]

    def _matching(
        self, x1: T1, x2: T1, x0s_1: set[T0], x0s_2: set[T0]
    ) -> Iterator[tuple[T0]]:
        small, big = (x0s_1, x0s_2) if len(x0s_1) < len(x0s_2) else (x0s_2, x0s_1)
        for x0 in small:
            if x0 in big:
                trrel = self.common.map.get(x0)
                if trrel is not None and trrel.contains(x1, x2):
                    yield (x0,)

    def index_get(self, key: tuple[T1, T1]) -> ReiterableIterator[tuple[T0]] | None:
        x1, x2 = key
        x0s_1 = self.common._reverse_map1().get(x1)
        if x0s_1 is None:
            return None
        x0s_2 = self.common._reverse_map2().get(x2)
        if x0s_2 is None:
            return None
        return ReiterableIterator(lambda: self._matching(x1, x2, x0s_1, x0s_2))

    def iter_all(self) -> Iterator[tuple[tuple[T1, T1], Iterator[tuple[T0]]]]:
        reverse_map2 = self.common._reverse_map2()
        for x1, x0s_1 in self.common._reverse_map1().items():
            for x2, x0s_2 in reverse_map2.items():
                yield (x1, x2), self._matching(x1, x2, x0s_1, x0s_2)

    def __len__(self) -> int:
        # A rough estimate only.
        divisor = max(math.isqrt(len(self.common.map)), 1)
        return len(self.common._reverse_map1()) * len(self.common._reverse_map2()) // divisor


@dataclass(frozen=True)
class TrRel2IndNone(Generic[T0, T1]):
    """Index with an empty key, yielding every triple."""

    common: TrRel2IndCommon[T0, T1]

    def _triples(self) -> Iterator[tuple[T0, T1, T1]]:
        for x0, trrel in self.common.map.items():
            for x1, x2 in trrel.iter_all():
                yield x0, x1, x2

    def index_get(self, key: tuple[()] = ()) -> ReiterableIterator[tuple[T0, T1, T1]]:
        return ReiterableIterator(self._triples)

    def iter_all(self) -> Iterator[tuple[tuple[()], ReiterableIterator[tuple[T0, T1, T1]]]]:
        yield (), self.index_get(())

    def __len__(self) -> int:
        return 1


@dataclass(frozen=True)
class TrRel2IndFull(Generic[T0, T1]):
    """Index keyed by the whole triple."""

    common: TrRel2IndCommon[T0, T1]

    def contains_key(self, key: tuple[T0, T1, T1]) -> bool:
        x0, x1, x2 = key
        trrel = self.common.map.get(x0)
        return trrel is not None and trrel.contains(x1, x2)

    def index_get(self, key: tuple[T0, T1, T1]) -> Iterator[tuple[()]] | None:
        return iter([()]) if self.contains_key(key) else None

    def iter_all(self) -> Iterator[tuple[tuple[T0, T1, T1], Iterator[tuple[()]]]]:
        for x0, trrel in self.common.map.items():
            for x1, x2 in trrel.iter_all():
                yield (x0, x1, x2), iter([()])

    def __len__(self) -> int:
        return _sampled_len(self.common, (t.count_estimate() for t in self.common.map.values()))


@dataclass(frozen=True)
class TrRel2IndFullWrite(Generic[T0, T1]):
    """Writer inserting whole triples into a ``new`` relation."""

    common: TrRel2IndCommon[T0, T1]

    def _inner(self, x0: T0) -> TrRelIndCommon[T1]:
        trrel = self.common.map.get(x0)
        if trrel is None:
            trrel = TrRelIndCommon.make_new()
            self.common.map[x0] = trrel
        return trrel

    def _record_reverse(self, x0: T0, x1: T1, x2: T1) -> None:
        if self.common.reverse_map1 is not None:
            self.common.reverse_map1.setdefault(x1, set()).add(x0)
        if self.common.reverse_map2 is not None:
            self.common.reverse_map2.setdefault(x2, set()).add(x0)

    def insert_if_not_present(self, key: tuple[T0, T1, T1]) -> bool:
        """Insert the triple; return False if it was already present."""
        x0, x1, x2 = key
        if not self._inner(x0).insert(x1, x2):
            return False
        self._record_reverse(x0, x1, x2)
        return True

    def index_insert(self, key: tuple[T0, T1, T1], value: tuple[()] = ()) -> None:
        x0, x1, x2 = key
        self._record_reverse(x0, x1, x2)
        self._inner(x0).insert(x1, x2)