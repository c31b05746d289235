"""Union-find based equivalence relations."""

from __future__ import annotations

from collections.abc import Hashable, Iterator
from typing import Generic, TypeVar

T = TypeVar("T", bound=Hashable)


class EqRel(Generic[T]):
    """Equivalence relation stored as disjoint sets with subsumption links."""

    def __init__(self) -> None:
        self.sets: list[set[T]] = []
        self.elem_ids: dict[T, int] = {}
        self.set_subsumptions: dict[int, int] = {}

    def _dominant_id(self, set_id: int) -> int:
        while set_id in self.set_subsumptions:
            set_id = self.set_subsumptions[set_id]
        return set_id

    def _dominant_id_update(self, set_id: int) -> int:
        path = []
        while set_id in self.set_subsumptions:
            path.append(set_id)
            set_id = self.set_subsumptions[set_id]
        for node in path:
            self.set_subsumptions[node] = set_id
        return set_id

    def elem_set(self, elem: T) -> int | None:
        """Return the id of the set holding ``elem``, or None."""
        set_id = self.elem_ids.get(elem)
        return None if set_id is None else self._dominant_id(set_id)

    def _elem_set_update(self, elem: T) -> int | None:
        set_id = self.elem_ids.get(elem)
        return None if set_id is None else self._dominant_id_update(set_id)

    def add(self, x: T, y: T) -> bool:
        """Make ``x`` and ``y`` equivalent; return True if anything changed."""
        x_set = self._elem_set_update(x)
        y_set = self._elem_set_update(y)
        if x_set is None and y_set is None:
            new_id = len(self.sets)
            self.sets.append({x, y})
            self.elem_ids[x] = new_id
            self.elem_ids[y] = new_id
            return True
        if x_set is None:
            self.sets[y_set].add(x)
            self.elem_ids[x] = y_set
            return True
        if y_set is None:
            self.sets[x_set].add(y)
            self.elem_ids[y] = x_set
            return True
        if x_set == y_set:
            return False
        self.sets[x_set] |= self.sets[y_set]
        self.sets[y_set] = set()
        self.set_subsumptions[y_set] = x_set
        return True

    def set_of(self, x: T) -> Iterator[T] | None:
        """Iterate the class of ``x``, or return None if ``x`` is unknown."""
        set_id = self.elem_set(x)
        return None if set_id is None else iter(self.sets[set_id])

    def iter_all(self) -> Iterator[tuple[T, T]]:
        """Yield every related pair."""
        for members in self.sets:
            for x in members:
                for y in members:
                    yield y, x

    def contains(self, x: T, y: T) -> bool:
        set_id = self.elem_set(x)
        return set_id is not None and y in self.sets[set_id]

    def combine(self, other: EqRel[T]) -> None:
        """Add every equivalence of ``other`` to this relation."""
        for members in other.sets:
            if not members:
                continue
            it = iter(members)
            representative = next(it)
            if len(members) == 1:
                self.add(representative, representative)
            else:
                for x in it:
                    self.add(representative, x)

    def count_exact(self) -> int:
        return sum(len(s) * len(s) for s in self.sets)