"""A union-find over arbitrary hashable items, with class iteration."""

from __future__ import annotations

from collections.abc import Hashable, Iterator
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T", bound=Hashable)


@dataclass
class _Elem(Generic[T]):
    """One node: circular class list link, union-find parent, rank and value."""

    next: int
    parent: int
    rank: int
    value: T


class UnionFind(Generic[T]):
    """Union-find with union by rank, path halving and circular class lists.

    Every item gets an integer id in insertion order. The id stored for each
    item is moved towards its root whenever the item is looked up.
    """

    def __init__(self) -> None:
        self._elems: list[_Elem[T]] = []
        self._items: dict[T, int] = {}

    def _has(self, ident: int) -> bool:
        return 0 <= ident < len(self._elems)

    def _check(self, ident: int) -> None:
        if not self._has(ident):
            raise KeyError(f"unknown id {ident}")

    def _find(self, ident: int) -> int:
        elems = self._elems
        while True:
            elem = elems[ident]
            parent_id = elem.parent
            if parent_id == ident:
                return ident
            grandparent_id = elems[parent_id].parent
            if grandparent_id == parent_id:
                return parent_id
            elem.parent = grandparent_id
            ident = grandparent_id

    def _push(self, item: T) -> int:
        ident = len(self._elems)
        self._elems.append(_Elem(next=ident, parent=ident, rank=0, value=item))
        self._items[item] = ident
        return ident

    def add(self, item: T) -> tuple[bool, int]:
        """Add ``item`` if absent; return whether it was new and its (root) id."""
        found = self.find_item(item)
        if found is not None:
            return False, found
        return True, self._push(item)

    def find(self, ident: int) -> int:
        """Return the root id of the class holding ``ident``."""
        self._check(ident)
        return self._find(ident)

    def find_item(self, item: T) -> int | None:
        """Return the root id of the class of ``item``, or None if it is unknown."""
        ident = self._items.get(item)
        if ident is None:
            return None
        root = self._find(ident)
        self._items[item] = root
        return root

    def _link(self, root: int, child: int) -> None:
        root_elem = self._elems[root]
        child_elem = self._elems[child]
        root_elem.next, child_elem.next = child_elem.next, root_elem.next
        root_elem.rank += 1
        child_elem.parent = root

    def union(self, x: int, y: int) -> int:
        """Merge the classes of ids ``x`` and ``y``; return the new root id."""
        self._check(x)
        self._check(y)
        if x == y:
            return self._find(x)
        x_root = self._find(x)
        y_root = self._find(y)
        if x_root == y_root:
            return x_root
        if self._elems[x_root].rank >= self._elems[y_root].rank:
            self._link(x_root, y_root)
            return x_root
        self._link(y_root, x_root)
        return y_root

    def union_add(self, x: T, y: T) -> int:
        """Add both items if needed and merge their classes; return the root id."""
        _, x_id = self.add(x)
        _, y_id = self.add(y)
        return self.union(x_id, y_id)

    def is_empty(self) -> bool:
        return not self._items

    def __len__(self) -> int:
        return len(self._elems)

    def _class_members(self, start: int) -> Iterator[tuple[int, T]]:
        current = start
        while True:
            next_id = self._elems[current].next
            if next_id == start:
                return
            yield next_id, self._elems[next_id].value
            current = next_id

    def iter_class(self, start: int) -> Iterator[tuple[int, T]] | None:
        """Iterate ``(id, item)`` over the class of ``start``, excluding ``start``.

        Returns None if ``start`` is not a known id.
        """
        if not self._has(start):
            return None
        return self._class_members(start)

    def iter_classes(self) -> Iterator[Iterator[tuple[int, T]]]:
        """Yield one iterator per class; each yields the class root first."""
        seen: set[int] = set()
        for elem in self._elems:
            root = self._find(elem.parent)
            if root in seen:
                continue
            seen.add(root)
            yield self._class_with_root(root)

    def _class_with_root(self, root: int) -> Iterator[tuple[int, T]]:
        yield root, self._elems[root].value
        yield from self._class_members(root)

    def check_invariants(self) -> bool:
        """Check the whole structure; quadratic in the number of elements."""
        if len(self._elems) != len(self._items):
            return False
        size = len(self._elems)
        count = 0
        for ident, current in enumerate(self._elems):
            count += 1
            if not self._has(current.next) or not self._has(current.parent):
                return False
            if current.rank > size:
                return False

            visited: set[int] = set()
            node_id = ident
            node = current
            while node.parent != node_id:
                if node_id in visited:
                    return False
                visited.add(node_id)
                parent = self._elems[node.parent]
                if node.rank > parent.rank:
                    return False
                node_id = node.parent
                node = parent
            root = node_id

            for distance, (member_id, _) in enumerate(self._class_members(root)):
                if self._find(member_id) != root:
                    return False
                if distance == size:
                    return False

        count_by_classes = sum(sum(1 for _ in cls) for cls in self.iter_classes())
        return count == size and count == count_by_classes