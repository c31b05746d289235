"""Helpers deciding which reverse maps a ternary transitive relation needs."""

from __future__ import annotations

from collections.abc import Iterable, Sequence


def arrs_eq(first: Sequence[object], second: Sequence[object]) -> bool:
    """Return True if both index arrays have the same length and elements."""
    return len(first) == len(second) and all(a == b for a, b in zip(first, second))


def inds_contain(indices: Iterable[Sequence[object]], index: Sequence[object]) -> bool:
    """Return True if ``index`` is one of ``indices``."""
    return any(arrs_eq(candidate, index) for candidate in indices)


def reverse_maps_required(indices: Iterable[Sequence[object]]) -> tuple[bool, bool]:
    """Return whether the column-1 and column-2 reverse maps are needed."""
    indices = [list(ind) for ind in indices]
    both = inds_contain(indices, [1, 2])
    return inds_contain(indices, [1]) or both, inds_contain(indices, [2]) or both