"""Helpers for moving contents between maps of sets and lists."""

from __future__ import annotations

from collections.abc import Hashable, Mapping
from typing import TypeVar

from relstructs.reiterable import ReiterableIterator

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


def move_hash_map_of_hash_set_contents(
    source: dict[K, set[V]], target: dict[K, set[V]]
) -> None:
    """Merge every set of ``source`` into ``target`` under the same key, emptying ``source``."""
    for key, values in source.items():
        existing = target.get(key)
        if existing is None:
            target[key] = values
        else:
            existing.update(values)
    source.clear()


def move_hash_map_of_list_contents(
    source: dict[K, list[V]], target: dict[K, list[V]]
) -> None:
    """Append every list of ``source`` to ``target`` under the same key, emptying ``source``."""
    for key, values in source.items():
        existing = target.get(key)
        if existing is None:
            target[key] = values
        else:
            existing.extend(values)
    source.clear()


def move_hash_map_of_hash_set_contents_disjoint(
    source: dict[K, set[V]], target: dict[K, set[V]]
) -> None:
    """Like :func:`move_hash_map_of_hash_set_contents`, for sets known to be disjoint."""
    for key, values in source.items():
        existing = target.get(key)
        if existing is None:
            target[key] = values
        else:
            move_hash_set_contents_disjoint(values, existing)
    source.clear()


def move_hash_set_contents_disjoint(source: set[V], target: set[V]) -> None:
    """Move all elements of ``source`` into ``target``, leaving ``source`` empty."""
    target.update(source)
    source.clear()


def merge_sets(first: set[V], second: set[V]) -> None:
    """Add all elements of ``second`` to ``first`` in place."""
    first.update(second)


def hash_map_hash_set_intersection(
    mapping: Mapping[K, V], keys: set[K]
) -> ReiterableIterator[V]:
    """Iterate the values of ``mapping`` whose keys are in ``keys``."""
    if len(mapping) < len(keys):
        return ReiterableIterator(
            lambda: (value for key, value in mapping.items() if key in keys)
        )
    return ReiterableIterator(lambda: (mapping[key] for key in keys if key in mapping))