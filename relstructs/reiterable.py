"""An iterator that can be restarted from the callable that produced it."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from typing import Generic, TypeVar

T = TypeVar("T")


class ReiterableIterator(Iterator[T], Generic[T]):
    """Iterator built from a producer; :meth:`clone` starts a fresh pass."""

    def __init__(self, producer: Callable[[], Iterable[T]]) -> None:
        self._producer = producer
        self._iter = iter(producer())

    def __iter__(self) -> ReiterableIterator[T]:
        return self

    def __next__(self) -> T:
        return next(self._iter)

    def clone(self) -> ReiterableIterator[T]:
        """Return a new iterator starting from the beginning."""
        return ReiterableIterator(self._producer)