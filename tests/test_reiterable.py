import pytest

from relstructs.reiterable import ReiterableIterator


def test_iterates_producer_output():
    it = ReiterableIterator(lambda: range(3))
    assert list(it) == [0, 1, 2]


def test_next_and_exhaustion():
    it = ReiterableIterator(lambda: ["a"])
    assert next(it) == "a"
    with pytest.raises(StopIteration):
        next(it)


def test_clone_restarts_from_beginning():
    it = ReiterableIterator(lambda: range(3))
    assert next(it) == 0
    copy = it.clone()
    assert list(copy) == [0, 1, 2]
    assert list(it) == [1, 2]


def test_producer_called_once_per_pass():
    calls = []

    def producer():
        calls.append(None)
        return [1, 2]

    it = ReiterableIterator(producer)
    assert len(calls) == 1
    it.clone()
    assert len(calls) == 2
    assert iter(it) is it