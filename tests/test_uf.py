from dataclasses import dataclass

import pytest
from hypothesis import given
from hypothesis import strategies as st

from relstructs.uf import UnionFind


@dataclass(frozen=True)
class Add:
    x: int


@dataclass(frozen=True)
class Find:
    x: int


@dataclass(frozen=True)
class Union:
    x: int
    y: int


byte = st.integers(min_value=0, max_value=255)
op_strategy = st.one_of(
    byte.map(Add),
    byte.map(Find),
    st.tuples(byte, byte).map(lambda t: Union(*t)),
)


@given(st.lists(op_strategy, min_size=1, max_size=99))
def test_uf_ok(ops):
    uf = UnionFind()
    for i, op in enumerate(ops):
        assert len(uf) <= 2 * i
        if isinstance(op, Add):
            uf.add(op.x)
        elif isinstance(op, Find):
            uf.find_item(op.x)
        else:
            uf.union_add(op.x, op.y)

    assert uf.check_invariants()

    for op in ops:
        if isinstance(op, Add):
            assert not uf.add(op.x)[0]
        elif isinstance(op, Union):
            assert uf.find_item(op.x) == uf.find_item(op.y)
    assert uf.check_invariants()


def test_add_returns_new_flag_and_id():
    uf = UnionFind()
    assert uf.is_empty()
    assert uf.add("a") == (True, 0)
    assert uf.add("b") == (True, 1)
    assert uf.add("a") == (False, 0)
    assert len(uf) == 2
    assert not uf.is_empty()


def test_union_joins_classes():
    uf = UnionFind()
    uf.add("a")
    uf.add("b")
    uf.add("c")
    root = uf.union(0, 1)
    assert root == 0
    assert uf.find(1) == 0
    assert uf.find_item("b") == uf.find_item("a")
    assert uf.find_item("c") == 2
    assert uf.union(1, 0) == 0


def test_find_item_unknown():
    uf = UnionFind()
    uf.add(1)
    assert uf.find_item(2) is None


def test_find_unknown_id_raises():
    uf = UnionFind()
    uf.add(1)
    with pytest.raises(KeyError):
        uf.find(5)
    with pytest.raises(KeyError):
        uf.union(0, 3)


def test_iter_class_and_classes():
    uf = UnionFind()
    uf.union_add("a", "b")
    uf.union_add("c", "d")
    uf.union_add("b", "e")
    assert sorted(v for _, v in uf.iter_class(0)) == ["b", "e"]
    assert uf.iter_class(42) is None

    classes = [list(cls) for cls in uf.iter_classes()]
    values = sorted(sorted(v for _, v in cls) for cls in classes)
    assert values == [["a", "b", "e"], ["c", "d"]]
    for cls in classes:
        root_id = cls[0][0]
        assert all(uf.find(i) == root_id for i, _ in cls)


def test_union_by_rank_picks_higher_rank_root():
    uf = UnionFind()
    uf.union_add(1, 2)
    uf.add(3)
    root = uf.union_add(3, 1)
    assert root == uf.find_item(1)
    assert uf.find_item(3) == root
    assert uf.check_invariants()