from hypothesis import given
from hypothesis import strategies as st

from relstructs.trrel_binary import TrRel


def _closure(pairs):
    closure = set(pairs)
    while True:
        extra = {(a, d) for a, b in closure for c, d in closure if b == c} - closure
        if not extra:
            return closure
        closure |= extra


def test_chain_is_closed():
    rel = TrRel()
    assert rel.insert(1, 2)
    assert rel.insert(2, 3)
    assert rel.contains(1, 3)
    assert not rel.contains(3, 1)
    assert set(rel.iter_all()) == {(1, 2), (2, 3), (1, 3)}


def test_duplicate_and_reflexive_inserts_rejected():
    rel = TrRel()
    assert rel.insert(1, 2)
    assert not rel.insert(1, 2)
    assert not rel.insert(5, 5)
    assert rel.precursor_set == [(1, 2)]


def test_default_is_anti_reflexive():
    assert TrRel().anti_reflexive is True
    assert TrRel(anti_reflexive=False).anti_reflexive is False


def test_cycle_excludes_diagonal():
    rel = TrRel()
    rel.insert(1, 2)
    rel.insert(2, 1)
    assert set(rel.iter_all()) == {(1, 2), (2, 1)}


def test_count_exact_matches_iteration():
    rel = TrRel()
    for i in range(6):
        rel.insert(i, i + 1)
    assert rel.count_exact() == len(list(rel.iter_all()))
    assert rel.count_estimate() > 0


def test_count_estimate_empty():
    assert TrRel().count_estimate() == 0


@given(st.lists(st.tuples(st.integers(0, 6), st.integers(0, 6)), max_size=25))
def test_matches_transitive_closure(pairs):
    rel = TrRel()
    for x, y in pairs:
        rel.insert(x, y)
    expected = {(a, b) for a, b in _closure(pairs) if a != b}
    assert set(rel.iter_all()) == expected
    assert rel.count_exact() == len(expected)