from relstructs.union_find import EqRel


def test_eq_rel():
    eqrel = EqRel()
    eqrel.add(1, 2)
    eqrel.add(11, 12)
    assert eqrel.contains(1, 2)
    assert not eqrel.contains(1, 12)
    eqrel.add(1, 3)
    eqrel.add(13, 12)
    assert not eqrel.contains(2, 13)
    eqrel.add(3, 11)
    assert eqrel.contains(2, 13)


def test_eq_rel_combine():
    eqrel1 = EqRel()
    eqrel1.add(1, 2)
    eqrel1.add(1, 3)
    eqrel1.add(1, 10)

    eqrel2 = EqRel()
    eqrel2.add(10, 11)
    eqrel2.add(11, 12)
    eqrel2.add(13, 12)

    assert not eqrel1.contains(1, 13)
    eqrel1.combine(eqrel2)
    assert eqrel1.contains(1, 13)


def test_add_reports_change():
    eqrel = EqRel()
    assert eqrel.add(1, 2)
    assert not eqrel.add(2, 1)
    assert eqrel.add(3, 2)
    assert eqrel.contains(1, 1)
    assert eqrel.elem_set(1) == eqrel.elem_set(3)


def test_set_of_unknown_is_none():
    eqrel = EqRel()
    eqrel.add(1, 2)
    assert eqrel.set_of(99) is None
    assert eqrel.elem_set(99) is None
    assert set(eqrel.set_of(1)) == {1, 2}


def test_iter_all_matches_count():
    eqrel = EqRel()
    eqrel.add(1, 2)
    eqrel.add(3, 4)
    eqrel.add(2, 3)
    eqrel.add(7, 8)
    pairs = list(eqrel.iter_all())
    assert len(pairs) == eqrel.count_exact()
    assert set(pairs) == {(a, b) for a in (1, 2, 3, 4) for b in (1, 2, 3, 4)} | {
        (a, b) for a in (7, 8) for b in (7, 8)
    }


def test_combine_singleton_set():
    eqrel1 = EqRel()
    eqrel2 = EqRel()
    eqrel2.add(5, 5)
    eqrel1.combine(eqrel2)
    assert eqrel1.contains(5, 5)
    assert eqrel1.count_exact() == eqrel2.count_exact()