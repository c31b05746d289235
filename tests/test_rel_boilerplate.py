from relstructs.rel_boilerplate import NoopRelIndexWrite


def test_index_insert_leaves_no_state():
    writer = NoopRelIndexWrite()
    assert writer.index_insert((1, 2), ()) is None
    assert writer == NoopRelIndexWrite()
    assert vars(writer) == {}


def test_move_index_contents_leaves_both_unchanged():
    first = NoopRelIndexWrite()
    second = NoopRelIndexWrite()
    second.index_insert(1, 2)
    first.move_index_contents(second)
    assert first == second == NoopRelIndexWrite()