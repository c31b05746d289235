import pytest

from relstructs.trrel import arrs_eq, inds_contain, reverse_maps_required


def test_arrs_eq():
    assert arrs_eq([1, 2], [1, 2])
    assert not arrs_eq([1], [1, 2])
    assert arrs_eq([1], [1])
    assert arrs_eq([], [])
    assert not arrs_eq([1, 2], [1])


def test_arrs_eq_different_values():
    assert not arrs_eq([1, 2], [1, 3])


@pytest.mark.parametrize(
    "indices, index, expected",
    [
        ([], [1], False),
        ([[0], [1]], [1], True),
        ([[0, 1], [0]], [1], False),
        ([[0, 1], [1, 2]], [1, 2], True),
        ([[]], [], True),
    ],
)
def test_inds_contain(indices, index, expected):
    assert inds_contain(indices, index) is expected


@pytest.mark.parametrize(
    "indices, expected",
    [
        ([[], [0, 1], [0], [0, 1, 2]], (False, False)),
        ([[0, 1, 2], [0], [1], [0, 1]], (True, False)),
        ([[2]], (False, True)),
        ([[1, 2]], (True, True)),
    ],
)
def test_reverse_maps_required(indices, expected):
    assert reverse_maps_required(indices) == expected