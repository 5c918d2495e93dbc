import pytest

from utils.helpers import clamp, coord_key, parse_coord_key, as_position


def test_coord_keys():
    assert coord_key(3, 4) == "3,4"
    assert parse_coord_key("3,4") == (3, 4)


@pytest.mark.parametrize("key", ["bogus", "1,2,3", "a,b", "", None])
def test_malformed_keys_raise_value_error(key):
    with pytest.raises(ValueError):
        parse_coord_key(key)


@pytest.mark.parametrize("value, expected", [
    ((2, 3), (2, 3)),
    ([2, 3], (2, 3)),
    ((2,), None),
    ("ab", None),
    (None, None),
    ((1.5, 2), None),
    ((True, 1), None),
])
def test_as_position(value, expected):
    assert as_position(value) == expected


def test_clamp():
    assert clamp(12, 0, 10) == 10
    assert clamp(-1, 0, 10) == 0
