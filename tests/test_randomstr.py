import pytest

from practicum.randomstr import CHARS, new_random_string


@pytest.mark.parametrize("size", [1, 5, 10, 20, 30])
def test_length(size):
    first = new_random_string(size)
    second = new_random_string(size)
    assert len(first) == size
    assert len(second) == size


@pytest.mark.parametrize("size", [1, 5, 10, 20, 30])
def test_only_alphanumeric(size):
    assert set(new_random_string(size)) <= set(CHARS)


def test_zero_size_is_empty():
    assert new_random_string(0) == ""


def test_negative_size_raises():
    with pytest.raises(ValueError):
        new_random_string(-1)


def test_long_string_uses_many_characters():
    assert len(set(new_random_string(1000))) > 10