import pytest

from gainfunction.state.base import NAME_MAX_LENGTH, is_valid_name

@pytest.mark.parametrize("name", ["a", "Squat", "  Squat  ", "x" * 50, " " + "x" * 50 + " "])
def test_valid_names(name):
    assert is_valid_name(name)

@pytest.mark.parametrize("name", ["", "   ", "\t\n", "x" * 51])
def test_invalid_names(name):
    assert not is_valid_name(name)

def test_limit_is_fifty():
    assert NAME_MAX_LENGTH == 50
