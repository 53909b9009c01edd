# tests/conftest.py
import pytest

from jsonparsec.Parsec import Error, Ok, ParseResult, State


def assert_ok(res: ParseResult, value, rest: str):
    """Success with the given value and remaining text."""
    assert isinstance(res, Ok), f"Expected Ok, got {res!r}"
    assert res.value == value
    assert res.state.rest == rest


def assert_error(res: ParseResult, rest: str):
    """Failure positioned at the given remaining text."""
    assert isinstance(res, Error), f"Expected Error, got {res!r}"
    assert res.state.rest == rest


@pytest.fixture
def initial_state():
    def _make(input_data):
        return State(input_data, name="test")

    return _make
