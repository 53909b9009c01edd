from typing import Callable

from .Parsec import Error, Ok, ParseResult, Parsec, State

ASCII_DIGITS = frozenset('0123456789')


# Core scanner: consumes characters while a predicate holds
def take_while(f: Callable[[str], bool]) -> Parsec[str]:
    """Consumes the longest prefix whose characters satisfy f. Always succeeds."""
    def parse(state: State) -> ParseResult[str]:
        text, i, end = state.input, state.index, state.end
        while i < end and f(text[i]):
            i += 1
        return Ok(text[state.index:i], state.advance(i - state.index))
    return Parsec(parse)


# 1. whitespace: zero or more whitespace characters
def whitespace() -> Parsec[str]:
    """Consumes a (possibly empty) run of Unicode whitespace and returns it."""
    return take_while(str.isspace)


# 2. digits: an integer or decimal numeral
def digits() -> Parsec[str]:
    """
    Parses one or more ASCII digits, optionally followed by '.' and more
    digits, and returns the matched text. A '.' with nothing after it is
    still taken as part of the numeral.
    """
    def parse(state: State) -> ParseResult[str]:
        text, i, end = state.input, state.index, state.end
        while i < end and text[i] in ASCII_DIGITS:
            i += 1
        if i == state.index:
            return Error(state)
        if i < end and text[i] == '.':
            i += 1
            while i < end and text[i] in ASCII_DIGITS:
                i += 1
        return Ok(text[state.index:i], state.advance(i - state.index))
    return Parsec(parse)


# 3. until_quote: everything up to the next double quote
def until_quote() -> Parsec[str]:
    """Consumes characters up to, not including, the next '"' or the end of input."""
    def parse(state: State) -> ParseResult[str]:
        stop = state.input.find('"', state.index, state.end)
        if stop == -1:
            stop = state.end
        return Ok(state.input[state.index:stop], state.advance(stop - state.index))
    return Parsec(parse)
