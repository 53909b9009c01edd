from typing import Any, Callable, List

from .Parsec import Error, Ok, ParseResult, Parsec, State, T


def pure(value: T) -> Parsec[T]:
    """Return a parser that succeeds with a value without consuming input."""
    def parse(state: State) -> ParseResult[T]:
        return Ok(value, state)
    return Parsec(parse)


def fail() -> Parsec[Any]:
    """A parser that always fails where it stands."""
    def parse(state: State) -> ParseResult[Any]:
        return Error(state)
    return Parsec(parse)


def literal(s: str) -> Parsec[str]:
    """Parses the exact text s and returns it."""
    def parse(state: State) -> ParseResult[str]:
        if state.startswith(s):
            return Ok(s, state.advance(len(s)))
        return Error(state)
    return Parsec(parse)


def lazy(thunk: Callable[[], Parsec[T]]) -> Parsec[T]:
    """Build the wrapped parser on first use, so grammars can refer to themselves."""
    cache: List[Parsec[T]] = []

    def parse(state: State) -> ParseResult[T]:
        if not cache:
            cache.append(thunk())
        return cache[0].parse_fn(state)
    return Parsec(parse)


def many(p: Parsec[T]) -> Parsec[List[T]]:
    """
    Parse zero or more occurrences of `p`.

    Never fails: stops at the first failing attempt and succeeds with the
    values collected so far and the view just before that attempt. An
    attempt that succeeds without moving the view also ends the loop and
    its value is dropped.
    """
    def parse(state: State) -> ParseResult[List[T]]:
        values: List[T] = []
        current = state
        while True:
            res = p.parse_fn(current)
            if not res.ok or res.state.index == current.index:
                return Ok(values, current)
            values.append(res.value)
            current = res.state
    return Parsec(parse)


def run_parser(parser: Parsec[T], input_str: str, source_name: str = "") -> ParseResult[T]:
    """Run `parser` from the start of `input_str`."""
    return parser(State(input_str, name=source_name))
