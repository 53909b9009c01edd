from dataclasses import dataclass, replace
from typing import Callable, Generic, Optional, Tuple, TypeVar, Union

T = TypeVar('T')  # Generic type for parser results
U = TypeVar('U')


@dataclass(frozen=True)
class SourcePos:
    """A line/column location in the input, for diagnostics only."""
    line: int = 1
    column: int = 1
    name: str = ""

    def advance(self, text: str) -> 'SourcePos':
        """Position reached after reading `text` from this position."""
        newlines = text.count('\n')
        if newlines == 0:
            return SourcePos(self.line, self.column + len(text), self.name)
        return SourcePos(self.line + newlines, len(text) - text.rfind('\n'), self.name)

    def __str__(self) -> str:
        return f"{self.name} line {self.line}, column {self.column}"


@dataclass(frozen=True)
class State:
    """
    An immutable view into the input buffer.

    The buffer itself is never copied: parsers only move `index` forward
    (or `end` backward, when trailing whitespace is trimmed).
    """
    input: str
    index: int = 0
    end: Optional[int] = None
    depth: int = 0
    name: str = ""

    def __post_init__(self):
        if self.end is None:
            object.__setattr__(self, 'end', len(self.input))

    @property
    def rest(self) -> str:
        """The unconsumed text of this view."""
        return self.input[self.index:self.end]

    @property
    def at_end(self) -> bool:
        return self.index >= self.end

    @property
    def pos(self) -> SourcePos:
        return SourcePos(name=self.name).advance(self.input[:self.index])

    def peek(self) -> Optional[str]:
        return self.input[self.index] if self.index < self.end else None

    def startswith(self, s: str) -> bool:
        return self.input.startswith(s, self.index, self.end)

    def advance(self, n: int) -> 'State':
        return replace(self, index=self.index + n)

    def trimmed(self) -> 'State':
        """The same view with leading and trailing whitespace cut off."""
        start, stop = self.index, self.end
        while start < stop and self.input[start].isspace():
            start += 1
        while stop > start and self.input[stop - 1].isspace():
            stop -= 1
        return replace(self, index=start, end=stop)

    def nested(self, depth: int) -> 'State':
        return replace(self, depth=depth)


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful reply: the matched value and the remaining view."""
    value: T
    state: State

    ok = True

    @property
    def remaining(self) -> str:
        return self.state.rest


@dataclass(frozen=True)
class Error:
    """Failed reply: the view at which matching stopped."""
    state: State

    ok = False

    @property
    def remaining(self) -> str:
        return self.state.rest


ParseResult = Union[Ok[T], Error]


class ParseError(Exception):
    """Raised by the high-level entry points when parsing fails."""

    def __init__(self, state: State, message: str = "unexpected input"):
        super().__init__(message)
        self.state = state
        self.message = message

    @property
    def pos(self) -> SourcePos:
        return self.state.pos

    def __str__(self) -> str:
        return f"Parse error at {self.pos}: {self.message}"


class NestingDepthError(ParseError):
    """Containers nested deeper than the configured maximum."""


class Parsec(Generic[T]):
    """A parser: a function from a State to a ParseResult."""
    def __init__(self, parse_fn: Callable[[State], ParseResult[T]]):
        self.parse_fn = parse_fn

    def __call__(self, state: State) -> ParseResult[T]:
        return self.parse_fn(state)

    # Monadic bind (>>=)
    def bind(self, f: Callable[[T], 'Parsec[U]']) -> 'Parsec[U]':
        def parse(state: State) -> ParseResult[U]:
            res = self.parse_fn(state)
            if not res.ok:
                return res
            return f(res.value).parse_fn(res.state)
        return Parsec(parse)

    def map(self, f: Callable[[T], U]) -> 'Parsec[U]':
        def parse(state: State) -> ParseResult[U]:
            res = self.parse_fn(state)
            if not res.ok:
                return res
            return Ok(f(res.value), res.state)
        return Parsec(parse)

    # Alternative (<|>): the right side always restarts from the original view
    def __or__(self, other: 'Parsec[T]') -> 'Parsec[T]':
        def parse(state: State) -> ParseResult[T]:
            res = self.parse_fn(state)
            if res.ok:
                return res
            return other.parse_fn(state)
        return Parsec(parse)

    # Sequence (&)
    def __and__(self, other: 'Parsec[U]') -> 'Parsec[Tuple[T, U]]':
        def combined(state: State) -> ParseResult[Tuple[T, U]]:
            res1 = self.parse_fn(state)
            if not res1.ok:
                return res1
            res2 = other.parse_fn(res1.state)
            if not res2.ok:
                return res2
            return Ok((res1.value, res2.value), res2.state)
        return Parsec(combined)

    # Sequence (*>)
    def __gt__(self, other: 'Parsec[U]') -> 'Parsec[U]':
        def combined(state: State) -> ParseResult[U]:
            res1 = self.parse_fn(state)
            if not res1.ok:
                return res1
            return other.parse_fn(res1.state)
        return Parsec(combined)

    # Sequence (<*)
    def __lt__(self, other: 'Parsec[U]') -> 'Parsec[T]':
        def combined(state: State) -> ParseResult[T]:
            res1 = self.parse_fn(state)
            if not res1.ok:
                return res1
            res2 = other.parse_fn(res1.state)
            if not res2.ok:
                return res2
            return Ok(res1.value, res2.state)
        return Parsec(combined)

    # Monadic bind also available as >>
    def __rshift__(self, f: Callable[[T], 'Parsec[U]']) -> 'Parsec[U]':
        return self.bind(f)
