import logging
from typing import Any, List, Tuple

from .Parsec import Error, Ok, ParseResult, Parsec, State, T, U
from .Prim import literal

logger = logging.getLogger(__name__)


# 1. alternation: p1, or p2 from the same starting point
def alternation(p1: Parsec[T], p2: Parsec[T]) -> Parsec[T]:
    """
    Tries p1; if it fails, runs p2 against the original input.
    The result is whatever p2 returns, so a failure reports p2's position.
    """
    return p1 | p2


# 2. sequence: p1 then p2, keeping both values
def sequence(p1: Parsec[T], p2: Parsec[U]) -> Parsec[Tuple[T, U]]:
    """
    Runs p1, then p2 on what p1 left over, returning the pair of values.
    Fails with p1's failure, or p2's failure on p2's own input.
    """
    return p1 & p2


# 3. left: keep the first half of a pair
def left(p: Parsec[Tuple[T, Any]]) -> Parsec[T]:
    def parse(state: State) -> ParseResult[T]:
        res = p.parse_fn(state)
        if not res.ok:
            return res
        return Ok(res.value[0], res.state)
    return Parsec(parse)


# 4. right: keep the second half of a pair
def right(p: Parsec[Tuple[Any, U]]) -> Parsec[U]:
    def parse(state: State) -> ParseResult[U]:
        res = p.parse_fn(state)
        if not res.ok:
            return res
        return Ok(res.value[1], res.state)
    return Parsec(parse)


# 5. quoted: p between double quotes
def quoted(p: Parsec[T]) -> Parsec[T]:
    """Parses '"', then p, then '"', returning the result of p."""
    quote = literal('"')
    return right(quote & left(p & quote))


# 6. choice: ordered alternatives over one starting point
def choice(parsers: List[Parsec[T]]) -> Parsec[T]:
    """
    Applies each parser to the same input in order and returns the first
    success. Fails with the last alternative's failure, or at the original
    input when the list is empty.
    """
    parsers = list(parsers)

    def parse(state: State) -> ParseResult[T]:
        res: ParseResult[T] = Error(state)
        for p in parsers:
            res = p.parse_fn(state)
            if res.ok:
                return res
        return res
    return Parsec(parse)


# 7. traced: log a parser's progress at DEBUG level
def traced(label: str, p: Parsec[T]) -> Parsec[T]:
    def parse(state: State) -> ParseResult[T]:
        if not logger.isEnabledFor(logging.DEBUG):
            return p.parse_fn(state)
        rest = state.rest
        logger.debug("%s: %r at %s", label, rest[:30] + ('...' if len(rest) > 30 else ''), state.pos)
        res = p.parse_fn(state)
        if res.ok:
            logger.debug("%s matched %d chars", label, res.state.index - state.index)
        else:
            logger.debug("%s failed at %s", label, res.state.pos)
        return res
    return Parsec(parse)
