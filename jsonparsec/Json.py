"""
JSON grammar built from the combinators.

One rule per value kind, a dispatcher that tries them in a fixed order,
and the two entry points `parse_json` (returns a ParseResult) and `loads`
(returns a value or raises ParseError).
"""
import logging
import sys
import threading
from contextlib import contextmanager
from dataclasses import dataclass
from functools import lru_cache
from typing import List, Optional, Tuple

from .Char import digits, until_quote, whitespace
from .Combinators import choice, left, quoted, right, traced
from .Parsec import Error, NestingDepthError, Ok, ParseError, ParseResult, Parsec, State, T
from .Prim import lazy, literal, many, run_parser
from .Value import JsonArray, JsonBool, JsonNull, JsonNumber, JsonObject, JsonString, JsonValue

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 100


@dataclass(frozen=True)
class JsonConfig:
    """
    Parser options.

    max_depth: deepest allowed container nesting, None for no limit beyond
        the stack headroom a parse is given (UNBOUNDED_LEVELS levels).
    strict: reject truncated containers, trailing commas and leftover input
        instead of silently stopping at the first malformed element.
    trace: log every value rule's progress at DEBUG level.
    """
    max_depth: Optional[int] = DEFAULT_MAX_DEPTH
    strict: bool = False
    trace: bool = False

    def __post_init__(self):
        if self.max_depth is not None and self.max_depth < 1:
            raise ValueError(f"max_depth must be a positive integer or None, got {self.max_depth!r}")


DEFAULT_CONFIG = JsonConfig()


# --- Scalars ---

def json_null() -> Parsec[JsonValue]:
    return literal("null").map(lambda _: JsonNull())


def json_bool() -> Parsec[JsonValue]:
    return (literal("true") | literal("false")).map(lambda s: JsonBool(s == "true"))


def json_number() -> Parsec[JsonValue]:
    # digits() only matches text float() accepts
    return digits().map(lambda s: JsonNumber(float(s)))


def json_string() -> Parsec[JsonValue]:
    return quoted(until_quote()).map(JsonString)


# --- Containers ---

def nested(p: Parsec[T], max_depth: Optional[int]) -> Parsec[T]:
    """Run p one container level deeper, raising NestingDepthError past max_depth."""
    def parse(state: State) -> ParseResult[T]:
        depth = state.depth + 1
        if max_depth is not None and depth > max_depth:
            raise NestingDepthError(state, f"containers nested deeper than {max_depth} levels")
        res = p.parse_fn(state.nested(depth))
        if res.ok:
            return Ok(res.value, res.state.nested(state.depth))
        return Error(res.state.nested(state.depth))
    return Parsec(parse)


def _closed_by(closer: str, item: Parsec[T]) -> Parsec[List[T]]:
    """Strict body: `closer` alone, or items separated by ',' and then `closer`."""
    items = (item & many(right(literal(",") & item))).map(lambda pair: [pair[0]] + pair[1])
    empty = literal(closer).map(lambda _: [])
    return right(whitespace() & (empty | left(items & literal(closer))))


def json_array(value: Parsec[JsonValue], config: JsonConfig = DEFAULT_CONFIG) -> Parsec[JsonValue]:
    """
    '[' followed by elements. In lenient mode each element is
    "whitespace value whitespace (',' | ']')" and the array ends at the
    first element that does not match, wherever that is.
    """
    ws = whitespace()
    element = right(ws & value)
    if config.strict:
        body = _closed_by("]", left(element & ws))
    else:
        closer = literal(",") | literal("]")
        body = many(left(element & (ws & closer)))
    return right(literal("[") & nested(body.map(JsonArray), config.max_depth))


def json_object(value: Parsec[JsonValue], config: JsonConfig = DEFAULT_CONFIG) -> Parsec[JsonValue]:
    """
    '{' followed by members "whitespace key whitespace ':' whitespace value",
    each closed by ',' or '}' in lenient mode. Later duplicates of a key win.
    """
    ws = whitespace()
    key = right(ws & quoted(until_quote()))
    key_sep = left(key & (ws & literal(":")))
    member_value = right(ws & value)
    if config.strict:
        body = _closed_by("}", key_sep & left(member_value & ws))
    else:
        closer = literal(",") | literal("}")
        body = many(key_sep & left(member_value & (ws & closer)))

    def build(pairs: List[Tuple[str, JsonValue]]) -> JsonValue:
        return JsonObject(dict(pairs))

    return right(literal("{") & nested(body.map(build), config.max_depth))


# --- Dispatcher ---

def json_value(rules: List[Parsec[JsonValue]]) -> Parsec[JsonValue]:
    """Trim the input, then return the first rule that matches it."""
    alternatives = choice(rules)

    def parse(state: State) -> ParseResult[JsonValue]:
        trimmed = state.trimmed()
        res = alternatives.parse_fn(trimmed)
        if res.ok:
            return res
        return Error(trimmed)
    return Parsec(parse)


@lru_cache(maxsize=None)
def grammar(config: JsonConfig = DEFAULT_CONFIG) -> Parsec[JsonValue]:
    """The complete value parser for a configuration."""
    value = lazy(lambda: dispatcher)
    rules = [
        ("null", json_null()),
        ("boolean", json_bool()),
        ("string", json_string()),
        ("number", json_number()),
        ("array", json_array(value, config)),
        ("object", json_object(value, config)),
    ]
    if config.trace:
        rules = [(name, traced(name, rule)) for name, rule in rules]
    dispatcher = json_value([rule for _, rule in rules])
    return dispatcher


# Interpreter frames one container level costs, with room for strict bodies and tracing
FRAMES_PER_LEVEL = 30
# Levels of headroom given to a parse with no depth limit
UNBOUNDED_LEVELS = 1000

_limit_lock = threading.Lock()
_active_runs = 0
_saved_limit = 0


@contextmanager
def _recursion_headroom(levels: int):
    """Raise the recursion limit by enough frames for `levels` of nesting, restoring it afterwards."""
    global _active_runs, _saved_limit
    with _limit_lock:
        if _active_runs == 0:
            _saved_limit = sys.getrecursionlimit()
        _active_runs += 1
        needed = _saved_limit + FRAMES_PER_LEVEL * levels
        if needed > sys.getrecursionlimit():
            sys.setrecursionlimit(needed)
    try:
        yield
    finally:
        with _limit_lock:
            _active_runs -= 1
            if _active_runs == 0:
                sys.setrecursionlimit(_saved_limit)


def _run(text: str, config: JsonConfig, source_name: str) -> ParseResult[JsonValue]:
    levels = config.max_depth if config.max_depth is not None else UNBOUNDED_LEVELS
    try:
        with _recursion_headroom(levels):
            return run_parser(grammar(config), text, source_name)
    except RecursionError as e:
        raise NestingDepthError(State(text, name=source_name), "input nested too deeply to parse") from e


def parse_json(text: str, config: Optional[JsonConfig] = None, source_name: str = "") -> ParseResult[JsonValue]:
    """
    Parse one JSON value from `text`.

    Returns Ok(value, state) where `state.rest` is whatever followed the
    value (empty for a fully consumed document), or Error(state) where
    `state.rest` is the text at which no value kind matched. In strict mode
    leftover text is itself a failure.
    """
    config = config or DEFAULT_CONFIG
    res = _run(text, config, source_name)
    if res.ok and config.strict and not res.state.at_end:
        return Error(res.state)
    return res


def loads(text: str, config: Optional[JsonConfig] = None, source_name: str = "") -> JsonValue:
    """Parse `text` and return its value, raising ParseError when that fails."""
    config = config or DEFAULT_CONFIG
    res = _run(text, config, source_name)
    if not res.ok:
        raise ParseError(res.state, "no JSON value matches")
    if not res.state.at_end:
        if config.strict:
            raise ParseError(res.state, "unexpected text after JSON value")
        logger.warning("%d characters left unparsed at %s", res.state.end - res.state.index, res.state.pos)
    logger.debug("parsed %s from %d characters", type(res.value).__name__, len(text))
    return res.value
