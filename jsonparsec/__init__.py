# Core
from .Parsec import Parsec, State, Ok, Error, ParseResult, SourcePos, ParseError, NestingDepthError
from .Prim import run_parser, pure, fail, literal, lazy, many

# Combinators
from .Combinators import alternation, sequence, left, right, quoted, choice, traced

# Lexical primitives
from .Char import take_while, whitespace, digits, until_quote

# Values
from .Value import JsonValue, JsonNull, JsonBool, JsonNumber, JsonString, JsonArray, JsonObject

# JSON grammar
from .Json import (
    JsonConfig, DEFAULT_CONFIG, DEFAULT_MAX_DEPTH,
    json_null, json_bool, json_number, json_string, json_array, json_object, json_value,
    grammar, parse_json, loads,
)

# Output
from .Pretty import pformat, pprint
