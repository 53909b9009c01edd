import sys
from typing import List, Optional, TextIO

from .Value import JsonArray, JsonBool, JsonNull, JsonNumber, JsonObject, JsonString, JsonValue


def pformat(value: JsonValue, indent: int = 4) -> str:
    """Multi-line debug rendering of a value tree, one child per line."""
    lines: List[str] = []
    _render(value, indent, 0, "", "", lines)
    return "\n".join(lines)


def pprint(value: JsonValue, stream: Optional[TextIO] = None, indent: int = 4) -> None:
    stream = stream if stream is not None else sys.stdout
    stream.write(pformat(value, indent) + "\n")


def _scalar(value: JsonValue) -> str:
    if isinstance(value, JsonNull):
        return "JsonNull"
    if isinstance(value, JsonBool):
        return f"JsonBool({'true' if value.value else 'false'})"
    if isinstance(value, JsonNumber):
        return f"JsonNumber({value.value!r})"
    if isinstance(value, JsonString):
        return f"JsonString({_quote(value.value)})"
    raise TypeError(f"not a JSON value: {value!r}")


def _quote(s: str) -> str:
    return '"' + s.replace('\\', '\\\\').replace('"', '\\"') + '"'


def _render(value: JsonValue, indent: int, level: int, prefix: str, suffix: str, lines: List[str]) -> None:
    pad = " " * (indent * level)
    if isinstance(value, JsonArray):
        children = [("", item) for item in value.items]
        opening, closing = "JsonArray([", "])"
    elif isinstance(value, JsonObject):
        children = [(f"{_quote(key)}: ", item) for key, item in value.fields.items()]
        opening, closing = "JsonObject({", "})"
    else:
        lines.append(f"{pad}{prefix}{_scalar(value)}{suffix}")
        return

    if not children:
        lines.append(f"{pad}{prefix}{opening}{closing}{suffix}")
        return
    lines.append(f"{pad}{prefix}{opening}")
    for child_prefix, child in children:
        _render(child, indent, level + 1, child_prefix, ",", lines)
    lines.append(f"{pad}{closing}{suffix}")
