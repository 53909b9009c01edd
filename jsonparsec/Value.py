from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass
class JsonValue:
    """Base of the six JSON value kinds."""

    def to_python(self) -> Any:
        raise NotImplementedError


@dataclass
class JsonNull(JsonValue):
    def to_python(self) -> None:
        return None


@dataclass
class JsonBool(JsonValue):
    value: bool

    def to_python(self) -> bool:
        return self.value


@dataclass
class JsonNumber(JsonValue):
    # Integers and decimals share one float representation.
    # Values keep full double precision; nothing is rounded to single precision.
    value: float

    def to_python(self) -> float:
        return self.value


@dataclass
class JsonString(JsonValue):
    # Raw body between the quotes; escapes are not decoded
    value: str

    def to_python(self) -> str:
        return self.value


@dataclass
class JsonArray(JsonValue):
    items: List[JsonValue] = field(default_factory=list)

    def to_python(self) -> List[Any]:
        return [item.to_python() for item in self.items]


@dataclass
class JsonObject(JsonValue):
    """
    String keys to values. A repeated key replaces the earlier one.

    Field order is not meaningful: two objects with the same pairs are
    equal however they were written.
    """
    fields: Dict[str, JsonValue] = field(default_factory=dict)

    def to_python(self) -> Dict[str, Any]:
        return {key: value.to_python() for key, value in self.fields.items()}
