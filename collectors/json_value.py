"""Tagged JSON value tree and the dot-path evaluator used by the json parser.

Decoded documents are converted from plain Python objects into one of six
variants so that path evaluation is a match over known cases instead of
``isinstance`` checks scattered through the parser::

    JsonValue = JsonNull | JsonBool | JsonNumber | JsonString | JsonArray | JsonObject

Every variant renders to text the way the value will be handed to ``float``:
numbers and strings render as themselves, everything else renders to a
form that fails numeric conversion.
"""

from __future__ import annotations

import json
import math
import re
from dataclasses import dataclass
from typing import Any, Union

from .base import ParseError

_ARRAY_INDEX = re.compile(r"[+-]?[0-9]+")


@dataclass(frozen=True)
class JsonNull:
    def render(self) -> str:
        return "null"

    def to_python(self) -> Any:
        return None


@dataclass(frozen=True)
class JsonBool:
    value: bool

    def render(self) -> str:
        return "true" if self.value else "false"

    def to_python(self) -> Any:
        return self.value


@dataclass(frozen=True)
class JsonNumber:
    value: float

    def render(self) -> str:
        return repr(self.value)

    def to_python(self) -> Any:
        return self.value


@dataclass(frozen=True)
class JsonString:
    value: str

    def render(self) -> str:
        return self.value

    def to_python(self) -> Any:
        return self.value


@dataclass(frozen=True)
class JsonArray:
    items: tuple[JsonValue, ...]

    def render(self) -> str:
        return json.dumps(self.to_python(), separators=(",", ":"))

    def to_python(self) -> Any:
        return [item.to_python() for item in self.items]


@dataclass(frozen=True)
class JsonObject:
    members: dict[str, JsonValue]

    def render(self) -> str:
        return json.dumps(self.to_python(), separators=(",", ":"))

    def to_python(self) -> Any:
        return {key: val.to_python() for key, val in self.members.items()}


JsonValue = Union[JsonNull, JsonBool, JsonNumber, JsonString, JsonArray, JsonObject]


def from_python(obj: Any) -> JsonValue:
    """Convert the output of ``json.loads`` into a JsonValue tree."""
    if obj is None:
        return JsonNull()
    # bool before int/float, bool is an int subclass
    if isinstance(obj, bool):
        return JsonBool(obj)
    if isinstance(obj, (int, float)):
        return JsonNumber(float(obj))
    if isinstance(obj, str):
        return JsonString(obj)
    if isinstance(obj, list):
        return JsonArray(tuple(from_python(item) for item in obj))
    if isinstance(obj, dict):
        return JsonObject({str(key): from_python(val) for key, val in obj.items()})
    raise TypeError(f"not a JSON value: {type(obj).__name__}")


def _reject_constant(name: str) -> Any:
    raise ValueError(f"unsupported JSON constant: {name}")


def _finite_number(text: str) -> float:
    value = float(text)
    if math.isinf(value):
        raise ValueError(f"number out of range: {text}")
    return value


def decode(raw: str) -> JsonValue:
    try:
        return from_python(json.loads(
            raw,
            parse_constant=_reject_constant,
            parse_float=_finite_number,
            parse_int=_finite_number,
        ))
    except (ValueError, RecursionError) as e:
        raise ParseError(f"invalid JSON: {e}") from e


def resolve(value: JsonValue, segments: list[str]) -> JsonValue:
    """Descend into ``value`` one path segment at a time."""
    if not segments:
        return value

    part, rest = segments[0], segments[1:]
    if isinstance(value, JsonObject):
        if part not in value.members:
            raise ParseError(f"JSON path not found: {part}")
        return resolve(value.members[part], rest)

    if isinstance(value, JsonArray):
        if not _ARRAY_INDEX.fullmatch(part):
            raise ParseError(f"invalid array index: {part}")
        index = int(part)
        if index < 0 or index >= len(value.items):
            raise ParseError(f"array index out of range: {index}")
        return resolve(value.items[index], rest)

    raise ParseError(f"cannot navigate JSON path at: {part}")


def evaluate(value: JsonValue, path: str) -> str:
    """Resolve a dot path such as ``connections.active`` or ``items.1``.

    An empty path selects the whole document.
    """
    if not path:
        return value.render()
    return resolve(value, path.split(".")).render()
