"""Compact JSON encoding for protocol objects."""

from __future__ import annotations

import base64
import dataclasses
import enum
import json
import math
from collections.abc import Mapping
from typing import Any

_HTML_SAFE = str.maketrans(
    {
        "<": "\\u003c",
        ">": "\\u003e",
        "&": "\\u0026",
        "\u2028": "\\u2028",
        "\u2029": "\\u2029",
    }
)


def _encode_float(value: float) -> float | int:
    if not math.isfinite(value):
        raise ValueError(f"unsupported float value: {value!r}")
    if value.is_integer() and abs(value) < 1e21:
        return int(value)
    return value


def to_jsonable(value: Any) -> Any:
    """Convert a value into plain JSON-compatible Python data.

    Objects with a ``to_dict`` method are converted through it, enums become
    their values, bytes become base64 text and dataclasses become dicts.
    Integral floats are rendered as integers, matching the wire format.
    """
    if isinstance(value, enum.Enum):
        return to_jsonable(value.value)
    to_dict = getattr(value, "to_dict", None)
    if callable(to_dict) and not isinstance(value, type):
        return to_jsonable(to_dict())
    if value is None or isinstance(value, (bool, str)):
        return value
    if isinstance(value, int):
        return int(value)
    if isinstance(value, float):
        return _encode_float(value)
    if isinstance(value, Mapping):
        result = {}
        for key, item in value.items():
            if isinstance(key, enum.Enum):
                key = key.value
            if not isinstance(key, str):
                raise TypeError(f"mapping keys must be strings, got {type(key).__name__}")
            result[key] = to_jsonable(item)
        return result
    if isinstance(value, (list, tuple)):
        return [to_jsonable(item) for item in value]
    if isinstance(value, (bytes, bytearray)):
        return base64.b64encode(bytes(value)).decode("ascii")
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {
            field.name: to_jsonable(getattr(value, field.name))
            for field in dataclasses.fields(value)
        }
    raise TypeError(f"cannot encode value of type {type(value).__name__}")


def dumps(value: Any) -> str:
    """Serialise a value to compact JSON text with HTML-sensitive characters escaped."""
    text = json.dumps(
        to_jsonable(value),
        separators=(",", ":"),
        ensure_ascii=False,
        allow_nan=False,
    )
    return text.translate(_HTML_SAFE)