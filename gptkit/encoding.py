"""JSON encoding and decoding of request and response values."""

from __future__ import annotations

import base64
import dataclasses
import json
from collections.abc import Mapping
from enum import Enum
from typing import Any

# Characters escaped inside JSON strings so that the output is safe to embed in HTML.
_ESCAPE_TABLE = str.maketrans(
    {
        "<": "\\u003c",
        ">": "\\u003e",
        "&": "\\u0026",
        "\u2028": "\\u2028",
        "\u2029": "\\u2029",
    }
)


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, Enum):
        return _is_empty(value.value)
    if isinstance(value, (str, bytes, bytearray, list, tuple, dict)):
        return len(value) == 0
    if isinstance(value, (bool, int, float)):
        return not value
    return False


def to_jsonable(value: Any) -> Any:
    """Convert a value into plain JSON-compatible Python data.

    Dataclass fields may carry metadata: ``"json"`` gives the key name
    (``"-"`` drops the field) and ``"omitempty"`` drops empty values.
    Fields whose names start with an underscore are never encoded.
    Objects with a ``to_dict`` method are encoded through it.
    """
    if isinstance(value, Enum):
        return to_jsonable(value.value)
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if isinstance(value, (bytes, bytearray, memoryview)):
        return base64.b64encode(bytes(value)).decode("ascii")
    to_dict = getattr(value, "to_dict", None)
    if callable(to_dict) and not isinstance(value, type):
        return to_jsonable(to_dict())
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        result: dict[str, Any] = {}
        for field in dataclasses.fields(value):
            if field.name.startswith("_"):
                continue
            name = field.metadata.get("json", field.name)
            if name == "-":
                continue
            item = getattr(value, field.name)
            if field.metadata.get("omitempty") and _is_empty(item):
                continue
            result[name] = to_jsonable(item)
        return result
    if isinstance(value, Mapping):
        return {str(key): to_jsonable(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_jsonable(item) for item in value]
    raise TypeError(f"cannot encode value of type {type(value).__name__} as JSON")


class JSONMarshaller:
    """Encodes values as compact, HTML-safe JSON bytes."""

    def marshal(self, value: Any) -> bytes:
        text = json.dumps(
            to_jsonable(value),
            ensure_ascii=False,
            allow_nan=False,
            separators=(",", ":"),
        )
        return text.translate(_ESCAPE_TABLE).encode("utf-8")


class JSONUnmarshaler:
    """Decodes JSON text into Python data."""

    def unmarshal(self, data: bytes | str) -> Any:
        return json.loads(data)