"""A small representation of JSON Schema definitions for function calling."""

from __future__ import annotations

import dataclasses
import json
from enum import Enum
from typing import Any


class DataType(str, Enum):
    OBJECT = "object"
    NUMBER = "number"
    INTEGER = "integer"
    STRING = "string"
    ARRAY = "array"
    NULL = "null"
    BOOLEAN = "boolean"


@dataclasses.dataclass
class Definition:
    """A JSON Schema node: type, description, enum, properties, required, items."""

    type: DataType | str | None = None
    description: str = ""
    enum: list[str] | None = None
    properties: dict[str, Definition] | None = None
    required: list[str] | None = None
    items: Definition | None = None

    def to_dict(self) -> dict[str, Any]:
        """Return the schema as plain data; ``properties`` is always present."""
        result: dict[str, Any] = {}
        if self.type:
            result["type"] = self.type.value if isinstance(self.type, Enum) else str(self.type)
        if self.description:
            result["description"] = self.description
        if self.enum:
            result["enum"] = list(self.enum)
        result["properties"] = {
            name: definition.to_dict() for name, definition in (self.properties or {}).items()
        }
        if self.required:
            result["required"] = list(self.required)
        if self.items is not None:
            result["items"] = self.items.to_dict()
        return result

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), separators=(",", ":"))