"""
Inferred shape definitions.

Both input walkers (sample JSON and JSON Schema) produce these nodes;
the model builder consumes them.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any


class ShapeKind(str, Enum):
    """Kind of an inferred shape."""

    OBJECT = "object"
    ARRAY = "array"
    STRING = "string"
    NUMBER = "number"
    INTEGER = "integer"
    BOOLEAN = "boolean"
    NULL = "null"
    ANY = "any"


DATE_TIME_FORMAT = "date-time"


@dataclass
class InferredShape:
    """Structural description of a JSON value."""

    kind: ShapeKind = ShapeKind.ANY

    # OBJECT: property key -> shape
    properties: dict[str, InferredShape] | None = None

    # OBJECT without properties: shape of additionalProperties values
    additional_properties: InferredShape | None = None

    # ARRAY: element shape
    items: InferredShape | None = None

    # STRING: format (e.g. "date-time") and enumerated values
    format: str | None = None
    enum: list[str] | None = None

    description: str | None = None
    examples: list[Any] | None = None

    # Only meaningful when this shape is a property value of a parent object.
    # Set by the producer when the property is attached, never inferred later.
    required: bool = False

    def copy(self, **changes) -> InferredShape:
        """Return a shallow copy with the given attributes changed."""
        return replace(self, **changes)

    def to_dict(self, include_required: bool = True) -> dict[str, Any]:
        """
        Convert to a plain nested value.

        Args:
            include_required: Whether to include this node's own required flag.
                Nested property shapes always carry theirs.

        Returns:
            Dictionary with unset attributes omitted
        """
        result: dict[str, Any] = {"type": self.kind.value}
        if self.properties is not None:
            result["properties"] = {key: value.to_dict() for key, value in self.properties.items()}
        if self.additional_properties is not None:
            result["additionalProperties"] = self.additional_properties.to_dict(include_required=False)
        if self.items is not None:
            result["items"] = self.items.to_dict(include_required=False)
        if self.format is not None:
            result["format"] = self.format
        if self.enum is not None:
            result["enum"] = list(self.enum)
        if self.description is not None:
            result["description"] = self.description
        if self.examples is not None:
            result["examples"] = list(self.examples)
        if include_required:
            result["required"] = self.required
        return result


def any_shape() -> InferredShape:
    """The generic fallback shape."""
    return InferredShape(kind=ShapeKind.ANY)

