"""
Shape inference from a JSON Schema document.

Handles the draft-07-like subset: type, properties, required, items, enum,
format, $ref, allOf/anyOf/oneOf, additionalProperties, description and
examples.
"""

from __future__ import annotations

import logging
from typing import Any

from .reference_resolver import ReferenceResolver
from .shapes import InferredShape, ShapeKind, any_shape

logger = logging.getLogger(__name__)

# When "type" lists several kinds, the first one present here wins
TYPE_PRECEDENCE = ["object", "array", "string", "integer", "number", "boolean", "null"]

COMBINATOR_KEYWORDS = ("allOf", "anyOf", "oneOf")

_SCALAR_KINDS = {
    "string": ShapeKind.STRING,
    "integer": ShapeKind.INTEGER,
    "number": ShapeKind.NUMBER,
    "boolean": ShapeKind.BOOLEAN,
    "null": ShapeKind.NULL,
}


class SchemaWalker:
    """Walks a JSON Schema document and produces an InferredShape."""

    def __init__(self, root: Any):
        """
        Initialize the walker.

        Args:
            root: The parsed schema document; local $refs resolve against it
        """
        self.root = root
        self.ref_resolver = ReferenceResolver(root)

    def walk(self, schema: Any = None) -> InferredShape:
        """
        Build the shape for a schema node.

        Args:
            schema: The node to walk (defaults to the root document)

        Returns:
            The inferred shape tree

        Raises:
            SchemaReferenceError: If a $ref is external or unresolvable
        """
        if schema is None:
            schema = self.root
        return self._walk(schema)

    def _walk(self, schema: Any) -> InferredShape:
        # Boolean schemas and anything else that is not an object
        if not isinstance(schema, dict):
            return any_shape()

        if "$ref" in schema:
            return self._walk_ref(schema["$ref"])

        for keyword in COMBINATOR_KEYWORDS:
            if keyword in schema:
                subschemas = schema[keyword]
                if not isinstance(subschemas, list):
                    subschemas = []
                return self._combine([self._walk(sub) for sub in subschemas])

        type_name = normalize_type(schema)
        description = schema.get("description")
        examples = schema.get("examples") if isinstance(schema.get("examples"), list) else None

        if type_name == "object" or "properties" in schema:
            return self._walk_object(schema, description)

        if type_name == "array" or "items" in schema:
            items_schema = schema.get("items")
            if isinstance(items_schema, list):
                items_schema = items_schema[0] if items_schema else None
            items = self._walk(items_schema) if items_schema is not None else any_shape()
            return InferredShape(kind=ShapeKind.ARRAY, items=items, description=description)

        if type_name is None and _is_string_enum(schema.get("enum")):
            type_name = "string"

        if type_name == "string":
            fmt = schema.get("format")
            return InferredShape(
                kind=ShapeKind.STRING,
                format=fmt if isinstance(fmt, str) else None,
                enum=_enum_strings(schema.get("enum")),
                description=description,
                examples=examples,
            )

        if type_name in ("integer", "number"):
            return InferredShape(
                kind=_SCALAR_KINDS[type_name],
                enum=_enum_strings(schema.get("enum")),
                description=description,
                examples=examples,
            )

        if type_name in _SCALAR_KINDS:
            return InferredShape(kind=_SCALAR_KINDS[type_name], description=description, examples=examples)

        return InferredShape(kind=ShapeKind.ANY, description=description)

    def _walk_ref(self, ref: Any) -> InferredShape:
        if not isinstance(ref, str):
            return any_shape()

        target = self.ref_resolver.resolve(ref)

        cached = self.ref_resolver.cached(ref)
        if cached is not None:
            return cached.copy()

        if not self.ref_resolver.enter(ref):
            # Reference cycle through the same $ref string
            logger.debug("Breaking $ref cycle at %s", ref)
            return any_shape()
        try:
            shape = self._walk(target)
        finally:
            self.ref_resolver.leave(ref)

        self.ref_resolver.remember(ref, shape)
        return shape.copy()

    def _walk_object(self, schema: dict[str, Any], description: str | None) -> InferredShape:
        raw_required = schema.get("required")
        required = set(raw_required) if isinstance(raw_required, list) else set()

        properties: dict[str, InferredShape] = {}
        raw_properties = schema.get("properties")
        if isinstance(raw_properties, dict):
            for key, subschema in raw_properties.items():
                child = self._walk(subschema)
                child.required = key in required
                properties[key] = child

        additional = None
        if not properties and isinstance(schema.get("additionalProperties"), dict):
            additional = self._walk(schema["additionalProperties"])

        return InferredShape(
            kind=ShapeKind.OBJECT,
            properties=properties,
            additional_properties=additional,
            description=description,
        )

    def _combine(self, shapes: list[InferredShape]) -> InferredShape:
        """
        Fold combinator branches left to right.

        Objects union their properties (a property is required if required in
        either branch, otherwise the later branch wins); for arrays the later
        branch's item shape replaces the earlier one; other pairs keep the
        earlier shape.
        """
        if not shapes:
            return any_shape()

        acc = shapes[0]
        for shape in shapes[1:]:
            if acc.kind == ShapeKind.OBJECT and shape.kind == ShapeKind.OBJECT:
                properties = dict(acc.properties or {})
                for key, value in (shape.properties or {}).items():
                    if key in properties:
                        properties[key] = value.copy(required=properties[key].required or value.required)
                    else:
                        properties[key] = value
                acc = InferredShape(kind=ShapeKind.OBJECT, properties=properties)
            elif acc.kind == ShapeKind.ARRAY and shape.kind == ShapeKind.ARRAY:
                acc = InferredShape(kind=ShapeKind.ARRAY, items=shape.items or acc.items)
        return acc


def normalize_type(schema: dict[str, Any]) -> str | None:
    """Reduce a schema's "type" keyword to a single kind name."""
    type_value = schema.get("type")
    if not type_value:
        return None
    if isinstance(type_value, list):
        for candidate in TYPE_PRECEDENCE:
            if candidate in type_value:
                return candidate
        type_value = type_value[0]
    return type_value if isinstance(type_value, str) else None


def _is_string_enum(values: Any) -> bool:
    return isinstance(values, list) and bool(values) and all(isinstance(v, str) for v in values)


def _enum_strings(values: Any) -> list[str] | None:
    """Carry enum values as strings, whatever their JSON type."""
    if not isinstance(values, list):
        return None
    return [_json_scalar_to_string(v) for v in values]


def _json_scalar_to_string(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, str):
        return value
    return str(value)


def infer_from_schema(schema: Any) -> InferredShape:
    """Infer the shape described by a parsed JSON Schema document."""
    return SchemaWalker(schema).walk()
