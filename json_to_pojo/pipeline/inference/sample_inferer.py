"""
Shape inference from an example JSON value.
"""

from __future__ import annotations

import re
from functools import reduce
from typing import Any

from ..config import ArrayInference, GeneratorConfig
from .shapes import DATE_TIME_FORMAT, InferredShape, ShapeKind, any_shape

# Date, then optional time with seconds, fraction and zone
ISO_DATE_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}(?:[T\s][0-9]{2}:[0-9]{2}:[0-9]{2}(?:\.[0-9]+)?(?:Z|[+-][0-9]{2}:?[0-9]{2})?)?")


class SampleInferer:
    """Classifies a parsed JSON value into an InferredShape."""

    def __init__(self, config: GeneratorConfig):
        self.config = config

    def infer(self, value: Any) -> InferredShape:
        """
        Infer the shape of a parsed JSON value.

        Args:
            value: Result of ``json.loads``

        Returns:
            The inferred shape tree
        """
        if value is None:
            return InferredShape(kind=ShapeKind.NULL)

        if isinstance(value, list):
            return self._infer_array(value)

        if isinstance(value, dict):
            properties: dict[str, InferredShape] = {}
            for key, child in value.items():
                shape = self.infer(child)
                shape.required = child is not None
                properties[key] = shape
            return InferredShape(kind=ShapeKind.OBJECT, properties=properties)

        # bool is a subclass of int
        if isinstance(value, bool):
            return InferredShape(kind=ShapeKind.BOOLEAN)

        if isinstance(value, int):
            return InferredShape(kind=ShapeKind.INTEGER)

        if isinstance(value, float):
            kind = ShapeKind.INTEGER if value.is_integer() else ShapeKind.NUMBER
            return InferredShape(kind=kind)

        if isinstance(value, str):
            shape = InferredShape(kind=ShapeKind.STRING)
            if ISO_DATE_PATTERN.fullmatch(value):
                shape.format = DATE_TIME_FORMAT
            return shape

        return any_shape()

    def _infer_array(self, value: list[Any]) -> InferredShape:
        if not value:
            return InferredShape(kind=ShapeKind.ARRAY, items=any_shape())

        if self.config.array_inference == ArrayInference.STRICT:
            return InferredShape(kind=ShapeKind.ARRAY, items=self.infer(value[0]))

        items = [self.infer(item) for item in value]
        return InferredShape(kind=ShapeKind.ARRAY, items=reduce(merge_shapes, items))


def merge_shapes(a: InferredShape, b: InferredShape) -> InferredShape:
    """
    Merge two sample shapes into one.

    Objects union their properties, merging shapes present in both; arrays
    merge their item shapes; any other same-kind pair keeps ``a``. Shapes of
    different kinds collapse to the generic "any" shape, dropping everything
    else.
    """
    if a.kind != b.kind:
        return any_shape()

    if a.kind == ShapeKind.OBJECT and a.properties is not None and b.properties is not None:
        merged = dict(a.properties)
        for key, value in b.properties.items():
            if key in merged:
                merged[key] = merge_shapes(merged[key], value)
            else:
                merged[key] = value
        return a.copy(properties=merged)

    if a.kind == ShapeKind.ARRAY and a.items is not None and b.items is not None:
        return a.copy(items=merge_shapes(a.items, b.items))

    return a


def infer_from_sample(value: Any, config: GeneratorConfig) -> InferredShape:
    """Infer the shape of a parsed example value."""
    return SampleInferer(config).infer(value)
