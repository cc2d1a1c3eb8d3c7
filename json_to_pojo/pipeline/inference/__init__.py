"""
Inference module.

Turns an example JSON value or a JSON Schema document into InferredShape trees.
"""

from __future__ import annotations

from .reference_resolver import ReferenceResolver
from .sample_inferer import SampleInferer, infer_from_sample, merge_shapes
from .schema_walker import SchemaWalker, infer_from_schema
from .shapes import InferredShape, ShapeKind

__all__ = [
    "InferredShape",
    "ShapeKind",
    "SampleInferer",
    "SchemaWalker",
    "ReferenceResolver",
    "infer_from_sample",
    "infer_from_schema",
    "merge_shapes",
]
