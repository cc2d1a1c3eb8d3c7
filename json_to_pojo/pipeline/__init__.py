"""
Pipeline - JSON / JSON Schema to Java POJO generator.

This module provides a multi-phase architecture for generating Java
classes from an example JSON value or a JSON Schema document:

1. Phase 1 (Inference): Infer a shape tree from the sample or the schema
2. Phase 2 (Analyzer): Resolve names and types and build the Java model
3. Phase 3 (Backend): Render one Java source per standalone class
"""

from __future__ import annotations

from .config import (
    ArrayInference,
    CollectionType,
    DateType,
    FieldAccess,
    GeneratorConfig,
    NullHandling,
    NumberStrategy,
    SerializationLibrary,
)
from .generator import GenerationRequest, GenerationResult, InputKind, PojoGenerator, generate_model

__all__ = [
    "PojoGenerator",
    "GenerationRequest",
    "GenerationResult",
    "InputKind",
    "generate_model",
    "GeneratorConfig",
    "ArrayInference",
    "CollectionType",
    "DateType",
    "FieldAccess",
    "NullHandling",
    "NumberStrategy",
    "SerializationLibrary",
]
