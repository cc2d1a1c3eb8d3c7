"""
Analyzer module.

Contains name resolution and building of the Java object model.
"""

from __future__ import annotations

from .java_model import (
    JavaClass,
    JavaEnum,
    JavaEnumValue,
    JavaField,
    JavaModel,
    JavaType,
    JavaTypeKind,
)
from .model_builder import BuildContext, ModelBuilder

__all__ = [
    "JavaClass",
    "JavaEnum",
    "JavaEnumValue",
    "JavaField",
    "JavaModel",
    "JavaType",
    "JavaTypeKind",
    "BuildContext",
    "ModelBuilder",
]
