"""
Java object model definitions.

These nodes represent the classes and enums of one generation run, with
all names resolved and all field types decided, ready for emission.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class JavaTypeKind(Enum):
    """Kind of type in the Java model."""

    PRIMITIVE = "primitive"  # int, Integer, String, ...
    SPECIAL = "special"  # generic fallback (Object)
    ARRAY = "array"  # List<T> / Set<T>
    MAP = "map"  # Map<String, T>
    REFERENCE = "reference"  # generated class or library type
    ENUM = "enum"  # generated enum
    OPTIONAL = "optional"  # Optional<T>


# Primitive -> wrapper
BOXED_TYPES = {
    "boolean": "Boolean",
    "int": "Integer",
    "long": "Long",
    "double": "Double",
    "float": "Float",
    "short": "Short",
    "byte": "Byte",
    "char": "Character",
}

FALLBACK_TYPE_NAME = "Object"


@dataclass
class JavaType:
    """A resolved Java type."""

    kind: JavaTypeKind = JavaTypeKind.PRIMITIVE
    name: str = ""  # "int", "String", "List", "Optional", class name, ...

    # ARRAY: [element], MAP: [key, value], OPTIONAL: [wrapped]
    type_args: list[JavaType] = field(default_factory=list)

    @staticmethod
    def primitive(name: str) -> JavaType:
        return JavaType(kind=JavaTypeKind.PRIMITIVE, name=name)

    @staticmethod
    def special() -> JavaType:
        return JavaType(kind=JavaTypeKind.SPECIAL, name=FALLBACK_TYPE_NAME)

    @staticmethod
    def array(element: JavaType, collection: str = "List") -> JavaType:
        return JavaType(kind=JavaTypeKind.ARRAY, name=collection, type_args=[element])

    @staticmethod
    def map(value: JavaType) -> JavaType:
        return JavaType(kind=JavaTypeKind.MAP, name="Map", type_args=[JavaType.primitive("String"), value])

    @staticmethod
    def reference(name: str) -> JavaType:
        return JavaType(kind=JavaTypeKind.REFERENCE, name=name)

    @staticmethod
    def enum(name: str) -> JavaType:
        return JavaType(kind=JavaTypeKind.ENUM, name=name)

    @staticmethod
    def optional(of: JavaType) -> JavaType:
        return JavaType(kind=JavaTypeKind.OPTIONAL, name="Optional", type_args=[of])

    @property
    def is_raw_primitive(self) -> bool:
        """Whether this is an unboxed Java primitive (int, boolean, ...)."""
        return self.kind == JavaTypeKind.PRIMITIVE and self.name in BOXED_TYPES

    def boxed(self) -> JavaType:
        """Return the wrapper type for a raw primitive, otherwise self."""
        if self.is_raw_primitive:
            return JavaType.primitive(BOXED_TYPES[self.name])
        return self

    def to_java(self) -> str:
        """Render as Java source, e.g. ``List<Optional<Integer>>``."""
        if self.kind == JavaTypeKind.SPECIAL:
            return FALLBACK_TYPE_NAME
        if self.type_args:
            args = ", ".join(arg.to_java() for arg in self.type_args)
            return f"{self.name}<{args}>"
        return self.name or FALLBACK_TYPE_NAME


@dataclass
class JavaField:
    """A field of a generated class."""

    name: str = ""  # Java identifier
    json_name: str = ""  # Original JSON property key
    type_ref: JavaType = field(default_factory=JavaType.special)
    required: bool = False
    description: str | None = None
    example: Any = None


@dataclass
class JavaEnumValue:
    """An enum constant and the raw string it stands for."""

    name: str = ""
    value: str = ""


@dataclass
class JavaEnum:
    """An enum definition."""

    name: str = ""
    values: list[JavaEnumValue] = field(default_factory=list)
    description: str | None = None


@dataclass
class JavaClass:
    """A class definition."""

    name: str = ""
    description: str | None = None
    fields: list[JavaField] = field(default_factory=list)
    enums: list[JavaEnum] = field(default_factory=list)
    inner_classes: list[JavaClass] = field(default_factory=list)
    annotations: list[str] = field(default_factory=list)

    # Emitted inside its parent's body instead of as its own file
    nested: bool = False

    def add_annotation(self, annotation: str) -> None:
        """Append an annotation unless it is already present."""
        if annotation not in self.annotations:
            self.annotations.append(annotation)


@dataclass
class JavaModel:
    """The complete object model of one generation run."""

    root: JavaClass

    # Every class and enum created in the run, in creation order
    classes: dict[str, JavaClass] = field(default_factory=dict)
    enums: dict[str, JavaEnum] = field(default_factory=dict)
