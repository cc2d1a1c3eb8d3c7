"""
Model builder that transforms inferred shapes into the Java object model.

Resolves field types, assigns unique class names, deduplicates
structurally identical objects and decides enum and nesting placement.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

from ...errors import ModelBuildError
from ..config import CollectionType, DateType, GeneratorConfig, NullHandling, NumberStrategy, SerializationLibrary
from ..inference.shapes import DATE_TIME_FORMAT, InferredShape, ShapeKind, any_shape
from .java_model import JavaClass, JavaEnum, JavaEnumValue, JavaField, JavaModel, JavaType, JavaTypeKind
from .name_resolver import ensure_unique_name, fingerprint, sanitize_java_identifier, to_pascal_case

logger = logging.getLogger(__name__)

JACKSON_CLASS_ANNOTATION = "@JsonIgnoreProperties(ignoreUnknown = true)"
DATA_ANNOTATION = "@Data"
BUILDER_ANNOTATION = "@Builder"

ENUM_CONSTANT_PLACEHOLDER = "VALUE"

# (raw primitive, wrapper) per strategy
NUMBER_TYPES = {
    NumberStrategy.INTEGER: ("int", "Integer"),
    NumberStrategy.LONG: ("long", "Long"),
    NumberStrategy.DOUBLE: ("double", "Double"),
}

DATE_TYPES = {
    DateType.JAVA_TIME: "OffsetDateTime",
    DateType.LEGACY_DATE: "Date",
}

_ENUM_CONSTANT_INVALID = re.compile(r"[^A-Z0-9]+")

# Types and annotations the emitter refers to by simple name; generated classes must not shadow them
RESERVED_TYPE_NAMES = frozenset(
    {
        "Object",
        "String",
        "Boolean",
        "Integer",
        "Long",
        "Double",
        "BigDecimal",
        "List",
        "Set",
        "Map",
        "Optional",
        "OffsetDateTime",
        "Date",
        "Data",
        "Builder",
        "JsonIgnoreProperties",
        "JsonProperty",
        "SerializedName",
        "Json",
    }
)


@dataclass
class BuildContext:
    """Mutable tables of one generation run.

    Created fresh for every build and passed through every recursive call.
    """

    config: GeneratorConfig
    classes: dict[str, JavaClass] = field(default_factory=dict)
    enums: dict[str, JavaEnum] = field(default_factory=dict)

    # Class and enum names reserved so far
    used_names: set[str] = field(default_factory=lambda: set(RESERVED_TYPE_NAMES))

    # Shape fingerprint -> class name
    fingerprints: dict[str, str] = field(default_factory=dict)

    diagnostics: list[str] = field(default_factory=list)


class ModelBuilder:
    """Builds a JavaModel from an InferredShape tree."""

    def __init__(self, config: GeneratorConfig):
        """
        Initialize the builder.

        Args:
            config: Validated generator configuration
        """
        self.config = config

    def build(self, shape: InferredShape) -> tuple[JavaModel, list[str]]:
        """
        Build the object model for a root shape.

        Args:
            shape: Root of the inferred shape tree

        Returns:
            The model and the list of diagnostics collected while building

        Raises:
            ModelBuildError: If no class was produced for the root shape
        """
        context = BuildContext(config=self.config)

        if self.config.use_builder_annotation and not self.config.use_data_annotation:
            context.diagnostics.append("Builder annotation ignored: it requires the data annotation.")

        if shape.kind != ShapeKind.OBJECT:
            context.diagnostics.append(f"Top-level value is {shape.kind.value}, not an object; generated an empty {self.config.root_class_name} class.")

        root_name = sanitize_java_identifier(self.config.root_class_name or "Root", pascal=True)
        root_class_name = self._build_class(shape, root_name, context, None)
        root_class = context.classes.get(root_class_name)
        if root_class is None:
            raise ModelBuildError("Failed to build root class.")

        logger.debug("Built %d classes and %d enums", len(context.classes), len(context.enums))
        model = JavaModel(root=root_class, classes=context.classes, enums=context.enums)
        return model, context.diagnostics

    def _build_class(
        self,
        shape: InferredShape,
        name_hint: str,
        context: BuildContext,
        parent: JavaClass | None,
    ) -> str:
        """Create (or reuse) the class for an object shape and return its name."""
        sanitized_name = sanitize_java_identifier(name_hint, pascal=True)
        # The node's own required flag belongs to its parent, not its structure
        key = fingerprint(shape.to_dict(include_required=False))

        if self.config.stable_names and key in context.fingerprints:
            existing = context.fingerprints[key]
            logger.debug("Reusing class %s for %s", existing, name_hint)
            return existing

        class_name = ensure_unique_name(sanitized_name, context.used_names)
        java_class = JavaClass(name=class_name, description=shape.description)
        context.classes[class_name] = java_class
        if self.config.stable_names:
            context.fingerprints[key] = class_name

        field_names: set[str] = set()
        for json_name, prop_shape in (shape.properties or {}).items():
            field_name = ensure_unique_name(sanitize_java_identifier(json_name), field_names)
            required = prop_shape.required
            field_type = self._resolve_type(prop_shape, to_pascal_case(json_name), context, java_class, required)
            if field_type.kind == JavaTypeKind.SPECIAL:
                context.diagnostics.append(f"{class_name}.{field_name}: could not determine a type ({prop_shape.kind.value}); using Object.")
            java_class.fields.append(
                JavaField(
                    name=field_name,
                    json_name=json_name,
                    type_ref=self._optionalize(field_type, required),
                    required=required,
                    description=prop_shape.description,
                    example=prop_shape.examples[0] if prop_shape.examples else None,
                )
            )

        if parent is not None and self.config.inner_classes:
            java_class.nested = True
            parent.inner_classes.append(java_class)

        self._apply_class_annotations(java_class)
        return class_name

    def _resolve_type(
        self,
        shape: InferredShape,
        name_hint: str,
        context: BuildContext,
        parent: JavaClass | None,
        required: bool,
    ) -> JavaType:
        """Resolve the Java type for a shape."""
        if shape.kind == ShapeKind.ARRAY:
            element = self._resolve_type(shape.items or any_shape(), f"{name_hint}Item", context, parent, False)
            return JavaType.array(element, self._collection_name())

        if shape.kind == ShapeKind.OBJECT:
            if not shape.properties and shape.additional_properties is not None:
                value = self._resolve_type(shape.additional_properties, f"{name_hint}Value", context, parent, False)
                return JavaType.map(value)
            return JavaType.reference(self._build_class(shape, name_hint, context, parent))

        if shape.kind == ShapeKind.BOOLEAN:
            return JavaType.primitive("boolean" if self._use_raw_primitive(required) else "Boolean")

        if shape.kind in (ShapeKind.INTEGER, ShapeKind.NUMBER):
            raw, boxed = NUMBER_TYPES[self.config.number_strategy]
            return JavaType.primitive(raw if self._use_raw_primitive(required) else boxed)

        if shape.kind == ShapeKind.STRING:
            if shape.format == DATE_TIME_FORMAT:
                return JavaType.reference(DATE_TYPES[self.config.date_type])
            if shape.enum is not None and self.config.generate_enums:
                return self._create_enum(name_hint, shape, context, parent)
            return JavaType.primitive("String")

        # NULL and ANY
        return JavaType.special()

    def _use_raw_primitive(self, required: bool) -> bool:
        return required and self.config.null_handling == NullHandling.BOXED

    def _optionalize(self, java_type: JavaType, required: bool) -> JavaType:
        """Apply the null-handling policy to a non-required field's type."""
        if required:
            return java_type
        if self.config.null_handling == NullHandling.OPTIONAL:
            return JavaType.optional(java_type)
        return java_type.boxed()

    def _collection_name(self) -> str:
        return "Set" if self.config.collection_type == CollectionType.SET else "List"

    def _create_enum(
        self,
        name_hint: str,
        shape: InferredShape,
        context: BuildContext,
        parent: JavaClass | None,
    ) -> JavaType:
        enum_name = ensure_unique_name(to_pascal_case(name_hint), context.used_names)
        constants: set[str] = set()
        values = [
            JavaEnumValue(name=ensure_unique_name(enum_constant_name(value), constants), value=value) for value in shape.enum or []
        ]
        java_enum = JavaEnum(name=enum_name, values=values, description=shape.description)
        context.enums[enum_name] = java_enum
        if parent is not None:
            parent.enums.append(java_enum)
        return JavaType.enum(enum_name)

    def _apply_class_annotations(self, java_class: JavaClass) -> None:
        if self.config.serialization_library == SerializationLibrary.JACKSON:
            java_class.add_annotation(JACKSON_CLASS_ANNOTATION)
        if self.config.use_data_annotation:
            java_class.add_annotation(DATA_ANNOTATION)
            if self.config.use_builder_annotation:
                java_class.add_annotation(BUILDER_ANNOTATION)


def enum_constant_name(value: str) -> str:
    """Derive an enum constant from a raw value, e.g. "in-progress" -> IN_PROGRESS."""
    candidate = _ENUM_CONSTANT_INVALID.sub("_", value.upper()).strip("_")
    if not candidate:
        return ENUM_CONSTANT_PLACEHOLDER
    # Constants cannot start with a digit
    if candidate[0].isdigit():
        return f"_{candidate}"
    return candidate
