"""
Java code generation backend.

Renders one source file per standalone class of a JavaModel using the
Jinja2 templates in ``templates/java``.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import jinja2

from ..analyzer.java_model import JavaClass, JavaEnum, JavaField, JavaModel, JavaType, JavaTypeKind
from ..config import FieldAccess, GeneratorConfig, SerializationLibrary

logger = logging.getLogger(__name__)


class JavaBackend:
    """Java code generation backend."""

    TEMPLATE_LANG = "java"
    FILE_EXTENSION = "java"

    COLLECTION_IMPORTS = {
        "List": "java.util.List",
        "Set": "java.util.Set",
    }

    # Library types that need an import when referenced by a field
    TYPE_IMPORTS = {
        "OffsetDateTime": "java.time.OffsetDateTime",
        "Date": "java.util.Date",
        "BigDecimal": "java.math.BigDecimal",
    }

    # Annotation name -> owning import
    ANNOTATION_IMPORTS = {
        "JsonIgnoreProperties": "com.fasterxml.jackson.annotation.JsonIgnoreProperties",
        "JsonProperty": "com.fasterxml.jackson.annotation.JsonProperty",
        "SerializedName": "com.google.gson.annotations.SerializedName",
        "Json": "com.squareup.moshi.Json",
        "Data": "lombok.Data",
        "Builder": "lombok.Builder",
    }

    def __init__(self, config: GeneratorConfig):
        """
        Initialize the backend.

        Args:
            config: Validated generator configuration
        """
        self.config = config
        self._setup_templates()

    def _setup_templates(self) -> None:
        """Set up Jinja2 templates."""
        template_dir = Path(__file__).parent.parent.parent / "templates" / self.TEMPLATE_LANG
        self.jinja_env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(template_dir)),
            lstrip_blocks=True,
            trim_blocks=True,
            autoescape=False,
        )
        self.jinja_env.filters["javadoc"] = javadoc

        self.file_template = self.jinja_env.get_template(f"file.{self.FILE_EXTENSION}.jinja2")
        self.class_template = self.jinja_env.get_template(f"class.{self.FILE_EXTENSION}.jinja2")
        self.field_template = self.jinja_env.get_template(f"field.{self.FILE_EXTENSION}.jinja2")
        self.accessors_template = self.jinja_env.get_template(f"accessors.{self.FILE_EXTENSION}.jinja2")
        self.enum_template = self.jinja_env.get_template(f"enum.{self.FILE_EXTENSION}.jinja2")

    def generate(self, model: JavaModel) -> dict[str, str]:
        """
        Generate Java sources from the model.

        Args:
            model: The object model of one run

        Returns:
            File name -> source text, root class first
        """
        files: dict[str, str] = {}
        standalone = [model.root] + [cls for cls in model.classes.values() if cls is not model.root]
        for java_class in standalone:
            if java_class.nested:
                continue
            files[self.file_name(java_class)] = self.render_file(java_class)
        logger.debug("Emitted %d Java files", len(files))
        return files

    def file_name(self, java_class: JavaClass) -> str:
        return f"{java_class.name}.{self.FILE_EXTENSION}"

    def render_file(self, java_class: JavaClass) -> str:
        """Render the complete source unit for a standalone class."""
        source = self.file_template.render(
            package_name=self.config.package_name,
            imports=sorted(self.collect_imports(java_class)),
            body=self.render_class(java_class),
        )
        return source.rstrip("\n") + "\n"

    def render_class(self, java_class: JavaClass) -> str:
        """Render a class declaration, including its enums and nested classes."""
        members: list[str] = [self.render_field(field) for field in java_class.fields]
        if self.needs_accessors():
            members.extend(self.render_accessors(field) for field in java_class.fields)
        members.extend(self.render_enum(java_enum) for java_enum in java_class.enums)
        members.extend(self.render_class(inner) for inner in java_class.inner_classes)

        return self.class_template.render(
            name=java_class.name,
            description=java_class.description,
            annotations=java_class.annotations,
            nested=java_class.nested,
            members=members,
        )

    def render_field(self, field: JavaField) -> str:
        return self.field_template.render(
            description=field.description,
            annotation=self.field_annotation(field),
            access=self.config.field_access.value,
            type=self.translate_type(field.type_ref),
            name=field.name,
        )

    def render_accessors(self, field: JavaField) -> str:
        return self.accessors_template.render(
            type=self.translate_type(field.type_ref),
            name=field.name,
            getter=getter_name(field),
            setter=setter_name(field),
        )

    def render_enum(self, java_enum: JavaEnum) -> str:
        return self.enum_template.render(
            name=java_enum.name,
            constants=[value.name for value in java_enum.values],
        )

    def needs_accessors(self) -> bool:
        """Getters/setters are only written for private fields without @Data."""
        return self.config.field_access == FieldAccess.PRIVATE and not self.config.use_data_annotation

    def translate_type(self, type_ref: JavaType) -> str:
        """Translate a model type to its Java spelling."""
        return type_ref.to_java()

    def field_annotation(self, field: JavaField) -> str | None:
        """Name-override annotation for a field whose identifier differs from its JSON key."""
        if field.name == field.json_name:
            return None
        json_name = json.dumps(field.json_name)
        library = self.config.serialization_library
        if library == SerializationLibrary.JACKSON:
            return f"@JsonProperty({json_name})"
        if library == SerializationLibrary.GSON:
            return f"@SerializedName({json_name})"
        if library == SerializationLibrary.MOSHI:
            return f"@Json(name = {json_name})"
        return None

    def collect_imports(self, java_class: JavaClass) -> set[str]:
        """Imports needed by a class and everything nested inside it."""
        imports: set[str] = set()
        for field in java_class.fields:
            self._collect_type_imports(field.type_ref, imports)
            annotation = self.field_annotation(field)
            if annotation:
                self._collect_annotation_import(annotation, imports)
        for annotation in java_class.annotations:
            self._collect_annotation_import(annotation, imports)
        for inner in java_class.inner_classes:
            imports |= self.collect_imports(inner)
        return imports

    def _collect_type_imports(self, type_ref: JavaType, imports: set[str]) -> None:
        if type_ref.kind == JavaTypeKind.ARRAY:
            imports.add(self.COLLECTION_IMPORTS[type_ref.name])
        elif type_ref.kind == JavaTypeKind.OPTIONAL:
            imports.add("java.util.Optional")
        elif type_ref.kind == JavaTypeKind.MAP:
            imports.add("java.util.Map")
        elif type_ref.kind in (JavaTypeKind.REFERENCE, JavaTypeKind.PRIMITIVE) and type_ref.name in self.TYPE_IMPORTS:
            imports.add(self.TYPE_IMPORTS[type_ref.name])

        for arg in type_ref.type_args:
            self._collect_type_imports(arg, imports)

    def _collect_annotation_import(self, annotation: str, imports: set[str]) -> None:
        name = annotation.lstrip("@").split("(", 1)[0].strip()
        if name in self.ANNOTATION_IMPORTS:
            imports.add(self.ANNOTATION_IMPORTS[name])


def javadoc(text: Any) -> str:
    """Format text as a Javadoc block."""
    lines = str(text).strip().replace("*/", "*&#47;").splitlines() or [""]
    body = "\n".join(f" * {line}".rstrip() for line in lines)
    return f"/**\n{body}\n */"


def getter_name(field: JavaField) -> str:
    type_ref = field.type_ref
    is_boolean = type_ref.kind == JavaTypeKind.PRIMITIVE and type_ref.name in ("boolean", "Boolean")
    prefix = "is" if is_boolean else "get"
    return f"{prefix}{_capitalize(field.name)}"


def setter_name(field: JavaField) -> str:
    return f"set{_capitalize(field.name)}"


def _capitalize(name: str) -> str:
    return name[:1].upper() + name[1:]
