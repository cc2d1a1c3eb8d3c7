"""
Configuration for the Java POJO generator pipeline.

Every option is independently overridable and has a default.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, fields, replace
from enum import Enum

from ..errors import ConfigurationError

PACKAGE_NAME_PATTERN = re.compile(r"^[a-z_][a-z0-9_]*(\.[a-z_][a-z0-9_]*)*$")
CLASS_NAME_PATTERN = re.compile(r"^[A-Z][A-Za-z0-9_]*$")

MAX_PACKAGE_NAME_LENGTH = 200
MAX_ROOT_CLASS_NAME_LENGTH = 80


class FieldAccess(str, Enum):
    """Access modifier for generated fields."""

    PRIVATE = "private"
    PUBLIC = "public"


class SerializationLibrary(str, Enum):
    """Serialization library whose annotations are emitted."""

    NONE = "none"
    JACKSON = "jackson"
    GSON = "gson"
    MOSHI = "moshi"


class CollectionType(str, Enum):
    """Collection used for JSON arrays."""

    LIST = "list"
    SET = "set"


class DateType(str, Enum):
    """Java type used for date-time strings."""

    JAVA_TIME = "java-time"  # java.time.OffsetDateTime
    LEGACY_DATE = "util-date"  # java.util.Date


class NullHandling(str, Enum):
    """How non-required fields are typed."""

    BOXED = "boxed"  # wrapper types (Integer, Boolean, ...)
    OPTIONAL = "optional"  # java.util.Optional<T>


class ArrayInference(str, Enum):
    """How the element shape of a sample array is inferred."""

    STRICT = "strict"  # first element only
    TOLERANT = "tolerant"  # all elements, merged


class NumberStrategy(str, Enum):
    """Java type used for JSON numbers."""

    INTEGER = "integer"
    LONG = "long"
    DOUBLE = "double"


# Option keys as sent by host UIs
_CAMEL_CASE_ALIASES = {
    "packageName": "package_name",
    "rootClassName": "root_class_name",
    "fieldAccess": "field_access",
    "useLombokData": "use_data_annotation",
    "useDataAnnotation": "use_data_annotation",
    "useLombokBuilder": "use_builder_annotation",
    "useBuilderAnnotation": "use_builder_annotation",
    "annotations": "serialization_library",
    "serializationLibrary": "serialization_library",
    "collectionType": "collection_type",
    "dateType": "date_type",
    "nullStrategy": "null_handling",
    "nullHandling": "null_handling",
    "generateEnums": "generate_enums",
    "stableNames": "stable_names",
    "arrayInference": "array_inference",
    "numberStrategy": "number_strategy",
    "innerClasses": "inner_classes",
}

_ENUM_OPTIONS: dict[str, type[Enum]] = {
    "field_access": FieldAccess,
    "serialization_library": SerializationLibrary,
    "collection_type": CollectionType,
    "date_type": DateType,
    "null_handling": NullHandling,
    "array_inference": ArrayInference,
    "number_strategy": NumberStrategy,
}

_BOOL_OPTIONS = {
    "use_data_annotation",
    "use_builder_annotation",
    "generate_enums",
    "stable_names",
    "inner_classes",
}


@dataclass
class GeneratorConfig:
    """Configuration options for Java code generation."""

    # Dotted lowercase Java package, or None for the default package
    package_name: str | None = None

    # Name of the class generated for the top-level value
    root_class_name: str = "Root"

    field_access: FieldAccess = FieldAccess.PRIVATE

    # Lombok @Data / @Builder markers
    use_data_annotation: bool = True
    use_builder_annotation: bool = False

    serialization_library: SerializationLibrary = SerializationLibrary.JACKSON
    collection_type: CollectionType = CollectionType.LIST
    date_type: DateType = DateType.JAVA_TIME
    null_handling: NullHandling = NullHandling.BOXED

    # Turn string enum value sets into Java enums
    generate_enums: bool = True

    # Reuse one class for structurally identical objects
    stable_names: bool = True

    array_inference: ArrayInference = ArrayInference.TOLERANT
    number_strategy: NumberStrategy = NumberStrategy.DOUBLE

    # Emit child classes inside their parent instead of as separate files
    inner_classes: bool = False

    @staticmethod
    def from_dict(d: dict) -> GeneratorConfig:
        """Create a config from a dictionary.

        Keys may be snake_case attribute names or the camelCase option names
        used by host applications. Unknown keys are rejected.
        """
        config = GeneratorConfig()
        for k, v in d.items():
            name = _CAMEL_CASE_ALIASES.get(k, k)
            if name not in _field_names():
                raise ConfigurationError(f"Unknown option: {k}")
            setattr(config, name, _coerce_option(name, v))
        return config

    def to_dict(self) -> dict:
        """Convert config to a dictionary."""
        return {
            "package_name": self.package_name,
            "root_class_name": self.root_class_name,
            "field_access": self.field_access.value,
            "use_data_annotation": self.use_data_annotation,
            "use_builder_annotation": self.use_builder_annotation,
            "serialization_library": self.serialization_library.value,
            "collection_type": self.collection_type.value,
            "date_type": self.date_type.value,
            "null_handling": self.null_handling.value,
            "generate_enums": self.generate_enums,
            "stable_names": self.stable_names,
            "array_inference": self.array_inference.value,
            "number_strategy": self.number_strategy.value,
            "inner_classes": self.inner_classes,
        }

    def validate(self) -> GeneratorConfig:
        """
        Check the config and return a normalized copy.

        Returns:
            A copy with trimmed names and coerced enum values

        Raises:
            ConfigurationError: If any option is invalid
        """
        values = {name: _coerce_option(name, getattr(self, name)) for name in _field_names()}

        package_name = values["package_name"]
        if package_name is not None:
            if not isinstance(package_name, str):
                raise ConfigurationError("Package name must be a string.")
            package_name = package_name.strip() or None
        if package_name is not None:
            if len(package_name) > MAX_PACKAGE_NAME_LENGTH or not PACKAGE_NAME_PATTERN.match(package_name):
                raise ConfigurationError(f"Package name must be a valid Java package identifier: {package_name!r}")
        values["package_name"] = package_name

        root_class_name = values["root_class_name"]
        if not isinstance(root_class_name, str):
            raise ConfigurationError("Root class name must be a string.")
        root_class_name = root_class_name.strip()
        if not 1 <= len(root_class_name) <= MAX_ROOT_CLASS_NAME_LENGTH or not CLASS_NAME_PATTERN.match(root_class_name):
            raise ConfigurationError(
                f"Root class name must start with an uppercase letter and contain only alphanumerics or underscores: {root_class_name!r}"
            )
        values["root_class_name"] = root_class_name

        return replace(self, **values)


def _field_names() -> list[str]:
    return [f.name for f in fields(GeneratorConfig)]


def _coerce_option(name: str, value):
    if name in _ENUM_OPTIONS:
        enum_cls = _ENUM_OPTIONS[name]
        try:
            return enum_cls(value)
        except ValueError as e:
            allowed = ", ".join(member.value for member in enum_cls)
            raise ConfigurationError(f"Invalid value for {name}: {value!r} (expected one of: {allowed})") from e
    if name in _BOOL_OPTIONS and not isinstance(value, bool):
        raise ConfigurationError(f"Option {name} must be a boolean, got {value!r}")
    return value
