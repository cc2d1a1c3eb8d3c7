"""
Pipeline generator.

Runs the phases of one generation in a single synchronous pass:

1. Parse the input text (example JSON or JSON Schema)
2. Infer the shape tree (sample inferer or schema walker)
3. Build the Java object model
4. Emit one Java source per standalone class
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any

from ..errors import ConfigurationError, InvalidInputError
from .analyzer.java_model import JavaModel
from .analyzer.model_builder import ModelBuilder
from .analyzer.name_resolver import sanitize_java_identifier, sanitize_package_name
from .backends.java_backend import JavaBackend
from .config import GeneratorConfig
from .inference.sample_inferer import SampleInferer
from .inference.schema_walker import SchemaWalker
from .inference.shapes import InferredShape

logger = logging.getLogger(__name__)

NESTING_TOO_DEEP = "Input is nested too deeply to generate classes."


class InputKind(str, Enum):
    """What the input text describes."""

    JSON = "json"  # an example value
    SCHEMA = "schema"  # a JSON Schema document


@dataclass
class GenerationRequest:
    """One generation call."""

    kind: InputKind = InputKind.JSON
    text: str = ""
    options: GeneratorConfig = field(default_factory=GeneratorConfig)


@dataclass
class GenerationResult:
    """Output of one generation call."""

    # File name -> Java source
    files: dict[str, str] = field(default_factory=dict)
    diagnostics: list[str] = field(default_factory=list)
    class_count: int = 0
    enum_count: int = 0

    def to_dict(self) -> dict[str, Any]:
        """Convert to the JSON-ready response layout."""
        return {
            "files": dict(self.files),
            "diagnostics": list(self.diagnostics),
            "meta": {
                "classCount": self.class_count,
                "enumCount": self.enum_count,
            },
        }


class PojoGenerator:
    """Generates Java POJO sources from example JSON or a JSON Schema."""

    def __init__(self, config: GeneratorConfig | None = None):
        """
        Initialize the generator.

        Args:
            config: Generation options (defaults are used when omitted)

        Raises:
            ConfigurationError: If the options are invalid
        """
        config = (config or GeneratorConfig()).validate()
        self.config = replace(
            config,
            package_name=sanitize_package_name(config.package_name),
            root_class_name=sanitize_java_identifier(config.root_class_name, pascal=True),
        )

    def generate(self, kind: InputKind | str, text: str) -> GenerationResult:
        """
        Generate Java sources for an input.

        Args:
            kind: Whether ``text`` is an example value or a schema
            text: The input JSON text

        Returns:
            The generated files, counts and diagnostics

        Raises:
            GenerationError: On malformed input, bad $ref or internal failure
        """
        shape = self.infer(kind, text)
        model, diagnostics = self.build_model(shape)
        try:
            files = JavaBackend(self.config).generate(model)
        except RecursionError as e:
            raise InvalidInputError(NESTING_TOO_DEEP) from e
        logger.debug("Generated %d files for %s", len(files), self.config.root_class_name)
        return GenerationResult(
            files=files,
            diagnostics=diagnostics,
            class_count=len(model.classes),
            enum_count=len(model.enums),
        )

    def infer(self, kind: InputKind | str, text: str) -> InferredShape:
        """Parse the input text and infer its shape tree."""
        input_kind = _coerce_kind(kind)
        data = parse_json(text)
        try:
            if input_kind == InputKind.SCHEMA:
                return SchemaWalker(data).walk()
            return SampleInferer(self.config).infer(data)
        except RecursionError as e:
            raise InvalidInputError(NESTING_TOO_DEEP) from e

    def build_model(self, shape: InferredShape) -> tuple[JavaModel, list[str]]:
        """Build the Java object model for a shape tree."""
        try:
            return ModelBuilder(self.config).build(shape)
        except RecursionError as e:
            raise InvalidInputError(NESTING_TOO_DEEP) from e


def parse_json(text: str) -> Any:
    """
    Parse input text as JSON.

    Raises:
        InvalidInputError: If the text is not valid JSON
    """
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise InvalidInputError(f"Invalid JSON input (line {e.lineno}, column {e.colno}): {e.msg}") from e
    except TypeError as e:
        raise InvalidInputError(f"Input must be JSON text: {e}") from e
    except RecursionError as e:
        raise InvalidInputError(NESTING_TOO_DEEP) from e


def generate_model(request: GenerationRequest) -> GenerationResult:
    """Run one generation request."""
    return PojoGenerator(request.options).generate(request.kind, request.text)


def _coerce_kind(kind: InputKind | str) -> InputKind:
    try:
        return InputKind(kind)
    except ValueError as e:
        raise ConfigurationError(f"Unknown input kind: {kind!r} (expected 'json' or 'schema')") from e
