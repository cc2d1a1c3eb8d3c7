"""JSON to POJO Generator

A Python package for generating Java classes from an example JSON value
or a JSON Schema document, with Jackson, Gson or Moshi annotations and
optional Lombok support.
"""

__version__ = "1.0.0"

from .errors import (
    ConfigurationError,
    GenerationError,
    GenerationTimeoutError,
    InvalidInputError,
    ModelBuildError,
    OutputWriteError,
    SchemaReferenceError,
)
from .pipeline import (
    GenerationRequest,
    GenerationResult,
    GeneratorConfig,
    InputKind,
    PojoGenerator,
    generate_model,
)

__all__ = [
    "PojoGenerator",
    "GeneratorConfig",
    "GenerationRequest",
    "GenerationResult",
    "InputKind",
    "generate_model",
    "GenerationError",
    "InvalidInputError",
    "SchemaReferenceError",
    "ConfigurationError",
    "ModelBuildError",
    "GenerationTimeoutError",
    "OutputWriteError",
]
