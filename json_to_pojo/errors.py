"""
Exceptions raised by the generation pipeline.

A failing generation never yields partial output: every error below aborts
the whole run.
"""

from __future__ import annotations


class GenerationError(Exception):
    """Base class for all generation failures."""

    pass


class InvalidInputError(GenerationError):
    """Raised when the input text is not parseable JSON."""

    pass


class SchemaReferenceError(GenerationError):
    """Raised when a $ref is not local or cannot be resolved.

    Only same-document references (``#/...``) are supported.
    """

    pass


class ConfigurationError(GenerationError):
    """Raised when generator options are invalid.

    This happens before any inference starts, e.g. when:
    - The package name does not match the Java package grammar
    - The root class name is not PascalCase
    - An unknown option key or enum value is supplied
    """

    pass


class ModelBuildError(GenerationError):
    """Raised when the model builder breaks an internal invariant."""

    pass


class GenerationTimeoutError(GenerationError):
    """Raised when a bounded generation call does not finish in time."""

    pass


class OutputWriteError(GenerationError):
    """Raised when generated output fails validation before being written."""

    pass
