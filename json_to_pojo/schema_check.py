"""
Pre-flight validation of JSON Schema documents against their meta-schema.

Runs before generation so a user gets the meta-schema's complaints instead
of a degraded model. Generation itself does not depend on this check.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field

from jsonschema import Draft7Validator, validators


@dataclass
class SchemaValidationResult:
    """Outcome of a meta-schema check."""

    ok: bool = True
    errors: list[str] = field(default_factory=list)


def validate_json_schema(text: str) -> SchemaValidationResult:
    """
    Check a schema document against the meta-schema it declares.

    The ``$schema`` keyword selects the draft; documents without one are
    checked as draft-07.

    Args:
        text: The schema document as JSON text

    Returns:
        ok=True with no errors, or ok=False with one message per problem
    """
    try:
        schema = json.loads(text)
    except json.JSONDecodeError as e:
        return SchemaValidationResult(ok=False, errors=[f"Invalid JSON (line {e.lineno}, column {e.colno}): {e.msg}"])
    if not isinstance(schema, (dict, bool)):
        return SchemaValidationResult(ok=False, errors=["(root): a schema must be a JSON object or boolean"])

    validator_cls = validators.validator_for(schema, default=Draft7Validator)
    meta_validator = validator_cls(validator_cls.META_SCHEMA)
    errors = [_format_error(err) for err in sorted(meta_validator.iter_errors(schema), key=lambda e: list(map(str, e.path)))]
    return SchemaValidationResult(ok=not errors, errors=errors)


def _format_error(error) -> str:
    location = "/".join(str(part) for part in error.absolute_path)
    return f"{location or '(root)'}: {error.message}"
