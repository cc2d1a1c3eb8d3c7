"""
Name resolver for Java identifiers.

Converts arbitrary JSON keys into PascalCase class names and camelCase
field names, avoids Java reserved words, keeps names unique within a
generation run, and computes structural fingerprints used to deduplicate
identical object shapes.
"""

from __future__ import annotations

import json
import re
from typing import Any

# Java reserved keywords and literals that cannot be used as identifiers
JAVA_RESERVED_KEYWORDS = {
    "abstract",
    "assert",
    "boolean",
    "break",
    "byte",
    "case",
    "catch",
    "char",
    "class",
    "const",
    "continue",
    "default",
    "do",
    "double",
    "else",
    "enum",
    "extends",
    "false",
    "final",
    "finally",
    "float",
    "for",
    "goto",
    "if",
    "implements",
    "import",
    "instanceof",
    "int",
    "interface",
    "long",
    "native",
    "new",
    "null",
    "package",
    "private",
    "protected",
    "public",
    "return",
    "short",
    "static",
    "strictfp",
    "super",
    "switch",
    "synchronized",
    "this",
    "throw",
    "throws",
    "transient",
    "true",
    "try",
    "void",
    "volatile",
    "while",
}

CLASS_NAME_PLACEHOLDER = "Pojo"
FIELD_NAME_PLACEHOLDER = "value"
PACKAGE_SEGMENT_PLACEHOLDER = "pkg"
RESERVED_WORD_SUFFIX = "Value"

_SPLIT_PATTERN = re.compile(r"[^A-Za-z0-9]+")
_LEADING_INVALID_PATTERN = re.compile(r"^[^A-Za-z_]+")
_PACKAGE_INVALID_PATTERN = re.compile(r"[^a-z0-9_]")


def to_pascal_case(text: str) -> str:
    """Convert arbitrary text to PascalCase.

    Examples:
        "first_name" -> "FirstName"
        "FIRST-NAME" -> "FirstName"
        "actionTemplate" -> "Actiontemplate"
        "%%%" -> "Pojo"
    """
    if not text:
        return CLASS_NAME_PLACEHOLDER
    words = [word for word in _SPLIT_PATTERN.split(text) if word]
    if not words:
        return CLASS_NAME_PLACEHOLDER
    return "".join(word.capitalize() for word in words)


def to_camel_case(text: str) -> str:
    """Convert arbitrary text to camelCase."""
    pascal = to_pascal_case(text)
    return pascal[:1].lower() + pascal[1:]


def sanitize_java_identifier(text: str, pascal: bool = False) -> str:
    """
    Turn arbitrary text into a valid Java identifier.

    Args:
        text: Source text, typically a JSON property key
        pascal: PascalCase (class names) instead of camelCase (field names)

    Returns:
        An identifier that starts with a letter or underscore and is not a
        reserved word
    """
    trimmed = text.strip()
    if pascal:
        candidate = to_pascal_case(trimmed)
    else:
        candidate = to_camel_case(trimmed or FIELD_NAME_PLACEHOLDER)

    safe = _LEADING_INVALID_PATTERN.sub("", candidate)
    if not safe:
        safe = CLASS_NAME_PLACEHOLDER if pascal else FIELD_NAME_PLACEHOLDER

    if safe.lower() in JAVA_RESERVED_KEYWORDS:
        return safe + RESERVED_WORD_SUFFIX
    return safe


def sanitize_package_name(value: str | None) -> str | None:
    """
    Normalize a dotted package name.

    Each segment is lowercased and stripped of disallowed characters; a
    segment left empty becomes a placeholder. Returns None when nothing
    usable remains.
    """
    if not value:
        return None
    segments = [_PACKAGE_INVALID_PATTERN.sub("", part.lower()) for part in value.split(".")]
    if not any(segments):
        return None
    return ".".join(segment or PACKAGE_SEGMENT_PLACEHOLDER for segment in segments)


def ensure_unique_name(base_name: str, used: set[str]) -> str:
    """
    Reserve a name that is not in ``used``.

    Appends 1, 2, ... to ``base_name`` until the name is free, then
    registers it in ``used``.
    """
    name = base_name
    counter = 1
    while name in used:
        name = f"{base_name}{counter}"
        counter += 1
    used.add(name)
    return name


def fingerprint(value: Any) -> str:
    """
    Canonical string for a nested value.

    Object keys are serialized in sorted order and arrays in their original
    order, so two values differing only in key order share a fingerprint.
    """
    if isinstance(value, dict):
        entries = (f"{json.dumps(str(key))}:{fingerprint(value[key])}" for key in sorted(value, key=str))
        return "{" + ",".join(entries) + "}"
    if isinstance(value, (list, tuple)):
        return "[" + ",".join(fingerprint(item) for item in value) + "]"
    return json.dumps(value, default=str)
