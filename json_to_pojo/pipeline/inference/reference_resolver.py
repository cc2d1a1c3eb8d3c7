"""
Reference resolver for $ref resolution.

Resolves same-document JSON pointers (``#/definitions/Foo``) against the
root schema. External references are not supported.
"""

from __future__ import annotations

from typing import Any

from ...errors import SchemaReferenceError
from .shapes import InferredShape


class ReferenceResolver:
    """Resolves local $ref pointers and caches the shapes built from them."""

    def __init__(self, root: Any):
        """
        Initialize the resolver.

        Args:
            root: The root schema document
        """
        self.root = root
        # Literal $ref string -> shape, for the lifetime of one walk
        self._shape_cache: dict[str, InferredShape] = {}
        self._in_progress: set[str] = set()

    def resolve(self, ref: str) -> Any:
        """
        Resolve a $ref to the schema node it points at.

        Args:
            ref: The reference string, e.g. "#/$defs/Address"

        Returns:
            The referenced schema node

        Raises:
            SchemaReferenceError: If the reference is not local or does not resolve
        """
        if not ref.startswith("#"):
            raise SchemaReferenceError(f"Only local references are supported ({ref}).")

        node = self.root
        pointer = ref[1:]
        if not pointer:
            return node
        pointer = pointer.removeprefix("/")

        for segment in pointer.split("/"):
            key = segment.replace("~1", "/").replace("~0", "~")
            if isinstance(node, dict) and key in node:
                node = node[key]
            elif isinstance(node, list) and key.isdigit() and int(key) < len(node):
                node = node[int(key)]
            else:
                raise SchemaReferenceError(f"Unable to resolve schema reference: {ref}")
        return node

    def cached(self, ref: str) -> InferredShape | None:
        """Get the shape previously built for this exact reference string."""
        return self._shape_cache.get(ref)

    def remember(self, ref: str, shape: InferredShape) -> None:
        """Cache the shape built for a reference string."""
        self._shape_cache[ref] = shape

    def enter(self, ref: str) -> bool:
        """
        Mark a reference as being walked.

        Returns:
            False if the reference is already being walked further up the stack
        """
        if ref in self._in_progress:
            return False
        self._in_progress.add(ref)
        return True

    def leave(self, ref: str) -> None:
        self._in_progress.discard(ref)
