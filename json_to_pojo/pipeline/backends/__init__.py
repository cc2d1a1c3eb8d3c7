"""
Code generation backends.

Contains the Java source emitter.
"""

from __future__ import annotations

from .java_backend import JavaBackend

__all__ = [
    "JavaBackend",
]
