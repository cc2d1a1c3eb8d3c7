"""
Atomic file writer for generated sources.

Ensures that file writes are atomic so an interrupted run never leaves a
half-written source or archive behind.
"""

from __future__ import annotations

import re
import tempfile
from pathlib import Path

from .errors import OutputWriteError

# Java string literals, so braces inside @JsonProperty("...") are not counted
_STRING_LITERAL = re.compile(r'"(?:\\.|[^"\\])*"')


class AtomicWriter:
    """Handles atomic file writes with validation.

    Uses a two-phase commit approach:
    1. Write to a temporary file in the same directory
    2. Validate the content
    3. Atomically replace the target file
    """

    def __init__(self, force: bool = False):
        """Initialize the atomic writer.

        Args:
            force: Overwrite existing files instead of refusing
        """
        self.force = force

    def write(self, path: Path, content: str | bytes, validate: bool = True) -> None:
        """Write content to a file atomically.

        Args:
            path: Target file path
            content: Source text, or raw bytes for archives
            validate: Whether to check Java sources before finalizing

        Raises:
            FileExistsError: If the file exists and force is off
            OutputWriteError: If validation fails
            OSError: If file operations fail
        """
        if path.exists() and not self.force:
            raise FileExistsError(f"Output file already exists: {path}. Use --force to overwrite.")

        path.parent.mkdir(parents=True, exist_ok=True)

        is_text = isinstance(content, str)
        temp_fd, temp_path_str = tempfile.mkstemp(
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            text=is_text,
        )
        temp_path = Path(temp_path_str)

        try:
            if is_text:
                with open(temp_fd, "w", encoding="utf-8", newline="\n") as f:
                    f.write(content)
                if validate and path.suffix == ".java":
                    validate_java_source(content)
            else:
                with open(temp_fd, "wb") as f:
                    f.write(content)

            temp_path.replace(path)

        except BaseException:
            temp_path.unlink(missing_ok=True)
            raise

    def write_files(self, directory: Path, files: dict[str, str], validate: bool = True) -> list[Path]:
        """Write every generated file into a directory.

        Existing files are checked up front so nothing is written when any
        target is already present and force is off.

        Returns:
            The written paths, in file order
        """
        targets = [directory / name for name in files]
        if not self.force:
            existing = [str(p) for p in targets if p.exists()]
            if existing:
                raise FileExistsError(f"Output files already exist: {', '.join(existing)}. Use --force to overwrite.")

        for target, content in zip(targets, files.values()):
            self.write(target, content, validate)
        return targets


def validate_java_source(content: str) -> None:
    """Basic structural checks on a generated Java source.

    Raises:
        OutputWriteError: If the source is obviously broken
    """
    if "class " not in content and "enum " not in content:
        raise OutputWriteError("Generated Java code has no type definitions")

    code = _STRING_LITERAL.sub('""', content)
    open_braces = code.count("{")
    close_braces = code.count("}")
    if open_braces != close_braces:
        raise OutputWriteError(f"Generated Java code has unbalanced braces: {open_braces} open, {close_braces} close")
