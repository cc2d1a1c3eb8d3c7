"""
Zip packaging of generated sources.
"""

from __future__ import annotations

import io
import re
import zipfile

ARCHIVE_SUFFIX = "_pojos.zip"
DEFAULT_ARCHIVE_NAME = "json-to-pojo.zip"

# Fixed entry timestamp so identical inputs give identical archives
ZIP_TIMESTAMP = (1980, 1, 1, 0, 0, 0)

_UNSAFE_FILE_CHARS = re.compile(r"[^A-Za-z0-9._-]")
_UNDERSCORE_RUNS = re.compile(r"_+")


def sanitize_file_name(name: str) -> str:
    """Strip directory parts and unsafe characters from an entry name."""
    base = name.replace("\\", "/").rsplit("/", 1)[-1]
    cleaned = _UNDERSCORE_RUNS.sub("_", _UNSAFE_FILE_CHARS.sub("_", base)).strip("_")
    if not cleaned.strip("."):
        return ""
    return cleaned


def create_zip(files: dict[str, str], root_name: str = "Root") -> bytes:
    """
    Pack generated sources into a zip archive.

    Args:
        files: File name -> Java source
        root_name: Root class name, used for entries whose name is unusable

    Returns:
        The archive bytes, DEFLATE compressed with entries in sorted order
    """
    buffer = io.BytesIO()
    used: set[str] = set()
    with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED, compresslevel=9) as archive:
        for name in sorted(files):
            entry_name = sanitize_file_name(name) or f"{sanitize_file_name(root_name) or 'Root'}.java"
            if entry_name in used:
                stem, dot, ext = entry_name.rpartition(".")
                counter = 1
                while f"{stem}{counter}{dot}{ext}" in used:
                    counter += 1
                entry_name = f"{stem}{counter}{dot}{ext}"
            used.add(entry_name)

            info = zipfile.ZipInfo(entry_name, date_time=ZIP_TIMESTAMP)
            info.compress_type = zipfile.ZIP_DEFLATED
            info.external_attr = 0o644 << 16
            archive.writestr(info, files[name].encode("utf-8"), compresslevel=9)
    return buffer.getvalue()


def archive_file_name(root_name: str | None) -> str:
    """Download name for an archive, e.g. "Order" -> "order_pojos.zip"."""
    base = sanitize_file_name(root_name or "")
    if not base:
        return DEFAULT_ARCHIVE_NAME
    return f"{base}{ARCHIVE_SUFFIX}".lower()
