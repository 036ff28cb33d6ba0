"""Path utilities and MIME type guessing."""

from __future__ import annotations

import mimetypes
import posixpath
import string

# =============================================================================
# Path Utilities
# =============================================================================


def normalize_path(path: str) -> str:
    """Normalize a remote lookup path.

    - Treats ``"."`` and ``""`` as the root
    - Ensures exactly one leading /
    - Removes trailing slashes

    Examples:
        normalize_path("") -> "/"
        normalize_path(".") -> "/"
        normalize_path("foo/bar.txt/") -> "/foo/bar.txt"
        normalize_path("//foo") -> "/foo"
    """
    if path == ".":
        path = ""
    return "/" + path.strip("/")


def apply_prefix(prefix: str, path: str) -> str:
    """Prepend *prefix* to a logical path.

    Examples:
        apply_prefix("", "/foo") -> "foo"
        apply_prefix("root/", "/foo") -> "root/foo"
    """
    prefix = prefix.rstrip("/")
    path = path.lstrip("/")
    if not prefix:
        return path
    return f"{prefix}/{path}"


def dirname(path: str) -> str:
    """Directory part of a logical path, ``""`` when there is none.

    Examples:
        dirname("foo.txt") -> ""
        dirname("a/b/c.txt") -> "a/b"
        dirname("/Foo") -> "/"
        dirname("a/b/") -> "a"
    """
    if path != "/":
        path = path.rstrip("/")
    return posixpath.dirname(path)


def basename(path: str) -> str:
    """Last component of a logical path, ignoring trailing slashes."""
    return posixpath.basename(path.rstrip("/"))


def join_path(base: str, name: str) -> str:
    """Join *base* and *name* with one slash and trim outer slashes.

    A *base* of ``"."`` counts as empty.

    Examples:
        join_path("", "a.txt") -> "a.txt"
        join_path("/docs/", "a.txt") -> "docs/a.txt"
    """
    base = base.strip("/")
    name = name.strip("/")
    if base in ("", "."):
        return name
    return f"{base}/{name}"


_ASCII_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)


def ascii_lower(value: str) -> str:
    """Lowercase A-Z only; other characters, accented letters included, are kept."""
    return value.translate(_ASCII_LOWER)


def split_extension(name: str) -> tuple[str, str]:
    """Split a leaf name into ``(filename, extension)`` at the last dot.

    Examples:
        split_extension("report.tar.gz") -> ("report.tar", "gz")
        split_extension(".gitignore") -> ("", "gitignore")
        split_extension("Makefile") -> ("Makefile", "")
    """
    if "." not in name:
        return name, ""
    stem, ext = name.rsplit(".", 1)
    return stem, ext


# =============================================================================
# MIME Detection
# =============================================================================


def looks_binary(content: bytes | str) -> bool:
    """Check the first 4 KiB for binary indicators (null bytes, control chars)."""
    if isinstance(content, str):
        return False
    chunk = content[:4096]
    if not chunk:
        return False
    if b"\x00" in chunk:
        return True
    non_printable = sum(1 for byte in chunk if byte < 9 or (13 < byte < 32))
    return (non_printable / len(chunk)) > 0.3


def guess_mime_type(filename: str, content: bytes | str | None = None) -> str:
    """Guess the MIME type of a file from its name, then its content."""
    mime_type, _ = mimetypes.guess_type(filename)
    if mime_type:
        return mime_type
    if content and looks_binary(content):
        return "application/octet-stream"
    return "text/plain"
