"""Predicates and helpers for deciding how a user-supplied path is interpreted."""

import os

SEPARATORS = ("/", "\\")


def has_value(value: str | None) -> bool:
    """Return True when the value is neither None nor blank."""
    return bool(value and value.strip())


def has_explicit_path(value: str | None) -> bool:
    """Check if a value names an explicit path rather than a bare file name.

    A value is explicit when it is rooted or contains either separator.
    """
    if not value or not value.strip():
        return False
    return os.path.isabs(value) or any(sep in value for sep in SEPARATORS)


def full_path(path: str, base_dir: str | None) -> str:
    """Resolve a path against a base directory unless it is already rooted."""
    if not has_value(path):
        return path
    if os.path.isabs(path) or not base_dir or not base_dir.strip():
        return os.path.abspath(path)
    return os.path.abspath(os.path.join(base_dir, path))


def file_name(path: str) -> str:
    """Return the last segment of a path, treating both separators alike."""
    return path.replace("\\", "/").rstrip("/").rsplit("/", 1)[-1]
