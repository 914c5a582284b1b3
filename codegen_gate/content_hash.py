"""Stable 64-bit content hashing rendered as 16 hex characters."""

import hashlib
from pathlib import Path

DIGEST_SIZE = 8
CHUNK_SIZE = 1024 * 1024


def hash_bytes(data: bytes) -> str:
    """Hash raw bytes."""
    return hashlib.blake2b(data, digest_size=DIGEST_SIZE).hexdigest()


def hash_string(content: str) -> str:
    """Hash the UTF-8 encoding of a string."""
    return hash_bytes(content.encode("utf-8"))


def hash_file(path: str | Path) -> str:
    """Hash a file's bytes, streaming it in chunks."""
    h = hashlib.blake2b(digest_size=DIGEST_SIZE)
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(CHUNK_SIZE), b""):
            h.update(chunk)
    return h.hexdigest()
