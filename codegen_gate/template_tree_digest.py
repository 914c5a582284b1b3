"""Order-stable digest of every file under a template directory."""

import os
from pathlib import Path

from codegen_gate.content_hash import hash_file


def template_tree_digest(template_dir: str | None) -> list[tuple[str, str]]:
    """Return ``(relative_path, content_hash)`` pairs sorted by relative path.

    Relative paths always use ``/`` so the digest is the same on every host.
    A missing directory yields an empty digest.
    """
    if not template_dir or not os.path.isdir(template_dir):
        return []
    root = Path(template_dir)
    pairs = [
        (p.relative_to(root).as_posix(), hash_file(p))
        for p in root.rglob("*")
        if p.is_file()
    ]
    return sorted(pairs)
