"""Compose the build fingerprint and decide whether generation must run.

The fingerprint covers the schema (artifact or externally supplied
fingerprint), the configuration file, the renaming-rules file and every
template file. Each input contributes a ``label\\0hash`` line to a manifest
which is hashed once more to give the final value.
"""

import logging
import os

from codegen_gate.content_hash import hash_file, hash_string
from codegen_gate.fingerprint_cache import FingerprintCache
from codegen_gate.fingerprint_result import FingerprintResult
from codegen_gate.path_utils import has_value
from codegen_gate.schema_fingerprint import compute_schema_fingerprint
from codegen_gate.template_tree_digest import template_tree_digest

logger = logging.getLogger(__name__)


def compute_fingerprint(
    config_path: str | None,
    renaming_path: str | None,
    template_dir: str | None,
    cache_path: str,
    *,
    schema_artifact_path: str | None = None,
    schema_fingerprint: str | None = None,
    use_connection_string_mode: bool = False,
) -> FingerprintResult:
    """Compute the fingerprint and compare it with the cached value.

    Missing optional inputs contribute an empty segment. The cache file is
    rewritten with the new value on every successful computation.
    """
    schema_segment = _schema_segment(
        schema_artifact_path, schema_fingerprint, use_connection_string_mode
    )
    lines = [
        _line("schema", schema_segment),
        _line("config", _file_segment(config_path)),
        _line("renaming", _file_segment(renaming_path)),
    ]
    lines.extend(
        _line(f"template/{rel}", digest)
        for rel, digest in template_tree_digest(template_dir)
    )
    fingerprint = hash_string("".join(lines))

    cache = FingerprintCache(cache_path)
    previous = cache.load()
    has_changed = previous is None or previous.lower() != fingerprint

    if has_changed:
        logger.info("Fingerprint changed: %s", fingerprint)
    else:
        logger.info("Fingerprint unchanged; skipping generation.")

    cache.save(fingerprint)
    return FingerprintResult(fingerprint, has_changed, previous)


def _line(label: str, segment: str) -> str:
    return f"{label}\0{segment}\n"


def _schema_segment(
    artifact_path: str | None,
    schema_fingerprint: str | None,
    use_connection_string_mode: bool,
) -> str:
    if use_connection_string_mode:
        if has_value(schema_fingerprint):
            logger.debug("Using schema fingerprint: %s", schema_fingerprint)
            return str(schema_fingerprint).strip()
        return ""
    if has_value(artifact_path) and os.path.isfile(str(artifact_path)):
        logger.debug("Using schema artifact: %s", artifact_path)
        return compute_schema_fingerprint(str(artifact_path))
    if has_value(artifact_path):
        logger.warning("Schema artifact not found: %s", artifact_path)
    return ""


def _file_segment(path: str | None) -> str:
    if has_value(path) and os.path.isfile(str(path)):
        return hash_file(str(path))
    return ""
