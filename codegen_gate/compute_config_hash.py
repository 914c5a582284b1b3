"""Logic for computing stable hashes of gate settings."""

import json
from typing import Any

from codegen_gate.content_hash import hash_string


def compute_config_hash(config: dict[str, Any]) -> str:
    """Compute a stable hash of the settings.

    Uses canonical JSON serialization (sorted keys).
    """
    config_json = json.dumps(config, sort_keys=True, ensure_ascii=True)
    return hash_string(config_json)
