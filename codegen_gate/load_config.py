"""Logic for loading and merging gate settings files."""

import copy
import logging
from pathlib import Path
from typing import Any

import yaml

from codegen_gate.deep_merge import deep_merge
from codegen_gate.is_true import is_true

logger = logging.getLogger(__name__)

DEFAULT_CONFIG: dict[str, Any] = {
    "candidates": {
        "config": ["efcpt-config.json"],
        "renaming": [
            "efcpt.renaming.json",
            "efcpt-renaming.json",
            "efpt.renaming.json",
        ],
        "template": ["Template", "CodeTemplates", "Templates"],
    },
    "connection_string": {
        "name": "DefaultConnection",
        "key_path": None,
    },
    "resolution": {
        "probe_solution_dir": True,
    },
    "fingerprint": {
        "cache_file": ".codegen-gate/fingerprint.txt",
    },
}


def load_config(path: str | None = None) -> dict[str, Any]:
    """Load gate settings from a YAML file and merge them with defaults.

    A settings file that cannot be parsed is reported and ignored.
    """
    config = copy.deepcopy(DEFAULT_CONFIG)
    if path:
        p = Path(path)
        if p.exists():
            try:
                user_config = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
            except yaml.YAMLError:
                logger.exception("Error parsing gate settings %s; using defaults", p)
                user_config = {}
            if isinstance(user_config, dict):
                config = deep_merge(config, user_config)
            else:
                logger.warning("Gate settings %s is not a mapping; using defaults", p)
        else:
            logger.warning("Gate settings file not found: %s", p)

    resolution = config["resolution"]
    resolution["probe_solution_dir"] = is_true(resolution.get("probe_solution_dir"))
    return config
