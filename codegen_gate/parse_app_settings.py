"""Logic for reading connection strings from JSON settings files."""

import json
import logging
from typing import Any

from codegen_gate.connection_string_result import ConnectionStringResult

logger = logging.getLogger(__name__)

DEFAULT_SECTION = "ConnectionStrings"


def default_key_path(connection_string_name: str) -> str:
    """Return the conventional ``ConnectionStrings:<name>`` key path."""
    return f"{DEFAULT_SECTION}:{connection_string_name}"


def parse_app_settings(
    file_path: str, connection_string_name: str, key_path: str | None = None
) -> ConnectionStringResult:
    """Read a connection string from an appsettings-style JSON file.

    ``key_path`` is a colon-separated path into the document; the last segment
    is the entry name and the rest locates its section. When the entry is
    absent, the first non-blank entry of the same section is used instead.
    """
    path = key_path or default_key_path(connection_string_name)
    *section_path, key = path.split(":")
    try:
        with open(file_path, encoding="utf-8-sig") as f:
            doc = json.load(f)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        logger.error(
            "JD0011: Failed to parse configuration file '%s': %s", file_path, exc
        )
        return ConnectionStringResult.failed()
    except OSError as exc:
        logger.error(
            "JD0011: Failed to read configuration file '%s': %s", file_path, exc
        )
        return ConnectionStringResult.failed()

    section = _walk(doc, section_path)
    if not isinstance(section, dict):
        return ConnectionStringResult.not_found()

    if key in section:
        value = section[key]
        if not isinstance(value, str) or not value.strip():
            logger.error(
                "JD0012: Connection string '%s' in %s is null or empty.", key, file_path
            )
            return ConnectionStringResult.failed()
        return ConnectionStringResult.with_success(value, file_path, key)

    for name, value in section.items():
        if isinstance(value, str) and value.strip():
            logger.warning(
                "JD0002: Connection string key '%s' not found in %s. "
                "Using first available connection string '%s'.",
                key,
                file_path,
                name,
            )
            return ConnectionStringResult.with_success(value, file_path, name)

    return ConnectionStringResult.not_found()


def _walk(doc: Any, path: list[str]) -> Any:
    node = doc
    for part in path:
        if not isinstance(node, dict) or part not in node:
            return None
        node = node[part]
    return node
