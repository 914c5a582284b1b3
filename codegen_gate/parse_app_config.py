"""Logic for reading connection strings from XML application config files."""

import logging
import xml.etree.ElementTree as ET

from codegen_gate.connection_string_result import ConnectionStringResult

logger = logging.getLogger(__name__)


def parse_app_config(
    file_path: str, connection_string_name: str
) -> ConnectionStringResult:
    """Read a connection string from an ``app.config``/``web.config`` file.

    Entries come from ``<connectionStrings><add name=".." connectionString=".."/>``.
    Names match case-insensitively; when the requested name is missing the
    first complete entry is used.
    """
    try:
        root = ET.parse(file_path).getroot()
    except ET.ParseError as exc:
        logger.error(
            "JD0011: Failed to parse configuration file '%s': %s", file_path, exc
        )
        return ConnectionStringResult.failed()
    except OSError as exc:
        logger.error(
            "JD0011: Failed to read configuration file '%s': %s", file_path, exc
        )
        return ConnectionStringResult.failed()

    entries: list[tuple[str, str]] = []
    for section in root.iter("connectionStrings"):
        for add in section.findall("add"):
            name = add.get("name") or ""
            value = add.get("connectionString") or ""
            if name.strip() and value.strip():
                entries.append((name, value))

    wanted = connection_string_name.casefold()
    for name, value in entries:
        if name.casefold() == wanted:
            return ConnectionStringResult.with_success(value, file_path, name)

    if entries:
        name, value = entries[0]
        logger.warning(
            "JD0002: Connection string key '%s' not found in %s. "
            "Using first available connection string '%s'.",
            connection_string_name,
            file_path,
            name,
        )
        return ConnectionStringResult.with_success(value, file_path, name)

    return ConnectionStringResult.not_found()
