"""Data model holding every source a connection string may come from."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ConnectionStringContext:
    """Inputs to the connection string decision chain."""

    explicit_connection_string: str | None = None
    app_settings_path: str | None = None
    app_config_path: str | None = None
    connection_string_name: str = "DefaultConnection"
    project_directory: str | None = None
    key_path: str | None = None
