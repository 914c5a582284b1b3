"""Tests for connection string parsing and the resolution chain."""

import json
import logging
from pathlib import Path

import pytest

from codegen_gate.connection_string_context import ConnectionStringContext
from codegen_gate.parse_app_config import parse_app_config
from codegen_gate.parse_app_settings import parse_app_settings
from codegen_gate.resolve_connection_string import (
    discover_app_settings,
    resolve_connection_string,
)
from codegen_gate.validate_config_file_type import (
    APP_CONFIG,
    APP_SETTINGS,
    validate_config_file_type,
)

APP_CONFIG_XML = """<?xml version="1.0" encoding="utf-8"?>
<configuration>
  <connectionStrings>
    <add name="Other" connectionString="Server=other" />
    <add name="Default" connectionString="Server=xml" />
  </connectionStrings>
</configuration>
"""


def write_settings(path: Path, connection_strings: dict[str, str]) -> Path:
    """Write an appsettings-style JSON file."""
    path.write_text(json.dumps({"ConnectionStrings": connection_strings}))
    return path


def context(project: Path, **kwargs: str) -> ConnectionStringContext:
    """Create a chain context for a project directory."""
    return ConnectionStringContext(
        connection_string_name="Default", project_directory=str(project), **kwargs
    )


def test_app_settings_reads_named_entry(tmp_path: Path) -> None:
    """Verify that the requested entry is returned."""
    f = write_settings(tmp_path / "appsettings.json", {"Default": "X"})
    result = parse_app_settings(str(f), "Default")
    assert result.success
    assert result.connection_string == "X"
    assert result.key_name == "Default"
    assert result.source == str(f)


def test_app_settings_falls_back_to_first_entry(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    """Verify the first-available fallback and its warning."""
    f = write_settings(tmp_path / "appsettings.json", {"Main": "M", "Aux": "A"})
    with caplog.at_level(logging.WARNING):
        result = parse_app_settings(str(f), "Default")
    assert result.connection_string == "M"
    assert "JD0002" in caplog.text


def test_app_settings_blank_value_fails(tmp_path: Path) -> None:
    """Verify that a blank value under the requested key is a failure."""
    f = write_settings(tmp_path / "appsettings.json", {"Default": " "})
    assert not parse_app_settings(str(f), "Default").success


def test_app_settings_custom_key_path(tmp_path: Path) -> None:
    """Verify that a configured key path is followed."""
    f = tmp_path / "appsettings.json"
    f.write_text(json.dumps({"Database": {"Primary": "P"}}))
    result = parse_app_settings(str(f), "Default", "Database:Primary")
    assert result.connection_string == "P"


def test_app_settings_invalid_json(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    """Verify that malformed JSON is logged and reported as failed."""
    f = tmp_path / "appsettings.json"
    f.write_text("{ not json")
    with caplog.at_level(logging.ERROR):
        result = parse_app_settings(str(f), "Default")
    assert not result.success
    assert "JD0011" in caplog.text


def test_app_config_matches_case_insensitively(tmp_path: Path) -> None:
    """Verify that XML entries match the requested name ignoring case."""
    f = tmp_path / "app.config"
    f.write_text(APP_CONFIG_XML)
    result = parse_app_config(str(f), "default")
    assert result.connection_string == "Server=xml"


def test_app_config_invalid_xml(tmp_path: Path) -> None:
    """Verify that malformed XML is reported as failed."""
    f = tmp_path / "app.config"
    f.write_text("<configuration>")
    assert not parse_app_config(str(f), "Default").success


def test_validate_config_file_type_mismatch(
    caplog: pytest.LogCaptureFixture,
) -> None:
    """Verify that kind/extension mismatches only warn."""
    with caplog.at_level(logging.WARNING):
        assert not validate_config_file_type("x/app.config", APP_SETTINGS)
        assert not validate_config_file_type("x/appsettings.json", APP_CONFIG)
    assert caplog.text.count("JD0001") == 2
    assert validate_config_file_type("x/appsettings.json", APP_SETTINGS)


def test_explicit_value_wins(tmp_path: Path) -> None:
    """Verify that an explicit connection string is used verbatim."""
    write_settings(tmp_path / "appsettings.json", {"Default": "file"})
    ctx = context(tmp_path, explicit_connection_string="Server=explicit")
    assert resolve_connection_string(ctx) == "Server=explicit"


def test_only_appsettings(tmp_path: Path) -> None:
    """Verify auto-discovery of appsettings.json."""
    write_settings(tmp_path / "appsettings.json", {"Default": "X"})
    assert resolve_connection_string(context(tmp_path)) == "X"


def test_no_source_returns_none(tmp_path: Path) -> None:
    """Verify that finding nothing is a successful None."""
    assert resolve_connection_string(context(tmp_path)) is None


def test_explicit_app_settings_path(tmp_path: Path) -> None:
    """Verify that an explicit settings file beats auto-discovery."""
    write_settings(tmp_path / "appsettings.json", {"Default": "auto"})
    cfg = tmp_path / "cfg"
    cfg.mkdir()
    write_settings(cfg / "db.json", {"Default": "explicit"})
    ctx = context(tmp_path, app_settings_path="cfg/db.json")
    assert resolve_connection_string(ctx) == "explicit"


def test_explicit_app_settings_with_config_extension(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    """Verify that a .config passed as app settings is parsed as XML."""
    (tmp_path / "legacy.config").write_text(APP_CONFIG_XML)
    ctx = context(tmp_path, app_settings_path="legacy.config")
    with caplog.at_level(logging.WARNING):
        assert resolve_connection_string(ctx) == "Server=xml"
    assert "JD0001" in caplog.text


def test_explicit_file_without_value_falls_through(tmp_path: Path) -> None:
    """Verify that an explicit file yielding nothing lets later links run."""
    write_settings(tmp_path / "empty.json", {})
    (tmp_path / "web.config").write_text(APP_CONFIG_XML)
    ctx = context(tmp_path, app_settings_path="empty.json")
    assert resolve_connection_string(ctx) == "Server=xml"


def test_explicit_app_config_path(tmp_path: Path) -> None:
    """Verify that an explicit config file is used."""
    (tmp_path / "custom.config").write_text(APP_CONFIG_XML)
    ctx = context(tmp_path, app_config_path=str(tmp_path / "custom.config"))
    assert resolve_connection_string(ctx) == "Server=xml"


def test_multiple_appsettings_prefers_literal(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    """Verify the literal appsettings.json preference and ambiguity warning."""
    write_settings(tmp_path / "appsettings.Development.json", {"Default": "dev"})
    write_settings(tmp_path / "appsettings.json", {"Default": "main"})
    with caplog.at_level(logging.WARNING):
        assert resolve_connection_string(context(tmp_path)) == "main"
    assert "JD0003" in caplog.text


def test_appsettings_ordinal_tie_break(tmp_path: Path) -> None:
    """Verify ordinal ordering when no literal appsettings.json exists."""
    write_settings(tmp_path / "appsettings.b.json", {"Default": "b"})
    write_settings(tmp_path / "appsettings.A.json", {"Default": "A"})
    names = [Path(p).name for p in discover_app_settings(str(tmp_path))]
    assert names == ["appsettings.A.json", "appsettings.b.json"]
    assert resolve_connection_string(context(tmp_path)) == "A"


def test_appsettings_skips_candidates_without_value(tmp_path: Path) -> None:
    """Verify that discovery moves on to the next candidate."""
    (tmp_path / "appsettings.json").write_text("{ broken")
    write_settings(tmp_path / "appsettings.Local.json", {"Default": "local"})
    assert resolve_connection_string(context(tmp_path)) == "local"


def test_app_config_before_web_config(tmp_path: Path) -> None:
    """Verify that app.config is consulted before web.config."""
    (tmp_path / "web.config").write_text(
        APP_CONFIG_XML.replace("Server=xml", "Server=web")
    )
    (tmp_path / "app.config").write_text(APP_CONFIG_XML)
    assert resolve_connection_string(context(tmp_path)) == "Server=xml"
