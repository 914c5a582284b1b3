"""Decision chain locating the database connection string for a build.

Each link is a ``(guard, action)`` pair over the same context. Links run in
order and the first guard that passes decides the result. Guards re-derive
applicability by attempting the parse themselves, so every link can be
exercised on its own.
"""

import glob
import logging
import os
from collections.abc import Callable

from codegen_gate.connection_string_context import ConnectionStringContext
from codegen_gate.connection_string_result import ConnectionStringResult
from codegen_gate.parse_app_config import parse_app_config
from codegen_gate.parse_app_settings import parse_app_settings
from codegen_gate.path_utils import full_path, has_value
from codegen_gate.validate_config_file_type import (
    APP_CONFIG,
    APP_SETTINGS,
    validate_config_file_type,
)

logger = logging.getLogger(__name__)

APP_SETTINGS_PATTERN = "appsettings*.json"
APP_SETTINGS_FILE = "appsettings.json"
APP_CONFIG_FILES = ("app.config", "web.config")

Guard = Callable[[ConnectionStringContext], bool]
Action = Callable[[ConnectionStringContext], str | None]


def resolve_connection_string(context: ConnectionStringContext) -> str | None:
    """Resolve a connection string, or None to fall back to artifact mode.

    Returning None is a successful outcome, not an error.
    """
    for guard, action in CHAIN:
        if guard(context):
            return action(context)
    return None


def parse_connection_string_file(
    file_path: str, context: ConnectionStringContext
) -> ConnectionStringResult:
    """Parse a settings file with the parser its extension selects."""
    extension = os.path.splitext(file_path)[1].lower()
    if extension == ".json":
        return parse_app_settings(
            file_path, context.connection_string_name, context.key_path
        )
    if extension == ".config":
        return parse_app_config(file_path, context.connection_string_name)
    return ConnectionStringResult.failed()


def discover_app_settings(project_directory: str | None) -> list[str]:
    """List ``appsettings*.json`` files, a literal ``appsettings.json`` first.

    The rest follow in ordinal order so the choice does not depend on how the
    filesystem lists its entries.
    """
    if not has_value(project_directory) or not os.path.isdir(str(project_directory)):
        return []
    pattern = os.path.join(glob.escape(str(project_directory)), APP_SETTINGS_PATTERN)
    files = sorted(
        (f for f in glob.glob(pattern) if os.path.isfile(f)),
        key=os.path.basename,
    )
    return sorted(files, key=lambda f: os.path.basename(f) != APP_SETTINGS_FILE)


def discover_app_config(project_directory: str | None) -> list[str]:
    """List the existing ``app.config`` and ``web.config`` files, in that order."""
    if not has_value(project_directory):
        return []
    candidates = (os.path.join(str(project_directory), n) for n in APP_CONFIG_FILES)
    return [c for c in candidates if os.path.isfile(c)]


def _value_of(result: ConnectionStringResult) -> str | None:
    if result.success and has_value(result.connection_string):
        return result.connection_string
    return None


def _from_explicit(
    context: ConnectionStringContext, path: str | None, kind: str, *, warn: bool
) -> str | None:
    if not has_value(path):
        return None
    resolved = full_path(str(path), context.project_directory)
    if not os.path.isfile(resolved):
        return None
    if warn:
        validate_config_file_type(resolved, kind)
    return _value_of(parse_connection_string_file(resolved, context))


def _from_app_settings(context: ConnectionStringContext, *, warn: bool) -> str | None:
    files = discover_app_settings(context.project_directory)
    if warn and len(files) > 1:
        logger.warning(
            "JD0003: Multiple appsettings files found in project directory: %s. "
            "Using '%s'. Pass the app settings path explicitly to avoid ambiguity.",
            ", ".join(os.path.basename(f) for f in files),
            os.path.basename(files[0]),
        )
    for file_path in files:
        value = _value_of(
            parse_app_settings(
                file_path, context.connection_string_name, context.key_path
            )
        )
        if value:
            if warn:
                logger.debug(
                    "Resolved connection string from auto-discovered file: %s",
                    os.path.basename(file_path),
                )
            return value
    return None


def _from_app_config(context: ConnectionStringContext, *, warn: bool) -> str | None:
    for file_path in discover_app_config(context.project_directory):
        value = _value_of(parse_app_config(file_path, context.connection_string_name))
        if value:
            if warn:
                logger.debug(
                    "Resolved connection string from auto-discovered file: %s",
                    os.path.basename(file_path),
                )
            return value
    return None


def _use_explicit_value(context: ConnectionStringContext) -> str | None:
    logger.debug("Using explicit connection string")
    return context.explicit_connection_string


CHAIN: tuple[tuple[Guard, Action], ...] = (
    (
        lambda ctx: has_value(ctx.explicit_connection_string),
        _use_explicit_value,
    ),
    (
        lambda ctx: bool(
            _from_explicit(ctx, ctx.app_settings_path, APP_SETTINGS, warn=False)
        ),
        lambda ctx: _from_explicit(ctx, ctx.app_settings_path, APP_SETTINGS, warn=True),
    ),
    (
        lambda ctx: bool(
            _from_explicit(ctx, ctx.app_config_path, APP_CONFIG, warn=False)
        ),
        lambda ctx: _from_explicit(ctx, ctx.app_config_path, APP_CONFIG, warn=True),
    ),
    (
        lambda ctx: bool(_from_app_settings(ctx, warn=False)),
        lambda ctx: _from_app_settings(ctx, warn=True),
    ),
    (
        lambda ctx: bool(_from_app_config(ctx, warn=False)),
        lambda ctx: _from_app_config(ctx, warn=True),
    ),
)
