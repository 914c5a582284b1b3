"""Orchestration logic behind the command-line subcommands."""

import argparse
import json
import logging
import os
from pathlib import Path
from typing import Any

from codegen_gate.compute_config_hash import compute_config_hash
from codegen_gate.compute_fingerprint import compute_fingerprint
from codegen_gate.connection_string_context import ConnectionStringContext
from codegen_gate.fingerprint_result import FingerprintResult
from codegen_gate.load_config import load_config
from codegen_gate.normalize_sql import normalize_sql
from codegen_gate.path_utils import full_path
from codegen_gate.resolve_inputs import resolve_inputs
from codegen_gate.resolved_inputs import ResolvedInputs

logger = logging.getLogger(__name__)

EXIT_CHANGED = 3


def run_resolve(args: argparse.Namespace) -> int:
    """Resolve build inputs and print them as JSON."""
    config = _init_config(args)
    inputs = _resolve(args, config)
    _print_json(inputs.to_dict(mask_secrets=True))
    return 0


def run_fingerprint(args: argparse.Namespace) -> int:
    """Compute the build fingerprint from already-resolved paths."""
    config = _init_config(args)
    result = compute_fingerprint(
        args.config_file,
        args.renaming_file,
        args.template_dir,
        _cache_path(args, config),
        schema_artifact_path=args.schema_artifact,
        schema_fingerprint=args.schema_fingerprint,
        use_connection_string_mode=args.connection_string_mode,
    )
    return _report(result, args)


def run_check(args: argparse.Namespace) -> int:
    """Resolve inputs, then fingerprint them in one go."""
    config = _init_config(args)
    inputs = _resolve(args, config)
    result = compute_fingerprint(
        inputs.config_path,
        inputs.renaming_path,
        inputs.template_dir,
        _cache_path(args, config),
        schema_artifact_path=args.schema_artifact,
        schema_fingerprint=args.schema_fingerprint,
        use_connection_string_mode=inputs.use_connection_string_mode,
    )
    return _report(result, args, inputs)


def run_normalize_sql(args: argparse.Namespace) -> int:
    """Print the normalized form of a SQL file."""
    text = Path(args.sql_file).read_text(encoding="utf-8")
    print(normalize_sql(text))
    return 0


def _init_config(args: argparse.Namespace) -> dict[str, Any]:
    config = load_config(args.config)
    logger.debug("Gate settings hash: %s", compute_config_hash(config))
    if getattr(args, "no_probe_solution_dir", False):
        config["resolution"]["probe_solution_dir"] = False
    return config


def _resolve(args: argparse.Namespace, config: dict[str, Any]) -> ResolvedInputs:
    settings = config["connection_string"]
    connection = ConnectionStringContext(
        explicit_connection_string=args.connection_string,
        app_settings_path=args.app_settings,
        app_config_path=args.app_config,
        connection_string_name=args.connection_string_name or settings["name"],
        project_directory=args.project_dir,
        key_path=settings.get("key_path"),
    )
    return resolve_inputs(
        config,
        args.project_dir,
        solution_directory=args.solution_dir,
        defaults_root=args.defaults_root,
        sql_project_override=args.sql_project,
        project_references=args.reference or [],
        config_override=args.config_override,
        renaming_override=args.renaming_override,
        template_override=args.template_override,
        connection=connection,
        dump_dir=args.dump_dir,
    )


def _cache_path(args: argparse.Namespace, config: dict[str, Any]) -> str:
    if args.cache_file:
        return os.path.abspath(args.cache_file)
    return full_path(config["fingerprint"]["cache_file"], args.project_dir)


def _report(
    result: FingerprintResult,
    args: argparse.Namespace,
    inputs: ResolvedInputs | None = None,
) -> int:
    payload: dict[str, Any] = {
        "fingerprint": result.fingerprint,
        "has_changed": result.has_changed,
    }
    if inputs is not None:
        payload["inputs"] = inputs.to_dict(mask_secrets=True)
    _print_json(payload)
    if args.fail_if_changed and result.has_changed:
        return EXIT_CHANGED
    return 0


def _print_json(data: dict[str, Any]) -> None:
    print(json.dumps(data, indent=2, sort_keys=True))
