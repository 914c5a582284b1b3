"""First stage of the build: locate every input the generator consumes."""

import json
import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from codegen_gate.build_candidate_names import build_candidate_names
from codegen_gate.connection_string_context import ConnectionStringContext
from codegen_gate.resolution_context import ResolutionContext
from codegen_gate.resolve_connection_string import resolve_connection_string
from codegen_gate.resolve_directory import resolve_directory
from codegen_gate.resolve_file import resolve_file
from codegen_gate.resolved_inputs import ResolvedInputs
from codegen_gate.select_sql_project import select_sql_project

logger = logging.getLogger(__name__)

DUMP_FILE_NAME = "resolved-inputs.json"


def resolve_inputs(
    config: dict[str, Any],
    project_directory: str,
    *,
    solution_directory: str | None = None,
    defaults_root: str | None = None,
    sql_project_override: str | None = None,
    project_references: Sequence[str] = (),
    config_override: str | None = None,
    renaming_override: str | None = None,
    template_override: str | None = None,
    connection: ConnectionStringContext | None = None,
    dump_dir: str | None = None,
) -> ResolvedInputs:
    """Resolve the configuration, renaming, template and schema inputs.

    When a connection string is found the SQL project is not required and is
    left unset. When ``dump_dir`` is given, the result is also written to
    ``resolved-inputs.json`` there.
    """
    candidates = config["candidates"]
    probe = bool(config["resolution"]["probe_solution_dir"])

    def context(override: str | None, names: Sequence[str]) -> ResolutionContext:
        return ResolutionContext.create(
            override,
            project_directory,
            build_candidate_names(override, names),
            solution_directory=solution_directory,
            probe_solution_directory=probe,
            defaults_root=defaults_root,
        )

    if connection is None:
        connection = ConnectionStringContext(
            connection_string_name=config["connection_string"]["name"],
            project_directory=project_directory,
            key_path=config["connection_string"].get("key_path"),
        )
    connection_string = resolve_connection_string(connection)

    sql_project = None
    if connection_string is None:
        sql_project = select_sql_project(
            sql_project_override, project_directory, project_references
        )

    inputs = ResolvedInputs(
        sql_project=sql_project,
        config_path=resolve_file(context(config_override, candidates["config"])),
        renaming_path=resolve_file(context(renaming_override, candidates["renaming"])),
        template_dir=resolve_directory(
            context(template_override, candidates["template"])
        ),
        connection_string=connection_string,
    )
    logger.debug("Resolved inputs: %s", inputs)

    if dump_dir:
        write_dump(inputs, dump_dir)
    return inputs


def write_dump(inputs: ResolvedInputs, dump_dir: str) -> Path:
    """Write the resolved inputs to ``resolved-inputs.json`` for diagnostics.

    The connection string is masked so credentials never reach disk.
    """
    data = inputs.to_dict(mask_secrets=True)
    out = Path(dump_dir)
    out.mkdir(parents=True, exist_ok=True)
    path = out / DUMP_FILE_NAME
    path.write_text(json.dumps(data, indent=2, sort_keys=True), encoding="utf-8")
    return path
