"""Choose the single SQL project a build generates code from."""

import os
from collections.abc import Iterable

from codegen_gate.errors import SqlProjectSelectionError
from codegen_gate.path_utils import full_path, has_value

SQL_PROJECT_EXTENSIONS = (".sqlproj",)


def select_sql_project(
    override: str | None,
    project_directory: str,
    project_references: Iterable[str] = (),
) -> str:
    """Pick the SQL project from an override or the project's references.

    An override always wins. Otherwise exactly one SQL project reference must
    exist on disk; zero or several raise ``SqlProjectSelectionError``.
    """
    if has_value(override):
        return full_path(str(override), project_directory)

    references = _sql_references(project_references, project_directory)
    if not references:
        msg = (
            "No .sqlproj project reference found. Add a single .sqlproj "
            "reference or pass the SQL project explicitly."
        )
        raise SqlProjectSelectionError(msg)
    if len(references) > 1:
        msg = (
            f"Multiple .sqlproj references detected ({', '.join(references)}). "
            "Exactly one is allowed; pass the SQL project explicitly to disambiguate."
        )
        raise SqlProjectSelectionError(msg)

    resolved = references[0]
    if not os.path.isfile(resolved):
        msg = f".sqlproj project reference not found on disk: {resolved}"
        raise SqlProjectSelectionError(msg)
    return resolved


def _sql_references(references: Iterable[str], project_directory: str) -> list[str]:
    """Return the distinct SQL project references as absolute paths."""
    result: list[str] = []
    seen: set[str] = set()
    for ref in references:
        if not has_value(ref):
            continue
        if os.path.splitext(ref)[1].lower() not in SQL_PROJECT_EXTENSIONS:
            continue
        path = full_path(ref, project_directory)
        if path.casefold() not in seen:
            seen.add(path.casefold())
            result.append(path)
    return result
