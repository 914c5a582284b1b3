"""Ordered fallback search for a file or directory across resolution tiers."""

import logging
import os
from collections.abc import Callable, Sequence

from codegen_gate.path_utils import full_path, has_explicit_path, has_value
from codegen_gate.resolution_context import ResolutionContext

logger = logging.getLogger(__name__)

ExistsPredicate = Callable[[str], bool]
NotFoundFactory = Callable[[str, str | None], Exception]


def resolve_resource(
    context: ResolutionContext,
    exists: ExistsPredicate,
    override_not_found: NotFoundFactory,
    not_found: NotFoundFactory,
) -> str:
    """Resolve a resource by probing each tier in order.

    Tiers, first match wins:

    1. An explicit override (rooted or containing a separator). A missing
       override raises ``override_not_found`` even if a later tier would match.
    2. The project directory.
    3. The solution directory, when probing is enabled.
    4. The packaged defaults root.

    Raises ``not_found`` once every tier is exhausted.
    """
    if has_explicit_path(context.override_path):
        path = full_path(str(context.override_path), context.project_directory)
        if exists(path):
            logger.debug("Using override path: %s", path)
            return path
        raise override_not_found(f"Override not found: {path}", path)

    tiers: list[str] = []

    if has_value(context.project_directory):
        tiers.append("project directory")
        found = _find_in_directory(
            str(context.project_directory), context.candidate_names, exists
        )
        if found:
            return found

    if context.probe_solution_directory and has_value(context.solution_directory):
        tiers.append("solution directory")
        solution_dir = full_path(
            str(context.solution_directory), context.project_directory
        )
        found = _find_in_directory(solution_dir, context.candidate_names, exists)
        if found:
            return found

    if has_value(context.defaults_root):
        tiers.append("defaults root")
        found = _find_in_directory(
            str(context.defaults_root), context.candidate_names, exists
        )
        if found:
            return found

    names = " or ".join(context.candidate_names) or "<no candidates>"
    checked = ", ".join(tiers) or "none"
    raise not_found(
        f"Unable to locate {names} (checked: {checked}). Provide an explicit "
        "path, place it next to the project, in the solution directory, or "
        "ensure the packaged defaults are present.",
        None,
    )


def _find_in_directory(
    directory: str, names: Sequence[str], exists: ExistsPredicate
) -> str | None:
    """Return the first candidate under a directory that exists."""
    if not has_value(directory) or not names:
        return None
    for name in names:
        candidate = os.path.abspath(os.path.join(directory, name))
        if exists(candidate):
            logger.debug("Found %s in %s", name, directory)
            return candidate
    return None
