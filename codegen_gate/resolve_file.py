"""File lookup across the override, project, solution and defaults tiers."""

import os

from codegen_gate.errors import FileResolutionError, OverrideFileNotFoundError
from codegen_gate.resolution_context import ResolutionContext
from codegen_gate.resolve_resource import resolve_resource


def resolve_file(context: ResolutionContext) -> str:
    """Resolve a file, raising ``FileResolutionError`` subclasses on failure."""
    return resolve_resource(
        context,
        exists=os.path.isfile,
        override_not_found=OverrideFileNotFoundError,
        not_found=FileResolutionError,
    )
