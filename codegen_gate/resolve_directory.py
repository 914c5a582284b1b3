"""Directory lookup across the override, project, solution and defaults tiers."""

import os

from codegen_gate.errors import DirectoryResolutionError, OverrideDirectoryNotFoundError
from codegen_gate.resolution_context import ResolutionContext
from codegen_gate.resolve_resource import resolve_resource


def resolve_directory(context: ResolutionContext) -> str:
    """Resolve a directory, raising ``DirectoryResolutionError`` on failure."""
    return resolve_resource(
        context,
        exists=os.path.isdir,
        override_not_found=OverrideDirectoryNotFoundError,
        not_found=DirectoryResolutionError,
    )
