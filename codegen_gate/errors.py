"""Exceptions raised by the build gate."""


class GateError(Exception):
    """Base class for errors raised deliberately by the gate."""


class ResourceNotFoundError(GateError, FileNotFoundError):
    """A file or directory could not be located."""

    def __init__(self, message: str, path: str | None = None) -> None:
        """Store the message and the offending path, if known."""
        super().__init__(message)
        self.message = message
        self.path = path

    def __str__(self) -> str:
        """Return the message only."""
        return self.message


class FileResolutionError(ResourceNotFoundError):
    """No candidate file was found in any tier."""


class DirectoryResolutionError(ResourceNotFoundError):
    """No candidate directory was found in any tier."""


class OverrideFileNotFoundError(FileResolutionError):
    """An explicit file override points at a missing file."""


class OverrideDirectoryNotFoundError(DirectoryResolutionError):
    """An explicit directory override points at a missing directory."""


class InvalidSchemaArtifactError(GateError, ValueError):
    """A schema artifact is not a zip package or lacks its model entry."""


class SqlProjectSelectionError(GateError):
    """The SQL project reference could not be chosen unambiguously."""
