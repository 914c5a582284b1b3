"""Data model for the outcome of reading a connection string from a file."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ConnectionStringResult:
    """Represents the result of looking up a connection string in one file."""

    success: bool
    connection_string: str | None = None
    source: str | None = None
    key_name: str | None = None

    @classmethod
    def with_success(
        cls, connection_string: str, source: str, key_name: str
    ) -> "ConnectionStringResult":
        """Create a successful result."""
        return cls(True, connection_string, source, key_name)

    @classmethod
    def not_found(cls) -> "ConnectionStringResult":
        """Create a result for a file that holds no matching entry."""
        return cls(False)

    @classmethod
    def failed(cls) -> "ConnectionStringResult":
        """Create a result for a file that could not be read or parsed."""
        return cls(False)
