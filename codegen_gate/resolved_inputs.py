"""Data model for the inputs resolved at the start of a build."""

from dataclasses import asdict, dataclass
from typing import Any


@dataclass(frozen=True)
class ResolvedInputs:
    """Absolute paths (or connection string) handed to the generation step."""

    sql_project: str | None
    config_path: str
    renaming_path: str
    template_dir: str
    connection_string: str | None = None

    @property
    def use_connection_string_mode(self) -> bool:
        """Whether the schema comes from a live connection instead of a project."""
        return self.connection_string is not None

    def to_dict(self, *, mask_secrets: bool = False) -> dict[str, Any]:
        """Return a JSON-ready mapping, optionally masking the connection string."""
        data = asdict(self)
        data["use_connection_string_mode"] = self.use_connection_string_mode
        if mask_secrets and self.connection_string is not None:
            data["connection_string"] = "***"
        return data
