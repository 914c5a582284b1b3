"""Logic for persisting the last computed build fingerprint."""

import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class FingerprintCache:
    """A single-line text file holding the fingerprint of the previous build."""

    def __init__(self, path: str | Path) -> None:
        """Initialize the cache with its storage path."""
        self.path = Path(path)

    def load(self) -> str | None:
        """Return the stored fingerprint, or None when there is none."""
        if not self.path.is_file():
            return None
        try:
            value = self.path.read_text(encoding="utf-8").strip()
        except (OSError, UnicodeDecodeError):
            logger.exception("Error reading fingerprint cache %s", self.path)
            return None
        return value or None

    def save(self, fingerprint: str) -> None:
        """Overwrite the cache with a new fingerprint."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(fingerprint, encoding="utf-8")
