"""Data model for the outcome of a fingerprint computation."""

from dataclasses import dataclass


@dataclass(frozen=True)
class FingerprintResult:
    """The new fingerprint and whether it differs from the cached one."""

    fingerprint: str
    has_changed: bool
    previous_fingerprint: str | None = None
