"""Predicate for boolean-ish flag values passed in from build properties."""

TRUE_VALUES = frozenset({"true", "yes", "on", "1", "enable", "enabled", "y"})


def is_true(value: object) -> bool:
    """Check if a flag value means "on"."""
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    return str(value).strip().lower() in TRUE_VALUES
