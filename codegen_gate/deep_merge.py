"""Logic for deep merging gate settings dictionaries."""

from typing import Any


def deep_merge(base: dict[str, Any], update: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two dictionaries.

    - Objects are merged recursively.
    - Arrays in 'update' replace 'base' arrays, EXCEPT under 'candidates'.
    - 'candidates' lists are prepended: user names are probed first, then the
      defaults, without case-insensitive duplicates.
    """
    result = base.copy()
    for key, value in update.items():
        if (
            key == "candidates"
            and isinstance(value, dict)
            and isinstance(result.get(key), dict)
        ):
            result[key] = _merge_candidates(result[key], value)
        elif (
            key in result and isinstance(result[key], dict) and isinstance(value, dict)
        ):
            result[key] = deep_merge(result[key], value)
        else:
            # Default: Replacement (scalars and other arrays)
            result[key] = value
    return result


def _merge_candidates(
    base: dict[str, list[str]], update: dict[str, Any]
) -> dict[str, list[str]]:
    merged = dict(base)
    for kind, names in update.items():
        if isinstance(names, str):
            names = [names]
        combined: list[str] = []
        seen: set[str] = set()
        for name in [*(names or []), *merged.get(kind, [])]:
            if name.casefold() not in seen:
                seen.add(name.casefold())
                combined.append(name)
        merged[kind] = combined
    return merged
