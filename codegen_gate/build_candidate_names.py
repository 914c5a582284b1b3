"""Logic for building the ordered list of names probed during resolution."""

from collections.abc import Iterable

from codegen_gate.path_utils import file_name, has_value


def build_candidate_names(
    candidate_override: str | None, fallback_names: Iterable[str | None] = ()
) -> list[str]:
    """Build a deduplicated list of candidate names.

    The override's file name comes first when present, followed by the
    fallback names. Duplicates are dropped case-insensitively, keeping the
    first occurrence and its original casing.
    """
    names: list[str] = []
    if has_value(candidate_override):
        names.append(file_name(str(candidate_override)))

    names.extend(file_name(n) for n in fallback_names if n and n.strip())

    seen: set[str] = set()
    result = []
    for name in names:
        key = name.casefold()
        if not name or key in seen:
            continue
        seen.add(key)
        result.append(name)
    return result
