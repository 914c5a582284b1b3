"""Data model describing where a resource may be found."""

from collections.abc import Sequence
from dataclasses import dataclass, field


@dataclass(frozen=True)
class ResolutionContext:
    """Search locations and candidate names for one file or directory lookup.

    ``candidate_names`` is probed in order inside each tier.
    """

    override_path: str | None
    project_directory: str | None
    solution_directory: str | None = None
    probe_solution_directory: bool = False
    defaults_root: str | None = None
    candidate_names: tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def create(
        cls,
        override_path: str | None,
        project_directory: str | None,
        candidate_names: Sequence[str],
        *,
        solution_directory: str | None = None,
        probe_solution_directory: bool = False,
        defaults_root: str | None = None,
    ) -> "ResolutionContext":
        """Build a context, freezing the candidate names into a tuple."""
        return cls(
            override_path=override_path,
            project_directory=project_directory,
            solution_directory=solution_directory,
            probe_solution_directory=probe_solution_directory,
            defaults_root=defaults_root,
            candidate_names=tuple(candidate_names),
        )
