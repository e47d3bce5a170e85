"""Repository model."""

from dataclasses import dataclass
from pathlib import Path

import git


@dataclass(frozen=True)
class Repository:
    """The git project fractures are cut from.

    ``name`` comes from the common git directory, so it is the same whether
    fracture runs in the primary checkout or inside one of its fractures.
    ``root`` is the primary working tree.
    """

    name: str
    root: Path
    fracture_home: Path

    @property
    def fractures_dir(self) -> Path:
        """Directory holding this repository's fractures."""
        return self.fracture_home / self.name

    def fracture_path(self, fracture_id: str) -> Path:
        return self.fractures_dir / fracture_id

    def get_repo(self) -> git.Repo:
        """Open the primary checkout with GitPython.

        GitPython repos are lightweight, so a fresh instance is opened per call.
        """
        return git.Repo(self.root)
