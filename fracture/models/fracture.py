"""Fracture model and its lifecycle operations."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import git
from rich.console import Console

from fracture.constants import DEFAULT_SHELL, ENTER_MESSAGE, EXIT_MESSAGE
from fracture.exceptions import FractureNotFoundError
from fracture.logging_config import get_logger
from fracture.models.repository import Repository
from fracture.utils import process
from fracture.utils.gitcmd import git_error_message

console = Console()
logger = get_logger(__name__)


@dataclass
class Fracture:
    """A managed worktree living under ``<fracture_home>/<repository>/<id>``."""

    id: str
    path: Path
    branch: str
    repository: Repository

    @property
    def display_name(self) -> str:
        return f"{self.id} <{self.branch}>"

    def exists(self) -> bool:
        return self.path.is_dir()

    def enter(self, shell: Optional[str] = None) -> int:
        """Spawn an interactive shell inside the fracture and wait for it to exit.

        Args:
            shell: Shell executable; defaults to $SHELL, then /bin/sh

        Returns:
            The shell's exit status

        Raises:
            FractureNotFoundError: If the fracture directory no longer exists
        """
        if not self.exists():
            raise FractureNotFoundError(self.id)

        shell = shell or os.environ.get("SHELL") or DEFAULT_SHELL
        console.print(f"[green]{ENTER_MESSAGE}[/green]")
        returncode = process.run_interactive([shell], cwd=self.path)
        console.print(f"[dim]{EXIT_MESSAGE}[/dim]")
        return returncode

    def delete(self, force: bool = False) -> Optional[str]:
        """Remove the fracture's worktree (and with it, its directory).

        Args:
            force: Remove even with uncommitted changes or a dirty index

        Returns:
            None on success, otherwise git's error output
        """
        args = ["remove", str(self.path)]
        if force:
            args.append("--force")

        try:
            self.repository.get_repo().git.worktree(*args)
        except git.exc.GitError as e:
            stderr = git_error_message(e)
            logger.debug(f"Failed to remove worktree at {self.path}: {stderr}")
            return stderr or "unknown error"

        logger.info(f"Removed worktree at {self.path}")
        return None

