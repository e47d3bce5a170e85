"""Core functionality for fracture"""

import os
from typing import Callable, List, Optional, Sequence

from rich.console import Console
from rich.markup import escape

from fracture.config import Config
from fracture.constants import STATUS_MESSAGES
from fracture.exceptions import (
    BulkDeletionError,
    DeletionError,
    FractureNotFoundError,
    NoBranchesError,
    NoFracturesError,
    RepositoryNotFoundError,
)
from fracture.models.fracture import Fracture
from fracture.models.repository import Repository
from fracture.services import registry
from fracture.services.environment import copy_env_files
from fracture.services.factory import create_fracture
from fracture.services.installer import install_deps
from fracture.services.repository_locator import detect_repository, list_branches
from fracture.ui.picker import Choice, Selection, pick
from fracture.ui.status import RichStatus, StatusSink
from fracture.logging_config import get_logger

console = Console()
err_console = Console(stderr=True)
logger = get_logger(__name__)

Picker = Callable[[Sequence[Choice], str], Selection]


def fracture_choices(fractures: Sequence[Fracture]) -> List[Choice]:
    """Picker choices for fractures, searchable by id or branch."""
    return [
        Choice(label=f.display_name, value=f.id, keywords=(f.id, f.branch))
        for f in fractures
    ]


class FractureManager:
    """Runs fracture's top-level commands.

    Nothing is kept between calls; every command re-reads git and the
    filesystem.
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        cwd: Optional[str] = None,
        picker: Optional[Picker] = None,
        status_factory: Optional[Callable[[], StatusSink]] = None,
    ):
        """Initialize FractureManager.

        Args:
            config: Configuration (defaults to Config.from_env())
            cwd: Directory to detect the repository from (defaults to os.getcwd())
            picker: Interactive chooser used when no branch or id is given
                (defaults to the Textual picker)
            status_factory: Creates the progress sink for long-running steps
                (defaults to a rich spinner)
        """
        self.config = config or Config.from_env()
        self.cwd = cwd or os.getcwd()
        self.picker = picker or pick
        self.status_factory = status_factory or RichStatus

    def locate(self) -> Repository:
        """Detect the enclosing repository.

        Raises:
            RepositoryNotFoundError: If cwd is not inside a git repository
        """
        repository = detect_repository(self.cwd, self.config.fracture_home)
        if repository is None:
            raise RepositoryNotFoundError()
        return repository

    def create(self, new_branch: Optional[str] = None, enter: bool = True) -> Optional[Fracture]:
        """Create a fracture and drop into it.

        Args:
            new_branch: Cut a new branch with this name off the current HEAD;
                when None the user picks an existing branch
            enter: Spawn a shell in the fracture once it is ready

        Returns:
            The new fracture, or None if the user cancelled the branch picker

        Raises:
            RepositoryNotFoundError, NoBranchesError, FractureExistsError, CreationError
        """
        repository = self.locate()

        if new_branch:
            branch = new_branch
        else:
            branches = list_branches(repository)
            if not branches:
                raise NoBranchesError()
            selection = self.picker(
                [Choice(label=b, value=b) for b in branches],
                "Select branch to checkout",
            )
            if selection.cancelled:
                logger.debug("Branch selection cancelled")
                return None
            branch = selection.value

        status = self.status_factory()
        try:
            status.update(STATUS_MESSAGES["prepare"])
            fracture = create_fracture(repository, branch, is_new_branch=bool(new_branch))

            if self.config.copy_env:
                status.update(STATUS_MESSAGES["env"])
                copy_env_files(repository, fracture)

            error = None
            if self.config.install_deps:
                error = install_deps(repository, fracture, status)
        finally:
            status.stop()

        if error:
            err_console.print("[yellow]warning: failed to install dependencies:[/yellow]")
            err_console.print(escape(error.strip()), highlight=False)

        if enter:
            fracture.enter(self.config.shell)
        return fracture

    def list(self) -> List[Fracture]:
        """Print one `<id> <<branch>>` line per fracture."""
        repository = self.locate()
        fractures = registry.list_fractures(repository)
        for fracture in fractures:
            console.print(fracture.display_name, markup=False, highlight=False, soft_wrap=True)
        return fractures

    def _select_fracture(self, repository: Repository, fracture_id: Optional[str], prompt: str) -> Optional[Fracture]:
        fractures = registry.list_fractures(repository)
        if not fractures:
            raise NoFracturesError()

        if fracture_id is None:
            selection = self.picker(fracture_choices(fractures), prompt)
            if selection.cancelled:
                logger.debug("Fracture selection cancelled")
                return None
            fracture_id = selection.value

        for fracture in fractures:
            if fracture.id == fracture_id:
                return fracture
        raise FractureNotFoundError(fracture_id)

    def enter(self, fracture_id: Optional[str] = None) -> Optional[int]:
        """Open a shell in an existing fracture.

        Returns:
            The shell's exit status, or None if the picker was cancelled

        Raises:
            RepositoryNotFoundError, NoFracturesError, FractureNotFoundError
        """
        repository = self.locate()
        fracture = self._select_fracture(repository, fracture_id, "Select fracture to enter")
        if fracture is None:
            return None
        return fracture.enter(self.config.shell)

    def delete(self, fracture_id: Optional[str] = None, force: bool = False) -> Optional[Fracture]:
        """Delete one fracture.

        Returns:
            The deleted fracture, or None if the picker was cancelled

        Raises:
            RepositoryNotFoundError, NoFracturesError, FractureNotFoundError, DeletionError
        """
        repository = self.locate()
        fracture = self._select_fracture(repository, fracture_id, "Select fracture to delete")
        if fracture is None:
            return None

        status = self.status_factory()
        try:
            status.update(STATUS_MESSAGES["delete"])
            error = fracture.delete(force)
        finally:
            status.stop()

        if error:
            raise DeletionError(fracture.id, error)

        console.print(f"deleted {fracture.id}", markup=False, highlight=False)
        return fracture

    def delete_all(self, force: bool = False) -> List[Fracture]:
        """Delete every fracture, continuing past failures.

        Returns:
            The fractures that were deleted

        Raises:
            NoFracturesError: If there is nothing to delete (no git calls are made)
            BulkDeletionError: After the whole batch ran, if any removal failed
        """
        repository = self.locate()
        fractures = registry.list_fractures(repository)
        if not fractures:
            raise NoFracturesError()

        deleted: List[Fracture] = []
        failures = []
        status = self.status_factory()
        try:
            status.update(STATUS_MESSAGES["delete_all"])
            for fracture in fractures:
                error = fracture.delete(force)
                if error:
                    logger.debug(f"Failed to delete {fracture.id}: {error}")
                    failures.append((fracture.id, error))
                else:
                    deleted.append(fracture)
        finally:
            status.stop()

        for fracture in deleted:
            console.print(f"deleted {fracture.id}", markup=False, highlight=False)

        if failures:
            raise BulkDeletionError(failures)
        return deleted
