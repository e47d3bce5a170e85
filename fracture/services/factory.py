"""Fracture factory: creates new fractures as git worktrees."""

import re

import git

from fracture.constants import DEFAULT_REMOTE
from fracture.exceptions import CreationError, FractureExistsError
from fracture.models.fracture import Fracture
from fracture.models.repository import Repository
from fracture.utils.gitcmd import git_error_message
from fracture.logging_config import get_logger

logger = get_logger(__name__)

_SEPARATOR_RUNS = re.compile(r"[/_]+")


def fracture_id_for_branch(branch: str) -> str:
    """Derive a filesystem-safe fracture id from a branch name.

    Runs of "/" and "_" collapse into a single "-", so "feature/new_ui"
    becomes "feature-new-ui". Ids are therefore one per branch.
    """
    fracture_id = _SEPARATOR_RUNS.sub("-", branch.strip()).strip("-")
    if not fracture_id or fracture_id in (".", ".."):
        raise CreationError(f"invalid branch name: '{branch}'")
    return fracture_id


def create_fracture(repository: Repository, branch: str, is_new_branch: bool = False) -> Fracture:
    """Create a fracture for a branch.

    Args:
        repository: Repository to cut the fracture from
        branch: Existing branch to check out, or name of the branch to create
        is_new_branch: Create `branch` off the primary checkout's HEAD

    Returns:
        The new Fracture

    Raises:
        FractureExistsError: If a fracture with the derived id already exists
        CreationError: If git fails to add the worktree
    """
    fracture_id = fracture_id_for_branch(branch)
    path = repository.fracture_path(fracture_id)
    if path.exists():
        raise FractureExistsError(fracture_id, str(path))

    try:
        repository.fractures_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise CreationError(f"could not create {repository.fractures_dir}: {e}")

    if is_new_branch:
        args = ["add", "-b", branch, str(path)]
    else:
        args = ["add", str(path), branch]

    try:
        repo = repository.get_repo()
        repo.git.worktree(*args)
    except git.exc.GitError as e:
        stderr = git_error_message(e)
        logger.debug(f"git worktree {' '.join(args)} failed: {stderr}")
        raise CreationError(stderr)

    logger.info(f"Created fracture {fracture_id} for {branch} at {path}")

    if not is_new_branch:
        link_upstream(repository, branch)

    return Fracture(id=fracture_id, path=path, branch=branch, repository=repository)


def link_upstream(repository: Repository, branch: str, remote_name: str = DEFAULT_REMOTE) -> bool:
    """Point a branch without an upstream at <remote>/<branch> when it exists.

    Best-effort: any failure is logged and reported as False.

    Returns:
        True if an upstream was configured by this call
    """
    try:
        repo = repository.get_repo()
        head = repo.heads[branch]
        if head.tracking_branch() is not None:
            return False

        if remote_name not in [remote.name for remote in repo.remotes]:
            return False

        remote_ref_name = f"{remote_name}/{branch}"
        try:
            repo.git.rev_parse("--verify", "--quiet", f"refs/remotes/{remote_ref_name}")
        except git.exc.GitCommandError:
            return False

        repo.git.branch(f"--set-upstream-to={remote_ref_name}", branch)
        logger.info(f"Set upstream of {branch} to {remote_ref_name}")
        return True
    except (git.exc.GitError, IndexError, ValueError) as e:
        logger.debug(f"Could not set upstream for {branch}: {e}")
        return False
