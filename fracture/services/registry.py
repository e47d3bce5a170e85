"""Fracture registry: discovers a repository's fractures.

Nothing is cached. Every query re-reads the fracture directory and git's
worktree list, so the result always reflects the current on-disk state.
"""

import os
from pathlib import Path
from typing import Dict, List, Optional

import git

from fracture.constants import UNKNOWN_BRANCH
from fracture.exceptions import FractureNotFoundError
from fracture.models.fracture import Fracture
from fracture.models.repository import Repository
from fracture.models.worktree import WorktreeRecord
from fracture.utils.gitcmd import git_error_message, git_output
from fracture.logging_config import get_logger

logger = get_logger(__name__)


def parse_worktree_porcelain(output: str) -> List[WorktreeRecord]:
    """Parse `git worktree list --porcelain` output.

    Format:
        worktree /path/to/worktree
        HEAD commit_sha
        branch refs/heads/branch-name   (or "detached")
        (blank line between worktrees)

    A later `branch` line within the same record wins.
    """
    records: List[WorktreeRecord] = []
    current: Optional[WorktreeRecord] = None

    for raw_line in output.split("\n"):
        line = raw_line.strip()

        if line.startswith("worktree "):
            if current is not None:
                records.append(current)
            current = WorktreeRecord(path=line[len("worktree "):].strip())
            continue

        if current is None or not line:
            continue

        if line.startswith("HEAD "):
            current.head = line[len("HEAD "):].strip()
        elif line.startswith("branch "):
            branch_ref = line[len("branch "):].strip()
            if branch_ref.startswith("refs/heads/"):
                branch_ref = branch_ref[len("refs/heads/"):]
            current.branch = branch_ref or None
        elif line == "detached":
            current.detached = True
            current.branch = None
        elif line.startswith("prunable"):
            current.prunable = True

    # Handle last entry if no trailing blank line
    if current is not None:
        records.append(current)

    return records


def _fracture_id_for(path: str, fracture_dirs: List[str]) -> Optional[str]:
    """Return the id segment of path if it lies under a fracture directory."""
    for base in fracture_dirs:
        prefix = base.rstrip(os.sep) + os.sep
        if path.startswith(prefix):
            fracture_id = path[len(prefix):].split(os.sep)[0]
            if fracture_id:
                return fracture_id
    return None


def get_worktrees_by_id(repository: Repository) -> Dict[str, str]:
    """Map fracture id to checked-out branch from git's worktree registry.

    Detached or unparsable worktrees map to "unknown". A failing git command
    yields an empty map.
    """
    try:
        output = git_output(repository.root, "worktree", "list", "--porcelain")
    except git.exc.GitError as e:
        logger.debug(f"Could not list worktrees: {git_error_message(e)}")
        return {}

    fractures_dir = str(repository.fractures_dir)
    fracture_dirs = [fractures_dir]
    resolved = os.path.realpath(fractures_dir)
    if resolved != fractures_dir:
        fracture_dirs.append(resolved)

    worktrees: Dict[str, str] = {}
    for record in parse_worktree_porcelain(output):
        fracture_id = _fracture_id_for(record.path, fracture_dirs)
        if fracture_id is None:
            continue
        worktrees[fracture_id] = record.branch or UNKNOWN_BRANCH

    logger.debug(f"Found {len(worktrees)} fracture worktrees")
    return worktrees


def list_fractures(repository: Repository) -> List[Fracture]:
    """Enumerate a repository's fractures, ordered by id.

    Every subdirectory of the fracture directory is a fracture, whether or not
    git still tracks it; untracked ones report the branch "unknown".

    Returns:
        Fractures (empty when the fracture directory does not exist yet)
    """
    fractures_dir = repository.fractures_dir
    if not fractures_dir.is_dir():
        return []

    with os.scandir(fractures_dir) as entries:
        ids = sorted(entry.name for entry in entries if entry.is_dir())
    if not ids:
        return []

    worktrees = get_worktrees_by_id(repository)
    return [
        Fracture(
            id=fracture_id,
            path=Path(fractures_dir) / fracture_id,
            branch=worktrees.get(fracture_id, UNKNOWN_BRANCH),
            repository=repository,
        )
        for fracture_id in ids
    ]


def find_fracture(repository: Repository, fracture_id: str) -> Fracture:
    """Look up a fracture by id.

    Raises:
        FractureNotFoundError: If no fracture directory has that id
    """
    for fracture in list_fractures(repository):
        if fracture.id == fracture_id:
            return fracture
    raise FractureNotFoundError(fracture_id)
