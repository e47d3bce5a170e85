"""Repository detection for fracture."""

import os
from pathlib import Path
from typing import List, Optional, Union

import git

from fracture.constants import FRACTURE_DIR
from fracture.models.repository import Repository
from fracture.utils.gitcmd import git_error_message, git_output
from fracture.logging_config import get_logger

logger = get_logger(__name__)


def detect_repository(
    cwd: Optional[Union[str, Path]] = None,
    fracture_home: Optional[Path] = None,
) -> Optional[Repository]:
    """Detect the git repository enclosing cwd.

    The name is derived from the common git directory so that running from
    inside a fracture yields the original repository's name.

    Args:
        cwd: Directory to start from (defaults to the current directory)
        fracture_home: Root of all fracture directories (defaults to ~/.fracture)

    Returns:
        Repository, or None when cwd is not inside a git repository or git
        is unavailable
    """
    cwd = Path(cwd) if cwd is not None else Path(os.getcwd())
    fracture_home = fracture_home or Path.home() / FRACTURE_DIR

    try:
        toplevel = git_output(cwd, "rev-parse", "--show-toplevel")
        common_dir = git_output(cwd, "rev-parse", "--git-common-dir")
    except git.exc.GitError as e:
        logger.debug(f"Not a git repository ({cwd}): {git_error_message(e)}")
        return None
    except OSError as e:
        logger.debug(f"Could not run git in {cwd}: {e}")
        return None

    if not toplevel or not common_dir:
        return None

    if os.path.isabs(common_dir):
        # Absolute common dir points back at the primary checkout's .git
        root = Path(common_dir).parent
        name = root.name
    else:
        root = Path(toplevel)
        name = root.name

    logger.debug(f"Detected repository {name} at {root}")
    return Repository(name=name, root=root, fracture_home=fracture_home)


def list_branches(repository: Repository) -> List[str]:
    """Get the repository's local branch names.

    Returns:
        Branch names in git's order; empty if git fails
    """
    try:
        output = git_output(repository.root, "branch", "--format=%(refname:short)")
    except git.exc.GitError as e:
        logger.debug(f"Could not list branches: {git_error_message(e)}")
        return []
    return [line.strip() for line in output.splitlines() if line.strip()]
