"""Environment replication: env files and node_modules into a new fracture.

All copying here is a convenience. Failures are logged and never raised.
"""

import os
import shutil
import sys
from fnmatch import fnmatch
from pathlib import Path
from typing import List

from fracture.constants import ENV_FILE_GLOB, ENV_SEARCH_DEPTH, NODE_MODULES, SKIPPED_DIRS
from fracture.models.fracture import Fracture
from fracture.models.repository import Repository
from fracture.utils import process
from fracture.logging_config import get_logger

logger = get_logger(__name__)


def find_env_files(root: Path, max_depth: int = ENV_SEARCH_DEPTH) -> List[Path]:
    """Find `.env*` files under root, relative to root.

    Files directly in root are depth 1. node_modules and .git are never
    descended into, nor are symlinked directories.
    """
    matches: List[Path] = []
    root = Path(root)

    for dirpath, dirnames, filenames in os.walk(root):
        rel_dir = Path(dirpath).relative_to(root)
        depth = 0 if rel_dir == Path(".") else len(rel_dir.parts)

        # Prune in place so os.walk skips them
        dirnames[:] = sorted(
            d for d in dirnames
            if d not in SKIPPED_DIRS and not os.path.islink(os.path.join(dirpath, d))
        )
        if depth + 1 >= max_depth:
            dirnames[:] = []

        for filename in sorted(filenames):
            if not fnmatch(filename, ENV_FILE_GLOB):
                continue
            full_path = Path(dirpath) / filename
            if full_path.is_file():
                matches.append(full_path.relative_to(root))

    return matches


def copy_env_files(repository: Repository, fracture: Fracture) -> int:
    """Copy env files from the repository root into the fracture.

    Missing destination directories are not created; those files are skipped.

    Returns:
        Number of files copied
    """
    copied = 0
    try:
        env_files = find_env_files(repository.root)
    except OSError as e:
        logger.debug(f"Could not search for env files in {repository.root}: {e}")
        return 0

    for relative_path in env_files:
        src = repository.root / relative_path
        dst = fracture.path / relative_path
        if not dst.parent.is_dir():
            logger.debug(f"Skipping {relative_path}: {dst.parent} does not exist in fracture")
            continue
        try:
            shutil.copy2(src, dst)
            copied += 1
            logger.debug(f"Copied {relative_path}")
        except OSError as e:
            logger.debug(f"Could not copy {relative_path}: {e}")

    logger.info(f"Copied {copied} env file(s) into {fracture.id}")
    return copied


def _clone_copy_command(src: Path, dst: Path) -> List[str]:
    """Pick a copy command that clones file blocks when the filesystem allows."""
    if sys.platform == "darwin":
        # APFS clonefile
        return ["cp", "-Rc", str(src), str(dst)]
    # GNU cp reflinks on btrfs/xfs and silently falls back to a full copy
    return ["cp", "-R", "--reflink=auto", str(src), str(dst)]


def copy_node_modules(repository: Repository, fracture: Fracture) -> bool:
    """Seed the fracture with the repository's node_modules to avoid a cold install.

    Returns:
        True if node_modules was copied
    """
    src = repository.root / NODE_MODULES
    dst = fracture.path / NODE_MODULES

    if not src.is_dir():
        return False
    if dst.exists():
        logger.debug(f"{dst} already exists, not copying node_modules")
        return False

    result = process.run(_clone_copy_command(src, dst))
    if result.success:
        return True

    logger.debug(f"cp failed ({result.stderr}), falling back to copytree")
    try:
        if dst.exists():
            shutil.rmtree(dst)
        shutil.copytree(src, dst, symlinks=True)
        return True
    except OSError as e:
        logger.debug(f"Could not copy node_modules: {e}")
        return False
