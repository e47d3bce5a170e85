"""Services for fracture."""

from .repository_locator import detect_repository, list_branches
from .registry import find_fracture, get_worktrees_by_id, list_fractures, parse_worktree_porcelain
from .factory import create_fracture, fracture_id_for_branch, link_upstream
from .environment import copy_env_files, copy_node_modules, find_env_files
from .installer import detect_ecosystem, install_deps, node_install_command
from .node_version import detect_node_version, wrap_with_version_manager

__all__ = [
    "detect_repository",
    "list_branches",
    "find_fracture",
    "get_worktrees_by_id",
    "list_fractures",
    "parse_worktree_porcelain",
    "create_fracture",
    "fracture_id_for_branch",
    "link_upstream",
    "copy_env_files",
    "copy_node_modules",
    "find_env_files",
    "detect_ecosystem",
    "install_deps",
    "node_install_command",
    "detect_node_version",
    "wrap_with_version_manager",
]
