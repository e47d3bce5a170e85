"""Data models for fracture."""

from .repository import Repository
from .fracture import Fracture
from .worktree import WorktreeRecord
from .project import Ecosystem, NodeVersionPin

__all__ = [
    "Repository",
    "Fracture",
    "WorktreeRecord",
    "Ecosystem",
    "NodeVersionPin",
]
