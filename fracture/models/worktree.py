"""Worktree data models."""

from dataclasses import dataclass
from typing import Optional


@dataclass
class WorktreeRecord:
    """One entry of `git worktree list --porcelain`."""

    path: str
    head: str = ""
    branch: Optional[str] = None  # None when detached or not reported
    detached: bool = False
    prunable: bool = False  # git no longer finds the directory

    def __str__(self) -> str:
        """String representation of worktree."""
        branch = self.branch or "(detached)"
        return f"{branch} @ {self.path}"
