"""Utility functions for fracture.

This package provides utility modules:
- process: running external commands with captured or inherited stdio
- gitcmd: GitPython command helpers
"""

from .process import ProcessResult, run, run_interactive
from .gitcmd import git_error_message, git_output

__all__ = [
    "ProcessResult",
    "run",
    "run_interactive",
    "git_error_message",
    "git_output",
]
