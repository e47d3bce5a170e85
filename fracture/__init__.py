"""
fracture - Ephemeral git worktrees for working on several branches at once
"""

from .__version__ import __version__
from .core import FractureManager
from .cli.main import main

__all__ = ["FractureManager", "main", "__version__"]
