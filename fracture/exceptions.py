"""Custom exceptions for fracture"""

from typing import List, Optional, Tuple


class FractureError(Exception):
    """Base exception for all fracture errors."""
    pass


class RepositoryNotFoundError(FractureError):
    """Exception raised when the working directory is not inside a git repository."""

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or "not in a git repository")


class FractureNotFoundError(FractureError):
    """Exception raised when a named fracture does not exist."""

    def __init__(self, fracture_id: Optional[str] = None, message: Optional[str] = None):
        self.fracture_id = fracture_id
        if message is None:
            message = "fracture not found"
            if fracture_id:
                message = f"fracture '{fracture_id}' not found"
        super().__init__(message)


class NoFracturesError(FractureNotFoundError):
    """Exception raised when a repository has no fractures at all."""

    def __init__(self):
        super().__init__(message="no fractures found")


class NoBranchesError(FractureNotFoundError):
    """Exception raised when a repository has no local branches to pick from."""

    def __init__(self):
        super().__init__(message="no branches found")


class FractureExistsError(FractureError):
    """Exception raised when a fracture with the same id already exists."""

    def __init__(self, fracture_id: str, path: str):
        self.fracture_id = fracture_id
        self.path = path
        super().__init__(
            f"fracture '{fracture_id}' already exists at {path} "
            "(only one fracture per branch is supported)"
        )


class CreationError(FractureError):
    """Exception raised when git fails to add the worktree."""

    def __init__(self, stderr: str):
        self.stderr = stderr
        super().__init__(stderr or "git worktree add failed")


class DeletionError(FractureError):
    """Exception raised when git fails to remove a fracture's worktree."""

    def __init__(self, fracture_id: str, stderr: str):
        self.fracture_id = fracture_id
        self.stderr = stderr
        super().__init__(f"failed to delete {fracture_id}: {stderr}")


class BulkDeletionError(FractureError):
    """Exception raised after `delete --all` when one or more removals failed."""

    def __init__(self, failures: List[Tuple[str, str]]):
        self.failures = failures
        ids = ", ".join(fracture_id for fracture_id, _ in failures)
        super().__init__(f"failed to delete {len(failures)} fracture(s): {ids}")
