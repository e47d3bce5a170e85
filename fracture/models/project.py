"""Project ecosystem models used by the dependency installer."""

from dataclasses import dataclass
from enum import Enum


class Ecosystem(Enum):
    """Dependency ecosystem of a checkout, identified by its marker file."""
    NODE = "node"
    RUST = "rust"
    GO = "go"
    NONE = "none"


@dataclass(frozen=True)
class NodeVersionPin:
    """A Node version pinned by a file in the project root."""
    version: str
    source: str  # File the pin was read from
