"""Dependency installer: detects the project's ecosystem and fetches its dependencies."""

from pathlib import Path
from typing import Callable, Dict, List, Optional

from fracture.constants import (
    CARGO_TOML,
    DEFAULT_NODE_INSTALL,
    GO_DOWNLOAD,
    GO_MOD,
    NODE_LOCKFILES,
    PACKAGE_JSON,
    RUST_FETCH,
    STATUS_MESSAGES,
)
from fracture.models.fracture import Fracture
from fracture.models.project import Ecosystem
from fracture.models.repository import Repository
from fracture.services.environment import copy_node_modules
from fracture.services.node_version import detect_node_version, wrap_with_version_manager
from fracture.ui.status import StatusSink
from fracture.utils import process
from fracture.logging_config import get_logger

logger = get_logger(__name__)

_MARKERS = [
    (PACKAGE_JSON, Ecosystem.NODE),
    (CARGO_TOML, Ecosystem.RUST),
    (GO_MOD, Ecosystem.GO),
]


def detect_ecosystem(project_dir: Path) -> Ecosystem:
    """Identify the project's ecosystem by its marker file.

    package.json wins over Cargo.toml, which wins over go.mod.
    """
    for marker, ecosystem in _MARKERS:
        if (Path(project_dir) / marker).is_file():
            return ecosystem
    return Ecosystem.NONE


def node_install_command(project_dir: Path) -> List[str]:
    """Pick the Node package manager from the lockfile present, defaulting to npm."""
    for lockfile, install_cmd in NODE_LOCKFILES:
        if (Path(project_dir) / lockfile).exists():
            return list(install_cmd)
    return list(DEFAULT_NODE_INSTALL)


def _run_install(cmd: List[str], cwd: Path) -> Optional[str]:
    result = process.run(cmd, cwd=cwd)
    if result.success:
        return None
    return result.stderr or f"{cmd[0]} exited with status {result.returncode}"


def _install_node(repository: Repository, fracture: Fracture, status: StatusSink) -> Optional[str]:
    status.update(STATUS_MESSAGES["node_modules"])
    copy_node_modules(repository, fracture)

    status.update(STATUS_MESSAGES["install"])
    cmd = node_install_command(fracture.path)
    cmd = wrap_with_version_manager(cmd, detect_node_version(fracture.path))
    return _run_install(cmd, fracture.path)


def _install_rust(repository: Repository, fracture: Fracture, status: StatusSink) -> Optional[str]:
    status.update(STATUS_MESSAGES["install"])
    return _run_install(list(RUST_FETCH), fracture.path)


def _install_go(repository: Repository, fracture: Fracture, status: StatusSink) -> Optional[str]:
    status.update(STATUS_MESSAGES["install"])
    return _run_install(list(GO_DOWNLOAD), fracture.path)


def _install_nothing(repository: Repository, fracture: Fracture, status: StatusSink) -> Optional[str]:
    return None


Installer = Callable[[Repository, Fracture, StatusSink], Optional[str]]

# Every Ecosystem member must have an entry
INSTALLERS: Dict[Ecosystem, Installer] = {
    Ecosystem.NODE: _install_node,
    Ecosystem.RUST: _install_rust,
    Ecosystem.GO: _install_go,
    Ecosystem.NONE: _install_nothing,
}


def install_deps(repository: Repository, fracture: Fracture, status: StatusSink) -> Optional[str]:
    """Install the fracture's dependencies with its ecosystem's tool.

    Returns:
        None on success (or when there is nothing to install), otherwise the
        tool's error output
    """
    ecosystem = detect_ecosystem(fracture.path)
    logger.info(f"Detected {ecosystem.value} project in {fracture.id}")
    return INSTALLERS[ecosystem](repository, fracture, status)
