"""Node version pin detection and version-manager delegation."""

import os
import shlex
import shutil
from pathlib import Path
from typing import Callable, List, Mapping, Optional

from fracture.constants import (
    NODE_VERSION_FILE,
    NVM_DIR_ENV,
    NVM_SCRIPT,
    NVMRC,
    TOOL_VERSIONS,
    TOOL_VERSIONS_NODE_NAMES,
)
from fracture.models.project import NodeVersionPin
from fracture.logging_config import get_logger

logger = get_logger(__name__)


def _read_first_token(path: Path) -> Optional[str]:
    for line in path.read_text().splitlines():
        line = line.split("#", 1)[0].strip()
        if line:
            return line.split()[0]
    return None


def _read_tool_versions(path: Path) -> Optional[str]:
    for line in path.read_text().splitlines():
        parts = line.split("#", 1)[0].split()
        if len(parts) >= 2 and parts[0] in TOOL_VERSIONS_NODE_NAMES:
            return parts[1]
    return None


_PIN_READERS = [
    (NVMRC, _read_first_token),
    (NODE_VERSION_FILE, _read_first_token),
    (TOOL_VERSIONS, _read_tool_versions),
]


def detect_node_version(project_dir: Path) -> Optional[NodeVersionPin]:
    """Find the Node version pinned in project_dir.

    .nvmrc wins over .node-version, which wins over a `nodejs` entry in
    .tool-versions. Unreadable or empty files are skipped.
    """
    for filename, reader in _PIN_READERS:
        pin_file = Path(project_dir) / filename
        if not pin_file.is_file():
            continue
        try:
            version = reader(pin_file)
        except (OSError, UnicodeDecodeError) as e:
            logger.debug(f"Could not read {pin_file}: {e}")
            continue
        if version:
            logger.debug(f"Node {version} pinned by {filename}")
            return NodeVersionPin(version=version, source=filename)
    return None


def find_nvm_script(env: Optional[Mapping[str, str]] = None) -> Optional[Path]:
    """Locate nvm.sh via $NVM_DIR, falling back to ~/.nvm."""
    env = os.environ if env is None else env
    nvm_dir = env.get(NVM_DIR_ENV)
    candidates = [Path(nvm_dir)] if nvm_dir else []
    candidates.append(Path.home() / ".nvm")
    for candidate in candidates:
        script = candidate / NVM_SCRIPT
        if script.is_file():
            return script
    return None


def _wrap_fnm(version: str, cmd: List[str], which: Callable[[str], Optional[str]]) -> Optional[List[str]]:
    fnm = which("fnm")
    if not fnm:
        return None
    return [fnm, "exec", "--using", version, "--", *cmd]


def _wrap_nvm(
    version: str,
    cmd: List[str],
    which: Callable[[str], Optional[str]],
    env: Optional[Mapping[str, str]] = None,
) -> Optional[List[str]]:
    script = find_nvm_script(env)
    if not script:
        return None
    bash = which("bash") or "bash"
    inner = f". {shlex.quote(str(script))} && nvm exec {shlex.quote(version)} {shlex.join(cmd)}"
    return [bash, "-c", inner]


def _wrap_n(version: str, cmd: List[str], which: Callable[[str], Optional[str]]) -> Optional[List[str]]:
    n = which("n")
    if not n:
        return None
    return [n, "exec", version, *cmd]


def wrap_with_version_manager(
    cmd: List[str],
    pin: Optional[NodeVersionPin],
    which: Optional[Callable[[str], Optional[str]]] = None,
    env: Optional[Mapping[str, str]] = None,
) -> List[str]:
    """Route an install command through the first available Node version manager.

    Managers are tried in order: fnm, nvm, n. Without a pin, or without any
    manager, the command is returned unchanged and runs against the Node on
    PATH.
    """
    if pin is None:
        return cmd
    which = which or shutil.which

    wrappers = [
        ("fnm", lambda: _wrap_fnm(pin.version, cmd, which)),
        ("nvm", lambda: _wrap_nvm(pin.version, cmd, which, env)),
        ("n", lambda: _wrap_n(pin.version, cmd, which)),
    ]
    for name, wrap in wrappers:
        wrapped = wrap()
        if wrapped:
            logger.info(f"Using {name} for Node {pin.version} ({pin.source})")
            return wrapped

    logger.info(f"Node {pin.version} pinned by {pin.source} but no version manager found")
    return cmd
