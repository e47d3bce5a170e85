"""Shared constants for fracture."""

from typing import Dict, List, Tuple

# Directory under the user's home holding one folder per repository
FRACTURE_DIR = ".fracture"
FRACTURE_HOME_ENV = "FRACTURE_HOME"

# Branch shown when git's worktree metadata has no branch for a fracture
UNKNOWN_BRANCH = "unknown"

DEFAULT_SHELL = "/bin/sh"
DEFAULT_REMOTE = "origin"

# Environment replication
ENV_FILE_GLOB = ".env*"
ENV_SEARCH_DEPTH = 3
NODE_MODULES = "node_modules"
SKIPPED_DIRS = {NODE_MODULES, ".git"}

# Ecosystem marker files, checked in this order
PACKAGE_JSON = "package.json"
CARGO_TOML = "Cargo.toml"
GO_MOD = "go.mod"

# Lockfile -> install command, checked in this order
NODE_LOCKFILES: List[Tuple[str, List[str]]] = [
    ("pnpm-lock.yaml", ["pnpm", "install"]),
    ("yarn.lock", ["yarn", "install"]),
    ("bun.lockb", ["bun", "install"]),
    ("bun.lock", ["bun", "install"]),
]
DEFAULT_NODE_INSTALL = ["npm", "install"]

RUST_FETCH = ["cargo", "fetch"]
GO_DOWNLOAD = ["go", "mod", "download"]

# Node version pin files, checked in this order
NVMRC = ".nvmrc"
NODE_VERSION_FILE = ".node-version"
TOOL_VERSIONS = ".tool-versions"
TOOL_VERSIONS_NODE_NAMES = ("nodejs", "node")

NVM_DIR_ENV = "NVM_DIR"
NVM_SCRIPT = "nvm.sh"

# Status messages shown while a fracture is being prepared
STATUS_MESSAGES: Dict[str, str] = {
    "prepare": "Preparing your fracture...",
    "env": "Copying environment files...",
    "node_modules": "Copying node modules...",
    "install": "Installing dependencies...",
    "delete": "Deleting fracture...",
    "delete_all": "Deleting all fractures...",
}

ENTER_MESSAGE = "Entered fracture. Type 'exit' to return."
EXIT_MESSAGE = "Exited fracture."
