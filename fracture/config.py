"""Configuration handling for fracture"""

import os
from dataclasses import dataclass, field
from pathlib import Path

from fracture.constants import DEFAULT_SHELL, FRACTURE_DIR, FRACTURE_HOME_ENV


def _default_fracture_home() -> Path:
    return Path.home() / FRACTURE_DIR


@dataclass
class Config:
    """Configuration for fracture with validation."""

    # Where per-repository fracture directories live
    fracture_home: Path = field(default_factory=_default_fracture_home)

    # Shell spawned when entering a fracture
    shell: str = DEFAULT_SHELL

    # Environment replication
    install_deps: bool = True
    copy_env: bool = True

    # Output
    verbose: bool = False
    debug: bool = False

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate_fracture_home()
        self._validate_shell()

    def _validate_fracture_home(self):
        """Validate fracture_home is an absolute path."""
        if not self.fracture_home or not str(self.fracture_home).strip():
            raise ValueError("fracture_home cannot be empty")
        self.fracture_home = Path(self.fracture_home).expanduser()
        if not self.fracture_home.is_absolute():
            raise ValueError(f"fracture_home must be absolute, got '{self.fracture_home}'")

    def _validate_shell(self):
        """Fall back to the POSIX shell when no shell is configured."""
        if not self.shell or not self.shell.strip():
            self.shell = DEFAULT_SHELL
        self.shell = self.shell.strip()

    @classmethod
    def from_env(cls, **overrides) -> "Config":
        """Create Config from the process environment.

        Reads FRACTURE_HOME and SHELL; keyword arguments take precedence.
        """
        values = {}
        home_override = os.environ.get(FRACTURE_HOME_ENV)
        if home_override:
            values["fracture_home"] = Path(home_override)
        values["shell"] = os.environ.get("SHELL") or DEFAULT_SHELL
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)

    def to_dict(self) -> dict:
        """Convert config to dictionary for debug output."""
        return {
            "fracture_home": str(self.fracture_home),
            "shell": self.shell,
            "install_deps": self.install_deps,
            "copy_env": self.copy_env,
            "verbose": self.verbose,
            "debug": self.debug,
        }
