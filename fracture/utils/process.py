"""Process runner used for every non-git external command.

Package managers, version managers, copy tools and the interactive shell all
go through ``run`` / ``run_interactive``. Tests patch these two functions to
simulate toolchains without spawning anything.
"""

import os
import subprocess
from dataclasses import dataclass
from typing import Optional, Sequence, Union

from fracture.logging_config import get_logger

logger = get_logger(__name__)

PathLike = Union[str, os.PathLike]

COMMAND_NOT_FOUND = 127


@dataclass
class ProcessResult:
    """Outcome of a captured command."""

    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def success(self) -> bool:
        return self.returncode == 0


def run(cmd: Sequence[str], cwd: Optional[PathLike] = None) -> ProcessResult:
    """Run a command to completion, capturing stdout and stderr.

    stdin is closed so installers never wait on a prompt. Output that is not
    valid UTF-8 is decoded with replacement characters. If the executable
    does not exist the result carries exit status 127, and any other OS error
    starting it gives status 1, instead of raising.

    subprocess.run kills the child if this call is interrupted, so a
    KeyboardInterrupt or SystemExit in the parent never leaves it running.
    """
    logger.debug(f"Running {' '.join(cmd)} (cwd={cwd})")
    try:
        completed = subprocess.run(
            list(cmd),
            cwd=cwd,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            errors="replace",
        )
    except FileNotFoundError:
        logger.debug(f"Executable not found: {cmd[0]}")
        return ProcessResult(COMMAND_NOT_FOUND, "", f"{cmd[0]}: command not found")
    except OSError as e:
        logger.debug(f"Could not start {cmd[0]}: {e}")
        return ProcessResult(1, "", str(e))

    result = ProcessResult(completed.returncode, completed.stdout.strip(), completed.stderr.strip())
    if not result.success:
        logger.debug(f"{cmd[0]} exited with {result.returncode}: {result.stderr}")
    return result


def run_interactive(cmd: Sequence[str], cwd: Optional[PathLike] = None) -> int:
    """Run a command attached to the current terminal and wait for it to exit."""
    logger.debug(f"Running interactively {' '.join(cmd)} (cwd={cwd})")
    try:
        return subprocess.run(list(cmd), cwd=cwd).returncode
    except FileNotFoundError:
        logger.debug(f"Executable not found: {cmd[0]}")
        return COMMAND_NOT_FOUND
    except OSError as e:
        logger.debug(f"Could not start {cmd[0]}: {e}")
        return 1
