"""
script_runner.py
----------------
Runs helper scripts as child processes.

The child inherits stdin/stdout/stderr, so its own diagnostics reach the
user directly. Exit statuses follow the shell: 127 when the program does
not exist, 126 when it cannot be executed, 128+N when killed by signal N.
"""

import logging
import subprocess
from typing import Mapping, Sequence

logger = logging.getLogger(__name__)

NOT_FOUND = 127
NOT_EXECUTABLE = 126


class ScriptRunner:
    """StepRunner that launches the command with subprocess and waits for it."""

    def run(self, command: Sequence[str], env: Mapping[str, str]) -> int:
        try:
            result = subprocess.run(list(command), env=dict(env), check=False)
        except FileNotFoundError:
            logger.error(f"Command not found: {command[0]}")
            return NOT_FOUND
        except OSError as e:
            logger.error(f"Command not executable: {command[0]}: {e}")
            return NOT_EXECUTABLE
        returncode = result.returncode
        if returncode < 0:
            # killed by a signal
            returncode = 128 - returncode
        logger.debug(f"{command[0]} exited with {returncode}")
        return returncode


class DryRunRunner:
    """StepRunner that only records the commands it is asked to run."""

    def __init__(self) -> None:
        self.commands: list[list[str]] = []

    def run(self, command: Sequence[str], env: Mapping[str, str]) -> int:
        self.commands.append(list(command))
        logger.info(f"Dry run, not executing: {' '.join(command)}")
        return 0
