"""Exceptions raised by the mkindex orchestrator."""

import logging

mylogger = logging.getLogger(__name__)


class MkindexError(Exception):
    """Base error with a message and the process exit code it maps to."""

    exit_code = 1

    def __init__(self, message: str = "An mkindex error occurred", log: bool = False):
        self.message = message
        super().__init__(self.message)
        if log:
            mylogger.error(message)


class UsageError(MkindexError):
    """Wrong number of command-line arguments."""


class ConfigError(MkindexError):
    """The config file is missing, malformed, or has no such tree."""


class HomeResolutionError(MkindexError):
    """The tool's own repository root could not be determined."""


class StepFailed(MkindexError):
    """A pipeline step exited with a non-zero status."""

    def __init__(self, step: str, returncode: int, log: bool = False):
        self.step = step
        self.returncode = returncode
        super().__init__(f"Step '{step}' failed with exit code {returncode}", log=log)

    @property
    def exit_code(self) -> int:  # type: ignore[override]
        return self.returncode
