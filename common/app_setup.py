"""
Reusable logging and console setup for all parts of the project.

Functions:
    setup_logging      - Configure and return a logger.
    set_print_logger   - Set the logger for print_and_log and print_error.
    print_and_log      - Print and log an info message.
    print_command      - Echo a command line before it runs.
    print_error        - Print and log an error message.
"""

import logging
import os
import shlex
from typing import Optional, Sequence

from rich.console import Console

# Module-level variable to hold the logger for print_and_log and print_error
_print_logger: Optional[logging.Logger] = None

# soft_wrap keeps long command lines on one line so they can be copied
console = Console(soft_wrap=True, highlight=False, emoji=False)
err_console = Console(stderr=True, soft_wrap=True, highlight=False, emoji=False)


def setup_logging(app_name: str = "mkindex", loglevel: int = logging.INFO, logfile: Optional[str] = None) -> logging.Logger:
    """
    Set up logging for the application.
    Logs to a file in ~/.<app_name>/log.txt or to a custom logfile.
    Returns the configured logger, already registered for print_and_log.
    """
    logger = logging.getLogger()
    logger.setLevel(loglevel)
    formatter = logging.Formatter('%(asctime)s %(levelname)s %(process)d %(message)s')
    if logfile is None:
        log_dir = os.path.expanduser(f"~/.{app_name}")
        os.makedirs(log_dir, exist_ok=True)
        logfile = os.path.join(log_dir, "log.txt")
    else:
        log_dir = os.path.dirname(os.path.abspath(logfile))
        os.makedirs(log_dir, exist_ok=True)
    handler = logging.FileHandler(logfile)

    # Remove any existing handlers
    for h in logger.handlers[:]:
        logger.removeHandler(h)
        if isinstance(h, logging.FileHandler):
            h.close()

    handler.setFormatter(formatter)
    logger.addHandler(handler)
    set_print_logger(logger)
    logger.debug(f"Logging to {logfile} at level {logging.getLevelName(loglevel)}")
    return logger


def set_print_logger(logger: Optional[logging.Logger]):
    """
    Set the logger to be used by print_and_log and print_error.
    """
    global _print_logger
    _print_logger = logger


def print_and_log(message: str, markup: bool = True):
    """
    Print to console and log as info.
    """
    console.print(message, markup=markup)
    if _print_logger is not None:
        _print_logger.info(message)


def print_command(command: Sequence[str]):
    """
    Echo a command line the way `set -x` does, prefixed with '+'.
    Markup is off: paths may contain square brackets.
    """
    line = "+ " + shlex.join(command)
    console.print(line, markup=False)
    if _print_logger is not None:
        _print_logger.info(line)


def print_error(message: str):
    """
    Print and log an error message (stderr and error level).
    """
    err_console.print(message, style="bold red", markup=False)
    if _print_logger is not None:
        _print_logger.error(message)
