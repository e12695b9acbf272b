"""
This file is the entry point for the 'mkindex' command-line tool.
Run 'mkindex <config-repo-path> <config-file> <tree-name>' to index one tree.
"""
import logging
from pathlib import Path
from typing import List, Optional

import typer

from common.app_setup import print_and_log, print_error, setup_logging
from orchestrator.errors import MkindexError, UsageError
from orchestrator.models import Invocation
from orchestrator.pipeline import run_mkindex
from steps import DryRunRunner, ScriptRunner

USAGE = "usage: mkindex <config-repo-path> <config-file> <tree-name>"

app = typer.Typer(add_completion=False, help="Build the cross-reference index for one tree.")


def parse_invocation(args: List[str]) -> Invocation:
    """Accept exactly three positional arguments, or raise UsageError."""
    if len(args) != 3:
        raise UsageError(USAGE)
    config_repo_path, config_file, tree_name = args
    return Invocation(config_repo_path=config_repo_path, config_file=config_file, tree_name=tree_name)


@app.command()
def mkindex(
    args: Optional[List[str]] = typer.Argument(None, metavar="<config-repo-path> <config-file> <tree-name>", show_default=False),
    home: Optional[Path] = typer.Option(None, envvar="MKINDEX_HOME", help="Repository root holding scripts/ (default: git toplevel of this tool)"),
    with_objdir_mkdirs: bool = typer.Option(False, "--with-objdir-mkdirs", help="Also run the disabled objdir-mkdirs step"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Echo the commands without running them"),
    log_file: Optional[Path] = typer.Option(None, envvar="MKINDEX_LOGFILE", help="Log file (default: ~/.mkindex/log.txt)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log at DEBUG level"),
):
    """Run the indexing steps for a tree, stopping at the first failure."""
    try:
        invocation = parse_invocation(args or [])
    except UsageError as e:
        print_error(e.message)
        raise typer.Exit(e.exit_code)

    setup_logging(
        app_name="mkindex",
        loglevel=logging.DEBUG if verbose else logging.INFO,
        logfile=str(log_file) if log_file else None,
    )
    runner = DryRunRunner() if dry_run else ScriptRunner()
    try:
        results = run_mkindex(invocation, home, with_objdir_mkdirs, runner)
    except MkindexError as e:
        print_error(e.message)
        raise typer.Exit(e.exit_code)
    if dry_run:
        print_and_log(f"Dry run: {len(runner.commands)} command(s) not executed.", markup=False)
    logging.getLogger(__name__).info(
        "Finished: " + ", ".join(f"{r.name}={r.status}" for r in results)
    )


def main():
    app()


if __name__ == "__main__":
    main()
