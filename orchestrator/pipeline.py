"""
The mkindex pipeline: an ordered list of helper-script steps run fail-fast.

Each step receives the same RunContext, built once from the invocation, the
resolved home and the tree's configuration. The first step that exits
non-zero stops the run with StepFailed carrying that exit code.
"""

from __future__ import annotations

import datetime as _dt
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

from common.app_setup import print_and_log, print_command
from steps import ScriptRunner, StepRunner

from .config import load_tree_config
from .errors import StepFailed
from .home import resolve_home
from .models import Invocation, TreeConfig

logger = logging.getLogger(__name__)

SCRIPTS_DIRNAME = "scripts"


def build_child_env(
    invocation: Invocation,
    home: Path,
    tree: TreeConfig,
    base_env: Optional[Mapping[str, str]] = None,
) -> Dict[str, str]:
    """Return the complete environment handed to every helper process."""
    env = dict(os.environ if base_env is None else base_env)
    env.update(tree.to_env())
    env.update(
        {
            "MOZSEARCH_PATH": str(home),
            "CONFIG_REPO": invocation.config_repo_path,
            "CONFIG_FILE": invocation.config_file,
            "TREE_NAME": invocation.tree_name,
            "PYTHONPATH": str(home / SCRIPTS_DIRNAME),
        }
    )
    return env


@dataclass(frozen=True)
class RunContext:
    invocation: Invocation
    home: Path
    tree: TreeConfig
    env: Mapping[str, str]

    @classmethod
    def build(
        cls,
        invocation: Invocation,
        home: Path,
        tree: TreeConfig,
        base_env: Optional[Mapping[str, str]] = None,
    ) -> "RunContext":
        return cls(
            invocation=invocation,
            home=home,
            tree=tree,
            env=build_child_env(invocation, home, tree, base_env),
        )

    @property
    def scripts_dir(self) -> Path:
        return self.home / SCRIPTS_DIRNAME


ArgsBuilder = Callable[[RunContext], List[str]]


def _no_args(context: RunContext) -> List[str]:
    return []


def _config_and_tree(context: RunContext) -> List[str]:
    return [context.invocation.config_file, context.invocation.tree_name]


@dataclass
class Step:
    """A helper script under ``<home>/scripts`` plus how to call it."""

    name: str
    script: str
    args: ArgsBuilder = _no_args
    enabled: bool = True
    banner: Optional[str] = None

    def command(self, context: RunContext) -> List[str]:
        return [str(context.scripts_dir / self.script), *self.args(context)]


@dataclass
class StepResult:
    """Outcome of one pipeline step."""

    name: str
    status: str
    returncode: Optional[int] = None
    command: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "step": self.name,
            "status": self.status,
            "returncode": self.returncode,
            "command": self.command,
        }


FIND_OBJDIR_FILES = "find-objdir-files"
OBJDIR_MKDIRS = "objdir-mkdirs"
CROSSREF = "crossref"


def default_steps(with_objdir_mkdirs: bool = False) -> List[Step]:
    """The standard indexing sequence. The mkdir step is off unless asked for."""
    return [
        Step(FIND_OBJDIR_FILES, "find-objdir-files.py"),
        Step(OBJDIR_MKDIRS, "objdir-mkdirs.sh", enabled=with_objdir_mkdirs),
        Step(CROSSREF, "crossref.sh", args=_config_and_tree, banner="CROSS REF"),
    ]


def timestamp(now: Optional[_dt.datetime] = None) -> str:
    """Format a time like date(1)."""
    now = now or _dt.datetime.now().astimezone()
    return now.strftime("%a %b %d %H:%M:%S %Z %Y")


class Pipeline:
    """Runs steps in order and stops at the first failure."""

    def __init__(
        self,
        context: RunContext,
        steps: Optional[Sequence[Step]] = None,
        runner: Optional[StepRunner] = None,
    ) -> None:
        self.context = context
        self.steps = list(default_steps() if steps is None else steps)
        self.runner: StepRunner = runner or ScriptRunner()

    def run(self) -> List[StepResult]:
        print_and_log(timestamp(), markup=False)
        results: List[StepResult] = []
        for step in self.steps:
            results.append(self.run_step(step))
        return results

    def run_step(self, step: Step) -> StepResult:
        command = step.command(self.context)
        if not step.enabled:
            logger.info(f"Skipping disabled step {step.name}")
            return StepResult(step.name, "skipped", command=command)
        if step.banner:
            print_and_log(step.banner, markup=False)
        print_command(command)
        returncode = self.runner.run(command, self.context.env)
        if returncode != 0:
            raise StepFailed(step.name, returncode)
        logger.info(f"Step {step.name} completed")
        return StepResult(step.name, "completed", returncode, command)


def run_mkindex(
    invocation: Invocation,
    home_override: str | Path | None = None,
    with_objdir_mkdirs: bool = False,
    runner: Optional[StepRunner] = None,
    base_env: Optional[Mapping[str, str]] = None,
) -> List[StepResult]:
    """
    Resolve home, load the tree configuration and run the indexing steps.

    Raises:
        HomeResolutionError: if the repository root cannot be found.
        ConfigError: if the tree configuration cannot be loaded.
        StepFailed: with the exit code of the first failing step.
    """
    home = resolve_home(home_override)
    logger.info(f"Loading tree '{invocation.tree_name}' from {invocation.config_file}")
    tree = load_tree_config(invocation.config_file, invocation.tree_name)
    context = RunContext.build(invocation, home, tree, base_env)
    pipeline = Pipeline(context, default_steps(with_objdir_mkdirs), runner)
    return pipeline.run()
