"""Core orchestrator package exposing the mkindex pipeline and its models."""

from .config import load_tree_config
from .errors import ConfigError, HomeResolutionError, MkindexError, StepFailed, UsageError
from .home import resolve_home
from .models import Invocation, TreeConfig
from .pipeline import Pipeline, RunContext, Step, StepResult, default_steps, run_mkindex

__all__ = [
    "ConfigError",
    "HomeResolutionError",
    "Invocation",
    "MkindexError",
    "Pipeline",
    "RunContext",
    "Step",
    "StepFailed",
    "StepResult",
    "TreeConfig",
    "UsageError",
    "default_steps",
    "load_tree_config",
    "resolve_home",
    "run_mkindex",
]
