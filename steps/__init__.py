"""Collaborator interface for running pipeline steps, and its implementations."""

from .script_runner import DryRunRunner, ScriptRunner
from .step_interface import StepRunner

__all__ = ["DryRunRunner", "ScriptRunner", "StepRunner"]
