"""Pydantic models that capture orchestrator domain concepts."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Invocation(BaseModel):
    """The three positional arguments mkindex is called with."""

    model_config = ConfigDict(frozen=True)

    config_repo_path: str = Field(..., min_length=1)
    config_file: str = Field(..., min_length=1)
    tree_name: str = Field(..., min_length=1)


# tree config key -> exported variable name
TREE_VARIABLES: dict[str, str] = {
    "index_path": "INDEX_ROOT",
    "files_path": "FILES_ROOT",
    "objdir_path": "OBJDIR",
    "git_path": "GIT_ROOT",
    "git_blame_path": "BLAME_ROOT",
    "hg_root": "HG_ROOT",
    "wpt_root": "WPT_ROOT",
    "codesearch_path": "CODESEARCH_PATH",
    "codesearch_port": "CODESEARCH_PORT",
}


class TreeConfig(BaseModel):
    """One entry of the config file's ``trees`` mapping."""

    model_config = ConfigDict(extra="ignore")

    name: str
    index_path: str = Field(..., min_length=1, description="Where index output is written")
    files_path: str = Field(..., min_length=1, description="Checked-out source files")
    objdir_path: str | None = Field(default=None, description="Build output directory")
    git_path: str | None = None
    git_blame_path: str | None = None
    hg_root: str | None = None
    wpt_root: str | None = None
    codesearch_path: str | None = None
    codesearch_port: int | None = Field(default=None, ge=1, le=65535)
    env: dict[str, str] = Field(default_factory=dict, description="Extra variables passed through verbatim")

    @field_validator("env", mode="before")
    @classmethod
    def _stringify_env(cls, value: Any) -> Any:
        if isinstance(value, dict):
            return {str(k): str(v) for k, v in value.items()}
        return value

    def to_env(self) -> dict[str, str]:
        """Return the variables this tree exports to helper processes."""
        exported = {}
        for key, variable in TREE_VARIABLES.items():
            value = getattr(self, key)
            if value is not None:
                exported[variable] = str(value)
        exported.update(self.env)
        return exported


__all__ = [
    "Invocation",
    "TREE_VARIABLES",
    "TreeConfig",
]
