"""
Load the configuration of one tree from an index config file.

The config file is JSON (or YAML) with a top-level ``trees`` mapping:

    {
      "mozsearch_path": "/home/ubuntu/mozsearch",
      "trees": {
        "mozilla-central": {
          "index_path": "/index/mozilla-central",
          "files_path": "/index/mozilla-central/git",
          "objdir_path": "/index/mozilla-central/objdir"
        }
      }
    }
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import yaml
from box import Box
from pydantic import ValidationError

from .errors import ConfigError
from .models import TreeConfig

logger = logging.getLogger(__name__)


def load_config_document(config_file: str | Path) -> Box:
    """Parse the config file and return it as a Box with a ``trees`` mapping."""
    path = Path(config_file).expanduser().resolve()
    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Cannot read config file {path}: {exc}") from exc
    try:
        raw = _load_text_payload(text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ConfigError(f"Cannot parse config file {path}: {exc}") from exc
    if not isinstance(raw, dict):
        raise ConfigError(f"Config file {path} must contain a mapping at the top level")
    if not isinstance(raw.get("trees"), dict):
        raise ConfigError(f"Config file {path} must contain a 'trees' mapping")
    # YAML reads unquoted keys like 2024 as ints; tree names are always strings
    raw["trees"] = {str(k): v for k, v in raw["trees"].items()}
    logger.debug(f"Loaded config {path} with trees: {sorted(raw['trees'])}")
    return Box(raw)


def load_tree_config(config_file: str | Path, tree_name: str) -> TreeConfig:
    """
    Return the validated configuration of ``tree_name``.

    Raises:
        ConfigError: if the file is unusable or the tree is unknown/invalid.
    """
    document = load_config_document(config_file)
    if tree_name not in document.trees:
        known = ", ".join(sorted(document.trees)) or "none"
        raise ConfigError(f"Unknown tree '{tree_name}' in {config_file} (known trees: {known})")
    entry = document.trees[tree_name]
    if not isinstance(entry, dict):
        raise ConfigError(f"Tree '{tree_name}' in {config_file} must be a mapping")
    try:
        return TreeConfig.model_validate({**entry.to_dict(), "name": tree_name})
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration for tree '{tree_name}': {exc}") from exc


def _load_text_payload(raw: str) -> Any:
    """Interpret raw text as JSON first, falling back to YAML."""
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return yaml.safe_load(raw)
