"""
builderdocs Configuration
=========================

YAML-based configuration with sensible defaults.
Loads from builderdocs.yaml if present, otherwise uses built-in defaults.
"""

from __future__ import annotations

from pathlib import Path

import yaml

_DEFAULTS = {
    "sources": {
        "dirs": [],
        "fallback_to_module_file": True,
    },
    "catalog": {
        "step_catalog": None,
    },
    "vocabulary": {},
    "links": {
        "builderdocs.vocabulary.ActionBuilderFactory": "index.html#actions",
        "builderdocs.vocabulary.ProcessorBuilderFactory": "index.html#processors",
        "builderdocs.vocabulary.HttpProcessorBuilderFactory": "index.html#processors",
    },
    "output": {
        "dir": "docs/reference",
        "title": "Reference",
        "link_suffix": ".html",
    },
    "logging": {
        "console_verbosity": "info",
    },
}

# Sections replaced as a whole rather than merged key by key
_REPLACED = {"links"}


def load_config(path: str | Path = "builderdocs.yaml") -> dict:
    """Load configuration from YAML file, merging with defaults.

    Args:
        path: Path to YAML config file. If relative, resolved from CWD.

    Returns:
        Merged config dict with all sections populated.
    """
    config = {k: dict(v) for k, v in _DEFAULTS.items()}
    config_path = Path(path)
    if config_path.exists():
        with open(config_path, encoding="utf-8") as f:
            user = yaml.safe_load(f) or {}
        for section, values in user.items():
            if section in config and isinstance(values, dict) and section not in _REPLACED:
                config[section].update(values)
            else:
                config[section] = values
    return config
