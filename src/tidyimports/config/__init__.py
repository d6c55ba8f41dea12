"""Configuration for tidyimports.

Provides the configuration model, the group order resolver and loading of
configuration files (TOML, YAML, JSON, ``pyproject.toml``, ``package.json``).
"""
from __future__ import annotations

from tidyimports.config.loader import (
    config_from_dict,
    find_config,
    load_config,
    merge_config_dicts,
)
from tidyimports.config.models import (
    DEFAULT_CONFIG,
    Config,
    FormatOptions,
    Group,
    ImportOrder,
)
from tidyimports.config.order import resolve_group_order

__all__ = [
    "DEFAULT_CONFIG",
    "Config",
    "FormatOptions",
    "Group",
    "ImportOrder",
    "config_from_dict",
    "find_config",
    "load_config",
    "merge_config_dicts",
    "resolve_group_order",
]
