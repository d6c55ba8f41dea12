"""Loading and validation of configuration files.

Supported sources, looked up in this order by :func:`find_config`:

- ``tidyimports.toml`` / ``.tidyimports.toml``
- ``.tidyimports.yaml`` / ``.tidyimports.yml``
- ``.tidyimports.json``
- ``pyproject.toml`` with a ``[tool.tidyimports]`` table
- ``package.json`` with a ``"tidyimports"`` key

Keys may be written in snake_case or in the camelCase used by JavaScript
tooling (``isDefault``, ``importOrder``, ``singleQuote``...).

Example (TOML)::

    [[groups]]
    name = "React"
    order = 1
    match = "/^react/i"

    [[groups]]
    name = "Misc"
    default = true

    [import_order]
    default = 0
    named = 1
    type_only = 2
    side_effect = 3

    [format]
    indent = 4
    single_quote = true
"""
from __future__ import annotations

import json
import logging
import re
import sys
from pathlib import Path
from typing import Any, Mapping

import yaml

from tidyimports.config.models import (
    DEFAULT_GROUP_NAME,
    Config,
    FormatOptions,
    Group,
    ImportOrder,
)
from tidyimports.core.errors import ConfigError

# Python 3.11+ has tomllib built-in
if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

logger = logging.getLogger(__name__)

TOOL_KEY = "tidyimports"

CONFIG_FILE_NAMES = (
    "tidyimports.toml",
    ".tidyimports.toml",
    ".tidyimports.yaml",
    ".tidyimports.yml",
    ".tidyimports.json",
    "pyproject.toml",
    "package.json",
)

_REGEX_FLAGS = {"i": re.IGNORECASE, "m": re.MULTILINE, "s": re.DOTALL}
# JavaScript flags with no bearing on a single search.
_IGNORED_FLAGS = set("guyd")

_CAMEL = re.compile(r"(?<!^)(?=[A-Z])")


def _snake(key: str) -> str:
    return _CAMEL.sub("_", key).lower()


def _normalize_keys(data: Any) -> Any:
    if isinstance(data, Mapping):
        return {_snake(str(k)): _normalize_keys(v) for k, v in data.items()}
    if isinstance(data, list):
        return [_normalize_keys(v) for v in data]
    return data


def compile_pattern(source: str | re.Pattern[str]) -> re.Pattern[str]:
    """Compile a plain regex or a JavaScript literal such as ``/^@app/i``.

    Raises
    ------
    ConfigError
        If the pattern is not a valid regular expression or uses an unknown
        flag.

    Examples
    --------
    >>> compile_pattern("/^react$/i").flags & re.IGNORECASE != 0
    True
    """
    if isinstance(source, re.Pattern):
        return source
    if not isinstance(source, str):
        raise ConfigError(f"Pattern must be a string, got {type(source).__name__}")

    pattern, flags = source, 0
    literal = re.fullmatch(r"/(.*)/([a-z]*)", source, re.DOTALL)
    if literal:
        pattern = literal.group(1)
        for flag in literal.group(2):
            if flag in _REGEX_FLAGS:
                flags |= _REGEX_FLAGS[flag]
            elif flag not in _IGNORED_FLAGS:
                raise ConfigError(f"Invalid regex flag {flag!r} in pattern {source!r}")
    try:
        return re.compile(pattern, flags)
    except re.error as e:
        raise ConfigError(f"Invalid regex pattern {source!r}: {e}") from e


def _patterns(value: Any, where: str) -> tuple[re.Pattern[str], ...]:
    if value is None:
        return ()
    if isinstance(value, (str, re.Pattern)):
        value = [value]
    if not isinstance(value, list):
        raise ConfigError(f"{where} must be a pattern or a list of patterns")
    return tuple(compile_pattern(v) for v in value)


def _group_from_dict(data: Mapping[str, Any]) -> Group:
    name = data.get("name")
    if not isinstance(name, str) or not name.strip():
        raise ConfigError(f"Group without a valid name: {dict(data)!r}")

    pattern = data.get("match", data.get("pattern"))
    if "default" in data:
        is_default = bool(data["default"])
    elif "is_default" in data:
        is_default = bool(data["is_default"])
    else:
        is_default = pattern is None

    sort_order = data.get("sort_order")
    if isinstance(sort_order, list):
        sort_order = tuple(str(p) for p in sort_order)
    elif sort_order is not None and sort_order != "alphabetic":
        raise ConfigError(f"Group {name!r}: sort_order must be 'alphabetic' or a list")

    if pattern is None and not is_default:
        raise ConfigError(f"Group {name!r} needs a 'match' pattern or 'default = true'")

    return Group(
        name=name,
        order=data.get("order"),
        pattern=compile_pattern(pattern) if pattern is not None else None,
        is_default=is_default,
        priority_patterns=_patterns(data.get("priority"), f"Group {name!r} priority"),
        sort_order=sort_order,
    )


def _import_order_from_dict(data: Mapping[str, Any]) -> ImportOrder:
    base = ImportOrder()
    values = {
        "default": data.get("default", base.default),
        "named": data.get("named", base.named),
        "type_default": data.get("type_default", data.get("type_only", base.type_default)),
        "type_named": data.get("type_named", data.get("type_only", base.type_named)),
        "side_effect": data.get("side_effect", base.side_effect),
    }
    for key, value in values.items():
        if not isinstance(value, int) or isinstance(value, bool):
            raise ConfigError(f"import_order.{key} must be an integer, got {value!r}")
    return ImportOrder(**values)


def _format_from_dict(data: Mapping[str, Any]) -> FormatOptions:
    base = FormatOptions()
    indent = data.get("indent", base.indent)
    if not isinstance(indent, int) or isinstance(indent, bool) or indent < 0:
        raise ConfigError(f"format.indent must be a non-negative integer, got {indent!r}")

    quote_style = data.get("quote_style")
    if quote_style is None:
        single = data.get("single_quote", True)
        quote_style = "single" if single else "double"
    if quote_style not in ("single", "double"):
        raise ConfigError(f"format.quote_style must be 'single' or 'double', got {quote_style!r}")

    return FormatOptions(
        indent=indent,
        quote_style=quote_style,
        semicolons=bool(data.get("semicolons", base.semicolons)),
        bracket_spacing=bool(data.get("bracket_spacing", base.bracket_spacing)),
    )


def config_from_dict(data: Mapping[str, Any] | None) -> Config:
    """Build a validated :class:`Config` from plain data.

    Raises
    ------
    ConfigError
        On duplicate group names, several default groups, invalid patterns
        or malformed option values.
    """
    data = _normalize_keys(data or {})
    if not isinstance(data, Mapping):
        raise ConfigError("Configuration must be a mapping")

    raw_groups = data.get("groups")
    if raw_groups is None:
        groups = list(Config().groups)
    elif not isinstance(raw_groups, list):
        raise ConfigError("'groups' must be a list")
    else:
        groups = [_group_from_dict(g) for g in raw_groups if _check_mapping(g, "Each group")]

    names = [g.name for g in groups]
    duplicates = sorted({n for n in names if names.count(n) > 1})
    if duplicates:
        raise ConfigError(f"Duplicate group names: {', '.join(duplicates)}")

    defaults = [g.name for g in groups if g.is_default]
    if len(defaults) > 1:
        raise ConfigError(f"Only one default group is allowed, found: {', '.join(defaults)}")
    if not defaults:
        if DEFAULT_GROUP_NAME in names:
            raise ConfigError(f"No default group, and {DEFAULT_GROUP_NAME!r} is not one")
        logger.debug("No default group configured, adding %r", DEFAULT_GROUP_NAME)
        groups.append(Group(DEFAULT_GROUP_NAME, is_default=True))

    return Config(
        groups=tuple(groups),
        import_order=_import_order_from_dict(_section(data, "import_order")),
        format=_format_from_dict(_section(data, "format")),
        priority_patterns=_patterns(data.get("priority_patterns"), "priority_patterns"),
        excluded_folders=tuple(str(f) for f in data.get("excluded_folders") or ()),
    )


def _check_mapping(value: Any, what: str) -> bool:
    if not isinstance(value, Mapping):
        raise ConfigError(f"{what} must be a mapping, got {value!r}")
    return True


def _section(data: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    value = data.get(key)
    if value is None:
        return {}
    _check_mapping(value, f"{key!r}")
    return value


def merge_config_dicts(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Merge two raw configs; nested tables merge, other values are replaced."""
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, Mapping) and isinstance(merged.get(key), Mapping):
            merged[key] = merge_config_dicts(merged[key], value)
        else:
            merged[key] = value
    return merged


def read_config_file(path: Path) -> dict[str, Any] | None:
    """Read the raw configuration stored in ``path``.

    Returns
    -------
    dict | None
        The raw mapping, or None when the file carries no tidyimports
        section (``pyproject.toml`` without the tool table, ``package.json``
        without the key).

    Raises
    ------
    ConfigError
        If the file cannot be read or parsed.
    """
    try:
        if path.suffix == ".toml":
            with open(path, "rb") as f:
                data = tomllib.load(f)
            if path.name == "pyproject.toml":
                data = data.get("tool", {}).get(TOOL_KEY)
        elif path.suffix in (".yaml", ".yml"):
            data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        elif path.suffix == ".json":
            data = json.loads(path.read_text(encoding="utf-8"))
            if path.name == "package.json" and isinstance(data, Mapping):
                data = data.get(TOOL_KEY)
        else:
            raise ConfigError(f"Unsupported configuration format: {path}")
    except (OSError, ValueError, yaml.YAMLError) as e:
        raise ConfigError(f"Failed to read {path}: {e}") from e

    if data is not None and not isinstance(data, Mapping):
        raise ConfigError(f"{path} does not contain a configuration mapping")
    return data


def load_config(path: str | Path) -> Config:
    """Load and validate the configuration file at ``path``."""
    path = Path(path)
    data = read_config_file(path)
    if data is None:
        raise ConfigError(f"No {TOOL_KEY} configuration in {path}")
    logger.debug("Loaded configuration from %s", path)
    return config_from_dict(data)


def find_config_files(start: str | Path) -> list[Path]:
    """Configuration files from the filesystem root down to ``start``.

    At most one file per directory is returned (the first match in
    :data:`CONFIG_FILE_NAMES` that actually carries configuration).
    """
    start = Path(start).resolve()
    if start.is_file():
        start = start.parent
    found: list[Path] = []
    for directory in [start, *start.parents]:
        for name in CONFIG_FILE_NAMES:
            candidate = directory / name
            if candidate.is_file() and read_config_file(candidate) is not None:
                found.append(candidate)
                break
    return list(reversed(found))


def find_config(start: str | Path) -> Config:
    """Discover and merge the configuration that applies at ``start``.

    Files closer to ``start`` override those in parent directories. With no
    file at all, the default configuration is returned.
    """
    merged: dict[str, Any] = {}
    for path in find_config_files(start):
        merged = merge_config_dicts(merged, _normalize_keys(read_config_file(path)))
    return config_from_dict(merged)
