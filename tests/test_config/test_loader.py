"""
Tests for tidyimports.config.loader module.

Coverage targets:
- config_from_dict: validation, defaults, camelCase keys, regex literals
- load_config: TOML, YAML, JSON, pyproject.toml and package.json
- find_config: discovery in parent directories and merging
- merge_config_dicts: nested merging
"""
from __future__ import annotations

import json
import re
import textwrap
from pathlib import Path

import pytest

from tidyimports.config.loader import (
    compile_pattern,
    config_from_dict,
    find_config,
    find_config_files,
    load_config,
    merge_config_dicts,
)
from tidyimports.config.models import DEFAULT_CONFIG, ImportOrder
from tidyimports.core.errors import ConfigError


# =============================================================================
# compile_pattern Tests
# =============================================================================

class TestCompilePattern:
    """Tests for compile_pattern()."""

    def test_plain_pattern(self):
        pattern = compile_pattern("^react$")

        assert pattern.search("react")
        assert not pattern.search("React")

    def test_js_literal_with_flags(self):
        pattern = compile_pattern("/^react$/i")

        assert pattern.search("React")

    def test_js_literal_ignored_flags(self):
        assert compile_pattern("/^@app\\//gu").search("@app/core")

    def test_js_literal_with_slash_inside(self):
        assert compile_pattern("/^@scope/pkg$/").search("@scope/pkg")

    @pytest.mark.parametrize("source", ["/x/q", "(unclosed", 42])
    def test_invalid_patterns(self, source):
        with pytest.raises(ConfigError):
            compile_pattern(source)

    def test_compiled_pattern_passed_through(self):
        pattern = re.compile("x")

        assert compile_pattern(pattern) is pattern


# =============================================================================
# config_from_dict Tests
# =============================================================================

class TestConfigFromDict:
    """Tests for config_from_dict()."""

    @pytest.mark.parametrize("data", [None, {}])
    def test_empty_config_is_default(self, data):
        config = config_from_dict(data)

        assert config == DEFAULT_CONFIG
        assert config.default_group.name == "Misc"

    def test_groups(self):
        config = config_from_dict({
            "groups": [
                {"name": "React", "order": 1, "match": "/^react/"},
                {"name": "Other", "order": 2, "default": True},
            ],
        })

        assert [g.name for g in config.groups] == ["React", "Other"]
        assert config.group("React").matches("react-dom")
        assert config.default_group.name == "Other"

    def test_group_without_pattern_is_default(self):
        config = config_from_dict({"groups": [{"name": "Everything"}]})

        assert config.default_group.name == "Everything"

    def test_fallback_default_group_added(self):
        config = config_from_dict({"groups": [{"name": "React", "match": "^react"}]})

        assert [g.name for g in config.groups] == ["React", "Misc"]
        assert config.default_group.name == "Misc"

    def test_camel_case_keys(self):
        config = config_from_dict({
            "groups": [
                {"name": "Misc", "isDefault": True, "sortOrder": ["react", "react-*"]},
            ],
            "importOrder": {"default": 3, "named": 2, "typeOnly": 1, "sideEffect": 0},
            "format": {"indent": 2, "singleQuote": False, "bracketSpacing": False},
            "excludedFolders": ["dist"],
        })

        assert config.groups[0].sort_order == ("react", "react-*")
        assert config.import_order == ImportOrder(
            default=3, named=2, type_default=1, type_named=1, side_effect=0
        )
        assert config.format.indent == 2
        assert config.format.quote == '"'
        assert not config.format.bracket_spacing
        assert config.excluded_folders == ("dist",)

    def test_priority_patterns(self):
        config = config_from_dict({
            "groups": [{"name": "Misc", "default": True, "priority": "^@app"}],
            "priority_patterns": ["^react$", "/^vue$/i"],
        })

        assert [p.pattern for p in config.groups[0].priority_patterns] == ["^@app"]
        assert len(config.priority_patterns) == 2

    @pytest.mark.parametrize("data,message", [
        ({"groups": [{"name": "A"}, {"name": "A", "match": "x"}]}, "Duplicate group names"),
        ({"groups": [{"name": "A"}, {"name": "B"}]}, "Only one default group"),
        ({"groups": [{"name": "A", "match": "(x"}]}, "Invalid regex"),
        ({"groups": [{"name": "A", "default": False}]}, "needs a 'match' pattern"),
        ({"groups": [{"order": 1}]}, "valid name"),
        ({"groups": "React"}, "must be a list"),
        ({"groups": ["React"]}, "must be a mapping"),
        ({"groups": [{"name": "Misc", "match": "x"}]}, "not one"),
        ({"groups": [{"name": "A", "sort_order": 3}]}, "sort_order"),
        ({"import_order": {"named": "first"}}, "import_order.named"),
        ({"import_order": {"default": True}}, "import_order.default"),
        ({"format": {"indent": -1}}, "format.indent"),
        ({"format": {"quote_style": "backtick"}}, "format.quote_style"),
        ({"format": []}, "format"),
    ])
    def test_validation_errors(self, data: dict, message: str):
        with pytest.raises(ConfigError, match=re.escape(message)):
            config_from_dict(data)

    def test_unresolved_orders_are_kept(self):
        """Order resolution happens in the formatter, not in the loader."""
        config = config_from_dict({"groups": [{"name": "A", "order": "soon"}]})

        assert config.groups[0].order == "soon"


# =============================================================================
# load_config Tests
# =============================================================================

class TestLoadConfig:
    """Tests for load_config() across file formats."""

    def test_toml(self, tmp_path: Path):
        path = tmp_path / "tidyimports.toml"
        path.write_text(textwrap.dedent("""\
            [[groups]]
            name = "React"
            order = 0
            match = "/^react/"

            [format]
            indent = 2
        """))

        config = load_config(path)

        assert [g.name for g in config.groups] == ["React", "Misc"]
        assert config.format.indent == 2

    def test_yaml(self, tmp_path: Path):
        path = tmp_path / ".tidyimports.yaml"
        path.write_text(textwrap.dedent("""\
            groups:
              - name: Misc
                default: true
              - name: Local
                match: '^\\.'
            format:
              semicolons: false
        """))

        config = load_config(path)

        assert config.group("Local").matches("./x")
        assert not config.format.semicolons

    def test_empty_yaml_is_default(self, tmp_path: Path):
        path = tmp_path / ".tidyimports.yml"
        path.write_text("")

        assert load_config(path) == DEFAULT_CONFIG

    def test_json(self, tmp_path: Path):
        path = tmp_path / ".tidyimports.json"
        path.write_text(json.dumps({"importOrder": {"sideEffect": 0}}))

        assert load_config(path).import_order.side_effect == 0

    def test_pyproject_tool_table(self, tmp_path: Path):
        path = tmp_path / "pyproject.toml"
        path.write_text(textwrap.dedent("""\
            [project]
            name = "web"

            [tool.tidyimports.format]
            quote_style = "double"
        """))

        assert load_config(path).format.quote_style == "double"

    def test_package_json_key(self, tmp_path: Path):
        path = tmp_path / "package.json"
        path.write_text(json.dumps({"name": "web", "tidyimports": {"format": {"indent": 8}}}))

        assert load_config(path).format.indent == 8

    @pytest.mark.parametrize("name,content", [
        ("pyproject.toml", "[project]\nname = 'web'\n"),
        ("package.json", '{"name": "web"}'),
    ])
    def test_file_without_section(self, tmp_path: Path, name: str, content: str):
        path = tmp_path / name
        path.write_text(content)

        with pytest.raises(ConfigError, match="No tidyimports configuration"):
            load_config(path)

    @pytest.mark.parametrize("name,content", [
        ("tidyimports.toml", "groups = [\n"),
        (".tidyimports.yaml", "groups: [unclosed\n"),
        (".tidyimports.json", "{not json"),
        (".tidyimports.json", "[1, 2]"),
        ("tidyimports.ini", "[groups]\n"),
    ])
    def test_unreadable_files(self, tmp_path: Path, name: str, content: str):
        path = tmp_path / name
        path.write_text(content)

        with pytest.raises(ConfigError):
            load_config(path)

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(ConfigError, match="Failed to read"):
            load_config(tmp_path / "tidyimports.toml")


# =============================================================================
# find_config Tests
# =============================================================================

class TestFindConfig:
    """Tests for configuration discovery."""

    def test_no_config_found(self, tmp_path: Path):
        assert find_config(tmp_path) == DEFAULT_CONFIG

    def test_child_overrides_parent(self, tmp_path: Path):
        (tmp_path / "tidyimports.toml").write_text(textwrap.dedent("""\
            [[groups]]
            name = "React"
            match = "^react"

            [format]
            indent = 2
            semicolons = false
        """))
        child = tmp_path / "packages" / "web"
        child.mkdir(parents=True)
        (child / ".tidyimports.json").write_text(json.dumps({"format": {"indent": 8}}))

        config = find_config(child)

        assert config.format.indent == 8
        assert not config.format.semicolons
        assert config.group("React") is not None

    def test_start_from_file(self, tmp_path: Path):
        (tmp_path / "package.json").write_text(json.dumps({"tidyimports": {"format": {"indent": 3}}}))
        source = tmp_path / "app.ts"
        source.write_text("")

        assert find_config(source).format.indent == 3

    def test_first_file_per_directory_wins(self, tmp_path: Path):
        (tmp_path / "tidyimports.toml").write_text("[format]\nindent = 1\n")
        (tmp_path / ".tidyimports.json").write_text(json.dumps({"format": {"indent": 9}}))

        assert find_config_files(tmp_path) == [tmp_path.resolve() / "tidyimports.toml"]
        assert find_config(tmp_path).format.indent == 1

    def test_files_without_section_skipped(self, tmp_path: Path):
        (tmp_path / "pyproject.toml").write_text("[project]\nname = 'web'\n")
        (tmp_path / "package.json").write_text(json.dumps({"tidyimports": {"format": {"indent": 6}}}))

        assert find_config(tmp_path).format.indent == 6


# =============================================================================
# merge_config_dicts Tests
# =============================================================================

class TestMergeConfigDicts:
    """Tests for merge_config_dicts()."""

    def test_nested_merge(self):
        base = {"format": {"indent": 2, "semicolons": False}, "groups": [{"name": "A"}]}
        override = {"format": {"indent": 4}, "groups": [{"name": "B"}]}

        merged = merge_config_dicts(base, override)

        assert merged == {"format": {"indent": 4, "semicolons": False}, "groups": [{"name": "B"}]}
        assert base["format"]["indent"] == 2
