"""
Tests for tidyimports.imports.sorter module.

Coverage targets:
- Specifier order: length first, then alphabetical
- Record order: kind weight, priority, custom sort order, module, index
"""
from __future__ import annotations

import math

import pytest

from tidyimports.config.models import ImportOrder
from tidyimports.imports.models import ImportKind, ParsedImport, Specifier
from tidyimports.imports.sorter import (
    custom_sort_index,
    sort_imports,
    sort_specifiers,
    specifier_sort_key,
)


# =============================================================================
# Specifier Order Tests
# =============================================================================

class TestSpecifierOrder:
    """Tests for specifier_sort_key() and sort_specifiers()."""

    def test_hooks_sorted_by_length(self):
        record = ParsedImport(
            ImportKind.NAMED,
            "react",
            tuple(Specifier(n) for n in ["useEffect", "useState", "useCallback"]),
        )

        assert [str(s) for s in sort_specifiers(record).specifiers] == [
            "useState",
            "useEffect",
            "useCallback",
        ]

    def test_alphabetical_tie_break(self):
        assert sorted(["bb", "ab", "a"], key=specifier_sort_key) == ["a", "ab", "bb"]

    def test_alias_length_counts(self):
        """The rendered text, alias included, is what gets measured."""
        assert specifier_sort_key(Specifier("a", "veryLongName")) > specifier_sort_key(Specifier("zzz"))


# =============================================================================
# custom_sort_index Tests
# =============================================================================

class TestCustomSortIndex:
    """Tests for custom_sort_index()."""

    @pytest.mark.parametrize("module,expected", [
        ("react", 0),
        ("react-dom", 1),
        ("react-router", 1),
        ("@mui/material", 2),
        ("lodash", math.inf),
    ])
    def test_wildcard_patterns(self, module: str, expected: float):
        assert custom_sort_index(module, ("react", "react-*", "@mui/*")) == expected

    @pytest.mark.parametrize("sort_order", [None, "alphabetic", ()])
    def test_no_custom_order(self, sort_order):
        assert custom_sort_index("react", sort_order) == math.inf


# =============================================================================
# sort_imports Tests
# =============================================================================

class TestSortImports:
    """Tests for sort_imports()."""

    def test_kind_weight_first(self):
        records = [
            ParsedImport(ImportKind.SIDE_EFFECT, "a"),
            ParsedImport(ImportKind.TYPE_NAMED, "a", (Specifier("T"),)),
            ParsedImport(ImportKind.NAMED, "a", (Specifier("n"),)),
            ParsedImport(ImportKind.DEFAULT, "z", default_name="Z"),
        ]

        ordered = sort_imports(records, ImportOrder())

        assert [r.kind for r in ordered] == [
            ImportKind.DEFAULT,
            ImportKind.NAMED,
            ImportKind.TYPE_NAMED,
            ImportKind.SIDE_EFFECT,
        ]

    def test_custom_kind_weights(self):
        records = [
            ParsedImport(ImportKind.DEFAULT, "a", default_name="A"),
            ParsedImport(ImportKind.SIDE_EFFECT, "b"),
        ]

        ordered = sort_imports(records, ImportOrder(side_effect=0, default=1))

        assert [r.module for r in ordered] == ["b", "a"]

    def test_priority_before_module_order(self):
        records = [
            ParsedImport(ImportKind.DEFAULT, "a", default_name="A"),
            ParsedImport(ImportKind.DEFAULT, "z", default_name="Z", is_priority=True),
        ]

        assert [r.module for r in sort_imports(records, ImportOrder())] == ["z", "a"]

    def test_module_then_index(self):
        records = [
            ParsedImport(ImportKind.DEFAULT, "b", default_name="B", index=0),
            ParsedImport(ImportKind.DEFAULT, "a", default_name="Y", index=2),
            ParsedImport(ImportKind.DEFAULT, "a", default_name="X", index=1),
        ]

        ordered = sort_imports(records, ImportOrder())

        assert [r.default_name for r in ordered] == ["X", "Y", "B"]

    def test_custom_sort_order_within_kind(self):
        records = [
            ParsedImport(ImportKind.DEFAULT, name, default_name="X")
            for name in ["lodash", "react-dom", "react"]
        ]

        ordered = sort_imports(records, ImportOrder(), ("react", "react-*"))

        assert [r.module for r in ordered] == ["react", "react-dom", "lodash"]

    def test_specifiers_sorted(self):
        record = ParsedImport(ImportKind.NAMED, "x", (Specifier("ccc"), Specifier("a")))

        [ordered] = sort_imports([record], ImportOrder())

        assert [str(s) for s in ordered.specifiers] == ["a", "ccc"]
