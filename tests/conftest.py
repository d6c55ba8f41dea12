"""
Shared pytest fixtures for the tidyimports test suite.

This module provides:
- Sample JavaScript/TypeScript documents
- Pre-configured formatters (default and grouped configuration)
- Temporary project directories with source and configuration files

Fixture Naming Convention:
- tmp_* : Fixtures that create temporary directories/files
- sample_* : Fixtures that provide sample content strings
- *_config : Fixtures that provide Config objects
- *_formatter : Fixtures that provide configured ImportFormatter instances
"""
from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from tidyimports import Config, ImportFormatter, config_from_dict


# =============================================================================
# Sample Source Fixtures
# =============================================================================

@pytest.fixture
def sample_react_component() -> str:
    """
    A React component with unorganized imports.

    Contains:
    - Duplicate named imports from 'react'
    - A default import from 'react' declared after the named ones
    - Relative imports mixed with package imports
    """
    return textwrap.dedent("""\
        import { useEffect } from 'react';
        import { Button } from './components/Button';
        import { useState, useCallback } from 'react';
        import React from 'react';
        import axios from 'axios';

        export function App() {
            return null;
        }
    """)


@pytest.fixture
def sample_organized_component() -> str:
    """The component of ``sample_react_component`` once organized with ``grouped_config``."""
    return textwrap.dedent("""\
        // React
        import React    from 'react';
        import {
            useState,
            useEffect,
            useCallback
        }               from 'react';

        // Misc
        import axios from 'axios';

        // Local
        import { Button } from './components/Button';

        export function App() {
            return null;
        }
    """)


@pytest.fixture
def sample_typescript_module() -> str:
    """
    A TypeScript module with type-only and side-effect imports.

    Contains:
    - A license header block comment (must be preserved)
    - Type-only imports, inline type specifiers and a side-effect import
    """
    return textwrap.dedent("""\
        /*
         * Copyright (c) Example Corp.
         */

        import './polyfills';
        import type { Config } from './config';
        import { load, type Loader } from '@app/loader';

        export const run = (config: Config) => load(config);
    """)


# =============================================================================
# Configuration Fixtures
# =============================================================================

@pytest.fixture
def grouped_config() -> Config:
    """Three groups: React first, then Misc (default), then relative paths."""
    return config_from_dict({
        "groups": [
            {"name": "React", "order": 0, "match": "/^react/"},
            {"name": "Misc", "order": 1, "default": True},
            {"name": "Local", "order": 2, "match": r"^\."},
        ],
    })


@pytest.fixture
def default_formatter() -> ImportFormatter:
    """Formatter with the built-in default configuration."""
    return ImportFormatter()


@pytest.fixture
def grouped_formatter(grouped_config: Config) -> ImportFormatter:
    """Formatter using ``grouped_config``."""
    return ImportFormatter(grouped_config)


# =============================================================================
# Temporary Project Fixtures
# =============================================================================

@pytest.fixture
def tmp_project(tmp_path: Path, sample_react_component: str) -> Path:
    """
    Create a small project directory.

    Layout:
    - tidyimports.toml with the React/Misc/Local groups
    - src/App.tsx (unorganized)
    - src/index.ts (already organized)
    - node_modules/lib/index.js (must never be touched)
    - build/out.js (excluded through configuration)
    """
    (tmp_path / "tidyimports.toml").write_text(textwrap.dedent("""\
        excluded_folders = ["build"]

        [[groups]]
        name = "React"
        order = 0
        match = "/^react/"

        [[groups]]
        name = "Misc"
        order = 1
        default = true

        [[groups]]
        name = "Local"
        order = 2
        match = "^\\\\."
    """))

    src = tmp_path / "src"
    src.mkdir()
    (src / "App.tsx").write_text(sample_react_component)
    (src / "index.ts").write_text("// Local\nimport { App } from './App';\n\nApp();\n")

    lib = tmp_path / "node_modules" / "lib"
    lib.mkdir(parents=True)
    (lib / "index.js").write_text("import b from 'b';\nimport a from 'a';\n")

    build = tmp_path / "build"
    build.mkdir()
    (build / "out.js").write_text("import b from 'b';\nimport a from 'a';\n")

    return tmp_path
