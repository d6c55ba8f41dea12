"""TidyImports class - entry point for organizing imports in files."""
from __future__ import annotations

import logging
from pathlib import Path

from tidyimports.config.loader import find_config
from tidyimports.config.models import Config
from tidyimports.core.diff import generate_diff
from tidyimports.core.errors import TidyImportsError
from tidyimports.core.formatter import ImportFormatter
from tidyimports.core.results import BatchResult, ErrorResult, Result

logger = logging.getLogger(__name__)

SOURCE_SUFFIXES = (".js", ".jsx", ".ts", ".tsx", ".mjs", ".cjs", ".mts", ".cts")

ALWAYS_EXCLUDED = ("node_modules",)


class TidyImports:
    """
    Organize the imports of JavaScript and TypeScript files.

    Parameters
    ----------
    path : str | Path
        A directory (every source file below it) or a single file.
    config : Config | None, optional
        Configuration to use. When omitted, it is discovered from the
        configuration files in ``path`` and its parent directories.
    dry_run : bool, optional
        If True, report what would change without writing any file.
        Defaults to False.

    Examples
    --------
    >>> tidy = TidyImports("src/", dry_run=True)
    >>> result = tidy.organize("src/app.tsx")
    >>> print(result.message)  # [DRY RUN] Would organize imports in src/app.tsx
    >>> print(result.diff)
    """

    def __init__(
        self,
        path: str | Path,
        config: Config | None = None,
        dry_run: bool = False,
    ):
        self.path = Path(path)
        self.dry_run = dry_run
        self._config = config
        self._formatter: ImportFormatter | None = None
        self._files: list[Path] | None = None

    @property
    def root(self) -> Path:
        """Directory that relative paths and excluded folders refer to."""
        if self.path.is_file():
            return self.path.parent.resolve()
        return self.path.resolve()

    @property
    def config(self) -> Config:
        """
        Active configuration, discovered on first access.

        Raises
        ------
        ConfigError
            If a discovered configuration file is invalid.
        """
        if self._config is None:
            self._config = find_config(self.root)
        return self._config

    @property
    def formatter(self) -> ImportFormatter:
        if self._formatter is None:
            self._formatter = ImportFormatter(self.config)
        return self._formatter

    @property
    def files(self) -> list[Path]:
        """Source files in the working set, lazily discovered."""
        if self._files is None:
            self._files = self._discover_files()
        return self._files

    def _discover_files(self) -> list[Path]:
        if self.path.is_file():
            return [self.path.resolve()]
        if not self.path.is_dir():
            return []
        excluded = set(ALWAYS_EXCLUDED) | set(self.config.excluded_folders)
        root = self.path.resolve()
        files = []
        for candidate in sorted(root.rglob("*")):
            if candidate.suffix not in SOURCE_SUFFIXES or not candidate.is_file():
                continue
            relative = candidate.relative_to(root)
            if excluded.intersection(relative.parts[:-1]):
                continue
            files.append(candidate)
        logger.debug("Found %d source files under %s", len(files), root)
        return files

    def _resolve_path(self, path: str | Path) -> Path:
        p = Path(path)
        if p.is_absolute():
            return p
        return self.root / p

    # =========================================================================
    # Operations
    # =========================================================================

    def organize(self, path: str | Path) -> Result:
        """
        Organize the imports of one file.

        Parameters
        ----------
        path : str | Path
            File to organize, absolute or relative to :attr:`root`.

        Returns
        -------
        Result
            ``diff`` holds the unified diff of the change. Unreadable files,
            ambiguous import sections and invalid imports give an
            :class:`ErrorResult` and leave the file untouched.
        """
        return self._organize(self._resolve_path(path), write=not self.dry_run)

    def _organize(self, file_path: Path, write: bool) -> Result:
        try:
            with open(file_path, encoding="utf-8", newline="") as f:
                content = f.read()
        except (OSError, UnicodeDecodeError) as e:
            return ErrorResult(
                message=f"Failed to read {file_path}: {e}",
                exception=e,
                operation="organize",
            )

        try:
            formatted = self.formatter.format(content)
        except TidyImportsError as e:
            return ErrorResult(message=str(e), exception=e, operation="organize")

        if not formatted.success:
            return ErrorResult(
                message=f"Cannot organize imports in {file_path}: {formatted.message}",
                exception=formatted.exception,
                operation="organize",
            )

        if not formatted.changed:
            return Result(
                success=True,
                message=f"Imports already organized in {file_path}",
            )

        diff = generate_diff(content, formatted.text, file_path)
        if not write:
            return Result(
                success=True,
                message=f"[DRY RUN] Would organize imports in {file_path}",
                files_changed=[file_path],
                diff=diff,
                diffs={file_path: diff},
            )

        try:
            with open(file_path, "w", encoding="utf-8", newline="") as f:
                f.write(formatted.text)
        except OSError as e:
            return ErrorResult(
                message=f"Failed to write {file_path}: {e}",
                exception=e,
                operation="organize",
            )
        logger.info("Organized imports in %s", file_path)
        return Result(
            success=True,
            message=f"Organized imports in {file_path}",
            files_changed=[file_path],
            diff=diff,
            diffs={file_path: diff},
        )

    def organize_all(self) -> BatchResult:
        """Organize every file of the working set; failures do not stop the run."""
        try:
            files = self.files
        except TidyImportsError as e:
            return BatchResult([ErrorResult(message=str(e), exception=e, operation="organize_all")])
        return BatchResult([self.organize(f) for f in files])

    def check(self, path: str | Path) -> Result:
        """
        Check whether a file's imports are already organized.

        Never writes. ``data`` is True when the file would be left unchanged.
        """
        file_path = self._resolve_path(path)
        result = self._organize(file_path, write=False)
        if not result.success:
            return result
        organized = not result.files_changed
        return Result(
            success=True,
            message=(
                f"Imports already organized in {file_path}"
                if organized
                else f"Imports not organized in {file_path}"
            ),
            data=organized,
            diff=result.diff,
            diffs=result.diffs,
        )

    def check_all(self) -> BatchResult:
        """Check every file of the working set."""
        try:
            files = self.files
        except TidyImportsError as e:
            return BatchResult([ErrorResult(message=str(e), exception=e, operation="check_all")])
        return BatchResult([self.check(f) for f in files])
