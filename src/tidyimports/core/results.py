"""Result types for all operations.

This module defines the result classes returned at operation boundaries:
- Result - Base result for all operations
- ErrorResult - Result for failed operations
- BatchResult - Aggregate result for multi-file operations
- FormatResult / FormatErrorResult - Outcome of formatting one document
"""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any, Iterator

from tidyimports.core.diff import combine_diffs

if TYPE_CHECKING:
    from tidyimports.imports.models import ImportRange


@dataclass
class Result:
    """Base result for all operations.

    Operations never raise for document problems. Instead, they return
    Result objects that indicate success or failure.

    Attributes:
        success: Whether the operation succeeded
        message: Human-readable description of what happened
        files_changed: List of files that were modified
        data: Optional payload for operations that return data
        diff: Unified diff of the change (if any)
        diffs: Per-file diffs mapping path to diff string
    """

    success: bool
    message: str
    files_changed: list[Path] = field(default_factory=list)
    data: Any = None
    diff: str | None = None
    diffs: dict[Path, str] = field(default_factory=dict)

    def __bool__(self) -> bool:
        return self.success

    def is_error(self) -> bool:
        """Check if this result represents an error."""
        return not self.success


@dataclass
class ErrorResult(Result):
    """Result for failed operations - never raises automatically.

    Attributes:
        exception: The original exception, if any
        operation: Name of the attempted operation
    """

    success: bool = field(default=False, init=False)
    exception: Exception | None = None
    operation: str = ""

    def raise_if_error(self) -> None:
        """Explicitly re-raise the exception if the caller wants to."""
        if self.exception:
            raise self.exception
        raise RuntimeError(self.message)


@dataclass
class FormatResult(Result):
    """Outcome of formatting the imports of one document.

    Attributes:
        text: The transformed document (the original when nothing changed)
        changed: False when the rendered block equals the original block
        import_range: The located import section in the original document
    """

    success: bool = True
    message: str = ""
    text: str = ""
    changed: bool = False
    import_range: ImportRange | None = None


@dataclass
class FormatErrorResult(ErrorResult):
    """Failed formatting; ``text`` is always the untouched original."""

    text: str = ""
    changed: bool = field(default=False, init=False)
    import_range: ImportRange | None = None


@dataclass
class BatchResult:
    """Aggregate result for operations applied to several files."""

    results: list[Result] = field(default_factory=list)

    @property
    def success(self) -> bool:
        """True if all operations succeeded."""
        return all(r.success for r in self.results)

    @property
    def partial_success(self) -> bool:
        """True if at least one operation succeeded."""
        return any(r.success for r in self.results)

    @property
    def succeeded(self) -> list[Result]:
        return [r for r in self.results if r.success]

    @property
    def failed(self) -> list[Result]:
        return [r for r in self.results if not r.success]

    @property
    def files_changed(self) -> list[Path]:
        """All files changed across all operations, in processing order."""
        files: list[Path] = []
        for r in self.results:
            for path in r.files_changed:
                if path not in files:
                    files.append(path)
        return files

    @property
    def diffs(self) -> dict[Path, str]:
        merged: dict[Path, str] = {}
        for r in self.results:
            merged.update(r.diffs)
        return merged

    @property
    def diff(self) -> str | None:
        """Combined diff from all results, ordered by path."""
        return combine_diffs(self.diffs) or None

    def __bool__(self) -> bool:
        return self.success

    def __len__(self) -> int:
        return len(self.results)

    def __iter__(self) -> Iterator[Result]:
        return iter(self.results)
