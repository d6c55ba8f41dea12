"""Unified diffs of organized files."""
from __future__ import annotations

import difflib
from pathlib import Path


def _lines(text: str) -> list[str]:
    # difflib needs every line terminated, including the last one.
    lines = text.splitlines(keepends=True)
    if lines and not lines[-1].endswith(("\n", "\r")):
        lines[-1] += "\n"
    return lines


def generate_diff(
    original: str,
    modified: str,
    path: Path,
    context_lines: int = 3,
) -> str:
    """Unified diff between two versions of ``path``.

    Parameters
    ----------
    original : str
        Content before organizing.
    modified : str
        Content after organizing.
    path : Path
        File name shown in the ``a/`` and ``b/`` headers.
    context_lines : int
        Unchanged lines shown around each hunk.

    Returns
    -------
    str
        The diff, or ``""`` when both versions are equal.

    Examples
    --------
    >>> print(generate_diff("import b from 'b';\\n", "import a from 'a';\\n", Path("x.ts")))
    --- a/x.ts
    +++ b/x.ts
    @@ -1 +1 @@
    -import b from 'b';
    +import a from 'a';
    """
    if original == modified:
        return ""
    return "".join(
        difflib.unified_diff(
            _lines(original),
            _lines(modified),
            fromfile=f"a/{path}",
            tofile=f"b/{path}",
            n=context_lines,
        )
    )


def combine_diffs(diffs: dict[Path, str]) -> str:
    """Join per-file diffs, sorted by path; empty diffs are skipped."""
    non_empty = sorted(((p, d) for p, d in diffs.items() if d), key=lambda x: str(x[0]))
    return "\n".join(d for _, d in non_empty)
