"""Locate the import section of a JavaScript/TypeScript document.

The locator returns the exact character range that the formatter is allowed
to rewrite. It either succeeds (possibly with an empty range when the
document has no static imports) or returns a :class:`LocatorFailure`; it
never returns a partial section.

Rules
-----
- The section starts at the first static import and runs over further
  imports, comments and re-export lists. The first other statement ends it.
- ``//`` comment lines directly above the first import belong to the
  section (they are usually group headers from a previous run). Block
  comments, such as license headers, stop that backward extension.
- Blank lines after the last import belong to the section.
- A dynamic ``import(...)`` before the last static import of the document,
  code sharing a line with an import of the section, or an import that
  follows a re-export inside the section makes the boundary ambiguous.
"""
from __future__ import annotations

import logging

from tidyimports.imports.lexer import (
    DYNAMIC_IMPORT,
    EXPORT_LIST_START,
    IMPORT_START,
    line_end,
    line_number,
    line_start,
    mask_source,
    skip_whitespace,
    statement_end,
)
from tidyimports.imports.models import ImportRange, LocatorFailure

logger = logging.getLogger(__name__)


def locate_imports(text: str, masked: str | None = None) -> ImportRange | LocatorFailure:
    """Find the import section of ``text``.

    Parameters
    ----------
    text : str
        The full document.
    masked : str | None
        A precomputed ``mask_source(text)``; computed when omitted.

    Returns
    -------
    ImportRange | LocatorFailure
        ``ImportRange(0, 0)`` when there are no static imports.

    Examples
    --------
    >>> src = "import a from 'a';\\n\\nconst x = a;\\n"
    >>> locate_imports(src)
    ImportRange(start=0, end=20)
    """
    if masked is None:
        masked = mask_source(text)
    n = len(masked)

    block: list[tuple[int, int]] = []
    block_done = False
    export_pos: int | None = None
    static_starts: list[int] = []
    dynamic_positions: list[int] = []

    pos = 0
    while True:
        pos = skip_whitespace(masked, pos)
        if pos >= n:
            break

        if IMPORT_START.match(masked, pos):
            end = statement_end(masked, pos, require_string=True)
            static_starts.append(pos)
            if not block_done:
                if export_pos is not None:
                    return _fail(
                        "Import declared after a re-export inside the import section",
                        pos,
                        text,
                    )
                block.append((pos, end))
            pos = end
            continue

        if block and not block_done and EXPORT_LIST_START.match(masked, pos):
            if line_start(masked, pos) < block[-1][1]:
                return _fail("Export shares a line with an import", pos, text)
            end = statement_end(masked, pos, require_string=False)
            dynamic_positions.extend(m.start() for m in DYNAMIC_IMPORT.finditer(masked, pos, end))
            if export_pos is None:
                export_pos = pos
            pos = end
            continue

        # Any other statement: consumed a line at a time.
        stop = line_end(masked, pos)
        dynamic_positions.extend(m.start() for m in DYNAMIC_IMPORT.finditer(masked, pos, stop))
        if block and not block_done:
            block_done = True
            if line_start(masked, pos) < block[-1][1]:
                return _fail("Code shares a line with an import", pos, text)
        pos = stop

    if not block:
        logger.debug("No static imports found")
        return ImportRange(0, 0)

    last_static = static_starts[-1]
    for dyn in dynamic_positions:
        if dyn < last_static:
            return _fail("Dynamic import mixed with static imports", dyn, text)

    start = _extend_backward(text, masked, line_start(text, block[0][0]))
    end = _extend_forward(text, block[-1][1])
    logger.debug("Import section located at %d..%d", start, end)
    return ImportRange(start, end)


def _extend_backward(text: str, masked: str, start: int) -> int:
    """Swallow the blank and ``//`` comment lines directly above."""
    cursor = start
    while cursor > 0:
        prev = line_start(text, cursor - 1)
        stripped = text[prev:cursor - 1].strip()
        if stripped and not (stripped.startswith("//") and not masked[prev:cursor - 1].strip()):
            break
        cursor = prev
    return cursor


def _extend_forward(text: str, last_end: int) -> int:
    """Move past the end of the last import's line and following blank lines."""
    n = len(text)
    stop = line_end(text, last_end)
    if stop >= n:
        return n
    end = stop + 1
    while end < n:
        stop = line_end(text, end)
        if text[end:stop].strip():
            break
        end = n if stop >= n else stop + 1
    return end


def _fail(reason: str, pos: int, text: str) -> LocatorFailure:
    message = f"{reason} (line {line_number(text, pos)})"
    logger.debug("Import section is ambiguous: %s", message)
    return LocatorFailure(message, pos)
