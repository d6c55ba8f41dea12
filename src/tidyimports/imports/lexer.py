"""Character-level masking of JavaScript/TypeScript source.

The locator and the parser never look at raw characters when deciding
structure. They work on a masked copy of the document produced here, where
comments (and optionally string contents) are blanked out while every
offset and line break is preserved. Anything that merely looks like code
inside a string, a template literal or a comment therefore cannot be
mistaken for an import or a brace.

Template literals are tracked with a stack so that ``${ ... }`` expressions
stay visible as code, including nested templates inside them.
"""
from __future__ import annotations

import re

_CODE = 0
_LINE_COMMENT = 1
_BLOCK_COMMENT = 2
_STRING = 3
_TEMPLATE = 4

_QUOTES = "'\"`"

# Statement starts, matched against masked text at a statement position.
# Excludes dynamic ``import(...)``, ``import.meta``, object keys and the
# TypeScript ``import x = require(...)`` form.
IMPORT_START = re.compile(r"import\b(?!\s*[(.:=])(?!\s+(?:type\s+)?[\w$]+\s*=)")
EXPORT_LIST_START = re.compile(r"export\s+(?:type\s+)?[{*]")
DYNAMIC_IMPORT = re.compile(r"(?<![\w$.])import\s*\(")


def mask_source(text: str, strings: bool = True) -> str:
    """Return ``text`` with comments (and string contents) replaced by spaces.

    Parameters
    ----------
    text : str
        JavaScript or TypeScript source.
    strings : bool
        When True, the contents of string and template literals are blanked
        as well; the quote characters themselves are kept so callers can tell
        a literal was present. When False only comments are removed.

    Returns
    -------
    str
        A string of the same length with identical line breaks.

    Examples
    --------
    >>> mask_source("a = 'x' // c")
    "a = ' '     "
    """
    out: list[str] = []
    state = _CODE
    quote = ""
    # One entry per open ``${``: the brace depth inside that expression.
    template_stack: list[int] = []
    i = 0
    n = len(text)

    while i < n:
        c = text[i]
        nxt = text[i + 1] if i + 1 < n else ""

        if state == _CODE:
            if c == "/" and nxt == "/":
                state = _LINE_COMMENT
                out.append("  ")
                i += 2
                continue
            if c == "/" and nxt == "*":
                state = _BLOCK_COMMENT
                out.append("  ")
                i += 2
                continue
            if c in "'\"":
                state = _STRING
                quote = c
                out.append(c)
            elif c == "`":
                state = _TEMPLATE
                out.append(c)
            elif c == "{" and template_stack:
                template_stack[-1] += 1
                out.append(c)
            elif c == "}" and template_stack:
                template_stack[-1] -= 1
                out.append(c)
                if template_stack[-1] == 0:
                    template_stack.pop()
                    state = _TEMPLATE
            else:
                out.append(c)
            i += 1
            continue

        if state == _LINE_COMMENT:
            if c == "\n":
                state = _CODE
                out.append(c)
            else:
                out.append(" ")
            i += 1
            continue

        if state == _BLOCK_COMMENT:
            if c == "*" and nxt == "/":
                state = _CODE
                out.append("  ")
                i += 2
                continue
            out.append(c if c == "\n" else " ")
            i += 1
            continue

        if state == _STRING:
            if c == "\\" and nxt:
                out.append(_blank(c, strings))
                out.append(nxt if nxt == "\n" else _blank(nxt, strings))
                i += 2
                continue
            if c == quote:
                state = _CODE
                out.append(c)
            elif c == "\n":
                # Unterminated literal: recover at the line break.
                state = _CODE
                out.append(c)
            else:
                out.append(_blank(c, strings))
            i += 1
            continue

        # _TEMPLATE
        if c == "\\" and nxt:
            out.append(_blank(c, strings))
            out.append(nxt if nxt == "\n" else _blank(nxt, strings))
            i += 2
            continue
        if c == "`":
            state = _CODE
            out.append(c)
        elif c == "$" and nxt == "{":
            template_stack.append(1)
            state = _CODE
            out.append("${")
            i += 2
            continue
        else:
            out.append(c if c == "\n" else _blank(c, strings))
        i += 1

    return "".join(out)


def _blank(c: str, strings: bool) -> str:
    return " " if strings else c


def statement_end(masked: str, pos: int, require_string: bool = True) -> int:
    """Find the end offset of the statement starting at ``pos``.

    A statement ends at a ``;`` outside braces, or at a line break outside
    braces once it is complete: for imports that means the module string has
    been seen, for export lists a closing brace also completes it. An
    unclosed brace keeps the statement open across lines.

    Returns
    -------
    int
        Offset just past the ``;``, the offset of the terminating line break,
        or ``len(masked)`` when the document ends first.
    """
    depth = 0
    seen_string = False
    closed_brace = False
    n = len(masked)
    i = pos
    while i < n:
        c = masked[i]
        if c == "{":
            depth += 1
        elif c == "}":
            depth -= 1
            closed_brace = True
        elif c in _QUOTES:
            seen_string = True
        elif c == ";" and depth <= 0:
            return i + 1
        elif c == "\n" and depth <= 0:
            if seen_string or (closed_brace and not require_string):
                return i
        i += 1
    return n


def skip_whitespace(masked: str, pos: int) -> int:
    n = len(masked)
    while pos < n and masked[pos].isspace():
        pos += 1
    return pos


def line_start(text: str, pos: int) -> int:
    """Offset of the first character of the line containing ``pos``."""
    return text.rfind("\n", 0, pos) + 1


def line_end(text: str, pos: int) -> int:
    """Offset of the line break ending the line containing ``pos`` (or len)."""
    end = text.find("\n", pos)
    return len(text) if end == -1 else end


def line_number(text: str, pos: int) -> int:
    """1-based line number of ``pos``."""
    return text.count("\n", 0, pos) + 1
