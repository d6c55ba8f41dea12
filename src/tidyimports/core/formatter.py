"""The import formatting pipeline.

:class:`ImportFormatter` ties the components together for one document::

    locate -> parse -> rewrite modules -> filter -> classify
           -> merge -> sort -> render -> splice

Only the located import section is ever rewritten; everything outside it is
returned byte for byte.
"""
from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Callable, Collection, Sequence
from dataclasses import replace

from tidyimports.config.models import DEFAULT_CONFIG, Config, Group
from tidyimports.config.order import resolve_group_order
from tidyimports.core.errors import (
    InvalidImportSyntaxError,
    LocatorAmbiguousError,
    RenderError,
    TidyImportsError,
)
from tidyimports.core.results import FormatErrorResult, FormatResult
from tidyimports.imports.classifier import GroupMatcher
from tidyimports.imports.lexer import mask_source
from tidyimports.imports.locator import locate_imports
from tidyimports.imports.merger import apply_exclusions, merge_imports
from tidyimports.imports.models import (
    FormattedGroup,
    ImportRange,
    InvalidImport,
    LocatorFailure,
    ParsedImport,
)
from tidyimports.imports.parser import parse_imports
from tidyimports.imports.renderer import render_group, render_groups
from tidyimports.imports.sorter import sort_imports
from tidyimports.imports.splicer import splice

logger = logging.getLogger(__name__)

ModuleRewriter = Callable[[str], str]


class ImportFormatter:
    """Reorganize the import section of JavaScript/TypeScript documents.

    Parameters
    ----------
    config : Config | None
        Validated configuration; :data:`DEFAULT_CONFIG` when omitted.
    module_rewriter : Callable[[str], str] | None
        Maps each module specifier before classification, for instance to
        resolve path aliases. Its output is what gets grouped and rendered.

    Examples
    --------
    >>> formatter = ImportFormatter()
    >>> result = formatter.format("import b from 'b';\\nimport a from 'a';\\n")
    >>> print(result.text, end="")
    // Misc
    import a from 'a';
    import b from 'b';
    """

    def __init__(
        self,
        config: Config | None = None,
        *,
        module_rewriter: ModuleRewriter | None = None,
    ) -> None:
        self._config = config or DEFAULT_CONFIG
        self.module_rewriter = module_rewriter
        self._groups: list[Group] | None = None
        self._matcher: GroupMatcher | None = None

    @property
    def config(self) -> Config:
        return self._config

    @property
    def groups(self) -> list[Group]:
        """Configured groups with resolved orders, in render order."""
        if self._groups is None:
            self._groups = resolve_group_order(self._config.groups)
        return self._groups

    @property
    def matcher(self) -> GroupMatcher:
        if self._matcher is None:
            self._matcher = GroupMatcher(self.groups, self._config.priority_patterns)
        return self._matcher

    def reconfigure(self, config: Config) -> None:
        """Use ``config`` from now on, dropping the resolved groups and cache."""
        self._config = config
        self._groups = None
        self._matcher = None
        logger.debug("Formatter reconfigured with %d groups", len(config.groups))

    # =========================================================================
    # Pipeline
    # =========================================================================

    def format(
        self,
        text: str,
        imports: Sequence[ParsedImport] | None = None,
        *,
        invalid: Sequence[InvalidImport] | None = None,
        unused: Collection[str] | None = None,
        missing: Collection[str] | None = None,
    ) -> FormatResult | FormatErrorResult:
        """Format the import section of ``text``.

        Parameters
        ----------
        text : str
            The full document.
        imports : Sequence[ParsedImport] | None
            Records from an external parser. The built-in structural parser
            is used when omitted.
        invalid : Sequence[InvalidImport] | None
            Parse errors reported alongside ``imports`` by an external parser.
        unused : Collection[str] | None
            Local binding names to drop.
        missing : Collection[str] | None
            Modules whose imports are dropped entirely.

        Returns
        -------
        FormatResult | FormatErrorResult
            Never raises for document problems. On failure the result holds
            the original ``text`` and the typed error in ``exception``.
        """
        try:
            import_range = self._locate(text)
            if import_range.is_empty:
                return FormatResult(
                    message="No imports found",
                    text=text,
                    import_range=import_range,
                )
            if imports is None:
                outcome = parse_imports(text, import_range)
                imports, invalid = outcome.imports, outcome.invalid
            if invalid:
                raise InvalidImportSyntaxError(invalid[0])
        except TidyImportsError as e:
            logger.debug("Cannot format document: %s", e)
            return FormatErrorResult(message=str(e), text=text, exception=e, operation="format")

        try:
            groups = self.build_groups(imports, unused=unused, missing=missing)
            rendered = render_groups(
                groups,
                trailing_blank=import_range.end < len(text),
                newline="\r\n" if "\r\n" in import_range.slice(text) else "\n",
            )
        except Exception as e:
            logger.exception("Failed to render imports")
            error = RenderError(f"Failed to render imports: {e}")
            error.__cause__ = e
            return FormatErrorResult(
                message=str(error),
                text=text,
                exception=error,
                operation="format",
                import_range=import_range,
            )

        spliced = splice(text, import_range, rendered)
        if not rendered:
            logger.debug("All imports filtered out, removing the import section")
        return FormatResult(
            message="Imports organized" if spliced.changed else "Imports already organized",
            text=spliced.text,
            changed=spliced.changed,
            import_range=import_range,
            data=groups,
        )

    def _locate(self, text: str) -> ImportRange:
        located = locate_imports(text, mask_source(text))
        if isinstance(located, LocatorFailure):
            raise LocatorAmbiguousError(located.reason, located.position)
        return located

    def build_groups(
        self,
        imports: Sequence[ParsedImport],
        *,
        unused: Collection[str] | None = None,
        missing: Collection[str] | None = None,
    ) -> list[FormattedGroup]:
        """Run every stage after parsing and return the rendered groups.

        Groups come out in resolved order; groups with no imports are left
        out.
        """
        records = list(imports)
        if self.module_rewriter is not None:
            records = [replace(r, module=self.module_rewriter(r.module)) for r in records]
        records = apply_exclusions(records, unused or (), missing or ())

        buckets: dict[str, list[ParsedImport]] = defaultdict(list)
        for record in self.matcher.classify_all(records):
            buckets[record.group].append(record)

        formatted = []
        for group in self.groups:
            members = buckets.get(group.name)
            if not members:
                continue
            ordered = sort_imports(
                merge_imports(members),
                self._config.import_order,
                group.sort_order,
            )
            formatted.append(render_group(group.name, ordered, self._config.format))
        return formatted


def format_imports(
    text: str,
    config: Config | None = None,
    **kwargs,
) -> FormatResult | FormatErrorResult:
    """One-shot helper: ``ImportFormatter(config).format(text, **kwargs)``."""
    return ImportFormatter(config).format(text, **kwargs)
