"""Rebuilding the import block of a Go file.

All import declarations of a file are merged into a single declaration whose
directives are grouped by set, in the configured order:

.. code-block:: go

    import (
        "fmt"

        "example.com/proj/sub"

        "github.com/x/y"
    )

Groups are separated by exactly one blank line and sorted by their textual
form. Trailing comments stay with their directive; all other comments inside
the old declarations are dropped.
"""
from __future__ import annotations

import logging

from gimps.errors import ConfigurationError
from gimps.golang.source import Edit, GoFile
from gimps.imports.classifier import (
    DEFAULT_IMPORT_ORDER,
    SET_EXTERNAL,
    SET_PROJECT,
    SET_STD,
    Classifier,
)
from gimps.imports.extractor import ImportMap, declaration_span

logger = logging.getLogger(__name__)


class ImportOrganizer:
    """Group, sort and re-serialize the imports of Go files.

    Parameters
    ----------
    classifier : Classifier
        Assigns each import path to a set.
    import_order : list[str] | None
        Set names in output order. Every set that can receive imports (the
        ``std``, ``project`` and ``external`` sets plus all user-defined
        sets) must be listed.

    Raises
    ------
    ConfigurationError
        If ``import_order`` omits a set, or lists one twice.
    """

    def __init__(self, classifier: Classifier, import_order: list[str] | None = None) -> None:
        self.classifier = classifier
        self.import_order = list(import_order or DEFAULT_IMPORT_ORDER)

        duplicates = sorted({name for name in self.import_order if self.import_order.count(name) > 1})
        if duplicates:
            raise ConfigurationError(f"import order lists {', '.join(duplicates)} more than once")

        known = [SET_STD, SET_PROJECT, SET_EXTERNAL] + [s.name for s in classifier.sets]
        missing = [name for name in dict.fromkeys(known) if name not in self.import_order]
        if missing:
            raise ConfigurationError(f"import order is missing the set(s) {', '.join(missing)}")

    def group(self, imports: ImportMap) -> list[list[str]]:
        """Split the keys of ``imports`` into sorted, non-empty groups."""
        members: dict[str, list[str]] = {}
        for key, record in imports.items():
            members.setdefault(self.classifier.classify(record.package), []).append(key)

        return [sorted(members[name]) for name in self.import_order if name in members]

    def render(self, imports: ImportMap, parenthesize: bool = True) -> str:
        """Serialize ``imports`` as a single import declaration.

        Returns an empty string if there are no imports at all.
        """
        groups = self.group(imports)
        if not groups:
            return ""

        if not parenthesize and len(groups) == 1 and len(groups[0]) == 1:
            return "import " + _directive(imports, groups[0][0])

        lines = ["import ("]
        for i, keys in enumerate(groups):
            if i > 0:
                lines.append("")
            lines.extend("\t" + _directive(imports, key) for key in keys)
        lines.append(")")

        return "\n".join(lines)

    def rebuild(self, go_file: GoFile, imports: ImportMap) -> None:
        """Replace all import declarations of ``go_file`` by one rebuilt declaration.

        The new declaration takes the place of the first existing one; all
        later declarations are removed. If there are no imports left, the
        declaration is removed entirely.
        """
        decls = go_file.import_declarations()
        if not decls:
            return

        first = decls[0]
        parenthesize = any(child.type == "import_spec_list" for child in first.children)
        block = self.render(imports, parenthesize)

        edits = []
        for i, decl in enumerate(decls):
            start, end = declaration_span(go_file, decl)
            if i == 0 and block:
                edits.append(Edit(start, end, block.encode("utf-8")))
            else:
                edits.append(Edit(*_removal_range(go_file.source, start, end)))

        if len(decls) > 1:
            logger.debug("Merging %d import declarations in %s", len(decls), go_file.path)

        go_file.apply_edits(edits)


def _directive(imports: ImportMap, key: str) -> str:
    comment = imports[key].comment
    if not comment:
        return key
    # comments are flattened into a single line
    flat = comment.replace("\n", "")
    return f"{key} // {flat}"


def _removal_range(source: bytes, start: int, end: int) -> tuple[int, int]:
    """Extend a removed declaration over its line break and one preceding blank line."""
    if source[end:end + 1] == b"\n":
        end += 1
    if source[max(start - 2, 0):start] == b"\n\n":
        start -= 1
    return start, end
