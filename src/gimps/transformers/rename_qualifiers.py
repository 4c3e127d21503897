"""Transformer to rename package qualifiers throughout a Go file."""
from __future__ import annotations

import tree_sitter

from gimps.golang.source import Edit, GoFile


class RenameQualifiers:
    """Rename the package part of qualified identifiers.

    Both selector expressions (``v1.NamespaceAll``, ``fmt.Println(...)``) and
    qualified types (``var pod v1.Pod``) are rewritten when their qualifier is
    a key of ``renames``. Import declarations are left alone; updating them is
    the job of the import block rebuild.

    Parameters
    ----------
    renames : dict[str, str]
        Old qualifier to new qualifier.

    Attributes
    ----------
    replaced_count : int
        Number of replacements made by the last :meth:`transform` call.

    Examples
    --------
    >>> transformer = RenameQualifiers({"v1": "corev1"})
    >>> transformer.transform(go_file)
    >>> transformer.replaced_count
    3
    """

    def __init__(self, renames: dict[str, str]) -> None:
        self.renames = renames
        self.replaced_count = 0

    def transform(self, go_file: GoFile) -> None:
        edits = [
            Edit(node.start_byte, node.end_byte, self.renames[name].encode("utf-8"))
            for node, name in self._qualifiers(go_file)
        ]
        self.replaced_count = len(edits)
        go_file.apply_edits(edits)

    def _qualifiers(self, go_file: GoFile):
        for node in go_file.walk():
            qualifier = _qualifier_of(node)
            if qualifier is None:
                continue

            name = go_file.text(qualifier)
            if name in self.renames:
                yield qualifier, name


def _qualifier_of(node: tree_sitter.Node) -> tree_sitter.Node | None:
    if node.type == "selector_expression":
        operand = node.child_by_field_name("operand")
        if operand is not None and operand.type == "identifier":
            return operand
    elif node.type == "qualified_type":
        return node.child_by_field_name("package")
    return None


def used_qualifiers(go_file: GoFile) -> set[str]:
    """Every identifier used as the qualifier of a selector or type."""
    used = set()
    for node in go_file.walk():
        qualifier = _qualifier_of(node)
        if qualifier is not None:
            used.add(go_file.text(qualifier))
    return used
