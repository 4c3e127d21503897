"""Extraction of import directives from a parsed Go file."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

import tree_sitter

from gimps.golang.source import GoFile


class ImportKind(Enum):
    """How an import makes its package available to the file."""

    PLAIN = "plain"  # import "fmt"
    NAMED = "named"  # import v1 "k8s.io/api/core/v1"
    DOT = "dot"  # import . "github.com/onsi/gomega"
    BLANK = "blank"  # import _ "embed"


_KIND_BY_NODE_TYPE = {
    "dot": ImportKind.DOT,
    "blank_identifier": ImportKind.BLANK,
    "package_identifier": ImportKind.NAMED,
}


@dataclass
class ImportRecord:
    """A single import directive and the comments attached to it.

    Attributes
    ----------
    package : str
        The unquoted import path.
    kind : ImportKind
        Plain, named, dot or blank import.
    alias : str
        The explicit local name for named imports, empty otherwise.
    doc : str | None
        Text of the comment lines directly above the directive.
    comment : str | None
        Text of the comment on the same line after the directive.
    """

    package: str
    kind: ImportKind = ImportKind.PLAIN
    alias: str = ""
    doc: str | None = None
    comment: str | None = None

    @property
    def local_name(self) -> str:
        """The name written in front of the path: an alias, ``.``, ``_`` or nothing."""
        if self.kind is ImportKind.DOT:
            return "."
        if self.kind is ImportKind.BLANK:
            return "_"
        return self.alias

    def statement(self) -> str:
        """The directive as it appears inside an import block, e.g. ``v1 "k8s.io/api/core/v1"``."""
        quoted = f'"{self.package}"'
        if self.local_name:
            return f"{self.local_name} {quoted}"
        return quoted

    def set_alias(self, alias: str) -> None:
        self.kind = ImportKind.NAMED
        self.alias = alias


#: Import records keyed by :meth:`ImportRecord.statement`.
ImportMap = dict[str, ImportRecord]


def extract_imports(go_file: GoFile) -> ImportMap:
    """Collect every import directive of ``go_file``.

    Directives from all import declarations are returned in one map, keyed by
    their textual form. The file is not modified.
    """
    imports: ImportMap = {}

    for decl in go_file.import_declarations():
        for spec, doc, comment in _iter_specs(go_file, decl):
            record = _build_record(go_file, spec)
            record.doc = _comment_text(go_file, doc)
            record.comment = _comment_text(go_file, comment)
            imports[record.statement()] = record

    return imports


def declaration_span(go_file: GoFile, decl: tree_sitter.Node) -> tuple[int, int]:
    """Byte range owned by an import declaration.

    For a single, unparenthesized import the trailing comment on the same line
    belongs to the declaration as well.
    """
    end = decl.end_byte
    sibling = decl.next_sibling
    if sibling is not None and sibling.type == "comment" and sibling.start_point[0] == decl.end_point[0]:
        end = sibling.end_byte
    return decl.start_byte, end


def _iter_specs(go_file: GoFile, decl: tree_sitter.Node):
    """Yield ``(spec, doc_comments, trailing_comments)`` for a declaration."""
    spec_list = next((c for c in decl.children if c.type == "import_spec_list"), None)

    if spec_list is None:
        spec = next((c for c in decl.children if c.type == "import_spec"), None)
        if spec is None:
            return
        trailing = _inner_comments(spec) + _inner_comments(decl)
        sibling = decl.next_sibling
        if sibling is not None and sibling.type == "comment" and sibling.start_point[0] == spec.end_point[0]:
            trailing.append(sibling)
        yield spec, [], trailing
        return

    children = spec_list.children
    specs = [i for i, node in enumerate(children) if node.type == "import_spec"]
    trailing = {i: _inner_comments(children[i]) + _trailing_comments(children, i) for i in specs}
    taken = {c.start_byte for comments in trailing.values() for c in comments}

    for i in specs:
        yield children[i], _doc_comments(children, i, taken), trailing[i]


def _doc_comments(siblings: list[tree_sitter.Node], index: int, taken: set[int]) -> list[tree_sitter.Node]:
    """Comments on the lines directly above ``siblings[index]``, without a gap."""
    doc: list[tree_sitter.Node] = []
    row = siblings[index].start_point[0]

    for node in reversed(siblings[:index]):
        if node.type != "comment":
            if node.is_named:
                break
            continue
        if node.start_byte in taken or node.end_point[0] != row - 1:
            break
        doc.insert(0, node)
        row = node.start_point[0]

    return doc


def _inner_comments(node: tree_sitter.Node) -> list[tree_sitter.Node]:
    return [c for c in node.children if c.type == "comment"]


def _trailing_comments(siblings: list[tree_sitter.Node], index: int) -> list[tree_sitter.Node]:
    row = siblings[index].end_point[0]
    trailing = []

    for node in siblings[index + 1:]:
        if node.start_point[0] != row:
            break
        if node.type == "comment":
            trailing.append(node)
        elif node.is_named:
            break

    return trailing


def _build_record(go_file: GoFile, spec: tree_sitter.Node) -> ImportRecord:
    path_node = spec.child_by_field_name("path")
    name_node = spec.child_by_field_name("name")

    # both "path" and `path` literals
    package = go_file.text(path_node)[1:-1]

    if name_node is None:
        return ImportRecord(package=package)

    kind = _KIND_BY_NODE_TYPE.get(name_node.type, ImportKind.NAMED)
    alias = go_file.text(name_node) if kind is ImportKind.NAMED else ""
    return ImportRecord(package=package, kind=kind, alias=alias)


def _comment_text(go_file: GoFile, comments: list[tree_sitter.Node]) -> str | None:
    """Text of a comment group with the comment markers removed.

    Lines are joined with newlines. Returns None when there is no text.
    """
    lines: list[str] = []

    for comment in comments:
        raw = go_file.text(comment)
        if raw.startswith("//"):
            text = raw[2:]
            if text.startswith(" "):
                text = text[1:]
            lines.append(text.rstrip())
        else:
            lines.extend(line.strip() for line in raw[2:-2].split("\n"))

    while lines and not lines[0]:
        lines.pop(0)
    while lines and not lines[-1]:
        lines.pop()

    return "\n".join(lines) or None
