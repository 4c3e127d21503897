"""Go source files parsed with tree-sitter.

A :class:`GoFile` owns the raw bytes of one file together with the concrete
syntax tree produced by the ``tree-sitter-go`` grammar. Trees are immutable,
so changes are expressed as a batch of byte-range :class:`Edit` objects that
:meth:`GoFile.apply_edits` splices into the source before re-parsing it.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

import tree_sitter
import tree_sitter_go

from gimps.errors import ParseError

GO_LANGUAGE = tree_sitter.Language(tree_sitter_go.language())

_PLUS_BUILD_PREFIX = "// +build "
_GO_BUILD_PREFIX = "//go:build "
_BUILD_TAG_RE = re.compile(r"!?[A-Za-z0-9_.]+")


@dataclass(frozen=True)
class Edit:
    """Replace ``source[start:end]`` with ``text``."""

    start: int
    end: int
    text: bytes = b""


class GoFile:
    """A parsed Go source file.

    Parameters
    ----------
    source : bytes
        The file content.
    path : Path | None
        Where the content came from. Only used for error messages and for
        resolving the file's package dependencies.

    Raises
    ------
    ParseError
        If the source contains syntax errors or is not valid UTF-8.
    """

    def __init__(self, source: bytes, path: Path | None = None) -> None:
        self.path = path
        self.source = source
        self.tree = self._parse(source)

    @classmethod
    def from_path(cls, path: Path) -> GoFile:
        return cls(path.read_bytes(), path)

    def __repr__(self) -> str:
        return f"GoFile({self.path})"

    @property
    def root(self) -> tree_sitter.Node:
        return self.tree.root_node

    def _parse(self, source: bytes) -> tree_sitter.Tree:
        try:
            source.decode("utf-8")
        except UnicodeDecodeError as e:
            where = self.path or "<source>"
            raise ParseError(f"{where}: invalid UTF-8 at byte {e.start}") from e

        parser = tree_sitter.Parser(GO_LANGUAGE)
        tree = parser.parse(source)

        if tree.root_node.has_error:
            line = self._first_error_line(tree.root_node)
            where = self.path or "<source>"
            raise ParseError(f"{where}:{line}: syntax error")

        return tree

    @staticmethod
    def _first_error_line(root: tree_sitter.Node) -> int:
        stack = [root]
        while stack:
            node = stack.pop()
            if node.type == "ERROR" or node.is_missing:
                return node.start_point[0] + 1
            stack.extend(reversed(node.children))
        return root.start_point[0] + 1

    def text(self, node: tree_sitter.Node) -> str:
        """Source text covered by ``node``."""
        return self.source[node.start_byte:node.end_byte].decode("utf-8")

    def walk(self) -> Iterator[tree_sitter.Node]:
        """Yield every node of the tree in source order."""
        stack = [self.root]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def import_declarations(self) -> list[tree_sitter.Node]:
        return [node for node in self.root.children if node.type == "import_declaration"]

    def header_comments(self) -> list[tree_sitter.Node]:
        """Comments that appear before the ``package`` clause."""
        comments = []
        for node in self.root.children:
            if node.type == "package_clause":
                break
            if node.type == "comment":
                comments.append(node)
        return comments

    def build_tags(self) -> str:
        """Build configuration of this file, in ``go list -tags`` form.

        A legacy ``// +build`` line is used verbatim. Otherwise the positive
        tags of a ``//go:build`` expression are joined with commas. Files
        without constraints use the default configuration, ``""``.
        """
        expression = None
        for comment in self.header_comments():
            text = self.text(comment)
            if text.startswith(_PLUS_BUILD_PREFIX):
                return text[len(_PLUS_BUILD_PREFIX):].strip()
            if expression is None and text.startswith(_GO_BUILD_PREFIX):
                expression = text[len(_GO_BUILD_PREFIX):]

        if expression is None:
            return ""

        tags = [tag for tag in _BUILD_TAG_RE.findall(expression) if not tag.startswith("!")]
        return ",".join(dict.fromkeys(tags))

    def apply_edits(self, edits: list[Edit]) -> None:
        """Apply non-overlapping edits and re-parse the result.

        Raises
        ------
        ValueError
            If two edits overlap.
        ParseError
            If the edited source no longer parses.
        """
        if not edits:
            return

        ordered = sorted(edits, key=lambda e: (e.start, e.end))
        for previous, current in zip(ordered, ordered[1:]):
            if current.start < previous.end:
                raise ValueError(f"overlapping edits at bytes {previous.start}-{previous.end} and {current.start}")

        chunks = []
        position = 0
        for edit in ordered:
            chunks.append(self.source[position:edit.start])
            chunks.append(edit.text)
            position = edit.end
        chunks.append(self.source[position:])

        source = b"".join(chunks)
        self.tree = self._parse(source)
        self.source = source
