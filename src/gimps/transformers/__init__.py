"""
Tree-sitter based transformers for Go files.
"""
from __future__ import annotations

from .rename_qualifiers import RenameQualifiers

__all__ = [
    "RenameQualifiers",
]
