"""Import handling for Go files.

Provides:
- Extracting import directives and their comments
- Classifying imports into named sets
- Aliasing imports by rule and renaming their usages
- Rebuilding a single, grouped import declaration
"""
from __future__ import annotations

from gimps.imports.aliaser import Aliaser, AliasRule
from gimps.imports.classifier import Classifier, Set
from gimps.imports.deps import DependencyCache
from gimps.imports.extractor import ImportKind, ImportRecord, extract_imports
from gimps.imports.organizer import ImportOrganizer

__all__ = [
    "Aliaser",
    "AliasRule",
    "Classifier",
    "Set",
    "DependencyCache",
    "ImportKind",
    "ImportRecord",
    "extract_imports",
    "ImportOrganizer",
]
