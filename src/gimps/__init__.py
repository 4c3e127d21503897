"""
gimps - Go import sorter and aliaser.

Rewrites the import section of Go source files: imports are grouped into
configurable, ordered sets, optionally renamed by alias rules, sorted and
written back as a single import declaration.

Example
-------
>>> from pathlib import Path
>>> from gimps import Config, Gimps
>>>
>>> config = Config(project_name="example.com/proj")
>>> gimps = Gimps(config, dry_run=True)
>>> result = gimps.process_file(Path("main.go"))
>>> print(result.diff)

Classes
-------
Gimps
    Main entry point, processes Go files.

Config
    Settings for a run, usually loaded from ``.gimps.yaml``.

Result, ErrorResult, BatchResult
    Outcome of processing one or many files.

Classifier, Set
    Assign import paths to named sets.

Aliaser, AliasRule
    Compute aliases for imports and rename their usages.

DependencyCache
    Resolves the package names of imported paths.
"""
from __future__ import annotations

__version__ = "0.6.0"

from gimps.config import Config, load_config
from gimps.core import BatchResult, ErrorResult, Gimps, Result
from gimps.errors import (
    AliasCollisionError,
    ConfigurationError,
    FormatError,
    GimpsError,
    InvalidAliasError,
    ParseError,
    ResolutionError,
    UnsafeRewriteError,
)
from gimps.imports import Aliaser, AliasRule, Classifier, DependencyCache, Set

__all__ = [
    "__version__",
    "Gimps",
    "Config",
    "load_config",
    "Result",
    "ErrorResult",
    "BatchResult",
    "Classifier",
    "Set",
    "Aliaser",
    "AliasRule",
    "DependencyCache",
    "GimpsError",
    "ConfigurationError",
    "ResolutionError",
    "UnsafeRewriteError",
    "InvalidAliasError",
    "AliasCollisionError",
    "ParseError",
    "FormatError",
]
