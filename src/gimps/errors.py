"""Exception types raised while rewriting a Go file.

The engine raises these internally; :meth:`gimps.core.gimps.Gimps.process_file`
turns them into :class:`~gimps.core.results.ErrorResult` objects so that a run
over many files can decide per file how to continue.
"""
from __future__ import annotations


class GimpsError(Exception):
    """Base class for all gimps errors."""


class ConfigurationError(GimpsError):
    """Invalid configuration, detected before any file is processed."""


class ResolutionError(GimpsError):
    """Loading a package's dependencies failed, or a package is missing."""


class UnsafeRewriteError(GimpsError):
    """An alias rule matched an import whose usages cannot be located."""

    def __init__(self, rule: str, package: str) -> None:
        super().__init__(
            f"cannot rewrite, import {package!r} matches rule {rule} but is a dot-import; "
            "dot-imports cannot be rewritten"
        )
        self.rule = rule
        self.package = package


class InvalidAliasError(GimpsError):
    """An alias rule produced an empty or non-identifier alias."""

    def __init__(self, rule: str, package: str, alias: str) -> None:
        if alias == "":
            message = f"applying rule {rule} to {package!r} leads to an empty alias"
        else:
            message = f"rule {rule} generated an invalid alias {alias!r} for package {package!r}"
        super().__init__(message)
        self.rule = rule
        self.package = package
        self.alias = alias


class AliasCollisionError(GimpsError):
    """Two imports would end up with the same effective name.

    The two packages are stored in sorted order so the message does not
    depend on the order in which the imports were visited.
    """

    def __init__(self, package_a: str, package_b: str, alias: str) -> None:
        if package_b < package_a:
            package_a, package_b = package_b, package_a
        super().__init__(
            f"two or more packages (at least {package_a!r} and {package_b!r}) "
            f"would be aliased to {alias!r}"
        )
        self.packages = (package_a, package_b)
        self.alias = alias


class ParseError(GimpsError):
    """The Go source could not be parsed."""


class FormatError(GimpsError):
    """The external printer failed to format the rewritten source."""
