"""Assigning imports to named sets.

Every import path ends up in exactly one set:

1. ``std`` for Go standard library packages
2. the first user-defined set with a matching pattern
3. ``project`` for the project's own packages
4. ``external`` for everything else

User-defined sets can therefore claim project or external packages, but never
standard library ones.
"""
from __future__ import annotations

from dataclasses import dataclass, field

from gimps.golang.stdlib import is_std_package
from gimps.patterns import matches

SET_STD = "std"
SET_PROJECT = "project"
SET_EXTERNAL = "external"

DEFAULT_IMPORT_ORDER = (SET_STD, SET_PROJECT, SET_EXTERNAL)


@dataclass(frozen=True)
class Set:
    """A named group of imports, selected by ``**``-style glob patterns."""

    name: str
    patterns: tuple[str, ...] = field(default_factory=tuple)


class Classifier:
    """Classify import paths into sets.

    Parameters
    ----------
    project_name : str
        The Go module path of the project, e.g. ``go.xrstf.de/gimps``.
    sets : list[Set] | None
        User-defined sets, in evaluation order.

    Examples
    --------
    >>> classifier = Classifier("example.com/proj", [Set("k8s", ("k8s.io/**",))])
    >>> classifier.classify("fmt")
    'std'
    >>> classifier.classify("k8s.io/api/core/v1")
    'k8s'
    >>> classifier.classify("example.com/proj/sub")
    'project'
    """

    def __init__(self, project_name: str, sets: list[Set] | None = None) -> None:
        self.project_name = project_name
        self.sets = list(sets or [])

    def classify(self, package: str) -> str:
        """Return the name of the set ``package`` belongs to."""
        if is_std_package(package):
            return SET_STD

        for s in self.sets:
            if any(matches(pattern, package) for pattern in s.patterns):
                return s.name

        if self.is_project_import(package):
            return SET_PROJECT

        return SET_EXTERNAL

    def is_project_import(self, package: str) -> bool:
        return package == self.project_name or package.startswith(self.project_name + "/")
