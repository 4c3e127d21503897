"""Glob patterns with ``**`` support.

Used both to classify import paths into sets and to exclude files from a
run. Matching is done by :mod:`wcmatch.glob` with ``/`` as the only
separator, so patterns behave the same on every platform.
"""
from __future__ import annotations

from wcmatch import glob

FLAGS = glob.GLOBSTAR | glob.BRACE | glob.DOTGLOB | glob.FORCEUNIX


def matches(pattern: str, path: str) -> bool:
    """Return True if ``path`` matches the glob ``pattern`` as a whole.

    ``*`` and ``?`` never cross a ``/``, ``**`` as a whole path element
    matches any number of elements (including none), ``[...]`` is a character
    class (negated with ``!`` or ``^``) and ``{a,b}`` matches alternatives.
    A trailing ``/**`` also matches the directory itself, so ``k8s.io/**``
    claims the ``k8s.io`` import path.
    """
    patterns = [pattern]
    if pattern.endswith("/**"):
        patterns.append(pattern[:-3])
    return glob.globmatch(path, patterns, flags=FLAGS)
