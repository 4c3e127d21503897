"""Caching resolver for the package names of imported paths."""
from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Callable

from gimps.errors import ResolutionError
from gimps.golang.packages import load_package_dependencies

logger = logging.getLogger(__name__)

#: Loads ``{import path: package name}`` for a directory and build tags.
DependencyLoader = Callable[[Path, str], dict[str, str]]


class DependencyCache:
    """Package names of dependencies, grouped by build configuration.

    The Go package name of an import is not derivable from its path
    (``github.com/bmatcuk/doublestar/v4`` is named ``doublestar``), so it has
    to be looked up with the Go toolchain. Such lookups are slow; a single
    load answers every lookup of the same build configuration, so the
    results are kept for the lifetime of the cache. Entries are keyed by the
    build tags because conditional compilation changes which packages a file
    imports.

    The cache is safe to share between threads.

    Parameters
    ----------
    loader : DependencyLoader | None
        Function performing the actual dependency load. Defaults to running
        ``go list``.
    entries : dict[str, dict[str, str]] | None
        Pre-populated entries, keyed by build tags.
    """

    def __init__(
        self,
        loader: DependencyLoader | None = None,
        entries: dict[str, dict[str, str]] | None = None,
    ) -> None:
        self._loader = loader or load_package_dependencies
        self._entries: dict[str, dict[str, str]] = {
            tags: dict(names) for tags, names in (entries or {}).items()
        }
        self._lock = threading.Lock()

    def get_package_name(self, file_path: Path, build_tags: str, package: str) -> str:
        """Return the package name of ``package`` as imported by ``file_path``.

        Raises
        ------
        ResolutionError
            If loading the dependencies fails or ``package`` is not among
            them.
        """
        directory = Path(file_path).parent

        with self._lock:
            names = self._entries.setdefault(build_tags, {})
            name = names.get(package)

            if name is None:
                logger.debug("Cache miss for %s (tags %r), loading %s", package, build_tags, directory)
                names.update(self._loader(directory, build_tags))
                name = names.get(package)

        if name is None:
            raise ResolutionError(f"package {package!r} is not a dependency of {str(directory)!r}")

        return name
