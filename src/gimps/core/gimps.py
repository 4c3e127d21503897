"""Main Gimps class - entry point for rewriting the imports of Go files."""
from __future__ import annotations

import logging
from pathlib import Path

from gimps.config import Config
from gimps.core.diff import generate_diff
from gimps.errors import GimpsError
from gimps.core.results import BatchResult, ErrorResult, Result
from gimps.golang.printer import Printer, gofmt
from gimps.golang.source import GoFile
from gimps.imports.aliaser import Aliaser
from gimps.imports.classifier import Classifier
from gimps.imports.deps import DependencyCache
from gimps.imports.extractor import extract_imports
from gimps.imports.organizer import ImportOrganizer
from gimps.imports.usage import remove_unused_imports, set_version_aliases

logger = logging.getLogger(__name__)


class Gimps:
    """
    Rewrite the import section of Go files.

    For every file, the imports are extracted, aliased according to the alias
    rules, grouped into sets, sorted and written back as a single import
    declaration. The result is formatted by the printer.

    Parameters
    ----------
    config : Config
        Settings for the run. ``config.project_name`` must be set.
    dry_run : bool, optional
        If True, :meth:`process_file` reports what it would change without
        writing files. Defaults to False.
    printer : Printer, optional
        Formats the rewritten source. Defaults to ``gofmt``.
    deps : DependencyCache | None, optional
        Resolver for package names, shared by all files of the run. Defaults
        to a cache backed by ``go list``.

    Raises
    ------
    ConfigurationError
        If the alias rules or import order are invalid.

    Examples
    --------
    >>> gimps = Gimps(Config(project_name="example.com/proj"), dry_run=True)
    >>> result = gimps.process_file(Path("main.go"))
    >>> if result.changed:
    ...     print(result.diff)
    """

    def __init__(
        self,
        config: Config,
        dry_run: bool = False,
        printer: Printer | None = None,
        deps: DependencyCache | None = None,
    ) -> None:
        self.config = config
        self.dry_run = dry_run
        self.printer = printer or gofmt
        self.deps = deps or DependencyCache()
        self.classifier = Classifier(config.project_name, config.sets)
        self.organizer = ImportOrganizer(self.classifier, config.import_order)
        self.aliaser = Aliaser(config.project_name, config.alias_rules, self.deps)

    def format_source(self, source: bytes, path: Path) -> bytes:
        """Rewrite the imports of ``source`` and return the formatted result.

        Parameters
        ----------
        source : bytes
            Content of the Go file.
        path : Path
            Location of the file; its directory determines how package names
            are resolved.

        Raises
        ------
        GimpsError
            If any step fails. Nothing is written in that case.
        """
        go_file = GoFile(source, path)
        imports = extract_imports(go_file)

        if self.config.set_version_alias:
            set_version_aliases(go_file, imports, self.deps)

        self.aliaser.rewrite_file(go_file, imports)

        if self.config.remove_unused_imports:
            remove_unused_imports(go_file, imports, self.deps)

        self.organizer.rebuild(go_file, imports)

        return self.printer(go_file.source)

    def execute(self, path: Path) -> tuple[bytes, bool]:
        """Format the file at ``path`` without writing it.

        Returns
        -------
        tuple[bytes, bool]
            The formatted content and whether it differs from the file.
        """
        original, formatted = self._format_file(path)
        return formatted, formatted != original

    def _format_file(self, path: Path) -> tuple[bytes, bytes]:
        original = path.read_bytes()
        return original, self.format_source(original, path)

    def process_file(self, path: Path, diff_path: Path | None = None) -> Result:
        """Format a file and write it back if it changed.

        Never raises for processing errors; they are returned as
        :class:`ErrorResult`. ``diff_path`` names the file in the diff
        headers, ``path`` is used when omitted.
        """
        try:
            original, formatted = self._format_file(path)
        except (GimpsError, OSError) as e:
            logger.debug("Failed to process %s: %s", path, e)
            return ErrorResult(
                message=f"Failed to process {path}: {e}",
                path=path,
                exception=e,
                operation="process_file",
            )

        if formatted == original:
            return Result(success=True, message=f"Imports already organized in {path}", path=path, data=formatted)

        diff = generate_diff(original, formatted, diff_path or path)

        if self.dry_run:
            return Result(
                success=True,
                message=f"[DRY RUN] Would fix {path}",
                path=path,
                files_changed=[path],
                data=formatted,
                diff=diff,
            )

        try:
            path.write_bytes(formatted)
        except OSError as e:
            return ErrorResult(
                message=f"Failed to write fixed result to file {path}: {e}",
                path=path,
                exception=e,
                operation="process_file",
            )

        return Result(
            success=True,
            message=f"Fixed {path}",
            path=path,
            files_changed=[path],
            data=formatted,
            diff=diff,
        )

    def process_files(self, paths: list[Path]) -> BatchResult:
        """Process several files, continuing after failures."""
        return BatchResult(results=[self.process_file(path) for path in paths])
