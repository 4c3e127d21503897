"""Result types for processing files.

This module defines the core result classes:
- Result - Outcome of processing one file
- ErrorResult - Result for a file that could not be processed
- BatchResult - Aggregate result for a run over many files
"""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator


@dataclass
class Result:
    """Outcome of processing a single Go file.

    Processing a file never raises; failures are reported as
    :class:`ErrorResult` instead.

    Attributes:
        success: Whether the file was processed
        message: Human-readable description of what happened
        path: The processed file
        files_changed: The file, if its content changed (or would change)
        data: The formatted file content
        diff: Unified diff between the original and formatted content
    """

    success: bool
    message: str
    path: Path | None = None
    files_changed: list[Path] = field(default_factory=list)
    data: bytes | None = None
    diff: str | None = None

    def __bool__(self) -> bool:
        return self.success

    @property
    def changed(self) -> bool:
        """True if formatting changed the file's content."""
        return bool(self.files_changed)

    def is_error(self) -> bool:
        """Check if this result represents an error."""
        return not self.success


@dataclass
class ErrorResult(Result):
    """Result for a file that failed to process.

    Attributes:
        exception: The original exception, if any
        operation: Name of the attempted operation
    """

    success: bool = field(default=False, init=False)
    exception: Exception | None = None
    operation: str = ""

    def raise_if_error(self) -> None:
        """Explicitly re-raise the exception if the caller wants to."""
        if self.exception:
            raise self.exception
        raise RuntimeError(self.message)


@dataclass
class BatchResult:
    """Aggregate result for a run over many files."""

    results: list[Result] = field(default_factory=list)

    @property
    def success(self) -> bool:
        """True if all files were processed."""
        return all(r.success for r in self.results)

    @property
    def succeeded(self) -> list[Result]:
        return [r for r in self.results if r.success]

    @property
    def failed(self) -> list[Result]:
        return [r for r in self.results if not r.success]

    @property
    def files_changed(self) -> list[Path]:
        """All changed files, in processing order."""
        files: list[Path] = []
        for r in self.results:
            files.extend(f for f in r.files_changed if f not in files)
        return files

    @property
    def diff(self) -> str | None:
        """Combined diff of all changed files."""
        from gimps.core.diff import combine_diffs

        diffs = {r.path: r.diff for r in self.results if r.path is not None and r.diff}
        if not diffs:
            return None
        return combine_diffs(diffs)

    def __bool__(self) -> bool:
        return self.success

    def __len__(self) -> int:
        return len(self.results)

    def __iter__(self) -> Iterator[Result]:
        return iter(self.results)
