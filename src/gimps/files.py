"""Finding the Go files of a run."""
from __future__ import annotations

import logging
import os
import re
from pathlib import Path

from gimps.golang.source import GoFile
from gimps.patterns import matches

logger = logging.getLogger(__name__)

# detect generated files by the presence of this text in a header comment
_GENERATED_RE = re.compile(r"been generated|generated by|do not edit")
_MODULE_RE = re.compile(r"^module\s+(\S+)", re.MULTILINE)


def cleanup_args(args: list[str]) -> list[Path]:
    """Turn arguments into unique, absolute, sorted paths.

    An empty argument stands for the current working directory.
    """
    unique = {Path(arg or os.getcwd()).absolute() for arg in args}
    return sorted(unique)


def go_mod_root(path: Path) -> Path | None:
    """Return the closest directory at or above ``path`` containing a ``go.mod``."""
    directory = path if path.is_dir() else path.parent

    for candidate in [directory, *directory.parents]:
        if (candidate / "go.mod").is_file():
            return candidate

    return None


def module_name(module_root: Path) -> str | None:
    """Read the module path from ``go.mod`` in ``module_root``."""
    try:
        content = (module_root / "go.mod").read_text()
    except OSError:
        return None

    match = _MODULE_RE.search(content)
    if match is None:
        return None
    return match.group(1).strip('"')


def is_skipped(rel_path: str, excludes: list[str]) -> bool:
    return any(matches(pattern, rel_path) for pattern in excludes)


def list_files(start: Path, module_root: Path, excludes: list[str]) -> list[Path]:
    """List the Go files to process for one argument.

    A file is returned as-is, without evaluating the exclude rules, so that
    users can force-format otherwise skipped files. Directories are walked
    recursively; excluded directories are not descended into.
    """
    if not start.is_dir():
        if not start.exists():
            raise FileNotFoundError(f"no such file or directory: {start}")
        return [start]

    result = []
    for dirpath, dirnames, filenames in os.walk(start):
        directory = Path(dirpath)

        kept = []
        for name in sorted(dirnames):
            if is_skipped(_relative(directory / name, module_root), excludes):
                logger.debug("Skipping directory %s", directory / name)
                continue
            kept.append(name)
        dirnames[:] = kept

        for name in sorted(filenames):
            path = directory / name
            if name.endswith(".go") and not is_skipped(_relative(path, module_root), excludes):
                result.append(path)

    return result


def _relative(path: Path, module_root: Path) -> str:
    try:
        return path.relative_to(module_root).as_posix()
    except ValueError:
        return path.as_posix()


def is_generated_code(source: bytes) -> bool:
    """Check the comments above the ``package`` clause for a generated-code marker."""
    go_file = GoFile(source)
    return any(
        _GENERATED_RE.search(go_file.text(comment).lower())
        for comment in go_file.header_comments()
    )


def is_generated_file(path: Path) -> bool:
    return is_generated_code(path.read_bytes())
