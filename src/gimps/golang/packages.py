"""Querying the Go toolchain for package names."""
from __future__ import annotations

import logging
import subprocess
from pathlib import Path

from gimps.errors import ResolutionError

logger = logging.getLogger(__name__)

_LIST_FORMAT = "{{.ImportPath}} {{.Name}}"


def load_package_dependencies(directory: Path, build_tags: str = "") -> dict[str, str]:
    """Map every dependency of the package in ``directory`` to its name.

    Runs ``go list -deps -test`` so that imports of ``_test.go`` files are
    included. The result covers all transitive dependencies, which lets a
    single call answer every lookup for the files of one package.

    Parameters
    ----------
    directory : Path
        Directory of the Go package.
    build_tags : str
        Build tags in ``go list -tags`` form; empty for the default
        configuration.

    Returns
    -------
    dict[str, str]
        Import path to package name, e.g.
        ``{"k8s.io/api/core/v1": "v1", "github.com/bmatcuk/doublestar/v4": "doublestar"}``.

    Raises
    ------
    ResolutionError
        If the ``go`` binary is missing or ``go list`` fails.
    """
    cmd = ["go", "list", "-deps", "-test", "-f", _LIST_FORMAT]
    if build_tags:
        cmd.append(f"-tags={build_tags}")
    cmd.append(".")

    logger.debug("Loading dependencies of %s (tags %r)", directory, build_tags)

    try:
        process = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=False,
            cwd=directory,
        )
    except FileNotFoundError as e:
        raise ResolutionError("go binary not found; please install Go and ensure it is in your PATH") from e

    if process.returncode != 0:
        raise ResolutionError(f"failed to load package dependencies: {process.stderr.strip()}")

    return parse_list_output(process.stdout)


def parse_list_output(output: str) -> dict[str, str]:
    """Parse ``ImportPath Name`` lines as printed by :func:`load_package_dependencies`.

    Test variants such as ``example.com/pkg [example.com/pkg.test]`` are
    folded into their plain import path.
    """
    packages: dict[str, str] = {}
    for line in output.splitlines():
        fields = line.split()
        if len(fields) < 2:
            continue

        import_path, name = fields[0], fields[-1]
        # synthesized test main packages have no importable path
        if import_path.endswith(".test"):
            continue

        packages.setdefault(import_path, name)
    return packages
