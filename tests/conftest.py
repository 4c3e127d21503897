"""
Shared pytest fixtures for the gimps test suite.

This module provides:
- Sample Go sources
- Dependency caches pre-populated with package names, so no test needs the
  Go toolchain to resolve imports
- Temporary Go modules on disk
- Pre-configured Gimps instances that format with the identity printer

Fixture Naming Convention:
- tmp_* : Fixtures that create temporary directories/files
- sample_* : Fixtures that provide sample content
- gimps_* : Fixtures that provide configured Gimps instances
"""
from __future__ import annotations

import shutil
import textwrap
from pathlib import Path

import pytest

from gimps import Config, DependencyCache, Gimps
from gimps.golang.printer import identity

PROJECT = "example.com/proj"

#: Package names as `go list` would report them for the sample sources.
PACKAGE_NAMES = {
    "fmt": "fmt",
    "os": "os",
    "strings": "strings",
    "embed": "embed",
    "example.com/proj/sub": "sub",
    "github.com/x/y": "y",
    "github.com/bmatcuk/doublestar/v4": "doublestar",
    "github.com/onsi/gomega": "gomega",
    "k8s.io/api/core/v1": "v1",
    "k8s.io/api/apps/v1": "v1",
    "example.com/a/pkgA": "pkga",
    "example.com/b/pkgB": "pkgb",
}

requires_gofmt = pytest.mark.skipif(shutil.which("gofmt") is None, reason="gofmt is not installed")
requires_go = pytest.mark.skipif(shutil.which("go") is None, reason="go is not installed")


def go(source: str) -> bytes:
    """Dedent a Go snippet and encode it."""
    return textwrap.dedent(source).lstrip("\n").encode("utf-8")


class RecordingLoader:
    """Dependency loader that records its calls instead of running `go list`."""

    def __init__(self, names: dict[str, str] | None = None) -> None:
        self.names = dict(PACKAGE_NAMES if names is None else names)
        self.calls: list[tuple[Path, str]] = []

    def __call__(self, directory: Path, build_tags: str) -> dict[str, str]:
        self.calls.append((directory, build_tags))
        return dict(self.names)


# =============================================================================
# Dependency Fixtures
# =============================================================================

@pytest.fixture
def loader() -> RecordingLoader:
    """A loader answering with PACKAGE_NAMES for every directory."""
    return RecordingLoader()


@pytest.fixture
def deps(loader: RecordingLoader) -> DependencyCache:
    """A dependency cache backed by the recording loader."""
    return DependencyCache(loader=loader)


# =============================================================================
# Sample Go Code Fixtures
# =============================================================================

@pytest.fixture
def sample_unsorted() -> bytes:
    """
    A file whose imports are mixed and unsorted.

    Contains one std, one external and one project import, in the wrong order.
    """
    return go('''
        package main

        import (
        \t"github.com/x/y"
        \t"fmt"
        \t"example.com/proj/sub"
        )

        func main() {
        \tfmt.Println(y.Value, sub.Value)
        }
    ''')


@pytest.fixture
def sample_kubernetes() -> bytes:
    """
    A file importing a Kubernetes API group under its default name.

    The package name `v1` is used both in a type and in an expression.
    """
    return go('''
        package main

        import (
        \t"fmt"

        \t"k8s.io/api/core/v1"
        )

        var pod v1.Pod

        func main() {
        \tfmt.Println(v1.NamespaceAll, pod)
        }
    ''')


# =============================================================================
# Temporary Directory Fixtures
# =============================================================================

@pytest.fixture
def tmp_module(tmp_path: Path) -> Path:
    """
    A temporary Go module named example.com/proj.

    Structure:
        tmp_path/
        ├── go.mod
        ├── main.go
        ├── sub/
        │   └── sub.go
        └── vendor/
            └── github.com/x/y/y.go
    """
    (tmp_path / "go.mod").write_text(f"module {PROJECT}\n\ngo 1.21\n")
    (tmp_path / "main.go").write_bytes(go('''
        package main

        import (
        \t"os"
        \t"fmt"
        )

        func main() {
        \tfmt.Println(os.Args)
        }
    '''))

    (tmp_path / "sub").mkdir()
    (tmp_path / "sub" / "sub.go").write_bytes(go('''
        package sub

        import "strings"

        var Value = strings.ToUpper("x")
    '''))

    vendored = tmp_path / "vendor" / "github.com" / "x" / "y"
    vendored.mkdir(parents=True)
    (vendored / "y.go").write_bytes(go('''
        package y

        import (
        \t"strings"
        \t"fmt"
        )

        var Value = fmt.Sprint(strings.ToLower("Y"))
    '''))

    return tmp_path


# =============================================================================
# Gimps Instance Fixtures
# =============================================================================

@pytest.fixture
def config() -> Config:
    return Config(project_name=PROJECT)


@pytest.fixture
def gimps_instance(config: Config, deps: DependencyCache) -> Gimps:
    """A Gimps instance that writes files and does not run gofmt."""
    return Gimps(config, printer=identity, deps=deps)


@pytest.fixture
def gimps_dry_run(config: Config, deps: DependencyCache) -> Gimps:
    """A Gimps instance in dry-run mode that does not run gofmt."""
    return Gimps(config, dry_run=True, printer=identity, deps=deps)
