"""Diff generation utilities."""
from __future__ import annotations

import difflib
from pathlib import Path


def generate_diff(original: bytes, formatted: bytes, path: Path, context_lines: int = 3) -> str:
    """Unified diff between the original and formatted content of a Go file.

    Returns an empty string if the content is unchanged.

    Examples
    --------
    >>> print(generate_diff(b'import "os"\\n', b'import "fmt"\\n', Path("main.go")))
    --- a/main.go
    +++ b/main.go
    @@ -1 +1 @@
    -import "os"
    +import "fmt"
    """
    if original == formatted:
        return ""

    before = original.decode("utf-8", errors="replace").splitlines(keepends=True)
    after = formatted.decode("utf-8", errors="replace").splitlines(keepends=True)

    # a missing final newline would glue two lines of the diff together
    for lines in (before, after):
        if lines and not lines[-1].endswith("\n"):
            lines[-1] += "\n"

    # a/ and b/ prefixes need a relative name
    name = path.as_posix().lstrip("/")
    return "".join(
        difflib.unified_diff(before, after, fromfile=f"a/{name}", tofile=f"b/{name}", n=context_lines)
    )


def combine_diffs(diffs: dict[Path, str]) -> str:
    """Join per-file diffs, ordered by path."""
    non_empty = sorted(((p, d) for p, d in diffs.items() if d), key=lambda item: str(item[0]))
    return "".join(d for _, d in non_empty)
