"""Formatting Go source with ``gofmt``."""
from __future__ import annotations

import subprocess
from typing import Callable

from gimps.errors import FormatError

#: Signature of a printer: takes Go source, returns formatted Go source.
Printer = Callable[[bytes], bytes]


def gofmt(source: bytes) -> bytes:
    """Format ``source`` by piping it through ``gofmt``.

    Raises
    ------
    FormatError
        If ``gofmt`` is not installed or rejects the source.
    """
    try:
        process = subprocess.run(
            ["gofmt"],
            input=source,
            capture_output=True,
            check=False,
        )
    except FileNotFoundError as e:
        raise FormatError("gofmt not found; please install Go and ensure it is in your PATH") from e

    if process.returncode != 0:
        stderr = process.stderr.decode("utf-8", errors="replace").strip()
        raise FormatError(f"gofmt failed: {stderr}")

    return process.stdout


def identity(source: bytes) -> bytes:
    """Printer that returns the source unchanged."""
    return source
