"""Go language support: parsing, the standard library and the toolchain."""
from __future__ import annotations

from gimps.golang.source import Edit, GoFile

__all__ = ["Edit", "GoFile"]
