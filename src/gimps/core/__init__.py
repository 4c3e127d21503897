"""
Core module.

Example
-------
>>> from gimps.core import Gimps
>>>
>>> gimps = Gimps(config)
>>> batch = gimps.process_files([Path("main.go"), Path("util.go")])
>>> for result in batch.failed:
...     print(result.message)
"""
from __future__ import annotations

from gimps.errors import GimpsError
from .results import BatchResult, ErrorResult, Result
from .gimps import Gimps

__all__ = [
    "Gimps",
    "GimpsError",
    "Result",
    "ErrorResult",
    "BatchResult",
]
