"""Exceptions raised by tarqeem_ir lookups.

Parsing itself never raises; these cover queries against a parsed module.
"""

from __future__ import annotations


class TarqeemIRError(Exception):
    """Base class for tarqeem_ir errors."""


class FunctionNotFoundError(TarqeemIRError, LookupError):
    def __init__(self, name: str) -> None:
        super().__init__(f"no function named @{name}")
        self.name = name


__all__ = ["TarqeemIRError", "FunctionNotFoundError"]
