#!/usr/bin/env python3
"""Entry point for the tarqeem-ir dump viewer."""

from __future__ import annotations

from tarqeem_ir.cli import main

if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
