"""Punto de entrada para ``python -m runlog``."""

from __future__ import annotations

from runlog.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
