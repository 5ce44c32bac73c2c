"""
Module entrypoint for the ship list CLI.

This file exists so that `python -m shiplist ...` works even when the
console-script wrapper is not installed.
"""

from __future__ import annotations

from shiplist.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
