#!/usr/bin/env python3
"""
Allow running keyhunter as a module: python -m keyhunter
"""

from keyhunter.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
