#!/usr/bin/env python3
"""
Entry point for running chunklab as a module.

This allows the package to be run with:
    python -m chunklab
"""

from chunklab.cli import main

if __name__ == "__main__":
    main()
