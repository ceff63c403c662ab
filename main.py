#!/usr/bin/env python3
"""
lanegraph - commit graph lane layout

This is a convenience wrapper for running from the repo root.
The actual entry point is lanegraph.main:main (for pip install).
"""

from lanegraph.main import main

if __name__ == "__main__":
    main()
