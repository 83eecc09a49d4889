#!/usr/bin/env python3
"""
commitlanes - print a repository's history as a lane graph

This is a convenience wrapper for running from the repo root.
The actual entry point is commitlanes.main:main (for pip install).
"""

import sys

from commitlanes.main import main

if __name__ == "__main__":
    sys.exit(main())
