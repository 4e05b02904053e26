"""
Entry point for running dumpy as a module.

Allows running the dumper via:
    python -m dumpy
"""

import sys

from dumpy.cli import main

if __name__ == "__main__":
    sys.exit(main())
