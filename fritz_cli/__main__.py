"""
Main entry point for the fritz_cli package.

Allows running the CLI as: python -m fritz_cli
"""

import sys

from fritz_cli.cli import main

if __name__ == "__main__":
    sys.exit(main())
