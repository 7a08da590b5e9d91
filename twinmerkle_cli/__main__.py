"""
Module execution entry point.

Allows running with: python -m twinmerkle_cli
"""

import sys
from twinmerkle_cli.main import main

if __name__ == "__main__":
    sys.exit(main())
