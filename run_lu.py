#!/usr/bin/env python
"""
LU Decomposition Entry Point.

Factor a square matrix with relative partial pivoting and print L, U,
the swap vector and the swap count.

Usage:
    python run_lu.py                          # Prompt for n, then each entry
    python run_lu.py -n 3 --input matrix.txt  # Read entries from a file
    python run_lu.py --example permuted       # Decompose a bundled matrix

For more options:
    python run_lu.py --help
"""

import sys
from pathlib import Path

# Add project root to path for imports
project_root = Path(__file__).parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from lupivot.cli import main

if __name__ == "__main__":
    sys.exit(main())
