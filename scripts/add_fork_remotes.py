#!/usr/bin/env python3
"""Script to add the forks of a GitHub repository as remotes of the current repository."""

import sys
import os

# Add project root to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from rgf.cli import main


if __name__ == "__main__":
    sys.exit(main())
