#!/usr/bin/env python3
"""Entry point for running IconBaker from a source checkout."""

import sys
import os

# Ensure the project root is on the path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from iconbaker.app import main


if __name__ == "__main__":
    sys.exit(main())
