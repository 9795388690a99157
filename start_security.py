#!/usr/bin/env python3
"""Entry point for the Catpoint security console."""

import sys

from catpoint_security.cli import main

if __name__ == "__main__":
    sys.exit(main())
