#!/usr/bin/env python3
"""
v2pager - command line entry point
"""
import sys
import os

# Allow running from a checkout without installing the package
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from v2pager.main import main


if __name__ == "__main__":
    sys.exit(main())
