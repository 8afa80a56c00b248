#!/usr/bin/env python3
"""
DocuClear - Entry point for python -m docuclear

This module allows the package to be run as a module:
    python -m docuclear
"""

import sys

from docuclear import main

if __name__ == "__main__":
    sys.exit(main())
