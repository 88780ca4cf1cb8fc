#!/usr/bin/env python3
"""
Molecular Vapor — quick launcher.

Usage:
    python run_molecular.py [options]

Run ``python run_molecular.py --help`` for full options.
"""

from molecular.app import main

if __name__ == "__main__":
    main()
