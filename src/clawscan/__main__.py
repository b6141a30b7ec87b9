#!/usr/bin/env python3
"""
Allow running clawscan as a module: python -m clawscan
"""

from clawscan.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
