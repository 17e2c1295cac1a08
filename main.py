#!/usr/bin/env python3
"""Main entry point for running orderguard from a source checkout.

Example:
    python main.py --input request.txt
"""

from orderguard.cli import main

if __name__ == "__main__":
    main()
