#!/usr/bin/env python3
"""
run.py - Main entry point for gravity4

Examples:
    python run.py play --difficulty hard --mode inverse --ai-level hard
    python run.py play --opponent human --name Ada --name2 Linus
    python run.py benchmark --games 10 --seed 1
"""

import os
import sys

# Add the project root to Python path so the package imports without installation
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from gravity4.interfaces.cli import main  # noqa: E402

if __name__ == "__main__":
    sys.exit(main())
