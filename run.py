#!/usr/bin/env python3
"""
run.py - Main entry point for FlipFour

Examples:
    python run.py play --difficulty normal
    python run.py play --ai --difficulty hard
    python run.py --debug-level info benchmark --iterations 500
"""

import os
import sys

# Add the project root to Python path to ensure imports work
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from flipfour.interfaces.cli import main


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        print("\nInterrupted.")
        sys.exit(130)
