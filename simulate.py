#!/usr/bin/env python3
"""
Convenience entry point for headless runs.

Usage:
    python simulate.py                          # Defaults from config/boids.py
    python simulate.py --ticks 2000 --seed 7    # Reproducible run
"""

import sys

from tools.simulate import main

if __name__ == "__main__":
    sys.exit(main())
