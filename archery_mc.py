#!/usr/bin/env python3
"""
Archery-accuracy Monte Carlo simulation.

This script is a thin wrapper around the ``archery_mc`` package.
All logic lives in archery_mc/ so that ``python archery_mc.py 1.5 2.0 -L``
and ``python -m archery_mc 1.5 2.0 -L`` behave the same.
"""

from archery_mc.cli import main

if __name__ == "__main__":
    main()
