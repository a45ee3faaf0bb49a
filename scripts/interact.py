#!/usr/bin/env python3
"""
MetaCoin Interaction Script

Usage (after `pip install -e .` from the repository root):
    python scripts/interact.py [development|sepolia|holesky]
"""

import asyncio

from metacoin.interact import main

if __name__ == "__main__":
    asyncio.run(main())
