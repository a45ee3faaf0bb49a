#!/usr/bin/env python3
"""
MetaCoin Deployment Script

Usage (after `pip install -e .` from the repository root):
    python scripts/deploy.py [development|sepolia|holesky]
"""

import asyncio

from metacoin.deployer import main

if __name__ == "__main__":
    asyncio.run(main())
