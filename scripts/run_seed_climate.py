#!/usr/bin/env python3
"""
One-off script to seed the county climate store.

Usage (inside the API container):
    python scripts/run_seed_climate.py
"""
import asyncio
import logging
import sys

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s  %(levelname)-8s  %(name)s: %(message)s",
    stream=sys.stdout,
)

from app.tasks.seed_climate import seed_climate


async def main() -> None:
    print("Seeding county climate profiles...\n")
    count = await seed_climate(ctx={})
    print(f"\nDone — {count} counties written.")


if __name__ == "__main__":
    asyncio.run(main())
