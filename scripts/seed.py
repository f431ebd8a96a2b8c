"""Seed script: loads the sample CSVs through the import pipeline for dev.

Node files go first so the relationship file can resolve its endpoints.
Running it twice duplicates the nodes; relationships are merged.
"""
import asyncio
import sys
import os
from pathlib import Path

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "backend"))

from app.core.config import settings
from app.core.logging import setup_logging
from app.db.graph import GraphStore
from app.db.session import create_driver
from app.ingestion.orchestrator import import_csv

SAMPLE_DIR = Path(__file__).parent / "sample_data"
SAMPLE_FILES = ["nodes.csv", "providers.csv", "invoices.csv", "relations.csv"]


async def seed():
    setup_logging()
    driver = create_driver()
    try:
        async with driver.session(database=settings.NEO4J_DATABASE) as session:
            store = GraphStore(session)
            for name in SAMPLE_FILES:
                outcome = await import_csv(store, name, (SAMPLE_DIR / name).read_bytes())
                print(f"  {outcome.message} ({outcome.rows_skipped} skipped, {outcome.rows_failed} failed)")
        print("Seed complete.")
    finally:
        await driver.close()


if __name__ == "__main__":
    asyncio.run(seed())
