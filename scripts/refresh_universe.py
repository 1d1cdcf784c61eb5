# scripts/refresh_universe.py

import asyncio
import sys
import argparse
from pathlib import Path

# Hack to make local packages importable without installing them globally
sys.path.append(str(Path(__file__).resolve().parents[1]))

from apps.api_server.services.universe_store import refresh_universe
from packages.database.session import create_tables, dispose_engine, get_db_session
from packages.quant_lib.config import settings
from packages.quant_lib.logging import LogManager
from packages.screener.cache import build_query_cache
from packages.screener.seed import seed_records

# Simple logger for this script
log_manager = LogManager("universe-refresh", debug=True, log_dir=settings.system.log_path)
logger = log_manager.get_logger("main")


async def main():
    parser = argparse.ArgumentParser(description="Screener Universe Refresh")
    parser.add_argument(
        "--create-tables",
        action="store_true",
        help="Create missing tables first (dev only; use 'alembic upgrade head' in prod).",
    )
    parser.add_argument(
        "--skip-cache-clear",
        action="store_true",
        help="Leave cached query pages in Redis untouched.",
    )
    args = parser.parse_args()

    logger.info(f"Connecting to Postgres at {settings.db.host}...")

    if args.create_tables:
        logger.info("Creating missing tables...")
        await create_tables()

    query_cache = None if args.skip_cache_clear else build_query_cache(settings.cache)

    try:
        records = seed_records()
        async with get_db_session() as session:
            count = await refresh_universe(session, records, query_cache=query_cache)
        logger.success(f"✅ Screener universe refreshed: {count} records.")
    except Exception:
        logger.exception("CRITICAL FAILURE during universe refresh")
        raise
    finally:
        if query_cache is not None:
            await query_cache.close()
        await dispose_engine()


if __name__ == "__main__":
    asyncio.run(main())
