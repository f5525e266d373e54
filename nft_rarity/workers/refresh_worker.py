import asyncio
from typing import Optional

from nft_rarity.core.cache import RarityCache, RefreshError, get_rarity_cache
from nft_rarity.core.config import RARITY_REFRESH_INTERVAL_SECONDS
from nft_rarity.core.indexer import fetch_collection_tokens
from nft_rarity.core.logger import get_logger

logger = get_logger("workers.refresh")


async def run_refresh_once(cache: Optional[RarityCache] = None, loader=fetch_collection_tokens):
    """Single refresh. Failures are logged and the previous snapshot kept."""
    cache = cache or get_rarity_cache()
    try:
        outcome = await cache.refresh(loader)
    except RefreshError as e:
        logger.error(f"Rarity refresh failed: {e}")
        return None
    logger.info(f"Rarity refresh {outcome.status}: {outcome.tokens_processed} tokens")
    return outcome


async def run_worker_loop(cache: Optional[RarityCache] = None, interval: int = RARITY_REFRESH_INTERVAL_SECONDS):
    logger.info(f"Starting rarity refresh loop (every {interval}s)")
    try:
        while True:
            await run_refresh_once(cache)
            await asyncio.sleep(interval)
    except asyncio.CancelledError:
        logger.info("Refresh worker cancelled")
        raise


if __name__ == "__main__":
    try:
        asyncio.run(run_worker_loop())
    except KeyboardInterrupt:
        pass
