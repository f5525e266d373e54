"""
Retro NFT Rarity API
====================
Main application entry point. Mounts all routers and, when enabled, runs the
periodic rarity refresh alongside the app.
"""
import asyncio
from contextlib import asynccontextmanager, suppress

from fastapi import FastAPI, Depends

from nft_rarity.api.routers import collection, metadata, rarity
from nft_rarity.core.cache import RarityCache, get_rarity_cache
from nft_rarity.core.config import REFRESH_ON_STARTUP
from nft_rarity.workers.refresh_worker import run_worker_loop
import logging

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("nft_rarity.main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    worker = None
    if REFRESH_ON_STARTUP:
        worker = asyncio.create_task(run_worker_loop(get_rarity_cache()))
    logger.info("Application startup complete.")
    yield
    if worker:
        worker.cancel()
        with suppress(asyncio.CancelledError):
            await worker
    logger.info("Application shutdown complete.")


app = FastAPI(title="Retro NFT Rarity API", version="1.0.0", lifespan=lifespan)

# ----- Mount Routers -----
# Rarity snapshot + refresh: serves /rarity/*
app.include_router(rarity.router)

# Trait aggregations + mint stats: serves /collection/*
app.include_router(collection.router)

# Token metadata: serves /nft/*
app.include_router(metadata.router)


# ----- Health Check -----
@app.get("/health")
async def health_check(cache: RarityCache = Depends(get_rarity_cache)):
    return {
        "status": "ok",
        "rarity_loaded": cache.snapshot is not None,
        "rarity_updating": cache.is_updating,
        "last_updated": cache.last_updated,
    }
