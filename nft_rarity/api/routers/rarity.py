"""
Rarity Router
=============
Serves the cached rarity snapshot and triggers refreshes.

Endpoints:
- /rarity/ - Current snapshot (all tokens with rarity + trait counts)
- /rarity/token/{token_id} - Cached rarity for one token
- /rarity/refresh - Recompute from the indexer (single-flight)
- /rarity/estimate - Single-token estimate for arbitrary attributes
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from nft_rarity.core.cache import (
    RarityCache, RefreshError, get_rarity_cache, STATUS_IN_PROGRESS,
)
from nft_rarity.core.indexer import fetch_collection_tokens
from nft_rarity.engines.rarity import compute_rarity_for_token
from nft_rarity.ingestion.models import Attribute
import logging

logger = logging.getLogger("api.rarity")
router = APIRouter(prefix="/rarity", tags=["rarity"])


class AttributeIn(BaseModel):
    trait_type: str
    value: Optional[str] = None


class EstimateRequest(BaseModel):
    attributes: List[AttributeIn]


def get_token_loader():
    return fetch_collection_tokens


@router.get("/")
async def get_rarity(cache: RarityCache = Depends(get_rarity_cache)):
    snapshot = cache.snapshot
    if snapshot is None:
        raise HTTPException(status_code=503, detail="Rarity data not computed yet")
    return snapshot.to_dict()


@router.get("/token/{token_id}")
async def get_token_rarity(token_id: str, cache: RarityCache = Depends(get_rarity_cache)):
    snapshot = cache.snapshot
    if snapshot is None:
        raise HTTPException(status_code=503, detail="Rarity data not computed yet")
    token = snapshot.get(token_id)
    if token is None:
        raise HTTPException(status_code=404, detail=f"Token {token_id} not found")
    return token.to_dict()


@router.api_route("/refresh", methods=["GET", "POST"])
async def refresh_rarity(
    cache: RarityCache = Depends(get_rarity_cache),
    loader=Depends(get_token_loader),
):
    """Admin/cron trigger. Answers `in_progress` while another refresh runs."""
    try:
        outcome = await cache.refresh(loader)
    except RefreshError as e:
        logger.error(f"Error refreshing rarity data: {e}")
        return JSONResponse(status_code=500, content={
            "status": "error",
            "error": "Unable to refresh rarity data",
            "details": str(e),
            "lastUpdated": cache.last_updated,
        })

    if outcome.status == STATUS_IN_PROGRESS:
        return {
            "status": outcome.status,
            "message": "Rarity update already in progress",
            "lastUpdated": outcome.last_updated,
        }
    return {
        "status": outcome.status,
        "updatedAt": outcome.last_updated,
        "tokensProcessed": outcome.tokens_processed,
        "message": "Rarity data refreshed successfully",
    }


@router.post("/estimate")
async def estimate_rarity(payload: EstimateRequest, cache: RarityCache = Depends(get_rarity_cache)):
    """
    Rough rarity for attributes outside the cached batch (e.g. a fresh mint).
    Not a population percentile; `mode` is `single_token`.
    """
    snapshot = cache.snapshot
    trait_counts = snapshot.trait_counts if snapshot else {}
    total_minted = snapshot.total_minted if snapshot else 0

    attributes = [Attribute(trait_type=a.trait_type, value=a.value) for a in payload.attributes]
    result = compute_rarity_for_token(attributes, trait_counts, total_minted)
    return {
        "rarity": result.to_dict(),
        "basedOn": {"totalMinted": total_minted, "calculatedAt": cache.last_updated},
    }
