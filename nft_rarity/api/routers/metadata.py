"""
Metadata Router
===============
Token metadata JSON referenced by the on-chain token URI.
"""
from fastapi import APIRouter, HTTPException

from nft_rarity.ingestion.metadata import generate_metadata

router = APIRouter(prefix="/nft", tags=["metadata"])


@router.get("/metadata/{token_id}")
async def get_metadata(token_id: str):
    try:
        seed = int(token_id)
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid token ID")
    if seed < 0:
        raise HTTPException(status_code=400, detail="Invalid token ID")
    return generate_metadata(seed)
