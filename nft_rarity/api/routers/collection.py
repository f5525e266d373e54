"""
Collection Router
=================
Trait aggregations and mint statistics, read live from the indexer.
"""
from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from nft_rarity.core.config import MAX_SUPPLY
from nft_rarity.core.constants import (
    TRAIT_BACKGROUND_COLOR, TRAIT_SHAPE, TRAIT_WORDS, BACKGROUND_COLORS, SHAPE_PRIORS,
)
from nft_rarity.core.indexer import IndexerError, fetch_collection_rows, get_total_minted
from nft_rarity.ingestion.parser import parse_token_description
import logging

logger = logging.getLogger("api.collection")
router = APIRouter(prefix="/collection", tags=["collection"])


def get_row_loader():
    return fetch_collection_rows


def get_minted_counter():
    return get_total_minted


def count_display_traits(rows) -> dict:
    """
    Trait counts for the filter UI. Unlike the scoring table, word
    combinations are split so each word is counted on its own, and
    unparseable fields are left out instead of defaulted.
    """
    counts = {TRAIT_BACKGROUND_COLOR: {}, TRAIT_SHAPE: {}, TRAIT_WORDS: {}}
    for row in rows:
        parsed = parse_token_description(row.get("description"))

        if parsed["background_color"]:
            bucket = counts[TRAIT_BACKGROUND_COLOR]
            bucket[parsed["background_color"]] = bucket.get(parsed["background_color"], 0) + 1

        if parsed["shape"]:
            bucket = counts[TRAIT_SHAPE]
            bucket[parsed["shape"]] = bucket.get(parsed["shape"], 0) + 1

        if parsed["words"]:
            bucket = counts[TRAIT_WORDS]
            for word in parsed["words"].split(" "):
                word = word.strip()
                if word:
                    bucket[word] = bucket.get(word, 0) + 1
    return counts


def default_display_traits() -> dict:
    # Words are too numerous to pre-populate
    return {
        TRAIT_BACKGROUND_COLOR: {color: 0 for color in BACKGROUND_COLORS},
        TRAIT_SHAPE: {shape: 0 for shape in SHAPE_PRIORS},
        TRAIT_WORDS: {},
    }


@router.get("/traits")
async def get_collection_traits(loader=Depends(get_row_loader)):
    try:
        rows = await loader()
    except IndexerError as e:
        logger.error(f"Error fetching collection traits: {e}")
        return JSONResponse(status_code=500, content={
            "error": "Unable to fetch collection traits",
            "details": str(e),
        })

    total_minted = len(rows)
    traits = count_display_traits(rows) if total_minted else default_display_traits()
    return {
        "traits": traits,
        "stats": {
            "totalSupply": MAX_SUPPLY,
            "totalMinted": total_minted,
            "lastUpdated": datetime.now(timezone.utc).isoformat(),
        },
    }


@router.get("/stats")
async def get_collection_stats(counter=Depends(get_minted_counter)):
    try:
        total_minted = await counter()
    except IndexerError as e:
        logger.error(f"Error fetching collection stats: {e}")
        return {
            "totalSupply": MAX_SUPPLY,
            "totalMinted": 0,
            "remaining": MAX_SUPPLY,
            "lastUpdated": datetime.now(timezone.utc).isoformat(),
            "error": "Unable to fetch live data",
        }

    return {
        "totalSupply": MAX_SUPPLY,
        "totalMinted": total_minted,
        "remaining": max(0, MAX_SUPPLY - total_minted),
        "lastUpdated": datetime.now(timezone.utc).isoformat(),
    }
