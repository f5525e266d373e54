"""
Aptos Indexer Client
====================
Fetches collection tokens from the Aptos GraphQL indexer and the minted
count from the collection contract's view function.
"""
import logging
from typing import List

import httpx

from nft_rarity.core.config import (
    INDEXER_API_URL, FULLNODE_API_URL, COLLECTION_NAME, MODULE_ADDRESS,
    INDEXER_TIMEOUT_SECONDS, INDEXER_TOKEN_LIMIT,
)
from nft_rarity.ingestion.models import Token
from nft_rarity.ingestion.parser import token_from_indexer_row

logger = logging.getLogger("core.indexer")

COLLECTION_TOKENS_QUERY = """
query GetAllCollectionTokens($collection_name: String!, $limit: Int!) {
  current_token_datas_v2(
    where: { collection_name: { _eq: $collection_name } }
    limit: $limit
    order_by: { token_name: asc }
  ) {
    token_name
    token_data_id
    token_uri
    description
    last_transaction_timestamp
  }
}
"""

COLLECTION_COUNT_QUERY = """
query GetCollectionStats($collection_name: String!) {
  current_token_datas_v2_aggregate(
    where: { collection_name: { _eq: $collection_name } }
  ) {
    aggregate { count }
  }
}
"""


class IndexerError(Exception):
    """Indexer unreachable, non-2xx, or GraphQL errors in the body."""


async def _graphql(query: str, variables: dict) -> dict:
    try:
        async with httpx.AsyncClient(timeout=INDEXER_TIMEOUT_SECONDS) as client:
            resp = await client.post(INDEXER_API_URL, json={"query": query, "variables": variables})
            resp.raise_for_status()
            data = resp.json()
    except httpx.HTTPError as e:
        raise IndexerError(f"Indexer API error: {e}") from e

    if data.get("errors"):
        raise IndexerError(f"GraphQL errors: {data['errors']}")
    return data.get("data") or {}


async def fetch_collection_rows(collection_name: str = COLLECTION_NAME) -> List[dict]:
    data = await _graphql(
        COLLECTION_TOKENS_QUERY,
        {"collection_name": collection_name, "limit": INDEXER_TOKEN_LIMIT},
    )
    return data.get("current_token_datas_v2") or []


async def fetch_collection_tokens(collection_name: str = COLLECTION_NAME) -> List[Token]:
    """Every minted token of the collection as a canonical Token."""
    rows = await fetch_collection_rows(collection_name)
    logger.info(f"Fetched {len(rows)} tokens for collection {collection_name}")
    return [token_from_indexer_row(r) for r in rows]


async def get_total_minted() -> int:
    """
    Minted count from the contract view function, falling back to the
    indexer aggregate when the fullnode call fails or reports zero.
    """
    total = 0
    try:
        async with httpx.AsyncClient(timeout=INDEXER_TIMEOUT_SECONDS) as client:
            resp = await client.post(f"{FULLNODE_API_URL}/view", json={
                "function": f"{MODULE_ADDRESS}::retro_nft_generator_da::get_total_minted",
                "type_arguments": [],
                "arguments": [],
            })
            resp.raise_for_status()
            total = int(resp.json()[0])
    except (httpx.HTTPError, ValueError, IndexError, KeyError, TypeError) as e:
        logger.warning(f"Contract view failed, falling back to indexer: {e}")

    if total == 0:
        data = await _graphql(COLLECTION_COUNT_QUERY, {"collection_name": COLLECTION_NAME})
        total = (
            data.get("current_token_datas_v2_aggregate", {})
            .get("aggregate", {})
            .get("count", 0)
        )
    return int(total)
