#!/usr/bin/env python3
"""
Test the HTTP routers with the indexer replaced by in-memory loaders.

Tests:
1. Rarity refresh / snapshot / token / estimate endpoints
2. Refresh error and in_progress responses
3. Collection traits (live counts and empty-collection defaults) and stats
4. Metadata endpoint validation
5. Health check on the assembled app
"""
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from nft_rarity.api.routers import collection, metadata, rarity
from nft_rarity.core.cache import RarityCache, RefreshOutcome, get_rarity_cache
from nft_rarity.core.constants import TRAIT_BACKGROUND_COLOR, TRAIT_SHAPE, TRAIT_WORDS
from nft_rarity.core.indexer import IndexerError
from nft_rarity.ingestion.parser import token_from_indexer_row
from nft_rarity.main import app as main_app

ROWS = [
    {
        "token_name": "Retro NFT #1",
        "description": "A unique retro 80s NFT with #FF0080 background, Infinity shape, and words: NEON GLOW WAVE",
        "last_transaction_timestamp": "2025-01-08T12:00:00",
    },
    {
        "token_name": "Retro NFT #2",
        "description": "A unique retro 80s NFT with #FF0080 background, Circle shape, and words: NEON CODE DATA",
        "last_transaction_timestamp": "2025-01-08T12:05:00",
    },
    {
        "token_name": "Retro NFT #3",
        "description": "A unique retro 80s NFT with #0080FF background, Circle shape, and words: VOID NOVA RAGE",
        "last_transaction_timestamp": "2025-01-08T12:10:00",
    },
]


async def fake_rows():
    return ROWS


async def fake_tokens():
    return [token_from_indexer_row(r) for r in ROWS]


async def broken_loader():
    raise IndexerError("Indexer API error: 503")


class BusyCache(RarityCache):
    async def refresh(self, loader):
        return RefreshOutcome(status="in_progress", last_updated="2025-01-08T00:00:00+00:00")


@pytest.fixture
def cache():
    return RarityCache()


@pytest.fixture
def client(cache):
    app = FastAPI()
    app.include_router(rarity.router)
    app.include_router(collection.router)
    app.include_router(metadata.router)
    app.dependency_overrides[get_rarity_cache] = lambda: cache
    app.dependency_overrides[rarity.get_token_loader] = lambda: fake_tokens
    app.dependency_overrides[collection.get_row_loader] = lambda: fake_rows
    return TestClient(app)


# ---------------------------------------------------------------------------
# Rarity
# ---------------------------------------------------------------------------
def test_rarity_unavailable_before_refresh(client):
    assert client.get("/rarity/").status_code == 503
    assert client.get("/rarity/token/1").status_code == 503


def test_refresh_then_read(client):
    response = client.post("/rarity/refresh")
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "updated"
    assert body["tokensProcessed"] == 3

    snapshot = client.get("/rarity/").json()
    assert snapshot["totalMinted"] == 3
    assert [t["tokenId"] for t in snapshot["tokens"]] == ["1", "2", "3"]
    assert snapshot["traitCounts"][TRAIT_SHAPE] == {"Infinity": 1, "Circle": 2}

    token = client.get("/rarity/token/1").json()
    assert token["rarity"]["tier"] == "S"
    assert token["rarity"]["mode"] == "collection"
    assert len(token["rarity"]["components"]) == 3


def test_refresh_accepts_get(client):
    assert client.get("/rarity/refresh").json()["status"] == "updated"


def test_unknown_token_is_404(client):
    client.post("/rarity/refresh")
    assert client.get("/rarity/token/999").status_code == 404


def test_refresh_error_response(client, cache):
    client.app.dependency_overrides[rarity.get_token_loader] = lambda: broken_loader
    response = client.post("/rarity/refresh")

    assert response.status_code == 500
    body = response.json()
    assert body["status"] == "error"
    assert "503" in body["details"]
    assert body["lastUpdated"] is None
    assert cache.snapshot is None


def test_refresh_in_progress_response(client):
    busy = BusyCache()
    client.app.dependency_overrides[get_rarity_cache] = lambda: busy
    body = client.post("/rarity/refresh").json()

    assert body["status"] == "in_progress"
    assert body["message"] == "Rarity update already in progress"
    assert body["lastUpdated"] == "2025-01-08T00:00:00+00:00"


def test_estimate_without_population(client):
    response = client.post("/rarity/estimate", json={
        "attributes": [
            {"trait_type": TRAIT_SHAPE, "value": "Circle"},
            {"trait_type": TRAIT_BACKGROUND_COLOR, "value": "#FF0080"},
        ]
    })
    assert response.status_code == 200
    body = response.json()
    assert body["rarity"]["mode"] == "single_token"
    assert body["rarity"]["tier"] == "B"
    assert body["basedOn"] == {"totalMinted": 0, "calculatedAt": None}


def test_estimate_uses_cached_counts(client):
    client.post("/rarity/refresh")
    body = client.post("/rarity/estimate", json={
        "attributes": [{"trait_type": TRAIT_SHAPE, "value": "Circle"}]
    }).json()

    component = body["rarity"]["components"][0]
    assert component["frequency"] == 2
    assert component["total"] == 3
    assert body["basedOn"]["totalMinted"] == 3


def test_estimate_rejects_bad_payload(client):
    assert client.post("/rarity/estimate", json={"attributes": "Circle"}).status_code == 422


# ---------------------------------------------------------------------------
# Collection
# ---------------------------------------------------------------------------
def test_collection_traits_counts_words_individually(client):
    body = client.get("/collection/traits").json()
    traits = body["traits"]

    assert traits[TRAIT_BACKGROUND_COLOR] == {"#FF0080": 2, "#0080FF": 1}
    assert traits[TRAIT_SHAPE] == {"Infinity": 1, "Circle": 2}
    assert traits[TRAIT_WORDS]["NEON"] == 2
    assert traits[TRAIT_WORDS]["RAGE"] == 1
    assert body["stats"]["totalMinted"] == 3


def test_collection_traits_defaults_when_empty(client):
    async def no_rows():
        return []

    client.app.dependency_overrides[collection.get_row_loader] = lambda: no_rows
    body = client.get("/collection/traits").json()

    assert len(body["traits"][TRAIT_BACKGROUND_COLOR]) == 13
    assert len(body["traits"][TRAIT_SHAPE]) == 13
    assert set(body["traits"][TRAIT_SHAPE].values()) == {0}
    assert body["traits"][TRAIT_WORDS] == {}
    assert body["stats"]["totalMinted"] == 0


def test_collection_traits_indexer_error(client):
    client.app.dependency_overrides[collection.get_row_loader] = lambda: broken_loader
    response = client.get("/collection/traits")
    assert response.status_code == 500
    assert response.json()["error"] == "Unable to fetch collection traits"


def test_collection_stats(client):
    async def minted():
        return 42

    client.app.dependency_overrides[collection.get_minted_counter] = lambda: minted
    body = client.get("/collection/stats").json()

    assert body["totalMinted"] == 42
    assert body["remaining"] == body["totalSupply"] - 42


def test_collection_stats_falls_back_when_indexer_fails(client):
    client.app.dependency_overrides[collection.get_minted_counter] = lambda: broken_loader
    response = client.get("/collection/stats")

    assert response.status_code == 200
    body = response.json()
    assert body["totalMinted"] == 0
    assert body["remaining"] == body["totalSupply"]
    assert body["error"] == "Unable to fetch live data"
    assert "lastUpdated" in body


# ---------------------------------------------------------------------------
# Metadata
# ---------------------------------------------------------------------------
def test_metadata(client):
    body = client.get("/nft/metadata/8").json()
    assert body["name"] == "Retro NFT #8"
    assert body["attributes"][1] == {"trait_type": TRAIT_SHAPE, "value": "Square"}


@pytest.mark.parametrize("token_id", ["abc", "-1"])
def test_metadata_invalid_id(client, token_id):
    assert client.get(f"/nft/metadata/{token_id}").status_code == 400


# ---------------------------------------------------------------------------
# App
# ---------------------------------------------------------------------------
def test_health():
    cache = RarityCache()
    main_app.dependency_overrides[get_rarity_cache] = lambda: cache
    try:
        body = TestClient(main_app).get("/health").json()
    finally:
        main_app.dependency_overrides.clear()

    assert body["status"] == "ok"
    assert body["rarity_loaded"] is False
    assert body["rarity_updating"] is False
