"""
Token Description Parser
========================
Turns indexer rows into canonical Tokens. On-chain descriptions look like:

    A unique retro 80s NFT with #FF0080 background, Circle shape, and words: NEON GLOW WAVE
"""
import re
from typing import Dict, Optional
from urllib.parse import quote

from nft_rarity.core.config import IMAGE_BASE_URL
from nft_rarity.core.constants import (
    TRAIT_BACKGROUND_COLOR, TRAIT_SHAPE, TRAIT_WORDS,
    DEFAULT_BACKGROUND_COLOR, DEFAULT_SHAPE, DEFAULT_WORDS, TOKEN_NAME_PREFIX,
)
from nft_rarity.ingestion.models import Token, make_attributes

BACKGROUND_RE = re.compile(r"(#[A-Fa-f0-9]{6}) background")
SHAPE_RE = re.compile(r"background, (\w+) shape")
WORDS_RE = re.compile(r"words: (.+)$")
TOKEN_ID_RE = re.compile(re.escape(TOKEN_NAME_PREFIX) + r"(\d+)")


def parse_token_description(description: Optional[str]) -> Dict[str, Optional[str]]:
    """Extract background colour, shape and word combination. Missing parts are None."""
    if not description:
        return {"background_color": None, "shape": None, "words": None}

    bg = BACKGROUND_RE.search(description)
    shape = SHAPE_RE.search(description)
    words = WORDS_RE.search(description)
    return {
        "background_color": bg.group(1) if bg else None,
        "shape": shape.group(1) if shape else None,
        "words": words.group(1).strip() if words else None,
    }


def extract_token_id(token_name: Optional[str]) -> str:
    match = TOKEN_ID_RE.search(token_name or "")
    return match.group(1) if match else "0"


def image_url_for(background_color: str, shape: str, words: str) -> str:
    bg = background_color.lstrip("#")
    return f"{IMAGE_BASE_URL}?bg={bg}&shape={shape}&words={quote(words, safe='')}"


def token_from_indexer_row(row: dict) -> Token:
    """
    Build a Token from a `current_token_datas_v2` row.
    Unparseable fields stay None so they are never counted or scored; the
    collection defaults are only used to render the image URL.
    """
    parsed = parse_token_description(row.get("description"))
    token_id = extract_token_id(row.get("token_name"))

    bg, shape, words = parsed["background_color"], parsed["shape"], parsed["words"]

    return Token(
        token_id=token_id,
        name=row.get("token_name") or f"{TOKEN_NAME_PREFIX}{token_id}",
        image=image_url_for(
            bg or DEFAULT_BACKGROUND_COLOR,
            shape or DEFAULT_SHAPE,
            words or DEFAULT_WORDS,
        ),
        minted_at=row.get("last_transaction_timestamp"),
        attributes=make_attributes([
            (TRAIT_BACKGROUND_COLOR, bg),
            (TRAIT_SHAPE, shape),
            (TRAIT_WORDS, words),
        ]),
    )
