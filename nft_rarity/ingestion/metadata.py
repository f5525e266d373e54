"""
Deterministic token metadata, derived from the token id alone so the
metadata URI can be served without touching the chain.
"""
import math

from nft_rarity.core.constants import (
    TRAIT_BACKGROUND_COLOR, TRAIT_SHAPE, TRAIT_WORDS, SHAPE_PRIORS, TOKEN_NAME_PREFIX,
)
from nft_rarity.ingestion.parser import image_url_for

METADATA_BACKGROUND_COLORS = ["#FF0080", "#0080FF", "#FF8000", "#8000FF", "#00FF80"]

# Insertion order of SHAPE_PRIORS is the contract's shape order
METADATA_SHAPES = list(SHAPE_PRIORS)

FOUR_LETTER_WORDS = [
    "NEON", "GLOW", "WAVE", "SYNC", "FLUX", "BEAM", "CORE", "VOLT", "ECHO", "RUSH",
    "FIRE", "VOID", "NOVA", "RAGE", "VIBE", "HACK", "CODE", "DATA", "LINK", "MESH",
    "NODE", "PEAK", "EDGE", "FLOW", "GRID", "HYPE", "IRIS", "JADE", "KILO", "LOOP",
    "MEGA", "NULL", "APEX", "BYTE", "CHIP", "DEMO", "EXIT", "FAST", "GAME", "HOST",
    "ICON", "JUMP", "KICK", "LITE", "MODE", "NEXT", "OPEN", "PING", "QUIT", "ROOT",
    "SAVE", "TECH", "USER", "VIEW", "WIFI", "ZOOM", "ABLE", "BOLD", "CALM", "DEEP",
    "EPIC", "FREE", "GOOD", "HIGH", "JUST", "KEEN", "LIVE", "MILD", "NICE", "ONLY",
    "PURE", "REAL", "SOFT", "TRUE", "VAST", "WISE", "ZERO", "SAGE",
]

GOLDEN_RATIO = 1.618
WORD_DIVISORS = (1, 17, 23)


def generate_traits(seed: int) -> dict:
    background_color = METADATA_BACKGROUND_COLORS[seed % len(METADATA_BACKGROUND_COLORS)]
    shape = METADATA_SHAPES[(seed // 7) % len(METADATA_SHAPES)]

    word_seed = math.floor(seed * GOLDEN_RATIO)
    words = " ".join(
        FOUR_LETTER_WORDS[(word_seed // d) % len(FOUR_LETTER_WORDS)] for d in WORD_DIVISORS
    )
    return {"background_color": background_color, "shape": shape, "words": words}


def generate_metadata(token_id: int) -> dict:
    traits = generate_traits(token_id)
    bg, shape, words = traits["background_color"], traits["shape"], traits["words"]
    return {
        "name": f"{TOKEN_NAME_PREFIX}{token_id}",
        "description": (
            f"A unique retro 80s NFT with {bg} background, {shape} shape, and words: {words}"
        ),
        "image": image_url_for(bg, shape, words),
        "attributes": [
            {"trait_type": TRAIT_BACKGROUND_COLOR, "value": bg},
            {"trait_type": TRAIT_SHAPE, "value": shape},
            {"trait_type": TRAIT_WORDS, "value": words},
        ],
    }
