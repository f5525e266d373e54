from nft_rarity.engines.rarity.frequencies import aggregate_trait_frequencies
from nft_rarity.engines.rarity.scoring import (
    compute_rarity_for_collection,
    compute_rarity_for_token,
    information_content,
)

__all__ = [
    "aggregate_trait_frequencies",
    "compute_rarity_for_collection",
    "compute_rarity_for_token",
    "information_content",
]
