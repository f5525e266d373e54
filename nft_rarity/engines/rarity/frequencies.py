from typing import Iterable

from nft_rarity.ingestion.models import Token, TraitCounts


def aggregate_trait_frequencies(tokens: Iterable[Token]) -> TraitCounts:
    """
    Count, per trait type, how many tokens carry each value.
    Attributes with a missing value are skipped entirely.
    """
    counts: TraitCounts = {}
    for token in tokens:
        for attr in token.attributes:
            if attr.value is None:
                continue
            by_value = counts.setdefault(attr.trait_type, {})
            by_value[attr.value] = by_value.get(attr.value, 0) + 1
    return counts


def trait_total(trait_counts: TraitCounts, trait_type: str) -> int:
    """Number of tokens that have any value for `trait_type`."""
    return sum(trait_counts.get(trait_type, {}).values())


def observed_count(trait_counts: TraitCounts, trait_type: str, value) -> int:
    return trait_counts.get(trait_type, {}).get(value, 0)
