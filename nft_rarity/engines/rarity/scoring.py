"""
Rarity Engine: Smoothed Information Content Scoring

Pure-function module. No I/O.
Takes a batch of tokens (and optionally its trait counts), returns the same
tokens with a `RarityResult` attached.

Architecture:
  - Per-attribute probability: Bayesian-smoothed blend of observed frequency
    and design prior (see estimator.py)
  - Token information content: sum of -log2(P) over its attributes
  - Collection mode: min-max rescale to [0, 100], percentile by sorted
    position, tier from percentile
  - Single-token mode: fixed scale IC * 10, tier from score. Approximate,
    not comparable with collection-mode tiers.

Attributes are treated as independent; IC is additive across trait types.
"""

import math
from dataclasses import replace
from typing import Iterable, List, Optional, Sequence

from nft_rarity.core.constants import (
    COLLECTION_TIERS, SINGLE_TOKEN_TIERS, BOTTOM_TIER,
    DEGENERATE_SCORE, SINGLETON_PERCENTILE, SINGLE_TOKEN_IC_SCALE,
    MODE_COLLECTION, MODE_SINGLE_TOKEN,
)
from nft_rarity.engines.rarity.estimator import estimate, get_smoothing_parameter
from nft_rarity.engines.rarity.frequencies import (
    aggregate_trait_frequencies, observed_count, trait_total,
)
from nft_rarity.ingestion.models import (
    Attribute, RarityComponent, RarityResult, Token, TraitCounts,
)


# ---------------------------------------------------------------------------
# 1. Information Content
# ---------------------------------------------------------------------------
def information_content(attributes: Iterable[Attribute], trait_counts: TraitCounts, total_minted: int) -> float:
    """
    IC(token) = sum over (T, v) of -log2(P(v)).

    A trait type absent from `trait_counts` uses `total_minted` as its
    denominator basis, which is what single-token scoring relies on.
    """
    alpha = get_smoothing_parameter(total_minted)
    ic = 0.0
    for attr in attributes:
        if attr.value is None:
            continue
        observed = observed_count(trait_counts, attr.trait_type, attr.value)
        total = trait_total(trait_counts, attr.trait_type) or total_minted
        p = estimate(attr.trait_type, attr.value, observed, total, alpha)
        if p > 0:
            ic += -math.log2(p)
    return ic


def _components(attributes, trait_counts, ic) -> tuple:
    # Every component carries the token's total IC, not a marginal share
    return tuple(
        RarityComponent(
            trait_type=attr.trait_type,
            value=attr.value,
            ic=ic,
            frequency=observed_count(trait_counts, attr.trait_type, attr.value),
            total=trait_total(trait_counts, attr.trait_type),
        )
        for attr in attributes
    )


# ---------------------------------------------------------------------------
# 2. Tiers
# ---------------------------------------------------------------------------
def _tier(value, thresholds) -> str:
    for floor, tier in thresholds:
        if value >= floor:
            return tier
    return BOTTOM_TIER


def get_collection_tier(percentile: int) -> str:
    return _tier(percentile, COLLECTION_TIERS)


def get_single_token_tier(score: float) -> str:
    return _tier(score, SINGLE_TOKEN_TIERS)


# ---------------------------------------------------------------------------
# 3. Normalization & Percentiles
# ---------------------------------------------------------------------------
def normalize_scores(ics: Sequence[float]) -> List[float]:
    """Rescale ICs into [0, 100]. A zero-width range maps everything to 50."""
    if not ics:
        return []
    min_ic, max_ic = min(ics), max(ics)
    ic_range = max_ic - min_ic
    if ic_range <= 0:
        return [DEGENERATE_SCORE] * len(ics)
    return [100 * (ic - min_ic) / ic_range for ic in ics]


def compute_percentiles(scores: Sequence[float]) -> List[int]:
    """
    Percentile of the token at ascending sorted position i is
    floor(i / (n - 1) * 100). Exact ties share the lowest position of
    their group. Results are returned in input order.
    """
    n = len(scores)
    if n == 0:
        return []
    if n == 1:
        return [SINGLETON_PERCENTILE]

    order = sorted(range(n), key=lambda idx: scores[idx])
    percentiles = [0] * n
    prev_score = None
    prev_percentile = 0
    for pos, idx in enumerate(order):
        if prev_score is not None and scores[idx] == prev_score:
            percentile = prev_percentile
        else:
            percentile = (pos * 100) // (n - 1)
        percentiles[idx] = percentile
        prev_score, prev_percentile = scores[idx], percentile
    return percentiles


# ---------------------------------------------------------------------------
# 4. Collection Mode
# ---------------------------------------------------------------------------
def compute_rarity_for_collection(tokens: Sequence[Token], trait_counts: Optional[TraitCounts] = None) -> List[Token]:
    """
    Score every token against the whole batch.

    Args:
        tokens: the full collection snapshot
        trait_counts: frequency table for `tokens`; built here when omitted

    Returns:
        new Token objects with `rarity` replaced, in the input order
    """
    if not tokens:
        return []
    if trait_counts is None:
        trait_counts = aggregate_trait_frequencies(tokens)

    total_minted = len(tokens)
    ics = [information_content(t.attributes, trait_counts, total_minted) for t in tokens]
    scores = normalize_scores(ics)
    percentiles = compute_percentiles(scores)

    scored = []
    for token, ic, score, percentile in zip(tokens, ics, scores, percentiles):
        rarity = RarityResult(
            score=round(score, 1),
            percentile=percentile,
            tier=get_collection_tier(percentile),
            mode=MODE_COLLECTION,
            components=_components(token.attributes, trait_counts, ic),
        )
        scored.append(replace(token, rarity=rarity))
    return scored


# ---------------------------------------------------------------------------
# 5. Single-Token Mode
# ---------------------------------------------------------------------------
def compute_rarity_for_token(attributes, trait_counts: Optional[TraitCounts], total_minted: int) -> RarityResult:
    """
    Estimate rarity for one token without ranking it against peers.

    The score is IC on a fixed scale and the percentile is just the rounded
    score. Use collection mode whenever the full batch is available; the two
    modes may disagree on a token's tier.
    """
    attrs = tuple(a if isinstance(a, Attribute) else Attribute(*a) for a in attributes)
    trait_counts = trait_counts or {}
    ic = information_content(attrs, trait_counts, total_minted)

    score = min(100.0, max(0.0, ic * SINGLE_TOKEN_IC_SCALE))
    return RarityResult(
        score=round(score, 1),
        percentile=int(round(score)),
        tier=get_single_token_tier(score),
        mode=MODE_SINGLE_TOKEN,
        components=_components(attrs, trait_counts, ic),
    )
