#!/usr/bin/env python3
"""
Test single-token rarity estimation.

Tests:
1. Fixed-scale score and tier thresholds
2. Prior-only estimate when no population exists
3. Common attributes never land in a top tier
4. Result is flagged as an estimate
"""
import math

import pytest

from nft_rarity.core.constants import TRAIT_BACKGROUND_COLOR, TRAIT_SHAPE, TRAIT_WORDS
from nft_rarity.engines.rarity import compute_rarity_for_token
from nft_rarity.engines.rarity.scoring import get_single_token_tier
from nft_rarity.ingestion.models import Attribute


COMMON_COUNTS = {
    TRAIT_BACKGROUND_COLOR: {"#FF0080": 600, "#0080FF": 400},
    TRAIT_SHAPE: {"Circle": 700, "Square": 300},
}


@pytest.mark.parametrize("score,tier", [
    (100, "S"), (80, "S"), (79.9, "A"), (65, "A"), (64.9, "B"),
    (45, "B"), (44.9, "C"), (25, "C"), (24.9, "D"), (0, "D"),
])
def test_single_token_tier_boundaries(score, tier):
    assert get_single_token_tier(score) == tier


def test_prior_only_estimate():
    result = compute_rarity_for_token(
        [(TRAIT_SHAPE, "Circle"), (TRAIT_BACKGROUND_COLOR, "#FF0080")], {}, 0
    )
    ic = -math.log2(0.256) - math.log2(1 / 13)

    assert result.score == round(ic * 10, 1)
    assert result.percentile == round(ic * 10)
    assert result.tier == "B"
    assert result.mode == "single_token"
    assert all(c.ic == pytest.approx(ic) for c in result.components)
    assert all(c.frequency == 0 and c.total == 0 for c in result.components)


def test_common_attributes_rank_low():
    attributes = [
        Attribute(TRAIT_BACKGROUND_COLOR, "#FF0080"),
        Attribute(TRAIT_SHAPE, "Circle"),
    ]
    result = compute_rarity_for_token(attributes, COMMON_COUNTS, 1000)

    assert result.tier in ("C", "D")
    assert result.tier != "S"
    assert 0 <= result.score < 25


def test_score_is_clamped():
    # Word combinations alone carry ~20 bits against the prior
    result = compute_rarity_for_token([(TRAIT_WORDS, "NEON GLOW WAVE")], {}, 0)
    assert result.score == 100.0
    assert result.percentile == 100
    assert result.tier == "S"


def test_no_attributes():
    result = compute_rarity_for_token([], COMMON_COUNTS, 1000)
    assert result.score == 0.0
    assert result.percentile == 0
    assert result.tier == "D"
    assert result.components == ()


def test_components_report_population_counts():
    result = compute_rarity_for_token(
        [Attribute(TRAIT_SHAPE, "Square")], COMMON_COUNTS, 1000
    )
    component = result.components[0]
    assert component.trait_type == TRAIT_SHAPE
    assert component.value == "Square"
    assert component.frequency == 300
    assert component.total == 1000


def test_to_dict_shape():
    result = compute_rarity_for_token([(TRAIT_SHAPE, "Star")], {}, 0)
    data = result.to_dict()
    assert set(data) == {"score", "percentile", "tier", "mode", "components"}
    assert data["components"][0]["trait_type"] == TRAIT_SHAPE
