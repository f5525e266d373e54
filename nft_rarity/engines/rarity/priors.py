"""
Prior Distributions

Each trait type maps to a strategy that returns the design-time probability
of a value. Unknown trait types resolve to FALLBACK_PRIOR.
"""

from dataclasses import dataclass
from typing import Dict, Optional

from nft_rarity.core.constants import (
    TRAIT_SHAPE, TRAIT_BACKGROUND_COLOR, TRAIT_WORDS,
    SHAPE_PRIORS, BACKGROUND_COLOR_PRIOR, WORD_COMBINATION_PRIOR, FALLBACK_PRIOR,
)


@dataclass(frozen=True)
class DiscretePrior:
    """Per-value probability table. Values outside the table get `missing`."""
    table: Dict[str, float]
    missing: float = FALLBACK_PRIOR

    def probability(self, value: Optional[str]) -> float:
        return self.table.get(value, self.missing)


@dataclass(frozen=True)
class ConstantPrior:
    """Same probability for every value."""
    value: float

    def probability(self, value: Optional[str]) -> float:
        return self.value


PRIOR_STRATEGIES = {
    TRAIT_SHAPE: DiscretePrior(SHAPE_PRIORS),
    TRAIT_BACKGROUND_COLOR: ConstantPrior(BACKGROUND_COLOR_PRIOR),
    TRAIT_WORDS: ConstantPrior(WORD_COMBINATION_PRIOR),
}

UNKNOWN_TRAIT_PRIOR = ConstantPrior(FALLBACK_PRIOR)


def get_prior_probability(trait_type: str, value: Optional[str]) -> float:
    strategy = PRIOR_STRATEGIES.get(trait_type, UNKNOWN_TRAIT_PRIOR)
    return strategy.probability(value)
