"""
Smoothed Probability Estimator

    P(v) = (c(v) + alpha * P0(v)) / (N_T + alpha)

c(v) is the observed count of the value, N_T the number of tokens carrying the
trait, P0 the design prior and alpha a smoothing strength that shrinks as the
collection grows.
"""

from nft_rarity.core.constants import SMOOTHING_STEPS, SMOOTHING_FLOOR
from nft_rarity.engines.rarity.priors import get_prior_probability


def get_smoothing_parameter(total_minted: int) -> int:
    for upper_bound, alpha in SMOOTHING_STEPS:
        if total_minted < upper_bound:
            return alpha
    return SMOOTHING_FLOOR


def smoothed_probability(observed_count, total_count, prior_probability, smoothing_parameter):
    numerator = observed_count + smoothing_parameter * prior_probability
    denominator = total_count + smoothing_parameter
    return numerator / denominator


def estimate(trait_type, value, observed_count, total_count, smoothing_parameter):
    """Smoothed probability with the prior looked up for (trait_type, value)."""
    prior = get_prior_probability(trait_type, value)
    return smoothed_probability(observed_count, total_count, prior, smoothing_parameter)
