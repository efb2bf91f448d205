"""
Statistical comparison of two prediction strategies.

The p-value is a pooled two-proportion z-test (two-tailed, normal
approximation via scipy). Samples smaller than ``MIN_SAMPLE_SIZE`` per
model are never tested and report p = 1.0.
"""

import math

from scipy.stats import norm

from prediction_accuracy.domain.entities.comparison import (
    TIE,
    ModelPerformance,
    SignificanceResult,
)

MIN_SAMPLE_SIZE = 30
SIGNIFICANCE_LEVEL = 0.05
TIE_BAND = 0.02
FALLBACK_STD = 0.2


def two_proportion_test(p1: float, n1: int, p2: float, n2: int) -> SignificanceResult:
    result = SignificanceResult(effect_size=effect_size(p1, n1, p2, n2))
    if n1 < MIN_SAMPLE_SIZE or n2 < MIN_SAMPLE_SIZE:
        return result

    pooled = (p1 * n1 + p2 * n2) / (n1 + n2)
    if pooled <= 0.0 or pooled >= 1.0:
        result.sufficient_data = True
        return result

    se = math.sqrt(pooled * (1.0 - pooled) * (1.0 / n1 + 1.0 / n2))
    z = abs(p1 - p2) / se
    p_value = float(2.0 * norm.sf(z))

    result.sufficient_data = True
    result.z_score = z
    result.p_value = min(1.0, p_value)
    result.is_significant = result.p_value < SIGNIFICANCE_LEVEL
    return result


def effect_size(p1: float, n1: int, p2: float, n2: int) -> float:
    """Cohen's d on per-prediction correctness, always non-negative.

    Uses the pooled Bernoulli standard deviation, falling back to
    ``FALLBACK_STD`` when it is zero or the samples are too small to pool.
    """
    std = 0.0
    if n1 + n2 > 2:
        variance = (
            (n1 - 1) * p1 * (1.0 - p1) + (n2 - 1) * p2 * (1.0 - p2)
        ) / (n1 + n2 - 2)
        std = math.sqrt(max(variance, 0.0))
    if std <= 0.0:
        std = FALLBACK_STD
    return abs(p1 - p2) / std


def determine_winner(a: ModelPerformance, b: ModelPerformance) -> str:
    """Model with the higher blended score, or TIE inside the tie band."""
    score_a = a.blended_score
    score_b = b.blended_score
    if abs(score_a - score_b) < TIE_BAND:
        return TIE
    return a.model_type if score_a > score_b else b.model_type
