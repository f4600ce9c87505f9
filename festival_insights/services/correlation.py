"""
Correlation Primitives - statistics shared by every domain analyzer.

Provides:
1. PEARSON CORRELATION - sum-based product-moment coefficient
2. STRENGTH CLASSIFICATION - strong / moderate / weak / none by |r|
3. INSIGHT TEMPLATING - one human-readable sentence per correlation
4. PERCENTAGE CHANGE - division-safe relative change
5. SIGNIFICANCE - two-sided t-test p-value for a coefficient

Degenerate input (too few points, constant series, mismatched lengths) is a
normal business situation here, not a programmer error: every function
returns a neutral value instead of raising. A coefficient of 0 must therefore
always be read together with its sample size.

Strength thresholds are module constants on purpose; all four analyzers must
classify coefficients the same way.

Dependencies:
    - numpy: vectorised sums
    - scipy.stats: Student's t survival function for p-values
"""

import math
from typing import List, Optional, Sequence

import numpy as np
from scipy import stats as sp_stats

from festival_insights.models import CorrelationResult, CorrelationStrength


# =============================================================================
# Constants
# =============================================================================

# |r| at or above each threshold falls into that bucket
STRONG_THRESHOLD: float = 0.7
MODERATE_THRESHOLD: float = 0.4
WEAK_THRESHOLD: float = 0.2

# A t-test needs n - 2 >= 1 degrees of freedom
MIN_SAMPLES_FOR_P_VALUE: int = 3


# =============================================================================
# Statistical Helper Functions
# =============================================================================


def mean(values: Sequence[float]) -> float:
    """
    Calculate the arithmetic mean of a list of values.

    Args:
        values: List of numeric values

    Returns:
        Arithmetic mean, or 0 if empty list
    """
    if not values:
        return 0.0
    return float(sum(values) / len(values))


def _is_constant(values: np.ndarray) -> bool:
    return bool(np.all(values == values[0]))


def calculate_pearson_correlation(x: Sequence[float], y: Sequence[float]) -> float:
    """
    Calculate the Pearson correlation coefficient of two equal-length series.

    Formula:
        r = (nΣxy − ΣxΣy) / sqrt((nΣx² − (Σx)²)(nΣy² − (Σy)²))

    Args:
        x: First series
        y: Second series, index-aligned with x

    Returns:
        Coefficient in [-1, 1]. Returns 0.0 when the lengths differ, when
        fewer than 2 points are given, when either series is constant, or
        when floating-point cancellation leaves a non-positive denominator.

    Example:
        >>> calculate_pearson_correlation([15, 18, 22, 25, 20], [100, 120, 180, 200, 150])
        0.98...
    """
    if len(x) != len(y) or len(x) < 2:
        return 0.0

    xs = np.asarray(x, dtype=np.float64)
    ys = np.asarray(y, dtype=np.float64)

    if _is_constant(xs) or _is_constant(ys):
        return 0.0

    n = float(len(xs))
    sum_x = xs.sum()
    sum_y = ys.sum()
    sum_xy = (xs * ys).sum()
    sum_x2 = (xs * xs).sum()
    sum_y2 = (ys * ys).sum()

    numerator = n * sum_xy - sum_x * sum_y
    variance_product = (n * sum_x2 - sum_x * sum_x) * (n * sum_y2 - sum_y * sum_y)

    if not np.isfinite(variance_product) or variance_product <= 0:
        return 0.0

    coefficient = float(numerator / math.sqrt(variance_product))
    return max(-1.0, min(1.0, coefficient))


def get_correlation_strength(coefficient: float) -> CorrelationStrength:
    """
    Classify a coefficient by its absolute value.

    Boundary values belong to the higher bucket:
        |r| >= 0.7 strong, >= 0.4 moderate, >= 0.2 weak, otherwise none.
    """
    magnitude = abs(coefficient)
    if magnitude >= STRONG_THRESHOLD:
        return CorrelationStrength.STRONG
    if magnitude >= MODERATE_THRESHOLD:
        return CorrelationStrength.MODERATE
    if magnitude >= WEAK_THRESHOLD:
        return CorrelationStrength.WEAK
    return CorrelationStrength.NONE


def generate_correlation_insight(factor_a: str, factor_b: str, coefficient: float) -> str:
    """
    Render a correlation as one sentence.

    Examples:
        >>> generate_correlation_insight("temperature", "engagement", 0.82)
        'Strong positive correlation (0.82) between temperature and engagement.'
        >>> generate_correlation_insight("rain", "engagement", 0.05)
        'No significant correlation found between rain and engagement.'
    """
    strength = get_correlation_strength(coefficient)

    if strength == CorrelationStrength.NONE:
        return f"No significant correlation found between {factor_a} and {factor_b}."

    direction = "positive" if coefficient > 0 else "negative"
    return (
        f"{strength.value.capitalize()} {direction} correlation "
        f"({coefficient:.2f}) between {factor_a} and {factor_b}."
    )


def percentage_change(old_value: float, new_value: float) -> float:
    """
    Relative change from old_value to new_value, in percent.

    When old_value is 0 the ratio is undefined; 100 is returned for a
    positive new value (a directional "it went up") and 0 otherwise.
    """
    if old_value == 0:
        return 100.0 if new_value > 0 else 0.0
    return (new_value - old_value) / old_value * 100


def correlation_p_value(coefficient: float, sample_size: int) -> Optional[float]:
    """
    Two-sided p-value for H0: rho = 0.

    t = r * sqrt(n - 2) / sqrt(1 - r²), compared against Student's t with
    n - 2 degrees of freedom.

    Returns:
        p in [0, 1], 0.0 for a perfect correlation, or None when
        sample_size < 3 (no degrees of freedom left).
    """
    if sample_size < MIN_SAMPLES_FOR_P_VALUE:
        return None

    if abs(coefficient) >= 1.0:
        return 0.0

    dof = sample_size - 2
    t_stat = coefficient * math.sqrt(dof) / math.sqrt(1.0 - coefficient * coefficient)
    p_value = 2.0 * float(sp_stats.t.sf(abs(t_stat), dof))
    return max(0.0, min(1.0, p_value))


# =============================================================================
# Result Construction
# =============================================================================


def build_correlation_result(
    factor_a: str,
    factor_b: str,
    x: List[float],
    y: List[float],
) -> CorrelationResult:
    """
    Compute a full CorrelationResult for two aligned series.

    The p-value is only attached when the coefficient came from a real
    computation: at least 3 points and neither series constant.

    Args:
        factor_a: Human-readable name of x (e.g. "temperature")
        factor_b: Human-readable name of y (e.g. "engagement")
        x: First aligned series
        y: Second aligned series

    Returns:
        CorrelationResult with coefficient, strength, sampleSize, pValue and
        insight sentence.
    """
    coefficient = calculate_pearson_correlation(x, y)
    sample_size = min(len(x), len(y))

    p_value: Optional[float] = None
    if (
        len(x) == len(y)
        and sample_size >= MIN_SAMPLES_FOR_P_VALUE
        and not _is_constant(np.asarray(x, dtype=np.float64))
        and not _is_constant(np.asarray(y, dtype=np.float64))
    ):
        p_value = correlation_p_value(coefficient, sample_size)

    return CorrelationResult(
        coefficient=coefficient,
        strength=get_correlation_strength(coefficient),
        sampleSize=sample_size,
        pValue=p_value,
        insight=generate_correlation_insight(factor_a, factor_b, coefficient),
    )
