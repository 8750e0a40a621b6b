"""
Relevance measures for zero-probability events.

While P(X = x) = 0 for every point of a continuous distribution, a point
can still be more or less significant than another. This module computes
that significance through three alternative measures and combines them
into application-specific scores.

Mathematical Background:
    - Density ratio: f(x), the probability density at x. A relative weight,
      not a probability.
    - Hausdorff measure: H⁰({x}) = 1 and H¹({x}) = 0; a point has unit
      counting measure but zero length.
    - ε-neighborhood: P(|X - x| < ε) = F(x + ε) - F(x - ε), the probability
      of a near miss.
"""

import math
from typing import Union

from zeroprob.core.events import (
    BettingEdgeCase,
    BlackSwanEvent,
    ContinuousZeroProbEvent,
    DiscreteZeroProbEvent,
)
from zeroprob.utils.constants import (
    DECISION_THEORY_EPSILON,
    DEFAULT_EPSILON,
    DEFAULT_HAUSDORFF_DIMENSION,
)
from zeroprob.utils.errors import (
    InvalidArgument,
    UnknownApplication,
    UnknownMeasure,
    UnsupportedDimension,
)
from zeroprob.utils.types import Application, RelevanceMeasure, parse_tag


def validate_epsilon(epsilon: float) -> None:
    # Also rejects NaN
    if not epsilon > 0.0:
        raise InvalidArgument(f"Neighborhood radius must be positive, got epsilon={epsilon}")


def probability(event) -> float:
    """
    Classical probability of an event.

    Returns:
        - 0.0 for continuous point events and exact-value bets (by definition)
        - The mass at the point for discrete events (0.0 by construction)
        - cumulative(threshold) for black swan tail regions, which is small
          but strictly positive for unbounded distributions

    Raises:
        TypeError: For objects that are not probability-bearing events

    Examples:
        >>> from zeroprob.core.distributions import normal
        >>> probability(ContinuousZeroProbEvent(normal(0, 1), 0.0))
        0.0
    """
    if isinstance(event, (ContinuousZeroProbEvent, BettingEdgeCase)):
        return 0.0
    if isinstance(event, DiscreteZeroProbEvent):
        if getattr(event.distribution, "has_mass_function", False):
            return event.distribution.mass(event.point)
        return 0.0
    if isinstance(event, BlackSwanEvent):
        return event.distribution.cumulative(event.threshold)
    raise TypeError(f"No probability defined for {type(event).__name__}")


def density_ratio(event: ContinuousZeroProbEvent) -> float:
    """
    Probability density at the event's point, used as a relevance weight.

    The density is not a probability: it can exceed 1 and is only
    meaningful relative to other points of the same distribution.

    Args:
        event: The zero-probability point event

    Returns:
        f(point), exactly 0.0 outside the support

    Examples:
        >>> from zeroprob.core.distributions import normal
        >>> dist = normal(0, 1)
        >>> center = ContinuousZeroProbEvent(dist, 0.0)
        >>> tail = ContinuousZeroProbEvent(dist, 3.0)
        >>> density_ratio(center) > density_ratio(tail)
        True
    """
    return event.distribution.density(event.point)


def hausdorff_measure(
    event: ContinuousZeroProbEvent, dimension: int = DEFAULT_HAUSDORFF_DIMENSION
) -> float:
    """
    Hausdorff measure of the single-point set {point}.

    Args:
        event: The zero-probability point event
        dimension: Hausdorff dimension, 0 or 1

    Returns:
        1.0 for dimension 0, 0.0 for dimension 1

    Raises:
        UnsupportedDimension: For any other dimension. Higher and fractional
            dimensions are a known limitation.
    """
    if dimension == 0:
        return 1.0
    if dimension == 1:
        return 0.0
    raise UnsupportedDimension(
        f"Only Hausdorff dimensions 0 and 1 are supported, got dimension={dimension}"
    )


def epsilon_neighborhood(event: ContinuousZeroProbEvent, epsilon: float) -> float:
    """
    Probability of landing within epsilon of the event's point.

    Formula:
        P(|X - x| < ε) = F(x + ε) - F(x - ε)

    Args:
        event: The zero-probability point event
        epsilon: Neighborhood radius, strictly positive

    Returns:
        Near-miss probability in [0, 1], non-decreasing in epsilon

    Raises:
        InvalidArgument: If epsilon is not strictly positive

    Examples:
        >>> from zeroprob.core.distributions import normal
        >>> event = ContinuousZeroProbEvent(normal(0, 1), 0.0)
        >>> abs(epsilon_neighborhood(event, 1.96) - 0.95) < 0.001
        True
    """
    validate_epsilon(epsilon)

    dist = event.distribution
    x = event.point
    return dist.cumulative(x + epsilon) - dist.cumulative(x - epsilon)


def relevance(
    event: ContinuousZeroProbEvent,
    dimension: int = DEFAULT_HAUSDORFF_DIMENSION,
    epsilon: float = DEFAULT_EPSILON,
) -> float:
    """
    Relevance score using the event's configured measure.

    Dispatch:
        density   → density_ratio(event)
        hausdorff → hausdorff_measure(event, dimension)
        epsilon   → epsilon_neighborhood(event, epsilon)

    Args:
        event: The zero-probability point event
        dimension: Hausdorff dimension (hausdorff measure only)
        epsilon: Neighborhood radius (epsilon measure only)

    Returns:
        Relevance score
    """
    measure = event.measure

    if measure is RelevanceMeasure.DENSITY:
        return density_ratio(event)
    if measure is RelevanceMeasure.HAUSDORFF:
        return hausdorff_measure(event, dimension)
    if measure is RelevanceMeasure.EPSILON:
        return epsilon_neighborhood(event, epsilon)

    # Unreachable for events built through the constructor
    raise UnknownMeasure(f"Unknown relevance measure: {measure!r}")


def relevance_score(
    event: ContinuousZeroProbEvent, application: Union[Application, str]
) -> float:
    """
    Application-specific relevance score.

    - black_swan: density × 1/(1 + |x|). Extreme points are damped even
      where the density is still non-trivial.
    - betting: density at the bet point.
    - decision_theory: ε-neighborhood probability with a fixed 5% window.

    Args:
        event: The zero-probability point event
        application: Application tag

    Returns:
        Composite relevance score

    Raises:
        UnknownApplication: If application is not a recognized tag
    """
    application = parse_tag(Application, application, UnknownApplication)

    if application is Application.BLACK_SWAN:
        tail_weight = 1.0 / (1.0 + math.fabs(event.point))
        return density_ratio(event) * tail_weight
    if application is Application.BETTING:
        return density_ratio(event)
    if application is Application.DECISION_THEORY:
        return epsilon_neighborhood(event, DECISION_THEORY_EPSILON)

    raise UnknownApplication(f"Unknown application: {application!r}")
