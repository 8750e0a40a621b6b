"""
Expected value of exact-value bets.

An exact hit on a continuous outcome has probability zero, so the honest
expected value of such a bet is -cost. The approximations here replace the
unmeasurable exact-hit probability with a measurable proxy:

- epsilon: P(|X - bet_value| < ε), a true probability from the CDF.
- density: f(bet_value) × ε, a first-order pseudo-probability. Heuristic,
  and sensitive to the arbitrary choice of ε.
"""

import math
from typing import Union

from zeroprob.core.events import BettingEdgeCase
from zeroprob.core.measures import density_ratio, epsilon_neighborhood, validate_epsilon
from zeroprob.utils.constants import DEFAULT_EPSILON
from zeroprob.utils.errors import UnknownMethod
from zeroprob.utils.types import EVMethod, RelevanceMeasure, parse_tag


def hit_probability(
    bet: BettingEdgeCase,
    method: Union[EVMethod, str] = EVMethod.EPSILON,
    epsilon: float = DEFAULT_EPSILON,
) -> float:
    """
    Proxy probability of hitting the bet value under the given method.

    Raises:
        UnknownMethod: If method is not "epsilon" or "density"
        InvalidArgument: If epsilon is not strictly positive
    """
    method = parse_tag(EVMethod, method, UnknownMethod)
    validate_epsilon(epsilon)

    if method is EVMethod.EPSILON:
        return epsilon_neighborhood(bet.as_point_event(RelevanceMeasure.EPSILON), epsilon)
    if method is EVMethod.DENSITY:
        return density_ratio(bet.as_point_event(RelevanceMeasure.DENSITY)) * epsilon

    raise UnknownMethod(f"Unknown method: {method!r}")


def expected_value(
    bet: BettingEdgeCase,
    method: Union[EVMethod, str] = EVMethod.EPSILON,
    epsilon: float = DEFAULT_EPSILON,
) -> float:
    """
    Approximate expected value of an exact-value bet.

    Formula:
        EV ≈ p × payout - cost
    where p is the ε-neighborhood probability (method="epsilon") or the
    density times ε (method="density").

    Args:
        bet: The betting scenario
        method: "epsilon" or "density"
        epsilon: Neighborhood radius / width of the density window

    Returns:
        Approximate expected value, non-decreasing in payout

    Examples:
        >>> from zeroprob.core.distributions import normal
        >>> bet = BettingEdgeCase(normal(100, 10), 100.0, 1000.0, 1.0)
        >>> expected_value(bet, method="epsilon", epsilon=0.1) > -1.0
        True
    """
    p = hit_probability(bet, method, epsilon)
    return p * bet.payout - bet.cost


def break_even_payout(
    bet: BettingEdgeCase,
    method: Union[EVMethod, str] = EVMethod.EPSILON,
    epsilon: float = DEFAULT_EPSILON,
) -> float:
    """
    Payout at which the approximate expected value is exactly zero.

    Returns:
        cost / p, or math.inf when the proxy probability is zero
    """
    p = hit_probability(bet, method, epsilon)
    if p == 0.0:
        return math.inf
    return bet.cost / p
