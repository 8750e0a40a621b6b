"""
Black swan estimation: tail probability and expected impact.

A black swan is modeled as a tail region X <= threshold of an assumed
distribution together with an impact function. Its probability is tiny but
non-zero, and the expected impact can still be large when the consequence
is catastrophic. Expected impacts are estimated by Monte Carlo, trading
exactness for generality: the estimator's standard error shrinks as
O(1/√samples) and no confidence interval is reported.

References:
    Taleb, N. N. (2007). The Black Swan: The Impact of the Highly Improbable.
    Random House.
"""

import logging
from typing import Iterator

import numpy as np

from zeroprob.core.distributions import RandomSource, normal
from zeroprob.core.events import BlackSwanEvent, StepImpact
from zeroprob.core.measures import probability
from zeroprob.utils.constants import (
    CATASTROPHIC_THRESHOLD,
    DEFAULT_LOSS,
    DEFAULT_MC_SAMPLES,
    DEFAULT_MEAN_RETURN,
    DEFAULT_VOLATILITY,
    HIGH_THRESHOLD,
    MODERATE_THRESHOLD,
)
from zeroprob.utils.errors import InvalidArgument

logger = logging.getLogger(__name__)


def severity_threshold(severity: str) -> float:
    """
    Map a severity tag to a fractional-return crash threshold.

    catastrophic → -0.5, high → -0.3, anything else → -0.1.
    """
    if severity == "catastrophic":
        return CATASTROPHIC_THRESHOLD
    if severity == "high":
        return HIGH_THRESHOLD
    return MODERATE_THRESHOLD


def market_crash_event(
    loss_threshold: float = DEFAULT_LOSS,
    mean_return: float = DEFAULT_MEAN_RETURN,
    volatility: float = DEFAULT_VOLATILITY,
    severity: str = "high",
) -> BlackSwanEvent:
    """
    Build a market crash black swan on normally distributed returns.

    Args:
        loss_threshold: Loss incurred when the crash threshold is breached
        mean_return: Mean of the return distribution
        volatility: Standard deviation of the return distribution
        severity: "catastrophic", "high" or any other tag for a moderate crash

    Returns:
        BlackSwanEvent with a step impact at the severity threshold

    Examples:
        >>> crash = market_crash_event(loss_threshold=1_000_000, severity="catastrophic")
        >>> crash.threshold
        -0.5
        >>> impact_severity(crash, -0.6)
        1000000
    """
    threshold = severity_threshold(severity)
    return BlackSwanEvent(
        normal(mean_return, volatility),
        threshold,
        StepImpact(threshold, loss_threshold),
    )


def impact_severity(event: BlackSwanEvent, x: float) -> float:
    """Impact if the event occurs at value x."""
    return event.impact(x)


def _validate_sample_count(samples: int) -> None:
    if samples < 1:
        raise InvalidArgument(f"Sample count must be at least 1, got samples={samples}")


def expected_impact(
    event: BlackSwanEvent, samples: int = DEFAULT_MC_SAMPLES, rng: RandomSource = None
) -> float:
    """
    Monte Carlo estimate of E[impact(X)].

    Formula:
        E[impact(X)] = ∫ impact(x) p(x) dx ≈ (1/n) Σ impact(x_i),  x_i ~ X

    Args:
        event: The black swan event
        samples: Number of independent draws (>= 1)
        rng: Seed or numpy Generator. Parallel callers must give each worker
            its own generator to avoid correlated draws.

    Returns:
        Arithmetic mean of the sampled impacts

    Raises:
        InvalidArgument: If samples < 1
    """
    _validate_sample_count(samples)

    xs = event.distribution.sample(samples, rng)
    impacts = [impact_severity(event, x) for x in xs]
    estimate = float(np.mean(impacts))

    logger.debug("Expected impact over %d samples: %g", samples, estimate)
    return estimate


def iter_tail_samples(
    event: BlackSwanEvent, n: int, rng: RandomSource = None
) -> Iterator[float]:
    """
    Draw n samples from the tail X <= threshold by inverse-transform sampling.

    Each u ~ U[0, tail_prob) is mapped through the quantile function, so
    every draw lands inside the catastrophic region without needing
    astronomically many ordinary draws.

    Args:
        event: The black swan event; its tail probability must be positive
        n: Number of tail samples
        rng: Seed or numpy Generator

    Returns:
        Iterator over tail samples, lazily mapped through the quantile function

    Raises:
        InvalidArgument: If n < 1 or the tail has zero probability. Both are
            raised on the call, not on the first next().
    """
    _validate_sample_count(n)
    tail_prob = probability(event)
    if tail_prob <= 0.0:
        raise InvalidArgument(
            f"Tail below threshold={event.threshold} has zero probability; nothing to sample"
        )

    generator = np.random.default_rng(rng)

    def _samples() -> Iterator[float]:
        for u in generator.uniform(0.0, tail_prob, size=n):
            yield event.distribution.quantile(float(u))

    return _samples()


def tail_conditional_impact(
    event: BlackSwanEvent, samples: int = DEFAULT_MC_SAMPLES, rng: RandomSource = None
) -> float:
    """
    Monte Carlo estimate of E[impact(X) | X <= threshold].

    The severity of the crash given that it happens, as opposed to
    ``expected_impact`` which averages over ordinary outcomes as well.

    Returns:
        Mean impact over tail samples, or 0.0 when the tail is empty
    """
    _validate_sample_count(samples)

    if probability(event) == 0.0:
        logger.warning("Empty tail below threshold=%s; conditional impact is 0", event.threshold)
        return 0.0

    impacts = [impact_severity(event, x) for x in iter_tail_samples(event, samples, rng)]
    return float(np.mean(impacts))
