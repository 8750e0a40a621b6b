"""
Pytest configuration and shared fixtures.
"""

import pytest
import numpy as np

from zeroprob.core.distributions import normal, poisson
from zeroprob.core.events import BettingEdgeCase, BlackSwanEvent, ContinuousZeroProbEvent, StepImpact


@pytest.fixture
def std_normal():
    """Standard normal distribution N(0, 1)."""
    return normal(0.0, 1.0)


@pytest.fixture
def daily_returns():
    """Daily returns: 0.1% mean, 2% volatility."""
    return normal(0.001, 0.02)


@pytest.fixture
def poisson_counts():
    """Poisson counts with mean 3."""
    return poisson(3.0)


@pytest.fixture
def rng():
    """Seeded generator for reproducible sampling."""
    return np.random.default_rng(42)


@pytest.fixture
def center_event(std_normal):
    """Density-measured event at the peak of the standard normal."""
    return ContinuousZeroProbEvent(std_normal, 0.0, "density")


@pytest.fixture
def moderate_tail_event(std_normal):
    """Black swan two standard deviations out, so tail samples are plentiful."""
    return BlackSwanEvent(std_normal, -2.0, StepImpact(-2.0, 100.0))


@pytest.fixture
def roulette_bet():
    """Bet on exactly 100 under N(100, 10), paying 1000 for a cost of 1."""
    return BettingEdgeCase(normal(100, 10), 100.0, 1000.0, 1.0)
