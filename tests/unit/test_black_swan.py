"""
Unit tests for black swan estimation.

This module validates:
1. Market crash construction from severity tags
2. Impact evaluation
3. Monte Carlo expected impact
4. Inverse-transform tail sampling
"""

import pytest

from zeroprob.core.distributions import uniform
from zeroprob.core.events import BlackSwanEvent, StepImpact
from zeroprob.core.measures import probability
from zeroprob.estimators.black_swan import (
    expected_impact,
    impact_severity,
    iter_tail_samples,
    market_crash_event,
    severity_threshold,
    tail_conditional_impact,
)
from zeroprob.utils.errors import InvalidArgument


# ===========================
# Market Crash Construction
# ===========================


def test_catastrophic_market_crash():
    """Scenario: catastrophic crash sits at -50% with a step impact."""
    crash = market_crash_event(loss_threshold=1_000_000, severity="catastrophic")

    assert crash.threshold == -0.5
    assert impact_severity(crash, -0.6) == 1_000_000
    assert impact_severity(crash, 0.0) == 0


@pytest.mark.parametrize(
    "severity,threshold",
    [("catastrophic", -0.5), ("high", -0.3), ("moderate", -0.1), ("anything", -0.1)],
)
def test_severity_thresholds(severity, threshold):
    assert severity_threshold(severity) == threshold
    assert market_crash_event(severity=severity).threshold == threshold


def test_market_crash_defaults():
    """Default crash is 'high' on N(0.1%, 2%) returns."""
    crash = market_crash_event()
    assert crash.threshold == -0.3
    assert crash.distribution.cumulative(0.001) == pytest.approx(0.5)
    assert impact_severity(crash, -0.3) == 1_000_000


def test_market_crash_probability_tiny():
    p = probability(market_crash_event(severity="catastrophic"))
    assert 0.0 < p < 0.001


# ===========================
# Expected Impact
# ===========================


def test_expected_impact_non_negative():
    crash = market_crash_event(loss_threshold=100_000, severity="high")
    assert expected_impact(crash, 1000, rng=1) >= 0.0


@pytest.mark.parametrize("samples", [1, 2, 10, 250])
def test_expected_impact_non_negative_any_sample_count(moderate_tail_event, samples):
    assert expected_impact(moderate_tail_event, samples, rng=3) >= 0.0


def test_expected_impact_approximates_closed_form(moderate_tail_event):
    """E[100·1{X <= -2}] = 100·Φ(-2) ≈ 2.275."""
    estimate = expected_impact(moderate_tail_event, 200_000, rng=11)
    exact = 100.0 * probability(moderate_tail_event)
    assert abs(estimate - exact) < 0.15


def test_expected_impact_reproducible(moderate_tail_event):
    assert expected_impact(moderate_tail_event, 500, rng=5) == expected_impact(
        moderate_tail_event, 500, rng=5
    )


@pytest.mark.parametrize("samples", [0, -10])
def test_expected_impact_rejects_empty_sample(moderate_tail_event, samples):
    with pytest.raises(InvalidArgument):
        expected_impact(moderate_tail_event, samples)


# ===========================
# Tail Sampling
# ===========================


def test_tail_samples_land_in_tail(moderate_tail_event, rng):
    samples = list(iter_tail_samples(moderate_tail_event, 200, rng))
    assert len(samples) == 200
    assert all(x <= -2.0 + 1e-9 for x in samples)


def test_tail_samples_reach_catastrophic_region(rng):
    """Every draw is a crash, although ordinary sampling would never see one."""
    crash = market_crash_event(severity="catastrophic")
    samples = list(iter_tail_samples(crash, 50, rng))
    assert all(x < -0.49 for x in samples)


def test_tail_sampling_empty_tail_raises_on_call():
    """The empty tail is reported when the sampler is created, before any next()."""
    event = BlackSwanEvent(uniform(0, 1), -1.0, StepImpact(-1.0, 1.0))
    with pytest.raises(InvalidArgument):
        iter_tail_samples(event, 10)


@pytest.mark.parametrize("n", [0, -5])
def test_tail_sampling_rejects_bad_count_on_call(moderate_tail_event, n):
    with pytest.raises(InvalidArgument, match=f"samples={n}"):
        iter_tail_samples(moderate_tail_event, n)


def test_tail_conditional_impact_step(moderate_tail_event):
    """Given a crash, a step impact is always incurred."""
    assert tail_conditional_impact(moderate_tail_event, 500, rng=2) == pytest.approx(100.0)


def test_tail_conditional_impact_empty_tail():
    event = BlackSwanEvent(uniform(0, 1), -1.0, StepImpact(-1.0, 1.0))
    assert tail_conditional_impact(event, 100) == 0.0
