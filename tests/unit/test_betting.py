"""Unit tests for exact-value betting expected value."""

import math

import pytest

from zeroprob.core.distributions import normal, uniform
from zeroprob.core.events import BettingEdgeCase
from zeroprob.estimators.betting import break_even_payout, expected_value, hit_probability
from zeroprob.utils.errors import InvalidArgument, UnknownMethod


def test_expected_values_are_finite_floats(roulette_bet):
    ev_epsilon = expected_value(roulette_bet, method="epsilon", epsilon=0.1)
    ev_density = expected_value(roulette_bet, method="density", epsilon=0.1)

    assert isinstance(ev_epsilon, float)
    assert isinstance(ev_density, float)
    assert math.isfinite(ev_epsilon)
    assert math.isfinite(ev_density)


def test_epsilon_method_formula(roulette_bet):
    """EV = P(|X - 100| < 0.1) × 1000 - 1."""
    dist = roulette_bet.distribution
    p = dist.cumulative(100.1) - dist.cumulative(99.9)
    assert expected_value(roulette_bet, "epsilon", 0.1) == pytest.approx(p * 1000.0 - 1.0)


def test_density_method_formula(roulette_bet):
    """EV = f(100) × 0.1 × 1000 - 1."""
    f = roulette_bet.distribution.density(100.0)
    assert expected_value(roulette_bet, "density", 0.1) == pytest.approx(f * 0.1 * 1000.0 - 1.0)


def test_methods_agree_for_small_epsilon(roulette_bet):
    """For ε much smaller than the scale, density × 2ε ≈ neighborhood mass."""
    eps = 0.01
    p_eps = hit_probability(roulette_bet, "epsilon", eps)
    p_dens = hit_probability(roulette_bet, "density", eps)
    assert p_eps == pytest.approx(2.0 * p_dens, rel=1e-4)


@pytest.mark.parametrize("method", ["epsilon", "density"])
def test_payout_monotonicity(method):
    """Raising the payout at fixed cost never lowers EV."""
    dist = normal(100, 10)
    evs = [
        expected_value(BettingEdgeCase(dist, 95.0, payout, 2.0), method, 0.1)
        for payout in [0.0, 10.0, 100.0, 1000.0, 1e6]
    ]
    assert all(a <= b for a, b in zip(evs, evs[1:]))


def test_bet_off_support_loses_cost():
    """No mass near the bet: EV is just the cost lost."""
    bet = BettingEdgeCase(uniform(0, 100), 500.0, 1e9, 3.0)
    assert expected_value(bet, "epsilon", 0.5) == -3.0
    assert expected_value(bet, "density", 0.5) == -3.0


def test_unknown_method(roulette_bet):
    with pytest.raises(UnknownMethod):
        expected_value(roulette_bet, method="kelly")


@pytest.mark.parametrize("method", ["epsilon", "density"])
@pytest.mark.parametrize("epsilon", [0.0, -1.0])
def test_non_positive_epsilon_rejected(roulette_bet, method, epsilon):
    with pytest.raises(InvalidArgument):
        expected_value(roulette_bet, method=method, epsilon=epsilon)


def test_method_checked_before_epsilon(roulette_bet):
    """An unknown method is reported even when epsilon is also invalid."""
    with pytest.raises(UnknownMethod):
        expected_value(roulette_bet, method="kelly", epsilon=-1.0)


def test_break_even_payout_zeroes_ev(roulette_bet):
    payout = break_even_payout(roulette_bet, "epsilon", 0.1)
    bet = BettingEdgeCase(roulette_bet.distribution, 100.0, payout, 1.0)
    assert abs(expected_value(bet, "epsilon", 0.1)) < 1e-9


def test_break_even_payout_infinite_off_support():
    bet = BettingEdgeCase(uniform(0, 1), 5.0, 10.0, 1.0)
    assert break_even_payout(bet) == math.inf
