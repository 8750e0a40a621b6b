"""
Command-line interface for the zero-probability toolkit.

This CLI provides access to:
- Relevance measures for point events
- Application-specific relevance scores
- Black swan (market crash) estimation
- Exact-value betting expected value
"""

import logging

import click

from zeroprob.core.distributions import normal, student_t, uniform
from zeroprob.core.events import BettingEdgeCase, ContinuousZeroProbEvent
from zeroprob.core.measures import probability, relevance, relevance_score
from zeroprob.estimators.betting import break_even_payout, expected_value
from zeroprob.estimators.black_swan import (
    expected_impact,
    market_crash_event,
    tail_conditional_impact,
)
from zeroprob.utils.constants import (
    DEFAULT_EPSILON,
    DEFAULT_LOSS,
    DEFAULT_MC_SAMPLES,
    DEFAULT_MEAN_RETURN,
    DEFAULT_VOLATILITY,
)
from zeroprob.utils.errors import ZeroProbError
from zeroprob.utils.types import Application, EVMethod, RelevanceMeasure


def _build_distribution(dist: str, loc: float, scale: float, df: float):
    if dist == "normal":
        return normal(loc, scale)
    if dist == "uniform":
        return uniform(loc, loc + scale)
    return student_t(df, loc, scale)


def distribution_options(func):
    """Shared options selecting the outcome distribution."""
    func = click.option("--df", type=float, default=3.0, help="Degrees of freedom (t only)")(func)
    func = click.option("--scale", "-s", type=float, default=1.0, help="Scale (std or width)")(func)
    func = click.option("--loc", "-l", type=float, default=0.0, help="Location (mean or lower bound)")(func)
    func = click.option(
        "--dist", "-d", type=click.Choice(["normal", "uniform", "t"]), default="normal"
    )(func)
    return func


@click.group()
@click.version_option(version="0.1.0")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose):
    """Zero-Probability Toolkit - relevance, black swans and rare-event betting."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


@cli.command(name="relevance")
@distribution_options
@click.option("--point", "-x", type=float, required=True, help="Point value")
@click.option(
    "--measure", "-m", type=click.Choice([m.value for m in RelevanceMeasure]), default="density"
)
@click.option("--epsilon", "-e", type=float, default=DEFAULT_EPSILON, help="Neighborhood radius")
@click.option("--dimension", type=int, default=0, help="Hausdorff dimension")
def relevance_cmd(dist, loc, scale, df, point, measure, epsilon, dimension):
    """Compute the relevance of a single point."""
    try:
        event = ContinuousZeroProbEvent(_build_distribution(dist, loc, scale, df), point, measure)
        value = relevance(event, dimension=dimension, epsilon=epsilon)
    except ZeroProbError as e:
        raise click.ClickException(str(e)) from e

    click.echo(f"\nP(X = {point}): {probability(event):.1f}")
    click.echo(f"Relevance ({measure}): {value:.6f}")


@cli.command()
@distribution_options
@click.option("--point", "-x", type=float, required=True, help="Point value")
@click.option(
    "--application", "-a", type=click.Choice([a.value for a in Application]), required=True
)
def score(dist, loc, scale, df, point, application):
    """Compute an application-specific relevance score."""
    try:
        event = ContinuousZeroProbEvent(_build_distribution(dist, loc, scale, df), point)
        value = relevance_score(event, application)
    except ZeroProbError as e:
        raise click.ClickException(str(e)) from e

    click.echo(f"\nRelevance score ({application}): {value:.6f}")


@cli.command()
@click.option("--loss", type=float, default=DEFAULT_LOSS, help="Loss if the crash occurs")
@click.option(
    "--severity", type=click.Choice(["catastrophic", "high", "moderate"]), default="high"
)
@click.option("--mean-return", type=float, default=DEFAULT_MEAN_RETURN, help="Mean daily return")
@click.option("--volatility", type=float, default=DEFAULT_VOLATILITY, help="Daily volatility")
@click.option("--samples", "-n", type=int, default=DEFAULT_MC_SAMPLES, help="Monte Carlo draws")
@click.option("--seed", type=int, default=None, help="Random seed")
def crash(loss, severity, mean_return, volatility, samples, seed):
    """Estimate a market crash black swan."""
    try:
        event = market_crash_event(loss, mean_return, volatility, severity)
        tail_prob = probability(event)
        mean_impact = expected_impact(event, samples, rng=seed)
        conditional = tail_conditional_impact(event, samples, rng=seed)
    except ZeroProbError as e:
        raise click.ClickException(str(e)) from e

    click.echo(f"\nCrash threshold:        {event.threshold:>14.2%}")
    click.echo(f"P(return <= threshold): {tail_prob:>14.6e}")
    click.echo(f"Expected impact:        {mean_impact:>14.4f}")
    click.echo(f"Impact given crash:     {conditional:>14.4f}")


@cli.command()
@distribution_options
@click.option("--value", "-x", type=float, required=True, help="Exact value bet on")
@click.option("--payout", "-p", type=float, required=True, help="Payout on an exact hit")
@click.option("--cost", "-c", type=float, required=True, help="Cost to place the bet")
@click.option("--method", type=click.Choice([m.value for m in EVMethod]), default="epsilon")
@click.option("--epsilon", "-e", type=float, default=DEFAULT_EPSILON, help="Neighborhood radius")
def bet(dist, loc, scale, df, value, payout, cost, method, epsilon):
    """Approximate the expected value of an exact-value bet."""
    try:
        wager = BettingEdgeCase(_build_distribution(dist, loc, scale, df), value, payout, cost)
        ev = expected_value(wager, method=method, epsilon=epsilon)
        break_even = break_even_payout(wager, method=method, epsilon=epsilon)
    except ZeroProbError as e:
        raise click.ClickException(str(e)) from e

    click.echo(f"\nExpected value ({method}, epsilon={epsilon}): {ev:.4f}")
    click.echo(f"Break-even payout: {break_even:.2f}")


if __name__ == "__main__":
    cli()
