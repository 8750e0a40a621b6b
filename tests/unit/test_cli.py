"""Unit tests for the command-line interface."""

import pytest
from click.testing import CliRunner

from interfaces.cli import cli


@pytest.fixture
def runner():
    return CliRunner()


def test_relevance_peak_density(runner):
    result = runner.invoke(cli, ["relevance", "--point", "0"])

    assert result.exit_code == 0, result.output
    assert "P(X = 0.0): 0.0" in result.output
    assert "Relevance (density): 0.398942" in result.output


def test_relevance_hausdorff(runner):
    result = runner.invoke(cli, ["relevance", "-x", "2.5", "-m", "hausdorff"])

    assert result.exit_code == 0, result.output
    assert "Relevance (hausdorff): 1.000000" in result.output


def test_relevance_unsupported_dimension_is_reported(runner):
    result = runner.invoke(cli, ["relevance", "-x", "0", "-m", "hausdorff", "--dimension", "3"])

    assert result.exit_code == 1
    assert "Error:" in result.output


def test_relevance_invalid_epsilon_is_reported(runner):
    result = runner.invoke(cli, ["relevance", "-x", "0", "-m", "epsilon", "-e", "0"])

    assert result.exit_code == 1
    assert "epsilon=0.0" in result.output


def test_score_decision_theory(runner):
    result = runner.invoke(cli, ["score", "-x", "0", "-a", "decision_theory"])

    assert result.exit_code == 0, result.output
    assert "Relevance score (decision_theory): 0.039" in result.output


def test_crash_catastrophic(runner):
    result = runner.invoke(
        cli, ["crash", "--severity", "catastrophic", "--samples", "500", "--seed", "1"]
    )

    assert result.exit_code == 0, result.output
    assert "-50.00%" in result.output
    assert "Impact given crash" in result.output


def test_bet_epsilon(runner):
    result = runner.invoke(
        cli,
        ["bet", "--loc", "100", "--scale", "10", "-x", "100", "-p", "1000", "-c", "1",
         "-e", "0.1"],
    )

    assert result.exit_code == 0, result.output
    assert "Expected value (epsilon, epsilon=0.1)" in result.output


def test_invalid_distribution_is_reported(runner):
    result = runner.invoke(cli, ["bet", "--scale", "-1", "-x", "0", "-p", "1", "-c", "1"])

    assert result.exit_code == 1
    assert "Error:" in result.output
