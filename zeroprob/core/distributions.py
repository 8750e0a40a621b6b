"""
Probability distribution adapter backed by scipy.stats.

This module exposes the narrow interface the rest of the toolkit consumes
(density, cumulative, quantile, sample) and wraps frozen scipy.stats
distributions behind it. Discrete laws additionally expose their
probability mass function, which is what lets a discrete zero-probability
event check its own invariant.
"""

import math
from typing import Optional, Protocol, Union, runtime_checkable

import numpy as np
from scipy import stats

from zeroprob.utils.errors import InvalidArgument

RandomSource = Union[None, int, np.random.Generator, np.random.SeedSequence]


@runtime_checkable
class Distribution(Protocol):
    """Read-only view of a single fixed probability law over the reals."""

    def density(self, x: float) -> float:
        ...

    def cumulative(self, x: float) -> float:
        ...

    def quantile(self, p: float) -> float:
        ...

    def sample(self, n: Optional[int] = None, rng: RandomSource = None):
        ...


class ScipyDistribution:
    """
    Immutable adapter around a frozen scipy.stats distribution.

    For continuous laws ``density`` is the PDF; for discrete laws it is the
    PMF and ``mass`` is available as well.

    Args:
        frozen: A frozen distribution, e.g. ``scipy.stats.norm(0, 1)``

    Examples:
        >>> dist = ScipyDistribution(stats.norm(0, 1))
        >>> abs(dist.density(0.0) - 0.3989) < 0.001
        True
        >>> dist.cumulative(0.0)
        0.5
    """

    __slots__ = ("_frozen", "_discrete")

    def __init__(self, frozen):
        if not hasattr(frozen, "dist"):
            raise InvalidArgument(
                f"Expected a frozen scipy.stats distribution, got {type(frozen).__name__}"
            )
        self._frozen = frozen
        self._discrete = isinstance(frozen.dist, stats.rv_discrete)

    @property
    def frozen(self):
        return self._frozen

    @property
    def has_mass_function(self) -> bool:
        return self._discrete

    def density(self, x: float) -> float:
        if self._discrete:
            return float(self._frozen.pmf(x))
        return float(self._frozen.pdf(x))

    def mass(self, x: float) -> float:
        """
        Probability mass at x.

        Raises:
            TypeError: If the underlying law is continuous
        """
        if not self._discrete:
            raise TypeError(f"{self!r} is continuous and has no mass function")
        return float(self._frozen.pmf(x))

    def cumulative(self, x: float) -> float:
        return float(self._frozen.cdf(x))

    def quantile(self, p: float) -> float:
        """
        Generalized inverse of the cumulative distribution function.

        Args:
            p: Cumulative probability in [0, 1]

        Returns:
            Smallest x with cumulative(x) >= p (±inf at the endpoints for
            unbounded support)
        """
        if not 0.0 <= p <= 1.0:
            raise InvalidArgument(f"Quantile level must be in [0, 1], got p={p}")
        return float(self._frozen.ppf(p))

    def sample(self, n: Optional[int] = None, rng: RandomSource = None):
        """
        Draw independent variates.

        Args:
            n: Number of draws; None draws a single float
            rng: Seed, numpy Generator or None for fresh entropy

        Returns:
            A float when n is None, otherwise an ndarray of n floats
        """
        generator = np.random.default_rng(rng)
        if n is None:
            return float(self._frozen.rvs(random_state=generator))
        if n < 0:
            raise InvalidArgument(f"Sample count must be non-negative, got n={n}")
        return np.asarray(self._frozen.rvs(size=n, random_state=generator), dtype=float)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ScipyDistribution):
            return NotImplemented
        return self._frozen is other._frozen

    def __hash__(self) -> int:
        return id(self._frozen)

    def __repr__(self) -> str:
        params = [repr(a) for a in self._frozen.args]
        params += [f"{k}={v!r}" for k, v in self._frozen.kwds.items()]
        return f"{self._frozen.dist.name}({', '.join(params)})"


def _require_positive(name: str, value: float) -> None:
    if not value > 0 or math.isinf(value):
        raise InvalidArgument(f"{name} must be positive and finite, got {name}={value}")


def from_scipy(frozen) -> ScipyDistribution:
    """Wrap an already-frozen scipy.stats distribution."""
    return ScipyDistribution(frozen)


def normal(mean: float = 0.0, std: float = 1.0) -> ScipyDistribution:
    """
    Normal distribution N(mean, std²).

    Examples:
        >>> normal(0, 1).cumulative(1.96) > 0.97
        True
    """
    _require_positive("std", std)
    return ScipyDistribution(stats.norm(loc=mean, scale=std))


def uniform(low: float = 0.0, high: float = 1.0) -> ScipyDistribution:
    """Continuous uniform distribution on [low, high]."""
    if not high > low:
        raise InvalidArgument(f"Upper bound must exceed lower bound, got low={low}, high={high}")
    return ScipyDistribution(stats.uniform(loc=low, scale=high - low))


def lognormal(sigma: float, scale: float = 1.0) -> ScipyDistribution:
    """Log-normal distribution with shape sigma and scale exp(mu)."""
    _require_positive("sigma", sigma)
    _require_positive("scale", scale)
    return ScipyDistribution(stats.lognorm(sigma, scale=scale))


def student_t(df: float, loc: float = 0.0, scale: float = 1.0) -> ScipyDistribution:
    """Student's t distribution, a heavy-tailed alternative to the normal."""
    _require_positive("df", df)
    _require_positive("scale", scale)
    return ScipyDistribution(stats.t(df, loc=loc, scale=scale))


def poisson(mu: float) -> ScipyDistribution:
    """Poisson distribution with mean mu."""
    _require_positive("mu", mu)
    return ScipyDistribution(stats.poisson(mu))


def binomial(n: int, p: float) -> ScipyDistribution:
    """Binomial distribution with n trials and success probability p."""
    if n < 0:
        raise InvalidArgument(f"Trial count must be non-negative, got n={n}")
    if not 0.0 <= p <= 1.0:
        raise InvalidArgument(f"Success probability must be in [0, 1], got p={p}")
    return ScipyDistribution(stats.binom(n, p))
