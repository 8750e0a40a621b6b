"""
Event types for zero-probability analysis.

A zero-probability event is an event E with P(E) = 0 that can nevertheless
occur: every individual point of a continuous distribution is one. This
module defines immutable value objects for such point events, for the
"almost sure" / "sure" distinction, and for the two applied scenarios the
toolkit estimates (black swan tail regions and exact-value bets).

All events share their distribution read-only; none of them is ever mutated
after construction.
"""

import math
from dataclasses import dataclass
from typing import Union

from zeroprob.core.distributions import Distribution
from zeroprob.utils.errors import InvalidArgument, InvariantViolation, UnknownMeasure
from zeroprob.utils.types import ImpactFunction, RelevanceMeasure, parse_tag


class ZeroProbEvent:
    """
    Base type for point events with probability zero.

    Subclasses carry a distribution and a target value; the relevance
    engine and the verifier dispatch on the concrete subclass.
    """

    __slots__ = ()


@dataclass(frozen=True)
class ContinuousZeroProbEvent(ZeroProbEvent):
    """
    A single point of a continuous distribution.

    P(X = point) = 0 by construction; relevance is quantified instead by the
    configured measure.

    Attributes:
        distribution: The probability distribution
        point: The specific value (NaN stands for "no specific point")
        measure: Relevance measure applied by ``relevance``

    Examples:
        >>> from zeroprob.core.distributions import normal
        >>> event = ContinuousZeroProbEvent(normal(0, 1), 0.0, "density")
        >>> event.measure
        <RelevanceMeasure.DENSITY: 'density'>
    """

    distribution: Distribution
    point: float
    measure: Union[RelevanceMeasure, str] = RelevanceMeasure.DENSITY

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "measure", parse_tag(RelevanceMeasure, self.measure, UnknownMeasure)
        )
        object.__setattr__(self, "point", float(self.point))


@dataclass(frozen=True)
class DiscreteZeroProbEvent(ZeroProbEvent):
    """
    A point outside the support of a discrete distribution.

    In a discrete law only points off the support have probability zero,
    so this is the one event type whose zero-probability is checked rather
    than assumed.

    Attributes:
        distribution: The discrete distribution
        point: A value carrying zero mass

    Raises:
        InvalidArgument: If point is NaN
        InvariantViolation: If the distribution assigns non-zero mass to point
    """

    distribution: Distribution
    point: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "point", float(self.point))
        if math.isnan(self.point):
            raise InvalidArgument(f"Point must be a number, got point={self.point}")
        if getattr(self.distribution, "has_mass_function", False):
            p = self.distribution.mass(self.point)
            if p != 0.0:
                raise InvariantViolation(
                    f"Point {self.point} has non-zero probability {p} in {self.distribution!r}"
                )


@dataclass(frozen=True)
class AlmostSureEvent:
    """
    An event with probability 1 that may fail on a zero-probability set.

    Captures the distinction between "P(E) = 1" and "E is certain".

    Attributes:
        exception_set: The zero-probability set where the property may fail
        description: What property holds almost surely
    """

    exception_set: ZeroProbEvent
    description: str

    def __post_init__(self) -> None:
        if not isinstance(self.exception_set, ZeroProbEvent):
            raise TypeError(
                f"exception_set must be a ZeroProbEvent, got {type(self.exception_set).__name__}"
            )

    def __str__(self) -> str:
        return f'AlmostSureEvent: "{self.description}"'


@dataclass(frozen=True)
class SureEvent:
    """An event that holds with certainty, with no exception set at all."""

    description: str

    def __str__(self) -> str:
        return f'SureEvent: "{self.description}"'


@dataclass(frozen=True)
class StepImpact:
    """
    Step impact function: ``loss`` at or below ``threshold``, zero above.

    Attributes:
        threshold: Value at or below which the loss is incurred
        loss: Loss amount
    """

    threshold: float
    loss: float

    def __call__(self, x: float) -> float:
        return self.loss if x <= self.threshold else 0


@dataclass(frozen=True)
class BlackSwanEvent:
    """
    A rare, high-impact tail region X <= threshold.

    Unlike a point event this has a small but non-zero probability,
    cumulative(threshold); the point is that it is easy to round to zero
    and ignore despite a catastrophic impact.

    Attributes:
        distribution: The assumed distribution
        threshold: The catastrophic threshold
        impact: Deterministic impact of a sampled value (loss, damage, ...)

    Examples:
        >>> from zeroprob.core.distributions import normal
        >>> crash = BlackSwanEvent(normal(0.001, 0.02), -0.5, StepImpact(-0.5, 1_000_000))
        >>> crash.impact(-0.6)
        1000000
    """

    distribution: Distribution
    threshold: float
    impact: ImpactFunction

    def __post_init__(self) -> None:
        if not callable(self.impact):
            raise InvalidArgument(
                f"Impact must be callable, got {type(self.impact).__name__}"
            )
        if math.isnan(self.threshold):
            raise InvalidArgument(f"Threshold must be a number, got threshold={self.threshold}")


@dataclass(frozen=True)
class BettingEdgeCase(ZeroProbEvent):
    """
    A wager that only pays on an exact hit of ``bet_value``.

    The exact hit has probability zero, so expected value is approximated
    through the ε-neighborhood or density measures.

    Attributes:
        distribution: Distribution of outcomes
        bet_value: The exact value bet on
        payout: Amount paid on an exact hit
        cost: Cost to place the bet
    """

    distribution: Distribution
    bet_value: float
    payout: float
    cost: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "bet_value", float(self.bet_value))
        object.__setattr__(self, "payout", float(self.payout))
        object.__setattr__(self, "cost", float(self.cost))

    def as_point_event(
        self, measure: Union[RelevanceMeasure, str] = RelevanceMeasure.EPSILON
    ) -> ContinuousZeroProbEvent:
        """The bet target viewed as a continuous point event."""
        return ContinuousZeroProbEvent(self.distribution, self.bet_value, measure)
