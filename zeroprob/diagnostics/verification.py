"""
Robustness verification of decision models against rare inputs.

A model here is any callable (or object with an ``evaluate`` method) that
maps a sampled value to a result. The verifier draws samples concentrated
where a model is unlikely to have been exercised organically and checks
that it neither raises nor returns a null/empty result:

- Black swans: inverse-transform sampling restricted to the tail.
- Point events and exact-value bets: rejection sampling into the
  ε-neighborhood of the target value, with a bounded attempt budget.

Verification is fail-fast: the first faulting sample ends the run and is
reported with the exception that caused it. Running out of attempt budget
is never a failure; it is reported as an UNDERSAMPLED diagnostic and the
result is marked inconclusive.
"""

import logging
from typing import Callable, Iterable, Union

import numpy as np

from zeroprob.core.distributions import Distribution, RandomSource
from zeroprob.core.events import (
    BettingEdgeCase,
    BlackSwanEvent,
    ContinuousZeroProbEvent,
    ZeroProbEvent,
)
from zeroprob.core.measures import probability, validate_epsilon
from zeroprob.estimators.black_swan import iter_tail_samples
from zeroprob.utils.constants import (
    DEFAULT_EPSILON,
    DEFAULT_VERIFY_SAMPLES,
    REJECTION_ATTEMPT_MULTIPLIER,
    REJECTION_BATCH_SIZE,
)
from zeroprob.utils.errors import InvalidArgument, ModelFault
from zeroprob.utils.types import DecisionModel, Diagnostic, DiagnosticKind, VerificationResult

logger = logging.getLogger(__name__)

Evaluator = Callable[[float], object]
Model = Union[DecisionModel, Evaluator]


def _resolve_model(model: Model) -> Evaluator:
    evaluate = getattr(model, "evaluate", None)
    if callable(evaluate):
        return evaluate
    if callable(model):
        return model
    raise TypeError(
        f"Model must be callable or define evaluate(x), got {type(model).__name__}"
    )


def _validate_num_samples(num_samples: int) -> None:
    if num_samples < 1:
        raise InvalidArgument(f"num_samples must be at least 1, got num_samples={num_samples}")


def _validate_arguments(num_samples: int, epsilon: float, attempt_multiplier: int) -> None:
    _validate_num_samples(num_samples)
    validate_epsilon(epsilon)
    if attempt_multiplier < 1:
        raise InvalidArgument(
            f"attempt_multiplier must be at least 1, got attempt_multiplier={attempt_multiplier}"
        )


def _is_empty(result: object) -> bool:
    if result is None:
        return True
    if isinstance(result, np.ndarray):
        return result.size == 0
    try:
        return len(result) == 0
    except TypeError:
        return False


def _check_sample(evaluate: Evaluator, sample: float, result: VerificationResult) -> bool:
    """
    Invoke the model on one sample and record the outcome in result.

    The model call and the inspection of its result are the fault boundary.

    Returns:
        True if the model handled the sample
    """
    result.samples_tested += 1
    try:
        output = evaluate(sample)
        empty = _is_empty(output)
    except Exception as exc:
        fault = ModelFault(sample, exc)
    else:
        if not empty:
            return True
        fault = ModelFault(sample)

    logger.error("Verification failed: %s", fault)
    result.passed = False
    result.fault = fault
    result.diagnostics.append(Diagnostic(DiagnosticKind.MODEL_FAULT, str(fault), sample))
    return False


def handles_black_swan(
    model: Model,
    event: BlackSwanEvent,
    num_samples: int = DEFAULT_VERIFY_SAMPLES,
    rng: RandomSource = None,
) -> VerificationResult:
    """
    Check that a model survives samples drawn from a black swan's tail.

    Samples are drawn by inverse-transform sampling: u ~ U[0, tail_prob),
    x = quantile(u), so every draw lands at or below the threshold.

    Args:
        model: Callable or object with evaluate(x)
        event: The black swan event
        num_samples: Number of tail samples to test
        rng: Seed or numpy Generator

    Returns:
        VerificationResult. An empty tail passes with an EMPTY_TAIL
        diagnostic since there is nothing to test.

    Examples:
        >>> from zeroprob.estimators.black_swan import market_crash_event
        >>> handles_black_swan(lambda x: x * 2, market_crash_event(), num_samples=5).passed
        True
    """
    evaluate = _resolve_model(model)
    _validate_num_samples(num_samples)

    result = VerificationResult(passed=True, samples_requested=num_samples)

    if probability(event) == 0.0:
        message = (
            f"Tail below threshold={event.threshold} has zero probability; "
            "no samples can be generated"
        )
        logger.warning(message)
        result.diagnostics.append(Diagnostic(DiagnosticKind.EMPTY_TAIL, message))
        return result

    for sample in iter_tail_samples(event, num_samples, rng):
        if not _check_sample(evaluate, sample, result):
            return result

    logger.debug("Model handled %d tail samples below %s", result.samples_tested, event.threshold)
    return result


def _handles_neighborhood(
    evaluate: Evaluator,
    distribution: Distribution,
    target: float,
    num_samples: int,
    epsilon: float,
    attempt_multiplier: int,
    rng: RandomSource,
) -> VerificationResult:
    result = VerificationResult(passed=True, samples_requested=num_samples)
    max_attempts = num_samples * attempt_multiplier
    generator = np.random.default_rng(rng)

    attempts = 0
    while attempts < max_attempts and result.samples_tested < num_samples:
        batch = min(REJECTION_BATCH_SIZE, max_attempts - attempts)
        draws = np.asarray(distribution.sample(batch, generator), dtype=float)
        attempts += batch

        accepted = draws[np.abs(draws - target) < epsilon]
        for sample in accepted[: num_samples - result.samples_tested]:
            if not _check_sample(evaluate, float(sample), result):
                return result

    if result.samples_tested < num_samples:
        message = (
            f"Only {result.samples_tested}/{num_samples} samples landed within "
            f"epsilon={epsilon} of {target} after {max_attempts} attempts"
        )
        logger.warning(message)
        result.diagnostics.append(Diagnostic(DiagnosticKind.UNDERSAMPLED, message))

    return result


def handles_zero_prob_event(
    model: Model,
    event,
    num_samples: int = DEFAULT_VERIFY_SAMPLES,
    epsilon: float = DEFAULT_EPSILON,
    attempt_multiplier: int = REJECTION_ATTEMPT_MULTIPLIER,
    rng: RandomSource = None,
) -> VerificationResult:
    """
    Check that a model handles samples at or near a zero-probability event.

    Dispatch:
        BlackSwanEvent          → handles_black_swan
        ContinuousZeroProbEvent → rejection sampling within ε of point
        BettingEdgeCase         → rejection sampling within ε of bet_value
        anything else           → pass with a NO_SPECIFIC_CHECK diagnostic

    Rejection sampling draws at most num_samples × attempt_multiplier
    variates. For heavy tails or narrow ε the required budget grows like
    1 / epsilon_neighborhood(event, ε); raise attempt_multiplier accordingly.

    Args:
        model: Callable or object with evaluate(x)
        event: The event to verify against
        num_samples: Number of accepted samples to test
        epsilon: Neighborhood radius for rejection sampling
        attempt_multiplier: Attempt budget per requested sample
        rng: Seed or numpy Generator

    Returns:
        VerificationResult; fails only on a model fault
    """
    evaluate = _resolve_model(model)
    _validate_arguments(num_samples, epsilon, attempt_multiplier)

    if isinstance(event, BlackSwanEvent):
        return handles_black_swan(evaluate, event, num_samples=num_samples, rng=rng)

    if isinstance(event, (ContinuousZeroProbEvent, BettingEdgeCase)):
        if isinstance(event, ContinuousZeroProbEvent):
            target = event.point
        else:
            target = event.bet_value
        return _handles_neighborhood(
            evaluate, event.distribution, target, num_samples, epsilon, attempt_multiplier, rng
        )

    message = f"No specific check for {type(event).__name__}; treating as handled"
    logger.warning(message)
    return VerificationResult(
        passed=True,
        samples_requested=num_samples,
        diagnostics=[Diagnostic(DiagnosticKind.NO_SPECIFIC_CHECK, message)],
    )


def handles_zero_prob_events(
    model: Model,
    events: Union[Iterable, ZeroProbEvent, BlackSwanEvent],
    num_samples: int = DEFAULT_VERIFY_SAMPLES,
    epsilon: float = DEFAULT_EPSILON,
    attempt_multiplier: int = REJECTION_ATTEMPT_MULTIPLIER,
    rng: RandomSource = None,
) -> VerificationResult:
    """
    Verify a model against a suite of zero-probability edge cases.

    The verdict passes only if every individual verdict passes; the run
    stops at the first failing event. Diagnostics and sample counts are
    accumulated across events. A single event is accepted as well.
    Arguments are validated before any event runs, even for an empty suite.

    Examples:
        >>> from zeroprob.core.distributions import normal
        >>> events = [
        ...     ContinuousZeroProbEvent(normal(0, 1), 0.0),
        ...     ContinuousZeroProbEvent(normal(0, 1), 1.0),
        ... ]
        >>> bool(handles_zero_prob_events(abs, events, num_samples=10, rng=0))
        True
    """
    _resolve_model(model)
    _validate_arguments(num_samples, epsilon, attempt_multiplier)

    if isinstance(events, (ZeroProbEvent, BlackSwanEvent)):
        events = [events]

    generator = np.random.default_rng(rng)
    aggregate = VerificationResult(passed=True)

    for event in events:
        outcome = handles_zero_prob_event(
            model,
            event,
            num_samples=num_samples,
            epsilon=epsilon,
            attempt_multiplier=attempt_multiplier,
            rng=generator,
        )
        aggregate.samples_tested += outcome.samples_tested
        aggregate.samples_requested += outcome.samples_requested
        aggregate.diagnostics.extend(outcome.diagnostics)

        if not outcome.passed:
            aggregate.passed = False
            aggregate.fault = outcome.fault
            break

    return aggregate
