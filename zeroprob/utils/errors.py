"""
Exception hierarchy for zero-probability event analysis.

Argument-validation errors subclass ValueError so callers that already
guard numerical code with ``except ValueError`` keep working.
"""

from typing import Optional


class ZeroProbError(Exception):
    """Base class for all toolkit errors."""


class InvalidArgument(ZeroProbError, ValueError):
    """Malformed input to a measure, estimator or verifier."""


class UnsupportedDimension(InvalidArgument):
    """Hausdorff dimension other than 0 or 1."""


class UnknownMeasure(InvalidArgument):
    """Relevance measure tag is not one of density, hausdorff, epsilon."""


class UnknownApplication(InvalidArgument):
    """Application tag is not one of black_swan, betting, decision_theory."""


class UnknownMethod(InvalidArgument):
    """Expected-value method is not one of epsilon, density."""


class InvariantViolation(ZeroProbError, ValueError):
    """A zero-probability event was built on a point with non-zero mass."""


class ModelFault(ZeroProbError):
    """
    A model under verification failed on a sampled input.

    Either the model raised (``cause`` holds the exception) or it returned
    a null/empty result (``cause`` is None).

    Attributes:
        sample: The sampled value the model was invoked with
        cause: The exception raised by the model, if any
    """

    def __init__(self, sample: float, cause: Optional[BaseException] = None):
        self.sample = sample
        self.cause = cause
        if cause is None:
            detail = "returned an empty result"
        else:
            detail = f"raised {type(cause).__name__}: {cause}"
        super().__init__(f"Model {detail} on sample {sample!r}")
