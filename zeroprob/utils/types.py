"""
Data types and structures for zero-probability event analysis.

This module defines the closed tag enumerations used for dispatch, the
strategy protocols for caller-supplied callables, and the result objects
returned by the model verifier.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Protocol, Type, TypeVar, Union, runtime_checkable

from zeroprob.utils.errors import InvalidArgument, ModelFault


class RelevanceMeasure(str, Enum):
    """Measure used to score a point event."""

    DENSITY = "density"
    HAUSDORFF = "hausdorff"
    EPSILON = "epsilon"


class Application(str, Enum):
    """Application domain for composite relevance scores."""

    BLACK_SWAN = "black_swan"
    BETTING = "betting"
    DECISION_THEORY = "decision_theory"


class EVMethod(str, Enum):
    """Approximation used for the expected value of an exact-value bet."""

    EPSILON = "epsilon"
    DENSITY = "density"


class DiagnosticKind(str, Enum):
    """Category of a verifier diagnostic."""

    MODEL_FAULT = "model_fault"
    EMPTY_TAIL = "empty_tail"
    UNDERSAMPLED = "undersampled"
    NO_SPECIFIC_CHECK = "no_specific_check"


E = TypeVar("E", bound=Enum)


def parse_tag(
    enum_cls: Type[E], value: Union[E, str], error_cls: Type[InvalidArgument]
) -> E:
    """
    Coerce a tag value into a member of ``enum_cls``.

    Args:
        enum_cls: Target enumeration
        value: Enum member or its string value
        error_cls: InvalidArgument subclass raised for unrecognized values

    Returns:
        The matching enum member

    Raises:
        error_cls: If value is not a recognized tag
    """
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(member.value for member in enum_cls)
        raise error_cls(
            f"{enum_cls.__name__} must be one of {allowed}, got {value!r}"
        ) from None


@runtime_checkable
class ImpactFunction(Protocol):
    """Strategy object mapping a sampled value to an impact (loss, damage, ...)."""

    def __call__(self, x: float) -> float:
        ...


@runtime_checkable
class DecisionModel(Protocol):
    """Strategy object for a model under verification."""

    def evaluate(self, x: float) -> object:
        ...


@dataclass(frozen=True)
class Diagnostic:
    """
    Structured diagnostic record emitted by the verifier.

    Attributes:
        kind: Diagnostic category
        message: Human-readable description
        sample: Offending sample value, when one applies
    """

    kind: DiagnosticKind
    message: str
    sample: Optional[float] = None


@dataclass
class VerificationResult:
    """
    Result from model verification against rare inputs.

    Attributes:
        passed: Whether the model handled every sample it was given
        samples_tested: Number of samples the model was actually invoked on
        samples_requested: Number of samples the verifier aimed to test
        fault: The first model fault, when verification failed
        diagnostics: Diagnostic records collected during the run
    """

    passed: bool
    samples_tested: int = 0
    samples_requested: int = 0
    fault: Optional[ModelFault] = None
    diagnostics: list[Diagnostic] = field(default_factory=list)

    def __bool__(self) -> bool:
        return self.passed

    @property
    def inconclusive(self) -> bool:
        """True when the verdict passed without testing every requested sample."""
        return self.passed and self.samples_tested < self.samples_requested

    def has_diagnostic(self, kind: DiagnosticKind) -> bool:
        return any(d.kind == kind for d in self.diagnostics)
