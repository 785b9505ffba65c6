"""Error hierarchy for pairwiseqa."""

from pairwiseqa.errors.base import (
    CombinatorialExplosionError,
    ConfigLoadError,
    ErrorCode,
    ErrorContext,
    GenerationError,
    InvalidDocumentError,
    NoResultsError,
    NoStepsError,
    PairwiseQAError,
    ReporterError,
    StateError,
    StepNotFoundError,
    ValidationError,
    ValueNotFoundError,
)

__all__ = [
    "ErrorCode",
    "ErrorContext",
    "PairwiseQAError",
    "ValidationError",
    "ConfigLoadError",
    "InvalidDocumentError",
    "StateError",
    "StepNotFoundError",
    "ValueNotFoundError",
    "GenerationError",
    "NoStepsError",
    "CombinatorialExplosionError",
    "ReporterError",
    "NoResultsError",
]
