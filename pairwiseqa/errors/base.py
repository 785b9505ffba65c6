"""Exception hierarchy for pairwiseqa.

Every error raised by the package derives from PairwiseQAError and carries:
- error_code: an ErrorCode enum member for programmatic handling
- context: ErrorContext describing where the error happened
- suggestions: actionable steps for the user

Errors are terminal for the current action (generate, import, export) and
never fatal to the process. The CLI prints them with format_verbose().

Example:
    try:
        workspace = workspace.generate()
    except PairwiseQAError as e:
        print(f"Error [{e.error_code.value}]: {e.message}")
        for suggestion in e.suggestions:
            print(f"  - {suggestion}")
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any


class ErrorCode(Enum):
    """Standardized error codes.

    - E2xx: Validation errors (documents, configuration)
    - E3xx: Workspace state errors
    - E4xx: Generation errors
    - E6xx: Reporter errors
    - E9xx: Unknown/internal errors
    """

    # Validation errors (E2xx)
    VALIDATION_FAILED = "E201"
    INVALID_CONFIG = "E202"
    INVALID_DOCUMENT = "E203"

    # Workspace state errors (E3xx)
    STEP_NOT_FOUND = "E301"
    VALUE_NOT_FOUND = "E302"

    # Generation errors (E4xx)
    NO_STEPS = "E401"
    COMBINATORIAL_EXPLOSION = "E402"

    # Reporter errors (E6xx)
    NO_RESULTS = "E601"
    REPORTER_ERROR = "E602"

    # Unknown/internal errors (E9xx)
    UNKNOWN = "E999"

    @property
    def category(self) -> str:
        """Get the error category name."""
        code_num = int(self.value[1:])
        if code_num < 300:
            return "validation"
        elif code_num < 400:
            return "state"
        elif code_num < 500:
            return "generation"
        elif code_num < 700:
            return "reporter"
        else:
            return "unknown"


@dataclass
class ErrorContext:
    """Structured context attached to an error.

    Attributes:
        step_name: Name of the step involved, if any.
        step_id: Identifier of the step involved, if any.
        path: File being read or written, if any.
        extra: Additional context-specific information.
        timestamp: When the error occurred.
    """

    step_name: str | None = None
    step_id: str | None = None
    path: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> dict[str, Any]:
        """Convert context to dictionary for serialization."""
        result = {
            "step_name": self.step_name,
            "step_id": self.step_id,
            "path": self.path,
            "extra": self.extra,
            "timestamp": self.timestamp.isoformat(),
        }
        return {k: v for k, v in result.items() if v is not None}

    def format_location(self) -> str:
        """Format the error location as a readable string."""
        parts = []
        if self.path:
            parts.append(f"file={self.path}")
        if self.step_name:
            parts.append(f"step={self.step_name}")
        elif self.step_id:
            parts.append(f"step_id={self.step_id}")
        return " > ".join(parts) if parts else "unknown location"


class PairwiseQAError(Exception):
    """Base exception for all pairwiseqa errors.

    Attributes:
        error_code: Unique ErrorCode for this error type
        message: Human-readable error description
        context: ErrorContext with details
        suggestions: List of actionable steps to resolve the issue
        recoverable: Whether retrying the action with other input can succeed
        cause: The underlying exception (if any)
    """

    error_code: ErrorCode = ErrorCode.UNKNOWN
    default_message: str = "An unexpected error occurred"
    default_suggestions: list[str] = []
    recoverable: bool = True

    def __init__(
        self,
        message: str | None = None,
        error_code: ErrorCode | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
        recoverable: bool | None = None,
        suggestions: list[str] | None = None,
        **extra_context: Any,
    ) -> None:
        self.message = message or self.default_message
        self.error_code = error_code or self.error_code
        self.context = context or ErrorContext()
        self.cause = cause
        if recoverable is not None:
            self.recoverable = recoverable
        self._suggestions = suggestions

        if extra_context:
            self.context.extra.update(extra_context)

        super().__init__(self.message)

    @property
    def suggestions(self) -> list[str]:
        """Get actionable suggestions for resolving this error."""
        if self._suggestions is not None:
            return self._suggestions
        return self.default_suggestions.copy()

    def __str__(self) -> str:
        parts = [f"[{self.error_code.value}] {self.message}"]

        location = self.context.format_location()
        if location != "unknown location":
            parts.append(f"at {location}")

        return " | ".join(parts)

    def format_verbose(self) -> str:
        """Format error with full details including suggestions."""
        lines = [f"Error [{self.error_code.value}]: {self.message}"]

        location = self.context.format_location()
        if location != "unknown location":
            lines.append(f"Location: {location}")

        if self.cause is not None:
            lines.append(f"Cause: {self.cause}")

        if self.suggestions:
            lines.append("")
            lines.append("Suggestions:")
            for suggestion in self.suggestions:
                lines.append(f"  - {suggestion}")

        return "\n".join(lines)

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for serialization."""
        return {
            "error_code": self.error_code.value,
            "error_type": self.__class__.__name__,
            "message": self.message,
            "recoverable": self.recoverable,
            "suggestions": self.suggestions,
            "context": self.context.to_dict(),
            "cause": str(self.cause) if self.cause else None,
        }


class ValidationError(PairwiseQAError):
    """Input failed validation.

    Check the 'field' attribute for the offending key.
    """

    error_code = ErrorCode.VALIDATION_FAILED
    default_message = "Validation failed"
    recoverable = False
    default_suggestions = [
        "Check the field name and value mentioned in the error",
    ]

    def __init__(
        self,
        message: str | None = None,
        field: str | None = None,
        value: Any = None,
        expected: str | None = None,
        **kwargs: Any,
    ) -> None:
        self.field = field
        self.value = value
        self.expected = expected
        super().__init__(message=message, **kwargs)

    def __str__(self) -> str:
        base = super().__str__()
        if self.field:
            base = f"{base} (field: {self.field})"
        return base

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["field"] = self.field
        result["value"] = repr(self.value)
        if self.expected:
            result["expected"] = self.expected
        return result


class ConfigLoadError(ValidationError):
    """Configuration file could not be read or is invalid."""

    error_code = ErrorCode.INVALID_CONFIG
    default_message = "Invalid configuration"
    default_suggestions = [
        "Check the YAML syntax of the configuration file",
        "Remove unknown keys or fix values that fail validation",
    ]


class InvalidDocumentError(ValidationError):
    """A persisted document is not shaped as expected.

    Raised before any state is applied: either the whole document loads or
    nothing does.
    """

    error_code = ErrorCode.INVALID_DOCUMENT
    default_message = "Invalid JSON file format."
    default_suggestions = [
        "The document must be a JSON object",
        "Both 'steps' and 'pairwiseResults' must be present and be arrays",
        "Re-export the document with 'pairwiseqa export --format json'",
    ]


class StateError(PairwiseQAError):
    """Workspace state error."""

    error_code = ErrorCode.STEP_NOT_FOUND
    default_message = "Workspace state error"


class StepNotFoundError(StateError):
    """No step with the given id exists in the workspace."""

    error_code = ErrorCode.STEP_NOT_FOUND
    default_message = "Step not found"


class ValueNotFoundError(StateError):
    """No value with the given id exists in the step."""

    error_code = ErrorCode.VALUE_NOT_FOUND
    default_message = "Value not found"


class GenerationError(PairwiseQAError):
    """Combination generation could not run."""

    error_code = ErrorCode.NO_STEPS
    default_message = "Combination generation failed"


class NoStepsError(GenerationError):
    """Generation was requested with no steps defined."""

    error_code = ErrorCode.NO_STEPS
    default_message = "Please add at least 1 step to generate combinations."
    default_suggestions = [
        "Add a step with 'steps:' in the input file",
        "A step without values still counts: it contributes its own name",
    ]


class CombinatorialExplosionError(GenerationError):
    """The full cross-product exceeds the configured max_assignments."""

    error_code = ErrorCode.COMBINATORIAL_EXPLOSION
    default_message = "Too many combinations to enumerate"
    recoverable = False
    default_suggestions = [
        "Reduce the number of steps or values per step",
        "Raise max_assignments in the configuration, or unset it",
    ]


class ReporterError(PairwiseQAError):
    """Reporter failed to produce output."""

    error_code = ErrorCode.REPORTER_ERROR
    default_message = "Reporter failed"


class NoResultsError(ReporterError):
    """Export was requested before any combinations were generated."""

    error_code = ErrorCode.NO_RESULTS
    default_message = "Please generate pairwise combinations first."
    default_suggestions = [
        "Run 'pairwiseqa generate' before exporting",
    ]
