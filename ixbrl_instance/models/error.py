# Path: ixbrl_instance/models/error.py
"""
Error Handling System

Error classification and reliability framework for instance generation.

This module defines:
- Error severity levels (CRITICAL, ERROR, WARNING, INFO)
- Reliability levels (COMPLETE, PARTIAL, DEGRADED, FAILED)
- Error records with element context (GenerationError)
- Exceptions raised while generating (StructuralError, FormatError,
  IncompleteFractionError)

Exceptions drive control flow: StructuralError aborts the current target,
FormatError and IncompleteFractionError abort a single fact. Every caught
exception is turned into a GenerationError record attached to the
instance document.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional
from datetime import datetime


# ==============================================================================
# ERROR SEVERITY LEVELS
# ==============================================================================

class ErrorSeverity(Enum):
    """
    Error severity classification.

    Levels:
        CRITICAL: Cannot continue, target aborted (e.g., no root element)
        ERROR: Fact omitted from output (e.g., unformattable value)
        WARNING: Unusual pattern, worth reviewing (e.g., dangling contextRef)
        INFO: Informational, statistics
    """
    CRITICAL = "CRITICAL"
    ERROR = "ERROR"
    WARNING = "WARNING"
    INFO = "INFO"

    def __str__(self) -> str:
        return self.value

    def __lt__(self, other: 'ErrorSeverity') -> bool:
        """Enable severity comparison (CRITICAL > ERROR > WARNING > INFO)."""
        order = {
            ErrorSeverity.INFO: 0,
            ErrorSeverity.WARNING: 1,
            ErrorSeverity.ERROR: 2,
            ErrorSeverity.CRITICAL: 3
        }
        return order[self] < order[other]


# ==============================================================================
# RELIABILITY LEVELS
# ==============================================================================

class ReliabilityLevel(Enum):
    """
    Generated document quality classification.

    Levels:
        COMPLETE: Every fact emitted, no errors
        PARTIAL: Some facts omitted
        DEGRADED: Many facts omitted
        FAILED: No document could be produced
    """
    COMPLETE = "COMPLETE"
    PARTIAL = "PARTIAL"
    DEGRADED = "DEGRADED"
    FAILED = "FAILED"

    def __str__(self) -> str:
        return self.value


# ==============================================================================
# ERROR CATEGORIES
# ==============================================================================

class ErrorCategory(Enum):
    """
    Error category classification for grouping related errors.
    """
    # Document structure
    STRUCTURE_INVALID = "STRUCTURE_INVALID"

    # Fact values
    FORMAT_INVALID = "FORMAT_INVALID"
    FRACTION_INCOMPLETE = "FRACTION_INCOMPLETE"

    # Cross references
    MISSING_CONTEXT = "MISSING_CONTEXT"
    MISSING_UNIT = "MISSING_UNIT"
    TUPLE_UNRESOLVED = "TUPLE_UNRESOLVED"

    # Other
    UNKNOWN = "UNKNOWN"

    def __str__(self) -> str:
        return self.value


# ==============================================================================
# EXCEPTIONS
# ==============================================================================

class InstanceGenerationError(Exception):
    """
    Base class for conditions raised while generating an instance.

    Every condition identifies the offending element by local name and,
    where available, its id.
    """

    category = ErrorCategory.UNKNOWN
    severity = ErrorSeverity.ERROR

    def __init__(
        self,
        message: str,
        local_name: Optional[str] = None,
        element_id: Optional[str] = None
    ):
        self.message = message
        self.local_name = local_name
        self.element_id = element_id
        super().__init__(self._describe())

    def _describe(self) -> str:
        if self.local_name is None:
            return self.message
        element = self.local_name
        if self.element_id:
            element += f" id='{self.element_id}'"
        return f"{self.message} [{element}]"

    def to_record(self, target: Optional[str] = None) -> 'GenerationError':
        """Convert the exception into a GenerationError record."""
        return GenerationError(
            severity=self.severity,
            category=self.category,
            message=self.message,
            local_name=self.local_name,
            element_id=self.element_id,
            target=target,
        )


class StructuralError(InstanceGenerationError):
    """Required root/parent missing or source unusable. Fatal to a target."""

    category = ErrorCategory.STRUCTURE_INVALID
    severity = ErrorSeverity.CRITICAL


class FormatError(InstanceGenerationError):
    """A fact value could not be formatted. The fact is omitted."""

    category = ErrorCategory.FORMAT_INVALID


class IncompleteFractionError(InstanceGenerationError):
    """A fraction's numerator or denominator could not be resolved."""

    category = ErrorCategory.FRACTION_INCOMPLETE


# ==============================================================================
# GENERATION ERROR RECORD
# ==============================================================================

@dataclass
class GenerationError:
    """
    Error information recorded on a generated instance document.

    Attributes:
        severity: Error severity level
        category: Error category
        message: Human-readable error message
        local_name: Local name of the offending source element
        element_id: id of the offending source element (optional)
        target: Target being generated when the error occurred
        details: Additional error details (optional)
        timestamp: When error occurred
    """
    severity: ErrorSeverity
    category: ErrorCategory
    message: str
    local_name: Optional[str] = None
    element_id: Optional[str] = None
    target: Optional[str] = None
    details: Optional[str] = None
    timestamp: datetime = field(default_factory=datetime.now)

    def __str__(self) -> str:
        """String representation for logging."""
        parts = [f"[{self.severity.value}] {self.category.value}: {self.message}"]

        if self.local_name:
            element = self.local_name
            if self.element_id:
                element += f"#{self.element_id}"
            parts.append(f"Element: {element}")

        if self.target is not None:
            parts.append(f"Target: '{self.target}'")

        if self.details:
            parts.append(f"Details: {self.details}")

        return " | ".join(parts)


# ==============================================================================
# ERROR COLLECTION
# ==============================================================================

@dataclass
class ErrorCollection:
    """
    Collection of generation errors with statistics and filtering.

    Attributes:
        errors: list of generation errors
    """
    errors: list[GenerationError] = field(default_factory=list)

    def add(self, error: GenerationError) -> None:
        """Add error to collection."""
        self.errors.append(error)

    def get_by_severity(self, severity: ErrorSeverity) -> list[GenerationError]:
        """Get all errors of specific severity."""
        return [e for e in self.errors if e.severity == severity]

    def has_critical(self) -> bool:
        """Check if collection contains critical errors."""
        return any(e.severity == ErrorSeverity.CRITICAL for e in self.errors)

    def count_by_severity(self) -> dict[ErrorSeverity, int]:
        """Count errors by severity level."""
        counts = {severity: 0 for severity in ErrorSeverity}
        for error in self.errors:
            counts[error.severity] += 1
        return counts

    def determine_reliability(self) -> ReliabilityLevel:
        """
        Determine overall reliability level based on errors.

        Logic:
            - FAILED: Has critical errors
            - DEGRADED: Has 3+ ERROR level
            - PARTIAL: Has 1+ ERROR level
            - COMPLETE: Only warnings/info, or nothing

        Returns:
            ReliabilityLevel
        """
        if self.has_critical():
            return ReliabilityLevel.FAILED

        counts = self.count_by_severity()

        if counts[ErrorSeverity.ERROR] >= 3:
            return ReliabilityLevel.DEGRADED

        if counts[ErrorSeverity.ERROR] >= 1:
            return ReliabilityLevel.PARTIAL

        return ReliabilityLevel.COMPLETE

    def __len__(self) -> int:
        return len(self.errors)

    def __bool__(self) -> bool:
        return len(self.errors) > 0

    def __iter__(self):
        return iter(self.errors)


__all__ = [
    'ErrorSeverity',
    'ReliabilityLevel',
    'ErrorCategory',
    'InstanceGenerationError',
    'StructuralError',
    'FormatError',
    'IncompleteFractionError',
    'GenerationError',
    'ErrorCollection',
]
