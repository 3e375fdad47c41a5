# Path: ixbrl_instance/models/__init__.py
"""
Data Models

- error: severity/category enums, exceptions, error records
- indices: FactIndices and SourceDocument
- instance_document: generated instance per target
"""

from .error import (
    ErrorSeverity,
    ReliabilityLevel,
    ErrorCategory,
    InstanceGenerationError,
    StructuralError,
    FormatError,
    IncompleteFractionError,
    GenerationError,
    ErrorCollection,
)
from .indices import SourceDocument, FactIndices
from .instance_document import InstanceDocument

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
    'SourceDocument',
    'FactIndices',
    'InstanceDocument',
]
