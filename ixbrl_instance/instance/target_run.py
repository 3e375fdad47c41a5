# Path: ixbrl_instance/instance/target_run.py
"""
Target Run

State shared by the generation components while one target's instance
is being built: the read-only indices, the output builder, the value
formatter and the errors recorded so far.
"""

from dataclasses import dataclass, field
from typing import Any, Optional
import logging
from lxml import etree

from ..models.error import (
    ErrorCollection,
    ErrorCategory,
    ErrorSeverity,
    GenerationError,
    InstanceGenerationError,
)
from ..models.indices import FactIndices
from ..foundation.node_utils import local_name
from ..constants import ATTR_ID
from .tree_builder import InstanceTreeBuilder


@dataclass(eq=False)
class TargetRun:
    """
    One target's generation state.

    Attributes:
        target: Target id being generated
        indices: Shared fact indices (never mutated)
        builder: Output tree builder for this target
        formatter: Object with format(fact, phase_label, local_name, document, by_id)
        phase_label: Label handed to the formatter
        errors: Conditions recorded while generating
    """
    target: str
    indices: FactIndices
    builder: InstanceTreeBuilder
    formatter: Any
    phase_label: str
    errors: ErrorCollection = field(default_factory=ErrorCollection)

    def nodes(self, name: str) -> list[etree._Element]:
        """Elements with a local name in this target's partition."""
        return self.indices.nodes(self.target, name)

    def default_nodes(self, name: str) -> list[etree._Element]:
        """Elements with a local name in the default target's partition."""
        return self.indices.default_nodes(name)

    def format_value(self, node: etree._Element) -> str:
        """Canonical value of a fact or fraction member."""
        return self.formatter.format(
            node,
            self.phase_label,
            local_name(node),
            self.indices.document_for(node),
            self.indices.by_id
        )

    def record(self, error: InstanceGenerationError, logger: logging.Logger) -> None:
        """Record a caught generation exception and log it."""
        record = error.to_record(self.target)
        self.errors.add(record)
        logger.warning(str(record))

    def warn(
        self,
        category: ErrorCategory,
        message: str,
        node: Optional[etree._Element],
        logger: logging.Logger,
        details: Optional[str] = None
    ) -> None:
        """Record a WARNING-level condition about a source element."""
        record = GenerationError(
            severity=ErrorSeverity.WARNING,
            category=category,
            message=message,
            local_name=local_name(node) if node is not None else None,
            element_id=node.get(ATTR_ID) if node is not None else None,
            target=self.target,
            details=details,
        )
        self.errors.add(record)
        logger.warning(str(record))


__all__ = ['TargetRun']
