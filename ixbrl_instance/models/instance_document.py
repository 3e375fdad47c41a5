# Path: ixbrl_instance/models/instance_document.py
"""
Instance Document

Result of generating one target: the output tree, its namespace
registry, recorded errors and statistics.
"""

from dataclasses import dataclass, field
from typing import Optional, Any
from lxml import etree

from ..foundation.namespace_registry import NamespaceRegistry
from .error import ErrorCollection, ReliabilityLevel


@dataclass(eq=False)
class InstanceDocument:
    """
    Generated XBRL instance for one target.

    The tree holds three header comments followed by the xbrli:xbrl root.
    tree is None when the target failed structurally; errors then holds
    the CRITICAL record explaining why.

    Attributes:
        target: Target id ('' for the default target)
        name: Document-name seed the output location derives from
        tree: Output ElementTree (None on structural failure)
        namespaces: Registry declared on the root element
        errors: Omitted facts and other recorded conditions
    """
    target: str
    name: str
    tree: Optional[etree._ElementTree] = None
    namespaces: NamespaceRegistry = field(default_factory=NamespaceRegistry)
    errors: ErrorCollection = field(default_factory=ErrorCollection)

    # Statistics
    fact_count: int = 0
    tuple_count: int = 0
    context_count: int = 0
    unit_count: int = 0
    reference_count: int = 0
    generation_time_seconds: float = 0.0

    @property
    def root(self) -> Optional[etree._Element]:
        return self.tree.getroot() if self.tree is not None else None

    @property
    def location(self) -> str:
        """Location written into the header comment."""
        return f"{self.name}{self.target}"

    @property
    def succeeded(self) -> bool:
        return self.tree is not None

    @property
    def reliability(self) -> ReliabilityLevel:
        return self.errors.determine_reliability()

    def file_name(self, extension: str = '.xbrl') -> str:
        """Output file name, e.g. 'report' + 'fr' + '.xbrl'."""
        return f"{self.location}{extension}"

    def to_bytes(self, pretty_print: bool = True) -> bytes:
        """
        Serialize the document with an XML declaration in UTF-8.

        Raises:
            ValueError: If the target produced no tree
        """
        if self.tree is None:
            raise ValueError(f"Target '{self.target}' produced no instance document")

        return etree.tostring(
            self.tree,
            xml_declaration=True,
            encoding='UTF-8',
            pretty_print=pretty_print
        )

    def summary(self) -> dict[str, Any]:
        """Statistics and error counts for reporting."""
        return {
            'target': self.target,
            'location': self.location,
            'reliability': self.reliability.value,
            'facts': self.fact_count,
            'tuples': self.tuple_count,
            'contexts': self.context_count,
            'units': self.unit_count,
            'references': self.reference_count,
            'namespaces': len(self.namespaces),
            'errors': len(self.errors),
            'generation_time_seconds': round(self.generation_time_seconds, 3),
        }


__all__ = ['InstanceDocument']
