# Path: ixbrl_instance/instance/namespace_curator.py
"""
Namespace Curation

Builds the namespace declarations of a generated instance from the union
of the source documents' declarations.

Rules:
- first prefix seen for a namespace wins, across documents in load order
- XHTML and both Inline XBRL namespaces are never carried
- xbrldi, link and xlink are carried whenever a source declares them
- the XBRL instance namespace is always present (source prefix, else 'xbrli')
"""

from typing import Optional
import logging

from ..core.logger import get_process_logger
from ..models.indices import SourceDocument
from ..foundation.namespace_registry import NamespaceRegistry
from ..constants import (
    EXCLUDED_NAMESPACES,
    FORCED_NAMESPACES,
    XBRLI_NS,
    DEFAULT_XBRLI_PREFIX,
)


class NamespaceCurator:
    """
    Produces the NamespaceRegistry for one instance document.

    Example:
        registry = NamespaceCurator().curate(indices.documents)
        root = etree.Element('{...}xbrl', nsmap=registry.as_nsmap())
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or get_process_logger('namespace_curator')

    def curate(self, documents: list[SourceDocument]) -> NamespaceRegistry:
        """
        Curate namespaces for an instance generated from documents.

        Args:
            documents: Source documents, in document-set order

        Returns:
            Registry without excluded namespaces, always holding xbrli
        """
        observed = NamespaceRegistry()
        for document in documents:
            for prefix, uri in document.namespaces.items():
                observed.register(prefix, uri, document.url)

        registry = NamespaceRegistry()
        for prefix, uri in observed.by_prefix.items():
            if uri not in EXCLUDED_NAMESPACES:
                registry.register(prefix, uri)

        for uri in FORCED_NAMESPACES:
            prefix = observed.get_prefix(uri)
            if prefix is not None and not registry.has_uri(uri):
                registry.register(prefix, uri)

        if not registry.has_uri(XBRLI_NS):
            registry.register(self._free_prefix(registry, DEFAULT_XBRLI_PREFIX), XBRLI_NS)

        self.logger.debug(
            f"Curated {len(registry)} of {len(observed)} namespaces "
            f"({len(observed.conflicts)} prefix conflicts)"
        )
        return registry

    def _free_prefix(self, registry: NamespaceRegistry, preferred: str) -> str:
        """Preferred prefix, suffixed with a counter while it is taken."""
        prefix = preferred
        counter = 1
        while registry.has_prefix(prefix):
            prefix = f"{preferred}{counter}"
            counter += 1
        return prefix


__all__ = ['NamespaceCurator']
