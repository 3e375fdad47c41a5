# Path: ixbrl_instance/instance/reference_linker.py
"""
Reference Linking

Copies the taxonomy references (link:schemaRef, link:linkbaseRef, ...)
of a target into its instance, directly under the root.

A relative href is resolved against the base in scope for the source
reference when that base names a directory (ends in '/').
"""

from typing import Optional
import logging
from lxml import etree

from ..core.logger import get_process_logger
from ..foundation.node_utils import is_element, local_name, namespace_uri
from ..foundation.uri_resolver import base_uri_in_scope, resolve_href
from ..constants import (
    EXCLUDED_NAMESPACES,
    IX_NAMESPACES,
    IX_REFERENCES,
    ATTR_HREF,
    DEFAULT_TARGET,
)
from .target_run import TargetRun


class ReferenceLinker:
    """
    Emits reference declarations for one target.

    Example:
        count = ReferenceLinker(run).link()
    """

    def __init__(self, run: TargetRun, logger: Optional[logging.Logger] = None):
        self.run = run
        self.logger = logger or get_process_logger('reference_linker')

    def reference_containers(self) -> list[etree._Element]:
        """
        ix:references containers for the target.

        A target declaring no references of its own uses the default
        target's.
        """
        containers = self.run.nodes(IX_REFERENCES)
        if not containers and self.run.target != DEFAULT_TARGET:
            containers = self.run.default_nodes(IX_REFERENCES)
        return containers

    def link(self) -> int:
        """
        Copy every reference declaration under the output root.

        Returns:
            Number of references emitted
        """
        count = 0
        for container in self.reference_containers():
            for node in container:
                if not is_element(node) or namespace_uri(node) in EXCLUDED_NAMESPACES:
                    continue
                self._emit(node)
                count += 1

        self.logger.debug(f"Target '{self.run.target}': {count} reference(s) linked")
        return count

    def _emit(self, node: etree._Element) -> etree._Element:
        builder = self.run.builder
        element = builder.add_element(local_name(node), None, namespace_uri(node), node.prefix)

        base = base_uri_in_scope(node)
        for name, value in node.attrib.items():
            qname = etree.QName(name)
            if qname.namespace in IX_NAMESPACES:
                continue
            if base and qname.localname == ATTR_HREF:
                value = resolve_href(value, base)
            builder.add_attribute(name, value, element)

        return element


__all__ = ['ReferenceLinker']
