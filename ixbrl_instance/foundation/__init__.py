# Path: ixbrl_instance/foundation/__init__.py
"""
Foundation Layer

Low-level services shared by the instance generator:
- NamespaceRegistry: per-document prefix/namespace bookkeeping
- URI resolution for schema and linkbase locators
- Source node helpers (ancestor walks, document order)
"""

from .namespace_registry import NamespaceRegistry
from .uri_resolver import base_uri_in_scope, resolve_href
from .node_utils import (
    is_element,
    local_name,
    namespace_uri,
    is_inline_element,
    find_ancestor,
    find_tuple_parent,
    find_fraction_parent,
    node_path,
    document_position,
    root_of,
)

__all__ = [
    'NamespaceRegistry',
    'base_uri_in_scope',
    'resolve_href',
    'is_element',
    'local_name',
    'namespace_uri',
    'is_inline_element',
    'find_ancestor',
    'find_tuple_parent',
    'find_fraction_parent',
    'node_path',
    'document_position',
    'root_of',
]
