# Path: ixbrl_instance/foundation/node_utils.py
"""
Source Node Utilities

Helpers over the source fact forest (lxml elements of an Inline XBRL
document set):
- local name / namespace access
- explicit ancestor walks (nearest tuple, nearest fraction)
- structural paths and document order

Ancestor walks follow getparent() links; identity of the matched
ancestor is compared with `is`, never by id or name.
"""

from typing import Callable, Optional
from lxml import etree

from ..constants import IX_NAMESPACES, IX_TUPLE, IX_FRACTION


def is_element(node) -> bool:
    """True for elements; False for comments and processing instructions."""
    return isinstance(node.tag, str)


def local_name(node: etree._Element) -> Optional[str]:
    """Local name of an element, None for non-element nodes."""
    if not is_element(node):
        return None
    return etree.QName(node).localname


def namespace_uri(node: etree._Element) -> Optional[str]:
    """Namespace URI of an element, None when unqualified or not an element."""
    if not is_element(node):
        return None
    return etree.QName(node).namespace


def is_inline_element(node: etree._Element, name: Optional[str] = None) -> bool:
    """
    Check if node is an Inline XBRL element (either spec version).

    Args:
        node: Source node
        name: Optional local name the element must also have
    """
    if namespace_uri(node) not in IX_NAMESPACES:
        return False
    return name is None or local_name(node) == name


def find_ancestor(
    node: etree._Element,
    predicate: Callable[[etree._Element], bool]
) -> Optional[etree._Element]:
    """
    Walk up the parent chain and return the first ancestor satisfying predicate.

    The node itself is not considered.

    Args:
        node: Starting node
        predicate: Test applied to each ancestor, nearest first

    Returns:
        Matching ancestor or None when the root is passed
    """
    parent = node.getparent()
    while parent is not None:
        if predicate(parent):
            return parent
        parent = parent.getparent()
    return None


def find_tuple_parent(node: etree._Element) -> Optional[etree._Element]:
    """Nearest enclosing ix:tuple of a node, if any."""
    return find_ancestor(node, lambda parent: is_inline_element(parent, IX_TUPLE))


def find_fraction_parent(node: etree._Element) -> Optional[etree._Element]:
    """Nearest enclosing ix:fraction of a node, if any."""
    return find_ancestor(node, lambda parent: is_inline_element(parent, IX_FRACTION))


def node_path(node: etree._Element) -> str:
    """XPath of a node within its own document (e.g. /html/body/div[2]/...)."""
    return node.getroottree().getpath(node)


def document_position(node: etree._Element) -> tuple[int, ...]:
    """
    Position of a node in document order within its tree.

    Returns the sequence of child indexes from the root down to the node;
    comparing two positions from the same tree orders them as the
    document does.
    """
    indexes = []
    current = node
    parent = current.getparent()
    while parent is not None:
        indexes.append(parent.index(current))
        current = parent
        parent = current.getparent()
    indexes.reverse()
    return tuple(indexes)


def root_of(node: etree._Element) -> etree._Element:
    """Root element of the tree a node belongs to."""
    return node.getroottree().getroot()


__all__ = [
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
