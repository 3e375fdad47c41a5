# Path: ixbrl_instance/instance/tree_builder.py
"""
Instance Tree Builder

Ordered-tree construction for one output document on top of lxml:
- root creation with the curated namespace declarations
- header comments ahead of the root
- elements, attributes, text content
- namespace-qualified element names resolved from source QNames
- recursive deep copy of source subtrees with a filter predicate

Every element created here lives in the namespace registry's prefixes;
a namespace the registry does not know is declared locally on the
element that needs it.
"""

from typing import Callable, Optional
from lxml import etree

from ..models.error import StructuralError, FormatError
from ..foundation.namespace_registry import NamespaceRegistry
from ..foundation.node_utils import is_element, local_name, namespace_uri
from ..constants import (
    IX_NAMESPACES,
    ATTRS_TO_EXCLUDE,
    ATTR_ID,
    XML_NS,
)


NodeFilter = Callable[[etree._Element], bool]


def attribute_is_copied(attribute_name: str) -> bool:
    """
    Common attribute-copy rule for generated elements.

    Drops attributes in an Inline XBRL namespace and the unqualified
    attributes that only have meaning on inline elements.

    Args:
        attribute_name: Attribute name in Clark notation ('{ns}local' or 'local')

    Returns:
        True when the attribute belongs on the generated element
    """
    qname = etree.QName(attribute_name)
    if qname.namespace is None:
        return qname.localname not in ATTRS_TO_EXCLUDE
    return qname.namespace not in IX_NAMESPACES


class InstanceTreeBuilder:
    """
    Builds the output tree of one instance document.

    Example:
        builder = InstanceTreeBuilder(registry)
        root = builder.create_root('xbrl', XBRLI_NS)
        context = builder.add_element('context', namespace=XBRLI_NS)
        builder.add_attribute('id', 'c1', context)
    """

    def __init__(self, registry: NamespaceRegistry):
        """
        Initialize builder.

        Args:
            registry: Namespaces to declare on the root
        """
        self.registry = registry
        self.tree: Optional[etree._ElementTree] = None

    # --------------------------------------------------------------------------
    # Document level
    # --------------------------------------------------------------------------

    def create_root(self, name: str, namespace: str) -> etree._Element:
        """Create the document root carrying every registered declaration."""
        root = etree.Element(f'{{{namespace}}}{name}', nsmap=self.registry.as_nsmap())
        self.tree = etree.ElementTree(root)
        return root

    def get_root(self) -> etree._Element:
        """
        Root element of the document.

        Raises:
            StructuralError: No root has been created yet
        """
        if self.tree is None:
            raise StructuralError("A root node has not been defined")
        return self.tree.getroot()

    def add_comment(self, text: str, parent: Optional[etree._Element] = None) -> etree._Comment:
        """
        Add a comment.

        Without a parent the comment is placed before the root, after any
        comments already placed there.
        """
        comment = etree.Comment(text)
        if parent is None:
            self.get_root().addprevious(comment)
        else:
            self._require_element(parent).append(comment)
        return comment

    # --------------------------------------------------------------------------
    # Elements, attributes, text
    # --------------------------------------------------------------------------

    def add_element(
        self,
        name: str,
        parent: Optional[etree._Element] = None,
        namespace: Optional[str] = None,
        prefix: Optional[str] = None
    ) -> etree._Element:
        """
        Append a new element.

        Args:
            name: Local name
            parent: Parent element (root when None)
            namespace: Namespace URI (None for no namespace)
            prefix: Prefix to declare locally if the registry lacks namespace

        Raises:
            StructuralError: No root yet, or parent is not an element
        """
        parent = self._require_element(parent if parent is not None else self.get_root())
        tag = f'{{{namespace}}}{name}' if namespace else name
        return etree.SubElement(parent, tag, nsmap=self._local_nsmap(namespace, prefix))

    def add_qname_element(
        self,
        qname: str,
        source: etree._Element,
        parent: Optional[etree._Element] = None
    ) -> etree._Element:
        """
        Append an element named by a QName written on a source element.

        The prefix is resolved against the source element's in-scope
        namespaces; an unprefixed name yields an unqualified element.

        Raises:
            FormatError: The name is empty or its prefix is undeclared
        """
        qname = (qname or '').strip()
        source_name = local_name(source)
        if not qname:
            raise FormatError("Element has no name", source_name, source.get(ATTR_ID))

        prefix, _, name = qname.rpartition(':')
        if not prefix:
            return self.add_element(name, parent)

        namespace = source.nsmap.get(prefix)
        if namespace is None:
            raise FormatError(
                f"Name '{qname}' uses an undeclared prefix",
                source_name, source.get(ATTR_ID)
            )
        return self.add_element(name, parent, namespace, prefix)

    def add_attribute(
        self,
        name: str,
        value: str,
        element: etree._Element,
        namespace: Optional[str] = None
    ) -> None:
        """Set an attribute; name may be in Clark notation instead of passing namespace."""
        if namespace:
            name = f'{{{namespace}}}{name}'
        element.set(name, value)

    def add_content(self, text: str, parent: etree._Element) -> None:
        """Append text after the parent's last child."""
        if not text:
            return
        if len(parent):
            last = parent[-1]
            last.tail = (last.tail or '') + text
        else:
            parent.text = (parent.text or '') + text

    def remove(self, element: etree._Element) -> None:
        """Detach a (partially built) element from its parent."""
        parent = element.getparent()
        if parent is not None:
            parent.remove(element)

    def copy_attributes(self, source: etree._Element, target: etree._Element) -> None:
        """Copy attributes per the common attribute-copy rule."""
        for name, value in source.attrib.items():
            if attribute_is_copied(name):
                target.set(name, value)

    # --------------------------------------------------------------------------
    # Deep copy
    # --------------------------------------------------------------------------

    def copy_node(
        self,
        source: etree._Element,
        parent: etree._Element,
        node_filter: Optional[NodeFilter] = None
    ) -> etree._Element:
        """
        Deep-copy a source element under parent.

        Returns:
            The created element
        """
        namespace = namespace_uri(source)
        tag = f"{{{namespace}}}{local_name(source)}" if namespace else local_name(source)
        element = etree.SubElement(
            self._require_element(parent), tag, nsmap=self._undeclared_namespaces(source)
        )
        self.copy_attributes(source, element)
        self.copy_children(source, element, node_filter)
        return element

    def copy_children(
        self,
        source: etree._Element,
        parent: etree._Element,
        node_filter: Optional[NodeFilter] = None
    ) -> list[etree._Element]:
        """
        Copy the children of a source element under parent.

        Element children are copied recursively when node_filter accepts
        them (the filter applies to direct children only). Text is copied
        verbatim when it is non-empty after trimming; comments and
        processing instructions are dropped.

        Returns:
            Elements created for the direct children
        """
        created = []
        self._copy_text(source.text, parent)

        for child in source:
            if is_element(child) and (node_filter is None or node_filter(child)):
                created.append(self.copy_node(child, parent))
            self._copy_text(child.tail, parent)

        return created

    # --------------------------------------------------------------------------
    # Helpers
    # --------------------------------------------------------------------------

    def _copy_text(self, text: Optional[str], parent: etree._Element) -> None:
        if text and text.strip():
            self.add_content(text, parent)

    def _require_element(self, node) -> etree._Element:
        if node is None or not is_element(node):
            raise StructuralError("Parent node is not an element")
        return node

    def _local_nsmap(self, namespace: Optional[str], prefix: Optional[str]) -> Optional[dict]:
        """Local declaration for a namespace the registry does not carry."""
        if not namespace or not prefix or namespace == XML_NS or self.registry.has_uri(namespace):
            return None
        return {prefix: namespace}

    def _undeclared_namespaces(self, source: etree._Element) -> Optional[dict]:
        """
        Local declarations needed to copy source: its own namespace and
        those of its attributes, when the registry does not carry them.
        """
        namespaces = {namespace_uri(source)}
        namespaces.update(
            etree.QName(name).namespace for name in source.attrib if attribute_is_copied(name)
        )

        nsmap = {}
        for prefix, uri in source.nsmap.items():
            if prefix and uri in namespaces and uri != XML_NS and not self.registry.has_uri(uri):
                nsmap.setdefault(prefix, uri)
        return nsmap or None


__all__ = ['InstanceTreeBuilder', 'attribute_is_copied', 'NodeFilter']
