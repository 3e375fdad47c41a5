# Path: ixbrl_instance/models/indices.py
"""
Fact Indices

Read-only indices over the Inline XBRL elements of a document set:
- by_local_name: local name -> elements in document order
- by_id: id -> element
- by_target: target -> (local name -> elements in document order)

Plus the source documents themselves, needed for namespace curation,
value formatting and document-order comparisons across files.

Indices are built once (see ixbrl.document_set) and shared, unmutated,
by every target generation run.
"""

from dataclasses import dataclass, field
from typing import Optional
from lxml import etree

from ..constants import DEFAULT_TARGET
from ..foundation.node_utils import local_name, document_position, root_of


@dataclass(eq=False)
class SourceDocument:
    """
    One parsed Inline XBRL document of a document set.

    Attributes:
        url: Location the document was loaded from
        tree: Parsed lxml tree
        namespaces: prefix -> namespace URI declared anywhere in the document
    """
    url: str
    tree: etree._ElementTree
    namespaces: dict[str, str] = field(default_factory=dict)

    @property
    def root(self) -> etree._Element:
        return self.tree.getroot()

    @classmethod
    def from_tree(cls, tree: etree._ElementTree, url: Optional[str] = None) -> 'SourceDocument':
        """
        Wrap a parsed tree, collecting every prefixed namespace declaration.

        Default (unprefixed) declarations are not collected; the first
        URI seen for a prefix wins.
        """
        namespaces: dict[str, str] = {}
        for element in tree.getroot().iter(tag=etree.Element):
            for prefix, uri in element.nsmap.items():
                if prefix is not None:
                    namespaces.setdefault(prefix, uri)

        return cls(
            url=url or tree.docinfo.URL or '',
            tree=tree,
            namespaces=namespaces
        )


@dataclass(eq=False)
class FactIndices:
    """
    The three fact indices plus the documents they were built from.

    Attributes:
        by_local_name: local name -> elements (document order)
        by_id: id -> element
        by_target: target -> local name -> elements (document order)
        documents: source documents, in document-set order
    """
    by_local_name: dict[str, list[etree._Element]] = field(default_factory=dict)
    by_id: dict[str, etree._Element] = field(default_factory=dict)
    by_target: dict[str, dict[str, list[etree._Element]]] = field(default_factory=dict)
    documents: list[SourceDocument] = field(default_factory=list)

    def __post_init__(self):
        self._document_by_root = {doc.root: index for index, doc in enumerate(self.documents)}

    @classmethod
    def from_target_nodes(
        cls,
        nodes_by_target: dict[str, list[etree._Element]],
        by_local_name: dict[str, list[etree._Element]],
        by_id: dict[str, etree._Element],
        documents: list[SourceDocument]
    ) -> 'FactIndices':
        """
        Build indices from a flat target -> elements mapping.

        Elements of each target are regrouped by their local name,
        keeping their relative order.
        """
        by_target: dict[str, dict[str, list[etree._Element]]] = {}
        for target, nodes in nodes_by_target.items():
            grouped = by_target.setdefault(target, {})
            for node in nodes:
                grouped.setdefault(local_name(node), []).append(node)

        return cls(
            by_local_name=by_local_name,
            by_id=by_id,
            by_target=by_target,
            documents=documents
        )

    def nodes(self, target: str, name: str) -> list[etree._Element]:
        """Elements with a local name in a target's partition (empty when none)."""
        return self.by_target.get(target, {}).get(name, [])

    def default_nodes(self, name: str) -> list[etree._Element]:
        """Elements with a local name in the default target's partition."""
        return self.nodes(DEFAULT_TARGET, name)

    def targets(self) -> list[str]:
        """All targets with at least one element, default target first."""
        targets = sorted(t for t in self.by_target if t != DEFAULT_TARGET)
        return [DEFAULT_TARGET] + targets

    def document_index(self, node: etree._Element) -> int:
        """Index of the document owning node (-1 when not part of the set)."""
        return self._document_by_root.get(root_of(node), -1)

    def document_for(self, node: etree._Element) -> Optional[SourceDocument]:
        """Source document owning node."""
        index = self.document_index(node)
        return self.documents[index] if index >= 0 else None

    def order_key(self, node: etree._Element) -> tuple[int, tuple[int, ...]]:
        """Sort key placing nodes in document-set order."""
        return (self.document_index(node), document_position(node))


__all__ = ['SourceDocument', 'FactIndices']
