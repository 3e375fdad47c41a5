# Path: ixbrl_instance/instance/tuple_assembler.py
"""
Tuple Assembly

Reconstructs the tuple hierarchy of a target and emits it parent before
child.

Tuples are keyed by their structural path (document index, XPath). A
tuple's parent is the tuple named by its own tupleRef, otherwise its
nearest enclosing ix:tuple; a parent outside the target makes the tuple a
root. Members are facts with a tupleRef (explicit) or an enclosing
ix:tuple (implicit). Inside a tuple, members and child tuples are emitted
merged in document order.
"""

from dataclasses import dataclass, field
from typing import Optional
import logging
from lxml import etree

from ..core.logger import get_process_logger
from ..models.error import ErrorCategory, FormatError
from ..foundation.node_utils import find_tuple_parent, is_inline_element, node_path
from ..constants import (
    IX_FACT_ELEMENTS,
    IX_TUPLE,
    ATTR_NAME,
    ATTR_TUPLE_REF,
    ATTR_TUPLE_ID,
)
from .target_run import TargetRun
from .fact_emitter import FactEmitter


TuplePath = tuple[int, str]


@dataclass(eq=False)
class TupleEntry:
    """One tuple of the hierarchy with its links and deferred members."""
    path: TuplePath
    node: etree._Element
    parent_path: Optional[TuplePath] = None
    children: list[TuplePath] = field(default_factory=list)
    members: list[etree._Element] = field(default_factory=list)


@dataclass(eq=False)
class TupleHierarchy:
    """Tuples of one target, keyed by path, with roots in source order."""
    entries: dict[TuplePath, TupleEntry] = field(default_factory=dict)
    roots: list[TuplePath] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.entries)


class TupleAssembler:
    """
    Emits the tuples of one target and the facts they hold.

    Example:
        assembler = TupleAssembler(run, FactEmitter(run))
        tuple_count = assembler.assemble()
    """

    def __init__(
        self,
        run: TargetRun,
        emitter: FactEmitter,
        logger: Optional[logging.Logger] = None
    ):
        self.run = run
        self.emitter = emitter
        self.logger = logger or get_process_logger('tuple_assembler')

        # tupleRef values name a tuple by tupleID (falling back to id)
        self.tuples_by_tuple_id: dict[str, etree._Element] = {}
        for node in run.indices.by_local_name.get(IX_TUPLE, []):
            tuple_id = (node.get(ATTR_TUPLE_ID) or '').strip()
            if tuple_id:
                self.tuples_by_tuple_id.setdefault(tuple_id, node)

    def tuple_path(self, node: etree._Element) -> TuplePath:
        """Structural key of a tuple across the document set."""
        return (self.run.indices.document_index(node), node_path(node))

    def build_hierarchy(self) -> TupleHierarchy:
        """Index the target's tuples and link them to their parents."""
        hierarchy = TupleHierarchy()
        for node in self.run.nodes(IX_TUPLE):
            path = self.tuple_path(node)
            hierarchy.entries[path] = TupleEntry(path, node)

        for entry in hierarchy.entries.values():
            parent = self._parent_tuple(entry.node)
            parent_path = self.tuple_path(parent) if parent is not None else None

            if parent_path is None or parent_path not in hierarchy.entries:
                hierarchy.roots.append(entry.path)
                continue

            entry.parent_path = parent_path
            hierarchy.entries[parent_path].children.append(entry.path)

        return hierarchy

    def attach_members(self, hierarchy: TupleHierarchy) -> int:
        """
        Attach the target's deferred facts to their tuples.

        Returns:
            Number of facts attached
        """
        attached = 0
        for kind in IX_FACT_ELEMENTS:
            for fact in self.run.nodes(kind):
                tuple_ref = (fact.get(ATTR_TUPLE_REF) or '').strip()
                if tuple_ref:
                    owner = self.resolve_tuple_ref(tuple_ref, fact)
                    if owner is None:
                        continue
                else:
                    owner = find_tuple_parent(fact)
                    if owner is None:
                        continue

                entry = hierarchy.entries.get(self.tuple_path(owner))
                if entry is None:
                    self.run.warn(
                        ErrorCategory.TUPLE_UNRESOLVED,
                        "Fact belongs to a tuple outside this target",
                        fact, self.logger
                    )
                    continue

                entry.members.append(fact)
                attached += 1

        return attached

    def assemble(self) -> int:
        """
        Emit every tuple of the target under the output root.

        Returns:
            Number of tuples emitted
        """
        hierarchy = self.build_hierarchy()
        self.attach_members(hierarchy)
        if not hierarchy:
            return 0

        root = self.run.builder.get_root()
        visited: set[TuplePath] = set()
        emitted = 0
        for path in hierarchy.roots:
            emitted += self._emit_tuple(hierarchy, hierarchy.entries[path], root, visited)

        for path, entry in hierarchy.entries.items():
            if path not in visited:
                self.run.warn(
                    ErrorCategory.TUPLE_UNRESOLVED,
                    "Tuple is part of a tupleRef cycle",
                    entry.node, self.logger
                )

        self.logger.debug(f"Target '{self.run.target}': {emitted} tuple(s) emitted")
        return emitted

    def _emit_tuple(
        self,
        hierarchy: TupleHierarchy,
        entry: TupleEntry,
        parent: etree._Element,
        visited: set[TuplePath]
    ) -> int:
        visited.add(entry.path)
        builder = self.run.builder
        try:
            element = builder.add_qname_element(entry.node.get(ATTR_NAME), entry.node, parent)
        except FormatError as e:
            self.run.record(e, self.logger)
            self._omit_contents(hierarchy, entry, entry.node.get(ATTR_NAME), visited)
            return 0
        builder.copy_attributes(entry.node, element)

        order_key = self.run.indices.order_key
        items = [(order_key(member), member, None) for member in entry.members]
        items.extend(
            (order_key(hierarchy.entries[path].node), None, hierarchy.entries[path])
            for path in entry.children
        )
        items.sort(key=lambda item: item[0])

        emitted = 1
        for _, member, child in items:
            if member is not None:
                self.emitter.emit(member, element)
            elif child.path not in visited:
                emitted += self._emit_tuple(hierarchy, child, element, visited)
        return emitted

    def _omit_contents(
        self,
        hierarchy: TupleHierarchy,
        entry: TupleEntry,
        omitted_name: Optional[str],
        visited: set[TuplePath]
    ) -> None:
        """Record every member and descendant tuple lost with an omitted tuple."""
        details = f"Omitted tuple: {omitted_name}"
        for member in entry.members:
            self.run.warn(
                ErrorCategory.TUPLE_UNRESOLVED,
                "Enclosing tuple omitted",
                member, self.logger, details
            )
        for path in entry.children:
            if path in visited:
                continue
            visited.add(path)
            child = hierarchy.entries[path]
            self.run.warn(
                ErrorCategory.TUPLE_UNRESOLVED,
                "Enclosing tuple omitted",
                child.node, self.logger, details
            )
            self._omit_contents(hierarchy, child, omitted_name, visited)

    def _parent_tuple(self, node: etree._Element) -> Optional[etree._Element]:
        """Tuple named by the tuple's own tupleRef, else its nearest enclosing tuple."""
        tuple_ref = (node.get(ATTR_TUPLE_REF) or '').strip()
        if not tuple_ref:
            return find_tuple_parent(node)
        return self.resolve_tuple_ref(tuple_ref, node)

    def resolve_tuple_ref(
        self,
        tuple_ref: str,
        node: etree._Element
    ) -> Optional[etree._Element]:
        """
        Tuple named by a tupleRef value.

        An unknown reference is recorded as a warning against node.
        """
        owner = self.tuples_by_tuple_id.get(tuple_ref)
        if owner is None:
            owner = self.run.indices.by_id.get(tuple_ref)

        if owner is None or not is_inline_element(owner, IX_TUPLE):
            self.run.warn(
                ErrorCategory.TUPLE_UNRESOLVED,
                f"tupleRef '{tuple_ref}' names no tuple",
                node, self.logger
            )
            return None
        return owner


__all__ = ['TupleAssembler', 'TupleHierarchy', 'TupleEntry']
