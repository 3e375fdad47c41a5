# Path: ixbrl_instance/instance/__init__.py
"""
Instance Generation

Builds XBRL instance documents, one per target, from fact indices.
"""

from .tree_builder import InstanceTreeBuilder, attribute_is_copied
from .namespace_curator import NamespaceCurator
from .target_run import TargetRun
from .reference_linker import ReferenceLinker
from .resource_filter import ResourceFilter, ResourceUsage
from .fact_emitter import FactEmitter, find_fraction_member, is_tuple_member
from .tuple_assembler import TupleAssembler, TupleHierarchy, TupleEntry
from .generator import InstanceGenerator, create_instance_documents

__all__ = [
    'InstanceTreeBuilder',
    'attribute_is_copied',
    'NamespaceCurator',
    'TargetRun',
    'ReferenceLinker',
    'ResourceFilter',
    'ResourceUsage',
    'FactEmitter',
    'find_fraction_member',
    'is_tuple_member',
    'TupleAssembler',
    'TupleHierarchy',
    'TupleEntry',
    'InstanceGenerator',
    'create_instance_documents',
]
