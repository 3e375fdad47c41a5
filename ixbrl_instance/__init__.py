# Path: ixbrl_instance/__init__.py
"""
ixbrl_instance

Generates standalone XBRL instance documents, one per target, from an
Inline XBRL document set.

Example:
    from ixbrl_instance import IXBRLDocumentSet, create_instance_documents

    document_set = IXBRLDocumentSet.from_files(["report.xhtml"])
    indices = document_set.build_indices()
    for document in create_instance_documents(document_set.targets(), "report", indices):
        print(document.summary())
"""

from .ixbrl import IXBRLDocumentSet, ValueFormatter
from .instance import InstanceGenerator, create_instance_documents
from .models import (
    FactIndices,
    SourceDocument,
    InstanceDocument,
    StructuralError,
    FormatError,
    IncompleteFractionError,
)
from .output import InstanceWriter

__version__ = '1.0.0'

__all__ = [
    'IXBRLDocumentSet',
    'ValueFormatter',
    'InstanceGenerator',
    'create_instance_documents',
    'FactIndices',
    'SourceDocument',
    'InstanceDocument',
    'StructuralError',
    'FormatError',
    'IncompleteFractionError',
    'InstanceWriter',
]
