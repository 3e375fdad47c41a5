# Path: ixbrl_instance/ixbrl/__init__.py
"""
Inline XBRL Input

- IXBRLDocumentSet: loading and indexing of inline documents
- ValueFormatter: canonical values from presentation content
"""

from .document_set import IXBRLDocumentSet
from .transforms import ValueFormatter, TRANSFORMS

__all__ = ['IXBRLDocumentSet', 'ValueFormatter', 'TRANSFORMS']
