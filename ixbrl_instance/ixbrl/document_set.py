# Path: ixbrl_instance/ixbrl/document_set.py
"""
Inline XBRL Document Set

Loads one or more Inline XBRL (XHTML) documents and builds the fact
indices used by instance generation.

This module handles:
- XHTML parsing with lxml (documents must be well-formed XML)
- Namespace declaration collection per document
- Indexing of every ix element by local name, id and target

Example:
    document_set = IXBRLDocumentSet.from_files([Path("report.xhtml")])
    indices = document_set.build_indices()
    print(document_set.targets())
"""

from pathlib import Path
from typing import Optional, Union
import time
from lxml import etree

from ..core.config_loader import ConfigLoader
from ..core.logger import get_input_logger
from ..models.error import StructuralError
from ..models.indices import SourceDocument, FactIndices
from ..foundation.node_utils import is_inline_element, local_name
from ..constants import ATTR_ID, ATTR_TARGET, DEFAULT_TARGET


class IXBRLDocumentSet:
    """
    A set of Inline XBRL documents forming one report.

    Documents keep their load order; that order defines document order
    across the set.

    Example:
        document_set = IXBRLDocumentSet.from_files(paths)
        indices = document_set.build_indices()
    """

    def __init__(
        self,
        documents: list[SourceDocument],
        config: Optional[ConfigLoader] = None
    ):
        """
        Initialize document set.

        Args:
            documents: Parsed source documents
            config: Configuration loader
        """
        self.config = config or ConfigLoader()
        self.logger = get_input_logger('document_set')
        self.documents = list(documents)
        self._indices: Optional[FactIndices] = None

    @classmethod
    def from_files(
        cls,
        paths: list[Union[str, Path]],
        config: Optional[ConfigLoader] = None
    ) -> 'IXBRLDocumentSet':
        """
        Parse documents from disk.

        Raises:
            StructuralError: A file is missing or not well-formed XML
        """
        logger = get_input_logger('document_set')
        documents = []

        for path in paths:
            path = Path(path)
            if not path.exists():
                raise StructuralError(f"Inline XBRL document not found: {path}")

            start_time = time.time()
            try:
                tree = etree.parse(str(path), parser=cls._parser())
            except etree.XMLSyntaxError as e:
                raise StructuralError(f"{path} is not well-formed XHTML: {e}") from e

            document = SourceDocument.from_tree(tree, path.resolve().as_uri())
            documents.append(document)
            logger.info(
                f"Loaded {path.name} ({len(document.namespaces)} namespaces) "
                f"in {time.time() - start_time:.2f}s"
            )

        return cls(documents, config)

    @classmethod
    def from_strings(
        cls,
        contents: list[Union[str, bytes]],
        base_urls: Optional[list[Optional[str]]] = None,
        config: Optional[ConfigLoader] = None
    ) -> 'IXBRLDocumentSet':
        """
        Parse documents held in memory.

        Args:
            contents: XHTML documents
            base_urls: Location of each document (used for href resolution)
            config: Configuration loader

        Raises:
            StructuralError: A document is not well-formed XML
        """
        base_urls = base_urls or [None] * len(contents)
        documents = []

        for index, (content, base_url) in enumerate(zip(contents, base_urls)):
            if isinstance(content, str):
                content = content.encode('utf-8')
            try:
                root = etree.fromstring(content, parser=cls._parser(), base_url=base_url)
            except etree.XMLSyntaxError as e:
                raise StructuralError(f"Document {index} is not well-formed XHTML: {e}") from e

            documents.append(
                SourceDocument.from_tree(root.getroottree(), base_url or f"document-{index}")
            )

        return cls(documents, config)

    @staticmethod
    def _parser() -> etree.XMLParser:
        # Entities stay unresolved and no network access is made
        return etree.XMLParser(resolve_entities=False, no_network=True, huge_tree=True)

    def build_indices(self) -> FactIndices:
        """
        Index every Inline XBRL element of the set.

        Elements without a target attribute belong to the default target.
        The first element seen with a given id wins.

        Returns:
            FactIndices shared by all target runs
        """
        if self._indices is not None:
            return self._indices

        nodes_by_target: dict[str, list[etree._Element]] = {DEFAULT_TARGET: []}
        by_local_name: dict[str, list[etree._Element]] = {}
        by_id: dict[str, etree._Element] = {}

        for document in self.documents:
            count = 0
            for element in document.root.iter(tag=etree.Element):
                if not is_inline_element(element):
                    continue
                count += 1

                by_local_name.setdefault(local_name(element), []).append(element)

                element_id = element.get(ATTR_ID)
                if element_id:
                    if element_id in by_id:
                        self.logger.warning(f"Duplicate id '{element_id}' in {document.url}; first kept")
                    else:
                        by_id[element_id] = element

                target = (element.get(ATTR_TARGET) or DEFAULT_TARGET).strip()
                nodes_by_target.setdefault(target, []).append(element)

            self.logger.debug(f"Indexed {count} inline elements in {document.url}")

        self._indices = FactIndices.from_target_nodes(
            nodes_by_target, by_local_name, by_id, self.documents
        )

        self.logger.info(
            f"Indexed {len(self.documents)} document(s): "
            f"{sum(len(nodes) for nodes in nodes_by_target.values())} inline elements, "
            f"{len(nodes_by_target)} target(s)"
        )
        return self._indices

    def targets(self) -> list[str]:
        """Discovered targets, default target ('') first."""
        return self.build_indices().targets()


__all__ = ['IXBRLDocumentSet']
