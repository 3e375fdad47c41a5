# Path: ixbrl_instance/instance/generator.py
"""
Instance Generation

Generates one XBRL instance document per target of an Inline XBRL
document set.

Per target, in order:
1. curate namespaces and create the xbrli:xbrl root
2. write the three header comments
3. link taxonomy references
4. copy the contexts and units the target uses
5. emit facts, then tuples

Targets share only the read-only indices, so they can be generated in
parallel.

Example:
    indices = IXBRLDocumentSet.from_files(paths).build_indices()
    documents = create_instance_documents(['', 'fr'], 'report', indices)
"""

from concurrent.futures import ThreadPoolExecutor
from datetime import datetime
from typing import Any, Callable, Optional
import time

from ..core.config_loader import ConfigLoader
from ..core.logger import get_process_logger
from ..models.error import ErrorSeverity, StructuralError
from ..models.indices import FactIndices
from ..models.instance_document import InstanceDocument
from ..ixbrl.transforms import ValueFormatter
from ..constants import (
    XBRL_ROOT,
    XBRLI_NS,
    HEADER_COMMENTS,
    HEADER_TIMESTAMP_FORMAT,
)
from .tree_builder import InstanceTreeBuilder
from .namespace_curator import NamespaceCurator
from .target_run import TargetRun
from .reference_linker import ReferenceLinker
from .resource_filter import ResourceFilter
from .fact_emitter import FactEmitter
from .tuple_assembler import TupleAssembler


class InstanceGenerator:
    """
    Generates instance documents from shared fact indices.

    Example:
        generator = InstanceGenerator(indices)
        document = generator.generate('', 'report')
        print(document.summary())
    """

    def __init__(
        self,
        indices: FactIndices,
        formatter: Optional[Any] = None,
        config: Optional[ConfigLoader] = None,
        clock: Callable[[], datetime] = datetime.now
    ):
        """
        Initialize generator.

        Args:
            indices: Fact indices of the document set
            formatter: Value formatter (ValueFormatter when None)
            config: Configuration loader
            clock: Source of the creation timestamp
        """
        self.config = config or ConfigLoader()
        self.indices = indices
        self.formatter = formatter or ValueFormatter(self.config)
        self.clock = clock
        self.logger = get_process_logger('instance_generator')

        self.description = self.config.get('description')
        self.phase_label = self.config.get('phase_label')

    def generate(self, target: str, name: str) -> InstanceDocument:
        """
        Generate the instance document of one target.

        Raises:
            StructuralError: The output tree could not be built
        """
        start_time = time.time()
        self.logger.info(f"Generating instance for target '{target}'")

        registry = NamespaceCurator().curate(self.indices.documents)
        builder = InstanceTreeBuilder(registry)
        builder.create_root(XBRL_ROOT, XBRLI_NS)

        document = InstanceDocument(target=target, name=name, namespaces=registry)
        self._add_header(builder, document)

        run = TargetRun(
            target=target,
            indices=self.indices,
            builder=builder,
            formatter=self.formatter,
            phase_label=self.phase_label,
            errors=document.errors,
        )

        document.reference_count = ReferenceLinker(run).link()
        document.context_count, document.unit_count = ResourceFilter(run).apply()

        emitter = FactEmitter(run)
        emitter.emit_root_facts()
        document.tuple_count = TupleAssembler(run, emitter).assemble()
        document.fact_count = emitter.emitted

        document.tree = builder.tree
        document.generation_time_seconds = time.time() - start_time

        self.logger.info(
            f"Target '{target}': {document.fact_count} facts, {document.tuple_count} tuples, "
            f"{document.context_count} contexts, {document.unit_count} units, "
            f"{len(document.errors)} issue(s) in {document.generation_time_seconds:.2f}s"
        )
        return document

    def generate_all(self, targets: list[str], name: str) -> list[InstanceDocument]:
        """
        Generate every requested target, in the requested order.

        A target failing structurally yields a document without a tree
        whose errors hold the CRITICAL record; other targets are unaffected.
        """
        workers = min(self.config.get('max_workers', 1), len(targets))
        if self.config.get('enable_parallel', False) and workers > 1:
            self.logger.info(f"Generating {len(targets)} targets with {workers} workers")
            with ThreadPoolExecutor(max_workers=workers) as executor:
                return list(executor.map(lambda target: self._generate_safely(target, name), targets))

        return [self._generate_safely(target, name) for target in targets]

    def _generate_safely(self, target: str, name: str) -> InstanceDocument:
        try:
            return self.generate(target, name)
        except StructuralError as e:
            self.logger.error(f"Target '{target}' failed: {e}")
            document = InstanceDocument(target=target, name=name)
            document.errors.add(e.to_record(target))
            return document

    def _add_header(self, builder: InstanceTreeBuilder, document: InstanceDocument) -> None:
        values = {
            'location': document.location,
            'description': self.description,
            'timestamp': self.clock().strftime(HEADER_TIMESTAMP_FORMAT),
        }
        for template in HEADER_COMMENTS:
            builder.add_comment(template.format(**values))


def create_instance_documents(
    targets: list[str],
    name: str,
    indices: FactIndices,
    formatter: Optional[Any] = None,
    config: Optional[ConfigLoader] = None
) -> list[InstanceDocument]:
    """
    Generate one instance document per target.

    Args:
        targets: Target ids ('' for the default target)
        name: Document-name seed; a document's location is name + target
        indices: Fact indices of the document set
        formatter: Value formatter (ValueFormatter when None)
        config: Configuration loader

    Returns:
        Documents in the order of targets

    Raises:
        StructuralError: First structural failure, raised once every
            target has been attempted
    """
    generator = InstanceGenerator(indices, formatter, config)
    documents = generator.generate_all(list(targets), name)

    for document in documents:
        if not document.succeeded:
            critical = document.errors.get_by_severity(ErrorSeverity.CRITICAL)[0]
            raise StructuralError(critical.message, critical.local_name, critical.element_id)

    return documents


__all__ = ['InstanceGenerator', 'create_instance_documents']
