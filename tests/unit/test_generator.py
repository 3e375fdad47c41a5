# Path: tests/unit/test_generator.py
"""
Unit Tests for InstanceGenerator

End-to-end generation of instance documents from in-memory Inline XBRL:
- header comments and root declarations
- resource pruning, fractions, tuples and reference resolution
- namespace hygiene and deterministic output
- multi-target generation (sequential and parallel)
"""

import sys
from pathlib import Path

import pytest
from lxml import etree

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from ixbrl_instance.instance.generator import InstanceGenerator, create_instance_documents
from ixbrl_instance.models.error import ErrorCategory, StructuralError, ReliabilityLevel
from ixbrl_instance.constants import XBRLI_NS, LINK_NS, XLINK_NS, IX_NS_2013, XHTML_NS
from fixtures.sample_documents import (
    make_ixbrl,
    context,
    unit,
    schema_ref,
    clark,
    all_namespaces_in_use,
    EX_NS,
    FIXED_TIMESTAMP,
)


def _ids(root, name):
    return [element.get('id') for element in root.iter(clark(XBRLI_NS, name))]


def _facts(root, name):
    return list(root.iter(clark(EX_NS, name)))


class TestDocumentShape:
    """Test the overall shape of a generated instance."""

    @pytest.fixture
    def document(self, generate):
        body = '<ix:nonFraction name="ex:Revenue" contextRef="C1" unitRef="U1" decimals="0">100</ix:nonFraction>'
        return generate(make_ixbrl(body, context('C1') + unit('U1')), name='acme-2024')

    def test_header_comments(self, document):
        """Three comments precede the root."""
        comments = []
        node = document.root.getprevious()
        while node is not None:
            comments.insert(0, node.text)
            node = node.getprevious()

        assert comments == [
            'Location           : acme-2024 ',
            'Description        : Test instance',
            'Creation Date      : 2024-12-31 23:59:00 ',
        ]

    def test_root_element(self, document):
        """The root is xbrli:xbrl."""
        assert document.root.tag == clark(XBRLI_NS, 'xbrl')
        assert document.root.prefix == 'xbrli'

    def test_child_order(self, document):
        """References, then contexts, then units, then facts."""
        names = [etree.QName(child).localname for child in document.root]
        assert names == ['schemaRef', 'context', 'unit', 'Revenue']

    def test_statistics(self, document):
        """Counts are filled in."""
        assert document.succeeded
        assert document.fact_count == 1
        assert document.context_count == 1
        assert document.unit_count == 1
        assert document.reference_count == 1
        assert document.tuple_count == 0
        assert document.reliability == ReliabilityLevel.COMPLETE
        assert document.summary()['location'] == 'acme-2024'

    def test_serialization(self, document):
        """Output starts with the XML declaration, then the comments."""
        output = document.to_bytes()

        assert output.startswith(b"<?xml version='1.0' encoding='UTF-8'?>")
        assert output.index(b'<!--Location') < output.index(b'<xbrli:xbrl')


class TestScenarios:
    """Worked examples of generation."""

    def test_resource_pruning(self, generate):
        """Only contexts and units used by facts are kept."""
        body = (
            '<ix:nonFraction name="ex:Revenue" contextRef="C1" unitRef="U1" decimals="0">100</ix:nonFraction>'
            '<ix:nonNumeric name="ex:Note" contextRef="C3">text</ix:nonNumeric>'
        )
        resources = context('C1') + context('C2') + context('C3') + unit('U1') + unit('U2')
        document = generate(make_ixbrl(body, resources))

        assert _ids(document.root, 'context') == ['C1', 'C3']
        assert _ids(document.root, 'unit') == ['U1']

    def test_fraction(self, generate):
        """A fraction gets xbrli numerator and denominator children."""
        body = (
            '<ix:fraction name="ex:Ratio" contextRef="C1" unitRef="U1">'
            '<ix:numerator>1</ix:numerator>/<ix:denominator>3</ix:denominator>'
            '</ix:fraction>'
        )
        document = generate(make_ixbrl(body, context('C1') + unit('U1')))

        ratio = _facts(document.root, 'Ratio')[0]
        assert [etree.QName(child).localname for child in ratio] == ['numerator', 'denominator']
        assert ratio[0].text == '1'
        assert ratio[1].text == '3'

    def test_incomplete_fraction(self, generate):
        """A fraction without a denominator is omitted and recorded."""
        body = (
            '<ix:fraction name="ex:Ratio" id="r1" contextRef="C1" unitRef="U1">'
            '<ix:numerator>1</ix:numerator>'
            '</ix:fraction>'
        )
        document = generate(make_ixbrl(body, context('C1') + unit('U1')))

        assert _facts(document.root, 'Ratio') == []
        assert [e.category for e in document.errors] == [ErrorCategory.FRACTION_INCOMPLETE]
        assert document.reliability == ReliabilityLevel.PARTIAL

    def test_scale_overflow_omits_only_that_fact(self, generate):
        """An out-of-range scale drops its fact; the other facts are kept."""
        body = (
            '<ix:nonFraction name="ex:Bad" id="b1" contextRef="C1" unitRef="U1" scale="1000000">1</ix:nonFraction>'
            '<ix:nonFraction name="ex:Revenue" contextRef="C1" unitRef="U1" decimals="0">100</ix:nonFraction>'
        )
        document = generate(make_ixbrl(body, context('C1') + unit('U1')))

        assert document.succeeded
        assert _facts(document.root, 'Bad') == []
        assert [fact.text for fact in _facts(document.root, 'Revenue')] == ['100']
        assert [(e.category, e.element_id) for e in document.errors] == [(ErrorCategory.FORMAT_INVALID, 'b1')]

    def test_tuple_members(self, generate):
        """Explicit members are placed in their tuple in source order."""
        body = (
            '<ix:tuple name="ex:Officer" tupleID="t1"/>'
            '<ix:nonNumeric name="ex:OfficerName" contextRef="C1" tupleRef="t1">Jane Doe</ix:nonNumeric>'
            '<ix:nonNumeric name="ex:OfficerTitle" contextRef="C1" tupleRef="t1">CFO</ix:nonNumeric>'
        )
        document = generate(make_ixbrl(body, context('C1')))

        officer = _facts(document.root, 'Officer')[0]
        assert officer.getparent() is document.root
        assert [etree.QName(child).localname for child in officer] == ['OfficerName', 'OfficerTitle']
        assert document.tuple_count == 1
        assert document.fact_count == 2

    def test_reference_base(self, generate):
        """A directory xml:base resolves the schema location."""
        document = generate(make_ixbrl(
            '', '',
            references=schema_ref('abc-2024.xsd'),
            references_attrs='xml:base="http://example.com/taxonomy/"'
        ))

        reference = document.root.find(clark(LINK_NS, 'schemaRef'))
        assert reference.get(clark(XLINK_NS, 'href')) == 'http://example.com/taxonomy/abc-2024.xsd'

    def test_reference_without_directory_base(self, generate):
        """A base without a trailing '/' leaves the href as written."""
        document = generate(make_ixbrl(
            '', '',
            references=schema_ref('abc-2024.xsd'),
            references_attrs='xml:base="http://example.com/taxonomy"'
        ))

        reference = document.root.find(clark(LINK_NS, 'schemaRef'))
        assert reference.get(clark(XLINK_NS, 'href')) == 'abc-2024.xsd'


class TestProperties:
    """Properties every generated instance has."""

    BODY = (
        '<ix:nonFraction name="ex:Revenue" contextRef="C1" unitRef="U1" decimals="0" '
        'format="ixt:num-dot-decimal">1,000</ix:nonFraction>'
        '<ix:nonNumeric name="ex:Note" contextRef="C1" escape="true"><b>bold</b></ix:nonNumeric>'
        '<ix:nonFraction name="ex:Revenue" target="fr" contextRef="C2" unitRef="U2" decimals="0">2</ix:nonFraction>'
        '<ix:tuple name="ex:Group"><ix:nonNumeric name="ex:Member" contextRef="C1">m</ix:nonNumeric></ix:tuple>'
    )
    RESOURCES = context('C1') + context('C2') + unit('U1') + unit('U2', 'iso4217:EUR')

    def test_no_inline_namespaces(self, generate):
        """XHTML and inline namespaces never appear in the output."""
        document = generate(make_ixbrl(self.BODY, self.RESOURCES))
        namespaces = all_namespaces_in_use(document.root)

        assert IX_NS_2013 not in namespaces
        assert XHTML_NS not in namespaces
        assert XBRLI_NS in namespaces
        assert IX_NS_2013.encode() not in document.to_bytes()

    def test_deterministic(self, generate):
        """The same input and clock give identical bytes."""
        source = make_ixbrl(self.BODY, self.RESOURCES)

        assert generate(source).to_bytes() == generate(source).to_bytes()

    def test_targets_pruned_independently(self, load_indices, mock_config):
        """Each target keeps only its own facts and resources."""
        indices = load_indices(make_ixbrl(self.BODY, self.RESOURCES))
        generator = InstanceGenerator(indices, config=mock_config, clock=lambda: FIXED_TIMESTAMP)

        default, fr = generator.generate_all(['', 'fr'], 'report')

        assert _ids(default.root, 'context') == ['C1']
        assert _ids(default.root, 'unit') == ['U1']
        assert _ids(fr.root, 'context') == ['C2']
        assert _ids(fr.root, 'unit') == ['U2']
        assert len(_facts(fr.root, 'Revenue')) == 1
        assert _facts(fr.root, 'Note') == []
        assert fr.location == 'reportfr'
        assert fr.root.find(clark(LINK_NS, 'schemaRef')) is not None

    def test_indices_not_mutated(self, load_indices, mock_config):
        """Generating twice from the same indices gives the same result."""
        indices = load_indices(make_ixbrl(self.BODY, self.RESOURCES))
        generator = InstanceGenerator(indices, config=mock_config, clock=lambda: FIXED_TIMESTAMP)

        first = generator.generate('', 'report').to_bytes()
        second = generator.generate('', 'report').to_bytes()

        assert first == second

    def test_escaped_content_is_text(self, generate):
        """Escaped markup is written as character content."""
        document = generate(make_ixbrl(self.BODY, self.RESOURCES))
        note = _facts(document.root, 'Note')[0]

        assert len(note) == 0
        assert 'bold</b>' in note.text

    def test_implicit_tuple_member(self, generate):
        """Facts inside an ix:tuple are emitted inside the output tuple."""
        document = generate(make_ixbrl(self.BODY, self.RESOURCES))
        group = _facts(document.root, 'Group')[0]

        assert [etree.QName(child).localname for child in group] == ['Member']


class TestMultiTarget:
    """Test generation of several targets."""

    SOURCE = make_ixbrl(
        '<ix:nonNumeric name="ex:Note" contextRef="C1">default</ix:nonNumeric>'
        '<ix:nonNumeric name="ex:Note" target="fr" contextRef="C1">fr</ix:nonNumeric>'
        '<ix:nonNumeric name="ex:Note" target="de" contextRef="C1">de</ix:nonNumeric>',
        context('C1')
    )

    def test_parallel_matches_sequential(self, load_indices, mock_config, parallel_config):
        """Parallel generation returns the same documents in requested order."""
        indices = load_indices(self.SOURCE)
        clock = lambda: FIXED_TIMESTAMP

        sequential = InstanceGenerator(indices, config=mock_config, clock=clock).generate_all(
            ['fr', '', 'de'], 'report'
        )
        parallel = InstanceGenerator(indices, config=parallel_config, clock=clock).generate_all(
            ['fr', '', 'de'], 'report'
        )

        assert [d.target for d in parallel] == ['fr', '', 'de']
        assert [d.to_bytes() for d in parallel] == [d.to_bytes() for d in sequential]
        assert _facts(parallel[0].root, 'Note')[0].text == 'fr'

    def test_create_instance_documents(self, load_indices, mock_config):
        """The convenience function returns one document per target."""
        indices = load_indices(self.SOURCE)

        documents = create_instance_documents(['', 'de'], 'report', indices, config=mock_config)

        assert [d.location for d in documents] == ['report', 'reportde']
        assert all(d.succeeded for d in documents)

    def test_unknown_target_is_empty(self, load_indices, mock_config):
        """A target with no facts still yields a (mostly empty) instance."""
        indices = load_indices(self.SOURCE)

        document = create_instance_documents(['xx'], 'report', indices, config=mock_config)[0]

        assert document.fact_count == 0
        assert _ids(document.root, 'context') == []
        assert document.root.find(clark(LINK_NS, 'schemaRef')) is not None


class TestStructuralFailure:
    """Test handling of targets that cannot be built."""

    @pytest.fixture
    def failing_generator(self, load_indices, mock_config, monkeypatch):
        indices = load_indices(make_ixbrl('', context('C1')))
        generator = InstanceGenerator(indices, config=mock_config, clock=lambda: FIXED_TIMESTAMP)
        original = generator.generate

        def generate(target, name):
            if target == 'bad':
                raise StructuralError("A root node has not been defined")
            return original(target, name)

        monkeypatch.setattr(generator, 'generate', generate)
        return generator

    def test_failed_target_isolated(self, failing_generator):
        """A failing target yields a tree-less document; others succeed."""
        good, bad = failing_generator.generate_all(['', 'bad'], 'report')

        assert good.succeeded
        assert not bad.succeeded
        assert bad.reliability == ReliabilityLevel.FAILED
        with pytest.raises(ValueError):
            bad.to_bytes()

    def test_create_instance_documents_raises(self, failing_generator, monkeypatch):
        """The convenience function surfaces the structural failure."""
        monkeypatch.setattr(
            'ixbrl_instance.instance.generator.InstanceGenerator',
            lambda *args, **kwargs: failing_generator
        )

        with pytest.raises(StructuralError, match='root node'):
            create_instance_documents(['', 'bad'], 'report', failing_generator.indices)
