# Path: tests/unit/test_tree_builder.py
"""
Unit Tests for InstanceTreeBuilder and NamespaceCurator

Tests:
- root creation, header comments, elements and content
- QName resolution against source declarations
- deep copy with a filter predicate
- attribute-copy rule
- namespace curation across documents
"""

import sys
from pathlib import Path

import pytest
from lxml import etree

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from ixbrl_instance.instance.tree_builder import InstanceTreeBuilder, attribute_is_copied
from ixbrl_instance.instance.namespace_curator import NamespaceCurator
from ixbrl_instance.foundation.namespace_registry import NamespaceRegistry
from ixbrl_instance.models.indices import SourceDocument
from ixbrl_instance.models.error import StructuralError, FormatError
from ixbrl_instance.constants import XBRLI_NS, XHTML_NS, IX_NS_2013, IX_NS_2011, XBRLDI_NS, LINK_NS
from fixtures.sample_documents import (
    EX_NS,
    XSI_NS,
    inline_element,
    clark,
)


@pytest.fixture
def registry():
    """Registry holding xbrli and the example taxonomy."""
    registry = NamespaceRegistry()
    registry.register('xbrli', XBRLI_NS)
    registry.register('ex', EX_NS)
    return registry


@pytest.fixture
def builder(registry):
    """Builder with an xbrli:xbrl root."""
    builder = InstanceTreeBuilder(registry)
    builder.create_root('xbrl', XBRLI_NS)
    return builder


class TestAttributeCopyRule:
    """Test which source attributes reach the output."""

    @pytest.mark.parametrize('name', ['contextRef', 'unitRef', 'name', 'format', 'scale',
                                      'sign', 'target', 'tupleRef', 'tupleID', 'order',
                                      'continuedAt', 'escape'])
    def test_inline_only_attributes_dropped(self, name):
        """Unqualified inline-only attributes are dropped."""
        assert not attribute_is_copied(name)

    def test_regular_attributes_kept(self):
        """Ordinary attributes and foreign-namespace attributes are kept."""
        assert attribute_is_copied('decimals')
        assert attribute_is_copied('id')
        assert attribute_is_copied(clark(XSI_NS, 'nil'))

    def test_inline_namespace_attributes_dropped(self):
        """Attributes in either inline namespace are dropped."""
        assert not attribute_is_copied(clark(IX_NS_2013, 'anything'))
        assert not attribute_is_copied(clark(IX_NS_2011, 'anything'))


class TestDocumentLevel:
    """Test root and comment handling."""

    def test_root_declares_registry(self, builder):
        """The root carries the registry's declarations."""
        root = builder.get_root()

        assert root.tag == clark(XBRLI_NS, 'xbrl')
        assert root.nsmap == {'xbrli': XBRLI_NS, 'ex': EX_NS}

    def test_get_root_before_create(self, registry):
        """Asking for the root before creating it is structural."""
        with pytest.raises(StructuralError, match='root node has not been defined'):
            InstanceTreeBuilder(registry).get_root()

    def test_comments_precede_root_in_order(self, builder):
        """Comments without a parent go before the root, in call order."""
        builder.add_comment('first')
        builder.add_comment('second')

        output = etree.tostring(builder.tree, encoding='unicode')
        assert output.index('<!--first-->') < output.index('<!--second-->') < output.index('<xbrli:xbrl')


class TestElements:
    """Test element, attribute and content creation."""

    def test_add_element_uses_registry_prefix(self, builder):
        """Registered namespaces need no local declaration."""
        element = builder.add_element('context', namespace=XBRLI_NS)

        assert element.getparent() is builder.get_root()
        assert element.prefix == 'xbrli'
        assert etree.tostring(builder.get_root(), encoding='unicode').count('xmlns:xbrli=') == 1

    def test_add_element_declares_unknown_namespace_locally(self, builder):
        """A namespace outside the registry is declared on the element."""
        element = builder.add_element('thing', namespace='http://other.example.com/', prefix='oth')

        assert element.nsmap['oth'] == 'http://other.example.com/'
        assert 'oth' not in builder.get_root().nsmap

    def test_add_content_appends_after_last_child(self, builder):
        """Text after a child goes into that child's tail."""
        parent = builder.add_element('a')
        builder.add_content('x', parent)
        child = builder.add_element('b', parent)
        builder.add_content('y', parent)

        assert parent.text == 'x'
        assert child.tail == 'y'

    def test_remove(self, builder):
        """Removed elements are detached."""
        element = builder.add_element('a')
        builder.remove(element)

        assert len(builder.get_root()) == 0

    def test_non_element_parent(self, builder):
        """Comments cannot take children."""
        comment = builder.add_comment('c', builder.get_root())
        with pytest.raises(StructuralError):
            builder.add_element('a', comment)


class TestQNameElements:
    """Test elements named by source QNames."""

    def test_prefixed_name(self, builder):
        """The prefix is resolved on the source element."""
        source = inline_element('<ix:nonNumeric name="ex:Note"/>')
        element = builder.add_qname_element('ex:Note', source)

        assert element.tag == clark(EX_NS, 'Note')
        assert element.prefix == 'ex'

    def test_unprefixed_name(self, builder):
        """An unprefixed name gives an unqualified element."""
        source = inline_element('<ix:nonNumeric name="Note"/>')

        assert builder.add_qname_element('Note', source).tag == 'Note'

    def test_undeclared_prefix(self, builder):
        """An undeclared prefix cannot be resolved."""
        source = inline_element('<ix:nonNumeric name="zz:Note" id="n1"/>')
        with pytest.raises(FormatError, match='undeclared prefix'):
            builder.add_qname_element('zz:Note', source)

    def test_empty_name(self, builder):
        """A fact without a name cannot be emitted."""
        source = inline_element('<ix:nonNumeric/>')
        with pytest.raises(FormatError, match='no name'):
            builder.add_qname_element(None, source)


class TestDeepCopy:
    """Test recursive copies of source subtrees."""

    @pytest.fixture
    def resources(self):
        """An ix:resources block with a context, a unit, a comment and whitespace."""
        return inline_element(
            '<ix:resources>\n  '
            '<xbrli:context id="C1"><xbrli:entity>'
            '<xbrli:identifier scheme="http://www.sec.gov/CIK">1</xbrli:identifier>'
            '</xbrli:entity></xbrli:context>\n  '
            '<!-- dropped -->'
            '<xbrli:unit id="U1"><xbrli:measure>iso4217:USD</xbrli:measure></xbrli:unit>\n'
            '</ix:resources>'
        )

    def test_filter_applies_to_direct_children(self, builder, resources):
        """Only accepted children are copied, with their whole subtree."""
        created = builder.copy_children(
            resources, builder.get_root(), lambda node: node.get('id') == 'C1'
        )

        assert [element.get('id') for element in created] == ['C1']
        identifier = created[0].find(f'.//{clark(XBRLI_NS, "identifier")}')
        assert identifier.text == '1'
        assert identifier.get('scheme') == 'http://www.sec.gov/CIK'

    def test_whitespace_and_comments_dropped(self, builder, resources):
        """Blank text and comments are not copied."""
        builder.copy_children(resources, builder.get_root())
        root = builder.get_root()

        assert len(root) == 2
        assert all(isinstance(child.tag, str) for child in root)
        assert not (root.text or '').strip()
        assert all(not (child.tail or '').strip() for child in root)

    def test_copy_node_keeps_text(self, builder):
        """Non-blank text inside copied elements survives."""
        source = inline_element('<xbrli:measure>iso4217:USD</xbrli:measure>')
        copied = builder.copy_node(source, builder.get_root())

        assert copied.text == 'iso4217:USD'


class TestNamespaceCurator:
    """Test namespace curation across documents."""

    def _document(self, url, namespaces):
        declarations = ' '.join(f'xmlns:{prefix}="{uri}"' for prefix, uri in namespaces.items())
        root = etree.fromstring(f'<html xmlns="{XHTML_NS}" {declarations}/>')
        return SourceDocument.from_tree(root.getroottree(), url)

    def test_excluded_namespaces_dropped(self):
        """XHTML and inline namespaces never reach the instance."""
        document = self._document('a', {'ix': IX_NS_2013, 'ix10': IX_NS_2011, 'ex': EX_NS})
        registry = NamespaceCurator().curate([document])

        assert not registry.has_uri(IX_NS_2013)
        assert not registry.has_uri(IX_NS_2011)
        assert not registry.has_uri(XHTML_NS)
        assert registry.get_prefix(EX_NS) == 'ex'

    def test_xbrli_always_present(self):
        """The instance namespace is added under 'xbrli' when undeclared."""
        registry = NamespaceCurator().curate([self._document('a', {'ex': EX_NS})])

        assert registry.get_prefix(XBRLI_NS) == 'xbrli'

    def test_xbrli_prefix_taken(self):
        """A taken 'xbrli' prefix gets a numbered alternative."""
        registry = NamespaceCurator().curate([self._document('a', {'xbrli': EX_NS})])

        assert registry.get_prefix(XBRLI_NS) == 'xbrli1'

    def test_source_xbrli_prefix_kept(self):
        """A source prefix for the instance namespace is kept."""
        registry = NamespaceCurator().curate([self._document('a', {'xi': XBRLI_NS})])

        assert registry.get_prefix(XBRLI_NS) == 'xi'

    def test_first_document_wins(self):
        """Across documents the first binding of a prefix wins."""
        first = self._document('a', {'ex': EX_NS, 'xbrldi': XBRLDI_NS})
        second = self._document('b', {'ex': 'http://other.example.com/', 'link': LINK_NS})
        registry = NamespaceCurator().curate([first, second])

        assert registry.as_nsmap()['ex'] == EX_NS
        assert not registry.has_uri('http://other.example.com/')
        assert registry.get_prefix(XBRLDI_NS) == 'xbrldi'
        assert registry.get_prefix(LINK_NS) == 'link'
