# Path: ixbrl_instance/constants.py
"""
Inline XBRL Instance Constants

Central repository for namespaces, element names and attribute names used
when generating XBRL instance documents from an Inline XBRL document set.

All constants are based on XBRL and iXBRL specifications:
- XBRL 2.1 Specification
- XBRL Dimensions 1.0
- Inline XBRL 1.0 (2011) and 1.1 (2013) Specifications
- Inline XBRL Transformation Registries
"""

# ==============================================================================
# XBRL NAMESPACES - STANDARD
# ==============================================================================

# XBRL Instance namespace
XBRLI_NS = 'http://www.xbrl.org/2003/instance'

# XBRL Dimensions instance namespace
XBRLDI_NS = 'http://xbrl.org/2006/xbrldi'

# XBRL Linkbase namespace
LINK_NS = 'http://www.xbrl.org/2003/linkbase'

# XLink namespace
XLINK_NS = 'http://www.w3.org/1999/xlink'

# XML namespace
XML_NS = 'http://www.w3.org/XML/1998/namespace'

# XSI namespace (XML Schema Instance)
XSI_NS = 'http://www.w3.org/2001/XMLSchema-instance'

# XHTML namespace (host markup of inline documents)
XHTML_NS = 'http://www.w3.org/1999/xhtml'

# ==============================================================================
# iXBRL NAMESPACES
# ==============================================================================

# Inline XBRL 1.0 (2011 specification)
IX_NS_2011 = 'http://www.xbrl.org/2008/inlineXBRL'

# Inline XBRL 1.1 (2013 specification)
IX_NS_2013 = 'http://www.xbrl.org/2013/inlineXBRL'

IX_NAMESPACES = (IX_NS_2013, IX_NS_2011)

# Namespaces that must never appear in a generated instance
EXCLUDED_NAMESPACES = (XHTML_NS, IX_NS_2011, IX_NS_2013)

# Namespaces carried into every instance when the source declares them
FORCED_NAMESPACES = (XBRLDI_NS, LINK_NS, XLINK_NS)

# Prefix used for the instance namespace when no source declares one
DEFAULT_XBRLI_PREFIX = 'xbrli'

# ==============================================================================
# iXBRL ELEMENT NAMES
# ==============================================================================

IX_NON_FRACTION = 'nonFraction'
IX_NON_NUMERIC = 'nonNumeric'
IX_FRACTION = 'fraction'
IX_NUMERATOR = 'numerator'
IX_DENOMINATOR = 'denominator'
IX_TUPLE = 'tuple'

IX_RESOURCES = 'resources'
IX_REFERENCES = 'references'
IX_CONTINUATION = 'continuation'
IX_EXCLUDE = 'exclude'

# Fact kinds emitted by the fact emitter, in emission order
IX_FACT_ELEMENTS = (IX_FRACTION, IX_NON_FRACTION, IX_NON_NUMERIC)

# Fact kinds whose content is a plain (non-composite) value
IX_SIMPLE_FACT_ELEMENTS = (IX_NON_FRACTION, IX_NON_NUMERIC)

# Kinds whose content is numeric
IX_NUMERIC_ELEMENTS = (IX_NON_FRACTION, IX_NUMERATOR, IX_DENOMINATOR)

# ==============================================================================
# XBRL STRUCTURAL ELEMENTS
# ==============================================================================

XBRL_ROOT = 'xbrl'
XBRL_CONTEXT = 'context'
XBRL_UNIT = 'unit'

# ==============================================================================
# ATTRIBUTE NAMES
# ==============================================================================

ATTR_ID = 'id'
ATTR_NAME = 'name'
ATTR_CONTEXT_REF = 'contextRef'
ATTR_UNIT_REF = 'unitRef'
ATTR_TUPLE_REF = 'tupleRef'
ATTR_TUPLE_ID = 'tupleID'
ATTR_TARGET = 'target'
ATTR_FORMAT = 'format'
ATTR_SCALE = 'scale'
ATTR_SIGN = 'sign'
ATTR_ORDER = 'order'
ATTR_CONTINUED_AT = 'continuedAt'
ATTR_ESCAPE = 'escape'
ATTR_FOOTNOTE_REFS = 'footnoteRefs'
ATTR_HREF = 'href'

XSI_NIL = f'{{{XSI_NS}}}nil'

# Unqualified attributes that only have meaning on inline elements
ATTRS_TO_EXCLUDE = frozenset({
    ATTR_CONTEXT_REF,
    ATTR_UNIT_REF,
    ATTR_NAME,
    ATTR_FORMAT,
    ATTR_SCALE,
    ATTR_SIGN,
    ATTR_TARGET,
    ATTR_TUPLE_REF,
    ATTR_TUPLE_ID,
    ATTR_ORDER,
    ATTR_CONTINUED_AT,
    ATTR_ESCAPE,
    ATTR_FOOTNOTE_REFS,
})

# ==============================================================================
# DOCUMENT HEADER
# ==============================================================================

DEFAULT_TARGET = ''

HEADER_COMMENTS = (
    'Location           : {location} ',
    'Description        : {description}',
    'Creation Date      : {timestamp} ',
)

HEADER_TIMESTAMP_FORMAT = '%Y-%m-%d %H:%M:%S'

DEFAULT_DESCRIPTION = (
    'XBRL instance document created from an iXBRL source '
    'using the ixbrl_instance generator'
)

# Label handed to the value formatter while generating instances
PHASE_INSTANCE_GENERATION = 'instance generation'

# ==============================================================================
# CONSOLE DISPLAY
# ==============================================================================

MENU_WIDTH = 60
MENU_SEPARATOR = '-' * MENU_WIDTH
MENU_HEADER = '=' * MENU_WIDTH

STATUS_OK = '[OK]'
STATUS_FAIL = '[FAIL]'
STATUS_WARN = '[WARN]'
STATUS_INFO = '[INFO]'


__all__ = [
    'XBRLI_NS',
    'XBRLDI_NS',
    'LINK_NS',
    'XLINK_NS',
    'XML_NS',
    'XSI_NS',
    'XHTML_NS',
    'IX_NS_2011',
    'IX_NS_2013',
    'IX_NAMESPACES',
    'EXCLUDED_NAMESPACES',
    'FORCED_NAMESPACES',
    'DEFAULT_XBRLI_PREFIX',
    'IX_NON_FRACTION',
    'IX_NON_NUMERIC',
    'IX_FRACTION',
    'IX_NUMERATOR',
    'IX_DENOMINATOR',
    'IX_TUPLE',
    'IX_RESOURCES',
    'IX_REFERENCES',
    'IX_CONTINUATION',
    'IX_EXCLUDE',
    'IX_FACT_ELEMENTS',
    'IX_SIMPLE_FACT_ELEMENTS',
    'IX_NUMERIC_ELEMENTS',
    'XBRL_ROOT',
    'XBRL_CONTEXT',
    'XBRL_UNIT',
    'ATTR_ID',
    'ATTR_NAME',
    'ATTR_CONTEXT_REF',
    'ATTR_UNIT_REF',
    'ATTR_TUPLE_REF',
    'ATTR_TUPLE_ID',
    'ATTR_TARGET',
    'ATTR_FORMAT',
    'ATTR_SCALE',
    'ATTR_SIGN',
    'ATTR_ORDER',
    'ATTR_CONTINUED_AT',
    'ATTR_ESCAPE',
    'ATTR_FOOTNOTE_REFS',
    'ATTR_HREF',
    'XSI_NIL',
    'ATTRS_TO_EXCLUDE',
    'DEFAULT_TARGET',
    'HEADER_COMMENTS',
    'HEADER_TIMESTAMP_FORMAT',
    'DEFAULT_DESCRIPTION',
    'PHASE_INSTANCE_GENERATION',
    'MENU_WIDTH',
    'MENU_SEPARATOR',
    'MENU_HEADER',
    'STATUS_OK',
    'STATUS_FAIL',
    'STATUS_WARN',
    'STATUS_INFO',
]
