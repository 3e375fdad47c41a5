# Path: ixbrl_instance/ixbrl/transforms.py
"""
Inline XBRL Value Formatter

Converts the presentation content of a tagged fact into its canonical
XBRL value.

This module handles:
- nil facts
- ix:exclude subtrees and ix:continuation chains
- escaped (markup-preserving) nonNumeric content
- ixt transformation rules (numeric, fixed, date)
- scale and sign on numeric facts

Example:
    formatter = ValueFormatter()
    value = formatter.format(fact, 'instance generation', 'nonFraction', document, by_id)
"""

import re
from calendar import monthrange
from copy import deepcopy
from decimal import Decimal, InvalidOperation
from typing import Callable, Optional
from lxml import etree

from ..core.config_loader import ConfigLoader
from ..core.logger import get_process_logger
from ..models.error import FormatError
from ..models.indices import SourceDocument
from ..foundation.node_utils import is_element, is_inline_element
from ..constants import (
    IX_NON_NUMERIC,
    IX_NUMERIC_ELEMENTS,
    IX_EXCLUDE,
    IX_CONTINUATION,
    ATTR_ID,
    ATTR_FORMAT,
    ATTR_SCALE,
    ATTR_SIGN,
    ATTR_CONTINUED_AT,
    ATTR_ESCAPE,
    XSI_NIL,
)


# ==============================================================================
# NUMBER PATTERNS
# ==============================================================================

# Canonical decimal lexical form (no exponent, no grouping)
DECIMAL_PATTERN = re.compile(r'^[+-]?(\d+(\.\d*)?|\.\d+)$')

# Grouping separators allowed inside numbers
GROUP_SPACES = ' \u00a0'

NUM_DOT_DECIMAL_PATTERN = re.compile(
    r'^\d{1,3}([, \u00a0]?\d{3})*(\.\d+)?$|^\d+(\.\d+)?$|^\.\d+$'
)
NUM_COMMA_DECIMAL_PATTERN = re.compile(
    r'^\d{1,3}([. \u00a0]?\d{3})*(,\d+)?$|^\d+(,\d+)?$|^,\d+$'
)
NUM_UNIT_DECIMAL_PATTERN = re.compile(r'^(\d+)[^\d]+(\d{1,2})?[^\d]*$')

# ==============================================================================
# DATE PATTERNS
# ==============================================================================

_SEP = r'[^\d\w]+'

YMD_PATTERN = re.compile(rf'^(\d{{4}}|\d{{2}}){_SEP}(\d{{1,2}}){_SEP}(\d{{1,2}})$')
DMY_PATTERN = re.compile(rf'^(\d{{1,2}}){_SEP}(\d{{1,2}}){_SEP}(\d{{4}}|\d{{2}})$')
MDY_PATTERN = DMY_PATTERN
MONTHNAME_DAY_YEAR_PATTERN = re.compile(
    r'^([A-Za-z]{3,9})\.?\s*(\d{1,2})(?:st|nd|rd|th)?,?\s*(\d{4}|\d{2})$'
)
DAY_MONTHNAME_YEAR_PATTERN = re.compile(
    r'^(\d{1,2})(?:st|nd|rd|th)?\s*([A-Za-z]{3,9})\.?,?\s*(\d{4}|\d{2})$'
)

MONTHS_EN = {
    'jan': 1, 'feb': 2, 'mar': 3, 'apr': 4, 'may': 5, 'jun': 6,
    'jul': 7, 'aug': 8, 'sep': 9, 'oct': 10, 'nov': 11, 'dec': 12,
}


# ==============================================================================
# TRANSFORMATION RULES
# ==============================================================================
# Each rule takes the trimmed presentation text and returns the canonical
# value, raising ValueError when the text does not fit the rule.

def num_dot_decimal(text: str) -> str:
    """'1,234,567.89' -> '1234567.89'"""
    if not NUM_DOT_DECIMAL_PATTERN.match(text):
        raise ValueError(f"'{text}' is not a dot-decimal number")
    for separator in ',' + GROUP_SPACES:
        text = text.replace(separator, '')
    return text


def num_comma_decimal(text: str) -> str:
    """'1.234.567,89' -> '1234567.89'"""
    if not NUM_COMMA_DECIMAL_PATTERN.match(text):
        raise ValueError(f"'{text}' is not a comma-decimal number")
    for separator in '.' + GROUP_SPACES:
        text = text.replace(separator, '')
    return text.replace(',', '.')


def num_unit_decimal(text: str) -> str:
    """'5 dollars 7 cents' -> '5.07'"""
    match = NUM_UNIT_DECIMAL_PATTERN.match(text)
    if not match:
        raise ValueError(f"'{text}' is not a unit-decimal number")
    fraction = match.group(2)
    if fraction is None:
        return match.group(1)
    return f"{match.group(1)}.{fraction.zfill(2)}"


def fixed_zero(text: str) -> str:
    return '0'


def fixed_empty(text: str) -> str:
    return ''


def fixed_true(text: str) -> str:
    return 'true'


def fixed_false(text: str) -> str:
    return 'false'


def _year(value: str) -> int:
    year = int(value)
    return year + 2000 if len(value) == 2 else year


def _month_from_name(name: str) -> int:
    month = MONTHS_EN.get(name[:3].lower())
    if month is None:
        raise ValueError(f"'{name}' is not an English month name")
    return month


def _iso_date(year: int, month: int, day: int) -> str:
    if not 1 <= month <= 12:
        raise ValueError(f"month {month} out of range")
    if not 1 <= day <= monthrange(year, month)[1]:
        raise ValueError(f"day {day} out of range for {year}-{month:02d}")
    return f"{year:04d}-{month:02d}-{day:02d}"


def date_year_month_day(text: str) -> str:
    """'2024/12/31' -> '2024-12-31'"""
    match = YMD_PATTERN.match(text)
    if not match:
        raise ValueError(f"'{text}' is not a year-month-day date")
    year, month, day = match.groups()
    return _iso_date(_year(year), int(month), int(day))


def date_day_month_year(text: str) -> str:
    """'31.12.2024' -> '2024-12-31'"""
    match = DMY_PATTERN.match(text)
    if not match:
        raise ValueError(f"'{text}' is not a day-month-year date")
    day, month, year = match.groups()
    return _iso_date(_year(year), int(month), int(day))


def date_month_day_year(text: str) -> str:
    """'12/31/2024' -> '2024-12-31'"""
    match = MDY_PATTERN.match(text)
    if not match:
        raise ValueError(f"'{text}' is not a month-day-year date")
    month, day, year = match.groups()
    return _iso_date(_year(year), int(month), int(day))


def date_monthname_day_year_en(text: str) -> str:
    """'December 31, 2024' -> '2024-12-31'"""
    match = MONTHNAME_DAY_YEAR_PATTERN.match(text)
    if not match:
        raise ValueError(f"'{text}' is not a monthname-day-year date")
    month, day, year = match.groups()
    return _iso_date(_year(year), _month_from_name(month), int(day))


def date_day_monthname_year_en(text: str) -> str:
    """'31 December 2024' -> '2024-12-31'"""
    match = DAY_MONTHNAME_YEAR_PATTERN.match(text)
    if not match:
        raise ValueError(f"'{text}' is not a day-monthname-year date")
    day, month, year = match.groups()
    return _iso_date(_year(year), _month_from_name(month), int(day))


# Transformation registry, keyed by the format's local name.
# Registry 1 names (numdotdecimal, datelongus, ...) map to their successors.
TRANSFORMS: dict[str, Callable[[str], str]] = {
    'num-dot-decimal': num_dot_decimal,
    'numdotdecimal': num_dot_decimal,
    'numcommadot': num_dot_decimal,
    'num-comma-decimal': num_comma_decimal,
    'numcommadecimal': num_comma_decimal,
    'numdotcomma': num_comma_decimal,
    'num-unit-decimal': num_unit_decimal,
    'fixed-zero': fixed_zero,
    'zerodash': fixed_zero,
    'fixed-empty': fixed_empty,
    'nocontent': fixed_empty,
    'fixed-true': fixed_true,
    'fixed-false': fixed_false,
    'date-year-month-day': date_year_month_day,
    'date-day-month-year': date_day_month_year,
    'datedoteu': date_day_month_year,
    'dateslasheu': date_day_month_year,
    'date-month-day-year': date_month_day_year,
    'datedotus': date_month_day_year,
    'dateslashus': date_month_day_year,
    'date-monthname-day-year-en': date_monthname_day_year_en,
    'datelongus': date_monthname_day_year_en,
    'date-day-monthname-year-en': date_day_monthname_year_en,
    'datelonguk': date_day_monthname_year_en,
}


# ==============================================================================
# VALUE FORMATTER
# ==============================================================================

class ValueFormatter:
    """
    Default value formatter for instance generation.

    Any object with the same format() signature can be used in its place.

    Example:
        formatter = ValueFormatter()
        text = formatter.format(fact, 'instance generation', 'nonNumeric', doc, by_id)
    """

    def __init__(self, config: Optional[ConfigLoader] = None):
        """
        Initialize formatter.

        Args:
            config: Configuration loader
        """
        self.config = config or ConfigLoader()
        self.logger = get_process_logger('value_formatter')
        self.transforms = dict(TRANSFORMS)

    def format(
        self,
        fact: etree._Element,
        phase_label: str,
        name: str,
        document: Optional[SourceDocument],
        by_id: dict[str, etree._Element]
    ) -> str:
        """
        Canonical value of a fact.

        Args:
            fact: Source fact element
            phase_label: Processing phase, used in diagnostics
            name: Local name of the fact element
            document: Source document owning the fact
            by_id: id index, for continuation lookup

        Returns:
            Canonical text ('' for nil facts)

        Raises:
            FormatError: Unknown format, bad scale, or content the format
                (or a numeric kind) cannot accept
        """
        if fact.get(XSI_NIL) in ('true', '1'):
            return ''

        element_id = fact.get(ATTR_ID)
        raw = self.raw_content(fact, name, by_id)

        format_name = fact.get(ATTR_FORMAT)
        if format_name:
            value = self.apply_transform(format_name.strip(), raw.strip(), fact, name)
        else:
            value = raw

        if name in IX_NUMERIC_ELEMENTS:
            value = self._numeric_value(value, fact, name)

        self.logger.debug(
            f"{phase_label}: {name} id={element_id} in "
            f"{document.url if document is not None else '?'} -> '{value}'"
        )
        return value

    def raw_content(
        self,
        fact: etree._Element,
        name: str,
        by_id: dict[str, etree._Element]
    ) -> str:
        """
        Presentation content of a fact, including continuations.

        Raises:
            FormatError: Broken or circular continuation chain
        """
        escape = name == IX_NON_NUMERIC and fact.get(ATTR_ESCAPE, '').strip() in ('true', '1')
        parts = [self._node_content(fact, escape)]

        seen = set()
        continued_at = fact.get(ATTR_CONTINUED_AT)
        while continued_at:
            continued_at = continued_at.strip()
            if continued_at in seen:
                raise FormatError(
                    f"Circular continuation at '{continued_at}'",
                    name, fact.get(ATTR_ID)
                )
            seen.add(continued_at)

            continuation = by_id.get(continued_at)
            if continuation is None or not is_inline_element(continuation, IX_CONTINUATION):
                raise FormatError(
                    f"Continuation '{continued_at}' not found",
                    name, fact.get(ATTR_ID)
                )
            parts.append(self._node_content(continuation, escape))
            continued_at = continuation.get(ATTR_CONTINUED_AT)

        return ''.join(parts)

    def apply_transform(
        self,
        format_name: str,
        text: str,
        fact: etree._Element,
        name: str
    ) -> str:
        """
        Apply the transformation rule named by a format QName.

        Raises:
            FormatError: Undeclared prefix, unknown rule, or text the rule rejects
        """
        prefix, _, rule_name = format_name.rpartition(':')
        if prefix and prefix not in fact.nsmap:
            raise FormatError(
                f"Format '{format_name}' uses an undeclared prefix",
                name, fact.get(ATTR_ID)
            )

        rule = self.transforms.get(rule_name)
        if rule is None:
            raise FormatError(f"Unknown format '{format_name}'", name, fact.get(ATTR_ID))

        try:
            return rule(text)
        except ValueError as e:
            raise FormatError(
                f"Format '{format_name}' cannot transform: {e}",
                name, fact.get(ATTR_ID)
            ) from e

    def _numeric_value(self, value: str, fact: etree._Element, name: str) -> str:
        """Validate a numeric value and apply scale and sign."""
        text = value.strip()
        if not DECIMAL_PATTERN.match(text):
            raise FormatError(f"'{text}' is not a decimal number", name, fact.get(ATTR_ID))

        try:
            number = Decimal(text)
        except InvalidOperation as e:
            raise FormatError(f"'{text}' is not a decimal number", name, fact.get(ATTR_ID)) from e

        scale = fact.get(ATTR_SCALE)
        if scale is not None and scale.strip():
            # Overflow and other DecimalExceptions are ArithmeticErrors
            try:
                number = number.scaleb(int(scale.strip()))
            except (ValueError, ArithmeticError) as e:
                raise FormatError(f"Invalid scale '{scale}'", name, fact.get(ATTR_ID)) from e

        if fact.get(ATTR_SIGN, '').strip() == '-':
            number = -number

        if number.is_zero():
            number = abs(number)

        return format(number, 'f')

    def _node_content(self, node: etree._Element, escape: bool) -> str:
        if escape:
            return self._escaped_content(node)
        parts: list[str] = []
        self._collect_text(node, parts)
        return ''.join(parts)

    def _collect_text(self, node: etree._Element, parts: list[str]) -> None:
        """Text content of node, skipping ix:exclude subtrees."""
        if node.text:
            parts.append(node.text)
        for child in node:
            if is_element(child) and not is_inline_element(child, IX_EXCLUDE):
                self._collect_text(child, parts)
            if child.tail:
                parts.append(child.tail)

    def _escaped_content(self, node: etree._Element) -> str:
        """Child markup of node serialized as text, without ix:exclude subtrees."""
        parts = [node.text or '']
        for child in node:
            if is_element(child) and is_inline_element(child, IX_EXCLUDE):
                parts.append(child.tail or '')
            elif is_element(child):
                # Detached copy so only the namespaces the markup uses are declared
                markup = deepcopy(child)
                etree.cleanup_namespaces(markup)
                parts.append(etree.tostring(markup, encoding='unicode', with_tail=True))
            else:
                parts.append(child.tail or '')
        return ''.join(parts)


__all__ = ['ValueFormatter', 'TRANSFORMS']
