# Path: ixbrl_instance/instance/fact_emitter.py
"""
Fact Emission

Materializes nonFraction, nonNumeric and fraction facts as instance
elements.

This module handles:
- fact element naming from the fact's QName
- contextRef/unitRef copying
- value formatting through the run's formatter
- fraction numerator/denominator resolution
- omission of facts that cannot be formatted

Facts that belong to a tuple (tupleRef or an enclosing ix:tuple) are left
to the tuple assembler, which emits them through emit().
"""

from typing import Optional
import logging
from lxml import etree

from ..core.logger import get_process_logger
from ..models.error import FormatError, IncompleteFractionError
from ..foundation.node_utils import find_fraction_parent, find_tuple_parent, local_name
from ..constants import (
    IX_FACT_ELEMENTS,
    IX_SIMPLE_FACT_ELEMENTS,
    IX_FRACTION,
    IX_NUMERATOR,
    IX_DENOMINATOR,
    XBRLI_NS,
    ATTR_ID,
    ATTR_NAME,
    ATTR_CONTEXT_REF,
    ATTR_UNIT_REF,
    ATTR_TUPLE_REF,
    XSI_NIL,
)
from .target_run import TargetRun


def is_tuple_member(fact: etree._Element) -> bool:
    """Whether a fact is placed by the tuple assembler."""
    return bool((fact.get(ATTR_TUPLE_REF) or '').strip()) or find_tuple_parent(fact) is not None


def find_fraction_member(
    fraction: etree._Element,
    candidates: list[etree._Element]
) -> Optional[etree._Element]:
    """
    First candidate whose nearest enclosing ix:fraction is this fraction.

    Membership is decided by node identity, so a member of a nested or
    sibling fraction never matches.
    """
    for candidate in candidates:
        if find_fraction_parent(candidate) is fraction:
            return candidate
    return None


class FactEmitter:
    """
    Emits facts for one target.

    Example:
        emitter = FactEmitter(run)
        emitted = emitter.emit_root_facts()
    """

    def __init__(self, run: TargetRun, logger: Optional[logging.Logger] = None):
        self.run = run
        self.logger = logger or get_process_logger('fact_emitter')
        self.emitted = 0

    def emit_root_facts(self) -> int:
        """
        Emit every fact of the target not belonging to a tuple.

        Kinds are processed fraction, nonFraction, nonNumeric; each kind in
        source order.

        Returns:
            Number of facts emitted
        """
        root = self.run.builder.get_root()
        count = 0
        for kind in IX_FACT_ELEMENTS:
            for fact in self.run.nodes(kind):
                if is_tuple_member(fact):
                    continue
                if self.emit(fact, root) is not None:
                    count += 1
        return count

    def emit(self, fact: etree._Element, parent: etree._Element) -> Optional[etree._Element]:
        """
        Emit one fact under parent.

        Formatting failures and incomplete fractions are recorded on the
        run; the fact is then left out entirely.

        Returns:
            The created element, or None when the fact was omitted
        """
        builder = self.run.builder
        element = None
        try:
            element = builder.add_qname_element(fact.get(ATTR_NAME), fact, parent)

            for attribute in (ATTR_CONTEXT_REF, ATTR_UNIT_REF):
                value = (fact.get(attribute) or '').strip()
                if value:
                    builder.add_attribute(attribute, value, element)

            name = local_name(fact)
            if name in IX_SIMPLE_FACT_ELEMENTS:
                builder.add_content(self.run.format_value(fact), element)
            elif name == IX_FRACTION:
                self._add_fraction_members(fact, element)

            builder.copy_attributes(fact, element)

        except (FormatError, IncompleteFractionError) as e:
            if element is not None:
                builder.remove(element)
            self.run.record(e, self.logger)
            return None

        self.emitted += 1
        return element

    def _add_fraction_members(self, fraction: etree._Element, element: etree._Element) -> None:
        """
        Add numerator and denominator children to a fraction element.

        Raises:
            IncompleteFractionError: Either member cannot be found
        """
        if fraction.get(XSI_NIL) in ('true', '1'):
            return

        members = []
        for member_name in (IX_NUMERATOR, IX_DENOMINATOR):
            member = find_fraction_member(fraction, self.run.default_nodes(member_name))
            if member is None:
                raise IncompleteFractionError(
                    f"Fraction has no {member_name}",
                    IX_FRACTION, fraction.get(ATTR_ID)
                )
            members.append((member_name, member))

        builder = self.run.builder
        for member_name, member in members:
            child = builder.add_element(member_name, element, XBRLI_NS)
            builder.add_content(self.run.format_value(member), child)
            builder.copy_attributes(member, child)


__all__ = ['FactEmitter', 'find_fraction_member', 'is_tuple_member']
