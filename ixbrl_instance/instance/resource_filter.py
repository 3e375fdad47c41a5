# Path: ixbrl_instance/instance/resource_filter.py
"""
Resource Filtering

Copies into a target's instance exactly the contexts and units its
facts refer to.

Step 1 collects the contextRef/unitRef ids used by the target's facts.
Step 2 deep-copies, from the default target's ix:resources, each context
and unit whose id was collected. Every other resource is dropped.
"""

from dataclasses import dataclass, field
from typing import Optional
import logging
from lxml import etree

from ..core.logger import get_process_logger
from ..models.error import ErrorCategory
from ..foundation.node_utils import local_name
from ..constants import (
    IX_FACT_ELEMENTS,
    IX_RESOURCES,
    XBRL_CONTEXT,
    XBRL_UNIT,
    ATTR_ID,
    ATTR_CONTEXT_REF,
    ATTR_UNIT_REF,
)
from .target_run import TargetRun


@dataclass
class ResourceUsage:
    """Context and unit ids referenced by a target's facts."""
    contexts: set[str] = field(default_factory=set)
    units: set[str] = field(default_factory=set)


class ResourceFilter:
    """
    Emits the contexts and units used by one target.

    Example:
        resource_filter = ResourceFilter(run)
        usage = resource_filter.collect_usage()
        contexts, units = resource_filter.copy_resources(usage)
    """

    def __init__(self, run: TargetRun, logger: Optional[logging.Logger] = None):
        self.run = run
        self.logger = logger or get_process_logger('resource_filter')

    def collect_usage(self) -> ResourceUsage:
        """Ids referenced by the target's fraction, nonFraction and nonNumeric facts."""
        usage = ResourceUsage()
        for kind in IX_FACT_ELEMENTS:
            for fact in self.run.nodes(kind):
                context_ref = (fact.get(ATTR_CONTEXT_REF) or '').strip()
                if context_ref:
                    usage.contexts.add(context_ref)
                unit_ref = (fact.get(ATTR_UNIT_REF) or '').strip()
                if unit_ref:
                    usage.units.add(unit_ref)
        return usage

    def is_used(self, node: etree._Element, usage: ResourceUsage) -> bool:
        """Whether a resource child is a context or unit the target uses."""
        name = local_name(node)
        if name == XBRL_CONTEXT:
            return node.get(ATTR_ID) in usage.contexts
        if name == XBRL_UNIT:
            return node.get(ATTR_ID) in usage.units
        return False

    def copy_resources(self, usage: ResourceUsage) -> tuple[int, int]:
        """
        Deep-copy used contexts and units under the output root.

        Returns:
            (contexts copied, units copied)
        """
        builder = self.run.builder
        root = builder.get_root()
        copied_contexts: set[str] = set()
        copied_units: set[str] = set()

        for container in self.run.default_nodes(IX_RESOURCES):
            for element in builder.copy_children(
                container, root, lambda node: self.is_used(node, usage)
            ):
                if local_name(element) == XBRL_CONTEXT:
                    copied_contexts.add(element.get(ATTR_ID))
                else:
                    copied_units.add(element.get(ATTR_ID))

        self._report_missing(usage.contexts - copied_contexts, ErrorCategory.MISSING_CONTEXT, 'context')
        self._report_missing(usage.units - copied_units, ErrorCategory.MISSING_UNIT, 'unit')

        self.logger.debug(
            f"Target '{self.run.target}': {len(copied_contexts)} context(s), "
            f"{len(copied_units)} unit(s) copied"
        )
        return len(copied_contexts), len(copied_units)

    def apply(self) -> tuple[int, int]:
        """Collect usage and copy the used resources."""
        return self.copy_resources(self.collect_usage())

    def _report_missing(self, ids: set[str], category: ErrorCategory, kind: str) -> None:
        for resource_id in sorted(ids):
            self.run.warn(category, f"No {kind} declared with id '{resource_id}'", None, self.logger)


__all__ = ['ResourceFilter', 'ResourceUsage']
