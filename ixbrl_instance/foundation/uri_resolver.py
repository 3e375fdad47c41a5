# Path: ixbrl_instance/foundation/uri_resolver.py
"""
URI Resolution

Resolves schema/linkbase locators against the base location in scope
for a reference element.

Only bases that name a directory (end in '/') rewrite locators; any
other base leaves the locator untouched.
"""

from typing import Optional
from urllib.parse import urljoin
from lxml import etree


def base_uri_in_scope(element: etree._Element) -> str:
    """
    Base location in scope for an element.

    Uses the element's own base (document URL combined with any xml:base
    on the element or its ancestors).

    Args:
        element: Source reference element

    Returns:
        The base when it ends in '/', otherwise ''
    """
    base = element.base or ''
    return base if base.endswith('/') else ''


def resolve_href(href: str, base_uri: Optional[str]) -> str:
    """
    Resolve a (possibly relative) locator against a base.

    Args:
        href: Locator value as written in the source
        base_uri: Base in scope ('' or None leaves href unchanged)

    Returns:
        Combined locator

    Example:
        resolve_href('abc-2024.xsd', 'http://example.com/taxonomy/')
        # 'http://example.com/taxonomy/abc-2024.xsd'
    """
    if not base_uri:
        return href
    return urljoin(base_uri, href.strip())


__all__ = ['base_uri_in_scope', 'resolve_href']
