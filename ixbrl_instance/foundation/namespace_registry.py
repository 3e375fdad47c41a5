# Path: ixbrl_instance/foundation/namespace_registry.py
"""
Namespace Registry Service

Prefix-to-namespace mapping for one generated instance document.

Features:
- Namespace registration and tracking
- Prefix-URI bidirectional mapping
- Conflict detection (prefixes stay unique and stable)
- Export as an lxml nsmap for the instance root
"""

from typing import Optional
import logging


class NamespaceRegistry:
    """
    Registry of the namespaces declared on one instance document.

    Once a prefix is assigned to a URI it never changes for the lifetime
    of the registry. A second registration of the same URI under a
    different prefix keeps the first prefix; a registration that would
    rebind an existing prefix to another URI is recorded as a conflict
    and ignored.

    Example:
        registry = NamespaceRegistry()
        registry.register("us-gaap", "http://fasb.org/us-gaap/2023", "filing.htm")

        prefix = registry.get_prefix("http://fasb.org/us-gaap/2023")
    """

    def __init__(self):
        """Initialize empty registry."""
        # Prefix -> URI, in registration order
        self.by_prefix: dict[str, str] = {}

        # URI -> prefix (for quick lookup)
        self.by_uri: dict[str, str] = {}

        # Track conflicts
        self.conflicts: list[dict] = []

        self.logger = logging.getLogger(__name__)

    def register(self, prefix: str, uri: str, declared_in: str = '') -> bool:
        """
        Register namespace declaration.

        Args:
            prefix: Namespace prefix
            uri: Namespace URI
            declared_in: Where the declaration was seen (for conflict logging)

        Returns:
            True if the pair is now in the registry
        """
        if not prefix or not uri:
            return False

        existing_uri = self.by_prefix.get(prefix)
        if existing_uri is not None:
            if existing_uri != uri:
                self._log_conflict(prefix, existing_uri, uri, declared_in)
                return False
            return True

        if uri in self.by_uri:
            # URI already bound to another prefix; first prefix wins
            return False

        self.by_prefix[prefix] = uri
        self.by_uri[uri] = prefix
        return True

    def get_prefix(self, uri: str) -> Optional[str]:
        """Get prefix for URI."""
        return self.by_uri.get(uri)

    def has_uri(self, uri: str) -> bool:
        """Check if URI is registered."""
        return uri in self.by_uri

    def has_prefix(self, prefix: str) -> bool:
        """Check if prefix is registered."""
        return prefix in self.by_prefix

    def as_nsmap(self) -> dict[str, str]:
        """Namespace map suitable for lxml element creation."""
        return dict(self.by_prefix)

    def __len__(self) -> int:
        return len(self.by_prefix)

    def __contains__(self, uri: str) -> bool:
        return uri in self.by_uri

    def _log_conflict(self, prefix: str, old_uri: str, new_uri: str, location: str):
        """Log namespace prefix conflict."""
        conflict = {
            'prefix': prefix,
            'existing_uri': old_uri,
            'new_uri': new_uri,
            'declared_in': location
        }
        self.conflicts.append(conflict)

        self.logger.warning(
            f"Namespace prefix conflict: {prefix} maps to both {old_uri} and {new_uri} (in {location})"
        )


__all__ = ['NamespaceRegistry']
