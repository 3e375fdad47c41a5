# Path: ixbrl_instance/output/instance_writer.py
"""
Instance Writer

Serializes generated instance documents to files named
<name><target><extension> in an output directory.
"""

from pathlib import Path
from typing import Optional

from ..core.config_loader import ConfigLoader
from ..core.logger import get_output_logger
from ..models.instance_document import InstanceDocument


class InstanceWriter:
    """
    Writes instance documents to disk.

    Example:
        writer = InstanceWriter(config)
        paths = writer.write_all(documents, Path('/tmp/out'))
    """

    def __init__(self, config: Optional[ConfigLoader] = None):
        """
        Initialize writer.

        Args:
            config: Configuration loader (extension, pretty printing)
        """
        self.config = config or ConfigLoader()
        self.logger = get_output_logger('instance_writer')
        self.extension = self.config.get('output_extension', '.xbrl')
        self.pretty_print = self.config.get('pretty_print', True)

    def write(self, document: InstanceDocument, output_dir: Path) -> Optional[Path]:
        """
        Write one document.

        Returns:
            Path written, or None when the target produced no tree
        """
        if not document.succeeded:
            self.logger.warning(f"Target '{document.target}' has no instance to write")
            return None

        output_dir.mkdir(parents=True, exist_ok=True)
        path = output_dir / document.file_name(self.extension)
        path.write_bytes(document.to_bytes(self.pretty_print))

        self.logger.info(
            f"Wrote {path.name}: {document.fact_count} facts "
            f"({document.reliability.value}, {len(document.errors)} issue(s))"
        )
        return path

    def write_all(self, documents: list[InstanceDocument], output_dir: Path) -> list[Path]:
        """Write every document that has a tree; returns the paths written."""
        paths = []
        for document in documents:
            path = self.write(document, output_dir)
            if path is not None:
                paths.append(path)
        return paths


__all__ = ['InstanceWriter']
