# Path: ixbrl_instance/core/logger/ipo_logging.py
"""
IPO-Aware Logging for ixbrl_instance

Input-Process-Output separated logging for instance generation.

This module sets up logging with separate files for:
- INPUT layer (document loading, indexing)
- PROCESS layer (namespace curation, resource filtering, fact emission)
- OUTPUT layer (instance serialization and writing)
- Full activity (everything combined)
"""

import logging
import sys
from pathlib import Path
from typing import Optional


class IPOFilter(logging.Filter):
    """Filter logs by IPO layer prefix."""

    def __init__(self, layer: str):
        """
        Initialize filter for specific IPO layer.

        Args:
            layer: 'input', 'process', or 'output'
        """
        super().__init__()
        self.layer = layer

    def filter(self, record: logging.LogRecord) -> bool:
        """Filter records by logger name prefix."""
        return record.name.startswith(self.layer)


def setup_ipo_logging(
    log_dir: Optional[Path] = None,
    log_level: str = 'INFO',
    console_output: bool = True
) -> None:
    """
    Set up IPO-aware logging for ixbrl_instance.

    When a log directory is given, creates:
    - input_activity.log (INPUT layer)
    - process_activity.log (PROCESS layer)
    - output_activity.log (OUTPUT layer)
    - full_activity.log (all activities combined)

    Args:
        log_dir: Directory for log files (console only when None)
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        console_output: Whether to also output to console

    Example:
        setup_ipo_logging(
            log_dir=Path('/var/log/ixbrl_instance'),
            log_level='INFO',
            console_output=True
        )
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, log_level.upper()))
    root_logger.handlers.clear()

    formatter = logging.Formatter(
        '[%(asctime)s] [%(levelname)s] %(name)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    if log_dir is not None:
        log_dir.mkdir(parents=True, exist_ok=True)

        full_handler = logging.FileHandler(log_dir / 'full_activity.log')
        full_handler.setLevel(logging.DEBUG)
        full_handler.setFormatter(formatter)
        root_logger.addHandler(full_handler)

        for layer in ('input', 'process', 'output'):
            handler = logging.FileHandler(log_dir / f'{layer}_activity.log')
            handler.setLevel(logging.DEBUG)
            handler.setFormatter(formatter)
            handler.addFilter(IPOFilter(layer))
            root_logger.addHandler(handler)

    if console_output:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(getattr(logging, log_level.upper()))
        console_formatter = logging.Formatter(
            '[%(levelname)s] %(name)s - %(message)s'
        )
        console_handler.setFormatter(console_formatter)
        root_logger.addHandler(console_handler)


def get_input_logger(name: str) -> logging.Logger:
    """
    Get logger for INPUT layer.

    Args:
        name: Logger name (e.g., 'document_set')

    Returns:
        Logger configured for INPUT layer
    """
    return logging.getLogger(f'input.{name}')


def get_process_logger(name: str) -> logging.Logger:
    """
    Get logger for PROCESS layer (instance generation).

    Args:
        name: Logger name (e.g., 'fact_emitter', 'tuple_assembler')

    Returns:
        Logger configured for PROCESS layer

    Example:
        logger = get_process_logger('resource_filter')
        logger.info("Copying 12 of 40 contexts")
    """
    return logging.getLogger(f'process.{name}')


def get_output_logger(name: str) -> logging.Logger:
    """
    Get logger for OUTPUT layer.

    Args:
        name: Logger name (e.g., 'instance_writer')

    Returns:
        Logger configured for OUTPUT layer
    """
    return logging.getLogger(f'output.{name}')


__all__ = [
    'setup_ipo_logging',
    'get_input_logger',
    'get_process_logger',
    'get_output_logger',
]
