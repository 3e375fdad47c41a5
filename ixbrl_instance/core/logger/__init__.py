# Path: ixbrl_instance/core/logger/__init__.py
"""
ixbrl_instance Logger Package

IPO-aware logging for the instance generator.

Provides separate log streams for:
- INPUT layer (document loading, indexing)
- PROCESS layer (instance generation)
- OUTPUT layer (serialization, file writing)
"""

from .ipo_logging import (
    setup_ipo_logging,
    get_input_logger,
    get_process_logger,
    get_output_logger,
)

__all__ = [
    'setup_ipo_logging',
    'get_input_logger',
    'get_process_logger',
    'get_output_logger',
]
