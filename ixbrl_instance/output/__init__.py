# Path: ixbrl_instance/output/__init__.py
"""Output: serialization of generated instance documents."""

from .instance_writer import InstanceWriter

__all__ = ['InstanceWriter']
