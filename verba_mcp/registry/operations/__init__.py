"""
Operation registrations for the Verba MCP server.
"""

from .translation_operations import (
    TRANSLATION_OPERATIONS,
    register_translation_operations,
)


def register_all_operations(registry=None):
    """Register all operations, returning the registry."""
    return register_translation_operations(registry)


__all__ = [
    'TRANSLATION_OPERATIONS',
    'register_all_operations',
    'register_translation_operations',
]
