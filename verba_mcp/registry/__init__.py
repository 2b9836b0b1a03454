"""
Operation Registry for the Verba MCP server.

Provides typed, discoverable catalog of Verba operations.
"""

from .operation_registry import (
    OperationRegistry,
    OperationDescriptor,
    ParamSpec,
    ParamType,
    # Exceptions
    InvalidOperationDescriptor,
    OperationAlreadyRegistered,
    OperationNotFound,
    OperationRegistryError,
    SchemaValidationError,
)

__all__ = [
    'OperationRegistry',
    'OperationDescriptor',
    'ParamSpec',
    'ParamType',
    # Exceptions
    'InvalidOperationDescriptor',
    'OperationAlreadyRegistered',
    'OperationNotFound',
    'OperationRegistryError',
    'SchemaValidationError',
]
