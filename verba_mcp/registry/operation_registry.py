"""
Operation Registry - Typed catalog of Verba operations.

Provides:
- Declarative parameter lists for each operation
- JSON schemas for host-side tool discovery
- Strict argument validation (pydantic) before any backend call
- Lookup by name for the dispatcher

The registry is filled once at startup and only read afterwards, so it is
safe to share between concurrent invocations.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, List, Optional, Tuple, Type, Union

from mcp import Tool
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictFloat,
    StrictInt,
    StrictStr,
    ValidationError,
    create_model,
)

from ..client.verba_client import BackendResult, VerbaClient

logger = logging.getLogger(__name__)

# Type aliases
JSONSchema = Dict[str, Any]
Handler = Callable[[VerbaClient, BaseModel], Awaitable[BackendResult]]


# ============================================================================
# Enums
# ============================================================================

class ParamType(Enum):
    """Parameter types an operation may declare."""
    STRING = "string"
    BOOLEAN = "boolean"
    NUMBER = "number"
    STRING_ARRAY = "string_array"


_PYTHON_TYPES = {
    ParamType.STRING: StrictStr,
    ParamType.BOOLEAN: StrictBool,
    ParamType.NUMBER: Union[StrictInt, StrictFloat],
    ParamType.STRING_ARRAY: List[StrictStr],
}

_JSON_TYPES = {
    ParamType.STRING: {"type": "string"},
    ParamType.BOOLEAN: {"type": "boolean"},
    ParamType.NUMBER: {"type": "number"},
    ParamType.STRING_ARRAY: {"type": "array", "items": {"type": "string"}},
}


# ============================================================================
# Data Classes
# ============================================================================

@dataclass(frozen=True)
class ParamSpec:
    """Declaration of a single operation parameter."""
    name: str
    type: ParamType
    description: str
    required: bool = True
    default: Any = None

    def json_schema(self) -> JSONSchema:
        """JSON schema fragment for this parameter."""
        schema = dict(_JSON_TYPES[self.type])
        schema["description"] = self.description
        if not self.required and self.default is not None:
            schema["default"] = self.default
        return schema

    def model_field(self) -> Tuple[Any, Any]:
        """(annotation, FieldInfo) pair for pydantic.create_model."""
        annotation = _PYTHON_TYPES[self.type]
        if self.required:
            return annotation, Field(..., description=self.description)
        return Optional[annotation], Field(self.default, description=self.description)


@dataclass(frozen=True)
class OperationDescriptor:
    """
    Describes one Verba operation for the registry.

    The parameter order is preserved in the generated schema and model.
    """
    name: str                              # Operation identifier (e.g., "add_key")
    description: str                       # One-line description shown to the host
    handler: Handler                       # Async handler performing the backend call
    params: Tuple[ParamSpec, ...] = ()     # Ordered parameter declarations
    arguments_model: Type[BaseModel] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        """Build the arguments model once per descriptor."""
        fields = {param.name: param.model_field() for param in self.params}
        model = create_model(
            _model_name(self.name),
            __config__=ConfigDict(extra="forbid"),
            **fields
        )
        object.__setattr__(self, "arguments_model", model)

    @property
    def input_schema(self) -> JSONSchema:
        """JSON schema for the operation's arguments."""
        return {
            "type": "object",
            "properties": {param.name: param.json_schema() for param in self.params},
            "required": [param.name for param in self.params if param.required],
        }

    def to_tool(self) -> Tool:
        """MCP tool definition advertised to the host."""
        return Tool(
            name=self.name,
            description=self.description,
            inputSchema=self.input_schema
        )


def _model_name(operation_name: str) -> str:
    return "".join(part.capitalize() for part in operation_name.split("_")) + "Arguments"


# ============================================================================
# Exceptions
# ============================================================================

class OperationRegistryError(Exception):
    """Base exception for registry errors."""
    pass


class OperationNotFound(OperationRegistryError):
    """Operation not found in registry."""
    pass


class OperationAlreadyRegistered(OperationRegistryError):
    """Operation already registered."""
    pass


class InvalidOperationDescriptor(OperationRegistryError):
    """Invalid operation descriptor."""
    pass


class SchemaValidationError(OperationRegistryError):
    """Arguments do not match an operation's parameters."""

    def __init__(self, operation_name: str, errors: List[str]):
        self.operation_name = operation_name
        self.errors = errors
        super().__init__(
            f"Invalid arguments for '{operation_name}': " + "; ".join(errors)
        )


# ============================================================================
# Operation Registry
# ============================================================================

class OperationRegistry:
    """Central registry of Verba operations."""

    def __init__(self):
        """Initialize registry."""
        self._operations: Dict[str, OperationDescriptor] = {}

    def __len__(self) -> int:
        return len(self._operations)

    def __contains__(self, name: str) -> bool:
        return name in self._operations

    # ========================================================================
    # Registration
    # ========================================================================

    def register(self, operation: OperationDescriptor) -> None:
        """
        Register a new operation.

        Args:
            operation: Operation descriptor to register

        Raises:
            OperationAlreadyRegistered: If operation name already exists
            InvalidOperationDescriptor: If descriptor validation fails
        """
        self._validate_descriptor(operation)

        if operation.name in self._operations:
            raise OperationAlreadyRegistered(
                f"Operation '{operation.name}' already registered"
            )

        self._operations[operation.name] = operation
        logger.info(f"Registered operation: {operation.name} ({len(operation.params)} params)")

    def register_all(self, operations: List[OperationDescriptor]) -> None:
        """Register multiple operations at once."""
        for operation in operations:
            self.register(operation)

    # ========================================================================
    # Retrieval
    # ========================================================================

    def get(self, name: str) -> OperationDescriptor:
        """
        Retrieve an operation by name.

        Raises:
            OperationNotFound: If operation doesn't exist
        """
        if name not in self._operations:
            raise OperationNotFound(f"Unknown operation: {name}")

        return self._operations[name]

    def list(self) -> List[OperationDescriptor]:
        """List operations in registration order."""
        return list(self._operations.values())

    def exists(self, name: str) -> bool:
        """Check if operation exists."""
        return name in self._operations

    def get_tools(self) -> List[Tool]:
        """MCP tool definitions for every registered operation."""
        return [operation.to_tool() for operation in self._operations.values()]

    def get_operation_docs(self, operation_name: str) -> Dict[str, Any]:
        """
        Get documentation for an operation.

        Raises:
            OperationNotFound: If operation doesn't exist
        """
        operation = self.get(operation_name)

        return {
            "name": operation.name,
            "description": operation.description,
            "input_schema": operation.input_schema,
        }

    # ========================================================================
    # Validation
    # ========================================================================

    def validate(self, name: str, arguments: Optional[Dict[str, Any]]) -> BaseModel:
        """
        Validate raw arguments against an operation's parameters.

        Args:
            name: Operation name
            arguments: Untyped argument mapping from the host (None means empty)

        Returns:
            Instance of the operation's arguments model

        Raises:
            OperationNotFound: If operation doesn't exist
            SchemaValidationError: If any field is missing, mistyped or unknown
        """
        operation = self.get(name)

        try:
            return operation.arguments_model.model_validate(arguments or {})
        except ValidationError as e:
            raise SchemaValidationError(name, _format_errors(e)) from e

    # ========================================================================
    # Internal Helpers
    # ========================================================================

    def _validate_descriptor(self, operation: OperationDescriptor) -> None:
        """
        Validate operation descriptor.

        Raises:
            InvalidOperationDescriptor: If validation fails
        """
        if not operation.name:
            raise InvalidOperationDescriptor("Operation name is required")

        if not operation.description:
            raise InvalidOperationDescriptor("Operation description is required")

        if not operation.handler:
            raise InvalidOperationDescriptor("Operation handler is required")

        names = [param.name for param in operation.params]
        if len(names) != len(set(names)):
            raise InvalidOperationDescriptor(
                f"Duplicate parameter names in operation '{operation.name}'"
            )


def _format_errors(error: ValidationError) -> List[str]:
    """One 'field: message' line per pydantic error."""
    messages = []
    for item in error.errors():
        location = ".".join(str(part) for part in item["loc"]) or "arguments"
        messages.append(f"{location}: {item['msg']}")
    return messages
