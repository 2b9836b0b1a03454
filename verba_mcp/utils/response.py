"""Standardized response envelopes for MCP tools."""

import json
from dataclasses import dataclass
from typing import Any, Optional

from mcp.types import CallToolResult, TextContent

from ..client.verba_client import BackendResult


def format_payload(data: Any) -> str:
    """Pretty-print a backend payload (two-space indent, unicode kept)."""
    return json.dumps(data, indent=2, ensure_ascii=False)


def format_backend_error(data: Any) -> str:
    """Compact single-line rendering of a backend error body."""
    return "Error: " + json.dumps(data, separators=(",", ":"), ensure_ascii=False)


def success_response(data: Any) -> CallToolResult:
    """
    Create a successful response envelope.

    Args:
        data: Parsed backend payload

    Returns:
        CallToolResult with one text block and isError=False
    """
    return CallToolResult(
        content=[TextContent(type="text", text=format_payload(data))],
        isError=False
    )


def error_response(message: str) -> CallToolResult:
    """
    Create an error response envelope.

    Args:
        message: Fully formatted error text

    Returns:
        CallToolResult with one text block and isError=True
    """
    return CallToolResult(
        content=[TextContent(type="text", text=message)],
        isError=True
    )


@dataclass(frozen=True)
class OperationOutcome:
    """Either a success payload or an error message for one invocation."""
    success: bool
    data: Any = None
    message: Optional[str] = None

    @classmethod
    def from_backend(cls, result: BackendResult) -> "OperationOutcome":
        if result.ok:
            return cls(success=True, data=result.data)
        return cls(success=False, data=result.data, message=format_backend_error(result.data))

    @classmethod
    def failure(cls, error: BaseException) -> "OperationOutcome":
        return cls(success=False, message=f"Error: {str(error) or type(error).__name__}")

    def to_envelope(self) -> CallToolResult:
        """Convert to the envelope sent back over the channel."""
        if self.success:
            return success_response(self.data)
        return error_response(self.message)
