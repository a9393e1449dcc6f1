"""
Error helpers for MCP handlers.

Standardizes failure results with machine-readable codes and recovery
guidance for the calling agent.
"""

import difflib
from typing import Any, Dict, Iterable, Optional

from mcp.shared.exceptions import McpError
from mcp.types import ErrorData, METHOD_NOT_FOUND

from .utils import ToolResult, error_response

BRAIN_ID_REQUIRED_MESSAGE = "Brain ID is required"

# Standard recovery patterns for common error types
RECOVERY_PATTERNS: Dict[str, Dict[str, Any]] = {
    "brain_id_required": {
        "action": "Call set_active_brain first or pass brainId explicitly",
        "related_tools": ["list_brains", "set_active_brain"],
        "workflow": [
            "1. Call list_brains to find the brain id",
            "2. Call set_active_brain(brainId) once",
            "3. Retry this tool (brainId is filled in automatically)",
        ],
    },
    "validation_error": {
        "action": "Check parameter format and constraints against the tool's inputSchema",
        "related_tools": ["get_types", "search_thoughts"],
    },
    "api_error": {
        "action": "Verify the ids exist in this brain and the API key has access",
        "related_tools": ["get_brain", "search_thoughts"],
    },
    "not_found": {
        "action": "Verify the resource id; use search or list tools to find it",
        "related_tools": ["search_thoughts", "get_thought_graph", "list_attachments"],
    },
    "timeout": {
        "action": "Retry; if it keeps failing the remote API may be slow or unreachable",
        "related_tools": ["list_brains"],
    },
    "system_error": {
        "action": "Retry the call; report the error if it persists",
        "related_tools": ["list_brains"],
    },
}


def brain_required_error() -> ToolResult:
    """No brainId in the arguments and no active brain."""
    return error_response(
        BRAIN_ID_REQUIRED_MESSAGE,
        error_code="BRAIN_ID_REQUIRED",
        recovery=RECOVERY_PATTERNS["brain_id_required"],
    )


def validation_error(message: str, param: Optional[str] = None) -> ToolResult:
    details = {"param": param} if param else None
    return error_response(
        message,
        error_code="VALIDATION_ERROR",
        recovery=RECOVERY_PATTERNS["validation_error"],
        details=details,
    )


def api_error(message: str, status_code: Optional[int] = None) -> ToolResult:
    if status_code == 404:
        return error_response(
            message,
            error_code="NOT_FOUND",
            recovery=RECOVERY_PATTERNS["not_found"],
            details={"status_code": status_code},
        )
    return error_response(
        message,
        error_code="API_ERROR",
        recovery=RECOVERY_PATTERNS["api_error"],
        details={"status_code": status_code} if status_code is not None else None,
    )


def timeout_error(tool_name: str, timeout: float) -> ToolResult:
    return error_response(
        f"Tool '{tool_name}' timed out after {timeout} seconds.",
        error_code="TIMEOUT",
        recovery=RECOVERY_PATTERNS["timeout"],
    )


def system_error(tool_name: str, error: Exception, error_code: str = "HANDLER_ERROR") -> ToolResult:
    return error_response(
        f"Error executing tool '{tool_name}': {error}",
        error_code=error_code,
        recovery=RECOVERY_PATTERNS["system_error"],
    )


def tool_not_found_error(tool_name: str, available_tools: Iterable[str]) -> McpError:
    """Protocol-level error for an unknown tool, with close-match suggestions."""
    suggestions = difflib.get_close_matches(tool_name, list(available_tools), n=3, cutoff=0.6)
    message = f"Unknown tool: {tool_name}"
    if suggestions:
        message += f". Did you mean: {', '.join(suggestions)}?"
    return McpError(ErrorData(code=METHOD_NOT_FOUND, message=message, data={"tool_name": tool_name}))
