"""
Common utilities for MCP tool handlers.

Handlers return a ToolResult: either a success carrying response fields or a
failure carrying an error message. The dispatcher turns it into the uniform
envelope `{"success": true, ...}` / `{"success": false, "error": ...}` and
wraps that into MCP TextContent.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, List, Optional
import json

from mcp.types import TextContent

from thebrain_mcp.logging_utils import get_logger

logger = get_logger(__name__)


@dataclass
class ToolResult:
    """Tagged outcome of a tool handler."""
    success: bool
    data: Dict[str, Any] = field(default_factory=dict)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.success

    def to_envelope(self) -> Dict[str, Any]:
        if self.success:
            return {"success": True, **self.data}
        return {"success": False, "error": self.error or "Unknown error", **self.data}


def success_response(data: Optional[Dict[str, Any]] = None, **fields: Any) -> ToolResult:
    """
    Create a success result.

    Example:
        >>> success_response({"thought": {...}}, message="created")
    """
    payload = dict(data or {})
    payload.update(fields)
    payload.pop("success", None)
    return ToolResult(success=True, data=payload)


def error_response(
    message: str,
    error_code: Optional[str] = None,
    recovery: Optional[Dict[str, Any]] = None,
    details: Optional[Dict[str, Any]] = None,
) -> ToolResult:
    """
    Create a failure result.

    Args:
        message: Human-readable error, becomes the envelope's `error`
        error_code: Machine-readable code (e.g. "BRAIN_ID_REQUIRED")
        recovery: Guidance for the calling agent
        details: Extra fields merged into the envelope
    """
    extra: Dict[str, Any] = {}
    if error_code:
        extra["error_code"] = error_code
    if details:
        extra.update({k: v for k, v in details.items() if k not in ("success", "error")})
    if recovery:
        extra["recovery"] = recovery
    return ToolResult(success=False, error=message, data=extra)


def _make_json_serializable(obj: Any) -> Any:
    """
    Recursively convert values json.dumps cannot handle.

    datetime/date -> ISO string, Enum -> value, bytes -> length marker,
    sets/tuples -> lists, anything else unknown -> str().
    """
    if obj is None or isinstance(obj, (str, int, float, bool)):
        return obj
    if isinstance(obj, (datetime, date)):
        return obj.isoformat()
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, (bytes, bytearray)):
        # Binary payloads are never embedded in responses.
        return f"<{len(obj)} bytes>"
    if isinstance(obj, dict):
        return {str(key): _make_json_serializable(value) for key, value in obj.items()}
    if isinstance(obj, (list, tuple, set)):
        return [_make_json_serializable(item) for item in obj]
    return str(obj)


def render_text(result: Any) -> str:
    """Text for a single MCP content block."""
    if isinstance(result, ToolResult):
        result = result.to_envelope()
    if isinstance(result, str):
        return result
    if result is None:
        return "null"
    try:
        return json.dumps(_make_json_serializable(result), indent=2, ensure_ascii=False)
    except (TypeError, ValueError) as e:
        logger.error(f"JSON serialization error: {e}", exc_info=True)
        return json.dumps({"success": False, "error": "Response serialization failed"}, indent=2)


def is_failure(result: Any) -> bool:
    """True when the result renders as a `success: false` envelope."""
    return isinstance(result, ToolResult) and not result.ok


def format_tool_result(result: Any) -> List[TextContent]:
    """Wrap a handler result as the MCP content envelope (one text block)."""
    return [TextContent(type="text", text=render_text(result))]
