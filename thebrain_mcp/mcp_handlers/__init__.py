"""
MCP Tool Handlers

Handler registry pattern for tool dispatch. Each tool is an @mcp_tool handler
in one of the modules below; importing them fills the registry.
"""

from typing import Any, Dict, List, Optional

from mcp.shared.exceptions import McpError
from mcp.types import TextContent

from thebrain_mcp.logging_utils import get_logger

# Import all handlers (registration happens at import time)
from .brains import handle_get_brain, handle_list_brains, handle_set_active_brain
from .thoughts import (
    handle_create_thought,
    handle_delete_thought,
    handle_get_tags,
    handle_get_thought,
    handle_get_thought_graph,
    handle_get_types,
    handle_search_thoughts,
    handle_update_thought,
)
from .links import handle_create_link, handle_delete_link, handle_get_link, handle_update_link
from .attachments import (
    handle_add_file_attachment,
    handle_add_url_attachment,
    handle_delete_attachment,
    handle_get_attachment,
    handle_get_attachment_content,
    handle_list_attachments,
)
from .notes import handle_append_to_note, handle_create_or_update_note, handle_get_note
from .stats import handle_get_brain_stats, handle_get_modifications

from .context import BRAIN_ID_KEY, SessionContext
from .decorators import get_tool_definition, get_tool_registry, list_registered_tools
from .error_helpers import brain_required_error, system_error, tool_not_found_error
from .utils import ToolResult, format_tool_result
from .validators import validate_and_coerce_params

logger = get_logger(__name__)

TOOL_HANDLERS = get_tool_registry()

SET_ACTIVE_BRAIN_TOOL = "set_active_brain"


class ToolDispatcher:
    """
    Single entry point for tool invocation.

    Owns the SessionContext (active brain). Per call it:
    1. injects the active brain when `brainId` is missing
    2. routes by exact tool name (unknown names raise McpError)
    3. coerces and validates arguments against the tool's inputSchema
    4. runs the handler and records a successful set_active_brain
    5. wraps the result as a single MCP text block
    """

    def __init__(self, client: Any, context: Optional[SessionContext] = None):
        self.client = client
        self.context = context if context is not None else SessionContext()

    async def run_tool(self, name: str, arguments: Optional[Dict[str, Any]] = None) -> Any:
        """Run one tool call and return the handler result (normally a ToolResult)."""
        # Some MCP clients send `arguments: null` for no-argument tools.
        arguments = dict(arguments or {})

        handler = TOOL_HANDLERS.get(name)
        if handler is None:
            raise tool_not_found_error(name, list_registered_tools())

        self.context.inject_brain_id(arguments)

        definition = get_tool_definition(name)
        if definition is not None and definition.requires_brain and not arguments.get(BRAIN_ID_KEY):
            return brain_required_error()

        # === LITE MODEL SUPPORT: coerce "1"/"true" style arguments ===
        arguments, validation_failure = validate_and_coerce_params(name, arguments)
        if validation_failure is not None:
            return validation_failure

        try:
            result = await handler(arguments, self.client)
        except McpError:
            raise
        except Exception as e:
            logger.error(f"Unhandled error in tool '{name}': {e}", exc_info=True)
            return system_error(name, e, error_code="INTERNAL_ERROR")

        if name == SET_ACTIVE_BRAIN_TOOL and isinstance(result, ToolResult) and result.ok:
            previous = self.context.active_brain_id
            self.context.set_active_brain(arguments[BRAIN_ID_KEY])
            logger.info(f"Active brain changed: {previous} -> {self.context.active_brain_id}")

        return result

    async def call_tool(self, name: str, arguments: Optional[Dict[str, Any]] = None) -> List[TextContent]:
        """Run one tool call and wrap the envelope as MCP content."""
        return format_tool_result(await self.run_tool(name, arguments))


async def dispatch_tool(
    name: str,
    arguments: Optional[Dict[str, Any]],
    dispatcher: ToolDispatcher,
) -> List[TextContent]:
    """Dispatch a tool call through `dispatcher`."""
    return await dispatcher.call_tool(name, arguments)


__all__ = [
    "TOOL_HANDLERS",
    "ToolDispatcher",
    "SessionContext",
    "dispatch_tool",
    "handle_list_brains",
    "handle_get_brain",
    "handle_set_active_brain",
    "handle_create_thought",
    "handle_get_thought",
    "handle_update_thought",
    "handle_delete_thought",
    "handle_search_thoughts",
    "handle_get_thought_graph",
    "handle_get_types",
    "handle_get_tags",
    "handle_create_link",
    "handle_get_link",
    "handle_update_link",
    "handle_delete_link",
    "handle_add_file_attachment",
    "handle_add_url_attachment",
    "handle_get_attachment",
    "handle_get_attachment_content",
    "handle_delete_attachment",
    "handle_list_attachments",
    "handle_get_note",
    "handle_create_or_update_note",
    "handle_append_to_note",
    "handle_get_brain_stats",
    "handle_get_modifications",
]
