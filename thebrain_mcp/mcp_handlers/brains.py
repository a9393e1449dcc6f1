"""
Brain management handlers: list, fetch, and select the active brain.
"""

from typing import Any, Dict

from thebrain_mcp.errors import BrainAPIError
from thebrain_mcp.logging_utils import get_logger
from thebrain_mcp.models import BrainRecord

from .decorators import mcp_tool
from .error_helpers import api_error
from .utils import ToolResult, success_response

logger = get_logger(__name__)


def _brain_summary(raw: Any) -> Dict[str, Any]:
    brain = BrainRecord.model_validate(raw or {})
    return {"id": brain.id, "name": brain.name, "homeThoughtId": brain.homeThoughtId}


@mcp_tool("list_brains", requires_brain=False)
async def handle_list_brains(arguments: Dict[str, Any], client) -> ToolResult:
    """List all brains available to the API key"""
    brains = await client.list_brains()
    return success_response(brains=[_brain_summary(brain) for brain in (brains or [])])


@mcp_tool("get_brain")
async def handle_get_brain(arguments: Dict[str, Any], client) -> ToolResult:
    """Get details about a specific brain"""
    brain = await client.get_brain(arguments["brainId"])
    return success_response(brain=_brain_summary(brain))


@mcp_tool("set_active_brain")
async def handle_set_active_brain(arguments: Dict[str, Any], client) -> ToolResult:
    """
    Set the active brain for subsequent operations.

    The brain is fetched first so an unknown id never becomes active. The
    dispatcher records the new active brain only when this returns success.
    """
    brain_id = arguments["brainId"]
    try:
        brain = await client.get_brain(brain_id)
    except BrainAPIError as e:
        return api_error(f"Failed to set active brain: {e}", e.status_code)
    return success_response(
        message=f"Active brain set to {brain_id}",
        brain=_brain_summary(brain),
    )
