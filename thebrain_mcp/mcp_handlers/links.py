"""
Link handlers.

Like thoughts, links are created in two calls: the create endpoint accepts
only the endpoints, relation and name, and colour/thickness/direction/type are
patched afterwards. A failed patch leaves the link in place and the tool
reports failure.
"""

from typing import Any, Dict

from thebrain_mcp.codes import get_relation_name
from thebrain_mcp.errors import ValidationError
from thebrain_mcp.logging_utils import get_logger
from thebrain_mcp.models import CreatedRecord

from .decorators import mcp_tool
from .formatters import decode_direction, format_link_details
from .utils import ToolResult, success_response

logger = get_logger(__name__)

LINK_VISUAL_FIELDS = ("color", "thickness", "direction", "typeId")
UPDATABLE_LINK_FIELDS = ("name", "color", "thickness", "direction", "relation")


@mcp_tool("create_link")
async def handle_create_link(arguments: Dict[str, Any], client) -> ToolResult:
    """Create a link between two thoughts"""
    brain_id = arguments["brainId"]
    relation = arguments["relation"]
    link_data: Dict[str, Any] = {
        "thoughtIdA": arguments["thoughtIdA"],
        "thoughtIdB": arguments["thoughtIdB"],
        "relation": relation,
    }
    if arguments.get("name"):
        link_data["name"] = arguments["name"]

    created = CreatedRecord.model_validate(await client.create_link(brain_id, link_data))

    visual = {field: arguments[field] for field in LINK_VISUAL_FIELDS if arguments.get(field) is not None}
    if visual:
        try:
            await client.update_link(brain_id, created.id, visual)
        except Exception:
            logger.warning(
                f"Link {created.id} was created in brain {brain_id} "
                f"but applying {sorted(visual)} failed"
            )
            raise

    direction = arguments.get("direction")
    return success_response(link={
        "id": created.id,
        "brainId": brain_id,
        "thoughtIdA": link_data["thoughtIdA"],
        "thoughtIdB": link_data["thoughtIdB"],
        "relation": relation,
        "relationName": get_relation_name(relation),
        "name": arguments.get("name"),
        "color": arguments.get("color"),
        "thickness": arguments.get("thickness"),
        "direction": direction,
        "directionInfo": decode_direction(direction),
        "typeId": arguments.get("typeId"),
    })


@mcp_tool("get_link")
async def handle_get_link(arguments: Dict[str, Any], client) -> ToolResult:
    """Get details about a specific link"""
    link = await client.get_link(arguments["brainId"], arguments["linkId"])
    return success_response(link=format_link_details(link))


@mcp_tool("update_link")
async def handle_update_link(arguments: Dict[str, Any], client) -> ToolResult:
    """Update link properties; only the fields provided are changed"""
    link_id = arguments["linkId"]
    updates = {key: arguments[key] for key in UPDATABLE_LINK_FIELDS if arguments.get(key) is not None}
    if not updates:
        raise ValidationError(
            f"No fields to update. Provide at least one of: {', '.join(UPDATABLE_LINK_FIELDS)}"
        )

    await client.update_link(arguments["brainId"], link_id, updates)

    echoed = dict(updates)
    if "relation" in updates:
        echoed["relationName"] = get_relation_name(updates["relation"])
    if "direction" in updates:
        echoed["directionInfo"] = decode_direction(updates["direction"])
    return success_response(message=f"Link {link_id} updated successfully", updates=echoed)


@mcp_tool("delete_link")
async def handle_delete_link(arguments: Dict[str, Any], client) -> ToolResult:
    """Delete a link"""
    link_id = arguments["linkId"]
    await client.delete_link(arguments["brainId"], link_id)
    return success_response(message=f"Link {link_id} deleted successfully")
