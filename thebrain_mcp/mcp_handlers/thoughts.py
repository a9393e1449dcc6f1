"""
Thought handlers: create, read, update, delete, search, and graph traversal.

Thought creation is two calls. The create endpoint ignores colours, so
foreground/background colours are applied with a follow-up patch. The two
calls are not atomic: if the patch fails the thought still exists and the
tool reports failure (the created id is logged).
"""

from typing import Any, Dict

from thebrain_mcp.codes import AccessType, RelationType, ThoughtKind, get_search_result_type_name
from thebrain_mcp.errors import ValidationError
from thebrain_mcp.logging_utils import get_logger
from thebrain_mcp.models import CreatedRecord, SearchResultRecord, ThoughtGraphRecord

from .decorators import mcp_tool
from .formatters import (
    format_attachment,
    format_link,
    format_many,
    format_thought,
    format_thought_details,
)
from .utils import ToolResult, success_response

logger = get_logger(__name__)

COLOR_FIELDS = ("foregroundColor", "backgroundColor")
UPDATABLE_THOUGHT_FIELDS = ("name", "label", "foregroundColor", "backgroundColor", "kind", "acType", "typeId")


@mcp_tool("create_thought")
async def handle_create_thought(arguments: Dict[str, Any], client) -> ToolResult:
    """Create a new thought, optionally linked to a source thought"""
    brain_id = arguments["brainId"]
    thought_data: Dict[str, Any] = {
        "name": arguments["name"],
        "kind": arguments.get("kind", int(ThoughtKind.NORMAL)),
        "acType": arguments.get("acType", int(AccessType.PUBLIC)),
    }
    if arguments.get("label"):
        thought_data["label"] = arguments["label"]
    if arguments.get("typeId"):
        thought_data["typeId"] = arguments["typeId"]
    if arguments.get("sourceThoughtId"):
        thought_data["sourceThoughtId"] = arguments["sourceThoughtId"]
        thought_data["relation"] = arguments.get("relation") or int(RelationType.CHILD)

    created = CreatedRecord.model_validate(await client.create_thought(brain_id, thought_data))

    colors = {field: arguments[field] for field in COLOR_FIELDS if arguments.get(field)}
    if colors:
        try:
            await client.update_thought(brain_id, created.id, colors)
        except Exception:
            logger.warning(
                f"Thought {created.id} was created in brain {brain_id} "
                f"but applying colours {sorted(colors)} failed"
            )
            raise

    return success_response(thought={"id": created.id, "brainId": brain_id, **thought_data, **colors})


@mcp_tool("get_thought")
async def handle_get_thought(arguments: Dict[str, Any], client) -> ToolResult:
    """Get details about a specific thought"""
    thought = await client.get_thought(arguments["brainId"], arguments["thoughtId"])
    return success_response(thought=format_thought_details(thought))


@mcp_tool("update_thought")
async def handle_update_thought(arguments: Dict[str, Any], client) -> ToolResult:
    """
    Update a thought's properties.

    Only fields present in the arguments are patched; everything else is left
    untouched on the server.
    """
    thought_id = arguments["thoughtId"]
    updates = {key: arguments[key] for key in UPDATABLE_THOUGHT_FIELDS if arguments.get(key) is not None}
    if not updates:
        raise ValidationError(
            f"No fields to update. Provide at least one of: {', '.join(UPDATABLE_THOUGHT_FIELDS)}"
        )

    await client.update_thought(arguments["brainId"], thought_id, updates)
    return success_response(message=f"Thought {thought_id} updated successfully", updates=updates)


@mcp_tool("delete_thought")
async def handle_delete_thought(arguments: Dict[str, Any], client) -> ToolResult:
    """Delete a thought"""
    thought_id = arguments["thoughtId"]
    await client.delete_thought(arguments["brainId"], thought_id)
    return success_response(message=f"Thought {thought_id} deleted successfully")


@mcp_tool("search_thoughts")
async def handle_search_thoughts(arguments: Dict[str, Any], client) -> ToolResult:
    """Search for thoughts in a brain"""
    raw_results = await client.search_thoughts(
        arguments["brainId"],
        arguments["queryText"],
        max_results=arguments.get("maxResults", 30),
        only_search_thought_names=arguments.get("onlySearchThoughtNames", False),
    )

    results = []
    for raw in raw_results or []:
        hit = SearchResultRecord.model_validate(raw)
        source = hit.sourceThought
        results.append({
            "thoughtId": source.id if source else None,
            "name": hit.name or (source.name if source else None),
            "type": get_search_result_type_name(hit.searchResultType),
            "snippet": hit.snippet,
            "attachmentId": hit.attachmentId,
        })
    return success_response(count=len(results), results=results)


@mcp_tool("get_thought_graph")
async def handle_get_thought_graph(arguments: Dict[str, Any], client) -> ToolResult:
    """Get a thought with all its connections"""
    raw_graph = await client.get_thought_graph(
        arguments["brainId"],
        arguments["thoughtId"],
        include_siblings=arguments.get("includeSiblings", False),
    )
    graph = ThoughtGraphRecord.model_validate(raw_graph or {})

    return success_response(graph={
        "activeThought": format_thought(graph.activeThought),
        "parents": format_many(format_thought, graph.parents),
        "children": format_many(format_thought, graph.children),
        "jumps": format_many(format_thought, graph.jumps),
        "siblings": format_many(format_thought, graph.siblings),
        "tags": format_many(format_thought, graph.tags),
        "type": format_thought(graph.type),
        "links": format_many(format_link, graph.links),
        "attachments": format_many(format_attachment, graph.attachments),
    })


@mcp_tool("get_types")
async def handle_get_types(arguments: Dict[str, Any], client) -> ToolResult:
    """Get all thought types in a brain"""
    types = await client.get_types(arguments["brainId"])
    return success_response(types=format_many(format_thought, types))


@mcp_tool("get_tags")
async def handle_get_tags(arguments: Dict[str, Any], client) -> ToolResult:
    """Get all tags in a brain"""
    tags = await client.get_tags(arguments["brainId"])
    return success_response(tags=format_many(format_thought, tags))
