"""
Brain statistics and modification history.
"""

from typing import Any, Dict

from thebrain_mcp.codes import get_entity_type_name, get_modification_type_name
from thebrain_mcp.models import BrainStatsRecord, ModificationRecord

from .decorators import mcp_tool
from .formatters import format_bytes
from .utils import ToolResult, success_response

DEFAULT_MAX_LOGS = 100


@mcp_tool("get_brain_stats")
async def handle_get_brain_stats(arguments: Dict[str, Any], client) -> ToolResult:
    """Get statistics about a brain"""
    stats = BrainStatsRecord.model_validate(await client.get_brain_stats(arguments["brainId"]) or {})
    return success_response(stats={
        "brainName": stats.brainName,
        "brainId": stats.brainId,
        "dateGenerated": stats.dateGenerated,
        "thoughts": stats.thoughts,
        "forgottenThoughts": stats.forgottenThoughts,
        "links": stats.links,
        "linksPerThought": stats.linksPerThought,
        "thoughtTypes": stats.thoughtTypes,
        "linkTypes": stats.linkTypes,
        "tags": stats.tags,
        "notes": stats.notes,
        "attachments": {
            "internalFiles": stats.internalFiles,
            "internalFolders": stats.internalFolders,
            "externalFiles": stats.externalFiles,
            "externalFolders": stats.externalFolders,
            "webLinks": stats.webLinks,
            "totalInternalSize": format_bytes(stats.internalFilesSize),
            "totalIconSize": format_bytes(stats.iconsFilesSize),
        },
        "visual": {
            "assignedIcons": stats.assignedIcons,
        },
    })


def _format_modification(raw: Any) -> Dict[str, Any]:
    mod = ModificationRecord.model_validate(raw)
    return {
        "sourceId": mod.sourceId,
        "sourceType": mod.sourceType,
        "sourceTypeName": get_entity_type_name(mod.sourceType),
        "modType": mod.modType,
        "modTypeName": get_modification_type_name(mod.modType),
        "oldValue": mod.oldValue,
        "newValue": mod.newValue,
        "userId": mod.userId,
        "creationDateTime": mod.creationDateTime,
        "modificationDateTime": mod.modificationDateTime,
        "extraAId": mod.extraAId,
        "extraBId": mod.extraBId,
    }


@mcp_tool("get_modifications")
async def handle_get_modifications(arguments: Dict[str, Any], client) -> ToolResult:
    """Get the modification history of a brain"""
    raw = await client.get_brain_modifications(
        arguments["brainId"],
        max_logs=arguments.get("maxLogs", DEFAULT_MAX_LOGS),
        start_time=arguments.get("startTime"),
        end_time=arguments.get("endTime"),
    )
    modifications = [_format_modification(mod) for mod in (raw or [])]
    return success_response(count=len(modifications), modifications=modifications)
