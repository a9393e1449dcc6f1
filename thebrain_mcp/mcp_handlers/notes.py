"""
Note handlers. Each thought has at most one note, addressed by thought id.
"""

from typing import Any, Dict

from thebrain_mcp.models import NoteRecord

from .decorators import mcp_tool
from .utils import ToolResult, success_response

DEFAULT_NOTE_FORMAT = "markdown"


def _note_content(note: NoteRecord, note_format: str) -> str:
    # The service fills only the field matching the endpoint it was asked for.
    return getattr(note, note_format, None) or note.markdown or note.text or ""


@mcp_tool("get_note")
async def handle_get_note(arguments: Dict[str, Any], client) -> ToolResult:
    """Get the note content for a thought in markdown, html or text"""
    brain_id = arguments["brainId"]
    thought_id = arguments["thoughtId"]
    note_format = arguments.get("format", DEFAULT_NOTE_FORMAT)

    raw = await client.get_note(brain_id, thought_id, note_format=note_format)
    if isinstance(raw, str):
        return success_response(note={
            "brainId": brain_id,
            "thoughtId": thought_id,
            "format": note_format,
            "content": raw,
            "modificationDateTime": None,
        })

    note = NoteRecord.model_validate(raw or {})
    return success_response(note={
        "brainId": note.brainId,
        "thoughtId": note.sourceId,
        "format": note_format,
        "content": _note_content(note, note_format),
        "modificationDateTime": note.modificationDateTime,
    })


@mcp_tool("create_or_update_note")
async def handle_create_or_update_note(arguments: Dict[str, Any], client) -> ToolResult:
    """Create or replace the note of a thought"""
    thought_id = arguments["thoughtId"]
    await client.create_or_update_note(arguments["brainId"], thought_id, arguments["markdown"])
    return success_response(message=f"Note for thought {thought_id} updated successfully", thoughtId=thought_id)


@mcp_tool("append_to_note")
async def handle_append_to_note(arguments: Dict[str, Any], client) -> ToolResult:
    """Append markdown to the note of a thought"""
    thought_id = arguments["thoughtId"]
    await client.append_to_note(arguments["brainId"], thought_id, arguments["markdown"])
    return success_response(message=f"Content appended to note for thought {thought_id}", thoughtId=thought_id)
