"""
Tool Schema Definitions

Single source of truth for the MCP tool catalog: names, descriptions and the
JSON-schema inputSchema advertised through list_tools. The same schemas drive
argument validation in mcp_handlers.validators.

Every tool except list_brains accepts an optional `brainId`; when omitted the
active brain (see set_active_brain) is used.
"""

import copy
import os
from typing import Any, Dict, List, Optional

from mcp.types import Tool

HEX_COLOR_PATTERN = "^#[0-9a-fA-F]{6}$"
KIND_ENUM = [1, 2, 3, 4, 5]
RELATION_ENUM = [1, 2, 3, 4]
AC_TYPE_ENUM = [0, 1]
NOTE_FORMATS = ["markdown", "html", "text"]

BRAIN_ID = {
    "type": "string",
    "description": "The ID of the brain (uses the active brain if not specified)",
}
THOUGHT_ID = {"type": "string", "description": "The ID of the thought"}
LINK_ID = {"type": "string", "description": "The ID of the link"}
ATTACHMENT_ID = {"type": "string", "description": "The ID of the attachment"}


def _color(description: str) -> Dict[str, Any]:
    return {"type": "string", "description": description, "pattern": HEX_COLOR_PATTERN}


def _schema(properties: Dict[str, Any], required: Optional[List[str]] = None) -> Dict[str, Any]:
    return {"type": "object", "properties": properties, "required": required or []}


TOOL_SCHEMAS: Dict[str, Dict[str, Any]] = {
    # --- Brain management ---
    "list_brains": {
        "description": "List all available brains for the user",
        "inputSchema": _schema({}),
    },
    "get_brain": {
        "description": "Get details about a specific brain",
        "inputSchema": _schema({"brainId": {"type": "string", "description": "The ID of the brain"}}, ["brainId"]),
    },
    "set_active_brain": {
        "description": """Set the active brain for subsequent operations.

The brain is verified to exist before it becomes active. Tools called without
brainId use the active brain until the server restarts or another brain is set.""",
        "inputSchema": _schema(
            {"brainId": {"type": "string", "description": "The ID of the brain to set as active"}},
            ["brainId"],
        ),
    },
    "get_brain_stats": {
        "description": "Get statistics about a brain (thought/link/tag counts, attachment sizes)",
        "inputSchema": _schema({"brainId": BRAIN_ID}),
    },
    "get_modifications": {
        "description": "Get modification history for a brain",
        "inputSchema": _schema({
            "brainId": BRAIN_ID,
            "maxLogs": {
                "type": "number",
                "description": "Maximum number of logs to return",
                "default": 100,
                "minimum": 1,
            },
            "startTime": {"type": "string", "description": "Start time for logs (ISO format)"},
            "endTime": {"type": "string", "description": "End time for logs (ISO format)"},
        }),
    },

    # --- Thoughts ---
    "create_thought": {
        "description": """Create a new thought with optional visual properties.

Colors are applied with a second call after creation. If that call fails the
thought still exists but the tool reports failure.""",
        "inputSchema": _schema({
            "brainId": BRAIN_ID,
            "name": {"type": "string", "description": "The name of the thought"},
            "kind": {
                "type": "number",
                "description": "Kind of thought: 1=Normal, 2=Type, 3=Event, 4=Tag, 5=System",
                "enum": KIND_ENUM,
                "default": 1,
            },
            "label": {"type": "string", "description": "Optional label for the thought"},
            "foregroundColor": _color('Foreground color in hex format (e.g., "#ff0000")'),
            "backgroundColor": _color('Background color in hex format (e.g., "#0000ff")'),
            "typeId": {"type": "string", "description": "ID of the thought type to assign"},
            "sourceThoughtId": {"type": "string", "description": "ID of the source thought to link from"},
            "relation": {
                "type": "number",
                "description": "Relation to the source thought: 1=Child, 2=Parent, 3=Jump, 4=Sibling",
                "enum": RELATION_ENUM,
            },
            "acType": {
                "type": "number",
                "description": "Access type: 0=Public, 1=Private",
                "enum": AC_TYPE_ENUM,
                "default": 0,
            },
        }, ["name"]),
    },
    "get_thought": {
        "description": "Get details about a specific thought",
        "inputSchema": _schema({"brainId": BRAIN_ID, "thoughtId": THOUGHT_ID}, ["thoughtId"]),
    },
    "update_thought": {
        "description": "Update a thought including its visual properties. Only the fields provided are changed.",
        "inputSchema": _schema({
            "brainId": BRAIN_ID,
            "thoughtId": {"type": "string", "description": "The ID of the thought to update"},
            "name": {"type": "string", "description": "New name for the thought"},
            "label": {"type": "string", "description": "New label for the thought"},
            "foregroundColor": _color('New foreground color in hex format (e.g., "#ff0000")'),
            "backgroundColor": _color('New background color in hex format (e.g., "#0000ff")'),
            "kind": {
                "type": "number",
                "description": "New kind: 1=Normal, 2=Type, 3=Event, 4=Tag, 5=System",
                "enum": KIND_ENUM,
            },
            "acType": {"type": "number", "description": "New access type: 0=Public, 1=Private", "enum": AC_TYPE_ENUM},
            "typeId": {"type": "string", "description": "New type ID to assign"},
        }, ["thoughtId"]),
    },
    "delete_thought": {
        "description": "Delete a thought",
        "inputSchema": _schema({"brainId": BRAIN_ID, "thoughtId": THOUGHT_ID}, ["thoughtId"]),
    },
    "search_thoughts": {
        "description": "Search for thoughts in a brain (names, notes, labels and attachments)",
        "inputSchema": _schema({
            "brainId": BRAIN_ID,
            "queryText": {"type": "string", "description": "Search query text"},
            "maxResults": {
                "type": "number",
                "description": "Maximum number of results",
                "default": 30,
                "minimum": 1,
            },
            "onlySearchThoughtNames": {
                "type": "boolean",
                "description": "Only search in thought names (not content)",
                "default": False,
            },
        }, ["queryText"]),
    },
    "get_thought_graph": {
        "description": "Get a thought with all its connections and attachments",
        "inputSchema": _schema({
            "brainId": BRAIN_ID,
            "thoughtId": THOUGHT_ID,
            "includeSiblings": {
                "type": "boolean",
                "description": "Include sibling thoughts in the graph",
                "default": False,
            },
        }, ["thoughtId"]),
    },
    "get_types": {
        "description": "Get all thought types in a brain",
        "inputSchema": _schema({"brainId": BRAIN_ID}),
    },
    "get_tags": {
        "description": "Get all tags in a brain",
        "inputSchema": _schema({"brainId": BRAIN_ID}),
    },

    # --- Links ---
    "create_link": {
        "description": """Create a link between two thoughts with visual properties.

color, thickness, direction and typeId are applied with a second call after
creation. Direction flags: 1=IsDirected, 2=DirectionBA, 4=OneWay
(0=undirected, 1=A→B, 3=B→A, 5=one-way A→B, 7=one-way B→A).""",
        "inputSchema": _schema({
            "brainId": BRAIN_ID,
            "thoughtIdA": {"type": "string", "description": "ID of the first thought"},
            "thoughtIdB": {"type": "string", "description": "ID of the second thought"},
            "relation": {
                "type": "number",
                "description": "Relation type: 1=Child, 2=Parent, 3=Jump, 4=Sibling",
                "enum": RELATION_ENUM,
            },
            "name": {"type": "string", "description": "Label for the link"},
            "color": _color('Link color in hex format (e.g., "#6fbf6f")'),
            "thickness": {
                "type": "number",
                "description": "Link thickness (visual weight)",
                "minimum": 1,
                "maximum": 10,
            },
            "direction": {
                "type": "number",
                "description": "Direction flags: 1=IsDirected, 2=DirectionBA, 4=OneWay",
                "minimum": 0,
                "maximum": 7,
            },
            "typeId": {"type": "string", "description": "ID of link type"},
        }, ["thoughtIdA", "thoughtIdB", "relation"]),
    },
    "get_link": {
        "description": "Get details about a specific link, including decoded direction",
        "inputSchema": _schema({"brainId": BRAIN_ID, "linkId": LINK_ID}, ["linkId"]),
    },
    "update_link": {
        "description": "Update link properties including visual formatting. Only the fields provided are changed.",
        "inputSchema": _schema({
            "brainId": BRAIN_ID,
            "linkId": {"type": "string", "description": "The ID of the link to update"},
            "name": {"type": "string", "description": "New label for the link"},
            "color": _color('New link color in hex format (e.g., "#6fbf6f")'),
            "thickness": {"type": "number", "description": "New link thickness", "minimum": 1, "maximum": 10},
            "direction": {"type": "number", "description": "New direction flags", "minimum": 0, "maximum": 7},
            "relation": {
                "type": "number",
                "description": "New relation type: 1=Child, 2=Parent, 3=Jump, 4=Sibling",
                "enum": RELATION_ENUM,
            },
        }, ["linkId"]),
    },
    "delete_link": {
        "description": "Delete a link",
        "inputSchema": _schema({"brainId": BRAIN_ID, "linkId": LINK_ID}, ["linkId"]),
    },

    # --- Attachments ---
    "add_file_attachment": {
        "description": "Add a file attachment (including images) to a thought",
        "inputSchema": _schema({
            "brainId": BRAIN_ID,
            "thoughtId": THOUGHT_ID,
            "filePath": {"type": "string", "description": "Path to the file to attach"},
            "fileName": {
                "type": "string",
                "description": "Name for the attachment (optional, uses filename if not provided)",
            },
        }, ["thoughtId", "filePath"]),
    },
    "add_url_attachment": {
        "description": "Add a URL attachment to a thought",
        "inputSchema": _schema({
            "brainId": BRAIN_ID,
            "thoughtId": THOUGHT_ID,
            "url": {"type": "string", "description": "The URL to attach"},
            "name": {
                "type": "string",
                "description": "Name for the URL attachment (auto-fetched from page title if not provided)",
            },
        }, ["thoughtId", "url"]),
    },
    "get_attachment": {
        "description": "Get metadata about an attachment",
        "inputSchema": _schema({"brainId": BRAIN_ID, "attachmentId": ATTACHMENT_ID}, ["attachmentId"]),
    },
    "get_attachment_content": {
        "description": """Get the binary content of an attachment (e.g., download an image).

The bytes are never returned inline; pass saveToPath to write them to disk.""",
        "inputSchema": _schema({
            "brainId": BRAIN_ID,
            "attachmentId": ATTACHMENT_ID,
            "saveToPath": {"type": "string", "description": "Optional path to save the file locally"},
        }, ["attachmentId"]),
    },
    "delete_attachment": {
        "description": "Delete an attachment",
        "inputSchema": _schema({"brainId": BRAIN_ID, "attachmentId": ATTACHMENT_ID}, ["attachmentId"]),
    },
    "list_attachments": {
        "description": "List all attachments for a thought",
        "inputSchema": _schema({"brainId": BRAIN_ID, "thoughtId": THOUGHT_ID}, ["thoughtId"]),
    },

    # --- Notes ---
    "get_note": {
        "description": "Get the note content for a thought",
        "inputSchema": _schema({
            "brainId": BRAIN_ID,
            "thoughtId": THOUGHT_ID,
            "format": {
                "type": "string",
                "description": "Output format",
                "enum": NOTE_FORMATS,
                "default": "markdown",
            },
        }, ["thoughtId"]),
    },
    "create_or_update_note": {
        "description": "Create or replace a thought's note with markdown content",
        "inputSchema": _schema({
            "brainId": BRAIN_ID,
            "thoughtId": THOUGHT_ID,
            "markdown": {"type": "string", "description": "Markdown content for the note"},
        }, ["thoughtId", "markdown"]),
    },
    "append_to_note": {
        "description": "Append content to an existing note",
        "inputSchema": _schema({
            "brainId": BRAIN_ID,
            "thoughtId": THOUGHT_ID,
            "markdown": {"type": "string", "description": "Markdown content to append"},
        }, ["thoughtId", "markdown"]),
    },
}


def get_tool_schema(name: str) -> Optional[Dict[str, Any]]:
    """inputSchema for one tool, or None if the tool is unknown."""
    entry = TOOL_SCHEMAS.get(name)
    return copy.deepcopy(entry["inputSchema"]) if entry else None


def get_tool_definitions(strip_field_descriptions: Optional[bool] = None) -> List[Tool]:
    """
    Get MCP tool definitions.

    Control via:
    - THEBRAIN_TOOL_SCHEMA_STRIP_FIELD_DESCRIPTIONS=1  (removes nested `description`
      keys from inputSchema to shrink the tool list)
    """
    if strip_field_descriptions is None:
        strip_field_descriptions = os.getenv(
            "THEBRAIN_TOOL_SCHEMA_STRIP_FIELD_DESCRIPTIONS", "0"
        ).strip().lower() in ("1", "true", "yes")

    def _strip_schema_descriptions(node: Any) -> Any:
        # Recursively remove nested `description` fields to shrink payloads.
        if isinstance(node, dict):
            return {k: _strip_schema_descriptions(v) for k, v in node.items() if k != "description"}
        if isinstance(node, list):
            return [_strip_schema_descriptions(x) for x in node]
        return node

    tools = []
    for name, entry in TOOL_SCHEMAS.items():
        input_schema = copy.deepcopy(entry["inputSchema"])
        if strip_field_descriptions:
            input_schema = _strip_schema_descriptions(input_schema)
        tools.append(Tool(name=name, description=entry["description"], inputSchema=input_schema))
    return tools
