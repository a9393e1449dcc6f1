"""
Attachment handlers.

Binary attachment content never goes into a tool response: it is either saved
to a local path or summarised by its size.
"""

from pathlib import Path
from typing import Any, Dict

import aiofiles
import aiofiles.os

from thebrain_mcp.errors import BrainAPIError, ValidationError
from thebrain_mcp.logging_utils import get_logger

from .decorators import mcp_tool
from .formatters import format_attachment_details, format_attachment_listing, format_many
from .utils import ToolResult, success_response

logger = get_logger(__name__)

URL_NAME_PLACEHOLDER = "Auto-generated from page title"
CONTENT_HINT = "Use saveToPath parameter to save the content to a file"


@mcp_tool("add_file_attachment", timeout=120.0)
async def handle_add_file_attachment(arguments: Dict[str, Any], client) -> ToolResult:
    """Attach a local file to a thought"""
    thought_id = arguments["thoughtId"]
    file_path = arguments["filePath"]

    if not await aiofiles.os.path.isfile(file_path):
        raise ValidationError(f"File not found: {file_path}")
    stat = await aiofiles.os.stat(file_path)
    file_name = arguments.get("fileName") or Path(file_path).name

    await client.add_file_attachment(arguments["brainId"], thought_id, file_path, file_name)
    logger.info(f"Uploaded {file_name} ({stat.st_size} bytes) to thought {thought_id}")
    return success_response(
        message=f"File '{file_name}' attached to thought {thought_id}",
        attachment={
            "fileName": file_name,
            "filePath": file_path,
            "size": stat.st_size,
            "thoughtId": thought_id,
        },
    )


@mcp_tool("add_url_attachment")
async def handle_add_url_attachment(arguments: Dict[str, Any], client) -> ToolResult:
    """Attach a URL to a thought"""
    thought_id = arguments["thoughtId"]
    url = arguments["url"]
    name = arguments.get("name")

    await client.add_url_attachment(arguments["brainId"], thought_id, url, name)
    return success_response(
        message=f"URL '{url}' attached to thought {thought_id}",
        attachment={"url": url, "name": name or URL_NAME_PLACEHOLDER, "thoughtId": thought_id},
    )


@mcp_tool("get_attachment")
async def handle_get_attachment(arguments: Dict[str, Any], client) -> ToolResult:
    """Get attachment metadata"""
    attachment = await client.get_attachment(arguments["brainId"], arguments["attachmentId"])
    return success_response(attachment=format_attachment_details(attachment))


@mcp_tool("get_attachment_content", timeout=120.0)
async def handle_get_attachment_content(arguments: Dict[str, Any], client) -> ToolResult:
    """Get the binary content of an attachment, optionally saving it to disk"""
    content = await client.get_attachment_content(arguments["brainId"], arguments["attachmentId"])
    if isinstance(content, str):
        content = content.encode("utf-8")
    elif not isinstance(content, (bytes, bytearray)):
        raise BrainAPIError(f"Unexpected attachment content type: {type(content).__name__}")

    save_to = arguments.get("saveToPath")
    if not save_to:
        return success_response(message="Attachment content retrieved", size=len(content), hint=CONTENT_HINT)

    parent = Path(save_to).parent
    if str(parent) and not await aiofiles.os.path.isdir(parent):
        await aiofiles.os.makedirs(parent, exist_ok=True)
    async with aiofiles.open(save_to, "wb") as f:
        await f.write(content)

    return success_response(
        message=f"Attachment content saved to {save_to}",
        savedTo=save_to,
        size=len(content),
    )


@mcp_tool("delete_attachment")
async def handle_delete_attachment(arguments: Dict[str, Any], client) -> ToolResult:
    """Delete an attachment"""
    attachment_id = arguments["attachmentId"]
    await client.delete_attachment(arguments["brainId"], attachment_id)
    return success_response(message=f"Attachment {attachment_id} deleted successfully")


@mcp_tool("list_attachments")
async def handle_list_attachments(arguments: Dict[str, Any], client) -> ToolResult:
    """List all attachments for a thought"""
    attachments = format_many(
        format_attachment_listing,
        await client.list_attachments(arguments["brainId"], arguments["thoughtId"]),
    )
    return success_response(count=len(attachments), attachments=attachments)
