"""
TheBrain REST API client.

Thin async wrapper over httpx. Every call carries the bearer token; bodies are
JSON, JSON Patch (partial updates) or multipart (file uploads). Responses are
decoded by content type:

- .../file-content        -> raw bytes, whatever the content type
- application/json        -> parsed object
- DELETE or 204           -> {"success": True}
- anything else           -> text

Failures raise BrainAPIError carrying the HTTP status when there was one.
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import httpx

from thebrain_mcp.config import DEFAULT_BASE_URL, DEFAULT_HTTP_TIMEOUT
from thebrain_mcp.errors import BrainAPIError
from thebrain_mcp.logging_utils import get_logger
from thebrain_mcp.models import JsonPayload

logger = get_logger(__name__)

JSON_PATCH_CONTENT_TYPE = "application/json-patch+json"

MIME_TYPES = {
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".gif": "image/gif",
    ".bmp": "image/bmp",
    ".svg": "image/svg+xml",
    ".pdf": "application/pdf",
    ".doc": "application/msword",
    ".docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    ".txt": "text/plain",
    ".md": "text/markdown",
}
DEFAULT_MIME_TYPE = "application/octet-stream"

NOTE_ENDPOINT_SUFFIXES = {
    "markdown": "",
    "html": "/html",
    "text": "/text",
}


def get_mime_type(file_path: str) -> str:
    """MIME type from the file extension, octet-stream when unknown."""
    return MIME_TYPES.get(Path(file_path).suffix.lower(), DEFAULT_MIME_TYPE)


def build_json_patch(updates: Mapping[str, Any]) -> List[Dict[str, Any]]:
    """One replace operation per field, in the given order."""
    return [{"op": "replace", "path": f"/{key}", "value": value} for key, value in updates.items()]


class BrainAPIClient:
    """
    Async client for api.bra.in.

    Usage:
        async with BrainAPIClient(api_key) as client:
            brains = await client.list_brains()
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: Optional[float] = DEFAULT_HTTP_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self._http = httpx.AsyncClient(
            base_url=self.base_url,
            headers={"Authorization": f"Bearer {api_key}"},
            timeout=timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "BrainAPIClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def request(
        self,
        method: str,
        endpoint: str,
        *,
        json_body: Any = None,
        params: Optional[Mapping[str, Any]] = None,
        files: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> JsonPayload:
        """Issue one request and decode the response by content type."""
        request_headers = dict(headers or {})
        content = None
        if json_body is not None and files is None:
            request_headers.setdefault("Content-Type", "application/json")
            content = json.dumps(json_body)
        query = {k: v for k, v in (params or {}).items() if v is not None} or None

        try:
            response = await self._http.request(
                method,
                endpoint,
                content=content,
                params=query,
                files=files,
                headers=request_headers,
            )
        except httpx.HTTPError as e:
            message = f"Request failed: {method} {endpoint}: {type(e).__name__}: {e}"
            logger.error(message)
            raise BrainAPIError(message) from e

        if not response.is_success:
            message = f"HTTP {response.status_code}: {response.reason_phrase}"
            body = response.text
            if body:
                message += f" - {body}"
            logger.error(f"API request failed: {method} {endpoint}: {message}")
            raise BrainAPIError(message, status_code=response.status_code)

        # Attachment bodies are raw bytes whatever type the stored file has.
        if "/file-content" in endpoint:
            return response.content
        content_type = response.headers.get("content-type", "")
        if "application/json" in content_type:
            try:
                return response.json()
            except ValueError as e:
                raise BrainAPIError(f"Malformed JSON from {method} {endpoint}: {e}",
                                    status_code=response.status_code) from e
        if method.upper() == "DELETE" or response.status_code == 204:
            return {"success": True}
        return response.text

    # --- Brains ---

    async def list_brains(self) -> JsonPayload:
        return await self.request("GET", "/brains")

    async def get_brain(self, brain_id: str) -> JsonPayload:
        return await self.request("GET", f"/brains/{brain_id}")

    async def get_brain_stats(self, brain_id: str) -> JsonPayload:
        return await self.request("GET", f"/brains/{brain_id}/statistics")

    async def get_brain_modifications(
        self,
        brain_id: str,
        max_logs: Optional[int] = None,
        start_time: Optional[str] = None,
        end_time: Optional[str] = None,
    ) -> JsonPayload:
        params = {"maxLogs": max_logs or None, "startTime": start_time or None, "endTime": end_time or None}
        return await self.request("GET", f"/brains/{brain_id}/modifications", params=params)

    # --- Thoughts ---

    async def create_thought(self, brain_id: str, thought: Mapping[str, Any]) -> JsonPayload:
        return await self.request("POST", f"/thoughts/{brain_id}", json_body=dict(thought))

    async def get_thought(self, brain_id: str, thought_id: str) -> JsonPayload:
        return await self.request("GET", f"/thoughts/{brain_id}/{thought_id}")

    async def update_thought(self, brain_id: str, thought_id: str, updates: Mapping[str, Any]) -> JsonPayload:
        return await self.request(
            "PATCH",
            f"/thoughts/{brain_id}/{thought_id}",
            json_body=build_json_patch(updates),
            headers={"Content-Type": JSON_PATCH_CONTENT_TYPE},
        )

    async def delete_thought(self, brain_id: str, thought_id: str) -> JsonPayload:
        return await self.request("DELETE", f"/thoughts/{brain_id}/{thought_id}")

    async def get_thought_graph(self, brain_id: str, thought_id: str, include_siblings: bool = False) -> JsonPayload:
        return await self.request(
            "GET",
            f"/thoughts/{brain_id}/{thought_id}/graph",
            params={"includeSiblings": bool(include_siblings)},
        )

    async def search_thoughts(
        self,
        brain_id: str,
        query_text: str,
        max_results: int = 30,
        only_search_thought_names: bool = False,
    ) -> JsonPayload:
        params = {
            "queryText": query_text,
            "maxResults": max_results,
            "onlySearchThoughtNames": bool(only_search_thought_names),
        }
        return await self.request("GET", f"/search/{brain_id}", params=params)

    async def get_types(self, brain_id: str) -> JsonPayload:
        return await self.request("GET", f"/thoughts/{brain_id}/types")

    async def get_tags(self, brain_id: str) -> JsonPayload:
        return await self.request("GET", f"/thoughts/{brain_id}/tags")

    # --- Links ---

    async def create_link(self, brain_id: str, link: Mapping[str, Any]) -> JsonPayload:
        return await self.request("POST", f"/links/{brain_id}", json_body=dict(link))

    async def get_link(self, brain_id: str, link_id: str) -> JsonPayload:
        return await self.request("GET", f"/links/{brain_id}/{link_id}")

    async def update_link(self, brain_id: str, link_id: str, updates: Mapping[str, Any]) -> JsonPayload:
        return await self.request(
            "PATCH",
            f"/links/{brain_id}/{link_id}",
            json_body=build_json_patch(updates),
            headers={"Content-Type": JSON_PATCH_CONTENT_TYPE},
        )

    async def delete_link(self, brain_id: str, link_id: str) -> JsonPayload:
        return await self.request("DELETE", f"/links/{brain_id}/{link_id}")

    # --- Attachments ---

    async def add_file_attachment(
        self,
        brain_id: str,
        thought_id: str,
        file_path: str,
        file_name: Optional[str] = None,
    ) -> JsonPayload:
        """Upload a local file as multipart field 'file'. httpx streams the handle."""
        upload_name = file_name or Path(file_path).name
        with open(file_path, "rb") as handle:
            files = {"file": (upload_name, handle, get_mime_type(file_path))}
            return await self.request("POST", f"/attachments/{brain_id}/{thought_id}/file", files=files)

    async def add_url_attachment(self, brain_id: str, thought_id: str, url: str, name: Optional[str] = None) -> JsonPayload:
        return await self.request(
            "POST",
            f"/attachments/{brain_id}/{thought_id}/url",
            params={"url": url, "name": name or None},
        )

    async def get_attachment(self, brain_id: str, attachment_id: str) -> JsonPayload:
        return await self.request("GET", f"/attachments/{brain_id}/{attachment_id}/metadata")

    async def get_attachment_content(self, brain_id: str, attachment_id: str) -> JsonPayload:
        return await self.request("GET", f"/attachments/{brain_id}/{attachment_id}/file-content")

    async def delete_attachment(self, brain_id: str, attachment_id: str) -> JsonPayload:
        return await self.request("DELETE", f"/attachments/{brain_id}/{attachment_id}")

    async def list_attachments(self, brain_id: str, thought_id: str) -> JsonPayload:
        return await self.request("GET", f"/thoughts/{brain_id}/{thought_id}/attachments")

    # --- Notes ---

    async def get_note(self, brain_id: str, thought_id: str, note_format: str = "markdown") -> JsonPayload:
        suffix = NOTE_ENDPOINT_SUFFIXES.get(note_format, "")
        return await self.request("GET", f"/notes/{brain_id}/{thought_id}{suffix}")

    async def create_or_update_note(self, brain_id: str, thought_id: str, markdown: str) -> JsonPayload:
        return await self.request("POST", f"/notes/{brain_id}/{thought_id}/update", json_body={"markdown": markdown})

    async def append_to_note(self, brain_id: str, thought_id: str, markdown: str) -> JsonPayload:
        return await self.request("POST", f"/notes/{brain_id}/{thought_id}/append", json_body={"markdown": markdown})
