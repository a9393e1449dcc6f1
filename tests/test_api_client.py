"""
Tests for thebrain_mcp/api_client.py using respx to stub the HTTP layer.
"""

import json

import httpx
import pytest
import pytest_asyncio

from thebrain_mcp.api_client import (
    DEFAULT_MIME_TYPE,
    BrainAPIClient,
    build_json_patch,
    get_mime_type,
)
from thebrain_mcp.errors import BrainAPIError
from thebrain_mcp.mcp_handlers import ToolDispatcher

BASE_URL = "https://api.bra.in"


@pytest_asyncio.fixture
async def client():
    async with BrainAPIClient("secret-key", base_url=BASE_URL) as api:
        yield api


class TestHelpers:

    @pytest.mark.parametrize("path,expected", [
        ("photo.JPG", "image/jpeg"),
        ("notes.md", "text/markdown"),
        ("/tmp/report.pdf", "application/pdf"),
        ("archive.tar.gz", DEFAULT_MIME_TYPE),
        ("no_extension", DEFAULT_MIME_TYPE),
    ])
    def test_mime_types(self, path, expected):
        assert get_mime_type(path) == expected

    def test_json_patch(self):
        assert build_json_patch({"name": "New", "kind": 2}) == [
            {"op": "replace", "path": "/name", "value": "New"},
            {"op": "replace", "path": "/kind", "value": 2},
        ]


class TestRequests:

    @pytest.mark.asyncio
    async def test_bearer_token_and_json(self, respx_mock, client):
        route = respx_mock.get(f"{BASE_URL}/brains").mock(return_value=httpx.Response(200, json=[{"id": "b1"}]))

        brains = await client.list_brains()

        assert brains == [{"id": "b1"}]
        assert route.calls.last.request.headers["Authorization"] == "Bearer secret-key"

    @pytest.mark.asyncio
    async def test_create_thought_posts_json(self, respx_mock, client):
        route = respx_mock.post(f"{BASE_URL}/thoughts/b1").mock(return_value=httpx.Response(200, json={"id": "t1"}))

        created = await client.create_thought("b1", {"name": "Idea", "kind": 1, "acType": 0})

        assert created == {"id": "t1"}
        request = route.calls.last.request
        assert request.headers["Content-Type"] == "application/json"
        assert json.loads(request.content) == {"name": "Idea", "kind": 1, "acType": 0}

    @pytest.mark.asyncio
    async def test_updates_use_json_patch(self, respx_mock, client):
        route = respx_mock.patch(f"{BASE_URL}/links/b1/l1").mock(return_value=httpx.Response(200, text=""))

        await client.update_link("b1", "l1", {"thickness": 3})

        request = route.calls.last.request
        assert request.headers["Content-Type"] == "application/json-patch+json"
        assert json.loads(request.content) == [{"op": "replace", "path": "/thickness", "value": 3}]

    @pytest.mark.asyncio
    async def test_delete_returns_success_marker(self, respx_mock, client):
        respx_mock.delete(f"{BASE_URL}/thoughts/b1/t1").mock(return_value=httpx.Response(200, text="ok"))

        assert await client.delete_thought("b1", "t1") == {"success": True}

    @pytest.mark.asyncio
    async def test_no_content(self, respx_mock, client):
        respx_mock.post(f"{BASE_URL}/notes/b1/t1/append").mock(return_value=httpx.Response(204))

        assert await client.append_to_note("b1", "t1", "more") == {"success": True}

    @pytest.mark.asyncio
    async def test_file_content_is_bytes(self, respx_mock, client):
        respx_mock.get(f"{BASE_URL}/attachments/b1/a1/file-content").mock(
            return_value=httpx.Response(200, content=b"\x89PNG", headers={"Content-Type": "image/png"})
        )

        assert await client.get_attachment_content("b1", "a1") == b"\x89PNG"

    @pytest.mark.asyncio
    async def test_json_file_content_is_not_parsed(self, respx_mock, client):
        respx_mock.get(f"{BASE_URL}/attachments/b1/a1/file-content").mock(
            return_value=httpx.Response(200, content=b'{"k": 1', headers={"Content-Type": "application/json"})
        )

        content = await client.get_attachment_content("b1", "a1")

        assert isinstance(content, bytes)
        assert content == b'{"k": 1'

    @pytest.mark.asyncio
    async def test_other_bodies_are_text(self, respx_mock, client):
        respx_mock.get(f"{BASE_URL}/notes/b1/t1/text").mock(
            return_value=httpx.Response(200, text="plain note", headers={"Content-Type": "text/plain"})
        )

        assert await client.get_note("b1", "t1", note_format="text") == "plain note"

    @pytest.mark.asyncio
    async def test_note_endpoints_per_format(self, respx_mock, client):
        markdown = respx_mock.get(f"{BASE_URL}/notes/b1/t1").mock(return_value=httpx.Response(200, json={"markdown": "m"}))
        html = respx_mock.get(f"{BASE_URL}/notes/b1/t1/html").mock(return_value=httpx.Response(200, json={"html": "h"}))

        await client.get_note("b1", "t1")
        await client.get_note("b1", "t1", note_format="html")

        assert markdown.called and html.called

    @pytest.mark.asyncio
    async def test_search_params(self, respx_mock, client):
        route = respx_mock.get(f"{BASE_URL}/search/b1").mock(return_value=httpx.Response(200, json=[]))

        await client.search_thoughts("b1", "graph theory", max_results=5, only_search_thought_names=True)

        params = route.calls.last.request.url.params
        assert params["queryText"] == "graph theory"
        assert params["maxResults"] == "5"
        assert params["onlySearchThoughtNames"] == "true"

    @pytest.mark.asyncio
    async def test_none_params_are_dropped(self, respx_mock, client):
        route = respx_mock.get(f"{BASE_URL}/brains/b1/modifications").mock(return_value=httpx.Response(200, json=[]))

        await client.get_brain_modifications("b1", max_logs=100)

        params = route.calls.last.request.url.params
        assert params["maxLogs"] == "100"
        assert "startTime" not in params
        assert "endTime" not in params

    @pytest.mark.asyncio
    async def test_url_attachment_without_name(self, respx_mock, client):
        route = respx_mock.post(f"{BASE_URL}/attachments/b1/t1/url").mock(return_value=httpx.Response(200, text=""))

        await client.add_url_attachment("b1", "t1", "https://example.com")

        params = route.calls.last.request.url.params
        assert params["url"] == "https://example.com"
        assert "name" not in params

    @pytest.mark.asyncio
    async def test_file_upload_is_multipart(self, respx_mock, client, tmp_path):
        upload = tmp_path / "diagram.png"
        upload.write_bytes(b"PNGDATA")
        route = respx_mock.post(f"{BASE_URL}/attachments/b1/t1/file").mock(return_value=httpx.Response(200, text=""))

        await client.add_file_attachment("b1", "t1", str(upload), "Diagram.png")

        request = route.calls.last.request
        assert request.headers["Content-Type"].startswith("multipart/form-data")
        assert route.call_count == 1


class TestErrors:

    @pytest.mark.asyncio
    async def test_http_error_includes_status_and_body(self, respx_mock, client):
        respx_mock.get(f"{BASE_URL}/thoughts/b1/missing").mock(return_value=httpx.Response(404, text="Thought not found"))

        with pytest.raises(BrainAPIError) as exc_info:
            await client.get_thought("b1", "missing")

        assert exc_info.value.status_code == 404
        assert str(exc_info.value) == "HTTP 404: Not Found - Thought not found"

    @pytest.mark.asyncio
    async def test_http_error_without_body(self, respx_mock, client):
        respx_mock.get(f"{BASE_URL}/brains").mock(return_value=httpx.Response(401))

        with pytest.raises(BrainAPIError) as exc_info:
            await client.list_brains()

        assert str(exc_info.value) == "HTTP 401: Unauthorized"

    @pytest.mark.asyncio
    async def test_network_failure(self, respx_mock, client):
        respx_mock.get(f"{BASE_URL}/brains").mock(side_effect=httpx.ConnectError)

        with pytest.raises(BrainAPIError) as exc_info:
            await client.list_brains()

        assert exc_info.value.status_code is None
        assert str(exc_info.value).startswith("Request failed:")

    @pytest.mark.asyncio
    async def test_malformed_json(self, respx_mock, client):
        respx_mock.get(f"{BASE_URL}/brains").mock(
            return_value=httpx.Response(200, content=b"{not json", headers={"Content-Type": "application/json"})
        )

        with pytest.raises(BrainAPIError):
            await client.list_brains()


class TestDispatchOverHttp:

    @pytest.mark.asyncio
    async def test_json_attachment_saved_to_file(self, respx_mock, client, tmp_path):
        respx_mock.get(f"{BASE_URL}/attachments/b1/a1/file-content").mock(
            return_value=httpx.Response(200, content=b'{"k": 1}', headers={"Content-Type": "application/json"})
        )
        target = tmp_path / "data.json"

        result = await ToolDispatcher(client).call_tool(
            "get_attachment_content",
            {"brainId": "b1", "attachmentId": "a1", "saveToPath": str(target)},
        )

        payload = json.loads(result[0].text)
        assert payload["success"] is True
        assert payload["size"] == 8
        assert target.read_bytes() == b'{"k": 1}'
