"""
Tests for thebrain_mcp/mcp_handlers/attachments.py.
"""

import pytest

from thebrain_mcp.mcp_handlers.attachments import (
    CONTENT_HINT,
    URL_NAME_PLACEHOLDER,
    handle_add_file_attachment,
    handle_add_url_attachment,
    handle_delete_attachment,
    handle_get_attachment,
    handle_get_attachment_content,
    handle_list_attachments,
)


class TestAddFileAttachment:

    @pytest.mark.asyncio
    async def test_uploads_existing_file(self, mock_client, tmp_path):
        image = tmp_path / "diagram.png"
        image.write_bytes(b"\x89PNG" + b"\x00" * 12)

        result = await handle_add_file_attachment(
            {"brainId": "b1", "thoughtId": "t1", "filePath": str(image)},
            mock_client,
        )

        assert result.success is True
        mock_client.add_file_attachment.assert_awaited_once_with("b1", "t1", str(image), "diagram.png")
        assert result.data["attachment"] == {
            "fileName": "diagram.png",
            "filePath": str(image),
            "size": 16,
            "thoughtId": "t1",
        }
        assert result.data["message"] == "File 'diagram.png' attached to thought t1"

    @pytest.mark.asyncio
    async def test_custom_file_name(self, mock_client, tmp_path):
        doc = tmp_path / "draft.txt"
        doc.write_text("hello")

        result = await handle_add_file_attachment(
            {"brainId": "b1", "thoughtId": "t1", "filePath": str(doc), "fileName": "Final.txt"},
            mock_client,
        )

        assert result.data["attachment"]["fileName"] == "Final.txt"
        assert mock_client.add_file_attachment.await_args.args[3] == "Final.txt"

    @pytest.mark.asyncio
    async def test_missing_file(self, mock_client, tmp_path):
        missing = tmp_path / "nope.pdf"

        result = await handle_add_file_attachment(
            {"brainId": "b1", "thoughtId": "t1", "filePath": str(missing)},
            mock_client,
        )

        assert result.success is False
        assert result.error == f"File not found: {missing}"
        mock_client.add_file_attachment.assert_not_awaited()


class TestAddUrlAttachment:

    @pytest.mark.asyncio
    async def test_name_placeholder(self, mock_client):
        result = await handle_add_url_attachment(
            {"brainId": "b1", "thoughtId": "t1", "url": "https://example.com"},
            mock_client,
        )

        mock_client.add_url_attachment.assert_awaited_once_with("b1", "t1", "https://example.com", None)
        assert result.data["attachment"]["name"] == URL_NAME_PLACEHOLDER

    @pytest.mark.asyncio
    async def test_explicit_name(self, mock_client):
        result = await handle_add_url_attachment(
            {"brainId": "b1", "thoughtId": "t1", "url": "https://example.com", "name": "Example"},
            mock_client,
        )

        assert result.data["attachment"]["name"] == "Example"


class TestAttachmentMetadata:

    @pytest.mark.asyncio
    async def test_get_attachment(self, mock_client):
        mock_client.get_attachment.return_value = {
            "id": "a1", "sourceId": "t1", "sourceType": 2, "type": 2, "name": "pic.png", "dataLength": 2048,
        }

        result = await handle_get_attachment({"brainId": "b1", "attachmentId": "a1"}, mock_client)

        attachment = result.data["attachment"]
        assert attachment["sourceTypeName"] == "Thought"
        assert attachment["typeName"] == "InternalFile"

    @pytest.mark.asyncio
    async def test_list_attachments(self, mock_client):
        mock_client.list_attachments.return_value = [
            {"id": "a1", "type": 1, "location": "https://example.com"},
            {"id": "a2", "type": 0, "isNotes": True},
        ]

        result = await handle_list_attachments({"brainId": "b1", "thoughtId": "t1"}, mock_client)

        assert result.data["count"] == 2
        assert [a["typeName"] for a in result.data["attachments"]] == ["URL", "File"]


class TestAttachmentContent:

    @pytest.mark.asyncio
    async def test_without_save_path_returns_size_only(self, mock_client):
        mock_client.get_attachment_content.return_value = b"\x00\x01\x02"

        result = await handle_get_attachment_content({"brainId": "b1", "attachmentId": "a1"}, mock_client)

        assert result.to_envelope() == {
            "success": True,
            "message": "Attachment content retrieved",
            "size": 3,
            "hint": CONTENT_HINT,
        }

    @pytest.mark.asyncio
    async def test_saves_to_path(self, mock_client, tmp_path):
        mock_client.get_attachment_content.return_value = b"binary-data"
        target = tmp_path / "nested" / "dir" / "out.bin"

        result = await handle_get_attachment_content(
            {"brainId": "b1", "attachmentId": "a1", "saveToPath": str(target)},
            mock_client,
        )

        assert result.success is True
        assert result.data["savedTo"] == str(target)
        assert result.data["size"] == 11
        assert target.read_bytes() == b"binary-data"

    @pytest.mark.asyncio
    async def test_text_content_is_encoded(self, mock_client):
        mock_client.get_attachment_content.return_value = "héllo"

        result = await handle_get_attachment_content({"brainId": "b1", "attachmentId": "a1"}, mock_client)

        assert result.data["size"] == len("héllo".encode("utf-8"))

    @pytest.mark.asyncio
    async def test_decoded_body_is_an_api_error(self, mock_client):
        mock_client.get_attachment_content.return_value = {"k": 1}

        result = await handle_get_attachment_content({"brainId": "b1", "attachmentId": "a1"}, mock_client)

        assert result.success is False
        assert result.to_envelope()["error_code"] == "API_ERROR"


class TestDeleteAttachment:

    @pytest.mark.asyncio
    async def test_delete(self, mock_client):
        result = await handle_delete_attachment({"brainId": "b1", "attachmentId": "a1"}, mock_client)

        mock_client.delete_attachment.assert_awaited_once_with("b1", "a1")
        assert result.data["message"] == "Attachment a1 deleted successfully"
