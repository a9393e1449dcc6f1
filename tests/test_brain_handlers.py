"""
Tests for thebrain_mcp/mcp_handlers/brains.py.
"""

import pytest

from thebrain_mcp.errors import BrainAPIError
from thebrain_mcp.mcp_handlers.brains import handle_get_brain, handle_list_brains, handle_set_active_brain


class TestBrains:

    @pytest.mark.asyncio
    async def test_list_brains_keeps_summary_fields(self, mock_client):
        mock_client.list_brains.return_value = [
            {"id": "b1", "name": "Work", "homeThoughtId": "h1", "ownerId": "u1"},
            {"id": "b2", "name": "Home", "homeThoughtId": "h2"},
        ]

        result = await handle_list_brains({}, mock_client)

        assert result.data["brains"] == [
            {"id": "b1", "name": "Work", "homeThoughtId": "h1"},
            {"id": "b2", "name": "Home", "homeThoughtId": "h2"},
        ]

    @pytest.mark.asyncio
    async def test_list_brains_failure(self, mock_client):
        mock_client.list_brains.side_effect = BrainAPIError("HTTP 401: Unauthorized", status_code=401)

        result = await handle_list_brains({}, mock_client)

        assert result.success is False
        assert result.error == "HTTP 401: Unauthorized"
        assert result.data["status_code"] == 401

    @pytest.mark.asyncio
    async def test_get_brain(self, mock_client):
        mock_client.get_brain.return_value = {"id": "b1", "name": "Work", "homeThoughtId": "h1"}

        result = await handle_get_brain({"brainId": "b1"}, mock_client)

        assert result.data["brain"] == {"id": "b1", "name": "Work", "homeThoughtId": "h1"}


class TestSetActiveBrain:

    @pytest.mark.asyncio
    async def test_verifies_brain_exists(self, mock_client):
        mock_client.get_brain.return_value = {"id": "b1", "name": "Work", "homeThoughtId": "h1"}

        result = await handle_set_active_brain({"brainId": "b1"}, mock_client)

        mock_client.get_brain.assert_awaited_once_with("b1")
        assert result.data["message"] == "Active brain set to b1"
        assert result.data["brain"]["name"] == "Work"

    @pytest.mark.asyncio
    async def test_unknown_brain(self, mock_client):
        mock_client.get_brain.side_effect = BrainAPIError("HTTP 404: Not Found", status_code=404)

        result = await handle_set_active_brain({"brainId": "nope"}, mock_client)

        assert result.success is False
        assert result.error == "Failed to set active brain: HTTP 404: Not Found"
