"""
Pytest configuration and fixtures for thebrain-mcp tests.
"""
import itertools
import sys
from pathlib import Path
from typing import Any, Dict
from unittest.mock import AsyncMock

import pytest

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from thebrain_mcp.api_client import BrainAPIClient
from thebrain_mcp.errors import BrainAPIError
from thebrain_mcp.mcp_handlers import SessionContext, ToolDispatcher
from thebrain_mcp.mcp_handlers.decorators import set_timeout_override


class FakeBrainClient:
    """
    In-memory stand-in for BrainAPIClient.

    Stores thoughts and links per brain and applies json-patch style updates,
    so create-then-read flows can be exercised through the dispatcher.
    """

    def __init__(self, brains=None):
        self.brains: Dict[str, Dict[str, Any]] = brains or {
            "brain-1": {"id": "brain-1", "name": "Research", "homeThoughtId": "home-1"},
        }
        self.thoughts: Dict[str, Dict[str, Any]] = {}
        self.links: Dict[str, Dict[str, Any]] = {}
        self.calls = []
        self._ids = itertools.count(1)

    def _require_brain(self, brain_id):
        if brain_id not in self.brains:
            raise BrainAPIError("HTTP 404: Not Found", status_code=404)

    def _new_id(self, prefix):
        return f"{prefix}-{next(self._ids)}"

    async def list_brains(self):
        self.calls.append(("list_brains",))
        return list(self.brains.values())

    async def get_brain(self, brain_id):
        self.calls.append(("get_brain", brain_id))
        self._require_brain(brain_id)
        return self.brains[brain_id]

    async def create_thought(self, brain_id, thought):
        self.calls.append(("create_thought", brain_id, dict(thought)))
        self._require_brain(brain_id)
        thought_id = self._new_id("thought")
        stored = {"id": thought_id, "brainId": brain_id, "foregroundColor": None, "backgroundColor": None}
        stored.update({k: v for k, v in thought.items() if k not in ("sourceThoughtId", "relation")})
        self.thoughts[thought_id] = stored
        return {"id": thought_id}

    async def update_thought(self, brain_id, thought_id, updates):
        self.calls.append(("update_thought", brain_id, thought_id, dict(updates)))
        if thought_id not in self.thoughts:
            raise BrainAPIError("HTTP 404: Not Found", status_code=404)
        self.thoughts[thought_id].update(updates)
        return ""

    async def get_thought(self, brain_id, thought_id):
        self.calls.append(("get_thought", brain_id, thought_id))
        if thought_id not in self.thoughts:
            raise BrainAPIError("HTTP 404: Not Found", status_code=404)
        return dict(self.thoughts[thought_id])

    async def create_link(self, brain_id, link):
        self.calls.append(("create_link", brain_id, dict(link)))
        self._require_brain(brain_id)
        link_id = self._new_id("link")
        self.links[link_id] = {
            "id": link_id,
            "brainId": brain_id,
            "direction": 0,
            "meaning": 1,
            "kind": 1,
            **link,
        }
        return {"id": link_id}

    async def update_link(self, brain_id, link_id, updates):
        self.calls.append(("update_link", brain_id, link_id, dict(updates)))
        if link_id not in self.links:
            raise BrainAPIError("HTTP 404: Not Found", status_code=404)
        self.links[link_id].update(updates)
        return ""

    async def get_link(self, brain_id, link_id):
        self.calls.append(("get_link", brain_id, link_id))
        if link_id not in self.links:
            raise BrainAPIError("HTTP 404: Not Found", status_code=404)
        return dict(self.links[link_id])


@pytest.fixture(autouse=True)
def _reset_timeout_override():
    """Keep THEBRAIN_TOOL_TIMEOUT overrides from leaking between tests."""
    set_timeout_override(None)
    yield
    set_timeout_override(None)


@pytest.fixture
def mock_client():
    """AsyncMock with the BrainAPIClient surface; every method is awaitable."""
    return AsyncMock(spec=BrainAPIClient)


@pytest.fixture
def context():
    return SessionContext()


@pytest.fixture
def dispatcher(mock_client, context):
    return ToolDispatcher(mock_client, context)


@pytest.fixture
def fake_client():
    return FakeBrainClient()


@pytest.fixture
def fake_dispatcher(fake_client):
    return ToolDispatcher(fake_client, SessionContext())
