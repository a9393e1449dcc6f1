"""
Session Context

Holds the active brain: the brain id injected into tool calls that omit
`brainId`. One SessionContext is owned by each ToolDispatcher and passed by
reference, so tests can run several dispatchers with independent contexts.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

BRAIN_ID_KEY = "brainId"


@dataclass
class SessionContext:
    """Mutable per-session state shared across tool calls."""
    active_brain_id: Optional[str] = None

    def resolve_brain_id(self, arguments: Dict[str, Any]) -> Optional[str]:
        """Explicit brainId if present, otherwise the active brain."""
        return arguments.get(BRAIN_ID_KEY) or self.active_brain_id

    def inject_brain_id(self, arguments: Dict[str, Any]) -> Dict[str, Any]:
        """
        Fill in `brainId` from the active brain when the caller left it out.

        Mutates and returns `arguments`.
        """
        brain_id = self.resolve_brain_id(arguments)
        if brain_id:
            arguments[BRAIN_ID_KEY] = brain_id
        return arguments

    def set_active_brain(self, brain_id: str) -> None:
        self.active_brain_id = brain_id
