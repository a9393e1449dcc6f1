"""
MCP Tool Decorators - Auto-registration and the handler error boundary.

Every tool handler is an `async (arguments, client) -> ToolResult` function
decorated with @mcp_tool. The wrapper guarantees a handler never raises:
missing brain ids, validation failures, remote API errors, timeouts and
unexpected exceptions all come back as failure results.
"""

from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List, Optional
from functools import wraps
import asyncio
import time

from thebrain_mcp.errors import BrainAPIError, ValidationError
from thebrain_mcp.logging_utils import get_logger

from .context import BRAIN_ID_KEY
from .error_helpers import api_error, brain_required_error, system_error, timeout_error, validation_error
from .utils import ToolResult, success_response

logger = get_logger(__name__)

DEFAULT_TIMEOUT = 30.0

Handler = Callable[[Dict[str, Any], Any], Awaitable[ToolResult]]


# --- Unified Tool Registry ---

@dataclass
class ToolDefinition:
    """Single source of truth for a registered MCP tool."""
    name: str
    handler: Handler
    timeout: float = DEFAULT_TIMEOUT
    description: str = ""
    requires_brain: bool = True

_TOOL_DEFINITIONS: Dict[str, ToolDefinition] = {}

# Set from THEBRAIN_TOOL_TIMEOUT; replaces every per-tool timeout when set.
_timeout_override: Optional[float] = None


def set_timeout_override(seconds: Optional[float]) -> None:
    global _timeout_override
    _timeout_override = seconds


def _effective_timeout(timeout: float) -> float:
    return _timeout_override if _timeout_override else timeout


def mcp_tool(
    name: Optional[str] = None,
    timeout: float = DEFAULT_TIMEOUT,
    description: Optional[str] = None,
    requires_brain: bool = True,
    register: bool = True,
):
    """
    Decorator for MCP tool handlers with auto-registration and an error boundary.

    Provides:
    - "Brain ID is required" guard (no remote call is made without a brain)
    - Timeout protection, with a warning when a call uses >80% of its budget
    - Conversion of ValidationError / BrainAPIError / any other exception
      into a failure ToolResult
    - Plain dict returns are promoted to success results
    - Tool registration for dispatch

    Usage:
        @mcp_tool("get_thought")
        async def handle_get_thought(arguments, client) -> ToolResult:
            ...

        @mcp_tool("list_brains", requires_brain=False)
        async def handle_list_brains(arguments, client) -> ToolResult:
            ...

    Args:
        name: Tool name (defaults to function name without 'handle_' prefix)
        timeout: Timeout in seconds
        description: Tool description (defaults to first docstring line)
        requires_brain: Fail fast when no brainId is resolvable
        register: If False, the tool is not exposed through the registry
    """
    def decorator(func: Callable) -> Handler:
        tool_name = name or func.__name__.replace('handle_', '')
        tool_description = description or (func.__doc__ and func.__doc__.strip().split('\n')[0].strip()) or ""

        @wraps(func)
        async def wrapper(arguments: Dict[str, Any], client: Any) -> ToolResult:
            if requires_brain and not arguments.get(BRAIN_ID_KEY):
                return brain_required_error()

            budget = _effective_timeout(timeout)
            start_time = time.time()
            try:
                result = await asyncio.wait_for(func(arguments, client), timeout=budget)
            except asyncio.TimeoutError:
                logger.warning(f"Tool '{tool_name}' timed out after {budget}s")
                return timeout_error(tool_name, budget)
            except ValidationError as e:
                return validation_error(str(e))
            except BrainAPIError as e:
                logger.info(f"Tool '{tool_name}' remote call failed: {e}")
                return api_error(str(e), e.status_code)
            except Exception as e:
                logger.error(f"Tool '{tool_name}' error: {e}", exc_info=True)
                return system_error(tool_name, e)

            elapsed = time.time() - start_time
            if elapsed > budget * 0.8:
                logger.warning(
                    f"Tool '{tool_name}' took {elapsed:.2f}s "
                    f"({elapsed/budget*100:.1f}% of {budget}s timeout)"
                )
            if isinstance(result, dict):
                result = success_response(result)
            return result

        if register:
            _TOOL_DEFINITIONS[tool_name] = ToolDefinition(
                name=tool_name,
                handler=wrapper,
                timeout=timeout,
                description=tool_description,
                requires_brain=requires_brain,
            )

        return wrapper
    return decorator


def get_tool_registry() -> Dict[str, Handler]:
    """Get the registered tool handlers."""
    return {name: td.handler for name, td in _TOOL_DEFINITIONS.items()}


def get_tool_definition(tool_name: str) -> Optional[ToolDefinition]:
    """Get the full ToolDefinition for a registered tool."""
    return _TOOL_DEFINITIONS.get(tool_name)


def get_tool_timeout(tool_name: str) -> float:
    """Get the effective timeout for a tool."""
    td = _TOOL_DEFINITIONS.get(tool_name)
    return _effective_timeout(td.timeout if td else DEFAULT_TIMEOUT)


def list_registered_tools() -> List[str]:
    """All registered tool names, sorted."""
    return sorted(_TOOL_DEFINITIONS.keys())
