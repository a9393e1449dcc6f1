"""
Parameter validation for MCP tool handlers.

Validates tool arguments against the inputSchema published in the tool
registry, so the advertised schema and the enforced rules cannot drift apart.

LITE MODEL SUPPORT: smaller models often send numbers and booleans as strings
("1", "true"). Those are coerced before validation instead of rejected.
"""

from typing import Any, Dict, List, Optional, Tuple
import math
import re

from thebrain_mcp.tool_schemas import get_tool_schema

from .context import BRAIN_ID_KEY
from .error_helpers import validation_error
from .utils import ToolResult

_TRUE_STRINGS = {"true", "1", "yes", "on"}
_FALSE_STRINGS = {"false", "0", "no", "off"}


def _coerce_number(value: Any) -> Any:
    if isinstance(value, str):
        text = value.strip()
        try:
            number = float(text)
        except ValueError:
            return value
        return int(number) if number.is_integer() else number
    return value


def _coerce_boolean(value: Any) -> Any:
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
    return value


def _coerce_string(value: Any) -> Any:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value


def _check_property(name: str, value: Any, prop: Dict[str, Any]) -> Tuple[Any, Optional[str]]:
    """Coerce one value and return (value, error message or None)."""
    expected = prop.get("type")

    if expected in ("number", "integer"):
        value = _coerce_number(value)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return value, f"Parameter '{name}' must be a number, got {type(value).__name__}"
        if not math.isfinite(value):
            return value, f"Parameter '{name}' must be a finite number"
        if expected == "integer" and not float(value).is_integer():
            return value, f"Parameter '{name}' must be an integer"
        if "minimum" in prop and value < prop["minimum"]:
            return value, f"Parameter '{name}' must be >= {prop['minimum']}"
        if "maximum" in prop and value > prop["maximum"]:
            return value, f"Parameter '{name}' must be <= {prop['maximum']}"
    elif expected == "boolean":
        value = _coerce_boolean(value)
        if not isinstance(value, bool):
            return value, f"Parameter '{name}' must be a boolean (true/false)"
    elif expected == "string":
        value = _coerce_string(value)
        if not isinstance(value, str):
            return value, f"Parameter '{name}' must be a string, got {type(value).__name__}"
        pattern = prop.get("pattern")
        if pattern and not re.fullmatch(pattern, value):
            return value, f"Parameter '{name}' has invalid format '{value}' (expected pattern {pattern})"

    enum = prop.get("enum")
    if enum is not None and value not in enum:
        return value, f"Parameter '{name}' must be one of {enum}, got {value!r}"
    return value, None


def validate_and_coerce_params(
    tool_name: str,
    arguments: Dict[str, Any],
) -> Tuple[Dict[str, Any], Optional[ToolResult]]:
    """
    Coerce and validate arguments for a tool.

    Null values are treated as "not provided" and dropped. brainId presence is
    not checked here: the handler decorator reports a missing brain with its
    own error.

    Returns:
        (coerced_arguments, error_result); error_result is None when valid
    """
    schema = get_tool_schema(tool_name)
    coerced = {key: value for key, value in arguments.items() if value is not None}
    if not schema:
        return coerced, None

    properties: Dict[str, Dict[str, Any]] = schema.get("properties", {})
    errors: List[str] = []

    for required in schema.get("required", []):
        if required == BRAIN_ID_KEY:
            continue
        value = coerced.get(required)
        if value is None:
            errors.append(f"Missing required parameter: {required}")

    for key, value in list(coerced.items()):
        prop = properties.get(key)
        if prop is None:
            continue
        coerced[key], error = _check_property(key, value, prop)
        if error:
            errors.append(error)

    if errors:
        return coerced, validation_error("; ".join(errors))
    return coerced, None
