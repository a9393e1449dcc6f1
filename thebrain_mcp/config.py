"""
Server configuration.

Settings come from the process environment, optionally seeded from a .env
file in the working directory. Environment values win over .env values.

Variables:
    THEBRAIN_API_KEY           required, bearer token for api.bra.in
    THEBRAIN_DEFAULT_BRAIN_ID  optional, initial active brain
    THEBRAIN_API_BASE_URL      optional, defaults to https://api.bra.in
    THEBRAIN_HTTP_TIMEOUT      optional, seconds per HTTP request (default 60)
    THEBRAIN_TOOL_TIMEOUT      optional, overrides every tool's time budget
    THEBRAIN_LOG_LEVEL         optional, defaults to INFO
"""

import os
from typing import Mapping, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError as PydanticValidationError, field_validator

from thebrain_mcp.errors import ConfigurationError

DEFAULT_BASE_URL = "https://api.bra.in"
DEFAULT_HTTP_TIMEOUT = 60.0


class ServerSettings(BaseModel):
    """Validated runtime settings for the MCP server."""

    api_key: str = Field(description="TheBrain API key")
    default_brain_id: Optional[str] = Field(default=None, description="Brain used when a call omits brainId")
    base_url: str = Field(default=DEFAULT_BASE_URL)
    http_timeout: float = Field(default=DEFAULT_HTTP_TIMEOUT, gt=0)
    tool_timeout: Optional[float] = Field(default=None, gt=0)
    log_level: str = Field(default="INFO")

    @field_validator("api_key")
    @classmethod
    def api_key_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("THEBRAIN_API_KEY must not be empty")
        return value

    @field_validator("default_brain_id")
    @classmethod
    def blank_brain_is_none(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not value.strip():
            return None
        return value

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @field_validator("log_level")
    @classmethod
    def normalize_level(cls, value: str) -> str:
        return value.strip().upper() or "INFO"


def load_settings(env: Optional[Mapping[str, str]] = None, dotenv_path: Optional[str] = None) -> ServerSettings:
    """
    Build ServerSettings from the environment.

    Args:
        env: Mapping to read instead of os.environ (tests pass a dict here;
            no .env file is loaded in that case)
        dotenv_path: Explicit .env location, default is discovery from cwd

    Raises:
        ConfigurationError: API key missing or a value fails validation
    """
    if env is None:
        load_dotenv(dotenv_path=dotenv_path, override=False)
        env = os.environ

    api_key = env.get("THEBRAIN_API_KEY")
    if not api_key:
        raise ConfigurationError("THEBRAIN_API_KEY environment variable is required")

    values = {
        "api_key": api_key,
        "default_brain_id": env.get("THEBRAIN_DEFAULT_BRAIN_ID"),
    }
    optional = {
        "base_url": "THEBRAIN_API_BASE_URL",
        "http_timeout": "THEBRAIN_HTTP_TIMEOUT",
        "tool_timeout": "THEBRAIN_TOOL_TIMEOUT",
        "log_level": "THEBRAIN_LOG_LEVEL",
    }
    for field_name, var in optional.items():
        raw = env.get(var)
        if raw is not None and raw.strip():
            values[field_name] = raw.strip()

    try:
        return ServerSettings(**values)
    except PydanticValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e
