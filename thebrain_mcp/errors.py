"""
Exception taxonomy.

- ValidationError: raised locally, the request never reaches TheBrain
- BrainAPIError: non-2xx status or transport failure from the remote API
- ConfigurationError: unusable startup configuration
"""

from typing import Optional


class ValidationError(ValueError):
    """Missing or malformed tool arguments."""


class BrainAPIError(Exception):
    """A TheBrain API call failed."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ConfigurationError(Exception):
    """Required configuration is missing or invalid."""
