"""
TheBrain MCP Server

Exposes TheBrain's REST API as Model Context Protocol tools.
"""

__version__ = "1.0.0"
