"""
Base contracts concrete apps are built from.
"""

from appkit.models.descriptor import BASE_APP, AppDescriptor, extend
from .mcp_app import MCP_APP, MCP_AUTH_SCHEMAS

__all__ = ["AppDescriptor", "BASE_APP", "MCP_APP", "MCP_AUTH_SCHEMAS", "extend"]
