"""
Custom MCP server: connects to any MCP server over HTTP.
"""

from typing import Any, Dict, Optional

from appkit.contract.mcp_app import MCP_APP, build_client, get_auth_headers
from appkit.core.http_client import McpClient
from appkit.models.descriptor import extend

CONFIG_SCHEMA = {
    "type": "object",
    "properties": {
        "url": {
            "type": "string",
            "@title": "URL",
            "@placeholder": "https://mcp.example.com"
        }
    },
    "required": ["url"],
    "additionalProperties": False
}


def get_client(config: Dict[str, Any], auth_type: Optional[str] = None, auth_params: Any = None, **kwargs) -> McpClient:
    return build_client(config["url"], get_auth_headers(auth_type, auth_params), **kwargs)


app = extend(
    MCP_APP,
    id="custom-mcp-server",
    name="MCP Server",
    features=["toolkit"],
    categories=["custom-tool"],
    ui_labels=[],
    singleton=False,
    config_schema=CONFIG_SCHEMA,
    get_client=get_client,
)
