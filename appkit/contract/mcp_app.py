"""
Base contract for apps backed by a remote MCP server.

Tools are not declared statically: ``get_tools`` asks the server through
``tools/list`` and ``call_tool`` forwards to ``tools/call`` once the name has
been matched exactly against that list.
"""

import logging
from typing import Any, Dict, Optional

from pydantic import ValidationError

from appkit.core.auth_headers import resolve_auth_headers
from appkit.core.exceptions import ToolExecutionError, ToolNotFoundError, UpstreamError
from appkit.core.http_client import McpClient
from appkit.models.descriptor import BASE_APP, extend
from appkit.models.tool import ToolSpec

logger = logging.getLogger(__name__)

MCP_AUTH_SCHEMAS: Dict[str, Any] = {
    "none": {
        "type": "object",
        "additionalProperties": False
    },
    "basic": {
        "type": "object",
        "properties": {
            "username": {
                "type": "string",
                "description": "The username to authenticate with the MCP server",
                "@title": "Username",
                "@placeholder": "Add your username"
            },
            "password": {
                "type": "string",
                "description": "The password to authenticate with the MCP server",
                "@title": "Password",
                "@placeholder": "Add your password",
                "@sensitive": True
            }
        },
        "required": ["username", "password"],
        "additionalProperties": False
    },
    "bearer": {
        "type": "object",
        "properties": {
            "token": {
                "type": "string",
                "description": "The token to authenticate with the MCP server",
                "@title": "Token",
                "@placeholder": "Add your access token",
                "@sensitive": True
            }
        },
        "required": ["token"],
        "additionalProperties": False
    },
    "headers": {
        "type": "array",
        "items": {
            "type": "object",
            "properties": {
                "key": {
                    "type": "string",
                    "description": "The name of the header to authenticate with the MCP server",
                    "pattern": "^[!#$%&'*+\\-.^_`|~0-9a-zA-Z]+$",
                    "@title": "Header",
                    "@placeholder": "Add your header name"
                },
                "value": {
                    "type": "string",
                    "description": "The value of the header to authenticate with the MCP server",
                    "@title": "Header",
                    "@placeholder": "Add your header value",
                    "@sensitive": True
                }
            },
            "additionalProperties": False
        }
    }
}


def get_auth_headers(auth_type: Optional[str], auth_params: Any = None) -> Dict[str, str]:
    """Headers for one of the none/basic/bearer/headers auth types."""
    return resolve_auth_headers(auth_type, auth_params)


def build_client(url: str, headers: Optional[Dict[str, str]] = None, **kwargs) -> McpClient:
    """Client for the MCP server at ``url``."""
    return McpClient(url=url, headers=headers, **kwargs)


def get_client(config: Dict[str, Any], auth_type: Optional[str] = None, auth_params: Any = None, **kwargs) -> McpClient:
    return build_client(config["url"], get_auth_headers(auth_type, auth_params), **kwargs)


def _to_tool_spec(tool: Dict[str, Any]) -> ToolSpec:
    name = tool.get("name")
    title = tool.get("title") or (tool.get("annotations") or {}).get("title") or name
    spec = {
        "name": name,
        "title": title or "",
        "description": tool.get("description") or title or name,
    }
    if tool.get("inputSchema"):
        spec["inputSchema"] = tool["inputSchema"]
    if tool.get("outputSchema"):
        spec["outputSchema"] = tool["outputSchema"]
    return ToolSpec.model_validate(spec)


async def get_tools(client: Optional[McpClient] = None, **params) -> Dict[str, ToolSpec]:
    """
    List the tools the MCP server exposes.

    Without a client there is nothing to ask, so no tools are listed.

    Raises:
        UpstreamError: If the server cannot be reached or replies with
            something other than a tool list
    """
    if client is None:
        return {}

    tools: Dict[str, ToolSpec] = {}
    cursor = None
    while True:
        result = await client.request("tools/list", {"cursor": cursor} if cursor else None)
        if not isinstance(result, dict) or not isinstance(result.get("tools"), list):
            raise UpstreamError("MCP server returned a malformed tool list", data=result)

        for tool in result["tools"]:
            try:
                spec = _to_tool_spec(tool if isinstance(tool, dict) else {})
            except ValidationError as e:
                raise UpstreamError(f"MCP server returned an invalid tool definition: {e}", data=tool) from e
            tools[spec.name] = spec

        cursor = result.get("nextCursor")
        if not cursor:
            break

    logger.info(f"MCP server at {client.url} lists {len(tools)} tool(s)")
    return tools


async def call_tool(
    client: Optional[McpClient] = None,
    tool_name: str = "",
    args: Optional[Dict[str, Any]] = None,
    **params
) -> Any:
    """
    Invoke a tool on the MCP server.

    Raises:
        ToolNotFoundError: If the server does not list a tool with exactly this name
        UpstreamError: If the call fails in transport or at the server
        ToolExecutionError: If the server reports the tool itself failed
    """
    tools = await get_tools(client=client)
    if tool_name not in tools:
        raise ToolNotFoundError(tool_name)

    try:
        result = await client.request("tools/call", {"name": tool_name, "arguments": dict(args or {})})
    except UpstreamError as e:
        e.with_tool(tool_name)
        raise

    if isinstance(result, dict) and result.get("isError"):
        texts = [item.get("text", "") for item in result.get("content") or [] if isinstance(item, dict)]
        message = "; ".join(text for text in texts if text) or "tool reported an error"
        raise ToolExecutionError(f"{tool_name} failed: {message}", tool_name=tool_name)

    return result


MCP_APP = extend(
    BASE_APP,
    name="MCP App",
    id="mcp-app",
    features=("toolkit",),
    categories=("custom-tool",),
    auth_schemas=MCP_AUTH_SCHEMAS,
    get_client=get_client,
    get_tools=get_tools,
    call_tool=call_tool,
)
