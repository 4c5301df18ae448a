"""
Basic integration: a fetch-style client and a single ``ping`` tool.
"""

from typing import Any, Dict, Optional

from appkit.core.auth_headers import resolve_auth_headers
from appkit.core.exceptions import UpstreamError
from appkit.core.http_client import AppClient
from appkit.core.tool_registry import ToolRegistry
from appkit.models.descriptor import BASE_APP, extend
from appkit.models.tool import ToolSpec

CONFIG_SCHEMA = {
    "type": "object",
    "properties": {
        "url": {
            "type": "string",
            "@title": "Server URL",
            "@placeholder": "https://api.your-service.com"
        }
    },
    "required": ["url"],
    "additionalProperties": False
}

AUTH_SCHEMAS = {
    "apiKey": {
        "type": "object",
        "properties": {
            "key": {
                "type": "string",
                "@title": "API Key",
                "@sensitive": True
            }
        },
        "required": ["key"],
        "additionalProperties": False
    }
}


def get_client(config: Dict[str, Any], auth_type: Optional[str] = None, auth_params: Any = None, **kwargs) -> AppClient:
    headers = {"Accept": "application/json"}
    if auth_type == "apiKey":
        headers.update(resolve_auth_headers("bearer", {"token": (auth_params or {}).get("key")}))

    return AppClient(config["url"], headers=headers, **kwargs)


tools = ToolRegistry()


@tools.tool(ToolSpec(
    name="ping",
    title="Ping Service",
    description="Checks connectivity to the service",
    inputSchema={
        "type": "object",
        "properties": {},
        "additionalProperties": False
    },
    outputSchema={
        "type": "object",
        "properties": {
            "status": {"type": "string"}
        }
    }
))
async def ping(client: AppClient, args: Dict[str, Any]) -> Any:
    try:
        response = await client.get("/ping")
    except UpstreamError as e:
        raise UpstreamError(f"Ping failed: {e.message}", status_code=e.status_code, data=e.data) from e
    return response.data


app = extend(
    BASE_APP,
    name="Basic Integration",
    categories=["messaging"],
    features=["toolkit"],
    ui_labels=[],
    singleton=True,
    config_schema=CONFIG_SCHEMA,
    auth_schemas=AUTH_SCHEMAS,
    get_client=get_client,
    get_tools=tools.get_tools,
    call_tool=tools.call_tool,
)
