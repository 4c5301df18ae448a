"""
appkit: the integration app contract.

Integration apps are self-describing modules that declare their
configuration and authentication requirements, build an authenticated
client and expose invocable tools. This package provides:

- The app descriptor record and the base contracts apps extend
- Auth header resolution for the none/basic/bearer/headers auth types
- Client handles for plain HTTP services and MCP servers
- A tool registry implementing exact-name dispatch
- A conformance harness that checks app directories against the contract
"""

__version__ = "0.1.0"

from .core.auth_headers import resolve_auth_headers
from .models.descriptor import BASE_APP, AppDescriptor, extend
from .models.tool import ToolSpec

__all__ = [
    "AppDescriptor",
    "BASE_APP",
    "ToolSpec",
    "extend",
    "resolve_auth_headers",
    "__version__",
]
