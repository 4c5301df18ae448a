"""
Core module for appkit.

This module contains the foundational components including configuration,
logging, exceptions, auth header resolution, client handles and the tool
registry.
"""

from .config import Settings, get_settings
from .exceptions import (
    AppKitException,
    ContractViolationError,
    ToolNotFoundError,
    UpstreamError,
    ToolExecutionError,
    AppLoadError,
    SchemaValidationError,
    ConfigurationError,
)
from .logging import setup_logging
from .auth_headers import (
    AuthVariant,
    NoAuth,
    BasicAuth,
    BearerAuth,
    HeadersAuth,
    UnrecognizedAuth,
    ResolvedAuth,
    parse_auth,
    resolve,
    resolve_auth_headers,
)
from .http_client import AppClient, ClientResponse, McpClient
from .tool_registry import ToolRegistry

__all__ = [
    # Configuration
    "Settings",
    "get_settings",
    # Exceptions
    "AppKitException",
    "ContractViolationError",
    "ToolNotFoundError",
    "UpstreamError",
    "ToolExecutionError",
    "AppLoadError",
    "SchemaValidationError",
    "ConfigurationError",
    # Logging
    "setup_logging",
    # Auth
    "AuthVariant",
    "NoAuth",
    "BasicAuth",
    "BearerAuth",
    "HeadersAuth",
    "UnrecognizedAuth",
    "ResolvedAuth",
    "parse_auth",
    "resolve",
    "resolve_auth_headers",
    # Clients
    "AppClient",
    "ClientResponse",
    "McpClient",
    # Tools
    "ToolRegistry",
]
