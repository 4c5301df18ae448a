"""
Custom exceptions for appkit.

This module defines the error taxonomy of the integration app contract.
Every exception carries an error type, a status code and structured
details so hosts can present failures per call.
"""

from typing import Any, Dict, List, Optional


class AppKitException(Exception):
    """
    Base exception class for appkit.

    All custom exceptions should inherit from this class to ensure
    consistent error handling and logging.
    """

    def __init__(
        self,
        message: str,
        error_type: str = "appkit_error",
        status_code: Optional[int] = 500,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.error_type = error_type
        self.status_code = status_code
        self.details = details or {}


class ContractViolationError(AppKitException):
    """Exception raised when a conformance report is treated as fatal."""

    def __init__(self, message: str, violations: Optional[List[Dict[str, Any]]] = None, **kwargs):
        super().__init__(
            message,
            error_type="contract_violation",
            status_code=422,
            **kwargs
        )
        self.violations = violations or []
        self.details["violations"] = self.violations


class ToolNotFoundError(AppKitException):
    """Exception raised when a tool name is not registered by an app."""

    def __init__(self, tool_name: str, **kwargs):
        super().__init__(
            f"Tool {tool_name} not found",
            error_type="tool_not_found",
            status_code=404,
            **kwargs
        )
        self.tool_name = tool_name
        self.details["tool_name"] = tool_name


class UpstreamError(AppKitException):
    """
    Exception raised when the integrated service fails a request.

    ``status_code`` is the upstream HTTP status (or JSON-RPC error code),
    and is None when the request never produced a response.
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        data: Any = None,
        tool_name: Optional[str] = None,
        **kwargs
    ):
        super().__init__(
            message,
            error_type="upstream_error",
            status_code=status_code,
            **kwargs
        )
        self.data = data
        if tool_name:
            self.with_tool(tool_name)

    @property
    def tool_name(self) -> Optional[str]:
        return self.details.get("tool_name")

    def with_tool(self, tool_name: str) -> "UpstreamError":
        """Attach the dispatching tool name, keeping the error identity."""
        self.details["tool_name"] = tool_name
        return self


class ToolExecutionError(AppKitException):
    """Exception raised when a tool handler fails for a non-transport reason."""

    def __init__(self, message: str, tool_name: Optional[str] = None, **kwargs):
        super().__init__(
            message,
            error_type="tool_execution_error",
            status_code=500,
            **kwargs
        )
        self.tool_name = tool_name
        if tool_name:
            self.details["tool_name"] = tool_name


class AppLoadError(AppKitException):
    """Exception raised when an app directory cannot be loaded."""

    def __init__(self, message: str, path: Optional[str] = None, **kwargs):
        super().__init__(
            message,
            error_type="app_load_error",
            status_code=400,
            **kwargs
        )
        if path:
            self.details["path"] = path


class SchemaValidationError(AppKitException):
    """Exception raised when data does not satisfy a declared JSON schema."""

    def __init__(self, message: str, errors: Optional[List[str]] = None, **kwargs):
        super().__init__(
            message,
            error_type="schema_validation_error",
            status_code=422,
            **kwargs
        )
        self.errors = errors or []
        self.details["errors"] = self.errors


class ConfigurationError(AppKitException):
    """Exception raised when configuration is invalid."""

    def __init__(self, message: str, **kwargs):
        super().__init__(
            message,
            error_type="configuration_error",
            status_code=500,
            **kwargs
        )
