"""
Client handles returned by app client factories.

This module provides the two client shapes apps build on: a fetch-style
``AppClient`` bound to a base URL and a fixed set of headers, and an
``McpClient`` that speaks JSON-RPC to a remote MCP server. Both are cheap to
construct and perform no network I/O until a request is issued.
"""

import itertools
import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import httpx

from .config import get_settings
from .exceptions import ConfigurationError, UpstreamError

logger = logging.getLogger(__name__)


@dataclass
class ClientResponse:
    """Parsed response from an upstream service."""
    data: Any
    status_code: int = 200


def _parse_body(response: httpx.Response) -> Any:
    """Parse a response body as JSON, falling back to text."""
    if not response.content:
        return None
    try:
        return response.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return response.text


class AppClient:
    """
    Fetch-style client bound to a base URL and a set of headers.

    Paths are resolved against the base URL the way URL references are, so
    an absolute path such as ``/ping`` replaces the base URL's path.
    """

    def __init__(
        self,
        base_url: str,
        headers: Optional[Dict[str, str]] = None,
        timeout: Optional[float] = None,
        max_redirects: Optional[int] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        """
        Initialize the client.

        Args:
            base_url: Base address requests are resolved against
            headers: Headers sent with every request
            timeout: Request timeout in seconds (defaults to settings)
            max_redirects: Maximum number of redirects to follow (defaults to settings)
            transport: Optional httpx transport, mainly for tests
        """
        if not base_url:
            raise ConfigurationError("A base URL is required to build an app client")

        settings = get_settings()
        self.base_url = httpx.URL(base_url)
        self.headers = dict(headers or {})
        self.timeout = timeout if timeout is not None else settings.HTTP_TIMEOUT_SECONDS
        self.max_redirects = max_redirects if max_redirects is not None else settings.HTTP_MAX_REDIRECTS
        self.transport = transport

    def build_url(self, path: str) -> httpx.URL:
        """Resolve a request path against the base URL."""
        return self.base_url.join(path)

    async def request(self, method: str, path: str, **kwargs) -> ClientResponse:
        """
        Issue a request and parse the response.

        Args:
            method: HTTP method
            path: Path or URL reference resolved against the base URL
            **kwargs: Additional arguments passed to httpx

        Returns:
            ClientResponse with the parsed body

        Raises:
            UpstreamError: On transport failure or a non-2xx response
        """
        url = self.build_url(path)
        headers = {**self.headers, **(kwargs.pop("headers", None) or {})}

        logger.info(f"Issuing {method} request to {url}")

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                follow_redirects=True,
                max_redirects=self.max_redirects,
                transport=self.transport
            ) as client:
                response = await client.request(method, url, headers=headers, **kwargs)
        except httpx.HTTPError as e:
            logger.error(f"HTTP error for {method} {path}: {e}")
            raise UpstreamError(f"{method} {path} failed: {e}") from e

        data = _parse_body(response)

        if not response.is_success:
            logger.warning(f"{method} {path} returned {response.status_code}")
            raise UpstreamError(
                f"{method} {path} failed with status {response.status_code}",
                status_code=response.status_code,
                data=data
            )

        logger.info(f"Request completed: {response.status_code} {response.reason_phrase}")
        return ClientResponse(data=data, status_code=response.status_code)

    async def get(self, path: str, **kwargs) -> ClientResponse:
        """Issue a GET request."""
        return await self.request("GET", path, **kwargs)

    async def post(self, path: str, **kwargs) -> ClientResponse:
        """Issue a POST request."""
        return await self.request("POST", path, **kwargs)

    async def put(self, path: str, **kwargs) -> ClientResponse:
        """Issue a PUT request."""
        return await self.request("PUT", path, **kwargs)

    async def patch(self, path: str, **kwargs) -> ClientResponse:
        """Issue a PATCH request."""
        return await self.request("PATCH", path, **kwargs)

    async def delete(self, path: str, **kwargs) -> ClientResponse:
        """Issue a DELETE request."""
        return await self.request("DELETE", path, **kwargs)


class McpClient:
    """
    JSON-RPC client for a remote MCP server.

    Each call posts a single JSON-RPC 2.0 request to the server URL with the
    bound headers and returns the ``result`` member of the reply.
    """

    def __init__(
        self,
        url: str,
        headers: Optional[Dict[str, str]] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        if not url:
            raise ConfigurationError("A server URL is required to build an MCP client")

        self.url = url
        self.headers = dict(headers or {})
        self.timeout = timeout if timeout is not None else get_settings().HTTP_TIMEOUT_SECONDS
        self.transport = transport
        self._ids = itertools.count(1)

    async def request(self, method: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """
        Send a JSON-RPC request.

        Args:
            method: JSON-RPC method name (e.g. "tools/list")
            params: Method parameters

        Returns:
            The ``result`` member of the reply

        Raises:
            UpstreamError: On transport failure, a non-2xx response or a JSON-RPC error
        """
        payload: Dict[str, Any] = {"jsonrpc": "2.0", "id": next(self._ids), "method": method}
        if params is not None:
            payload["params"] = params

        headers = {
            "Accept": "application/json",
            "Content-Type": "application/json",
            **self.headers
        }

        logger.info(f"Calling MCP method '{method}' on {self.url}")

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(self.url, json=payload, headers=headers)
        except httpx.HTTPError as e:
            logger.error(f"HTTP error calling MCP method '{method}': {e}")
            raise UpstreamError(f"MCP request '{method}' failed: {e}") from e

        body = _parse_body(response)

        if not response.is_success:
            raise UpstreamError(
                f"MCP request '{method}' failed with status {response.status_code}",
                status_code=response.status_code,
                data=body
            )

        if not isinstance(body, dict):
            raise UpstreamError(
                f"MCP request '{method}' returned a malformed reply",
                status_code=response.status_code,
                data=body
            )

        error = body.get("error")
        if error:
            error = error if isinstance(error, dict) else {"message": str(error)}
            raise UpstreamError(
                f"MCP request '{method}' failed: {error.get('message', 'unknown error')}",
                status_code=error.get("code"),
                data=error.get("data")
            )

        return body.get("result")
