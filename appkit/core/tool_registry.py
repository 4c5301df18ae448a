"""
Tool registry and dispatcher for integration apps.

Apps register each tool's spec together with the coroutine that runs it.
The registry then provides the ``get_tools`` / ``call_tool`` pair of the
app contract: exact-name dispatch, ``ToolNotFoundError`` for unknown names,
and upstream failures re-raised with the tool name attached.
"""

import datetime
import logging
from typing import Any, Awaitable, Callable, Dict, List, Optional

from appkit.models.tool import ToolSpec
from .exceptions import AppKitException, ToolExecutionError, ToolNotFoundError, UpstreamError

logger = logging.getLogger(__name__)

ToolHandler = Callable[[Any, Dict[str, Any]], Awaitable[Any]]


class ToolRegistry:
    """Registry of the tools one app provides."""

    def __init__(self):
        """Initialize an empty registry."""
        self._tools: Dict[str, ToolSpec] = {}
        self._handlers: Dict[str, ToolHandler] = {}

    def register(self, spec: ToolSpec, handler: ToolHandler) -> None:
        """Register a tool and the coroutine that executes it."""
        if spec.name in self._tools:
            raise ValueError(f"Tool '{spec.name}' is already registered")
        self._tools[spec.name] = spec
        self._handlers[spec.name] = handler

    def tool(self, spec: ToolSpec) -> Callable[[ToolHandler], ToolHandler]:
        """Decorator form of ``register``."""
        def decorator(handler: ToolHandler) -> ToolHandler:
            self.register(spec, handler)
            return handler
        return decorator

    def list_tools(self) -> List[ToolSpec]:
        """Get all registered tools."""
        return list(self._tools.values())

    def get_tool(self, name: str) -> ToolSpec:
        """Get a specific tool by name."""
        if name not in self._tools:
            raise ToolNotFoundError(name)
        return self._tools[name]

    def has_tool(self, name: str) -> bool:
        """Check if a tool exists."""
        return name in self._tools

    async def get_tools(self, **params) -> Dict[str, ToolSpec]:
        """Enumerate registered tools keyed by name."""
        return dict(self._tools)

    async def call_tool(
        self,
        client: Any = None,
        tool_name: str = "",
        args: Optional[Dict[str, Any]] = None,
        **params
    ) -> Any:
        """
        Run a registered tool against a client handle.

        Args:
            client: Client handle built by the app's client factory
            tool_name: Exact name of the tool to run
            args: Tool arguments

        Returns:
            Whatever the tool handler returns

        Raises:
            ToolNotFoundError: If no tool has exactly this name
            UpstreamError: If the integrated service failed; the original
                error is re-raised with ``tool_name`` in its details
            ToolExecutionError: If the handler failed for another reason,
                including a not-found error raised from inside the handler
            AppKitException: Other appkit errors from the handler are
                re-raised with ``tool_name`` added to their details
        """
        if not self.has_tool(tool_name):
            logger.warning(f"Tool '{tool_name}' not found")
            raise ToolNotFoundError(tool_name)

        handler = self._handlers[tool_name]
        start_time = datetime.datetime.now()
        logger.info(f"Executing tool: {tool_name}")

        try:
            result = await handler(client, dict(args or {}))
        except UpstreamError as e:
            logger.error(
                f"Tool '{tool_name}' failed upstream",
                extra={"status_code": e.status_code, "error": e.message}
            )
            e.with_tool(tool_name)
            raise
        except ToolNotFoundError as e:
            # only the dispatcher's own lookup may surface as not-found
            logger.error(f"Tool '{tool_name}' called unknown tool '{e.tool_name}'")
            raise ToolExecutionError(f"{tool_name} failed: {e.message}", tool_name=tool_name) from e
        except AppKitException as e:
            logger.error(f"Tool '{tool_name}' failed: {e.message}")
            e.details.setdefault("tool_name", tool_name)
            raise
        except Exception as e:
            logger.error(f"Tool '{tool_name}' execution failed", exc_info=True)
            raise ToolExecutionError(f"{tool_name} failed: {e}", tool_name=tool_name) from e

        execution_time_ms = int((datetime.datetime.now() - start_time).total_seconds() * 1000)
        logger.info(
            f"Tool '{tool_name}' executed successfully",
            extra={"execution_time_ms": execution_time_ms}
        )
        return result
