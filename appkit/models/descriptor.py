"""
App descriptor record for integration apps.

An app is described by an ``AppDescriptor``: static identity and schema
fields plus a table of operation handles (``get_client``, ``get_tools``,
``call_tool``). Concrete apps are built from a base contract with
``extend``, which copies the base and replaces the given fields.

Descriptors do not validate their enumerations on construction. A
misdeclared app still loads, and the conformance harness reports every
problem with it.
"""

import dataclasses
import re
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, Mapping, Optional, Sequence

from appkit.core.exceptions import SchemaValidationError
from .schema import freeze, thaw, validate_instance


ClientFactory = Callable[..., Any]
ToolLister = Callable[..., Awaitable[Mapping[str, Any]]]
ToolCaller = Callable[..., Awaitable[Any]]


def normalize_id(name: str) -> str:
    """Derive a stable id from a display name ("Basic Integration" -> "basic-integration")."""
    return re.sub(r'[^a-z0-9]+', '-', str(name).lower()).strip('-')


def _not_implemented(operation: str) -> Callable[..., Any]:
    def handler(*args, **kwargs):
        raise NotImplementedError(f"{operation}() must be implemented")
    handler.__name__ = operation
    return handler


def _not_implemented_async(operation: str) -> Callable[..., Awaitable[Any]]:
    async def handler(*args, **kwargs):
        raise NotImplementedError(f"{operation}() must be implemented")
    handler.__name__ = operation
    return handler


@dataclass(frozen=True)
class AppDescriptor:
    """
    Static contract of an integration app.

    The host reads the schemas to collect configuration and credentials,
    calls ``get_client`` to build a client handle, then lists and invokes
    tools through ``get_tools`` and ``call_tool``.

    Lists become tuples and mappings become read-only views on construction,
    so a derived app never shares mutable state with its base.
    """

    name: str
    id: str = ""
    version: str = "1.0.0"
    categories: Sequence[str] = ()
    features: Sequence[str] = ()
    ui_labels: Sequence[str] = ()
    singleton: bool = False
    config_schema: Mapping[str, Any] = field(
        default_factory=lambda: {"type": "object", "additionalProperties": False}
    )
    auth_schemas: Mapping[str, Any] = field(
        default_factory=lambda: {"none": {"type": "object", "additionalProperties": False}}
    )
    content: Mapping[str, Any] = field(default_factory=dict)
    get_client: ClientFactory = field(default=_not_implemented("get_client"), compare=False)
    get_tools: Optional[ToolLister] = field(default=_not_implemented_async("get_tools"), compare=False)
    call_tool: Optional[ToolCaller] = field(default=_not_implemented_async("call_tool"), compare=False)

    def __post_init__(self):
        if not self.id and isinstance(self.name, str):
            object.__setattr__(self, "id", normalize_id(self.name))
        for name in ("categories", "features", "ui_labels", "config_schema", "auth_schemas", "content"):
            object.__setattr__(self, name, freeze(getattr(self, name)))

    def get_config_schema(self) -> Mapping[str, Any]:
        """Return the schema for app-level configuration."""
        return self.config_schema

    def get_auth_schemas(self) -> Mapping[str, Any]:
        """Return the credential schema for each supported auth type."""
        return self.auth_schemas

    def has_feature(self, feature: str) -> bool:
        return feature in self.features

    @property
    def auth_types(self) -> Sequence[str]:
        return tuple(self.auth_schemas.keys())

    def validate_config(self, config: Any) -> None:
        """
        Validate app configuration against ``config_schema``.

        Raises:
            SchemaValidationError: If the configuration is invalid
        """
        validate_instance(self.config_schema, config, label=f"configuration for '{self.id}'")

    def validate_auth_params(self, auth_type: Optional[str], auth_params: Any) -> None:
        """
        Validate credentials against the schema of their auth type.

        Raises:
            SchemaValidationError: If the auth type is not declared or the
                credentials do not satisfy its schema
        """
        auth_type = auth_type or "none"
        if auth_type not in self.auth_schemas:
            raise SchemaValidationError(
                f"Auth type '{auth_type}' is not supported by '{self.id}'",
                errors=[f"supported auth types: {', '.join(self.auth_types)}"]
            )
        schema = self.auth_schemas[auth_type]
        if auth_params is None and auth_type == "none":
            auth_params = {}
        validate_instance(schema, auth_params, label=f"'{auth_type}' credentials for '{self.id}'")

    def describe(self) -> Dict[str, Any]:
        """Static fields as a plain dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "version": self.version,
            "categories": list(self.categories),
            "features": list(self.features),
            "uiLabels": list(self.ui_labels),
            "singleton": self.singleton,
            "configSchema": thaw(self.config_schema),
            "authSchemas": thaw(self.auth_schemas),
        }


def extend(base: AppDescriptor, **overrides: Any) -> AppDescriptor:
    """
    Build a descriptor from a base contract with some fields replaced.

    The id is re-derived from the new name unless one is given.
    """
    if "name" in overrides and "id" not in overrides:
        overrides["id"] = ""
    return dataclasses.replace(base, **overrides)


BASE_APP = AppDescriptor(name="App", id="app")
