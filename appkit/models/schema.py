"""
JSON-schema helpers for app configuration and auth schemas.

Schemas may carry UI annotation keywords (``@title``, ``@placeholder``,
``@sensitive``); Draft 7 validation ignores unknown keywords so they pass
through untouched.

Descriptors hold schemas as frozen views (``MappingProxyType`` and tuples).
Validation always runs on a thawed plain-JSON copy, since Draft 7 type checks
only accept ``dict`` and ``list``.
"""

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, List

from jsonschema import Draft7Validator
from jsonschema.exceptions import SchemaError

from appkit.core.exceptions import SchemaValidationError


def freeze(value: Any) -> Any:
    """Read-only deep copy of a JSON-like value."""
    if isinstance(value, Mapping):
        return MappingProxyType({key: freeze(item) for key, item in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(freeze(item) for item in value)
    return value


def thaw(value: Any) -> Any:
    """Plain ``dict``/``list`` deep copy of a (possibly frozen) JSON-like value."""
    if isinstance(value, Mapping):
        return {key: thaw(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [thaw(item) for item in value]
    return value


def schema_errors(schema: Any) -> List[str]:
    """
    Check that a value is a usable Draft 7 JSON schema.

    Returns:
        List of problems, empty when the schema is valid
    """
    if not isinstance(schema, Mapping):
        return ["Schema must be a JSON object"]

    try:
        Draft7Validator.check_schema(thaw(schema))
    except SchemaError as e:
        return [f"Invalid JSON Schema: {e.message}"]

    return []


def missing_required_properties(schema: Mapping) -> List[str]:
    """List the names in ``required`` that are not declared in ``properties``."""
    required = schema.get("required") or []
    properties = schema.get("properties") or {}
    return [name for name in required if name not in properties]


def sensitive_fields(schema: Mapping) -> List[str]:
    """List the properties of an object schema annotated with ``@sensitive``."""
    if schema.get("type") == "array":
        schema = schema.get("items") or {}
    properties = schema.get("properties") or {}
    return [name for name, prop in properties.items() if isinstance(prop, Mapping) and prop.get("@sensitive")]


def validate_instance(schema: Mapping, instance: Any, label: str = "value") -> None:
    """
    Validate data against a schema, reporting every error at once.

    Raises:
        SchemaValidationError: If the data does not satisfy the schema
    """
    validator = Draft7Validator(thaw(schema))
    errors = []
    for error in sorted(validator.iter_errors(instance), key=lambda e: list(e.absolute_path)):
        location = ".".join(str(part) for part in error.absolute_path)
        errors.append(f"{location}: {error.message}" if location else error.message)

    if errors:
        raise SchemaValidationError(f"Invalid {label}: {errors[0]}", errors=errors)
