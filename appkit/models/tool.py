"""
Pydantic model for tools exposed by integration apps.
"""

import re
from typing import Any, Dict

from jsonschema import Draft7Validator
from jsonschema.exceptions import SchemaError
from pydantic import BaseModel, ConfigDict, Field, field_validator


class ToolSpec(BaseModel):
    """
    Definition of a single tool an app exposes.

    Serializes with the camelCase keys hosts expect (``inputSchema``,
    ``outputSchema``).
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    name: str = Field(
        ...,
        min_length=1,
        max_length=100,
        description="Unique name for this tool within the app"
    )

    title: str = Field(
        default="",
        max_length=200,
        description="Short human-readable title"
    )

    description: str = Field(
        ...,
        min_length=1,
        max_length=1000,
        description="Human-readable description of what this tool does"
    )

    input_schema: Dict[str, Any] = Field(
        default_factory=lambda: {"type": "object", "properties": {}},
        alias="inputSchema",
        description="JSON Schema definition for tool input parameters"
    )

    output_schema: Dict[str, Any] = Field(
        default_factory=lambda: {"type": "object"},
        alias="outputSchema",
        description="JSON Schema definition for tool output format"
    )

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Validate tool name has no whitespace."""
        if not re.match(r'^[A-Za-z0-9_.\-]+$', v):
            raise ValueError(
                'Tool name may only contain letters, numbers, underscores, '
                'hyphens and dots'
            )
        return v

    @field_validator('input_schema', 'output_schema')
    @classmethod
    def validate_json_schema(cls, v: Dict[str, Any]) -> Dict[str, Any]:
        """Validate that schema is a valid JSON Schema."""
        try:
            Draft7Validator.check_schema(v)
        except SchemaError as e:
            raise ValueError(f"Invalid JSON Schema: {e.message}")

        # Allow $ref schemas (which don't require 'type') or schemas with 'type'
        if 'type' not in v and '$ref' not in v:
            raise ValueError("Schema must have either a 'type' property or a '$ref' property")

        return v

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the camelCase dictionary hosts consume."""
        return self.model_dump(by_alias=True)
