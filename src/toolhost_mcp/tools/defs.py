from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ToolDefinition:
    name: str
    description: str
    input_schema: dict[str, Any]


@dataclass(frozen=True)
class ResourceDefinition:
    uri: str
    name: str
    description: str
    mime_type: str


ECHO = ToolDefinition(
    name="echo",
    description="Echo back the input message",
    input_schema={
        "type": "object",
        "properties": {
            "message": {"type": "string", "description": "Message to echo back"},
        },
        "required": ["message"],
    },
)

CALCULATE = ToolDefinition(
    name="calculate",
    description="Perform basic arithmetic calculations",
    input_schema={
        "type": "object",
        "properties": {
            "operation": {
                "type": "string",
                "enum": ["add", "subtract", "multiply", "divide"],
                "description": "The arithmetic operation to perform",
            },
            "a": {"type": "number", "description": "First number"},
            "b": {"type": "number", "description": "Second number"},
        },
        "required": ["operation", "a", "b"],
    },
)

GET_SYSTEM_INFO = ToolDefinition(
    name="get_system_info",
    description="Get basic system information",
    input_schema={"type": "object", "properties": {}},
)

# build_registry lists tools and resources in table order.
TOOL_DEFINITIONS: list[ToolDefinition] = [ECHO, CALCULATE, GET_SYSTEM_INFO]

MANIFEST_RESOURCE = ResourceDefinition(
    uri="config://toolhost/manifest",
    name="Package Configuration",
    description="The package manifest for this MCP server",
    mime_type="application/json",
)

RESOURCE_DEFINITIONS: list[ResourceDefinition] = [MANIFEST_RESOURCE]
