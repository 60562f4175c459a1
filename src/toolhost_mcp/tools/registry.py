from __future__ import annotations

import os
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable

from jsonschema import Draft7Validator

from ..shared.errors import InvalidArguments, UnknownCapability, UnknownResource
from . import executors
from .defs import MANIFEST_RESOURCE, RESOURCE_DEFINITIONS, TOOL_DEFINITIONS, ResourceDefinition, ToolDefinition

ToolHandler = Callable[[dict[str, Any]], str]
ResourceReader = Callable[[], str]


@dataclass(frozen=True)
class ToolEntry:
    definition: ToolDefinition
    handler: ToolHandler
    validator: Draft7Validator = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        Draft7Validator.check_schema(self.definition.input_schema)
        object.__setattr__(self, "validator", Draft7Validator(self.definition.input_schema))


@dataclass(frozen=True)
class ResourceEntry:
    definition: ResourceDefinition
    reader: ResourceReader


class CapabilityRegistry:
    """Read-only table of tools and resources, fixed at construction."""

    def __init__(self, tools: Iterable[ToolEntry], resources: Iterable[ResourceEntry] = ()) -> None:
        self._tools: dict[str, ToolEntry] = {}
        self._resources: dict[str, ResourceEntry] = {}
        for entry in tools:
            name = entry.definition.name
            if name in self._tools:
                raise ValueError(f"duplicate tool name: {name}")
            self._tools[name] = entry
        for entry in resources:
            uri = entry.definition.uri
            if uri in self._resources:
                raise ValueError(f"duplicate resource uri: {uri}")
            self._resources[uri] = entry
        self._tool_definitions = tuple(entry.definition for entry in self._tools.values())
        self._resource_definitions = tuple(entry.definition for entry in self._resources.values())

    def list_tools(self) -> tuple[ToolDefinition, ...]:
        return self._tool_definitions

    def list_resources(self) -> tuple[ResourceDefinition, ...]:
        return self._resource_definitions

    def resolve_tool(self, name: str) -> ToolEntry:
        try:
            return self._tools[name]
        except KeyError as exc:
            raise UnknownCapability(f"Unknown tool: {name}") from exc

    def resolve_resource(self, uri: str) -> ResourceEntry:
        try:
            return self._resources[uri]
        except KeyError as exc:
            raise UnknownResource(f"Unknown resource: {uri}") from exc

    def validate_arguments(self, tool_name: str, arguments: Any) -> dict[str, Any]:
        entry = self.resolve_tool(tool_name)
        if not isinstance(arguments, Mapping):
            raise InvalidArguments(f"Invalid arguments for tool '{tool_name}': arguments must be an object")

        errors = sorted(entry.validator.iter_errors(dict(arguments)), key=lambda e: list(e.path))
        if errors:
            first = errors[0]
            path = ".".join(str(p) for p in first.path) or "<root>"
            raise InvalidArguments(f"Invalid arguments for tool '{tool_name}': {path}: {first.message}")

        return dict(arguments)


TOOL_HANDLERS: dict[str, ToolHandler] = {
    "echo": executors.tool_echo,
    "calculate": executors.tool_calculate,
    "get_system_info": executors.tool_get_system_info,
}


def _resource_readers(manifest_path: Path | None) -> dict[str, ResourceReader]:
    return {MANIFEST_RESOURCE.uri: executors.manifest_reader(manifest_path)}


def build_registry(manifest_path: str | os.PathLike[str] | None = None) -> CapabilityRegistry:
    """Pair the static definition tables with their executors, keeping table order."""
    readers = _resource_readers(Path(manifest_path) if manifest_path else None)
    return CapabilityRegistry(
        tools=[ToolEntry(definition, TOOL_HANDLERS[definition.name]) for definition in TOOL_DEFINITIONS],
        resources=[ResourceEntry(definition, readers[definition.uri]) for definition in RESOURCE_DEFINITIONS],
    )
