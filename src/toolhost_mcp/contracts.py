from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Literal, Optional

from .shared.errors import ToolhostError
from .tools.defs import ResourceDefinition, ToolDefinition

ContentType = Literal["text"]

ERR_INTERNAL = "internal_error"


class RequestKind(str, Enum):
    LIST_TOOLS = "tools/list"
    CALL_TOOL = "tools/call"
    LIST_RESOURCES = "resources/list"
    READ_RESOURCE = "resources/read"


@dataclass(frozen=True)
class RequestEnvelope:
    kind: RequestKind
    name: Optional[str] = None
    arguments: dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def list_tools() -> "RequestEnvelope":
        return RequestEnvelope(kind=RequestKind.LIST_TOOLS)

    @staticmethod
    def call_tool(name: str, arguments: Optional[dict[str, Any]] = None) -> "RequestEnvelope":
        return RequestEnvelope(kind=RequestKind.CALL_TOOL, name=name, arguments=arguments or {})

    @staticmethod
    def list_resources() -> "RequestEnvelope":
        return RequestEnvelope(kind=RequestKind.LIST_RESOURCES)

    @staticmethod
    def read_resource(uri: str) -> "RequestEnvelope":
        return RequestEnvelope(kind=RequestKind.READ_RESOURCE, name=uri)


@dataclass(frozen=True)
class ContentItem:
    text: str
    type: ContentType = "text"
    uri: Optional[str] = None
    mime_type: Optional[str] = None


@dataclass(frozen=True)
class ResponseEnvelope:
    ok: bool
    content: tuple[ContentItem, ...] = ()
    tools: tuple[ToolDefinition, ...] = ()
    resources: tuple[ResourceDefinition, ...] = ()
    error_code: Optional[str] = None
    error_message: Optional[str] = None

    @property
    def text(self) -> str:
        """Concatenated text of all content items."""
        return "".join(item.text for item in self.content)

    @staticmethod
    def success(*items: ContentItem) -> "ResponseEnvelope":
        return ResponseEnvelope(ok=True, content=tuple(items))

    @staticmethod
    def listing(
        *,
        tools: tuple[ToolDefinition, ...] = (),
        resources: tuple[ResourceDefinition, ...] = (),
    ) -> "ResponseEnvelope":
        return ResponseEnvelope(ok=True, tools=tuple(tools), resources=tuple(resources))

    @staticmethod
    def failure(code: str, message: str) -> "ResponseEnvelope":
        return ResponseEnvelope(ok=False, error_code=code, error_message=message)

    @staticmethod
    def from_error(exc: ToolhostError) -> "ResponseEnvelope":
        return ResponseEnvelope.failure(exc.code, exc.message)
