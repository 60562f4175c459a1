from __future__ import annotations

from typing import Callable, Dict

from .contracts import ERR_INTERNAL, ContentItem, RequestEnvelope, RequestKind, ResponseEnvelope
from .shared.errors import InvalidArguments, ToolhostError
from .shared.logging import get_logger
from .tools.registry import CapabilityRegistry, build_registry

logger = get_logger(__name__)


class Dispatcher:
    """
    Routes one decoded request to the registry and shapes the response.

    Per request:
      1) route on the request kind
      2) resolve the tool or resource by name
      3) validate arguments against the tool schema
      4) execute
      5) wrap the outcome in a ResponseEnvelope

    Domain errors never escape ``deliver``; they come back as failures.
    """

    def __init__(self, registry: CapabilityRegistry | None = None) -> None:
        self.registry = registry or build_registry()
        self._routes: Dict[RequestKind, Callable[[RequestEnvelope], ResponseEnvelope]] = {
            RequestKind.LIST_TOOLS: self._list_tools,
            RequestKind.CALL_TOOL: self._call_tool,
            RequestKind.LIST_RESOURCES: self._list_resources,
            RequestKind.READ_RESOURCE: self._read_resource,
        }

    def deliver(self, request: RequestEnvelope) -> ResponseEnvelope:
        try:
            kind = RequestKind(request.kind)
        except ValueError:
            return ResponseEnvelope.failure(ERR_INTERNAL, f"Unsupported request kind: {request.kind}")
        logger.debug("dispatch %s %s", kind.value, request.name or "")

        try:
            response = self._routes[kind](request)
        except ToolhostError as exc:
            logger.warning("%s %s failed: %s", kind.value, request.name, exc.message)
            return ResponseEnvelope.from_error(exc)
        except Exception as exc:  # noqa: BLE001
            logger.exception("Unexpected error handling %s %s", kind.value, request.name)
            return ResponseEnvelope.failure(ERR_INTERNAL, f"Internal error: {exc}")
        return response

    def _list_tools(self, _: RequestEnvelope) -> ResponseEnvelope:
        return ResponseEnvelope.listing(tools=self.registry.list_tools())

    def _list_resources(self, _: RequestEnvelope) -> ResponseEnvelope:
        return ResponseEnvelope.listing(resources=self.registry.list_resources())

    def _call_tool(self, request: RequestEnvelope) -> ResponseEnvelope:
        if not isinstance(request.name, str) or not request.name:
            raise InvalidArguments("tool name must be a non-empty string")
        entry = self.registry.resolve_tool(request.name)
        arguments = self.registry.validate_arguments(request.name, request.arguments)
        text = entry.handler(arguments)
        return ResponseEnvelope.success(ContentItem(text=text))

    def _read_resource(self, request: RequestEnvelope) -> ResponseEnvelope:
        if not isinstance(request.name, str) or not request.name:
            raise InvalidArguments("resource uri must be a non-empty string")
        entry = self.registry.resolve_resource(request.name)
        text = entry.reader()
        definition = entry.definition
        return ResponseEnvelope.success(ContentItem(text=text, uri=definition.uri, mime_type=definition.mime_type))
