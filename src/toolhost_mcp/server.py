from __future__ import annotations

import argparse
import asyncio
from dataclasses import replace
from enum import Enum
from typing import Any, Iterable, Optional

from mcp.server import Server
from mcp.server.lowlevel.helper_types import ReadResourceContents
from mcp.server.stdio import stdio_server
from mcp.types import Resource, TextContent, Tool

from .contracts import RequestEnvelope, ResponseEnvelope
from .dispatch import Dispatcher
from .shared.config import AppConfig, load_config
from .shared.errors import RequestFailed
from .shared.logging import announce_ready, configure_logging, get_logger
from .tools.registry import CapabilityRegistry, build_registry

logger = get_logger(__name__)


class LifecycleState(str, Enum):
    STARTING = "starting"
    CONNECTED = "connected"
    CLOSING = "closing"
    TERMINATED = "terminated"


def _unwrap(response: ResponseEnvelope) -> ResponseEnvelope:
    if not response.ok:
        raise RequestFailed(response.error_message or "request failed", code=response.error_code or RequestFailed.code)
    return response


class ToolhostServer:
    """Binds the dispatcher to an MCP stdio session and owns the process lifecycle."""

    def __init__(self, config: AppConfig | None = None, registry: CapabilityRegistry | None = None) -> None:
        self.config = config or AppConfig()
        self.dispatcher = Dispatcher(registry or build_registry(self.config.resources.manifest_path))
        self.app = Server(self.config.server.name, version=self.config.server.version)
        self.state = LifecycleState.STARTING
        self._register_handlers()

    def _register_handlers(self) -> None:
        self.app.list_tools()(self.list_tools)
        self.app.call_tool(validate_input=False)(self.call_tool)
        self.app.list_resources()(self.list_resources)
        self.app.read_resource()(self.read_resource)

    # -------------------------
    # MCP handlers
    # -------------------------

    async def list_tools(self) -> list[Tool]:
        response = _unwrap(self.dispatcher.deliver(RequestEnvelope.list_tools()))
        return [
            Tool(name=tool.name, description=tool.description, inputSchema=tool.input_schema)
            for tool in response.tools
        ]

    async def call_tool(self, name: str, arguments: Optional[dict[str, Any]]) -> list[TextContent]:
        response = _unwrap(self.dispatcher.deliver(RequestEnvelope.call_tool(name, arguments)))
        return [TextContent(type="text", text=item.text) for item in response.content]

    async def list_resources(self) -> list[Resource]:
        response = _unwrap(self.dispatcher.deliver(RequestEnvelope.list_resources()))
        return [
            Resource(
                uri=resource.uri,
                name=resource.name,
                description=resource.description,
                mimeType=resource.mime_type,
            )
            for resource in response.resources
        ]

    async def read_resource(self, uri: Any) -> Iterable[ReadResourceContents]:
        response = _unwrap(self.dispatcher.deliver(RequestEnvelope.read_resource(str(uri))))
        return [ReadResourceContents(content=item.text, mime_type=item.mime_type) for item in response.content]

    # -------------------------
    # Lifecycle
    # -------------------------

    def _on_start(self) -> None:
        self.state = LifecycleState.STARTING
        tools = self.dispatcher.registry.list_tools()
        resources = self.dispatcher.registry.list_resources()
        logger.info("Starting %s with %d tools and %d resources", self.config.server.name, len(tools), len(resources))
        for tool in tools:
            logger.debug("  tool %s", tool.name)

    def close(self) -> None:
        if self.state is LifecycleState.TERMINATED:
            return
        self.state = LifecycleState.CLOSING
        logger.info("Closing %s", self.config.server.name)
        self.state = LifecycleState.TERMINATED

    async def run(self) -> None:
        self._on_start()
        try:
            async with stdio_server() as (read_stream, write_stream):
                self.state = LifecycleState.CONNECTED
                announce_ready(self.config.server.name, self.config.server.version)
                await self.app.run(read_stream, write_stream, self.app.create_initialization_options())
        finally:
            self.close()


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="toolhost-mcp", description="Minimal MCP tool host over stdio")
    parser.add_argument("--config", help="Path to a JSON config file (defaults to $TOOLHOST_CONFIG)")
    parser.add_argument("--log-level", help="Override the configured log level")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = _parse_args(argv)
    server: ToolhostServer | None = None
    try:
        config = load_config(args.config)
        if args.log_level:
            config = replace(config, logging=replace(config.logging, level=args.log_level))
        configure_logging(config.logging)
        server = ToolhostServer(config)
        asyncio.run(server.run())
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down")
        if server is not None:
            server.close()
        raise SystemExit(0)
    except Exception as exc:
        logger.exception("Server failed: %s", exc)
        if server is not None:
            server.close()
        raise SystemExit(1) from exc


if __name__ == "__main__":
    main()
