"""
Side-channel diagnostics.

stdout carries MCP frames only, so every log record, including the
readiness notice, goes to stderr or to a configured file.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

from .config import LoggingConfig

PACKAGE_LOGGER = "toolhost_mcp"
SIDE_CHANNEL_FORMAT = "%(asctime)s %(levelname)s %(name)s - %(message)s"

_PROTOCOL_STREAM_TARGETS = {"-", "/dev/stdout", "/dev/fd/1"}


def side_channel_handler(config: LoggingConfig) -> logging.Handler:
    if config.file in _PROTOCOL_STREAM_TARGETS:
        raise ValueError(f"log file {config.file!r} would share stdout with the protocol stream")
    if config.file:
        handler: logging.Handler = logging.FileHandler(config.file, encoding="utf-8")
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(SIDE_CHANNEL_FORMAT))
    return handler


def configure_logging(config: LoggingConfig) -> None:
    logging.basicConfig(
        level=getattr(logging, config.level.upper(), logging.INFO),
        handlers=[side_channel_handler(config)],
        force=True,
    )


def announce_ready(server_name: str, version: str, transport: str = "stdio") -> None:
    """One-line readiness notice, emitted once the stream is connected."""
    get_logger(f"{PACKAGE_LOGGER}.lifecycle").info("%s %s running on %s", server_name, version, transport)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    return logging.getLogger(name if name else PACKAGE_LOGGER)
