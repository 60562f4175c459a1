from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .. import __version__

CONFIG_ENV_VAR = "TOOLHOST_CONFIG"


@dataclass(frozen=True)
class ServerConfig:
    name: str = "toolhost-mcp"
    version: str = __version__


@dataclass(frozen=True)
class ResourceConfig:
    manifest_path: str | None = None


@dataclass(frozen=True)
class LoggingConfig:
    level: str = "INFO"
    file: str | None = None


@dataclass(frozen=True)
class AppConfig:
    server: ServerConfig = field(default_factory=ServerConfig)
    resources: ResourceConfig = field(default_factory=ResourceConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def _load_json(path: Path) -> dict[str, Any]:
    with path.open("r", encoding="utf-8") as handle:
        return json.load(handle)


def load_config(config_path: str | os.PathLike[str] | None = None) -> AppConfig:
    if config_path is None:
        config_path = os.getenv(CONFIG_ENV_VAR)
    if not config_path:
        return AppConfig()

    path = Path(config_path)
    if not path.exists():
        return AppConfig()

    raw = _load_json(path)
    server_raw = raw.get("server", {})
    resources_raw = raw.get("resources", {})
    logging_raw = raw.get("logging", {})
    manifest_path = resources_raw.get("manifest_path")
    return AppConfig(
        server=ServerConfig(
            name=str(server_raw.get("name", ServerConfig.name)),
            version=str(server_raw.get("version", ServerConfig.version)),
        ),
        resources=ResourceConfig(
            manifest_path=str(manifest_path) if manifest_path else None,
        ),
        logging=LoggingConfig(
            level=str(logging_raw.get("level", "INFO")),
            file=logging_raw.get("file"),
        ),
    )
