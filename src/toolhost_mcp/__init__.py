"""Minimal MCP tool host: a static tool/resource registry served over stdio."""

__version__ = "1.0.0"

from .contracts import ContentItem, RequestEnvelope, RequestKind, ResponseEnvelope  # noqa: E402
from .dispatch import Dispatcher  # noqa: E402
from .tools.registry import CapabilityRegistry, build_registry  # noqa: E402

__all__ = [
    "__version__",
    "CapabilityRegistry",
    "ContentItem",
    "Dispatcher",
    "RequestEnvelope",
    "RequestKind",
    "ResponseEnvelope",
    "build_registry",
]
