from __future__ import annotations


class ToolhostError(Exception):
    code = "toolhost_error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class UnknownCapability(ToolhostError):
    code = "unknown_capability"


class UnknownResource(ToolhostError):
    code = "unknown_resource"


class InvalidArguments(ToolhostError):
    code = "invalid_arguments"


class DivisionByZero(ToolhostError):
    code = "division_by_zero"


class ResourceUnavailable(ToolhostError):
    code = "resource_unavailable"


class UnknownOperation(ToolhostError):
    code = "unknown_operation"


class RequestFailed(ToolhostError):
    """Raised by the transport adapter to hand a failure envelope to the SDK."""

    def __init__(self, message: str, code: str = ToolhostError.code) -> None:
        super().__init__(message)
        self.code = code
