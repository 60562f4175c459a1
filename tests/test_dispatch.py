import pytest

from toolhost_mcp.contracts import RequestEnvelope, RequestKind
from toolhost_mcp.dispatch import Dispatcher
from toolhost_mcp.tools.defs import ECHO, MANIFEST_RESOURCE
from toolhost_mcp.tools.registry import CapabilityRegistry, ToolEntry, build_registry


def test_call_echo(dispatcher):
    response = dispatcher.deliver(RequestEnvelope.call_tool("echo", {"message": "hi"}))
    assert response.ok is True
    assert [item.text for item in response.content] == ["Echo: hi"]
    assert response.content[0].type == "text"


def test_call_calculate_add(dispatcher):
    response = dispatcher.deliver(RequestEnvelope.call_tool("calculate", {"operation": "add", "a": 2, "b": 3}))
    assert response.ok is True
    assert response.text == "2 add 3 = 5"


def test_call_calculate_divide_by_zero(dispatcher):
    response = dispatcher.deliver(RequestEnvelope.call_tool("calculate", {"operation": "divide", "a": 10, "b": 0}))
    assert response.ok is False
    assert response.error_code == "division_by_zero"
    assert "division by zero" in response.error_message.lower()


def test_call_unknown_tool(dispatcher):
    response = dispatcher.deliver(RequestEnvelope.call_tool("nonexistent", {}))
    assert response.ok is False
    assert response.error_code == "unknown_capability"
    assert "Unknown tool: nonexistent" in response.error_message


def test_call_with_invalid_arguments(dispatcher):
    response = dispatcher.deliver(RequestEnvelope.call_tool("calculate", {"operation": "power", "a": 1, "b": 2}))
    assert response.ok is False
    assert response.error_code == "invalid_arguments"
    assert "operation" in response.error_message


def test_call_without_arguments_reports_missing_field(dispatcher):
    response = dispatcher.deliver(RequestEnvelope.call_tool("echo"))
    assert response.ok is False
    assert response.error_code == "invalid_arguments"


def test_call_get_system_info(dispatcher):
    response = dispatcher.deliver(RequestEnvelope.call_tool("get_system_info", {}))
    assert response.ok is True
    assert response.text.startswith("System Information:\n")


def test_read_resource_returns_exact_text(dispatcher, manifest_file):
    response = dispatcher.deliver(RequestEnvelope.read_resource(MANIFEST_RESOURCE.uri))
    assert response.ok is True
    (item,) = response.content
    assert item.text == manifest_file.read_text(encoding="utf-8")
    assert item.mime_type == "application/json"
    assert item.uri == MANIFEST_RESOURCE.uri


def test_read_unknown_resource(dispatcher):
    response = dispatcher.deliver(RequestEnvelope.read_resource("config://toolhost/nope"))
    assert response.ok is False
    assert response.error_code == "unknown_resource"


def test_read_missing_backing_file(tmp_path):
    dispatcher = Dispatcher(build_registry(tmp_path / "gone.json"))
    response = dispatcher.deliver(RequestEnvelope.read_resource(MANIFEST_RESOURCE.uri))
    assert response.ok is False
    assert response.error_code == "resource_unavailable"
    assert "gone.json" in response.error_message


def test_list_tools(dispatcher):
    response = dispatcher.deliver(RequestEnvelope.list_tools())
    assert response.ok is True
    assert [tool.name for tool in response.tools] == ["echo", "calculate", "get_system_info"]
    assert response == dispatcher.deliver(RequestEnvelope.list_tools())


def test_list_resources(dispatcher):
    response = dispatcher.deliver(RequestEnvelope.list_resources())
    assert response.ok is True
    assert response.resources == (MANIFEST_RESOURCE,)


def test_unexpected_executor_fault_becomes_failure():
    def _boom(_):
        raise RuntimeError("kaboom")

    dispatcher = Dispatcher(CapabilityRegistry([ToolEntry(ECHO, _boom)]))
    response = dispatcher.deliver(RequestEnvelope.call_tool("echo", {"message": "x"}))
    assert response.ok is False
    assert response.error_code == "internal_error"
    assert "kaboom" in response.error_message


def test_unsupported_kind(dispatcher):
    response = dispatcher.deliver(RequestEnvelope(kind="prompts/list"))
    assert response.ok is False


@pytest.mark.parametrize("kind", list(RequestKind))
def test_every_kind_is_routed(dispatcher, kind):
    name = {RequestKind.CALL_TOOL: "echo", RequestKind.READ_RESOURCE: MANIFEST_RESOURCE.uri}.get(kind)
    arguments = {"message": "x"} if kind is RequestKind.CALL_TOOL else {}
    response = dispatcher.deliver(RequestEnvelope(kind=kind, name=name, arguments=arguments))
    assert response.ok is True


def test_call_calculate_with_integer_past_double_range(dispatcher):
    response = dispatcher.deliver(RequestEnvelope.call_tool("calculate", {"operation": "add", "a": 10**400, "b": 1}))
    assert response.ok is True
    assert response.text == "Infinity add 1 = Infinity"
