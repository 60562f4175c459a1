import pytest

from toolhost_mcp.dispatch import Dispatcher
from toolhost_mcp.tools.registry import build_registry


@pytest.fixture(autouse=True)
def _isolate_config(monkeypatch):
    # a developer's TOOLHOST_CONFIG must not leak into tests
    monkeypatch.delenv("TOOLHOST_CONFIG", raising=False)


@pytest.fixture
def manifest_file(tmp_path):
    path = tmp_path / "manifest.json"
    path.write_text('{\n  "name": "fixture-host",\n  "version": "9.9.9"\n}\n', encoding="utf-8")
    return path


@pytest.fixture
def registry(manifest_file):
    return build_registry(manifest_file)


@pytest.fixture
def dispatcher(registry):
    return Dispatcher(registry)
