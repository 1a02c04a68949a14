import pytest

from desmos_graph_mcp.config import ServerConfig
from desmos_graph_mcp.resources import GRAPH_URI_PREFIX, create_ui_resource


@pytest.fixture
def config():
    return ServerConfig(
        script_url="https://example.test/calculator.js",
        api_key="test-key",
    )


@pytest.fixture
def fixed_clock():
    return lambda: 1700000000000


@pytest.fixture
def failing_factory():
    """Resource factory that breaks for graph URIs only."""
    calls = []

    def factory(uri, html, encoding="blob"):
        calls.append(uri)
        if uri.startswith(GRAPH_URI_PREFIX):
            raise RuntimeError("resource wrapper exploded")
        return create_ui_resource(uri=uri, html=html, encoding=encoding)

    factory.calls = calls
    return factory
