import base64

import pytest
from mcp.types import BlobResourceContents, EmbeddedResource, TextResourceContents

from desmos_graph_mcp.resources import (
    GRAPH_URI_PREFIX,
    create_ui_resource,
    graph_uri,
    to_embedded_resource,
    to_embedded_resources,
)


HTML = "<!DOCTYPE html><p>π</p>"


def test_graph_uri_uses_milliseconds():
    assert graph_uri(42) == f"{GRAPH_URI_PREFIX}42"
    assert graph_uri().startswith(GRAPH_URI_PREFIX)


def test_create_ui_resource_shape():
    resource = create_ui_resource(uri="ui://x/1", html=HTML)
    assert resource.model_dump() == {
        "uri": "ui://x/1",
        "content": {"type": "rawHtml", "htmlString": HTML},
        "encoding": "blob",
    }


@pytest.mark.parametrize(
    "uri, encoding",
    [("https://x/1", "blob"), ("ui://x/1", "gzip")],
)
def test_create_ui_resource_rejects_bad_input(uri, encoding):
    with pytest.raises(ValueError):
        create_ui_resource(uri=uri, html=HTML, encoding=encoding)


def test_blob_resource_is_base64_html():
    embedded = to_embedded_resource(create_ui_resource(uri="ui://x/1", html=HTML))

    assert isinstance(embedded, EmbeddedResource)
    assert isinstance(embedded.resource, BlobResourceContents)
    assert embedded.resource.mimeType == "text/html"
    assert str(embedded.resource.uri) == "ui://x/1"
    assert base64.b64decode(embedded.resource.blob).decode("utf-8") == HTML


def test_text_resource_keeps_html():
    embedded = to_embedded_resource(
        create_ui_resource(uri="ui://x/1", html=HTML, encoding="text")
    )
    assert isinstance(embedded.resource, TextResourceContents)
    assert embedded.resource.text == HTML


def test_to_embedded_resources_keeps_order():
    resources = [
        create_ui_resource(uri=f"ui://x/{i}", html=HTML) for i in range(2)
    ]
    out = to_embedded_resources(resources)
    assert [str(e.resource.uri) for e in out] == ["ui://x/0", "ui://x/1"]
