from __future__ import annotations

import base64
import time
from typing import List, Optional

from mcp.types import BlobResourceContents, EmbeddedResource, TextResourceContents

from .models import RawHtmlContent, UIResource


GRAPH_URI_PREFIX = "ui://desmos-graph/"
ERROR_URI = "ui://error-component/desmos-graph"
HTML_MIME_TYPE = "text/html"


def graph_uri(now_ms: Optional[int] = None) -> str:
    """Per-call URI for a rendered graph, keyed by epoch milliseconds."""
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    return f"{GRAPH_URI_PREFIX}{now_ms}"


def create_ui_resource(uri: str, html: str, encoding: str = "blob") -> UIResource:
    if not uri.startswith("ui://"):
        raise ValueError(f"UI resource uri must start with 'ui://': {uri!r}")
    if encoding not in ("blob", "text"):
        raise ValueError(
            f"Unsupported encoding '{encoding}'. Available: ['blob', 'text']"
        )
    return UIResource(
        uri=uri,
        content=RawHtmlContent(htmlString=html),
        encoding=encoding,
    )


def to_embedded_resource(resource: UIResource) -> EmbeddedResource:
    """Convert a UI resource into MCP content a UI-capable client renders."""
    html = resource.content.htmlString
    if resource.encoding == "blob":
        contents = BlobResourceContents(
            uri=resource.uri,
            mimeType=HTML_MIME_TYPE,
            blob=base64.b64encode(html.encode("utf-8")).decode("ascii"),
        )
    else:
        contents = TextResourceContents(
            uri=resource.uri,
            mimeType=HTML_MIME_TYPE,
            text=html,
        )
    return EmbeddedResource(type="resource", resource=contents)


def to_embedded_resources(resources: List[UIResource]) -> List[EmbeddedResource]:
    return [to_embedded_resource(r) for r in resources]
