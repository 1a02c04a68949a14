from __future__ import annotations

import logging
import time
from typing import Callable, Optional

from .config import EscapingMode, ServerConfig
from .escaping import Escaper, get_escaper
from .models import (
    GraphRequest,
    GraphResult,
    Rendered,
    RenderedError,
    ToolResponse,
    UIResource,
    WidgetOptions,
)
from .resources import ERROR_URI, create_ui_resource, graph_uri
from .templates import (
    error_message_for,
    normalize_expression,
    render_error_page,
    render_graph_page,
)
from .validation import inspect_interpolated_text, summarize_issues


logger = logging.getLogger(__name__)

ResourceFactory = Callable[..., UIResource]
Clock = Callable[[], int]


def _now_ms() -> int:
    return int(time.time() * 1000)


def _log_interpolation_findings(request: GraphRequest) -> None:
    for index, func in enumerate(request.functions):
        issues = inspect_interpolated_text(normalize_expression(func))
        if issues:
            logger.warning(
                "graph: function%d is interpolated unescaped: %s",
                index,
                summarize_issues(issues),
            )
    title_issues = inspect_interpolated_text(request.title)
    if title_issues:
        logger.warning(
            "graph: title is interpolated unescaped: %s",
            summarize_issues(title_issues),
        )


def _error_escaper(mode: str) -> Escaper:
    try:
        return get_escaper(mode)
    except ValueError:
        logger.warning(
            "graph: unknown escaping %r for error page, using permissive",
            mode,
        )
        return get_escaper("permissive")


def _error_resource(html: str, resource_factory: ResourceFactory) -> UIResource:
    """Wrap the error card, bypassing a resource factory that keeps failing."""
    try:
        return resource_factory(uri=ERROR_URI, html=html, encoding="blob")
    except Exception:  # noqa: BLE001
        logger.exception("graph: resource factory failed for the error card")
        return create_ui_resource(uri=ERROR_URI, html=html, encoding="blob")


def build_graph_html(
    request: GraphRequest,
    config: Optional[ServerConfig] = None,
    escaping: Optional[EscapingMode] = None,
) -> str:
    """Render the calculator page for `request`.

    Viewport bounds are emitted only when all four edges are present;
    a partial set is dropped with a warning.
    """
    cfg = config or ServerConfig()
    mode = escaping or cfg.escaping
    if request.has_partial_bounds():
        logger.warning(
            "graph: ignoring partial viewport bounds "
            "xMin=%s xMax=%s yMin=%s yMax=%s",
            request.xMin,
            request.xMax,
            request.yMin,
            request.yMax,
        )
    if mode == "permissive":
        _log_interpolation_findings(request)

    return render_graph_page(
        functions=request.functions,
        title=request.title,
        options=WidgetOptions.from_request(request),
        bounds=request.viewport_bounds(),
        script_src=cfg.widget_script_src,
        escaper=get_escaper(mode),
    )


def render_graph(
    request: GraphRequest,
    config: Optional[ServerConfig] = None,
    escaping: Optional[EscapingMode] = None,
    resource_factory: ResourceFactory = create_ui_resource,
    clock: Clock = _now_ms,
) -> GraphResult:
    """Build the graph resource, or the error card if construction fails.

    Any exception raised while rendering or wrapping the graph is
    recovered here; the caller always receives a displayable resource.
    """
    cfg = config or ServerConfig()
    mode = escaping or cfg.escaping
    try:
        html = build_graph_html(request, cfg, escaping=mode)
        uri = graph_uri(clock())
        resource = resource_factory(uri=uri, html=html, encoding="blob")
    except Exception as exc:  # noqa: BLE001
        logger.exception("graph: failed to create the function graph")
        error_html = render_error_page(exc, _error_escaper(mode))
        error_resource = _error_resource(error_html, resource_factory)
        return RenderedError(
            resource=error_resource,
            message=error_message_for(exc),
        )

    logger.info(
        "graph: %d function(s), bounds=%s, uri=%s",
        len(request.functions),
        request.viewport_bounds() is not None,
        uri,
    )
    return Rendered(resource=resource)


def handle_graph(
    request: GraphRequest,
    config: Optional[ServerConfig] = None,
    escaping: Optional[EscapingMode] = None,
    resource_factory: ResourceFactory = create_ui_resource,
    clock: Clock = _now_ms,
) -> ToolResponse:
    """Entry point of the `graph` tool: one UI resource, success or error."""
    result = render_graph(
        request,
        config=config,
        escaping=escaping,
        resource_factory=resource_factory,
        clock=clock,
    )
    return ToolResponse(content=[result.resource])
