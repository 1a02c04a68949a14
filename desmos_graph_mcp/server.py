from __future__ import annotations

from typing import Annotated, List, Optional
import logging

from mcp.server.fastmcp import FastMCP
from mcp.types import EmbeddedResource
from pydantic import Field

from .config import ServerConfig, load_config
from .graph import handle_graph
from .models import DEFAULT_TITLE, MAX_FUNCTIONS, GraphRequest
from .resources import to_embedded_resources


SERVER_NAME = "Desmos MCP"
SERVER_VERSION = "1.0.0"

# ---- Configuration and logging
config: ServerConfig = load_config()

logger = logging.getLogger(__name__)
if not logger.handlers:
    logging.basicConfig(level=config.effective_log_level)
logger.debug("config: %s", config.model_dump(exclude={"api_key"}))


# ---- Server

mcp = FastMCP(SERVER_NAME)


@mcp.tool(
    name="graph",
    description="Create an interactive function graph using Desmos API",
)
def graph(
    functions: Annotated[
        List[str],
        Field(
            min_length=1,
            max_length=MAX_FUNCTIONS,
            description=(
                "Array of mathematical functions to graph "
                "(e.g., ['y=x^2', 'y=sin(x)'])"
            ),
        ),
    ],
    title: Annotated[str, Field(description="Title for the graph")] = DEFAULT_TITLE,
    xMin: Annotated[
        Optional[float],
        Field(description="Minimum x value for the viewport"),
    ] = None,
    xMax: Annotated[
        Optional[float],
        Field(description="Maximum x value for the viewport"),
    ] = None,
    yMin: Annotated[
        Optional[float],
        Field(description="Minimum y value for the viewport"),
    ] = None,
    yMax: Annotated[
        Optional[float],
        Field(description="Maximum y value for the viewport"),
    ] = None,
    showGrid: Annotated[bool, Field(description="Show grid lines")] = True,
    showKeypad: Annotated[
        bool, Field(description="Show the on-screen keypad")
    ] = True,
    showExpressions: Annotated[
        bool, Field(description="Show the expressions list")
    ] = True,
) -> List[EmbeddedResource]:
    """Create a Desmos graph page for `functions` as a UI resource.

    Parameters
    ----------
    functions : List[str]
        1-10 LaTeX-like expressions. A leading 'y=' is stripped before
        registering each one; other equations pass through.
    title : str
        Page title. Defaults to "Function Graph".
    xMin, xMax, yMin, yMax : Optional[float]
        Viewport bounds, applied only when all four are given.
    showGrid, showKeypad, showExpressions : bool
        Calculator UI flags.

    Returns
    -------
    List[EmbeddedResource]
        Exactly one HTML resource: the graph, or an error card when the
        page could not be built.
    """
    request = GraphRequest(
        functions=functions,
        title=title,
        xMin=xMin,
        xMax=xMax,
        yMin=yMin,
        yMax=yMax,
        showGrid=showGrid,
        showKeypad=showKeypad,
        showExpressions=showExpressions,
    )
    response = handle_graph(request, config=config)
    return to_embedded_resources(response.content)


def main() -> None:
    logger.info(
        "Starting %s %s (escaping=%s)",
        SERVER_NAME,
        SERVER_VERSION,
        config.escaping,
    )
    mcp.run()


if __name__ == "__main__":
    main()
