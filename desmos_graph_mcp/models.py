from __future__ import annotations

from typing import Annotated, List, Literal, Optional, Union
from pydantic import BaseModel, Field


DEFAULT_TITLE = "Function Graph"
MAX_FUNCTIONS = 10


class ViewportBounds(BaseModel):
    left: float
    right: float
    bottom: float
    top: float


class GraphRequest(BaseModel):
    """Arguments of the `graph` tool after schema defaulting."""

    functions: List[str] = Field(
        min_length=1,
        max_length=MAX_FUNCTIONS,
        description=(
            "Array of mathematical functions to graph "
            "(e.g., ['y=x^2', 'y=sin(x)'])"
        ),
    )
    title: str = Field(
        default=DEFAULT_TITLE,
        description="Title for the graph",
    )
    xMin: Optional[float] = Field(
        default=None,
        description="Minimum x value for the viewport",
    )
    xMax: Optional[float] = Field(
        default=None,
        description="Maximum x value for the viewport",
    )
    yMin: Optional[float] = Field(
        default=None,
        description="Minimum y value for the viewport",
    )
    yMax: Optional[float] = Field(
        default=None,
        description="Maximum y value for the viewport",
    )
    showGrid: bool = Field(default=True, description="Show grid lines")
    showKeypad: bool = Field(
        default=True,
        description="Show the on-screen keypad",
    )
    showExpressions: bool = Field(
        default=True,
        description="Show the expressions list",
    )

    def viewport_bounds(self) -> Optional[ViewportBounds]:
        """Return bounds only when all four edges were given."""
        edges = (self.xMin, self.xMax, self.yMin, self.yMax)
        if any(v is None for v in edges):
            return None
        return ViewportBounds(
            left=self.xMin,
            right=self.xMax,
            bottom=self.yMin,
            top=self.yMax,
        )

    def has_partial_bounds(self) -> bool:
        edges = (self.xMin, self.xMax, self.yMin, self.yMax)
        given = sum(v is not None for v in edges)
        return 0 < given < len(edges)


class WidgetOptions(BaseModel):
    """Request-controlled flags of Desmos.GraphingCalculator."""

    keypad: bool = True
    graphpaper: bool = True
    expressions: bool = True

    @classmethod
    def from_request(cls, request: GraphRequest) -> "WidgetOptions":
        return cls(
            keypad=request.showKeypad,
            graphpaper=request.showGrid,
            expressions=request.showExpressions,
        )


class RawHtmlContent(BaseModel):
    type: Literal["rawHtml"] = "rawHtml"
    htmlString: str


class UIResource(BaseModel):
    uri: str
    content: RawHtmlContent
    encoding: Literal["blob", "text"] = "blob"


class ToolResponse(BaseModel):
    content: List[UIResource]


class Rendered(BaseModel):
    """The requested graph was built."""

    kind: Literal["rendered"] = "rendered"
    resource: UIResource


class RenderedError(BaseModel):
    """Construction failed; `resource` holds the error card instead."""

    kind: Literal["rendered_error"] = "rendered_error"
    resource: UIResource
    message: str


GraphResult = Annotated[
    Union[Rendered, RenderedError],
    Field(discriminator="kind"),
]
