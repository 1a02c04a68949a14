from __future__ import annotations

import math
from typing import List, Optional, Sequence, Tuple, Union

from .escaping import Escaper, get_escaper
from .models import ViewportBounds, WidgetOptions


FIT_EXPRESSION_ID = "fit"
FIT_REMOVAL_DELAY_MS = 1000
UNKNOWN_ERROR_MESSAGE = "Unknown error occurred"

# Options of Desmos.GraphingCalculator that no request can change.
_WIDGET_CONSTANTS: List[Tuple[str, Union[bool, str]]] = [
    ("settingsMenu", True),
    ("zoomButtons", True),
    ("pointsOfInterest", True),
    ("trace", True),
    ("border", False),
    ("lockViewport", False),
    ("expressionsCollapsed", False),
    ("capExpressionSize", False),
    ("authorFeatures", False),
    ("images", True),
    ("folders", True),
    ("notes", True),
    ("sliders", True),
    ("actions", "auto"),
    ("substitutions", True),
    ("links", True),
    ("qwertyKeyboard", True),
    ("distributions", True),
    ("restrictedFunctions", False),
    ("forceEnableGeometryFunctions", False),
    ("pasteGraphLink", False),
    ("pasteTableData", True),
    ("clearIntoDegreeMode", False),
]


def normalize_expression(func: str) -> str:
    """Strip the first 'y=' so Desmos receives the right-hand side.

    Anything else, including other equations such as 'x=3', is kept
    verbatim. No syntax checking happens here.
    """
    if "y=" in func:
        return func.replace("y=", "", 1)
    return func


def _js_value(value: object) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return f"'{value}'"
    return _js_number(value)


def _js_number(value: object) -> str:
    # -5.0 is written as -5, the way a JS number prints
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        if value.is_integer():
            return str(int(value))
    return str(value)


def _widget_options_js(options: WidgetOptions) -> str:
    pairs = [
        ("keypad", options.keypad),
        ("graphpaper", options.graphpaper),
        ("expressions", options.expressions),
    ] + _WIDGET_CONSTANTS
    return ",\n".join(
        f"            {name}: {_js_value(value)}" for name, value in pairs
    )


def _math_bounds_js(bounds: Optional[ViewportBounds]) -> str:
    if bounds is None:
        return ""
    return f"""
        calculator.setMathBounds({{
            left: {_js_number(bounds.left)},
            right: {_js_number(bounds.right)},
            bottom: {_js_number(bounds.bottom)},
            top: {_js_number(bounds.top)}
        }});
        """


def expression_statement(index: int, expression: str,
                         escaper: Optional[Escaper] = None) -> str:
    esc = escaper or get_escaper("permissive")
    latex = esc.script_string(expression)
    return (
        f"calculator.setExpression({{ id: 'function{index}', "
        f"latex: '{latex}' }});"
    )


def render_graph_page(
    functions: Sequence[str],
    title: str,
    options: WidgetOptions,
    bounds: Optional[ViewportBounds],
    script_src: str,
    escaper: Optional[Escaper] = None,
) -> str:
    """Build the full-viewport calculator page.

    `functions` are registered in order as function0..functionN-1 after
    normalization. A temporary 'fit' expression frames them on load and
    is removed again after FIT_REMOVAL_DELAY_MS.
    """
    esc = escaper or get_escaper("permissive")
    statements = "\n        ".join(
        expression_statement(i, normalize_expression(func), esc)
        for i, func in enumerate(functions)
    )

    return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{esc.markup(title)}</title>
    <style>
        body {{
            margin: 0;
            padding: 0;
            background: white;
            width: 100%;
            height: 100vh;
            overflow: hidden;
        }}
        #calculator {{
            width: 100%;
            height: 100vh;
        }}
    </style>
</head>
<body>
    <div id="calculator"></div>

    <script src="{script_src}"></script>

    <script>
        var calculator = Desmos.GraphingCalculator(document.getElementById('calculator'), {{
{_widget_options_js(options)}
        }});

        {_math_bounds_js(bounds)}

        {statements}

        calculator.setExpression({{ id: '{FIT_EXPRESSION_ID}', latex: 'fit()' }});
        setTimeout(() => calculator.removeExpression({{ id: '{FIT_EXPRESSION_ID}' }}), {FIT_REMOVAL_DELAY_MS});
    </script>
</body>
</html>"""


def error_message_for(error: object) -> str:
    if isinstance(error, BaseException) and str(error):
        return str(error)
    return UNKNOWN_ERROR_MESSAGE


def render_error_page(error: object,
                      escaper: Optional[Escaper] = None) -> str:
    """Fixed-layout card shown when the graph page could not be built."""
    esc = escaper or get_escaper("permissive")
    message = esc.markup(error_message_for(error))
    return f"""
<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Graph Creation Error</title>
    <style>
        body {{
            font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
            margin: 0;
            padding: 20px;
            background-color: #f6f8fa;
            display: flex;
            justify-content: center;
            align-items: center;
            min-height: 100vh;
        }}
        .error-container {{
            background: white;
            border-radius: 12px;
            padding: 40px;
            box-shadow: 0 4px 16px rgba(0,0,0,0.1);
            text-align: center;
            max-width: 500px;
        }}
        .error-icon {{
            font-size: 48px;
            margin-bottom: 20px;
        }}
        .error-title {{
            color: #dc3545;
            font-size: 24px;
            margin-bottom: 16px;
        }}
        .error-message {{
            color: #6c757d;
            font-size: 16px;
            line-height: 1.5;
        }}
    </style>
</head>
<body>
    <div class="error-container">
        <div class="error-icon">&#9888;&#65039;</div>
        <div class="error-title">Graph Creation Error</div>
        <div class="error-message">
            Failed to create the function graph<br>
            {message}
        </div>
    </div>
</body>
</html>
            """
