import logging

import pytest

from desmos_graph_mcp.escaping import (
    escape_script_close,
    get_escaper,
    html_escape,
    js_single_quoted,
)
from desmos_graph_mcp.graph import build_graph_html, render_graph
from desmos_graph_mcp.models import GraphRequest
from desmos_graph_mcp.resources import GRAPH_URI_PREFIX, create_ui_resource
from desmos_graph_mcp.validation import (
    ValidationSeverity,
    inspect_interpolated_text,
    summarize_issues,
)


HOSTILE = "y=x');</script><script>alert(1)//"


def test_html_escape():
    assert html_escape('<b>"A&B"</b>') == "&lt;b&gt;&quot;A&amp;B&quot;&lt;/b&gt;"


def test_escape_script_close():
    assert escape_script_close("a</script>") == "a<\\/script>"


def test_js_single_quoted():
    assert js_single_quoted("\\frac{1}{x}") == "\\\\frac{1}{x}"
    assert js_single_quoted("it's") == "it\\'s"
    assert js_single_quoted("a\nb") == "a\\nb"
    assert js_single_quoted("</script>") == "<\\/script>"


def test_unknown_mode_raises():
    with pytest.raises(ValueError):
        get_escaper("paranoid")


def test_permissive_mode_passes_text_through(config):
    request = GraphRequest(functions=[HOSTILE], title="<i>T</i>")
    html = build_graph_html(request, config, escaping="permissive")

    assert "latex: 'x');</script><script>alert(1)//' });" in html
    assert "<title><i>T</i></title>" in html


def test_strict_mode_escapes_title_and_expressions(config):
    request = GraphRequest(functions=[HOSTILE], title="<i>T</i>")
    html = build_graph_html(request, config, escaping="strict")

    assert "latex: 'x\\');<\\/script><script>alert(1)//' });" in html
    assert "<title>&lt;i&gt;T&lt;/i&gt;</title>" in html
    assert html.count("</script>") == 2


def test_strict_mode_comes_from_config(config):
    strict = config.model_copy(update={"escaping": "strict"})
    html = build_graph_html(GraphRequest(functions=["y=\\sin(x)"]), strict)
    assert "latex: '\\\\sin(x)'" in html


def test_strict_mode_escapes_error_message(config):
    def factory(uri, html, encoding="blob"):
        if uri.startswith(GRAPH_URI_PREFIX):
            raise RuntimeError("<b>boom</b>")
        return create_ui_resource(uri=uri, html=html, encoding=encoding)

    result = render_graph(
        GraphRequest(functions=["y=x"]),
        config,
        escaping="strict",
        resource_factory=factory,
    )
    assert "&lt;b&gt;boom&lt;/b&gt;" in result.resource.content.htmlString


def test_permissive_mode_logs_findings(config, caplog):
    with caplog.at_level(logging.WARNING):
        build_graph_html(GraphRequest(functions=["y=x", HOSTILE]), config)
    assert "function1 is interpolated unescaped" in caplog.text
    assert "function0" not in caplog.text


# ──────────────────────────────────────────────────────────────────────────────
# Interpolation inspection
# ──────────────────────────────────────────────────────────────────────────────
def test_plain_expression_has_no_findings():
    assert inspect_interpolated_text("x^2+\\sin(x)") == []


@pytest.mark.parametrize(
    "text, fragment",
    [
        ("it's", "Single quote"),
        ('say "hi"', "Double quote"),
        ("</SCRIPT >", "Script-closing"),
        ("a\nb", "Line break"),
    ],
)
def test_findings_are_warnings(text, fragment):
    issues = inspect_interpolated_text(text)
    assert any(fragment in i.message for i in issues)
    assert all(i.severity is ValidationSeverity.WARNING for i in issues)
    assert summarize_issues(issues).startswith("WARNING: ")
