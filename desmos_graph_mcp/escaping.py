from __future__ import annotations

from typing import Callable, Dict

from .config import EscapingMode


def html_escape(text: str) -> str:
    return (
        text.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
    )


def escape_script_close(js_text: str) -> str:
    r"""Prevent '</script>' from prematurely terminating the script tag.

    This replaces '</' with '<\/' which is safe in JS strings and avoids
    closing the surrounding <script> block when the HTML is parsed.
    """
    return js_text.replace("</", "<\\/")


def js_single_quoted(text: str) -> str:
    """Escape text for the inside of a single-quoted JS string literal."""
    escaped = (
        text.replace("\\", "\\\\")
        .replace("'", "\\'")
        .replace("\r", "\\r")
        .replace("\n", "\\n")
        .replace("\u2028", "\\u2028")
        .replace("\u2029", "\\u2029")
    )
    return escape_script_close(escaped)


def _verbatim(text: str) -> str:
    return text


class Escaper:
    """Escaping boundary between request text and the generated document.

    In permissive mode text is interpolated as-is, so quotes or a
    script-closing sequence in an expression alter the document.
    """

    def __init__(self, mode: EscapingMode = "permissive") -> None:
        self.mode = mode
        strict = mode == "strict"
        self.markup: Callable[[str], str] = html_escape if strict else _verbatim
        self.script_string: Callable[[str], str] = (
            js_single_quoted if strict else _verbatim
        )

    def __repr__(self) -> str:
        return f"Escaper(mode={self.mode!r})"


_ESCAPERS: Dict[str, Escaper] = {
    "permissive": Escaper("permissive"),
    "strict": Escaper("strict"),
}


def get_escaper(mode: EscapingMode) -> Escaper:
    try:
        return _ESCAPERS[mode]
    except KeyError:
        raise ValueError(
            f"Escaping mode '{mode}' not found. Available: {sorted(_ESCAPERS)}"
        ) from None
