"""Pygments colouring for decoded-event listings."""

from __future__ import annotations

from pygments import highlight
from pygments.formatters import Terminal256Formatter
from pygments.lexers import PythonLexer
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

DEFAULT_STYLE = "monokai"

_FORMATTERS: dict[str, Terminal256Formatter] = {}
_LEXER = PythonLexer()


def _normalize_style(style: str) -> str:
    try:
        get_style_by_name(style)
    except ClassNotFound:
        return DEFAULT_STYLE
    return style


def _formatter_for_style(style: str) -> Terminal256Formatter:
    formatter = _FORMATTERS.get(style)
    if formatter is not None:
        return formatter
    formatter = Terminal256Formatter(style=style)
    _FORMATTERS[style] = formatter
    return formatter


def colorize_line(text: str, style: str = DEFAULT_STYLE) -> str:
    """Highlight one line of Python-like text for terminal output.

    Unknown style names fall back to ``monokai``.
    """
    formatter = _formatter_for_style(_normalize_style(style))
    return highlight(text, _LEXER, formatter).rstrip("\n")
