"""Host adapters for styled runs.

Turns :class:`~richstring.style.StyledRun` sequences into plain
JSON-compatible dictionaries or into HTML ``<span>`` markup.  Attributes
that are unset on a run are left out, so the host's own defaults apply.
"""

from __future__ import annotations

from collections.abc import Iterable
from html import escape
from typing import Any

from richstring.style import Alignment, RunStyle, StyledRun

_TEXT_ALIGN = {
    Alignment.LEFT: "left",
    Alignment.CENTER: "center",
    Alignment.RIGHT: "right",
    Alignment.JUSTIFIED: "justify",
    Alignment.NATURAL: "start",
}


def _number(value: float) -> int | float:
    return int(value) if float(value).is_integer() else value


# ---------------------------------------------------------------------------
# Dictionaries
# ---------------------------------------------------------------------------

def style_to_dict(style: RunStyle) -> dict[str, Any]:
    out: dict[str, Any] = {
        "font": {"name": style.font.name, "size": _number(style.font.size)},
    }
    if style.color is not None:
        c = style.color
        out["color"] = {"r": c.red, "g": c.green, "b": c.blue, "a": c.alpha}
    if style.alignment is not None:
        out["alignment"] = style.alignment.value
    if style.line_height is not None:
        out["line_height"] = _number(style.line_height)
    if style.baseline_offset is not None:
        out["baseline_offset"] = _number(style.baseline_offset)
    return out


def run_to_dict(run: StyledRun) -> dict[str, Any]:
    return {"text": run.text, "style": style_to_dict(run.style)}


def runs_to_dicts(runs: Iterable[StyledRun]) -> list[dict[str, Any]]:
    """Return a JSON-serialisable list describing *runs*."""
    return [run_to_dict(run) for run in runs]


# ---------------------------------------------------------------------------
# HTML
# ---------------------------------------------------------------------------

def _css_string(value: str) -> str:
    """Quote *value* as a CSS string literal."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\a ")
    return f'"{escaped}"'


def style_to_css(style: RunStyle) -> str:
    """Return an inline CSS declaration list for *style*.

    The result is plain CSS; callers embedding it in an attribute must
    HTML-escape it.
    """
    decls = [
        f"font-family: {_css_string(style.font.name)}",
        f"font-size: {_number(style.font.size)}px",
    ]
    if style.color is not None:
        decls.append(f"color: {style.color.to_css()}")
    if style.alignment is not None:
        decls.append(f"text-align: {_TEXT_ALIGN[style.alignment]}")
    if style.line_height is not None:
        decls.append(f"line-height: {_number(style.line_height)}")
    if style.baseline_offset is not None:
        decls.append(f"vertical-align: {_number(style.baseline_offset)}px")
    return "; ".join(decls)


def runs_to_html(runs: Iterable[StyledRun]) -> str:
    """Render *runs* as a sequence of ``<span>`` elements."""
    return "".join(
        f'<span style="{escape(style_to_css(run.style))}">{escape(run.text, quote=False)}</span>'
        for run in runs
    )
