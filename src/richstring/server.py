"""FastAPI web service for rendering markup into styled runs.

Endpoints::

    GET  /health        Health check.
    GET  /alignments    List recognised alignment keywords.
    POST /render        Markup + stylesheet in, JSON runs out.
    POST /render/html   Markup + stylesheet in, HTML spans out.

Run::

    uvicorn richstring.server:app --host 0.0.0.0 --port 8000
"""

from __future__ import annotations

from typing import Any, Optional

from fastapi import FastAPI, Form, HTTPException, Request
from fastapi.responses import HTMLResponse, JSONResponse

from richstring import __version__
from richstring.converter import DEFAULT_FONT_NAME, DEFAULT_FONT_SIZE, RichString
from richstring.errors import MarkupError
from richstring.renderer import runs_to_dicts, runs_to_html
from richstring.style import Alignment, StyledRun

app = FastAPI(
    title="richstring",
    description="Styled text runs from markup and a stylesheet",
    version=__version__,
)


@app.exception_handler(MarkupError)
async def markup_error_handler(_request: Request, exc: MarkupError) -> JSONResponse:
    return JSONResponse(
        status_code=422,
        content={"detail": str(exc), "position": exc.position},
    )


def _render(
    markup: str,
    stylesheet: str,
    font_name: str,
    font_size: float,
    root_rule: Optional[str],
) -> list[StyledRun]:
    try:
        rich = RichString(
            stylesheet,
            default_font_name=font_name,
            default_font_size=font_size,
            root_rule=root_rule or None,
        )
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return rich.render(markup)


@app.get("/health")
async def health() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "ok", "version": __version__}


@app.get("/alignments")
async def list_alignments() -> dict[str, list[str]]:
    """List the values accepted by the ``align`` clause."""
    return {"alignments": [a.value for a in Alignment]}


@app.post("/render")
async def render(
    markup: str = Form(...),
    stylesheet: str = Form(""),
    font_name: str = Form(DEFAULT_FONT_NAME, min_length=1),
    font_size: float = Form(DEFAULT_FONT_SIZE, gt=0, allow_inf_nan=False),
    root_rule: str = Form(""),
) -> dict[str, Any]:
    """Render markup and return the runs as JSON.

    - **markup**: Markup fragment
    - **stylesheet**: Stylesheet source
    - **font_name** / **font_size**: Root font
    - **root_rule**: Rule applied to top-level text
    """
    runs = _render(markup, stylesheet, font_name, font_size, root_rule)
    return {"runs": runs_to_dicts(runs)}


@app.post("/render/html", response_class=HTMLResponse)
async def render_html(
    markup: str = Form(...),
    stylesheet: str = Form(""),
    font_name: str = Form(DEFAULT_FONT_NAME, min_length=1),
    font_size: float = Form(DEFAULT_FONT_SIZE, gt=0, allow_inf_nan=False),
    root_rule: str = Form(""),
) -> HTMLResponse:
    """Render markup and return ``<span>`` HTML."""
    runs = _render(markup, stylesheet, font_name, font_size, root_rule)
    return HTMLResponse(content=runs_to_html(runs))
