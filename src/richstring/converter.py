"""High-level stylesheet + markup conversion.

Ties the stylesheet parser and the markup parser together behind one
object that is built once per stylesheet and reused for many fragments.
"""

from __future__ import annotations

import math
from typing import Optional

from richstring.markup import render_markup
from richstring.style import StyledRun, StyleSpec
from richstring.stylesheet import Stylesheet

DEFAULT_FONT_NAME = "system"
DEFAULT_FONT_SIZE = 14.0


class RichString:
    """Render markup fragments with a fixed stylesheet.

    Usage::

        rs = RichString("title { font-size: 24; color: #ff0000; }")
        runs = rs.render("<title>Hello</title> world")

    Several stylesheet fragments may be given; they are concatenated in
    order before parsing.  The instance holds no per-render state, so one
    instance may be shared between threads.
    """

    def __init__(
        self,
        *stylesheets: str,
        default_font_name: str = DEFAULT_FONT_NAME,
        default_font_size: float = DEFAULT_FONT_SIZE,
        root_rule: Optional[str] = None,
    ) -> None:
        if not default_font_name:
            raise ValueError("default_font_name must not be empty")
        if not math.isfinite(default_font_size) or default_font_size <= 0:
            raise ValueError(
                f"default_font_size must be a positive finite number, got {default_font_size!r}"
            )
        self.stylesheet = Stylesheet.from_sources(*stylesheets)
        self.root_style = StyleSpec(
            font_name=default_font_name,
            font_size=float(default_font_size),
        )
        self.root_rule = root_rule

    def render(self, markup: str) -> list[StyledRun]:
        """Convert *markup* into styled runs.

        Raises:
            MarkupError: the fragment is structurally broken.
        """
        return render_markup(markup, self.stylesheet, self.root_style, self.root_rule)

    def render_text(self, markup: str) -> str:
        """Return the plain text of *markup* with all tags removed."""
        return "".join(run.text for run in self.render(markup))
