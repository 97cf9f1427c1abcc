"""richstring - styled text runs from a tiny stylesheet and tag markup."""

from richstring.color import Color, parse_color
from richstring.converter import RichString
from richstring.errors import (
    ColorError,
    InvalidColor,
    MarkupError,
    MarkupSyntaxError,
    RichStringError,
    UnbalancedMarkup,
    UnrecognizedColorForm,
)
from richstring.markup import render_markup
from richstring.style import (
    Alignment,
    FontRef,
    RunStyle,
    StyledRun,
    StyleSpec,
    coalesce_runs,
    merge,
)
from richstring.stylesheet import Stylesheet, parse_stylesheet

__version__ = "0.1.0"

__all__ = [
    "Alignment",
    "Color",
    "ColorError",
    "FontRef",
    "InvalidColor",
    "MarkupError",
    "MarkupSyntaxError",
    "RichString",
    "RichStringError",
    "RunStyle",
    "StyleSpec",
    "StyledRun",
    "Stylesheet",
    "UnbalancedMarkup",
    "UnrecognizedColorForm",
    "__version__",
    "coalesce_runs",
    "merge",
    "parse_color",
    "parse_stylesheet",
    "render_markup",
]
