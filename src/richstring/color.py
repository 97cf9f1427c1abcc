"""Color literal parsing.

Two literal forms are understood::

    #rrggbb  #rrggbbaa                hex, case-insensitive
    rgb(r, g, b)  rgba(r, g, b, a)    decimal integers

Channels are kept as the integers written in the source.  They are not
clamped, so ``rgb(300, 0, 0)`` yields a red channel of 300 and a
normalized component above 1.0.
"""

from __future__ import annotations

import re
import string
from dataclasses import dataclass
from typing import Optional

from richstring.errors import ColorError, InvalidColor, UnrecognizedColorForm

OPAQUE = 255

_HEX_LENGTHS = (7, 9)

_RGB_RE = re.compile(
    r"""
    rgba?\s*\(
    \s*(?P<r>\d+)\s*,
    \s*(?P<g>\d+)\s*,
    \s*(?P<b>\d+)
    (?:\s*,\s*(?P<a>\d+))?
    \s*\)
    """,
    re.VERBOSE,
)


@dataclass(frozen=True)
class Color:
    """An RGBA color with integer channels (255 is full intensity)."""

    red: int
    green: int
    blue: int
    alpha: int = OPAQUE

    # -- constructors -------------------------------------------------------

    @classmethod
    def from_hex(cls, text: str) -> Color:
        """Parse ``#rrggbb`` or ``#rrggbbaa``."""
        if not text.startswith("#"):
            raise UnrecognizedColorForm(f"not a hex color: {text!r}", text)
        if len(text) not in _HEX_LENGTHS:
            raise InvalidColor(
                f"hex color must have 6 or 8 digits: {text!r}", text
            )
        digits = text[1:]
        if any(ch not in string.hexdigits for ch in digits):
            raise InvalidColor(f"non-hex digit in color: {text!r}", text)
        channels = [int(digits[i:i + 2], 16) for i in range(0, len(digits), 2)]
        return cls(*channels)

    @classmethod
    def from_rgb(cls, text: str) -> Color:
        """Parse ``rgb(r, g, b)`` or ``rgba(r, g, b, a)``."""
        if not text.startswith("rgb"):
            raise UnrecognizedColorForm(f"not an rgb() color: {text!r}", text)
        m = _RGB_RE.fullmatch(text)
        if m is None:
            raise InvalidColor(f"did not understand rgb color value: {text!r}", text)
        alpha = m.group("a")
        return cls(
            red=int(m.group("r")),
            green=int(m.group("g")),
            blue=int(m.group("b")),
            alpha=OPAQUE if alpha is None else int(alpha),
        )

    @classmethod
    def from_html(cls, text: str, default: Optional[Color] = None) -> Color:
        """Parse *text*, falling back to *default* (opaque black) on failure."""
        try:
            return parse_color(text)
        except ColorError:
            return BLACK if default is None else default

    # -- conversions --------------------------------------------------------

    def components(self) -> tuple[float, float, float, float]:
        """Return ``(r, g, b, a)`` normalized by 255."""
        return (
            self.red / 255.0,
            self.green / 255.0,
            self.blue / 255.0,
            self.alpha / 255.0,
        )

    def to_hex(self) -> str:
        """Return ``#rrggbb``, or ``#rrggbbaa`` when not fully opaque."""
        out = f"#{self.red:02x}{self.green:02x}{self.blue:02x}"
        if self.alpha != OPAQUE:
            out += f"{self.alpha:02x}"
        return out

    def to_css(self) -> str:
        """Return a CSS ``rgba()`` expression."""
        return f"rgba({self.red}, {self.green}, {self.blue}, {self.alpha / 255.0:.3g})"


BLACK = Color(0, 0, 0)


def parse_color(text: str) -> Color:
    """Parse a hex or functional color literal.

    Raises:
        InvalidColor: the literal has a recognised prefix but is malformed.
        UnrecognizedColorForm: the literal starts with neither ``#`` nor ``rgb``.
    """
    if text.startswith("#"):
        return Color.from_hex(text)
    if text.startswith("rgb"):
        return Color.from_rgb(text)
    raise UnrecognizedColorForm(f"did not understand color value: {text!r}", text)
