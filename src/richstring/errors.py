"""Exception types raised by richstring."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from richstring.style import StyledRun


class RichStringError(Exception):
    """Base class for all richstring errors."""


# ---------------------------------------------------------------------------
# Colors
# ---------------------------------------------------------------------------

class ColorError(RichStringError, ValueError):
    """Raised when a color literal cannot be parsed."""

    def __init__(self, message: str, text: str) -> None:
        self.text = text
        super().__init__(message)


class InvalidColor(ColorError):
    """A ``#hex`` or ``rgb()`` literal with bad length, digits or fields."""


class UnrecognizedColorForm(ColorError):
    """Text that is neither a ``#hex`` nor an ``rgb()``/``rgba()`` literal."""


# ---------------------------------------------------------------------------
# Markup
# ---------------------------------------------------------------------------

class MarkupError(RichStringError):
    """Raised when a markup fragment is structurally broken.

    ``position`` is the character offset in the caller's markup string.
    ``runs`` holds the runs flushed strictly before the error point.
    """

    def __init__(
        self,
        message: str,
        position: int | None = None,
        runs: tuple[StyledRun, ...] = (),
    ) -> None:
        self.position = position
        self.runs = runs
        super().__init__(message)


class MarkupSyntaxError(MarkupError):
    """Unterminated, malformed, mismatched or unclosed tags."""


class UnbalancedMarkup(MarkupError):
    """A closing tag with no open element left to close."""
