"""Stylesheet parser.

Parses a tiny CSS-like language into a :class:`Stylesheet`, a read-only
mapping from rule name to :class:`~richstring.style.StyleSpec`::

    title { font-name: Helvetica; font-size: 24; color: #ff0000; }
    note  { color: rgba(0, 0, 0, 128); align: center; }

Parsing is best-effort and never raises: a rule or clause that cannot be
understood is skipped and the rest of the stylesheet is kept.
"""

from __future__ import annotations

import locale
import logging
import math
import re
from collections.abc import Callable, Iterator, Mapping
from typing import Any, Optional

from richstring.color import Color, parse_color
from richstring.errors import ColorError
from richstring.style import Alignment, StyleSpec

logger = logging.getLogger(__name__)

# A rule: name { body }.  The body ends at the first closing brace.
_RULE_RE = re.compile(
    r"""
    \s*
    (?P<name>[\w-]+)        # rule name
    \s*
    \{
    (?P<body>[^}]*)         # clauses, not parsed for nested braces
    \}
    """,
    re.VERBOSE,
)

# A clause: key: value;  (at least one space after the colon)
_CLAUSE_RE = re.compile(
    r"""
    \s*
    (?P<key>[\w-]+)
    :\s+
    (?P<value>[^;]*?)
    ;
    """,
    re.VERBOSE,
)


# ---------------------------------------------------------------------------
# Value converters -- each returns None when the value is not usable
# ---------------------------------------------------------------------------

def _number(value: str) -> Optional[float]:
    # Plain decimals only, using the current LC_NUMERIC decimal point.
    point = re.escape(locale.localeconv()["decimal_point"])
    if not re.fullmatch(rf"[+-]?(?:\d+(?:{point}\d*)?|{point}\d+)", value):
        return None
    try:
        number = locale.atof(value)
    except ValueError:
        return None
    if not math.isfinite(number):
        return None
    return number


def _positive_number(value: str) -> Optional[float]:
    number = _number(value)
    if number is None or number <= 0:
        return None
    return number


def _color(value: str) -> Optional[Color]:
    try:
        return parse_color(value)
    except ColorError as exc:
        logger.warning("Ignoring color value %r: %s", value, exc)
        return None


def _alignment(value: str) -> Optional[Alignment]:
    try:
        return Alignment(value)
    except ValueError:
        return None


def _string(value: str) -> Optional[str]:
    return value or None


# clause key -> (StyleSpec field, converter)
CLAUSES: dict[str, tuple[str, Callable[[str], Any]]] = {
    "font-name": ("font_name", _string),
    "font-size": ("font_size", _positive_number),
    "color": ("color", _color),
    "align": ("alignment", _alignment),
    "text-alignment": ("alignment", _alignment),
    "alignment": ("alignment", _alignment),
    "line-height": ("line_height", _positive_number),
    "baseline-offset": ("baseline_offset", _number),
}


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------

def parse_clauses(body: str) -> StyleSpec:
    """Parse the inside of a rule's braces into a :class:`StyleSpec`."""
    values: dict[str, Any] = {}
    for match in _CLAUSE_RE.finditer(body):
        key = match.group("key")
        value = match.group("value").strip()
        if key not in CLAUSES:
            logger.debug("Ignoring unknown clause %r", key)
            continue
        field_name, convert = CLAUSES[key]
        converted = convert(value)
        if converted is None:
            logger.debug("Ignoring clause %s: %r", key, value)
            continue
        values[field_name] = converted
    return StyleSpec(**values)


class Stylesheet(Mapping[str, StyleSpec]):
    """Read-only mapping from rule name to :class:`StyleSpec`.

    Usage::

        sheet = parse_stylesheet("title { font-size: 24; }")
        sheet["title"].font_size      # 24.0
    """

    def __init__(self, rules: Optional[Mapping[str, StyleSpec]] = None) -> None:
        self._rules: dict[str, StyleSpec] = dict(rules or {})

    def __getitem__(self, name: str) -> StyleSpec:
        return self._rules[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def __repr__(self) -> str:
        return f"Stylesheet({self._rules!r})"

    @classmethod
    def from_sources(cls, *sources: str) -> Stylesheet:
        """Concatenate *sources* in order and parse the result."""
        return parse_stylesheet("".join(sources))


def parse_stylesheet(text: str) -> Stylesheet:
    """Parse stylesheet *text*.  Later rules replace earlier ones by name."""
    rules: dict[str, StyleSpec] = {}
    for match in _RULE_RE.finditer(text):
        name = match.group("name")
        if name in rules:
            logger.debug("Rule %r redefined, keeping the last definition", name)
        rules[name] = parse_clauses(match.group("body"))
    return Stylesheet(rules)
