"""Markup parser, style stack and run emitter.

Markup is a fragment of nested tags without attributes plus text::

    <title>Hello</title> <em>world</em>

The fragment is treated as the content of one implicit outer element, so
top-level text always has the root style.  Every tag boundary flushes the
buffered text into one :class:`~richstring.style.StyledRun` styled by the
innermost open element.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Optional
from xml.sax.saxutils import unescape

from richstring.errors import MarkupError, MarkupSyntaxError, UnbalancedMarkup
from richstring.style import RunStyle, StyledRun, StyleSpec

logger = logging.getLogger(__name__)

_TAG_RE = re.compile(r"<(?P<close>/)?(?P<name>[\w-]+)\s*>")

_ENTITIES = {"&quot;": '"', "&apos;": "'"}


# ---------------------------------------------------------------------------
# Tokenizer
# ---------------------------------------------------------------------------

class EventType(Enum):
    START = "start"
    END = "end"
    TEXT = "text"


@dataclass(frozen=True)
class Event:
    type: EventType
    value: str
    position: int


def tokenize(markup: str) -> Iterator[Event]:
    """Yield start, end and text events for *markup* in document order.

    Only tag syntax is checked here; nesting is checked by the consumer.

    Raises:
        MarkupSyntaxError: a ``<`` that does not start a well-formed tag.
    """
    pos = 0
    length = len(markup)
    while pos < length:
        lt = markup.find("<", pos)
        if lt == -1:
            yield Event(EventType.TEXT, unescape(markup[pos:], _ENTITIES), pos)
            return
        if lt > pos:
            yield Event(EventType.TEXT, unescape(markup[pos:lt], _ENTITIES), pos)
        m = _TAG_RE.match(markup, lt)
        if m is None:
            if markup.find(">", lt) == -1:
                raise MarkupSyntaxError(f"unterminated tag at offset {lt}", lt)
            raise MarkupSyntaxError(f"malformed tag at offset {lt}", lt)
        kind = EventType.END if m.group("close") else EventType.START
        yield Event(kind, m.group("name"), lt)
        pos = m.end()


# ---------------------------------------------------------------------------
# Style stack
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class _Frame:
    name: Optional[str]
    spec: StyleSpec


class StyleStack:
    """Resolved styles of the currently open elements.

    The bottom frame is the root style and is never popped.
    """

    def __init__(self, root: StyleSpec) -> None:
        self._frames: list[_Frame] = [_Frame(None, root)]

    @property
    def depth(self) -> int:
        return len(self._frames)

    @property
    def top(self) -> StyleSpec:
        return self._frames[-1].spec

    @property
    def open_element(self) -> Optional[str]:
        return self._frames[-1].name

    def push(self, name: Optional[str], override: Optional[StyleSpec] = None) -> StyleSpec:
        """Open *name*, merging *override* over the current top."""
        spec = self.top if override is None else self.top.merged(override)
        self._frames.append(_Frame(name, spec))
        return spec

    def pop(self) -> StyleSpec:
        if len(self._frames) == 1:
            raise UnbalancedMarkup("cannot close the root style")
        return self._frames.pop().spec


# ---------------------------------------------------------------------------
# Run emitter
# ---------------------------------------------------------------------------

class RunEmitter:
    """Buffers character data and emits runs at element boundaries."""

    def __init__(self) -> None:
        self.runs: list[StyledRun] = []
        self._buffer: list[str] = []

    def append(self, text: str) -> None:
        self._buffer.append(text)

    def flush(self, spec: StyleSpec) -> None:
        text = "".join(self._buffer)
        self._buffer.clear()
        if not text:
            return
        self.runs.append(StyledRun(text, RunStyle.from_spec(spec)))


# ---------------------------------------------------------------------------
# Driver
# ---------------------------------------------------------------------------

def render_markup(
    markup: str,
    styles: Mapping[str, StyleSpec],
    root: StyleSpec,
    root_rule: Optional[str] = None,
) -> list[StyledRun]:
    """Convert *markup* into styled runs.

    Args:
        markup: Markup fragment.
        styles: Rule name to partial style, usually a
            :class:`~richstring.stylesheet.Stylesheet`.
        root: Root style; must set ``font_name`` and ``font_size``.
        root_rule: Optional rule applied to the implicit outer element.

    Raises:
        MarkupSyntaxError: malformed, mismatched or unclosed tags.
        UnbalancedMarkup: a closing tag with nothing left to close.
    """
    stack = StyleStack(root)
    emitter = RunEmitter()
    stack.push(None, styles.get(root_rule) if root_rule else None)
    outer_depth = stack.depth

    try:
        for event in tokenize(markup):
            if event.type is EventType.TEXT:
                emitter.append(event.value)
            elif event.type is EventType.START:
                emitter.flush(stack.top)
                stack.push(event.value, styles.get(event.value))
            else:
                emitter.flush(stack.top)
                if stack.depth == outer_depth:
                    raise UnbalancedMarkup(
                        f"</{event.value}> at offset {event.position} has no open element",
                        event.position,
                    )
                if stack.open_element != event.value:
                    raise MarkupSyntaxError(
                        f"</{event.value}> at offset {event.position} does not "
                        f"close <{stack.open_element}>",
                        event.position,
                    )
                stack.pop()
        if stack.depth > outer_depth:
            raise MarkupSyntaxError(
                f"<{stack.open_element}> is never closed", len(markup)
            )
        emitter.flush(stack.top)
        stack.pop()
    except MarkupError as exc:
        logger.debug("Markup rejected: %s", exc)
        exc.runs = tuple(emitter.runs)
        raise

    return emitter.runs
