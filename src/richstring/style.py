"""Style value objects.

:class:`StyleSpec` is a *partial* style: every field is either set or
``None`` (unset, inherit from the parent).  Specs combine by override-merge.
:class:`RunStyle` is the fully resolved style attached to each emitted
:class:`StyledRun`.
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from enum import Enum
from typing import Optional

from richstring.color import Color


class Alignment(Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"
    JUSTIFIED = "justified"
    NATURAL = "natural"


# ---------------------------------------------------------------------------
# Partial style
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class StyleSpec:
    """Partial style specification; ``None`` means unset."""

    font_name: Optional[str] = None
    font_size: Optional[float] = None
    color: Optional[Color] = None
    alignment: Optional[Alignment] = None
    line_height: Optional[float] = None
    baseline_offset: Optional[float] = None

    def merged(self, override: StyleSpec) -> StyleSpec:
        """Return a copy with every field set in *override* taking precedence."""
        changes = {}
        for f in fields(self):
            value = getattr(override, f.name)
            if value is not None:
                changes[f.name] = value
        return replace(self, **changes)

    def set_fields(self) -> dict[str, object]:
        """Return only the fields that carry a value."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not None
        }

    @property
    def is_empty(self) -> bool:
        return not self.set_fields()


def merge(parent: StyleSpec, override: StyleSpec) -> StyleSpec:
    """Override-merge *override* onto *parent*, field by field."""
    return parent.merged(override)


# ---------------------------------------------------------------------------
# Resolved style
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class FontRef:
    """A requested font; resolving it to a real font is up to the host."""

    name: str
    size: float


@dataclass(frozen=True)
class RunStyle:
    """Resolved style of a run.

    ``font`` is always present.  The optional attributes are ``None`` when
    no element in scope set them, meaning "use the host's ambient default".
    """

    font: FontRef
    color: Optional[Color] = None
    alignment: Optional[Alignment] = None
    line_height: Optional[float] = None
    baseline_offset: Optional[float] = None

    @classmethod
    def from_spec(cls, spec: StyleSpec) -> RunStyle:
        if spec.font_name is None or spec.font_size is None:
            raise ValueError(f"style has no font name or size: {spec!r}")
        return cls(
            font=FontRef(spec.font_name, spec.font_size),
            color=spec.color,
            alignment=spec.alignment,
            line_height=spec.line_height,
            baseline_offset=spec.baseline_offset,
        )


@dataclass(frozen=True)
class StyledRun:
    """A non-empty text span and its resolved style."""

    text: str
    style: RunStyle


def coalesce_runs(runs: list[StyledRun]) -> list[StyledRun]:
    """Join adjacent runs that share an identical style."""
    out: list[StyledRun] = []
    for run in runs:
        if out and out[-1].style == run.style:
            out[-1] = StyledRun(out[-1].text + run.text, run.style)
        else:
            out.append(run)
    return out
