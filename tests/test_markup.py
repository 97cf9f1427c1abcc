"""Tests for the markup tokenizer, style stack and run emitter."""

from __future__ import annotations

import pytest

from richstring.color import Color
from richstring.errors import MarkupError, MarkupSyntaxError, UnbalancedMarkup
from richstring.markup import (
    Event,
    EventType,
    RunEmitter,
    StyleStack,
    render_markup,
    tokenize,
)
from richstring.style import Alignment, FontRef, RunStyle, StyledRun, StyleSpec
from richstring.stylesheet import parse_stylesheet

ROOT = StyleSpec(font_name="system", font_size=14.0)
RED = Color(255, 0, 0)


def render(markup: str, stylesheet: str = "", **kwargs) -> list[StyledRun]:
    return render_markup(markup, parse_stylesheet(stylesheet), ROOT, **kwargs)


def texts(runs: list[StyledRun]) -> list[str]:
    return [run.text for run in runs]


# ---------------------------------------------------------------------------
# Tokenizer
# ---------------------------------------------------------------------------

class TestTokenize:
    def test_events_in_order(self) -> None:
        events = list(tokenize("a<b>c</b>"))
        assert events == [
            Event(EventType.TEXT, "a", 0),
            Event(EventType.START, "b", 1),
            Event(EventType.TEXT, "c", 4),
            Event(EventType.END, "b", 5),
        ]

    def test_whitespace_before_closing_bracket(self) -> None:
        kinds = [e.type for e in tokenize("<a >x</a >")]
        assert kinds == [EventType.START, EventType.TEXT, EventType.END]

    def test_hyphenated_names(self) -> None:
        assert [e.value for e in tokenize("<big-title></big-title>")] == [
            "big-title",
            "big-title",
        ]

    def test_predefined_entities_decoded(self) -> None:
        (event,) = tokenize("&lt;a&gt; &amp; &quot;q&quot; &apos;s&apos;")
        assert event.value == "<a> & \"q\" 's'"

    def test_other_entities_left_alone(self) -> None:
        (event,) = tokenize("&nbsp;&#65;")
        assert event.value == "&nbsp;&#65;"

    def test_empty_markup(self) -> None:
        assert list(tokenize("")) == []

    def test_unterminated_tag(self) -> None:
        with pytest.raises(MarkupSyntaxError) as info:
            list(tokenize("ok <b"))
        assert info.value.position == 3

    @pytest.mark.parametrize(
        "markup", ['<a href="x">', "<a/>", "< a>", "<!-- c -->", "1 < 2 > 0"]
    )
    def test_malformed_tags(self, markup: str) -> None:
        with pytest.raises(MarkupSyntaxError):
            list(tokenize(markup))


# ---------------------------------------------------------------------------
# Style stack and emitter
# ---------------------------------------------------------------------------

class TestStyleStack:
    def test_starts_with_root(self) -> None:
        stack = StyleStack(ROOT)
        assert stack.depth == 1
        assert stack.top == ROOT

    def test_push_merges_and_pop_restores(self) -> None:
        stack = StyleStack(ROOT)
        pushed = stack.push("t", StyleSpec(color=RED))
        assert pushed == StyleSpec(font_name="system", font_size=14.0, color=RED)
        assert stack.open_element == "t"
        stack.pop()
        assert stack.top == ROOT

    def test_push_without_override_inherits(self) -> None:
        stack = StyleStack(ROOT)
        stack.push("unknown")
        assert stack.top == ROOT
        assert stack.depth == 2

    def test_root_cannot_be_popped(self) -> None:
        with pytest.raises(UnbalancedMarkup):
            StyleStack(ROOT).pop()


class TestRunEmitter:
    def test_buffer_joined_into_one_run(self) -> None:
        emitter = RunEmitter()
        emitter.append("a")
        emitter.append("b")
        emitter.flush(ROOT)
        assert emitter.runs == [StyledRun("ab", RunStyle(FontRef("system", 14.0)))]

    def test_empty_flush_emits_nothing(self) -> None:
        emitter = RunEmitter()
        emitter.flush(ROOT)
        assert emitter.runs == []


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------

class TestRender:
    def test_plain_text_uses_root(self) -> None:
        runs = render("hello")
        assert runs == [StyledRun("hello", RunStyle(FontRef("system", 14.0)))]

    def test_nested_inheritance(self) -> None:
        runs = render(
            "<outer><inner>text</inner></outer>",
            "outer { font-size: 20; } inner { color: #ff0000; }",
        )
        assert len(runs) == 1
        assert runs[0].style == RunStyle(FontRef("system", 20.0), color=RED)

    def test_unknown_element_inherits(self) -> None:
        runs = render("<t><x>a</x></t>", "t { color: #ff0000; }")
        assert runs[0].style.color == RED

    def test_empty_elements_produce_no_runs(self) -> None:
        runs = render("<a></a><b>x</b>", "b { font-size: 9; }")
        assert runs == [StyledRun("x", RunStyle(FontRef("system", 9.0)))]

    def test_every_boundary_flushes(self) -> None:
        runs = render("a<b>b</b>c<b></b>d")
        assert texts(runs) == ["a", "b", "c", "d"]

    def test_style_restored_after_close(self) -> None:
        runs = render("<r>x</r>y", "r { color: #ff0000; }")
        assert runs[0].style.color == RED
        assert runs[1].style.color is None

    def test_unset_attributes_stay_unset(self) -> None:
        runs = render("<p>x</p>", "p { align: center; }")
        style = runs[0].style
        assert style.alignment is Alignment.CENTER
        assert style.color is None
        assert style.line_height is None
        assert style.baseline_offset is None

    def test_root_rule_styles_top_level_text(self) -> None:
        runs = render("a<b>c</b>", "body { font-size: 30; }", root_rule="body")
        assert [r.style.font.size for r in runs] == [30.0, 30.0]

    def test_missing_root_rule_is_ignored(self) -> None:
        runs = render("a", root_rule="nothing")
        assert runs[0].style.font.size == 14.0

    def test_empty_markup(self) -> None:
        assert render("") == []


class TestRenderErrors:
    def test_unclosed_element(self) -> None:
        with pytest.raises(MarkupSyntaxError):
            render("<a>text")

    def test_mismatched_close(self) -> None:
        with pytest.raises(MarkupSyntaxError) as info:
            render("<a><b>x</a></b>")
        assert info.value.position == 7

    def test_extra_close(self) -> None:
        with pytest.raises(UnbalancedMarkup):
            render("x</a>")

    def test_runs_before_error_are_reported(self) -> None:
        with pytest.raises(MarkupError) as info:
            render("<a>one</a>two</a>")
        assert [run.text for run in info.value.runs] == ["one", "two"]

    def test_malformed_tag_reports_earlier_runs(self) -> None:
        with pytest.raises(MarkupSyntaxError) as info:
            render("<a>ok</a> <b x>")
        assert [run.text for run in info.value.runs] == ["ok"]
