"""Tests for spans module."""

import pytest

from spans import (
    AnsiSpans,
    PlainSpans,
    calculator_for,
    char_width,
    escape_end,
    iter_spans,
)
from table_types import Span, SpanMode

RED = "\x1b[31m"
BOLD = "\x1b[1m"
RESET = "\x1b[0m"


class TestEscapeEnd:
    """Tests for escape sequence boundaries."""

    def test_csi_color(self) -> None:
        text = f"{RED}X"
        assert escape_end(text, 0) == len(RED)

    def test_osc_hyperlink_bel_terminated(self) -> None:
        text = "\x1b]8;;http://x\x07link"
        assert text[escape_end(text, 0) :] == "link"

    def test_sequence_in_middle(self) -> None:
        text = f"ab{RED}cd"
        assert text[escape_end(text, 2) :] == "cd"

    def test_unterminated_csi_consumed_to_end(self) -> None:
        text = "ab\x1b[31"
        assert escape_end(text, 2) == len(text)

    def test_unterminated_osc_consumed_to_end(self) -> None:
        text = "ab\x1b]8;;http://x"
        assert escape_end(text, 2) == len(text)

    def test_lone_trailing_escape(self) -> None:
        text = "ab\x1b"
        assert escape_end(text, 2) == 3

    def test_lone_escape_between_text(self) -> None:
        text = "*\x1b*"
        assert escape_end(text, 1) == 2


class TestCharWidth:
    """Tests for single character display width."""

    def test_ascii(self) -> None:
        assert char_width("a") == 1

    def test_wide(self) -> None:
        assert char_width("日") == 2

    def test_combining_mark(self) -> None:
        assert char_width("\u0301") == 0

    def test_control(self) -> None:
        assert char_width("\n") == 0


class TestAnsiSpans:
    """Tests for the escape-aware calculator."""

    def test_visible_width_ignores_escapes(self) -> None:
        spans = AnsiSpans()
        assert spans.visible_width(f"{RED}Hello{RESET}") == 5

    def test_visible_width_wide_characters(self) -> None:
        spans = AnsiSpans()
        assert spans.visible_width("日本") == 4

    def test_visible_width_combining(self) -> None:
        spans = AnsiSpans()
        assert spans.visible_width("e\u0301") == 1

    def test_visible_width_unterminated(self) -> None:
        spans = AnsiSpans()
        assert spans.visible_width("ab\x1b[31;") == 2

    def test_span_includes_leading_escape(self) -> None:
        spans = AnsiSpans()
        text = f"{RED}Hello{RESET}"
        assert text[: spans.span_for(text, 3)] == f"{RED}Hel"

    def test_span_beyond_length_is_full(self) -> None:
        spans = AnsiSpans()
        text = f"{RED}Hello{RESET}"
        assert spans.span_for(text, 5) == len(text)
        assert spans.span_for(text, 50) == len(text)

    def test_escape_before_untaken_char_excluded(self) -> None:
        spans = AnsiSpans()
        text = f"ab{BOLD}cd"
        assert spans.span_for(text, 2) == 2

    def test_zero_count(self) -> None:
        spans = AnsiSpans()
        assert spans.span_for(f"{RED}abc", 0) == 0

    def test_wide_char_not_split_across_budget(self) -> None:
        spans = AnsiSpans()
        assert spans.span_for("日本語", 3) == 1

    def test_min_one_takes_oversized_char(self) -> None:
        spans = AnsiSpans()
        assert spans.span_for("日本", 1) == 0
        assert spans.span_for("日本", 1, min_one=True) == 1

    def test_combining_mark_stays_with_base(self) -> None:
        spans = AnsiSpans()
        assert spans.span_for("e\u0301x", 1) == 2

    def test_combining_mark_after_escape_stays_with_base(self) -> None:
        spans = AnsiSpans()
        text = f"e{RESET}\u0301x"
        assert text[: spans.span_for(text, 1)] == f"e{RESET}\u0301"

    def test_visible_width_unterminated_osc(self) -> None:
        spans = AnsiSpans()
        assert spans.visible_width("ab\x1b]8;;url") == 2

    def test_start_offset(self) -> None:
        spans = AnsiSpans()
        assert spans.span_for("abcdef", 2, start=3) == 5

    def test_deterministic(self) -> None:
        spans = AnsiSpans()
        text = f"{RED}Добры{RESET} вечар"
        assert spans.span_for(text, 4) == spans.span_for(text, 4)


class TestPlainSpans:
    """Tests for the code point calculator."""

    def test_visible_width_counts_code_points(self) -> None:
        spans = PlainSpans()
        assert spans.visible_width(f"{RED}ab") == len(RED) + 2

    def test_span_for_counts_code_points(self) -> None:
        spans = PlainSpans()
        assert spans.span_for("Добры вечар", 5) == 5
        assert spans.span_for("ab", 5) == 2

    def test_escape_bytes_are_text(self) -> None:
        spans = PlainSpans()
        assert spans.span_for(f"{RED}ab", 3) == 3


class TestCalculatorFor:
    """Tests for mode lookup."""

    def test_modes(self) -> None:
        assert isinstance(calculator_for(SpanMode.ANSI), AnsiSpans)
        assert isinstance(calculator_for(SpanMode.PLAIN), PlainSpans)

    def test_shared_instance(self) -> None:
        assert calculator_for(SpanMode.ANSI) is calculator_for(SpanMode.ANSI)


class TestIterSpans:
    """Tests for splitting text into consecutive spans."""

    def test_plain_chunks(self) -> None:
        result = list(iter_spans(PlainSpans(), "123456789", 5))
        assert result == [Span(0, 5), Span(5, 9)]

    def test_spans_cover_text(self) -> None:
        text = f"{RED}1234567890{RESET}"
        result = [span.slice(text) for span in iter_spans(AnsiSpans(), text, 5)]
        assert result == [f"{RED}12345", f"67890{RESET}"]
        assert "".join(result) == text

    def test_trailing_reset_not_a_line_of_its_own(self) -> None:
        text = f"{RED}12345{RESET}"
        result = [span.slice(text) for span in iter_spans(AnsiSpans(), text, 5)]
        assert result == [text]

    def test_combining_mark_after_escape_not_split_off(self) -> None:
        text = f"e{RESET}\u0301x"
        result = [span.slice(text) for span in iter_spans(AnsiSpans(), text, 1)]
        assert result == [f"e{RESET}\u0301", "x"]

    def test_oversized_chars_progress(self) -> None:
        result = [span.slice("日本") for span in iter_spans(AnsiSpans(), "日本", 1)]
        assert result == ["日", "本"]

    def test_empty_text(self) -> None:
        assert list(iter_spans(AnsiSpans(), "", 3)) == []

    def test_zero_width_rejected(self) -> None:
        with pytest.raises(ValueError, match="must be positive"):
            list(iter_spans(AnsiSpans(), "abc", 0))
