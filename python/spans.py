"""
Escape-aware span calculation.

Converts a count of visible units into an index inside a string that may hold
terminal escape sequences, so slicing never lands inside an escape sequence.
Two calculators are provided:

1. PlainSpans - every code point is one visible unit, escapes are not parsed
2. AnsiSpans - escape sequences are zero-width and skipped atomically, other
   characters are weighted by their terminal display width
"""

from __future__ import annotations

from typing import Iterator, Protocol

from wcwidth import iter_sequences, wcwidth

from table_types import Span, SpanMode

__all__ = [
    "AnsiSpans",
    "PlainSpans",
    "SpanCalculator",
    "calculator_for",
    "char_width",
    "escape_end",
    "iter_spans",
]

ESC = "\x1b"

# Introducers left over when a CSI/OSC sequence never terminates
_OPEN_INTRODUCERS = (ESC, ESC + "[", ESC + "]")


def _tokens(text: str, start: int = 0) -> Iterator[tuple[int, int, int, bool]]:
    """
    Yield (start, end, width, is_escape) for every token from start onward.

    Sequences come from wcwidth.iter_sequences. An unterminated CSI/OSC
    sequence, or a lone trailing ESC, is consumed to the end of the string.
    """
    pos = start
    for segment, is_sequence in iter_sequences(text[start:]):
        seg_start, pos = pos, pos + len(segment)
        if is_sequence:
            lone = segment == ESC and pos < len(text) and not text.startswith(("[", "]"), pos)
            if segment in _OPEN_INTRODUCERS and not lone:
                yield (seg_start, len(text), 0, True)
                return
            yield (seg_start, pos, 0, True)
        else:
            for i in range(seg_start, pos):
                yield (i, i + 1, char_width(text[i]), False)


def escape_end(text: str, index: int) -> int:
    """Return the index just past the escape sequence starting at text[index]."""
    for _, end, _, _ in _tokens(text, index):
        return end
    return index


def char_width(ch: str) -> int:
    """Display width of a single character; control and combining characters are 0."""
    w = wcwidth(ch)
    return w if w > 0 else 0


class SpanCalculator(Protocol):
    """Measures visible text and finds slice boundaries."""

    mode: SpanMode

    def visible_width(self, text: str) -> int:
        ...

    def span_for(self, text: str, n: int, start: int = 0, min_one: bool = False) -> int:
        ...


class PlainSpans:
    """Code-point counting; escape sequences are ordinary text."""

    mode = SpanMode.PLAIN

    def visible_width(self, text: str) -> int:
        return len(text)

    def span_for(self, text: str, n: int, start: int = 0, min_one: bool = False) -> int:
        if min_one and start < len(text):
            n = max(n, 1)
        return min(start + n, len(text))


class AnsiSpans:
    """Escape-aware counting by display width."""

    mode = SpanMode.ANSI

    def visible_width(self, text: str) -> int:
        return sum(width for _, _, width, _ in _tokens(text))

    def span_for(self, text: str, n: int, start: int = 0, min_one: bool = False) -> int:
        """
        Index such that text[start:index] holds n visible columns.

        Escape sequences are only included when a visible character after
        them is taken. Zero-width characters following a taken character stay
        with it, even across escape sequences in between. A wide character
        that would overflow n is left out, unless min_one is set and nothing
        has been taken yet.

        Returns:
            Absolute index into text, len(text) when n covers the remainder
        """
        taken = 0
        index = start
        has_char = False
        for _, tok_end, width, is_escape in _tokens(text, start):
            if is_escape:
                continue
            if width == 0:
                # Combining mark or control char, attached to the char before it
                if has_char:
                    index = tok_end
                continue
            if taken + width > n and not (min_one and not has_char):
                return index
            taken += width
            index = tok_end
            has_char = True

        # Every visible character fits, trailing escapes go along
        return len(text)


_CALCULATORS: dict[SpanMode, SpanCalculator] = {
    SpanMode.PLAIN: PlainSpans(),
    SpanMode.ANSI: AnsiSpans(),
}


def calculator_for(mode: SpanMode) -> SpanCalculator:
    """Return the shared calculator for a span mode."""
    return _CALCULATORS[mode]


def iter_spans(calculator: SpanCalculator, text: str, width: int) -> Iterator[Span]:
    """
    Split one line of text into consecutive spans of at most `width` visible units.

    A zero-width remainder (for example a closing reset sequence) is merged
    into the last span. Every span advances by at least one character, so a
    character wider than `width` gets a span of its own.

    Args:
        calculator: Span calculator for the grid's mode
        text: Content to split
        width: Visible units per span, must be positive

    Returns:
        Iterator of spans that together cover text exactly
    """
    if width <= 0:
        raise ValueError(f"Span width must be positive, got {width}")

    start = 0
    length = len(text)
    while start < length:
        end = calculator.span_for(text, width, start, min_one=True)
        yield Span(start, end)
        start = end
