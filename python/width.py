"""
Width transforms for table cells.

Three transforms constrain or grow rendered width:
1. Truncate - cut a cell to a maximum visible width, appending a suffix
2. Wrap - hard-wrap a cell into lines of a fixed visible width
3. Widen - grow the whole table to an absolute or percentage target width

Truncate and Wrap are cell options: they rewrite one addressed cell at a time
through the grid's get/set accessors. Widen is a table option: it only
computes a target width and leaves the padding to the renderer.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from spans import SpanCalculator, calculator_for, iter_spans
from table_render import table_width
from table_types import Address, AllCells, Grid, SpanMode, resolve

__all__ = [
    "CellOption",
    "Percent",
    "TableOption",
    "Truncate",
    "Widen",
    "Wrap",
    "apply",
    "cut_to_width",
    "modify",
    "truncate",
    "wrap",
]

logger = logging.getLogger(__name__)

ANSI_SPANS = calculator_for(SpanMode.ANSI)


# =============================================================================
# String Transforms
# =============================================================================


def cut_to_width(content: str, max_width: int, calculator: SpanCalculator = ANSI_SPANS) -> str:
    """Return the longest prefix of content with at most max_width visible units."""
    return content[: calculator.span_for(content, max_width)]


def truncate(
    content: str,
    max_width: int,
    suffix: str = "",
    calculator: SpanCalculator = ANSI_SPANS,
) -> str:
    """
    Cut content to max_width visible units and append suffix.

    Content that already fits is returned unchanged, without the suffix.
    The suffix is literal text and does not count against max_width.

    Examples:
        truncate("Hello World!!!", 5, "...") -> "Hello..."
        truncate("Hi", 5, "...") -> "Hi"
    """
    cut = cut_to_width(content, max_width, calculator)
    if len(cut) < len(content):
        return cut + suffix
    return content


def wrap(content: str, width: int, calculator: SpanCalculator = ANSI_SPANS) -> str:
    """
    Hard-wrap content into lines of `width` visible units joined by newlines.

    A width of 0 leaves the content unchanged. Existing line breaks are kept
    and each line is wrapped on its own, so wrapping twice changes nothing.
    Escape sequences stay inside the line their span covers; styles are not
    re-opened on the next line.

    Examples:
        wrap("123456789", 5) -> "12345\\n6789"
        wrap("abc", 0) -> "abc"
    """
    if width == 0:
        return content
    lines: list[str] = []
    for line in content.split("\n"):
        chunks = [span.slice(line) for span in iter_spans(calculator, line, width)]
        # An empty line stays an empty line
        lines.extend(chunks or [""])
    return "\n".join(lines)


# =============================================================================
# Cell Mutation Contract
# =============================================================================


class CellOption(Protocol):
    """Rewrites the content of a single grid cell."""

    def change_cell(self, grid: Grid, row: int, col: int) -> None:
        ...


@runtime_checkable
class TableOption(Protocol):
    """Changes table-level layout state."""

    def change_table(self, grid: Grid) -> None:
        ...


def _check_width(kind: str, width: int) -> None:
    if width < 0:
        raise ValueError(f"{kind} width must be non-negative, got {width}")


@dataclass(frozen=True)
class Truncate:
    """Cut cells to `width` visible units, appending `suffix` when a cut happens."""

    width: int
    suffix: str = ""

    def __post_init__(self) -> None:
        _check_width("Truncate", self.width)

    def with_suffix(self, suffix: str) -> Truncate:
        return Truncate(self.width, suffix)

    def change_cell(self, grid: Grid, row: int, col: int) -> None:
        content = grid.get_cell_content(row, col)
        calculator = calculator_for(grid.rules.span_mode)
        cut = cut_to_width(content, self.width, calculator)
        # A shorter prefix means something was cut away
        if len(cut) < len(content):
            logger.debug("truncate: cell (%d, %d) cut to width %d", row, col, self.width)
            grid.set_cell_content(row, col, cut + self.suffix)


@dataclass(frozen=True)
class Wrap:
    """Hard-wrap cells into lines of `width` visible units."""

    width: int

    def __post_init__(self) -> None:
        _check_width("Wrap", self.width)

    def change_cell(self, grid: Grid, row: int, col: int) -> None:
        content = grid.get_cell_content(row, col)
        calculator = calculator_for(grid.rules.span_mode)
        wrapped = wrap(content, self.width, calculator)
        # Wrapping only inserts line breaks, so equal length means no break
        if len(wrapped) != len(content):
            logger.debug(
                "wrap: cell (%d, %d) split into %d lines", row, col, wrapped.count("\n") + 1
            )
            grid.set_cell_content(row, col, wrapped)


# =============================================================================
# Widening
# =============================================================================


@dataclass(frozen=True)
class Percent:
    """A percentage of some reference width."""

    value: int

    def __post_init__(self) -> None:
        if self.value <= 0:
            raise ValueError(
                f"Percent must be positive, got {self.value}\n"
                f"  Use Percent(100) to keep the reference width"
            )

    def of(self, reference: int) -> int:
        """Integer share of reference, truncated toward zero."""
        return reference * self.value // 100


@dataclass(frozen=True)
class Widen:
    """
    Grow the table to a target width.

    The target is either an absolute width or a Percent of the table's
    current rendered width. Only the target is computed here; the renderer
    spreads the extra width over the columns.
    """

    target: int | Percent

    def __post_init__(self) -> None:
        if isinstance(self.target, int):
            _check_width("Widen", self.target)

    def target_width(self, reference: int) -> int:
        match self.target:
            case Percent() as percent:
                return percent.of(reference)
            case int() as width:
                return width
            case _:
                raise ValueError(f"Unknown widen target: {self.target!r}")

    def change_table(self, grid: Grid) -> None:
        reference = table_width(grid)
        target = self.target_width(reference)
        logger.info("widen: reference=%d, target=%d", reference, target)
        if target > reference:
            grid.min_width = target


# =============================================================================
# Application
# =============================================================================


def modify(grid: Grid, address: Address, *options: CellOption) -> Grid:
    """
    Apply cell options to every cell selected by address.

    Options run in order; each one sees the cells as left by the previous one.

    Returns:
        The same grid, for chaining
    """
    for option in options:
        for row, col in resolve(address, grid):
            option.change_cell(grid, row, col)
    return grid


def apply(grid: Grid, option: CellOption | TableOption) -> Grid:
    """Apply a table option once, or a cell option to every cell."""
    if isinstance(option, TableOption):
        option.change_table(grid)
    else:
        modify(grid, AllCells(), option)
    return grid
