"""
Shared type definitions for cellwidth tables.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator


class SpanMode(Enum):
    """How visible text is measured inside a cell."""

    PLAIN = "plain"  # Every code point is one visible unit
    ANSI = "ansi"  # Escape sequences are zero-width, characters use display width


@dataclass(frozen=True)
class RuleSet:
    """Rules governing how width transforms measure cell content."""

    span_mode: SpanMode = SpanMode.ANSI


# =============================================================================
# Addressing
# =============================================================================


@dataclass(frozen=True)
class AllCells:
    """Every cell of the grid."""

    pass


@dataclass(frozen=True)
class Row:
    """All cells of one row."""

    index: int


@dataclass(frozen=True)
class Column:
    """All cells of one column."""

    index: int


@dataclass(frozen=True)
class SingleCell:
    """One cell."""

    row: int
    col: int


Address = AllCells | Row | Column | SingleCell


@dataclass(frozen=True)
class Span:
    """A [start, end) index range aligned on character and escape boundaries."""

    start: int
    end: int

    def slice(self, text: str) -> str:
        return text[self.start : self.end]


# =============================================================================
# Grid
# =============================================================================


class Grid:
    """A mutable 2D store of cell strings, row-major."""

    def __init__(
        self,
        cells: list[list[str]],
        rules: RuleSet | None = None,
    ) -> None:
        self.cells = cells
        self.rules = rules if rules is not None else RuleSet()
        # Layout hint for the renderer, set by table-level options such as Widen
        self.min_width: int | None = None

    @property
    def rows(self) -> int:
        return len(self.cells)

    @property
    def cols(self) -> int:
        return len(self.cells[0]) if self.cells else 0

    def get_cell_content(self, row: int, col: int) -> str:
        return self.cells[row][col]

    def set_cell_content(self, row: int, col: int, content: str) -> None:
        self.cells[row][col] = content

    def __repr__(self) -> str:
        return f"Grid(rows={self.rows}, cols={self.cols}, rules={self.rules!r})"


def resolve(address: Address, grid: Grid) -> Iterator[tuple[int, int]]:
    """
    Resolve an address to the concrete (row, col) pairs it selects.

    Raises:
        IndexError: If a Row, Column or SingleCell index lies outside the grid
    """
    match address:
        case AllCells():
            for r in range(grid.rows):
                for c in range(grid.cols):
                    yield (r, c)

        case Row(index=r):
            _check_index("row", r, grid.rows)
            for c in range(grid.cols):
                yield (r, c)

        case Column(index=c):
            _check_index("column", c, grid.cols)
            for r in range(grid.rows):
                yield (r, c)

        case SingleCell(row=r, col=c):
            _check_index("row", r, grid.rows)
            _check_index("column", c, grid.cols)
            yield (r, c)

        case _:
            raise ValueError(f"Unknown address: {address!r}")


def _check_index(kind: str, index: int, size: int) -> None:
    if not 0 <= index < size:
        raise IndexError(
            f"Address {kind} {index} is out of range\n"
            f"  Grid has {size} {kind}s (valid: 0..{size - 1})"
        )
