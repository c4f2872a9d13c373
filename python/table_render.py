"""
Text rendering for cellwidth grids.

Renders a grid in GitHub Markdown style:

    | name  | ip        |
    |-------+-----------|
    | Guten | 1.1.1.1   |

Cells are left aligned with one space of padding on each side. Cells holding
several lines (for example after wrapping) take several physical rows. When
the grid carries a min_width hint, the extra width is spread over the columns.
"""

from __future__ import annotations

import logging
from typing import Callable

from spans import calculator_for
from table_types import Grid

__all__ = ["column_widths", "natural_width", "render", "table_width"]

logger = logging.getLogger(__name__)

PADDING = 1


def _content_widths(grid: Grid) -> list[int]:
    calculator = calculator_for(grid.rules.span_mode)
    widths = [0] * grid.cols
    for row in grid.cells:
        for c, content in enumerate(row):
            for line in content.split("\n"):
                widths[c] = max(widths[c], calculator.visible_width(line))
    return widths


def _frame_width(content_widths: list[int]) -> int:
    if not content_widths:
        return 0
    # Each column carries padding on both sides; one border per column plus the closing one
    return sum(content_widths) + len(content_widths) * (2 * PADDING + 1) + 1


def natural_width(grid: Grid) -> int:
    """Rendered width of the grid without any min_width hint."""
    return _frame_width(_content_widths(grid))


def table_width(grid: Grid) -> int:
    """Total rendered width of the grid, honoring its min_width hint."""
    natural = natural_width(grid)
    if grid.min_width is not None and grid.cols > 0:
        return max(natural, grid.min_width)
    return natural


def column_widths(grid: Grid) -> list[int]:
    """
    Content width of every column, after distributing any min_width surplus.

    Surplus is split evenly; the remainder goes to the leftmost columns.
    """
    widths = _content_widths(grid)
    natural = _frame_width(widths)
    if grid.min_width is None or grid.min_width <= natural or not widths:
        return widths

    extra = grid.min_width - natural
    share, remainder = divmod(extra, len(widths))
    logger.info(
        "column_widths: natural=%d, min_width=%d, share=%d, remainder=%d",
        natural,
        grid.min_width,
        share,
        remainder,
    )
    return [w + share + (1 if c < remainder else 0) for c, w in enumerate(widths)]


def render(grid: Grid, colorize: Callable[[str], str] | None = None) -> str:
    """
    Render a grid as a Markdown-style table.

    Args:
        grid: The grid to render
        colorize: Optional function applied to border characters

    Returns:
        The rendered table, lines joined by newlines (empty for an empty grid)
    """
    if grid.rows == 0 or grid.cols == 0:
        return ""

    if colorize is None:
        colorize = lambda s: s

    calculator = calculator_for(grid.rules.span_mode)
    widths = column_widths(grid)
    pad = " " * PADDING
    lines: list[str] = []

    for r_idx, row in enumerate(grid.cells):
        cell_lines = [content.split("\n") for content in row]
        height = max(len(parts) for parts in cell_lines)

        for i in range(height):
            line_parts = [colorize("|")]
            for c_idx, parts in enumerate(cell_lines):
                text = parts[i] if i < len(parts) else ""
                fill = widths[c_idx] - calculator.visible_width(text)
                line_parts.append(pad + text + " " * max(fill, 0) + pad)
                line_parts.append(colorize("|"))
            lines.append("".join(line_parts))

        # Header rule below the first row
        if r_idx == 0:
            rule = "+".join("-" * (w + 2 * PADDING) for w in widths)
            lines.append(colorize("|" + rule + "|"))

    return "\n".join(lines)
