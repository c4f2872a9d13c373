"""
Grid building utilities for cellwidth.

Provides two ways to build a grid:
1. From records - a sequence of rows of arbitrary values, plus optional header
2. From a concise text definition - one row per line, cells separated by |
"""

from __future__ import annotations

from typing import Iterable, Sequence

from table_types import Grid, RuleSet

__all__ = ["build_grid", "parse_table"]


def _to_content(value: object) -> str:
    return "" if value is None else str(value)


def build_grid(
    records: Iterable[Sequence[object]],
    header: Sequence[str] | None = None,
    rules: RuleSet | None = None,
) -> Grid:
    """
    Build a grid from records.

    Values are converted with str(); None becomes an empty cell. When a
    header is given it becomes row 0.

    Example:
        build_grid([["Hello", "3.3.22.2"], ["Ciao", None]], header=["text", "ip"])
        Creates a 3x2 grid:
        - Row 0: ["text", "ip"]
        - Row 1: ["Hello", "3.3.22.2"]
        - Row 2: ["Ciao", ""]

    Args:
        records: Rows of values, all of the same length
        header: Optional column names
        rules: Span rules for the grid (default: escape-aware)

    Returns:
        The new grid

    Raises:
        ValueError: If rows (including the header) differ in length
    """
    rows: list[list[str]] = []
    if header is not None:
        rows.append([_to_content(name) for name in header])
    for record in records:
        rows.append([_to_content(value) for value in record])

    if rows:
        cols = len(rows[0])
        mismatched = [(i, len(row)) for i, row in enumerate(rows) if len(row) != cols]
        if mismatched:
            source = "header" if header is not None else "row 0"
            error_msg = (
                f"Inconsistent row lengths\n"
                f"  Expected: {cols} columns (from {source})\n"
                f"  Mismatched rows:\n"
            )
            for row_idx, actual_cols in mismatched:
                error_msg += f"    Row {row_idx}: {actual_cols} columns - {rows[row_idx]!r}\n"
            error_msg += "  All rows must have the same number of cells"
            raise ValueError(error_msg)

    return Grid(rows, rules)


def parse_table(definition: str, rules: RuleSet | None = None) -> Grid:
    """
    Parse a grid from a concise multi-line format.

    Format:
    - One row per non-blank line
    - Cells separated by |, surrounding whitespace stripped
    - Literal "\\n" inside a cell becomes a line break
    - Short rows are padded with empty cells

    Example:
        \"\"\"
        name | ip
        Guten Morgen | 1.1.1.1
        Ciao mondo
        \"\"\"

        Creates a 3x2 grid, the last row being ["Ciao mondo", ""].

    Args:
        definition: Multi-line string with one row per line
        rules: Span rules for the grid (default: escape-aware)

    Returns:
        The new grid
    """
    lines = [line.strip() for line in definition.strip().split("\n") if line.strip()]
    rows = [[cell.strip().replace("\\n", "\n") for cell in line.split("|")] for line in lines]

    # Pad rows to maximum length with empty cells
    if rows:
        max_cols = max(len(row) for row in rows)
        rows = [row + [""] * (max_cols - len(row)) for row in rows]

    return Grid(rows, rules)
