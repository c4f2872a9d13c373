"""
Demonstration of cellwidth width transforms.

Builds a small table of greetings and addresses, then truncates, wraps and
widens it, printing the table after each step.
"""

import logging
import sys

import simple_chalk as chalk  # type: ignore[import-untyped]
from rich.console import Console
from rich.text import Text

from table_builder import build_grid
from table_render import render
from table_types import AllCells, Column, Grid
from width import Percent, Truncate, Widen, Wrap, apply, modify

GREETINGS = [
    ["Hello World!!!", "3.3.22.2"],
    ["Guten Morgen", "1.1.1.1"],
    ["Добры вечар", "127.0.0.1"],
    ["Bonjour le monde", ""],
    ["Ciao mondo", ""],
]


def show(console: Console, title: str, grid: Grid) -> None:
    console.print(title)
    console.print(Text.from_ansi(render(grid, colorize=chalk.blue)))
    console.print()


def demo(console: Console) -> None:
    """Walk one table through truncation, wrapping and widening."""
    grid = build_grid(GREETINGS)
    # Color the addresses so escape handling is visible
    for row in range(grid.rows):
        address = grid.get_cell_content(row, 1)
        if address:
            grid.set_cell_content(row, 1, chalk.green(address))

    show(console, "Original table", grid)

    apply(grid, Truncate(12).with_suffix("..."))
    show(console, "Truncated table", grid)

    modify(grid, AllCells(), Wrap(5))
    show(console, "Wrapped table", grid)

    apply(grid, Widen(Percent(200)))
    show(console, "Widen table", grid)


def column_demo(console: Console) -> None:
    """Apply a transform to a single column only."""
    grid = build_grid(GREETINGS, header=["greeting", "address"])
    modify(grid, Column(0), Truncate(6, "…"))
    show(console, "First column truncated to 6", grid)


if __name__ == "__main__":
    if "--verbose" in sys.argv[1:]:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s: %(message)s")

    console = Console()
    demo(console)
    column_demo(console)
