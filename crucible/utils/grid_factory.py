"""Grid factory for parsing, loading and generating cost grids."""

from pathlib import Path
from typing import Iterable, List, Optional, Union

import numpy as np

from ..domain.errors import MalformedGrid
from ..domain.types import Grid
from .rng import SeededRNG, default_rng


def read_lines(filepath: Union[str, Path]) -> List[str]:
    """
    Read a puzzle input file into a list of lines.
    Line terminators and trailing blank lines are dropped.
    """
    with open(filepath, 'r') as f:
        lines = [line.rstrip("\r\n") for line in f]

    while lines and not lines[-1].strip():
        lines.pop()

    return lines


def parse_grid(lines: Iterable[str]) -> Grid:
    """
    Parse rows of single-digit cell costs into a grid.

    Args:
        lines: Rows of the grid, top row first, one ASCII digit per cell

    Returns:
        New Grid instance

    Raises:
        MalformedGrid: If there are no rows, rows differ in length, or a
            cell is not an ASCII digit
    """
    rows = list(lines)
    if not rows:
        raise MalformedGrid("Grid input is empty")

    width = len(rows[0])
    if width == 0:
        raise MalformedGrid("Grid rows must not be empty", row=0)

    costs = np.empty((len(rows), width), dtype=np.int64)
    for row_index, row in enumerate(rows):
        if len(row) != width:
            raise MalformedGrid(
                f"Row {row_index} has length {len(row)}, expected {width}", row=row_index
            )
        for col_index, char in enumerate(row):
            # str.isdigit accepts non-ASCII digits too
            if char not in "0123456789":
                raise MalformedGrid(
                    f"Invalid cell {char!r} at row {row_index}, column {col_index}",
                    row=row_index, col=col_index,
                )
            costs[row_index, col_index] = ord(char) - ord("0")

    return Grid(costs)


def load_grid(filepath: Union[str, Path]) -> Grid:
    """Load and parse a grid from a text file."""
    return parse_grid(read_lines(filepath))


def create_uniform_grid(height: int, width: int, cost: int = 1) -> Grid:
    """
    Create a grid where every cell has the same cost.

    Raises:
        ValueError: If height or width <= 0, or cost < 0
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Grid dimensions must be positive, got {height}x{width}")
    return Grid(np.full((height, width), cost, dtype=np.int64))


def generate_random_grid(height: int, width: int, min_cost: int = 1, max_cost: int = 9,
                         seed: Optional[int] = None, rng: Optional[SeededRNG] = None) -> Grid:
    """
    Generate a grid of random cell costs.

    Args:
        height: Number of rows
        width: Number of columns
        min_cost: Smallest possible cell cost (>= 0)
        max_cost: Largest possible cell cost
        seed: Random seed for reproducibility (ignored if rng is given)
        rng: Random number generator to use

    Returns:
        New Grid instance
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Grid dimensions must be positive, got {height}x{width}")
    if not (0 <= min_cost <= max_cost):
        raise ValueError(f"Invalid cost range {min_cost}..{max_cost}")

    if rng is None:
        rng = SeededRNG(seed) if seed is not None else default_rng

    return Grid(rng.integers(min_cost, max_cost, (height, width)))


def format_grid(grid: Grid) -> List[str]:
    """Format a single-digit grid back into text rows."""
    if grid.costs.max() > 9:
        raise ValueError("Only grids of single-digit costs can be formatted")
    return ["".join(str(int(cost)) for cost in row) for row in grid.costs]
