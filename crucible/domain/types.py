"""Core type definitions for the constrained path search."""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Literal, Optional, Sequence, Tuple, Union

import numpy as np

from .motion import MotionState, INITIAL_STATE

# Coordinate type for grid positions: (row, col)
Coord = Tuple[int, int]

# Goal can be a single cell or any predicate over cells
GoalPredicate = Callable[[Coord], bool]
Goal = Union[Coord, GoalPredicate]

# Heuristic function identifiers
HeuristicId = Literal["zero", "manhattan"]


@dataclass(frozen=True, eq=False)
class Grid:
    """
    Immutable rectangular grid of non-negative traversal costs.

    Row 0 is the top row, column 0 the leftmost column. The backing array
    is copied on construction and marked read-only, so a grid can be
    shared freely between concurrent searches.
    """
    costs: np.ndarray

    def __post_init__(self):
        """Validate shape and costs, then freeze the backing array."""
        source = np.asarray(self.costs)
        if source.size and not np.issubdtype(source.dtype, np.integer):
            raise ValueError(f"Grid costs must be integers, got dtype {source.dtype}")
        costs = np.array(source, dtype=np.int64, copy=True)
        if costs.ndim != 2:
            raise ValueError(f"Grid costs must be 2-dimensional, got {costs.ndim} dimensions")
        if costs.shape[0] == 0 or costs.shape[1] == 0:
            raise ValueError(f"Grid dimensions must be positive, got {costs.shape[0]}x{costs.shape[1]}")
        if (costs < 0).any():
            raise ValueError("Grid costs must be non-negative")
        costs.setflags(write=False)
        object.__setattr__(self, "costs", costs)

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[int]]) -> "Grid":
        """Build a grid from nested row sequences of integer costs."""
        widths = {len(row) for row in rows}
        if len(widths) > 1:
            raise ValueError(f"Grid rows must all have the same length, got {sorted(widths)}")
        return cls(np.array(rows))

    @property
    def height(self) -> int:
        return self.costs.shape[0]

    @property
    def width(self) -> int:
        return self.costs.shape[1]

    @property
    def shape(self) -> Tuple[int, int]:
        return (self.height, self.width)

    @property
    def min_cost(self) -> int:
        """Cheapest single cell in the grid."""
        return int(self.costs.min())

    @property
    def bottom_right(self) -> Coord:
        return (self.height - 1, self.width - 1)

    def cost(self, row: int, col: int) -> int:
        """Cost of entering the cell at (row, col)."""
        return int(self.costs[row, col])

    def cost_at(self, coord: Coord) -> int:
        return int(self.costs[coord])

    def is_valid_coord(self, coord: Coord) -> bool:
        """Check if coordinate is within grid bounds."""
        row, col = coord
        return 0 <= row < self.height and 0 <= col < self.width

    def __eq__(self, other) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return np.array_equal(self.costs, other.costs)

    def __hash__(self) -> int:
        return hash((self.shape, self.costs.tobytes()))


@dataclass(frozen=True)
class SearchNode:
    """A vertex of the search graph: a cell together with how it was reached."""
    coord: Coord
    motion: MotionState = INITIAL_STATE


@dataclass
class SearchConfig:
    """
    Configuration for a single search run.

    heuristic: None picks "manhattan" for a target cell and "zero" for a
        goal predicate.
    max_expansions, deadline_seconds: budgets checked after every
        expansion; None means unlimited.
    """
    heuristic: Optional[HeuristicId] = None
    reconstruct_path: bool = True
    max_expansions: Optional[int] = None
    deadline_seconds: Optional[float] = None

    def __post_init__(self):
        """Validate search budgets."""
        if self.max_expansions is not None and self.max_expansions < 1:
            raise ValueError(f"max_expansions must be at least 1, got {self.max_expansions}")
        if self.deadline_seconds is not None and self.deadline_seconds < 0:
            raise ValueError(f"deadline_seconds must not be negative, got {self.deadline_seconds}")


class SearchStatus(Enum):
    """How a search run ended."""
    FOUND = "found"
    NO_PATH = "no_path"
    DEADLINE_EXCEEDED = "deadline_exceeded"


@dataclass
class SearchResult:
    """Result of a search run."""
    status: SearchStatus
    cost: Optional[int] = None
    path: Optional[List[Coord]] = None
    end_state: Optional[MotionState] = None
    nodes_explored: int = 0
    elapsed_seconds: float = 0.0

    @property
    def found(self) -> bool:
        return self.status is SearchStatus.FOUND

    @property
    def success(self) -> bool:
        """Whether a path was found and, if requested, reconstructed."""
        return self.found and (self.path is None or len(self.path) > 0)
