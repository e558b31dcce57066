"""Crucible - minimum-cost grid paths under run-length and turning constraints.

The search engine finds the cheapest route through a grid of cell costs when
the legal moves depend on how far the path has already traveled straight.
"""

from .domain.errors import (
    CrucibleError, DeadlineExceeded, InvalidPolicy, InvalidStart, MalformedGrid, NoPathFound,
)
from .domain.motion import Direction, MotionPolicy, MotionState
from .domain.search import ConstrainedPathSearch, minimum_cost, solve
from .domain.types import Coord, Grid, SearchConfig, SearchNode, SearchResult, SearchStatus
from .utils.grid_factory import load_grid, parse_grid

__version__ = "1.0.0"

__all__ = [
    "ConstrainedPathSearch",
    "Coord",
    "CrucibleError",
    "DeadlineExceeded",
    "Direction",
    "Grid",
    "InvalidPolicy",
    "InvalidStart",
    "MalformedGrid",
    "MotionPolicy",
    "MotionState",
    "NoPathFound",
    "SearchConfig",
    "SearchNode",
    "SearchResult",
    "SearchStatus",
    "load_grid",
    "minimum_cost",
    "parse_grid",
    "solve",
]
