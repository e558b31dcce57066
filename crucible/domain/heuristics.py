"""Heuristic functions for ordering the search frontier."""

from typing import Callable, Dict

from .types import Coord, Grid, HeuristicId

# A heuristic estimates the remaining cost from a cell to the goal cell
Heuristic = Callable[[Coord], int]


def zero_heuristic(grid: Grid, target: Coord) -> Heuristic:
    """
    Always zero. Turns the search into plain Dijkstra ordering and
    works with any goal predicate.
    """
    return lambda coord: 0


def manhattan_heuristic(grid: Grid, target: Coord) -> Heuristic:
    """
    Manhattan distance scaled by the cheapest cell in the grid.

    Every step enters one cell and the path needs at least the Manhattan
    distance in steps, so this never overestimates. It is also
    consistent: one step changes the distance by exactly one while costing
    at least ``min_cost``.
    """
    scale = grid.min_cost
    target_row, target_col = target

    def estimate(coord: Coord) -> int:
        return scale * (abs(coord[0] - target_row) + abs(coord[1] - target_col))

    return estimate


# Mapping from heuristic IDs to heuristic factories
HEURISTICS: Dict[HeuristicId, Callable[[Grid, Coord], Heuristic]] = {
    "zero": zero_heuristic,
    "manhattan": manhattan_heuristic,
}


def get_heuristic(heuristic_id: HeuristicId) -> Callable[[Grid, Coord], Heuristic]:
    """Get heuristic factory by ID."""
    try:
        return HEURISTICS[heuristic_id]
    except KeyError:
        raise ValueError(
            f"Unknown heuristic {heuristic_id!r}, expected one of {sorted(HEURISTICS)}"
        ) from None


def requires_target(heuristic_id: HeuristicId) -> bool:
    """Whether the heuristic needs a concrete goal coordinate."""
    return heuristic_id != "zero"
