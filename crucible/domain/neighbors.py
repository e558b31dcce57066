"""Grid geometry and successor generation for the constrained search."""

from typing import List, Optional, Tuple

from .motion import Direction, MotionPolicy
from .types import Coord, Grid, SearchNode

# Order in which successors are generated
DIRECTIONS = (Direction.UP, Direction.RIGHT, Direction.DOWN, Direction.LEFT)


def step(coord: Coord, direction: Direction, grid: Grid) -> Optional[Coord]:
    """
    Move one cell from ``coord`` in ``direction``.
    Returns None if the move would leave the grid.
    """
    d_row, d_col = direction.delta
    new_coord = (coord[0] + d_row, coord[1] + d_col)
    if not grid.is_valid_coord(new_coord):
        return None
    return new_coord


def get_neighbors(node: SearchNode, grid: Grid, policy: MotionPolicy) -> List[Tuple[SearchNode, int]]:
    """
    Get the legal successors of a search node with their entry costs.
    Returns list of (successor_node, cost) tuples.
    """
    neighbors = []

    for direction in DIRECTIONS:
        new_coord = step(node.coord, direction, grid)
        if new_coord is None:
            continue

        new_motion = policy.next_state(node.motion, direction)
        if new_motion is None:
            continue

        neighbors.append((SearchNode(new_coord, new_motion), grid.cost_at(new_coord)))

    return neighbors


def get_direction(from_coord: Coord, to_coord: Coord) -> Direction:
    """Get the direction of a single step between two adjacent coordinates."""
    delta = (to_coord[0] - from_coord[0], to_coord[1] - from_coord[1])
    for direction in DIRECTIONS:
        if direction.delta == delta:
            return direction
    raise ValueError(f"Invalid movement from {from_coord} to {to_coord}")
