"""Path reconstruction, costing and validation."""

from typing import Dict, List, Optional, Tuple

from .motion import Direction, MotionPolicy, MotionState, INITIAL_STATE
from .neighbors import get_direction
from .types import Coord, Grid, SearchNode


def reconstruct_path(predecessors: Dict[SearchNode, SearchNode], end_node: SearchNode) -> List[Coord]:
    """
    Reconstruct the path to ``end_node`` by walking predecessor links.
    Returns the cells from start to end, both inclusive.
    """
    path = []
    current: Optional[SearchNode] = end_node

    while current is not None:
        path.append(current.coord)
        current = predecessors.get(current)

    return list(reversed(path))


def calculate_path_cost(path: List[Coord], grid: Grid) -> int:
    """
    Calculate the total cost of a path.
    The start cell is not paid for; every cell entered after it is.
    """
    return sum(grid.cost_at(coord) for coord in path[1:])


def get_path_directions(path: List[Coord]) -> List[Direction]:
    """Get the direction of every step along the path."""
    return [get_direction(path[i - 1], path[i]) for i in range(1, len(path))]


def get_straight_runs(path: List[Coord]) -> List[Tuple[Direction, int]]:
    """
    Split a path into maximal straight runs.
    Returns list of (direction, cells_traveled) tuples.
    """
    runs: List[Tuple[Direction, int]] = []
    for direction in get_path_directions(path):
        if runs and runs[-1][0] is direction:
            runs[-1] = (direction, runs[-1][1] + 1)
        else:
            runs.append((direction, 1))
    return runs


def replay_motion(path: List[Coord], policy: MotionPolicy) -> Optional[MotionState]:
    """
    Replay a path through the policy from the initial state.
    Returns the final motion state, or None if any step is illegal.
    """
    state = INITIAL_STATE
    for direction in get_path_directions(path):
        state = policy.next_state(state, direction)
        if state is None:
            return None
    return state


def validate_path(path: List[Coord], grid: Grid, policy: MotionPolicy) -> bool:
    """
    Validate that a path stays on the grid, moves one cell at a time,
    obeys the motion policy and is allowed to stop where it ends.
    """
    if not path:
        return False

    if not all(grid.is_valid_coord(coord) for coord in path):
        return False

    try:
        final_state = replay_motion(path, policy)
    except ValueError:
        # Not a chain of adjacent cells
        return False

    return final_state is not None and policy.can_stop(final_state)
