"""Constrained best-first search over (cell, motion state) pairs."""

import logging
import time
from typing import Dict, Optional, Set

from .errors import DeadlineExceeded, InvalidStart, NoPathFound
from .heuristics import Heuristic, get_heuristic, requires_target
from .motion import MotionPolicy, INITIAL_STATE
from .neighbors import get_neighbors
from .path import reconstruct_path
from .priority_queue import PriorityQueue
from .types import Coord, Goal, GoalPredicate, Grid, SearchConfig, SearchNode, SearchResult, SearchStatus

logger = logging.getLogger(__name__)


class ConstrainedPathSearch:
    """
    Minimum-cost path search where legal moves depend on movement history.

    The search runs over ``SearchNode`` values rather than bare cells: the
    same cell reached while moving in a different direction, or after a
    different run length, has different legal continuations and is
    tracked separately. With the zero heuristic this is Dijkstra's
    algorithm; with the Manhattan heuristic it is A*.

    The engine can be driven one expansion at a time with ``step`` or run
    to completion with ``run_complete``.
    """

    def __init__(self):
        self.reset()

    def reset(self):
        """Reset the search state."""
        self.open_set = PriorityQueue()
        self.closed_set: Set[SearchNode] = set()
        self.best_cost: Dict[SearchNode, int] = {}
        self.predecessors: Dict[SearchNode, SearchNode] = {}
        self.grid: Optional[Grid] = None
        self.start_coord: Optional[Coord] = None
        self.target_coord: Optional[Coord] = None
        self.goal: Optional[GoalPredicate] = None
        self.policy = MotionPolicy()
        self.config = SearchConfig()
        self.nodes_explored = 0
        self.current_node: Optional[SearchNode] = None
        self.result: Optional[SearchResult] = None
        self._heuristic: Heuristic = lambda coord: 0
        self._started_at = 0.0

    def initialize(self, grid: Grid, start: Coord, goal: Optional[Goal] = None,
                   policy: Optional[MotionPolicy] = None, config: Optional[SearchConfig] = None):
        """
        Prepare a search from ``start`` to ``goal``.

        ``goal`` is either a target cell or a predicate over cells; it
        defaults to the bottom-right cell of the grid.
        """
        if not grid.is_valid_coord(start):
            raise InvalidStart(f"Start coordinate {start} is out of bounds for a {grid.height}x{grid.width} grid")

        config = config if config is not None else SearchConfig()
        policy = policy if policy is not None else MotionPolicy.crucible()

        if goal is None:
            goal = grid.bottom_right

        target: Optional[Coord] = None
        if callable(goal):
            predicate = goal
        else:
            target = (int(goal[0]), int(goal[1]))
            if not grid.is_valid_coord(target):
                raise ValueError(f"Target coordinate {target} is out of bounds")
            predicate = lambda coord: coord == target

        # Unset means A* toward a target cell, Dijkstra toward a predicate
        heuristic_id = config.heuristic
        if heuristic_id is None:
            heuristic_id = "manhattan" if target is not None else "zero"
        if requires_target(heuristic_id) and target is None:
            raise ValueError(
                f"Heuristic {heuristic_id!r} needs a target coordinate, not a goal predicate"
            )
        heuristic_factory = get_heuristic(heuristic_id)

        self.reset()
        self.grid = grid
        self.start_coord = (int(start[0]), int(start[1]))
        self.target_coord = target
        self.goal = predicate
        self.policy = policy
        self.config = config
        if target is not None:
            self._heuristic = heuristic_factory(grid, target)
        self._started_at = time.perf_counter()

        start_node = SearchNode(self.start_coord, INITIAL_STATE)
        self.best_cost[start_node] = 0
        self.open_set.put(start_node, self._heuristic(self.start_coord), self._heuristic(self.start_coord), 0)

        logger.debug(
            "Search initialized: grid=%dx%d start=%s target=%s policy=%s heuristic=%s",
            grid.height, grid.width, self.start_coord, target, policy, heuristic_id,
        )

    def step(self) -> Optional[SearchResult]:
        """
        Expand the lowest-priority node on the frontier.
        Returns a SearchResult once the search is complete, None otherwise.
        """
        if self.grid is None:
            raise ValueError("Search not initialized")
        if self.result is not None:
            return self.result

        popped = self.open_set.get()
        if popped is None:
            return self._finish(SearchStatus.NO_PATH)

        current, _, current_cost = popped
        self.current_node = current
        self.closed_set.add(current)
        self.nodes_explored += 1

        # A path may only end where its motion state allows stopping
        if self.goal(current.coord) and self.policy.can_stop(current.motion):
            return self._finish(SearchStatus.FOUND, current, current_cost)

        for neighbor, move_cost in get_neighbors(current, self.grid, self.policy):
            if neighbor in self.closed_set:
                continue

            tentative_cost = current_cost + move_cost
            known_cost = self.best_cost.get(neighbor)
            if known_cost is not None and tentative_cost >= known_cost:
                continue

            self.best_cost[neighbor] = tentative_cost
            self.predecessors[neighbor] = current
            h_cost = self._heuristic(neighbor.coord)
            self.open_set.put(neighbor, tentative_cost + h_cost, h_cost, tentative_cost)

        return None

    def run_complete(self) -> SearchResult:
        """
        Run the search until it finds the goal, exhausts the frontier, or
        runs out of its expansion or time budget.
        """
        max_expansions = self.config.max_expansions
        deadline = self.config.deadline_seconds

        while True:
            result = self.step()
            if result is not None:
                return result

            if max_expansions is not None and self.nodes_explored >= max_expansions:
                logger.warning("Search stopped after %d expansions", self.nodes_explored)
                return self._finish(SearchStatus.DEADLINE_EXCEEDED)
            if deadline is not None and self.elapsed_seconds() >= deadline:
                logger.warning("Search deadline of %.3fs exceeded after %d expansions",
                               deadline, self.nodes_explored)
                return self._finish(SearchStatus.DEADLINE_EXCEEDED)

    def elapsed_seconds(self) -> float:
        return time.perf_counter() - self._started_at

    @property
    def frontier_size(self) -> int:
        return len(self.open_set)

    def is_complete(self) -> bool:
        """Check if the search has finished (success or failure)."""
        return self.result is not None

    def _finish(self, status: SearchStatus, end_node: Optional[SearchNode] = None,
                cost: Optional[int] = None) -> SearchResult:
        path = None
        if end_node is not None and self.config.reconstruct_path:
            path = reconstruct_path(self.predecessors, end_node)

        self.result = SearchResult(
            status=status,
            cost=cost,
            path=path,
            end_state=end_node.motion if end_node is not None else None,
            nodes_explored=self.nodes_explored,
            elapsed_seconds=self.elapsed_seconds(),
        )
        logger.debug("Search finished: status=%s cost=%s explored=%d",
                     status.value, cost, self.nodes_explored)
        return self.result


def solve(grid: Grid, start: Coord, goal: Optional[Goal] = None,
          policy: Optional[MotionPolicy] = None, config: Optional[SearchConfig] = None) -> SearchResult:
    """
    Convenience function to run a constrained search from start to finish.

    Args:
        grid: Grid to search in
        start: Starting coordinate
        goal: Target coordinate or predicate over coordinates
            (defaults to the bottom-right cell)
        policy: Motion rules (defaults to MotionPolicy.crucible())
        config: Search configuration

    Returns:
        SearchResult; an unreachable goal is reported as SearchStatus.NO_PATH

    Raises:
        InvalidStart: If start is outside the grid
    """
    search = ConstrainedPathSearch()
    search.initialize(grid, start, goal, policy, config)
    return search.run_complete()


def minimum_cost(grid: Grid, start: Coord, goal: Optional[Goal] = None,
                 policy: Optional[MotionPolicy] = None, config: Optional[SearchConfig] = None) -> int:
    """
    Return only the minimum path cost.

    Raises:
        NoPathFound: If the goal is unreachable under the policy
        DeadlineExceeded: If the search budget ran out first
    """
    result = solve(grid, start, goal, policy, config)
    if result.status is SearchStatus.NO_PATH:
        raise NoPathFound(f"No legal path from {start} after exploring {result.nodes_explored} nodes")
    if result.status is SearchStatus.DEADLINE_EXCEEDED:
        raise DeadlineExceeded(
            f"Search gave up after {result.nodes_explored} nodes in {result.elapsed_seconds:.3f}s"
        )
    return result.cost
