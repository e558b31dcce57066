"""Application controller running searches with time budgets and in batches."""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import List, Optional, Sequence

from ..domain.motion import MotionPolicy
from ..domain.search import ConstrainedPathSearch, solve
from ..domain.types import Coord, Goal, Grid, SearchConfig, SearchResult
from .fsm import SearchState, SearchStateMachine

logger = logging.getLogger(__name__)


@dataclass
class SearchJob:
    """One independent search request."""
    grid: Grid
    start: Coord = (0, 0)
    goal: Optional[Goal] = None
    policy: Optional[MotionPolicy] = None
    config: Optional[SearchConfig] = None


class SearchController:
    """
    Controller that runs the search engine and tracks its lifecycle.

    Single searches go through the state machine so callers can tell a
    finished search from one that ran out of budget. Batches are fanned
    out over a thread pool; every search owns its own frontier and the
    grids are read-only, so no coordination is needed.

    ``solve`` builds a fresh engine per call, but the lifecycle state and
    ``last_result`` track one search at a time. Concurrent callers should
    use ``solve_many`` or one controller per thread.
    """

    def __init__(self, config: Optional[SearchConfig] = None):
        self._config = config if config is not None else SearchConfig()
        self._search = ConstrainedPathSearch()
        self._state_machine = SearchStateMachine()
        self._last_result: Optional[SearchResult] = None

        self._state_machine.on_state_enter(SearchState.DEADLINE_EXCEEDED, self._on_deadline_entered)
        self._state_machine.on_state_enter(SearchState.ERROR, self._on_error_entered)

    # Properties

    @property
    def config(self) -> SearchConfig:
        """Get the default search configuration."""
        return self._config

    @property
    def current_state(self) -> SearchState:
        return self._state_machine.current_state

    @property
    def state_description(self) -> str:
        return self._state_machine.get_state_description()

    @property
    def last_result(self) -> Optional[SearchResult]:
        return self._last_result

    @property
    def search(self) -> ConstrainedPathSearch:
        """The engine used by the latest single search, for inspecting its statistics."""
        return self._search

    # Execution

    def solve(self, grid: Grid, start: Coord = (0, 0), goal: Optional[Goal] = None,
              policy: Optional[MotionPolicy] = None,
              config: Optional[SearchConfig] = None) -> SearchResult:
        """Run one search to completion under the controller's lifecycle."""
        self._state_machine.reset_to_idle()
        self._search = ConstrainedPathSearch()
        self._last_result = None

        self._state_machine.start({"start": start})
        try:
            self._search.initialize(grid, start, goal, policy,
                                    config if config is not None else self._config)
            result = self._search.run_complete()
        except Exception as e:
            self._state_machine.fail_error({"error": e})
            raise

        self._last_result = result
        self._state_machine.finish(result.status, {"result": result})
        return result

    def solve_many(self, jobs: Sequence[SearchJob], max_workers: Optional[int] = None) -> List[SearchResult]:
        """
        Run independent searches concurrently.
        Results are returned in job order; the first job error is re-raised.
        """
        if not jobs:
            return []

        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            futures = [
                executor.submit(solve, job.grid, job.start, job.goal, job.policy,
                                job.config if job.config is not None else self._config)
                for job in jobs
            ]
            return [future.result() for future in futures]

    def reset(self):
        """Reset the controller to idle."""
        self._search.reset()
        self._last_result = None
        self._state_machine.reset_to_idle()

    # State callbacks

    def _on_deadline_entered(self, context: Optional[dict]):
        result = context["result"] if context else None
        if result is not None:
            logger.info("Search budget exhausted after %d expansions", result.nodes_explored)

    def _on_error_entered(self, context: Optional[dict]):
        error = context.get("error") if context else None
        logger.error("Search failed: %s", error)
