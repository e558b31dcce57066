"""Finite State Machine for search execution phases."""

from enum import Enum
from typing import Callable, Dict, Optional, Set

from ..domain.types import SearchStatus


class SearchState(Enum):
    """States for a search run."""
    IDLE = "idle"
    RUNNING = "running"
    COMPLETE = "complete"
    NO_PATH = "no_path"
    DEADLINE_EXCEEDED = "deadline_exceeded"
    ERROR = "error"


# Final state reached for each search outcome
STATUS_TO_STATE = {
    SearchStatus.FOUND: SearchState.COMPLETE,
    SearchStatus.NO_PATH: SearchState.NO_PATH,
    SearchStatus.DEADLINE_EXCEEDED: SearchState.DEADLINE_EXCEEDED,
}


class SearchStateMachine:
    """
    Finite State Machine for managing search execution states.

    State Transitions:
    IDLE -> RUNNING (when a search starts)
    RUNNING -> COMPLETE (when a path is found)
    RUNNING -> NO_PATH (when the frontier is exhausted)
    RUNNING -> DEADLINE_EXCEEDED (when the time or expansion budget runs out)
    RUNNING -> ERROR (when the search raises)
    any finished state -> IDLE (on reset)
    """

    def __init__(self):
        self._current_state = SearchState.IDLE
        self._state_callbacks: Dict[SearchState, Callable[[Optional[dict]], None]] = {}
        self._valid_transitions = self._build_transition_map()

    def _build_transition_map(self) -> Dict[SearchState, Set[SearchState]]:
        """Build the valid state transition map."""
        finished = {SearchState.COMPLETE, SearchState.NO_PATH,
                    SearchState.DEADLINE_EXCEEDED, SearchState.ERROR}
        transitions = {
            SearchState.IDLE: {SearchState.RUNNING},
            SearchState.RUNNING: set(finished),
        }
        for state in finished:
            transitions[state] = {SearchState.IDLE}
        return transitions

    @property
    def current_state(self) -> SearchState:
        """Get the current state."""
        return self._current_state

    def can_transition_to(self, target_state: SearchState) -> bool:
        """Check if transition to target state is valid."""
        return target_state in self._valid_transitions.get(self._current_state, set())

    def transition_to(self, target_state: SearchState, context: dict = None) -> bool:
        """
        Attempt to transition to the target state.

        Returns:
            True if transition was successful, False otherwise
        """
        if not self.can_transition_to(target_state):
            return False

        self._current_state = target_state

        if target_state in self._state_callbacks:
            self._state_callbacks[target_state](context)

        return True

    def on_state_enter(self, state: SearchState, callback: Callable[[Optional[dict]], None]):
        """Register a callback for when entering a specific state."""
        self._state_callbacks[state] = callback

    def start(self, context: dict = None) -> bool:
        return self.transition_to(SearchState.RUNNING, context)

    def finish(self, status: SearchStatus, context: dict = None) -> bool:
        """Move to the final state matching a search outcome."""
        return self.transition_to(STATUS_TO_STATE[status], context)

    def fail_error(self, context: dict = None) -> bool:
        return self.transition_to(SearchState.ERROR, context)

    def reset_to_idle(self, context: dict = None) -> bool:
        """Reset to idle state."""
        if self._current_state is SearchState.IDLE:
            return True
        return self.transition_to(SearchState.IDLE, context)

    def is_running(self) -> bool:
        return self._current_state == SearchState.RUNNING

    def is_finished(self) -> bool:
        """Check if the search has finished (complete, no path, deadline or error)."""
        return self._current_state in [SearchState.COMPLETE, SearchState.NO_PATH,
                                       SearchState.DEADLINE_EXCEEDED, SearchState.ERROR]

    def get_state_description(self) -> str:
        """Get a human-readable description of the current state."""
        descriptions = {
            SearchState.IDLE: "Ready to start",
            SearchState.RUNNING: "Search running",
            SearchState.COMPLETE: "Path found",
            SearchState.NO_PATH: "No path exists",
            SearchState.DEADLINE_EXCEEDED: "Search budget exhausted",
            SearchState.ERROR: "Error occurred",
        }
        return descriptions.get(self._current_state, "Unknown state")
