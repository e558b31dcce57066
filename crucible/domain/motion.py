"""Movement history and the rules that govern it.

A path through the grid carries a ``MotionState`` describing how it
arrived at its current cell. ``MotionPolicy.next_state`` is the single
place where turning and run-length rules are encoded; every puzzle
variant is just a different parameterization of the policy.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from .errors import InvalidPolicy


class Direction(Enum):
    """Cardinal movement directions, in clockwise order."""
    UP = "up"
    RIGHT = "right"
    DOWN = "down"
    LEFT = "left"

    @property
    def delta(self) -> Tuple[int, int]:
        """(row, col) offset of a single step in this direction."""
        return _DELTAS[self]

    @property
    def opposite(self) -> "Direction":
        """The direction pointing 180° away."""
        return _OPPOSITES[self]

    def is_reverse_of(self, other: "Direction") -> bool:
        """Check if moving in this direction would reverse ``other``."""
        return self.opposite is other

    def is_turn_from(self, other: "Direction") -> bool:
        """Check if this direction is a 90° turn away from ``other``."""
        return self is not other and not self.is_reverse_of(other)


_DELTAS = {
    Direction.UP: (-1, 0),
    Direction.RIGHT: (0, 1),
    Direction.DOWN: (1, 0),
    Direction.LEFT: (0, -1),
}

_OPPOSITES = {
    Direction.UP: Direction.DOWN,
    Direction.RIGHT: Direction.LEFT,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
}


@dataclass(frozen=True)
class MotionState:
    """
    How a path arrived at a cell.

    ``direction`` is None only for the initial state, before any move has
    been made; otherwise ``run_length`` counts the consecutive cells
    entered in ``direction`` since the last turn.
    """
    direction: Optional[Direction] = None
    run_length: int = 0

    @classmethod
    def initial(cls) -> "MotionState":
        return INITIAL_STATE

    @classmethod
    def moving(cls, direction: Direction, run_length: int = 1) -> "MotionState":
        if run_length < 1:
            raise ValueError(f"Run length must be at least 1, got {run_length}")
        return cls(direction, run_length)

    @property
    def is_initial(self) -> bool:
        return self.direction is None

    def __repr__(self) -> str:
        if self.is_initial:
            return "MotionState(initial)"
        return f"MotionState({self.direction.name}, {self.run_length})"


INITIAL_STATE = MotionState()


@dataclass(frozen=True)
class MotionPolicy:
    """
    Run-length rules for a moving path.

    min_run_before_turn: cells that must be traveled straight before a
        turn, or a stop, is allowed.
    max_run_before_forced_turn: cells that may be traveled straight before
        a turn becomes mandatory. None means unbounded.

    Reversing direction is never allowed.
    """
    min_run_before_turn: int = 1
    max_run_before_forced_turn: Optional[int] = 3

    def __post_init__(self):
        """Validate run-length bounds."""
        if self.min_run_before_turn < 1:
            raise InvalidPolicy(
                f"min_run_before_turn must be at least 1, got {self.min_run_before_turn}"
            )
        if (self.max_run_before_forced_turn is not None and
                self.max_run_before_forced_turn < self.min_run_before_turn):
            raise InvalidPolicy(
                f"max_run_before_forced_turn ({self.max_run_before_forced_turn}) "
                f"is smaller than min_run_before_turn ({self.min_run_before_turn})"
            )

    @classmethod
    def crucible(cls) -> "MotionPolicy":
        """At most three cells in a row, turn whenever you like."""
        return cls(min_run_before_turn=1, max_run_before_forced_turn=3)

    @classmethod
    def ultra_crucible(cls) -> "MotionPolicy":
        """At least four cells before turning or stopping, at most ten."""
        return cls(min_run_before_turn=4, max_run_before_forced_turn=10)

    @classmethod
    def unrestricted(cls) -> "MotionPolicy":
        """No run-length limits; only reversal is forbidden."""
        return cls(min_run_before_turn=1, max_run_before_forced_turn=None)

    @property
    def is_bounded(self) -> bool:
        return self.max_run_before_forced_turn is not None

    def can_continue(self, state: MotionState) -> bool:
        """Check if another straight step is allowed from ``state``."""
        if state.is_initial:
            return False
        if self.max_run_before_forced_turn is None:
            return True
        return state.run_length < self.max_run_before_forced_turn

    def can_turn(self, state: MotionState) -> bool:
        """Check if a 90° turn is allowed from ``state``."""
        return state.is_initial or state.run_length >= self.min_run_before_turn

    def can_stop(self, state: MotionState) -> bool:
        """Check if a path arriving in ``state`` may end here."""
        return self.can_turn(state)

    def next_state(self, current: MotionState, direction: Direction) -> Optional[MotionState]:
        """
        Compute the state after moving one cell in ``direction``.

        Returns None when the move is illegal.
        """
        if current.is_initial:
            return MotionState(direction, 1)

        if direction.is_reverse_of(current.direction):
            return None

        if direction is current.direction:
            if not self.can_continue(current):
                return None
            return MotionState(direction, current.run_length + 1)

        if not self.can_turn(current):
            return None
        return MotionState(direction, 1)
