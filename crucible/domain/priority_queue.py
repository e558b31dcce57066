"""Priority queue for the search frontier with deterministic tie-breaking."""

import heapq
from dataclasses import dataclass
from typing import Any, Dict, Hashable, List, Optional, Tuple


@dataclass
class PriorityItem:
    """
    Item in the priority queue with proper comparison for tie-breaking.

    Comparison order:
    1. priority (lower is better)
    2. h_cost (lower is better - favor nodes closer to the goal)
    3. sequence (insertion order, for determinism)
    """
    priority: int
    h_cost: int
    sequence: int
    item_id: Hashable
    data: Any

    def __lt__(self, other: 'PriorityItem') -> bool:
        """Define comparison for heap ordering."""
        if self.priority != other.priority:
            return self.priority < other.priority
        if self.h_cost != other.h_cost:
            return self.h_cost < other.h_cost
        return self.sequence < other.sequence


class PriorityQueue:
    """
    Min-priority queue keyed by arbitrary hashable ids.
    Re-inserting an id with a lower priority replaces the old entry lazily.
    """

    def __init__(self):
        self._heap: List[PriorityItem] = []
        self._entry_finder: Dict[Hashable, PriorityItem] = {}
        self._removed_marker = object()  # Sentinel for removed items
        self._counter = 0

    def __len__(self) -> int:
        return len(self._entry_finder)

    def is_empty(self) -> bool:
        """Check if the queue is empty."""
        return len(self._entry_finder) == 0

    def put(self, item_id: Hashable, priority: int, h_cost: int = 0, data: Any = None) -> bool:
        """
        Add an item to the queue or lower its priority.
        Returns False if the item is already queued with a priority that is no worse.
        """
        if item_id in self._entry_finder:
            existing = self._entry_finder[item_id]
            if existing.priority <= priority:
                return False
            existing.data = self._removed_marker

        entry = PriorityItem(priority, h_cost, self._counter, item_id, data)
        self._counter += 1
        self._entry_finder[item_id] = entry
        heapq.heappush(self._heap, entry)
        return True

    def get(self) -> Optional[Tuple[Hashable, int, Any]]:
        """
        Remove and return (item_id, priority, data) for the lowest priority item.
        Returns None if queue is empty.
        """
        while self._heap:
            entry = heapq.heappop(self._heap)
            if entry.data is not self._removed_marker:
                del self._entry_finder[entry.item_id]
                return (entry.item_id, entry.priority, entry.data)
        return None

    def peek(self) -> Optional[Tuple[Hashable, int, Any]]:
        """Look at the next item without removing it."""
        while self._heap:
            entry = self._heap[0]
            if entry.data is not self._removed_marker:
                return (entry.item_id, entry.priority, entry.data)
            # Remove stale entry and continue
            heapq.heappop(self._heap)
        return None

    def contains(self, item_id: Hashable) -> bool:
        """Check if an item is in the queue."""
        return item_id in self._entry_finder

    def get_priority(self, item_id: Hashable) -> Optional[int]:
        """Get the priority of a queued item, or None if not present."""
        entry = self._entry_finder.get(item_id)
        return entry.priority if entry is not None else None

    def clear(self):
        """Remove all items from the queue."""
        self._heap.clear()
        self._entry_finder.clear()
        self._counter = 0
