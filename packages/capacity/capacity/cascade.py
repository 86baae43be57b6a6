"""
Due-date cascade across "depends on" chains.

When an item's due date moves by N days, every item that transitively
depends on it moves by the same N days. Stored graphs may contain cycles,
so traversal is guarded by a visited set.
"""

import logging
from collections import defaultdict, deque
from datetime import timedelta
from typing import Dict, Iterable, List, Optional, Protocol

from .calendar import DateLike, days_between
from .models import DateUpdate, ScheduledItem

logger = logging.getLogger(__name__)


class DependencyGraph(Protocol):
    """Lookup of items whose ``depends_on_id`` equals a given id."""

    def find_dependents(self, item_id: str) -> Iterable[ScheduledItem]:
        ...


class InMemoryDependencyGraph:
    """Dependency graph built from a snapshot of scheduled items."""

    def __init__(self, items: Iterable[ScheduledItem]):
        self.items: Dict[str, ScheduledItem] = {}
        self._dependents: Dict[str, List[str]] = defaultdict(list)
        for item in items:
            self.items[item.id] = item
            if item.depends_on_id is not None:
                self._dependents[item.depends_on_id].append(item.id)

    def find_dependents(self, item_id: str) -> List[ScheduledItem]:
        # Edges pointing at ids missing from the snapshot are skipped
        return [
            self.items[dependent_id]
            for dependent_id in self._dependents.get(item_id, [])
            if dependent_id in self.items
        ]


def cascade(root_id: str, days_delta: int, graph: DependencyGraph) -> List[DateUpdate]:
    """
    Shift every transitive dependent of ``root_id`` by ``days_delta`` days.

    The root itself is not updated. Each item is updated at most once, so
    the traversal terminates even when the stored graph contains a cycle.
    Dependency edges are never modified.

    Returns:
        Updates in traversal order, one per distinct dependent
    """
    if days_delta == 0:
        return []

    delta = timedelta(days=days_delta)
    visited = {root_id}
    updates: List[DateUpdate] = []
    worklist = deque([root_id])

    while worklist:
        current_id = worklist.popleft()
        for dependent in graph.find_dependents(current_id):
            if dependent.id in visited:
                logger.debug(f"Skipping already visited item {dependent.id}")
                continue
            visited.add(dependent.id)
            updates.append(
                DateUpdate(
                    item_id=dependent.id,
                    old_due_date=dependent.due_date,
                    new_due_date=dependent.due_date + delta,
                )
            )
            worklist.append(dependent.id)

    logger.debug(f"Cascade from {root_id} by {days_delta} days touched {len(updates)} items")
    return updates


def shift_due_dates(
    root_id: str,
    old_due_date: Optional[DateLike],
    new_due_date: Optional[DateLike],
    graph: DependencyGraph,
) -> List[DateUpdate]:
    """Cascade the difference between the root's old and new due date."""
    if old_due_date is None or new_due_date is None:
        return []
    return cascade(root_id, days_between(old_due_date, new_due_date), graph)
