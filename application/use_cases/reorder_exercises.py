"""
ReorderExercises Use Case.

Moves, swaps and compacts sibling workout/template exercises. The caller
passes the sequence it currently displays; the use case computes the new
sequence, persists it with one bulk update and, if that fails, writes the
original positions back and hands back the untouched original so the
caller can roll its optimistic update back.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, List, Optional, Sequence

from application.exceptions import PersistenceError
from application.ports import OrderIndexWriter
from backend.core.ordering import (
    build_order_updates,
    reindex,
    reorder,
    sort_by_order,
    swap_adjacent,
)

logger = logging.getLogger(__name__)


@dataclass
class ReorderResult:
    """
    Result of a reorder.

    ``items`` is the new sequence on success and the exact original
    sequence on failure.
    """

    success: bool
    items: List[Any] = field(default_factory=list)
    error: Optional[str] = None
    validation_errors: List[str] = field(default_factory=list)


class ReorderExercisesUseCase:
    """
    Use case for reordering sibling exercises.

    Works for workout exercises and template exercises alike: the store is
    whichever repository owns the siblings.

    Usage:
        >>> use_case = ReorderExercisesUseCase(store=workout_repo)
        >>> result = use_case.move(items, from_index=2, to_index=0)
        >>> [item.order_index for item in result.items]
        [0, 1, 2]
    """

    def __init__(self, store: OrderIndexWriter) -> None:
        self._store = store

    def move(self, items: Sequence[Any], from_index: int, to_index: int) -> ReorderResult:
        """Move the item at ``from_index`` to ``to_index``."""
        return self._rearrange(items, lambda original: reorder(original, from_index, to_index))

    def swap(self, items: Sequence[Any], index: int) -> ReorderResult:
        """Swap the item at ``index`` with the one after it."""
        return self._rearrange(items, lambda original: swap_adjacent(original, index))

    def _rearrange(self, items: Sequence[Any], rearrange) -> ReorderResult:
        original = list(items)
        try:
            updated = rearrange(original)
        except IndexError as e:
            logger.warning(f"Rejected reorder: {e}")
            return ReorderResult(
                success=False, items=original, error=str(e), validation_errors=[str(e)]
            )
        return self._persist(original, updated)

    def compact(self, items: Sequence[Any]) -> ReorderResult:
        """
        Close gaps left by a removal.

        Items are taken in their current order_index order; only records
        whose position changes are written.
        """
        original = sort_by_order(items)
        updated = reindex(original)
        changed = [
            new for old, new in zip(original, updated) if old.order_index != new.order_index
        ]
        if not changed:
            return ReorderResult(success=True, items=updated)
        return self._persist(original, updated, payload=[
            {"id": item.id, "order_index": item.order_index} for item in changed
        ])

    def _persist(
        self,
        original: List[Any],
        updated: List[Any],
        payload: Optional[List[dict]] = None,
    ) -> ReorderResult:
        if payload is None:
            payload = build_order_updates(updated)
        try:
            self._store.bulk_update_order_index(payload)
            logger.info("Persisted order for %d items", len(updated))
            return ReorderResult(success=True, items=updated)
        except PersistenceError as e:
            logger.exception(f"Reorder failed, rolling back: {e}")
            self._restore(original, payload)
            return ReorderResult(success=False, items=original, error=e.message)

    def _restore(self, original: List[Any], payload: List[dict]) -> None:
        """
        Write the original order_index back to every row the failed write
        touched.

        The store writes row by row, so a failure can leave some rows moved.
        Best effort: a failing restore is logged, not raised.
        """
        touched = {update["id"] for update in payload}
        restore = [
            {"id": item.id, "order_index": item.order_index}
            for item in original
            if item.id in touched
        ]
        try:
            self._store.bulk_update_order_index(restore)
            logger.info("Restored order for %d items", len(restore))
        except PersistenceError as e:
            logger.exception(f"Order restore failed: {e}")
