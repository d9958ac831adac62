"""
Ordering and reindex logic for workout and template exercises.

Sibling records carry a dense, zero-based ``order_index``. Every operation
here returns a new list whose order_index values equal the list positions,
so callers can persist the result with a single bulk update.
"""
from typing import Any, Dict, List, Optional, Sequence, TypeVar

from pydantic import BaseModel

T = TypeVar("T", bound=BaseModel)


def reindex(items: Sequence[T]) -> List[T]:
    """Return copies of ``items`` with order_index set to their position."""
    return [
        item if item.order_index == i else item.model_copy(update={"order_index": i})
        for i, item in enumerate(items)
    ]


def sort_by_order(items: Sequence[T]) -> List[T]:
    return sorted(items, key=lambda item: item.order_index)


def reorder(items: Sequence[T], from_index: int, to_index: int) -> List[T]:
    """
    Move the item at ``from_index`` to ``to_index`` and reindex.

    Raises:
        IndexError: If either index is outside the list.
    """
    size = len(items)
    if not 0 <= from_index < size or not 0 <= to_index < size:
        raise IndexError(
            f"Cannot move from {from_index} to {to_index} in a list of {size}"
        )
    moved = list(items)
    item = moved.pop(from_index)
    moved.insert(to_index, item)
    return reindex(moved)


def swap_adjacent(items: Sequence[T], index: int) -> List[T]:
    """Swap the item at ``index`` with the one after it and reindex."""
    return reorder(items, index, index + 1)


def build_order_updates(items: Sequence[Any]) -> List[Dict[str, Any]]:
    """Payload for a bulk order update: ``[{id, order_index}]`` by position."""
    return [{"id": item.id, "order_index": i} for i, item in enumerate(items)]


def next_order_index(max_index: Optional[int]) -> int:
    """Append position after the current maximum (0 for an empty list)."""
    if max_index is None:
        return 0
    return max_index + 1
