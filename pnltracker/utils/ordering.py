"""Mini README: Ordering helper shared by every reorder gesture.

Structure:
    * move_element - single element list move (remove then insert).
    * step_target - index reached by an arrow-button step, clamped to bounds.

Drag-and-drop and the up/down buttons both call ``move_element`` so a move
from index ``a`` to ``b`` lands on the same order whichever gesture made it.
"""

from __future__ import annotations

from typing import List, Sequence, TypeVar

T = TypeVar("T")


def move_element(values: Sequence[T], from_index: int, to_index: int) -> List[T]:
    """Return a new list with the element at ``from_index`` moved to ``to_index``."""

    size = len(values)
    if not 0 <= from_index < size:
        raise IndexError(f"from_index {from_index} out of range for {size} elements")
    if not 0 <= to_index < size:
        raise IndexError(f"to_index {to_index} out of range for {size} elements")

    moved = list(values)
    element = moved.pop(from_index)
    moved.insert(to_index, element)
    return moved


def step_target(index: int, step: int, size: int) -> int:
    """Clamp ``index + step`` into ``[0, size - 1]``."""

    return min(max(index + step, 0), max(size - 1, 0))
