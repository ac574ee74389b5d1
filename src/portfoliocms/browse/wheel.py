"""Cylinder wheel ordering: center the selected item in its column.

Items are laid out by circular distance from the selection, so the chosen
item comes first and its neighbours follow, alternating after (+k) then
before (-k). The view turns each slot's proximity into a CSS class so that
items fade out the further they are from the selection.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Generic, Optional, Sequence, TypeVar

T = TypeVar("T")


class Proximity(str, Enum):
    SELECTED = "selected"
    NEAR = "near"
    FAR = "far"
    NORMAL = "normal"

    @classmethod
    def for_distance(cls, distance: Optional[int]) -> Proximity:
        if distance is None or distance >= 3:
            return cls.NORMAL
        return (cls.SELECTED, cls.NEAR, cls.FAR)[distance]


@dataclass(frozen=True)
class WheelSlot(Generic[T]):
    item: T
    index: int  # position in the natural order
    distance: Optional[int]

    @property
    def proximity(self) -> Proximity:
        return Proximity.for_distance(self.distance)

    @property
    def is_selected(self) -> bool:
        return self.distance == 0


def circular_distance(a: int, b: int, n: int) -> int:
    d = abs(a - b) % n
    return min(d, n - d)


def _default_key(item: Any):
    return getattr(item, "id", item)


def wheel_slots(
    items: Sequence[T],
    selected_id: Any = None,
    key: Callable[[T], Any] = _default_key,
) -> list[WheelSlot[T]]:
    """Order items around the selected one.

    With no selection, or an id that is not in ``items``, the natural
    order is kept and every slot has distance None.
    """
    n = len(items)
    selected = None
    if selected_id is not None:
        for i, item in enumerate(items):
            if key(item) == selected_id:
                selected = i
                break

    if selected is None:
        return [WheelSlot(item, i, None) for i, item in enumerate(items)]

    slots = [WheelSlot(items[selected], selected, 0)]
    seen = {selected}
    for k in range(1, n // 2 + 1):
        for idx in ((selected + k) % n, (selected - k) % n):
            if idx not in seen:
                seen.add(idx)
                slots.append(WheelSlot(items[idx], idx, circular_distance(idx, selected, n)))
    return slots
