from __future__ import annotations

from datetime import date
from typing import Any

from hoverkd.kdtree import KdTree
from hoverkd.logger import logger
from hoverkd.point import Point


class HoverFocus:
    """Currently focused (enlarged) point, owned by the caller of the index."""

    def __init__(self):
        self._focused: Point | None = None

    @property
    def focused(self) -> Point | None:
        return self._focused

    def update(self, point: Point | None) -> bool:
        """Move focus to point.

        Returns:
            True if focus moved to another point, otherwise False.
        """
        if self._focused is point:
            return False

        self._focused = point
        return True

    def clear(self):
        self._focused = None


class HoverTracker:
    """Queries nearest point on each pointer move and keeps the focus."""

    def __init__(self, index: KdTree):
        self._index = index
        self.focus = HoverFocus()

    def move(self, x: float, y: float) -> Point | None:
        nearest = self._index.nearest(x, y)
        if self.focus.update(nearest):
            logger.debug(f"Focus moved to {nearest} at ({x}, {y})")
        return nearest


def format_tooltip(when: date, value: Any) -> str:
    # No zero padding, e.g. 2024-3-7.
    return f"({when.year}-{when.month}-{when.day}, {value})"
