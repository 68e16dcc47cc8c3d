from __future__ import annotations

from dataclasses import dataclass

from hoverkd.point import Point


@dataclass(frozen=True)
class KdTreeNode:
    axis: int
    point: Point
    left_child: KdTreeNode | None = None
    right_child: KdTreeNode | None = None

    def split_value(self) -> float:
        return self.point.coordinate(self.axis)
