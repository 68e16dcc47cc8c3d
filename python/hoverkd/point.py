from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Point:
    """Location to be indexed.

    payload is owned by the caller. The index only hands it back.
    """

    x: float
    y: float
    payload: Any = None

    def coordinate(self, axis: int) -> float:
        return self.x if axis == 0 else self.y

    def sqdist(self, x: float, y: float) -> float:
        dx = self.x - x
        dy = self.y - y
        return dx * dx + dy * dy

    def is_finite(self) -> bool:
        return math.isfinite(self.x) and math.isfinite(self.y)
