from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Iterable, Iterator, Sequence

import numpy as np
import numpy.typing as npt

from hoverkd.errors import InvalidPointError
from hoverkd.kdtree_node import KdTreeNode
from hoverkd.logger import logger
from hoverkd.point import Point

DIMENSION = 2


@dataclass
class _Nearest:
    point: Point | None = None
    dist2: float = math.inf


class KdTree:
    """2D KD-tree answering nearest neighbor queries over a static point set."""

    def __init__(self, root: KdTreeNode | None = None, size: int = 0):
        self._root = root
        self._size = size

    @property
    def root(self) -> KdTreeNode | None:
        return self._root

    def __len__(self) -> int:
        return self._size

    def __bool__(self) -> bool:
        return self._root is not None

    @staticmethod
    def create(points: Sequence[Point], depth: int = 0) -> KdTreeNode | None:
        """Create subtree from points.

        Args:
            points: Points to be stored in the subtree.
            depth: Depth of the subtree root. Root of the whole tree is 0.

        Returns:
            Root node of the subtree. If points is empty, None.
        """
        if len(points) == 0:
            return None

        # Decide which axis for splitting.
        axis = depth % DIMENSION

        # Copy, so that the caller's sequence keeps its order.
        points_list = sorted(points, key=lambda p: p.coordinate(axis))

        median = len(points_list) // 2

        node = KdTreeNode(
            axis=axis,
            point=points_list[median],
            left_child=KdTree.create(points_list[0:median], depth + 1),
            right_child=KdTree.create(points_list[median + 1 :], depth + 1),
        )
        return node

    @classmethod
    def build(cls, points: Iterable[Point]) -> KdTree:
        """Build index from points.

        Raises:
            InvalidPointError: If any point has NaN or infinite coordinate.
        """
        points_list = list(points)

        for i, p in enumerate(points_list):
            if not p.is_finite():
                raise InvalidPointError(
                    f"Point {i} has non-finite coordinate ({p.x}, {p.y})"
                )

        tree = cls(cls.create(points_list), len(points_list))
        logger.debug(f"Built kd-tree: {len(tree)} points, depth {tree.depth()}")
        return tree

    @classmethod
    def from_array(
        cls, coords: npt.ArrayLike, payloads: Sequence[Any] | None = None
    ) -> KdTree:
        """Build index from (N, 2) coordinates.

        Args:
            coords: Array like with shape (N, 2).
            payloads: Payload for each row. If None, row index is used as payload.
        """
        coords_array = np.asarray(coords, dtype=np.float64)
        if coords_array.size == 0:
            coords_array = coords_array.reshape(0, DIMENSION)

        if coords_array.ndim != 2 or coords_array.shape[1] != DIMENSION:
            raise ValueError(
                f"Coordinates must have shape (N, {DIMENSION}), got {coords_array.shape}"
            )

        num = coords_array.shape[0]
        if payloads is None:
            payloads = range(num)
        elif len(payloads) != num:
            raise ValueError(f"{len(payloads)} payloads for {num} coordinates")

        invalid = np.flatnonzero(~np.isfinite(coords_array).all(axis=1))
        if len(invalid) > 0:
            x, y = coords_array[invalid[0]].tolist()
            raise InvalidPointError(
                f"Point {invalid[0]} has non-finite coordinate ({x}, {y})"
            )

        # Convert to python float, so that Point doesn't keep numpy scalar.
        return cls.build(
            Point(x, y, payload)
            for (x, y), payload in zip(coords_array.tolist(), payloads)
        )

    @staticmethod
    def search_nearest(
        query_x: float,
        query_y: float,
        best: _Nearest,
        node: KdTreeNode | None,
    ):
        if node is None:
            return

        dist2 = node.point.sqdist(query_x, query_y)

        # Keep the first found one if distances are the same.
        # Squared distance can overflow to inf for huge coordinates, so the first node is always taken.
        if best.point is None or dist2 < best.dist2:
            best.point = node.point
            best.dist2 = dist2

        query_value = query_x if node.axis == 0 else query_y
        delta = query_value - node.split_value()

        if delta < 0:
            near, far = node.left_child, node.right_child
        else:
            near, far = node.right_child, node.left_child

        KdTree.search_nearest(query_x, query_y, best, near)

        # Far side can contain closer point only if the splitting line is closer than the best.
        if delta * delta < best.dist2:
            KdTree.search_nearest(query_x, query_y, best, far)

    def nearest_with_sqdist(self, x: float, y: float) -> tuple[Point | None, float]:
        """Returns nearest point and its squared distance.

        If the tree is empty, returns (None, inf) for any query.

        Raises:
            InvalidPointError: If the tree isn't empty and query has NaN or infinite coordinate.
        """
        if self._root is None:
            return None, math.inf

        if not (math.isfinite(x) and math.isfinite(y)):
            raise InvalidPointError(f"Query has non-finite coordinate ({x}, {y})")

        best = _Nearest()
        KdTree.search_nearest(x, y, best, self._root)
        return best.point, best.dist2

    def nearest(self, x: float, y: float) -> Point | None:
        return self.nearest_with_sqdist(x, y)[0]

    def walk(self) -> Iterator[tuple[KdTreeNode, int]]:
        """Yields all nodes with their depth in pre-order."""
        stack: list[tuple[KdTreeNode | None, int]] = [(self._root, 0)]
        while stack:
            node, depth = stack.pop()
            if node is None:
                continue
            yield node, depth
            stack.append((node.right_child, depth + 1))
            stack.append((node.left_child, depth + 1))

    def depth(self) -> int:
        """Number of levels. Empty tree is 0."""
        return max((depth + 1 for _, depth in self.walk()), default=0)


def build(points: Iterable[Point]) -> KdTree:
    return KdTree.build(points)


def nearest(index: KdTree, x: float, y: float) -> Point | None:
    return index.nearest(x, y)
