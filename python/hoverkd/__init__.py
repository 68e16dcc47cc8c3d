from hoverkd.errors import HoverKdError, InvalidPointError
from hoverkd.kdtree import KdTree, build, nearest
from hoverkd.kdtree_node import KdTreeNode
from hoverkd.point import Point

__all__ = [
    "HoverKdError",
    "InvalidPointError",
    "KdTree",
    "KdTreeNode",
    "Point",
    "build",
    "nearest",
]
