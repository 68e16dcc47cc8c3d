from __future__ import annotations

import argparse
import sys
from datetime import date, timedelta
from typing import List, Optional

import matplotlib.patches as patches
import matplotlib.pyplot as plt
import numpy as np
import numpy.typing as npt
import rerun as rr

from hoverkd.hover import HoverTracker, format_tooltip
from hoverkd.kdtree import KdTree
from hoverkd.logger import logger, setup_logging

START_DATE = date(2024, 1, 1)


def make_samples(num_points: int, seed: int) -> tuple[npt.NDArray, List[date]]:
    """Make random points in unit square and the date each point stands for."""
    rng = np.random.default_rng(seed)
    points = rng.random((num_points, 2))

    # Dates follow x, as the x axis of a time series plot.
    order = np.argsort(points[:, 0])
    dates = [START_DATE] * num_points
    for rank, idx in enumerate(order.tolist()):
        dates[idx] = START_DATE + timedelta(days=rank)
    return points, dates


def show_matplotlib(
    points: npt.NDArray, query: npt.NDArray, nearest_idx: int, label: str
):
    nearest_point = points[nearest_idx]
    radius = float(np.linalg.norm(nearest_point - query))

    c = patches.Circle(
        tuple(query), radius=radius, edgecolor="green", facecolor="none", linewidth=1
    )
    ax = plt.axes()
    ax.add_patch(c)

    plt.scatter(points[:, 0], points[:, 1])
    plt.scatter(query[0], query[1], marker="x")

    # Enlarge the focused point.
    plt.scatter(nearest_point[0], nearest_point[1], s=120, color="red")
    plt.annotate(label, xy=tuple(nearest_point), xytext=(8, 8), textcoords="offset points")

    plt.axis("square")
    x, y = 1.1, 1.1
    plt.xlim(0, x)
    plt.ylim(0, y)
    plt.xticks(np.arange(0, x + 0.1, step=0.1))
    plt.yticks(np.arange(0, y + 0.1, step=0.1))
    plt.axhline(0, linewidth=2, color="gray")
    plt.axvline(0, linewidth=2, color="gray")
    plt.show()


def show_rerun(points: npt.NDArray, query: npt.NDArray, nearest_idx: int, label: str):
    num = len(points)
    all_points = np.append(points, query.reshape(1, 2), axis=0)

    colors = np.full((num, 3), [0, 255, 0])
    colors[nearest_idx] = [255, 0, 0]
    colors = np.append(colors, np.array([0, 0, 255]).reshape(1, 3), axis=0)

    radii = np.full(num + 1, 0.01)
    radii[nearest_idx] = 0.02

    labels = [""] * (num + 1)
    labels[nearest_idx] = label

    rr.init("hoverkd", spawn=True)
    rr.log("points", rr.Points2D(all_points, colors=colors, radii=radii, labels=labels))


def run(
    num_points: int, seed: int, query_x: float, query_y: float, viewer: str
) -> Optional[str]:
    """Build index from random points and query the nearest one.

    Returns:
        Tooltip label of the nearest point. If there is no point, None.
    """
    points, dates = make_samples(num_points, seed)

    # Payload is row index of points.
    tree = KdTree.from_array(points)
    tracker = HoverTracker(tree)

    nearest = tracker.move(query_x, query_y)
    if nearest is None:
        logger.info("No point to hover")
        return None

    idx = nearest.payload
    label = format_tooltip(dates[idx], round(float(points[idx][1]) * 100, 2))

    query = np.array([query_x, query_y])
    if viewer == "matplotlib":
        show_matplotlib(points, query, idx, label)
    elif viewer == "rerun":
        show_rerun(points, query, idx, label)

    return label


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Hover random points and show the nearest one"
    )
    parser.add_argument(
        "-n", "--num_points", type=int, help="Number of points", default=10
    )
    parser.add_argument("-s", "--seed", type=int, help="Random seed", default=19)
    parser.add_argument(
        "-q",
        "--query",
        nargs=2,
        type=float,
        metavar=("X", "Y"),
        help="Hovered location",
        default=[0.5, 0.5],
    )
    parser.add_argument(
        "-v",
        "--viewer",
        choices=["matplotlib", "rerun", "none"],
        help="Viewer to show result",
        default="matplotlib",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug log")
    args = parser.parse_args(argv)

    if args.num_points < 0:
        parser.error(f"Number of points must not be negative: {args.num_points}")

    return args


def main(argv: Optional[List[str]] = None):
    args = parse_args(argv)
    setup_logging(args.debug)

    try:
        label = run(
            num_points=args.num_points,
            seed=args.seed,
            query_x=args.query[0],
            query_y=args.query[1],
            viewer=args.viewer,
        )
    except KeyboardInterrupt:
        sys.exit(1)

    if label is not None:
        print(label)


if __name__ == "__main__":
    main()
