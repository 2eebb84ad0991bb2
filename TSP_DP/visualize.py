# TSP_DP/visualize.py
"""Draw a Held-Karp tour on a unit circle and save it as PNG."""

from __future__ import annotations

import math
from typing import List, Optional, Sequence, Tuple

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt  # noqa: E402
import numpy as np  # noqa: E402

Point = Tuple[float, float]


def generate_city_positions(n: int) -> np.ndarray:
    """(n,2) positions on the unit circle at angle 2*pi*i/n - pi/2."""
    xs: List[Point] = []
    for i in range(n):
        angle = 2.0 * math.pi * i / n - math.pi / 2.0
        xs.append((math.cos(angle), math.sin(angle)))
    return np.asarray(xs, dtype=np.float64).reshape((n, 2))


def arrow_head(
    p1: Point,
    p2: Point,
    pos: float = 0.75,
    length: float = 0.05,
    angle: float = 0.5,
) -> Optional[Tuple[Point, Point, Point]]:
    """Tip and the two barb ends of the arrow drawn at `pos` along p1 -> p2.

    Returns None for legs shorter than 0.01.
    """
    x1, y1 = p1
    x2, y2 = p2
    dx = x2 - x1
    dy = y2 - y1
    dist = math.hypot(dx, dy)
    if dist <= 0.01:
        return None

    ux, uy = dx / dist, dy / dist
    tip = (x1 + pos * dx, y1 + pos * dy)
    ca, sa = math.cos(angle), math.sin(angle)
    # unit direction rotated by +angle / -angle, stepped back from the tip
    left = (tip[0] - length * (ux * ca - uy * sa), tip[1] - length * (ux * sa + uy * ca))
    right = (tip[0] - length * (ux * ca + uy * sa), tip[1] - length * (-ux * sa + uy * ca))
    return tip, left, right


def create_visualization(
    cities: Sequence[str],
    tour: Sequence[int],
    min_cost: float,
    output_file: str,
    width: int = 800,
    height: int = 600,
    dpi: int = 100,
    arrow_pos: float = 0.75,
    arrow_length: float = 0.05,
    arrow_angle: float = 0.5,
    logger=None,
) -> str:
    positions = generate_city_positions(len(cities))

    fig, ax = plt.subplots(figsize=(width / dpi, height / dpi), dpi=dpi)
    try:
        ax.set_title(f"TSP Solution - Total Distance: {min_cost:.1f}", fontsize=16)
        ax.set_xlim(-1.2, 1.2)
        ax.set_ylim(-1.2, 1.2)
        ax.set_xlabel("X Coordinate")
        ax.set_ylabel("Y Coordinate")
        ax.grid(True, alpha=0.3)

        if len(tour) > 0:
            pts = [tuple(positions[i]) for i in tour]
            pts.append(tuple(positions[tour[0]]))
            ax.plot([p[0] for p in pts], [p[1] for p in pts],
                    color="red", linewidth=3, label="Optimal Path", zorder=1)

            for a, b in zip(pts[:-1], pts[1:]):
                head = arrow_head(a, b, pos=arrow_pos, length=arrow_length, angle=arrow_angle)
                if head is None:
                    continue
                tip, left, right = head
                for end in (left, right):
                    ax.plot([tip[0], end[0]], [tip[1], end[1]], color="red", linewidth=2, zorder=1)

            names = [cities[i] for i in tour] + [cities[tour[0]]]
            ax.text(-1.1, -1.1, "Path: " + " → ".join(names), fontsize=9, color="black")
            ax.legend(loc="upper right")

        ax.scatter(positions[:, 0], positions[:, 1], s=100, color="blue", zorder=2)
        for i, name in enumerate(cities):
            x, y = positions[i]
            ax.text(x, y + 0.15, name, ha="center", va="center", fontsize=11)

        fig.savefig(output_file, dpi=dpi)
    finally:
        plt.close(fig)

    if logger is not None:
        logger.info("Visualization created with %d cities", len(cities))
    return output_file
