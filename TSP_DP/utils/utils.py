from __future__ import annotations

import itertools
import logging
import os
from typing import Any, Dict, List, Sequence, Tuple

import numpy as np

from ..errors import TSPFileNotFoundError, TooManyOutputAttemptsError


def make_logger(name: str = "tsp_dp", level: int = logging.INFO, log_file: str = "") -> logging.Logger:
    logger = logging.getLogger(name)
    if logger.handlers:
        logger.setLevel(level)
        for h in logger.handlers:
            h.setLevel(level)
        if log_file:
            path = os.path.abspath(log_file)
            if not any(isinstance(h, logging.FileHandler) and h.baseFilename == path for h in logger.handlers):
                fh = logging.FileHandler(log_file, encoding="utf-8")
                fh.setLevel(level)
                fh.setFormatter(logger.handlers[0].formatter)
                logger.addHandler(fh)
        return logger
    logger.setLevel(level)
    fmt = logging.Formatter("[%(asctime)s][%(levelname)s] %(message)s", datefmt="%H:%M:%S")
    ch = logging.StreamHandler()
    ch.setLevel(level)
    ch.setFormatter(fmt)
    logger.addHandler(ch)
    if log_file:
        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setLevel(level)
        fh.setFormatter(fmt)
        logger.addHandler(fh)
    logger.propagate = False
    return logger


# -----------------------------
# Tours
# -----------------------------
def tour_cost(distmat, order: Sequence[int]) -> float:
    """Length of the closed tour order[0] -> ... -> order[-1] -> order[0]."""
    n = len(order)
    if n < 2:
        return 0.0
    d = np.asarray(distmat, dtype=np.float64)
    s = 0.0
    for i in range(n):
        s += float(d[order[i], order[(i + 1) % n]])
    return s


def brute_force_tsp(distmat) -> Tuple[float, List[int]]:
    """Exhaustive (n-1)! search from city 0, first minimum in lexicographic order wins.

    Only meant for cross-checking small instances.
    """
    d = np.asarray(distmat, dtype=np.float64)
    n = d.shape[0] if d.ndim == 2 else 0
    if n == 0:
        return 0.0, []
    if n == 1:
        return 0.0, [0]

    best_cost = float("inf")
    best_tour: List[int] = []
    for perm in itertools.permutations(range(1, n)):
        order = [0, *perm]
        c = tour_cost(d, order)
        if c < best_cost:
            best_cost = c
            best_tour = order
    return best_cost, best_tour


def format_path(cities: Sequence[str], tour: Sequence[int], arrow: str = " -> ") -> str:
    """Closed path text, e.g. 'A -> B -> C -> A'."""
    if not tour:
        return ""
    names = [cities[i] for i in tour] + [cities[tour[0]]]
    return arrow.join(names)


# -----------------------------
# Input summary
# -----------------------------
def summarize_matrix(distmat) -> Dict[str, Any]:
    d = np.asarray(distmat, dtype=np.float64)
    n = int(d.shape[0])
    out: Dict[str, Any] = {
        "n_cities": n,
        "n_states": (1 << n) * n,
        "symmetric": bool(np.array_equal(d, d.T)),
        "mean_dist": 0.0,
        "min_dist": 0.0,
        "max_dist": 0.0,
    }
    if n > 1:
        off = d[~np.eye(n, dtype=bool)]
        out["mean_dist"] = float(np.mean(off))
        out["min_dist"] = float(np.min(off))
        out["max_dist"] = float(np.max(off))
    return out


def format_input_summary(cities: Sequence[str], distmat) -> str:
    d = np.asarray(distmat, dtype=np.float64)
    width = max((len(c) for c in cities), default=0)
    lines = ["Input Summary:", f"Cities: {list(cities)}", "Distance Matrix:"]
    for i, row in enumerate(d):
        cells = ", ".join(f"{v:6.1f}" for v in row)
        lines.append(f"  {cities[i]:>{width}}: {cells}")
    return "\n".join(lines)


# -----------------------------
# Output files
# -----------------------------
def generate_unique_filename(base_name: str, output_dir: str = "output", max_attempts: int = 9999,
                             ext: str = ".png") -> str:
    """<dir>/<base>.png, else <base>_1.png ... <base>_<max_attempts>.png.

    The output directory is never created here.
    """
    if not os.path.isdir(output_dir):
        raise TSPFileNotFoundError(
            output_dir, hint=f"Output directory not found. Please create '{output_dir}' folder first."
        )

    first = os.path.join(output_dir, f"{base_name}{ext}")
    if not os.path.exists(first):
        return first

    for counter in range(1, max_attempts + 1):
        cand = os.path.join(output_dir, f"{base_name}_{counter}{ext}")
        if not os.path.exists(cand):
            return cand

    raise TooManyOutputAttemptsError(base_name, max_attempts)
