# TSP_DP/dp/dp_run.py

from __future__ import annotations

import logging
import time
from typing import Any, Dict, Optional

import numpy as np

from .dp_solver import HeldKarpSolver
from .spec import DPSpec, default_dp_spec, from_json


def resolve_spec(spec: DPSpec | dict | None) -> DPSpec:
    if isinstance(spec, DPSpec):
        return spec
    if isinstance(spec, dict):
        return from_json(spec)
    return default_dp_spec()


def solve_instance_with_spec(
    dis_matrix,
    spec: DPSpec | dict | None = None,
    verbose: bool = False,
    logger: Optional[logging.Logger] = None,
    return_meta: bool = False,
):
    """Run Held-Karp on a validated matrix according to DPSpec.

    Returns (min_cost, tour) or (min_cost, tour, meta) when return_meta is set.
    """
    dp_spec = resolve_spec(spec)
    t0 = time.perf_counter()

    solver = HeldKarpSolver(
        dis_matrix,
        engine=str(dp_spec.engine.get("type", "bottom_up")),
        trace_max_popcount=int(dp_spec.trace.get("max_popcount", 3)),
        progress=bool(dp_spec.engine.get("progress", False)),
        logger=logger,
    )
    min_cost, tour = solver.solve(verbose=verbose)
    elapsed = time.perf_counter() - t0

    if not return_meta:
        return min_cost, tour

    filled = 0
    if solver.parent is not None:
        filled = int(np.count_nonzero(solver.parent >= 0))

    meta: Dict[str, Any] = {
        "n": solver.n,
        "engine": solver.engine,
        "n_states": solver.n_states,
        "states_filled": filled,
        "elapsed_sec": float(elapsed),
        "min_cost": float(min_cost),
        "tour": list(tour),
    }
    return min_cost, tour, meta
