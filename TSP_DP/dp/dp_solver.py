# TSP_DP/dp/dp_solver.py
"""Held-Karp exact TSP solver.

A state (mask, current) means "standing at `current` having visited exactly
the cities in `mask`". Both tables are flat arrays indexed by
``mask * n + current``:

    memo[s]    minimal cost to visit the remaining cities and return to city 0
               (NaN while unset)
    parent[s]  next city that achieves memo[s] (-1 while unset)

States with the full mask are the base case ``d(current, 0)`` and are never
stored. Ties between equal candidates go to the lowest next-city index,
because candidates are scanned in ascending order and only a strict ``<``
replaces the incumbent.
"""

from __future__ import annotations

import logging
import math
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np
from numba import jit
from tqdm import tqdm

from .spec import ENGINES

START_CITY = 0
START_MASK = 1 << START_CITY


def popcount(mask: int) -> int:
    return bin(mask).count("1")


# ---------------------------------------------------------------------------
#  Bottom-up kernel (numba)
# ---------------------------------------------------------------------------

@jit(nopython=True, cache=True)
def _sweep_layer(D, memo, parent, masks, n):
    """Fill every reachable state whose mask is in `masks` (one popcount layer).

    All successors of a layer live in the next (larger) layer, which must be
    complete before this call.
    """
    full = (1 << n) - 1
    for idx in range(masks.shape[0]):
        mask = masks[idx]
        for cur in range(n):
            if ((mask >> cur) & 1) == 0:
                continue
            # city 0 is only "current" in the start state
            if cur == 0 and mask != 1:
                continue
            best = np.inf
            best_next = -1
            for nxt in range(n):
                if ((mask >> nxt) & 1) == 1:
                    continue
                new_mask = mask | (1 << nxt)
                if new_mask == full:
                    rest = D[nxt, 0]
                else:
                    rest = memo[new_mask * n + nxt]
                cand = D[cur, nxt] + rest
                if cand < best:
                    best = cand
                    best_next = nxt
            memo[mask * n + cur] = best
            parent[mask * n + cur] = best_next


def layers_by_popcount(n: int) -> Dict[int, np.ndarray]:
    """Masks containing the start city, grouped by popcount 1 .. n-1."""
    masks = np.arange(1 << n, dtype=np.int64)
    masks = masks[(masks & START_MASK) != 0]
    pc = np.zeros_like(masks)
    for b in range(n):
        pc += (masks >> b) & 1
    return {k: masks[pc == k] for k in range(1, n)}


# ---------------------------------------------------------------------------
#  Solver
# ---------------------------------------------------------------------------

class HeldKarpSolver:
    def __init__(
        self,
        distance_matrix,
        engine: str = "bottom_up",
        trace_max_popcount: int = 3,
        progress: bool = False,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        """
        distance_matrix must already be validated (square, zero diagonal,
        finite, non-negative). The solver keeps its own float64 copy.
        """
        if engine not in ENGINES:
            raise ValueError(f"Unknown engine: {engine!r} (expected one of {ENGINES})")
        mat = np.array(distance_matrix, dtype=np.float64)
        if mat.size == 0:
            mat = mat.reshape((0, 0))
        self._matrix = np.ascontiguousarray(mat)
        self.n = int(self._matrix.shape[0])
        self.engine = engine
        self.trace_max_popcount = int(trace_max_popcount)
        self.progress = bool(progress)
        self.log = logger or logging.getLogger("tsp_dp")

        self.memo: Optional[np.ndarray] = None
        self.parent: Optional[np.ndarray] = None

    @property
    def full_mask(self) -> int:
        return (1 << self.n) - 1

    @property
    def n_states(self) -> int:
        return (1 << self.n) * self.n

    def state_index(self, mask: int, current: int) -> int:
        return mask * self.n + current

    # ------------------------------------------------------------------
    def solve(self, verbose: bool = False) -> Tuple[float, List[int]]:
        """Return (min_cost, tour). The tour is open; min_cost includes tour[-1] -> 0."""
        # tables never outlive one solve call
        self.memo = None
        self.parent = None

        if self.n == 0:
            return 0.0, []
        if self.n == 1:
            return 0.0, [START_CITY]

        self.log.info("Initializing DP table for %d cities (%d states, engine=%s)",
                      self.n, self.n_states, self.engine)

        if self.engine == "top_down":
            min_cost = self._solve_top_down(verbose)
        else:
            min_cost = self._solve_bottom_up(verbose)

        tour = self.reconstruct(START_MASK, START_CITY)
        return float(min_cost), tour

    def _trace(self, mask: int, current: int, cost: float) -> None:
        self.log.debug("DP(%s, %d) = %.1f", format(mask, f"0{self.n}b"), current, cost)

    def _solve_top_down(self, verbose: bool) -> float:
        n = self.n
        full = self.full_mask
        d = self._matrix.tolist()
        memo = [math.nan] * self.n_states
        parent = [-1] * self.n_states

        def dp(mask: int, current: int) -> float:
            if mask == full:
                return d[current][START_CITY]
            s = mask * n + current
            if parent[s] >= 0:
                return memo[s]

            best = math.inf
            best_next = -1
            for nxt in range(n):
                if mask & (1 << nxt):
                    continue
                cand = d[current][nxt] + dp(mask | (1 << nxt), nxt)
                if cand < best:
                    best = cand
                    best_next = nxt

            memo[s] = best
            parent[s] = best_next
            if verbose and popcount(mask) <= self.trace_max_popcount:
                self._trace(mask, current, best)
            return best

        min_cost = dp(START_MASK, START_CITY)
        self.memo = np.asarray(memo, dtype=np.float64)
        self.parent = np.asarray(parent, dtype=np.int8)
        return min_cost

    def _solve_bottom_up(self, verbose: bool) -> float:
        n = self.n
        memo = np.full(self.n_states, np.nan, dtype=np.float64)
        parent = np.full(self.n_states, -1, dtype=np.int8)
        layers = layers_by_popcount(n)

        for k in tqdm(range(n - 1, 0, -1), disable=not self.progress, desc="Held-Karp", unit="layer"):
            _sweep_layer(self._matrix, memo, parent, layers[k], n)

        self.memo = memo
        self.parent = parent

        if verbose:
            for k in range(1, min(self.trace_max_popcount, n - 1) + 1):
                for mask in layers[k]:
                    mask = int(mask)
                    for cur in range(n):
                        s = mask * n + cur
                        if parent[s] >= 0:
                            self._trace(mask, cur, float(memo[s]))

        return float(memo[START_MASK * n + START_CITY])

    # ------------------------------------------------------------------
    def reconstruct(self, start_mask: int = START_MASK, start_city: int = START_CITY) -> List[int]:
        """Follow parent pointers from (start_mask, start_city) until the mask is full.

        Stops early when a state has no parent entry, e.g. before solve().
        """
        tour = [start_city]
        if self.parent is None:
            return tour

        full = self.full_mask
        mask, current = start_mask, start_city
        while mask != full:
            nxt = int(self.parent[self.state_index(mask, current)])
            if nxt < 0:
                break
            tour.append(nxt)
            mask |= 1 << nxt
            current = nxt
        return tour

    def cost_to_complete(self, mask: int, current: int) -> Optional[float]:
        """Memo lookup; the full mask answers with the base case d(current, 0)."""
        if mask == self.full_mask:
            return float(self._matrix[current, START_CITY])
        if self.parent is None:
            return None
        s = self.state_index(mask, current)
        if self.parent[s] < 0:
            return None
        return float(self.memo[s])


def solve(distance_matrix: Sequence[Sequence[float]], engine: str = "bottom_up") -> Tuple[float, List[int]]:
    return HeldKarpSolver(distance_matrix, engine=engine).solve()
