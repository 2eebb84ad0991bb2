"""TSP_DP: exact TSP via Held-Karp bitmask dynamic programming.

Reads a small (<= 20 cities) distance matrix, computes the minimum-cost
Hamiltonian cycle from city 0 and renders the tour as a PNG.
"""

from .dp.dp_solver import HeldKarpSolver, solve  # noqa: F401
from .problem import TSPDP  # noqa: F401
