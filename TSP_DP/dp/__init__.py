from .dp_solver import HeldKarpSolver, solve  # noqa: F401
from .spec import DPSpec, default_dp_spec, from_json  # noqa: F401
