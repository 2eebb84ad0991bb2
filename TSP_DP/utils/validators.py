# TSP_DP/utils/validators.py
from __future__ import annotations

import logging
import math
from typing import Optional, Sequence

import numpy as np

from ..errors import (
    DimensionMismatchError,
    NegativeDistanceError,
    NonFiniteDistanceError,
    NonZeroDiagonalError,
    TooFewCitiesError,
    TooManyCitiesError,
)

MIN_CITIES = 2
MAX_CITIES = 20


def validate_input(
    cities: Sequence[str],
    matrix: Sequence[Sequence[float]],
    min_cities: int = MIN_CITIES,
    max_cities: int = MAX_CITIES,
    logger: Optional[logging.Logger] = None,
) -> np.ndarray:
    """Check everything the Held-Karp solver assumes and return the matrix as float64.

    The first violation found is raised; nothing is repaired.
    """
    # 配置只能收紧 [MIN_CITIES, MAX_CITIES]，不能放宽
    min_cities = max(int(min_cities), MIN_CITIES)
    max_cities = min(int(max_cities), MAX_CITIES)
    n = len(cities)
    if n < min_cities:
        raise TooFewCitiesError(n, min_cities)
    if n > max_cities:
        raise TooManyCitiesError(n, max_cities)

    if len(matrix) != n:
        raise DimensionMismatchError("rows", expected=n, actual=len(matrix))

    for i, row in enumerate(matrix):
        if len(row) != n:
            raise DimensionMismatchError("columns", expected=n, actual=len(row), row=i)

        if row[i] != 0.0:
            raise NonZeroDiagonalError(i, float(row[i]))

        for j, dist in enumerate(row):
            dist = float(dist)
            if not math.isfinite(dist):
                raise NonFiniteDistanceError(i, j, dist)
            if dist < 0.0:
                raise NegativeDistanceError(i, j, dist)

    if logger is not None:
        logger.info("Input validation passed (%d cities)", n)
    return np.asarray(matrix, dtype=np.float64)
