import logging

import numpy as np
import pytest


@pytest.fixture
def small_matrix():
    return [
        [0.0, 10.0, 15.0],
        [10.0, 0.0, 20.0],
        [15.0, 20.0, 0.0],
    ]


def random_int_matrix(n, seed, symmetric=False, high=100):
    rng = np.random.RandomState(seed)
    D = rng.randint(1, high, size=(n, n)).astype(np.float64)
    if symmetric:
        D = np.triu(D, 1)
        D = D + D.T
    np.fill_diagonal(D, 0.0)
    return D


@pytest.fixture(autouse=True)
def _reset_tsp_logger():
    yield
    logger = logging.getLogger("tsp_dp")
    for h in list(logger.handlers):
        logger.removeHandler(h)
        h.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
