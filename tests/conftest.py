import random

import numpy as np
import pytest

from tsp_search.solvers import DistanceMatrix


SQUARE = [(0, 0), (0, 10), (10, 10), (10, 0)]


@pytest.fixture
def rng():
    return random.Random(12345)


@pytest.fixture
def square_matrix():
    return DistanceMatrix(SQUARE)


@pytest.fixture
def random_matrix():
    # jittered grid: no two cities closer than 20, so no zero distances
    grid = np.array([(i % 4, i // 4) for i in range(15)], dtype=float) * 25.0
    coords = grid + np.random.default_rng(7).random((15, 2)) * 5.0
    return DistanceMatrix(coords)


@pytest.fixture
def square_tsp(tmp_path):
    path = tmp_path / "square.tsp"
    path.write_text(
        "NAME: square\n"
        "TYPE: TSP\n"
        "COMMENT: 10x10 square\n"
        "DIMENSION: 4\n"
        "EDGE_WEIGHT_TYPE: EUC_2D\n"
        "NODE_COORD_SECTION\n"
        "1 0 0\n"
        "2 0 10\n"
        "3 10 10\n"
        "4 10 0\n"
        "EOF\n"
    )
    return path
