import random
from dataclasses import dataclass
from typing import Optional

import numpy as np

from ..logs import get_logger
from .base import SolveResult, Solver, Tour, random_permutation, tour_cost
from .distance import DistanceMatrix


logger = get_logger(__name__)


def vbss_tour(matrix: DistanceMatrix, bias: float, rng: random.Random) -> Tour:
    """
    Build one tour by Value-Biased Stochastic Sampling.

    From a random start, the next city is drawn among the unvisited ones with
    probability proportional to ``1 / distance ** bias``. Candidates are
    enumerated in ascending city index; a single uniform draw is matched
    against their cumulative probabilities.
    """
    n = len(matrix)
    current = rng.randrange(n)
    tour = [current]
    unvisited = np.ones(n, dtype=bool)
    unvisited[current] = False

    for _ in range(1, n):
        candidates = np.flatnonzero(unvisited)
        dist = matrix[current, candidates].astype(float)
        # ratios to the nearest candidate are <= 1, so the power stays finite
        weights = np.power(dist.min() / dist, bias)
        cumulative = np.cumsum(weights / weights.sum())
        draw = rng.random()
        pick = int(np.searchsorted(cumulative, draw, side="right"))
        # rounding can leave the last cumulative value just under 1.0
        pick = min(pick, len(candidates) - 1)
        current = int(candidates[pick])
        tour.append(current)
        unvisited[current] = False
    return tour


@dataclass
class VBSSConfig:
    samples: int = 10000
    bias: float = 7.0
    random_seed: Optional[int] = None

    def __post_init__(self):
        if self.samples < 1:
            raise ValueError(f"samples must be >= 1, got {self.samples}")
        if self.bias < 0:
            raise ValueError(f"bias must be >= 0, got {self.bias}")


@dataclass
class SamplingConfig:
    samples: int = 10000
    random_seed: Optional[int] = None

    def __post_init__(self):
        if self.samples < 1:
            raise ValueError(f"samples must be >= 1, got {self.samples}")


class _MonteCarloSolver(Solver):
    """Draw independent tours and keep the cheapest one."""

    def __init__(self, samples: int, random_seed: Optional[int] = None, rng: Optional[random.Random] = None):
        self.samples = samples
        self.rng = rng or random.Random(random_seed)

    def sample(self, matrix: DistanceMatrix) -> Tour:
        raise NotImplementedError

    def solve(self, matrix: DistanceMatrix) -> SolveResult:
        best_tour: Optional[Tour] = None
        best_cost = None
        history = []
        for i in range(self.samples):
            tour = self.sample(matrix)
            cost = tour_cost(matrix, tour)
            if best_cost is None or cost < best_cost:
                best_tour, best_cost = tour, cost
                history.append(cost)
                logger.debug(f"{self.name}: sample {i + 1}/{self.samples} improved best to {cost}")
        return SolveResult(
            tour=best_tour,
            cost=best_cost,
            solver_name=self.name,
            history=history,
            iterations=self.samples,
        )


class VBSSSolver(_MonteCarloSolver):
    name = "vbss"

    def __init__(self, config: VBSSConfig, rng: Optional[random.Random] = None):
        super().__init__(config.samples, config.random_seed, rng)
        self.cfg = config

    def sample(self, matrix: DistanceMatrix) -> Tour:
        return vbss_tour(matrix, self.cfg.bias, self.rng)


class RandomSamplingSolver(_MonteCarloSolver):
    """Uniformly random tours; the baseline VBSS is measured against."""

    name = "random"

    def __init__(self, config: SamplingConfig, rng: Optional[random.Random] = None):
        super().__init__(config.samples, config.random_seed, rng)
        self.cfg = config

    def sample(self, matrix: DistanceMatrix) -> Tour:
        return random_permutation(len(matrix), self.rng)
