import random
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, MutableSequence, Sequence

from .distance import DistanceMatrix


Tour = List[int]

FITNESS_SCALE = 42.0


def tour_cost(matrix: DistanceMatrix, tour: Sequence[int]) -> int:
    dist = 0
    n = len(tour)
    for i in range(n):
        a = tour[i]
        b = tour[(i + 1) % n]
        dist += matrix[a, b]
    return int(dist)


def fitness_score(matrix: DistanceMatrix, tour: Sequence[int]) -> float:
    """Higher is better; only the ranking between tours is meaningful."""
    return FITNESS_SCALE / tour_cost(matrix, tour)


def diversity(tour1: Sequence[int], tour2: Sequence[int]) -> int:
    """
    Number of positions at which two tours hold different cities.

    Rotations and reflections of the same cycle are not recognised: they
    usually score as highly diverse.
    """
    return sum(1 for a, b in zip(tour1, tour2) if a != b)


def random_permutation(n: int, rng: random.Random) -> Tour:
    perm = list(range(n))
    for i in range(n - 1):
        j = rng.randrange(i, n)
        perm[i], perm[j] = perm[j], perm[i]
    return perm


def is_permutation(tour: Sequence[int], n: int) -> bool:
    return len(tour) == n and sorted(int(c) for c in tour) == list(range(n))


def swap_items(seq: MutableSequence[int], i: int, j: int) -> None:
    seq[i], seq[j] = seq[j], seq[i]


class Solver(ABC):
    name: str = "base"

    @abstractmethod
    def solve(self, matrix: DistanceMatrix) -> "SolveResult":
        raise NotImplementedError


@dataclass
class SolveResult:
    tour: Tour
    cost: int
    solver_name: str
    history: List[int] = field(default_factory=list)
    iterations: int = 0

    def one_indexed(self) -> Tour:
        return [city + 1 for city in self.tour]
