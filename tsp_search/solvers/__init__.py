from .base import (
    SolveResult,
    Solver,
    Tour,
    diversity,
    fitness_score,
    is_permutation,
    random_permutation,
    tour_cost,
)
from .crossover import CROSSOVER_OPS, get_crossover
from .distance import DistanceMatrix
from .heuristics import (
    RandomSamplingSolver,
    SamplingConfig,
    VBSSConfig,
    VBSSSolver,
    vbss_tour,
)
from .mutation import MUTATION_OPS, get_mutation

__all__ = [
    "Solver",
    "SolveResult",
    "Tour",
    "DistanceMatrix",
    "tour_cost",
    "fitness_score",
    "diversity",
    "is_permutation",
    "random_permutation",
    "CROSSOVER_OPS",
    "MUTATION_OPS",
    "get_crossover",
    "get_mutation",
    "vbss_tour",
    "VBSSConfig",
    "VBSSSolver",
    "SamplingConfig",
    "RandomSamplingSolver",
]
