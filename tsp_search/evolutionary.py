import random
from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np

from .logs import get_logger
from .solvers.base import FITNESS_SCALE, SolveResult, Solver, Tour, random_permutation, tour_cost
from .solvers.crossover import CROSSOVER_OPS, get_crossover
from .solvers.distance import DistanceMatrix
from .solvers.mutation import MUTATION_OPS, get_mutation


logger = get_logger(__name__)

SELECTION_SCHEMES = ("diversity", "tournament")


@dataclass
class EvolutionConfig:
    population_size: int = 50
    generations: int = 25000
    crossover_rate: float = 0.5
    mutation_rate: float = 0.5
    crossover: str = "cycle"
    mutation: str = "reversal"
    selection: str = "diversity"
    tournament_size: int = 3
    log_interval: int = 1000
    random_seed: Optional[int] = None

    def __post_init__(self):
        self.validate()

    def validate(self) -> None:
        if self.population_size < 1:
            raise ValueError(f"population_size must be >= 1, got {self.population_size}")
        if self.generations < 0:
            raise ValueError(f"generations must be >= 0, got {self.generations}")
        for field_name in ("crossover_rate", "mutation_rate"):
            rate = getattr(self, field_name)
            if not 0.0 <= rate <= 1.0:
                raise ValueError(f"{field_name} must be in [0, 1], got {rate}")
        if self.crossover not in CROSSOVER_OPS:
            raise ValueError(f"crossover must be one of {sorted(CROSSOVER_OPS)}, got {self.crossover}")
        if self.mutation not in MUTATION_OPS:
            raise ValueError(f"mutation must be one of {sorted(MUTATION_OPS)}, got {self.mutation}")
        if self.selection not in SELECTION_SCHEMES:
            raise ValueError(f"selection must be one of {list(SELECTION_SCHEMES)}, got {self.selection}")
        if self.tournament_size < 1:
            raise ValueError(f"tournament_size must be >= 1, got {self.tournament_size}")
        if self.log_interval < 0:
            raise ValueError(f"log_interval must be >= 0, got {self.log_interval}")


class EvolutionarySearch:
    """
    Generational GA over permutations.

    Each generation runs selection, then mutation of single members, then
    crossover of consecutive pairs, and finally records the best tour seen so
    far. The population is a ``(population_size, n)`` array owned by the
    search; operators receive row views and change them in place.
    """

    def __init__(self, config: EvolutionConfig, matrix: DistanceMatrix, rng: random.Random = None):
        self.cfg = config
        self.matrix = matrix
        self.n = len(matrix)
        self.rng = rng or random.Random(config.random_seed)
        self.crossover_op = get_crossover(config.crossover)
        self.mutation_op = get_mutation(config.mutation)
        self.population = np.empty((config.population_size, self.n), dtype=np.int64)
        self.generation = 0
        self.best_member: Optional[Tour] = None
        self.best_cost: Optional[int] = None
        self.history: List[int] = []

    def generate_initial_population(self) -> None:
        for i in range(self.cfg.population_size):
            self.population[i] = random_permutation(self.n, self.rng)
        idx = self.most_fit()
        self.best_member = self.population[idx].tolist()
        self.best_cost = tour_cost(self.matrix, self.best_member)
        self.generation = 0
        self.history = [self.best_cost]

    def costs(self) -> np.ndarray:
        pop = self.population
        return self.matrix.array[pop, np.roll(pop, -1, axis=1)].sum(axis=1)

    def fitnesses(self) -> np.ndarray:
        return FITNESS_SCALE / self.costs()

    def most_fit(self) -> int:
        return int(np.argmax(self.fitnesses()))

    def total_fitness(self) -> float:
        return float(self.fitnesses().sum())

    def average_fitness(self) -> float:
        return self.total_fitness() / len(self.population)

    # ---------------------------------------
    # Selection
    # ---------------------------------------

    def fitness_diversity_selection(self) -> None:
        """
        Slot 0 keeps the fittest member. Every later slot takes the member
        maximising fitness plus its summed diversity to the members already
        chosen, so survivors stay fit but unlike each other.
        """
        pop = self.population
        fit = self.fitnesses()
        size = len(pop)
        chosen = np.empty(size, dtype=np.int64)
        chosen[0] = int(np.argmax(fit))
        accumulated = np.zeros(size, dtype=np.int64)
        for i in range(1, size):
            accumulated += np.count_nonzero(pop != pop[chosen[i - 1]], axis=1)
            chosen[i] = int(np.argmax(fit + accumulated))
        self.population = pop[chosen]

    def tournament_selection(self, tournament_size: int = None) -> None:
        t = self.cfg.tournament_size if tournament_size is None else tournament_size
        if t < 1:
            raise ValueError(f"tournament_size must be >= 1, got {t}")
        fit = self.fitnesses()
        size = len(self.population)
        chosen = []
        for _ in range(size):
            contenders = [self.rng.randrange(size) for _ in range(t)]
            winner = contenders[0]
            for idx in contenders[1:]:
                if fit[idx] > fit[winner]:
                    winner = idx
            chosen.append(winner)
        self.population = self.population[chosen]

    def selection(self) -> None:
        if self.cfg.selection == "tournament":
            self.tournament_selection()
        else:
            self.fitness_diversity_selection()

    # ---------------------------------------
    # Variation
    # ---------------------------------------

    def mutation(self) -> None:
        for member in self.population:
            if self.rng.random() < self.cfg.mutation_rate:
                self.mutation_op(member, self.rng)

    def crossover(self) -> None:
        pop = self.population
        for i in range(0, len(pop) - 1, 2):
            if self.rng.random() < self.cfg.crossover_rate:
                self.crossover_op(pop[i], pop[i + 1], self.rng)

    # ---------------------------------------
    # Generations
    # ---------------------------------------

    def step(self) -> None:
        if self.best_member is None:
            raise RuntimeError("generate_initial_population() must be called before step()")
        self.selection()
        self.mutation()
        self.crossover()

        costs = self.costs()
        idx = int(np.argmin(costs))
        cost = int(costs[idx])
        if cost < self.best_cost:
            self.best_member = self.population[idx].tolist()
            self.best_cost = cost
            logger.debug(f"generation {self.generation + 1}: new best tour cost {cost}")
        self.generation += 1
        self.history.append(self.best_cost)

    def evolve(self, generations: int = None) -> None:
        total = self.cfg.generations if generations is None else generations
        interval = self.cfg.log_interval
        for _ in range(total):
            self.step()
            if interval and self.generation % interval == 0:
                logger.info(
                    f"gen {self.generation}: best={self.best_cost} avg_fitness={self.average_fitness():.6f}"
                )

    def best(self) -> Tuple[Tour, int]:
        return list(self.best_member), self.best_cost


class GeneticSolver(Solver):
    name = "ga"

    def __init__(self, config: EvolutionConfig, rng: random.Random = None):
        self.cfg = config
        self.rng = rng or random.Random(config.random_seed)

    def solve(self, matrix: DistanceMatrix) -> SolveResult:
        search = EvolutionarySearch(self.cfg, matrix, rng=self.rng)
        search.generate_initial_population()
        search.evolve()
        tour, cost = search.best()
        return SolveResult(
            tour=tour,
            cost=cost,
            solver_name=self.name,
            history=list(search.history),
            iterations=search.generation,
        )
