import random

import numpy as np
import pytest

from tsp_search.evolutionary import EvolutionConfig, EvolutionarySearch, GeneticSolver
from tsp_search.solvers import is_permutation, tour_cost


def make_search(matrix, seed=1, **overrides):
    params = dict(population_size=10, generations=30, log_interval=0)
    params.update(overrides)
    return EvolutionarySearch(EvolutionConfig(**params), matrix, rng=random.Random(seed))


@pytest.mark.parametrize(
    "overrides",
    [
        {"population_size": 0},
        {"generations": -1},
        {"crossover_rate": 1.5},
        {"mutation_rate": -0.1},
        {"crossover": "pmx"},
        {"mutation": "inversion"},
        {"selection": "roulette"},
        {"tournament_size": 0},
    ],
)
def test_config_validation(overrides):
    with pytest.raises(ValueError):
        EvolutionConfig(**overrides)


def test_config_defaults():
    cfg = EvolutionConfig()
    assert cfg.population_size == 50
    assert cfg.generations == 25000
    assert cfg.crossover_rate == 0.5
    assert cfg.mutation_rate == 0.5
    assert (cfg.crossover, cfg.mutation, cfg.selection) == ("cycle", "reversal", "diversity")


def test_initial_population(random_matrix):
    search = make_search(random_matrix)
    search.generate_initial_population()
    assert search.population.shape == (10, len(random_matrix))
    for row in search.population:
        assert is_permutation(row.tolist(), len(random_matrix))
    assert search.best_cost == int(search.costs().min())
    assert search.best_cost == tour_cost(random_matrix, search.best_member)
    assert search.history == [search.best_cost]


def test_costs_match_tour_cost(random_matrix):
    search = make_search(random_matrix)
    search.generate_initial_population()
    expected = [tour_cost(random_matrix, row.tolist()) for row in search.population]
    assert search.costs().tolist() == expected
    assert search.fitnesses()[0] == pytest.approx(42.0 / expected[0])
    assert search.average_fitness() == pytest.approx(search.total_fitness() / 10)


def test_fitness_diversity_selection(square_matrix):
    search = make_search(square_matrix, population_size=4)
    search.population = np.array(
        [
            [0, 1, 2, 3],  # cost 40
            [0, 1, 2, 3],  # cost 40, duplicate
            [1, 2, 3, 0],  # cost 40, shifted
            [0, 2, 1, 3],  # cost 48
        ]
    )
    search.fitness_diversity_selection()
    expected = [[0, 1, 2, 3], [1, 2, 3, 0], [0, 2, 1, 3], [1, 2, 3, 0]]
    assert search.population.tolist() == expected
    # repeated picks are independent copies
    search.population[1][0] = 9
    assert search.population[3].tolist() == [1, 2, 3, 0]


def test_selection_keeps_the_fittest_in_slot_zero(random_matrix):
    search = make_search(random_matrix)
    search.generate_initial_population()
    fittest = search.population[search.most_fit()].tolist()
    search.fitness_diversity_selection()
    assert search.population[0].tolist() == fittest


def test_tournament_selection_draws_from_population(random_matrix):
    search = make_search(random_matrix, selection="tournament", tournament_size=4)
    search.generate_initial_population()
    before = {tuple(row) for row in search.population.tolist()}
    search.selection()
    assert search.population.shape == (10, len(random_matrix))
    assert {tuple(row) for row in search.population.tolist()} <= before


def test_large_tournament_picks_the_best(random_matrix):
    search = make_search(random_matrix, population_size=2, tournament_size=64)
    search.generate_initial_population()
    best_cost = int(search.costs().min())
    search.tournament_selection()
    assert search.costs().tolist() == [best_cost, best_cost]


def test_zero_rates_leave_population_alone(random_matrix):
    search = make_search(random_matrix, mutation_rate=0.0, crossover_rate=0.0)
    search.generate_initial_population()
    before = search.population.copy()
    search.mutation()
    search.crossover()
    assert np.array_equal(search.population, before)


def test_crossover_skips_unpaired_member(random_matrix):
    search = make_search(random_matrix, population_size=5, crossover_rate=1.0, crossover="order")
    search.generate_initial_population()
    last = search.population[4].copy()
    search.crossover()
    assert np.array_equal(search.population[4], last)
    for row in search.population:
        assert is_permutation(row.tolist(), len(random_matrix))


def test_full_mutation_keeps_permutations(random_matrix):
    for name in ("swap", "insertion", "reversal", "block_move", "scramble"):
        search = make_search(random_matrix, mutation_rate=1.0, mutation=name)
        search.generate_initial_population()
        search.mutation()
        for row in search.population:
            assert is_permutation(row.tolist(), len(random_matrix))


def test_step_requires_initial_population(random_matrix):
    search = make_search(random_matrix)
    with pytest.raises(RuntimeError):
        search.step()


@pytest.mark.parametrize("selection", ["diversity", "tournament"])
def test_best_member_never_regresses(random_matrix, selection):
    search = make_search(random_matrix, selection=selection, generations=40)
    search.generate_initial_population()
    search.evolve()
    assert search.generation == 40
    assert len(search.history) == 41
    assert all(b <= a for a, b in zip(search.history, search.history[1:]))
    tour, cost = search.best()
    assert is_permutation(tour, len(random_matrix))
    assert cost == tour_cost(random_matrix, tour)
    assert cost <= int(search.costs().min())


def test_best_member_is_a_copy(random_matrix):
    search = make_search(random_matrix)
    search.generate_initial_population()
    search.evolve(5)
    tour, cost = search.best()
    search.population[:] = 0
    assert search.best() == (tour, cost)


def test_genetic_solver_finds_square_optimum(square_matrix):
    cfg = EvolutionConfig(population_size=20, generations=25, log_interval=0, random_seed=4)
    result = GeneticSolver(cfg).solve(square_matrix)
    assert result.cost == 40
    assert result.solver_name == "ga"
    assert result.iterations == 25
    assert is_permutation(result.tour, 4)


def test_genetic_solver_is_reproducible(random_matrix):
    cfg = EvolutionConfig(population_size=12, generations=20, log_interval=0, random_seed=8)
    first = GeneticSolver(cfg).solve(random_matrix)
    second = GeneticSolver(cfg).solve(random_matrix)
    assert first.tour == second.tour
    assert first.history == second.history


def test_tournament_rejects_explicit_zero_size(random_matrix):
    search = make_search(random_matrix)
    search.generate_initial_population()
    with pytest.raises(ValueError):
        search.tournament_selection(0)
    search.tournament_selection(1)
    assert search.population.shape == (10, len(random_matrix))
