import argparse
import sys
import time
from pathlib import Path

from tsp_search.data import DataFormatError, load_instance, load_tsplib_instances
from tsp_search.evaluation import aggregate_evaluations, evaluate_solver
from tsp_search.evolutionary import SELECTION_SCHEMES, EvolutionConfig, GeneticSolver
from tsp_search.logs import configure_logging, get_logger
from tsp_search.solvers import (
    CROSSOVER_OPS,
    MUTATION_OPS,
    RandomSamplingSolver,
    SamplingConfig,
    Solver,
    VBSSConfig,
    VBSSSolver,
)


logger = get_logger("tsp_search.cli")

STRATEGIES = ("vbss", "ga", "random")
MIN_CITIES = 2


def build_solver(args, seed=None) -> Solver:
    if args.strategy == "ga":
        cfg = EvolutionConfig(
            population_size=args.population_size,
            generations=args.generations,
            crossover_rate=args.crossover_rate,
            mutation_rate=args.mutation_rate,
            crossover=args.crossover,
            mutation=args.mutation,
            selection=args.selection,
            tournament_size=args.tournament_size,
            log_interval=args.log_interval,
            random_seed=seed,
        )
        return GeneticSolver(cfg)
    if args.strategy == "random":
        return RandomSamplingSolver(SamplingConfig(samples=args.samples, random_seed=seed))
    return VBSSSolver(VBSSConfig(samples=args.samples, bias=args.bias, random_seed=seed))


def _check_size(instance) -> bool:
    if instance.dimension < MIN_CITIES:
        logger.error(f"{instance.name}: need at least {MIN_CITIES} cities, got {instance.dimension}")
        return False
    return True


def solve(args) -> int:
    try:
        instance = load_instance(Path(args.path))
    except (DataFormatError, FileNotFoundError) as e:
        logger.error(str(e))
        return 1
    if not _check_size(instance):
        return 2

    t0 = time.perf_counter()
    matrix = instance.distance_matrix()
    logger.info(f"loaded {instance.name} ({instance.dimension} cities) in {time.perf_counter() - t0:.2f}s")
    solver = build_solver(args, seed=args.seed)
    evaluation = evaluate_solver(solver, matrix, instance.optimum)
    if instance.optimum is not None:
        logger.info(f"{solver.name}: cost={evaluation.cost} gap={evaluation.gap:.2%} time={evaluation.runtime:.2f}s")
    else:
        logger.info(f"{solver.name}: cost={evaluation.cost} time={evaluation.runtime:.2f}s")

    print(evaluation.cost)
    for city in evaluation.tour:
        print(city + 1)
    return 0


def bench(args) -> int:
    root = Path(args.data_root)
    try:
        instances = load_tsplib_instances(root, max_nodes=args.max_nodes)
    except DataFormatError as e:
        logger.error(str(e))
        return 1
    if not instances:
        logger.error(f"No TSPLIB instances found in {root}")
        return 1

    base_seed = args.seed if args.seed is not None else 0
    for inst in instances:
        if not _check_size(inst):
            continue
        matrix = inst.distance_matrix()
        evaluations = [
            evaluate_solver(build_solver(args, seed=base_seed + k), matrix, inst.optimum)
            for k in range(args.runs)
        ]
        summary = aggregate_evaluations(evaluations)
        gap = "n/a" if summary["gap"] == float("inf") else f"{summary['gap']:.2%}"
        print(
            f"{inst.name:<16} n={inst.dimension:<5} best={summary['best']:<10.0f} "
            f"mean={summary['mean']:<12.1f} gap={gap:<8} time={summary['runtime']:.2f}s"
        )
    return 0


def _add_strategy_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--strategy", choices=STRATEGIES, default="vbss")
    parser.add_argument("--seed", type=int, default=None)

    ga = parser.add_argument_group("genetic algorithm")
    ga.add_argument("--population-size", type=int, default=50)
    ga.add_argument("--generations", type=int, default=25000)
    ga.add_argument("--crossover", choices=sorted(CROSSOVER_OPS), default="cycle")
    ga.add_argument("--mutation", choices=sorted(MUTATION_OPS), default="reversal")
    ga.add_argument("--selection", choices=SELECTION_SCHEMES, default="diversity")
    ga.add_argument("--tournament-size", type=int, default=3)
    ga.add_argument("--crossover-rate", type=float, default=0.5)
    ga.add_argument("--mutation-rate", type=float, default=0.5)
    ga.add_argument("--log-interval", type=int, default=1000)

    sampling = parser.add_argument_group("sampling (vbss / random)")
    sampling.add_argument("--samples", type=int, default=10000)
    sampling.add_argument("--bias", type=float, default=7.0, help="VBSS exponent b")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="TSP search with a genetic algorithm or VBSS")
    parser.add_argument("--log-level", default="INFO")
    parser.add_argument("--log-file", default=None)
    subparsers = parser.add_subparsers(dest="command", required=True)

    solve_parser = subparsers.add_parser("solve", help="Solve one TSPLIB instance and print the best tour")
    solve_parser.add_argument("path")
    _add_strategy_options(solve_parser)
    solve_parser.set_defaults(func=solve)

    bench_parser = subparsers.add_parser("bench", help="Run a strategy over every instance in a directory")
    bench_parser.add_argument("data_root")
    bench_parser.add_argument("--runs", type=int, default=3)
    bench_parser.add_argument("--max-nodes", type=int, default=None)
    _add_strategy_options(bench_parser)
    bench_parser.set_defaults(func=bench)
    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level, args.log_file)
    try:
        return args.func(args)
    except ValueError as e:
        # invalid configuration values
        logger.error(str(e))
        return 2


if __name__ == "__main__":
    sys.exit(main())
