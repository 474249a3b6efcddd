import random
from pathlib import Path

from tsp_search.data import load_tsplib_instances
from tsp_search.evaluation import evaluate_solver
from tsp_search.evolutionary import EvolutionConfig, GeneticSolver
from tsp_search.solvers import VBSSConfig, VBSSSolver


def main():
    data_root = Path("data/tsplib")
    if not data_root.exists():
        raise FileNotFoundError("Place TSPLIB files in data/tsplib")

    instances = load_tsplib_instances(data_root, max_nodes=100, max_instances=3)
    for inst in instances:
        matrix = inst.distance_matrix()
        solvers = [
            GeneticSolver(EvolutionConfig(population_size=30, generations=500, log_interval=0), rng=random.Random(1)),
            VBSSSolver(VBSSConfig(samples=500, bias=7.0), rng=random.Random(1)),
        ]
        for solver in solvers:
            ev = evaluate_solver(solver, matrix, inst.optimum)
            print(f"{inst.name}: {ev.solver_name} cost={ev.cost} gap={ev.gap:.3f} time={ev.runtime:.2f}s")


if __name__ == "__main__":
    main()
