import math
import time
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .solvers.base import Solver, Tour
from .solvers.distance import DistanceMatrix


@dataclass
class Evaluation:
    cost: int
    runtime: float
    gap: float
    solver_name: str
    tour: Tour = field(default_factory=list, repr=False)


def optimality_gap(cost: float, optimum: Optional[float]) -> float:
    if optimum is None or math.isclose(optimum, 0.0):
        return float("inf")
    return (cost - optimum) / optimum


def evaluate_solver(solver: Solver, matrix: DistanceMatrix, optimum: Optional[int] = None) -> Evaluation:
    start = time.perf_counter()
    result = solver.solve(matrix)
    runtime = time.perf_counter() - start
    return Evaluation(
        cost=result.cost,
        runtime=runtime,
        gap=optimality_gap(result.cost, optimum),
        solver_name=result.solver_name,
        tour=result.tour,
    )


def aggregate_evaluations(evaluations: List[Evaluation]) -> Dict[str, float]:
    if not evaluations:
        return {"best": float("inf"), "mean": float("inf"), "gap": float("inf"), "runtime": float("inf")}
    costs = [e.cost for e in evaluations]
    finite_gaps = [e.gap for e in evaluations if e.gap != float("inf")]
    gap = sum(finite_gaps) / len(finite_gaps) if finite_gaps else float("inf")
    return {
        "best": float(min(costs)),
        "mean": sum(costs) / len(costs),
        "gap": gap,
        "runtime": sum(e.runtime for e in evaluations) / len(evaluations),
    }
