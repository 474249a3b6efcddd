"""
Permutation metaheuristics for the TSP: a genetic algorithm with pluggable
operators and Value-Biased Stochastic Sampling.
"""

__all__ = [
    "cli",
    "data",
    "evaluation",
    "evolutionary",
    "logs",
    "solvers",
]
