"""
Permutation crossover operators.

Every operator recombines two parents in place: after the call ``parent1`` and
``parent2`` hold the two children. Both must be permutations of the same
cities; the children are again permutations.
"""

import random
from typing import Callable, Dict, MutableSequence, Optional


Crossover = Callable[[MutableSequence[int], MutableSequence[int], random.Random], None]


def cycle(
    parent1: MutableSequence[int],
    parent2: MutableSequence[int],
    rng: random.Random,
    start: Optional[int] = None,
) -> None:
    # value -> position in parent1
    value_to_index = {value: i for i, value in enumerate(parent1)}
    if start is None:
        start = rng.randrange(len(parent1))

    in_cycle = []
    seen = set()
    idx = start
    while idx not in seen:
        seen.add(idx)
        in_cycle.append(idx)
        idx = value_to_index[parent2[idx]]

    for idx in in_cycle:
        parent1[idx], parent2[idx] = parent2[idx], parent1[idx]


def order_segment(parent1: MutableSequence[int], parent2: MutableSequence[int], start: int, end: int) -> None:
    """Order crossover with the cut points fixed at ``start <= end`` (inclusive)."""
    n = len(parent1)
    segment1 = {parent1[i] for i in range(start, end + 1)}
    segment2 = {parent2[i] for i in range(start, end + 1)}

    # Each parent's cities that the other parent's segment will not bring in,
    # kept in their original order.
    rest1 = [c for c in parent1 if c not in segment2]
    rest2 = [c for c in parent2 if c not in segment1]

    for i in range(start, end + 1):
        parent1[i], parent2[i] = parent2[i], parent1[i]

    pos = (end + 1) % n
    for c1, c2 in zip(rest1, rest2):
        parent1[pos] = c1
        parent2[pos] = c2
        pos = (pos + 1) % n


def order(parent1: MutableSequence[int], parent2: MutableSequence[int], rng: random.Random) -> None:
    n = len(parent1)
    start = rng.randrange(n)
    end = rng.randrange(n)
    if start > end:
        start, end = end, start
    order_segment(parent1, parent2, start, end)


CROSSOVER_OPS: Dict[str, Crossover] = {
    "cycle": cycle,
    "order": order,
}


def get_crossover(name: str) -> Crossover:
    try:
        return CROSSOVER_OPS[name]
    except KeyError:
        raise ValueError(f"Unknown crossover operator '{name}'; choose from {sorted(CROSSOVER_OPS)}") from None
