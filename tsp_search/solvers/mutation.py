"""
Permutation mutation operators.

Each operator draws its random indices from ``rng`` and changes the
permutation in place. The index-driven helpers (``insert_element``,
``reverse_segment``, ``move_block``) do the actual work and are usable on
their own.
"""

import random
from typing import Callable, Dict, MutableSequence, Tuple

from .base import swap_items


Mutation = Callable[[MutableSequence[int], random.Random], None]


def _ordered_pair(rng: random.Random, n: int) -> Tuple[int, int]:
    start = rng.randrange(n)
    stop = rng.randrange(n)
    if start > stop:
        start, stop = stop, start
    return start, stop


def swap(permutation: MutableSequence[int], rng: random.Random) -> None:
    n = len(permutation)
    i = rng.randrange(n)
    j = rng.randrange(n)
    swap_items(permutation, i, j)


def insert_element(permutation: MutableSequence[int], index: int, insertion_index: int) -> None:
    """Move the city at ``index`` to ``insertion_index``, shifting the cities in between by one."""
    city = permutation[index]
    if index < insertion_index:
        for i in range(index + 1, insertion_index + 1):
            permutation[i - 1] = permutation[i]
    elif index > insertion_index:
        for i in range(index - 1, insertion_index - 1, -1):
            permutation[i + 1] = permutation[i]
    permutation[insertion_index] = city


def insertion(permutation: MutableSequence[int], rng: random.Random) -> None:
    n = len(permutation)
    index = rng.randrange(n)
    insertion_index = rng.randrange(n)
    insert_element(permutation, index, insertion_index)


def reverse_segment(permutation: MutableSequence[int], start: int, stop: int) -> None:
    if start > stop:
        start, stop = stop, start
    while start < stop:
        swap_items(permutation, start, stop)
        start += 1
        stop -= 1


def reversal(permutation: MutableSequence[int], rng: random.Random) -> None:
    start, stop = _ordered_pair(rng, len(permutation))
    reverse_segment(permutation, start, stop)


def move_block(permutation: MutableSequence[int], start: int, stop: int, insertion_index: int) -> None:
    """
    Shift the block ``[start, stop]`` so that it ends (moving right) or begins
    (moving left) at ``insertion_index``.

    An insertion index inside the block leaves the permutation unchanged.
    """
    if start > stop:
        start, stop = stop, start
    if insertion_index > stop:
        distance = insertion_index - stop
        # rightmost city first, each walked right one slot at a time
        for i in range(stop, start - 1, -1):
            for j in range(distance):
                swap_items(permutation, i + j, i + j + 1)
    elif insertion_index < start:
        distance = start - insertion_index
        for i in range(start, stop + 1):
            for j in range(distance):
                swap_items(permutation, i - j, i - j - 1)


def block_move(permutation: MutableSequence[int], rng: random.Random) -> None:
    n = len(permutation)
    start, stop = _ordered_pair(rng, n)
    insertion_index = rng.randrange(n)
    move_block(permutation, start, stop, insertion_index)


def scramble(permutation: MutableSequence[int], rng: random.Random) -> None:
    start, stop = _ordered_pair(rng, len(permutation))
    for i in range(start, stop):
        swap_items(permutation, i, rng.randrange(i, stop + 1))


MUTATION_OPS: Dict[str, Mutation] = {
    "swap": swap,
    "insertion": insertion,
    "reversal": reversal,
    "block_move": block_move,
    "scramble": scramble,
}


def get_mutation(name: str) -> Mutation:
    try:
        return MUTATION_OPS[name]
    except KeyError:
        raise ValueError(f"Unknown mutation operator '{name}'; choose from {sorted(MUTATION_OPS)}") from None
