"""Candidate weights and weighted random selection.

``candidate_weight`` turns the fret distance between two notes into a comfort
weight: small shifts are favoured, a four fret stretch is rare and anything
wider is excluded.  ``select_weighted`` is the single place where a weighted
draw happens.  It lays the weights end to end on ``[0, total)`` using a
cumulative table and returns the item whose interval holds a uniform draw.

Example
-------
>>> import random
>>> candidate_weight(1, same_string=True)
72
>>> select_weighted(["a", "b"], [0, 5], random.Random(1))
'b'
"""

from __future__ import annotations

import random
from typing import Optional, Sequence, TypeVar

import numpy as np

__all__ = [
    "WEIGHT_CLOSE",
    "WEIGHT_MEDIUM",
    "WEIGHT_FAR",
    "SAME_STRING_BONUS",
    "fret_distance_weight",
    "candidate_weight",
    "select_weighted",
]

T = TypeVar("T")

WEIGHT_CLOSE = 60   # 0-2 frets
WEIGHT_MEDIUM = 30  # 3 frets
WEIGHT_FAR = 10     # 4 frets, a stretch
SAME_STRING_BONUS = 1.2

# Index is the absolute fret distance. Distances past the end weigh zero.
_DISTANCE_LOOKUP = (WEIGHT_CLOSE, WEIGHT_CLOSE, WEIGHT_CLOSE, WEIGHT_MEDIUM, WEIGHT_FAR)


def fret_distance_weight(distance: int) -> int:
    """Return the comfort weight for moving ``distance`` frets."""

    distance = abs(distance)
    if distance < len(_DISTANCE_LOOKUP):
        return _DISTANCE_LOOKUP[distance]
    return 0


def candidate_weight(distance: int, same_string: bool) -> int:
    """Return the weight of a candidate ``distance`` frets away.

    Staying on the previous string earns a 20% bonus, floored to an integer.
    """

    weight = fret_distance_weight(distance)
    if same_string:
        weight = int(weight * SAME_STRING_BONUS)
    return weight


def select_weighted(
    items: Sequence[T],
    weights: Sequence[float],
    rng: Optional[random.Random] = None,
) -> T:
    """Return one of ``items`` chosen with probability proportional to its weight.

    Parameters
    ----------
    items:
        Candidates to choose from.
    weights:
        Non-negative weights aligned with ``items``. Zero weights are allowed
        and are never selected as long as some weight is positive.
    rng:
        Source of the uniform draw. A fresh ``random.Random`` is used when
        omitted.

    Raises
    ------
    ValueError
        If the inputs are empty, differ in length, contain a negative weight
        or sum to zero.
    """

    if not items or not weights:
        raise ValueError("items and weights must be non-empty")
    if len(items) != len(weights):
        raise ValueError("items and weights must have the same length")

    arr = np.asarray(weights, dtype=np.float64)
    if (arr < 0).any():
        raise ValueError("weights must be non-negative")
    # ``cumulative[i]`` is the exclusive end of item ``i``'s interval.
    cumulative = np.cumsum(arr)
    total = float(cumulative[-1])
    if total <= 0:
        raise ValueError("weights must not all be zero")

    rng = rng or random.Random()
    draw = rng.random() * total
    idx = int(np.searchsorted(cumulative, draw, side="right"))
    # Guard against float rounding pushing the draw onto the closing edge.
    return items[min(idx, len(items) - 1)]
