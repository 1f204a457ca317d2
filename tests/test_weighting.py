"""Tests for fret-distance weights and weighted selection."""

import random
import sys
from collections import Counter
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from tab_generator import weighting  # noqa: E402  # isort:skip


@pytest.mark.parametrize(
    "distance,same,expected",
    [
        (0, False, 60),
        (2, False, 60),
        (3, False, 30),
        (4, False, 10),
        (5, False, 0),
        (1, True, 72),
        (3, True, 36),
        (4, True, 12),
    ],
)
def test_candidate_weight(distance, same, expected):
    assert weighting.candidate_weight(distance, same) == expected


def test_select_weighted_never_picks_zero_weight():
    rng = random.Random(0)
    picks = {weighting.select_weighted(["a", "b", "c"], [0, 3, 0], rng) for _ in range(200)}
    assert picks == {"b"}


def test_select_weighted_is_roughly_proportional():
    rng = random.Random(42)
    counts = Counter(
        weighting.select_weighted(["near", "far"], [60, 10], rng) for _ in range(7000)
    )
    assert 0.8 < counts["near"] / 7000 < 0.9


@pytest.mark.parametrize(
    "items,weights",
    [([], []), (["a"], [1, 2]), (["a", "b"], [1, -1]), (["a", "b"], [0, 0])],
)
def test_select_weighted_rejects_bad_input(items, weights):
    with pytest.raises(ValueError):
        weighting.select_weighted(items, weights, random.Random(0))
