"""Tests for the decorative flavor sentence."""

import random
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from tab_generator import flavor  # noqa: E402  # isort:skip


def test_sentence_is_built_from_tables():
    text = flavor.generate_flavor_text(random.Random(3))
    assert text.startswith("Did you know that ")
    assert text.endswith("?")
    body = text[len("Did you know that "):-1]
    assert any(body.startswith(s + " ") for s in flavor.SUBJECTS)
    assert any(a in body for a in flavor.ACTIONS)
    assert any(body.endswith(r) for r in flavor.REASONS)


def test_seeded_text_is_reproducible():
    assert flavor.generate_flavor_text(random.Random(1)) == flavor.generate_flavor_text(
        random.Random(1)
    )
