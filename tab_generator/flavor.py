"""Decorative one-liners printed under each exercise.

The sentence is assembled from three independent picks, one per table. It
has no influence on the notes that are generated.
"""

from __future__ import annotations

import random
from typing import Optional, Tuple

__all__ = ["SUBJECTS", "ACTIONS", "REASONS", "generate_flavor_text"]

SUBJECTS: Tuple[str, ...] = (
    "Albert Einstein",
    "an alien from Andromeda",
    "Darth Vader",
    "your maths teacher",
    "an emperor penguin",
    "a velociraptor",
    "the ghost of Beethoven",
    "a cybernetic ninja",
    "a panda bear",
    "Julius Caesar",
    "the Yeti",
    "a retired samurai",
    "the Loch Ness monster",
    "a Caribbean pirate",
    "Gandalf",
    "a boxing kangaroo",
    "Dracula",
    "a vegan viking",
    "Napoleon Bonaparte",
    "a secret agent",
    "a French mime",
    "an encyclopedia salesman",
    "a zombie with stage fright",
    "a vegetarian vampire",
    "a werewolf with allergies",
    "a robot with anxiety",
    "an outdated cyborg",
    "a forgotten minor deity",
    "the author of this code",
)

ACTIONS: Tuple[str, ...] = (
    "learned to play the guitar",
    "sold their soul for a distortion pedal",
    "memorised every exotic scale",
    "broke three strings in a single bend",
    "wrote a forty minute solo",
    "mastered sweep picking",
    "tuned a guitar by telekinesis",
    "built an amplifier out of scrap metal",
    "played a whole concert with their teeth",
    "had a tablature tattooed on their back",
    "cried at the sound of a minor chord",
    "invented an unbreakable pick",
    "slept hugging a Stratocaster",
    "practised chromatic runs for a week straight",
    "replaced all six strings with dental floss",
    "played the Locrian mode at a wedding",
    "challenged a metronome to a duel",
    "refused to play anything but pentatonics",
    "learned the Hirajoshi scale backwards",
    "turned every amp up to eleven",
)

REASONS: Tuple[str, ...] = (
    "to impress a tax inspector",
    "just to annoy the neighbours",
    "because a fortune cookie said so",
    "to summon a thunderstorm",
    "after losing a bet with a parrot",
    "to escape a very boring meeting",
    "to pay off a debt to the devil",
    "while hiding from the Inquisition",
    "because the metronome was watching",
    "to win back an ex",
    "to confuse a music theory professor",
    "in exchange for a lifetime supply of picks",
    "to prove that the Earth is round",
    "to calm down an angry volcano",
    "because nobody told them it was impossible",
    "during a solar eclipse",
    "to open a portal to another dimension",
    "out of pure spite",
    "to get out of doing the dishes",
    "to qualify for a very exclusive club",
)


def generate_flavor_text(rng: Optional[random.Random] = None) -> str:
    """Return a sentence such as ``"Did you know that Gandalf ... ?"``."""

    rng = rng or random.Random()
    subject = rng.choice(SUBJECTS)
    action = rng.choice(ACTIONS)
    reason = rng.choice(REASONS)
    return f"Did you know that {subject} {action} {reason}?"
