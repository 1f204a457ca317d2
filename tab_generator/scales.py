"""Music theory layer: note names, the scale table and :class:`ScaleManager`.

The scale table maps a display name to the ordered semitone *steps* that
build the scale from its root.  Walking those steps from any root with
modulo-12 wraparound yields the pitch classes that are "in key".  Step
sequences do not have to add up to a full octave; entries such as
``"Dominant 7th"`` only describe a handful of tones.

Example
-------
>>> from tab_generator.scales import ScaleManager
>>> mgr = ScaleManager(0, "Major")
>>> sorted(mgr.valid_pitch_classes())
[0, 2, 4, 5, 7, 9, 11]
>>> mgr.scale_notes_display()
'C D E F G A B C'
"""

from __future__ import annotations

import logging
import random
from functools import lru_cache
from types import MappingProxyType
from typing import Dict, FrozenSet, List, Mapping, Optional, Sequence, Tuple

__all__ = [
    "SEMITONES_IN_OCTAVE",
    "NUM_KEYS",
    "NOTE_NAMES",
    "DEFAULT_SCALE",
    "SCALE_DICTIONARY",
    "SCALE_CATEGORIES",
    "ScaleManager",
    "canonical_scale_name",
    "compute_pitch_classes",
    "compute_scale_notes",
    "get_all_scale_names",
    "get_intervals",
    "has_scale",
    "parse_key_name",
    "pitch_class_to_name",
    "random_scale_name",
]

SEMITONES_IN_OCTAVE = 12
NUM_KEYS = 12

# Pitch class 0 is C. Only sharps are used for display.
NOTE_NAMES: Tuple[str, ...] = (
    "C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B",
)

# Lowercase spellings accepted by :func:`parse_key_name`, including the usual
# enharmonic flats so ``"Bb"`` and ``"A#"`` resolve to the same root.
_KEY_LOOKUP: Dict[str, int] = {
    "c": 0, "b#": 0,
    "c#": 1, "db": 1,
    "d": 2,
    "d#": 3, "eb": 3,
    "e": 4, "fb": 4,
    "f": 5, "e#": 5,
    "f#": 6, "gb": 6,
    "g": 7,
    "g#": 8, "ab": 8,
    "a": 9,
    "a#": 10, "bb": 10,
    "b": 11, "cb": 11,
}

DEFAULT_SCALE = "Major"

# Category -> {scale name: steps}. Insertion order is kept so listings read
# from the familiar modes toward the exotic ones.
_SCALES_BY_CATEGORY: Dict[str, Dict[str, Tuple[int, ...]]] = {
    "Common/Modes": {
        "Major": (2, 2, 1, 2, 2, 2, 1),
        "Harmonic Minor": (2, 1, 2, 2, 1, 3, 1),
        "Melodic Minor": (2, 1, 2, 2, 2, 2, 1),
        "Natural Minor": (2, 1, 2, 2, 1, 2, 2),
        "Pentatonic Major": (2, 2, 3, 2, 3),
        "Pentatonic Minor": (3, 2, 2, 3, 2),
        "Pentatonic Blues": (3, 2, 1, 1, 3, 2),
        "Pentatonic Neutral": (2, 3, 2, 3, 2),
        "Ionian": (2, 2, 1, 2, 2, 2, 1),
        "Dorian": (2, 1, 2, 2, 2, 1, 2),
        "Phrygian": (1, 2, 2, 2, 1, 2, 2),
        "Lydian": (2, 2, 2, 1, 2, 2, 1),
        "Mixolydian": (2, 2, 1, 2, 2, 1, 2),
        "Aeolian": (2, 1, 2, 2, 1, 2, 2),
        "Locrian": (1, 2, 2, 1, 2, 2, 2),
    },
    "Symmetric/Altered": {
        "Chromatic": (1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1),
        "Whole Tone": (2, 2, 2, 2, 2, 2),
        "Octatonic (H-W)": (1, 2, 1, 2, 1, 2, 1, 2),
        "Octatonic (W-H)": (2, 1, 2, 1, 2, 1, 2, 1),
        "Augmented": (3, 1, 3, 1, 3, 1),
        "Altered": (1, 1, 2, 2, 2, 2, 2),
        "Diatonic": (2, 2, 1, 2, 2, 2, 1),
        "Diminished": (2, 1, 2, 1, 2, 1, 2, 1),
        "Diminished Half": (1, 2, 1, 2, 1, 2, 1, 2),
        "Diminished Whole": (2, 1, 2, 1, 2, 1, 2, 1),
        "Diminished Whole Tone": (1, 1, 1, 2, 2, 2, 3),
        "Dominant 7th": (5, 2, 3, 2),
        "Lydian Augmented": (2, 2, 2, 2, 1, 2, 1),
        "Lydian Minor": (2, 2, 1, 1, 2, 2, 2),
        "Lydian Diminished": (2, 2, 1, 1, 2, 2, 2),
        "Half Diminished": (1, 2, 2, 1, 2, 2, 2),
    },
    "Jazz/Bebop": {
        "Bebop Major": (2, 2, 1, 2, 1, 1, 2, 2),
        "Bebop Minor": (2, 1, 2, 2, 1, 1, 2, 2),
        "Bebop Dominant": (2, 2, 1, 2, 2, 1, 1, 2),
        "Bebop Half Diminished": (1, 2, 2, 1, 1, 2, 2, 2),
        "Blues": (3, 2, 1, 1, 3, 2),
        "Major Blues Scale": (2, 1, 1, 2, 3, 2),
        "Dominant Pentatonic": (2, 2, 3, 2, 3),
        "Mixo-Blues": (2, 2, 1, 2, 2, 3),
    },
    "Exotic & World": {
        "Algerian": (2, 1, 3, 1, 1, 3, 1),
        "Arabian #1": (2, 2, 1, 1, 2, 2, 2),
        "Arabian #2": (1, 3, 1, 2, 1, 3, 1),
        "Balinese": (1, 4, 1, 4, 2),
        "Byzantine": (1, 3, 1, 2, 1, 3, 1),
        "Chinese": (4, 2, 1, 4, 1),
        "Chinese Mongolian": (2, 3, 2, 3, 2),
        "Egyptian": (2, 3, 2, 3, 2),
        "Eight Tone Spanish": (1, 2, 1, 2, 1, 2, 1, 2),
        "Ethiopian (A raray)": (1, 2, 2, 2, 1, 2, 2),
        "Ethiopian (Geez&Ezel)": (2, 1, 2, 2, 1, 2, 2),
        "Hawaiian": (2, 3, 2, 3, 2),
        "Hindu": (2, 2, 1, 2, 1, 2, 2),
        "Hindustan": (2, 2, 1, 2, 2, 1, 2),
        "Hirajoshi": (3, 1, 4, 1, 3),
        "Hungarian Major": (3, 1, 1, 3, 1, 1, 2),
        "Hungarian Gypsy": (2, 1, 3, 1, 1, 3, 1),
        "Hungarian Minor": (2, 1, 3, 1, 1, 3, 1),
        "Japanese #1": (1, 4, 2, 1, 4),
        "Japanese #2": (2, 3, 2, 3, 2),
        "Javaneese": (2, 2, 3, 2, 3),
        "Jewish (Adonai Malakh)": (2, 2, 1, 2, 2, 1, 2),
        "Jewish (Ahaba Rabba)": (1, 3, 1, 2, 1, 2, 2),
        "Kumoi": (2, 1, 4, 2, 3),
        "Mohammedan": (2, 2, 1, 2, 2, 2, 1),
        "Neopolitan": (1, 2, 2, 2, 2, 2, 1),
        "Neopolitan Major": (1, 2, 2, 2, 2, 2, 1),
        "Neopolitan Minor": (1, 2, 2, 2, 1, 3, 1),
        "Oriental #1": (1, 3, 1, 1, 1, 3, 2),
        "Oriental #2": (2, 1, 3, 1, 1, 2, 2),
        "Pelog": (1, 2, 4, 1, 4),
        "Persian": (1, 3, 1, 1, 1, 3, 2),
        "Prometheus": (2, 2, 2, 3, 1, 2),
        "Prometheus Neopolitan": (2, 2, 2, 3, 1, 2),
        "Roumanian Minor": (2, 1, 3, 1, 1, 3, 1),
        "Spanish Gypsy": (1, 3, 1, 2, 1, 2, 2),
        "Super Locrian": (1, 1, 2, 2, 2, 2, 2),
        "Iwato": (1, 4, 1, 4, 2),
        "Moorish Phrygian": (1, 3, 1, 2, 1, 2, 2),
        "Double Harmonic": (1, 3, 1, 2, 1, 3, 1),
        "Enigmatic": (1, 3, 2, 2, 2, 1, 1),
    },
}

# Flat, read-only view of every scale. Built once at import time; nothing in
# the package mutates it afterwards.
SCALE_DICTIONARY: Mapping[str, Tuple[int, ...]] = MappingProxyType(
    {name: steps for group in _SCALES_BY_CATEGORY.values() for name, steps in group.items()}
)

SCALE_CATEGORIES: Mapping[str, Tuple[str, ...]] = MappingProxyType(
    {category: tuple(group) for category, group in _SCALES_BY_CATEGORY.items()}
)

# Lowercase lookup so user-facing entry points accept any capitalisation.
_CANONICAL_SCALES = {name.lower(): name for name in SCALE_DICTIONARY}


def get_intervals(scale_name: str) -> Tuple[int, ...]:
    """Return the steps for ``scale_name`` or the Major steps when unknown."""

    return SCALE_DICTIONARY.get(scale_name, SCALE_DICTIONARY[DEFAULT_SCALE])


def get_all_scale_names() -> List[str]:
    """Return every scale name in table order."""

    return list(SCALE_DICTIONARY)


def has_scale(scale_name: str) -> bool:
    return scale_name in SCALE_DICTIONARY


@lru_cache(maxsize=None)
def canonical_scale_name(name: str) -> str:
    """Return the table spelling of ``name``.

    Parameters
    ----------
    name:
        Scale name supplied by a user. Case-insensitive and surrounding
        whitespace is ignored.

    Raises
    ------
    ValueError
        If ``name`` does not match any entry of :data:`SCALE_DICTIONARY`.
    """

    scale = _CANONICAL_SCALES.get(name.strip().lower())
    if scale is None:
        raise ValueError(f"Unknown scale: {name}")
    return scale


def random_scale_name(rng: Optional[random.Random] = None) -> str:
    """Pick a scale name uniformly from the table."""

    rng = rng or random.Random()
    return rng.choice(get_all_scale_names())


def pitch_class_to_name(pc: int) -> str:
    """Return the note name for ``pc`` or ``"?"`` outside ``0-11``."""

    if 0 <= pc < NUM_KEYS:
        return NOTE_NAMES[pc]
    return "?"


def parse_key_name(name: Optional[str]) -> int:
    """Return the pitch class for ``name`` or ``-1`` when it is not a note.

    >>> parse_key_name("f#"), parse_key_name("Bb"), parse_key_name("H")
    (6, 10, -1)
    """

    if not name:
        return -1
    return _KEY_LOOKUP.get(name.strip().lower(), -1)


def _walk(root: int, steps: Sequence[int]) -> List[int]:
    """Return the pitch classes visited walking ``steps`` from ``root``."""

    current = root
    visited = [current]
    for step in steps:
        current = (current + step) % SEMITONES_IN_OCTAVE
        visited.append(current)
    return visited


def compute_pitch_classes(root: int, steps: Sequence[int]) -> FrozenSet[int]:
    """Return the set of pitch classes in the key rooted at ``root``."""

    return frozenset(_walk(root, steps))


def compute_scale_notes(root: int, steps: Sequence[int]) -> str:
    """Return the space-joined note names in scale-walk order.

    The root is listed first. A scale whose steps add up to an octave ends
    on the root again (``"C D E F G A B C"``).
    """

    return " ".join(NOTE_NAMES[pc] for pc in _walk(root, steps))


class ScaleManager:
    """Hold the active (root, scale) pair and answer membership queries.

    Parameters
    ----------
    root:
        Pitch class of the key root. ``None`` draws one uniformly from
        ``0-11``. Explicit values are trusted to be in range; callers
        validate them first.
    scale_name:
        Entry of :data:`SCALE_DICTIONARY`. ``None`` draws one uniformly.
        Unknown names use the Major steps while keeping the given name.
    rng:
        Random source used for the draws. A fresh ``random.Random`` is
        created when omitted.
    """

    def __init__(
        self,
        root: Optional[int] = None,
        scale_name: Optional[str] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self._rng = rng or random.Random()
        self._root = 0
        self._scale_name = DEFAULT_SCALE
        self._steps: Tuple[int, ...] = SCALE_DICTIONARY[DEFAULT_SCALE]
        self._valid: FrozenSet[int] = frozenset()
        self._scale_notes = ""

        if root is None:
            root = self._rng.randrange(NUM_KEYS)
        if scale_name is None:
            scale_name = random_scale_name(self._rng)
        self.set_key_and_scale(root, scale_name)

    def initialize(self) -> None:
        """Draw a new root and scale uniformly at random."""

        self.set_key_and_scale(
            self._rng.randrange(NUM_KEYS), random_scale_name(self._rng)
        )

    def set_key_and_scale(self, root: int, scale_name: str) -> None:
        """Replace the active pair and recompute the derived key context."""

        if not has_scale(scale_name):
            logging.debug("Unknown scale %r; using %s steps", scale_name, DEFAULT_SCALE)
        self._root = root
        self._scale_name = scale_name
        self._steps = get_intervals(scale_name)
        self._valid = compute_pitch_classes(root, self._steps)
        self._scale_notes = compute_scale_notes(root, self._steps)

    def is_pitch_class_valid(self, pc: int) -> bool:
        return pc in self._valid

    def is_pitch_valid(self, pitch: int) -> bool:
        return (pitch % SEMITONES_IN_OCTAVE) in self._valid

    def valid_pitch_classes(self) -> FrozenSet[int]:
        return self._valid

    def key_index(self) -> int:
        return self._root

    def key_name(self) -> str:
        return NOTE_NAMES[self._root]

    def scale_name(self) -> str:
        return self._scale_name

    def scale_steps(self) -> Tuple[int, ...]:
        return self._steps

    def scale_notes_display(self) -> str:
        return self._scale_notes

    def full_description(self) -> str:
        """Return ``"<key> <scale>"`` such as ``"A Pentatonic Minor"``."""

        return f"{self.key_name()} {self.scale_name()}"
