"""Constraint based note-sequence generator.

:class:`NoteGenerator` builds one 16 note exercise for a
:class:`~tab_generator.fretboard.FretboardValidator`.  The algorithm works in
three stages:

1.  Pick a first note on a middle string between frets 5 and 12 that belongs
    to the key.  Up to :data:`FIRST_NOTE_ATTEMPTS` random draws are made
    before falling back to any in-key note on the fretboard.  The first
    note's fret anchors the :class:`~tab_generator.fretboard.PositionBox`.
2.  For each following step build every candidate inside the box, drop the
    ones that leave the key, repeat the previous note or stretch the pitch
    range too far, weight the rest by fret distance and draw one.
3.  When nothing survives, fall back to progressively looser strategies so
    a full exercise is always produced.

Algorithm Pseudocode
--------------------
::

    first = pick_first_note()
    box.initialize(first.fret)
    for step in 1..15:
        must_change = same_string_run >= 3
        for strategy in (weighted_search, closest_pitch, unchecked):
            note = strategy(previous, must_change)
            if note: break
        append(note)

Pitch control
-------------
The *local* rule keeps the last four notes plus the candidate within one
octave. The *global* rule keeps the whole exercise within two octaves.
"""

from __future__ import annotations

import logging
import random
from collections import Counter
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence, Tuple

from .fretboard import FretboardValidator, Note, PositionBox
from .weighting import candidate_weight, select_weighted

__all__ = [
    "NUM_NOTES",
    "MAX_CONSECUTIVE_SAME_STRING",
    "MAX_LOCAL_RANGE",
    "MAX_GLOBAL_RANGE",
    "LOCAL_WINDOW_SIZE",
    "FIRST_NOTE_ATTEMPTS",
    "Candidate",
    "GenerationState",
    "NoteGenerator",
]

logger = logging.getLogger(__name__)

NUM_NOTES = 16
MAX_CONSECUTIVE_SAME_STRING = 3
MAX_LOCAL_RANGE = 12   # one octave
MAX_GLOBAL_RANGE = 24  # two octaves
LOCAL_WINDOW_SIZE = 4
FIRST_NOTE_ATTEMPTS = 50
FIRST_NOTE_FRETS = (5, 12)


@dataclass(frozen=True)
class Candidate:
    """A possible next note together with its selection weight."""

    note: Note
    weight: int
    fret_distance: int


@dataclass
class GenerationState:
    """Mutable bookkeeping for one exercise being built."""

    box: PositionBox = field(default_factory=PositionBox)
    notes: List[Note] = field(default_factory=list)
    pitches: List[int] = field(default_factory=list)
    global_min: Optional[int] = None
    global_max: Optional[int] = None
    same_string_run: int = 0

    def append(self, note: Note, pitch: int) -> None:
        """Record ``note`` and update the run counter and global range.

        ``same_string_run`` counts the notes in the current run, so it is 1
        right after a string change.
        """

        if self.notes and self.notes[-1].string == note.string:
            self.same_string_run += 1
        else:
            self.same_string_run = 1
        self.notes.append(note)
        self.pitches.append(pitch)
        self.global_min = pitch if self.global_min is None else min(self.global_min, pitch)
        self.global_max = pitch if self.global_max is None else max(self.global_max, pitch)

    def fits_local_range(self, pitch: int) -> bool:
        """Return ``True`` when ``pitch`` keeps the recent window within an octave."""

        window = self.pitches[-LOCAL_WINDOW_SIZE:]
        if not window:
            return True
        return max(max(window), pitch) - min(min(window), pitch) <= MAX_LOCAL_RANGE

    def fits_global_range(self, pitch: int) -> bool:
        if self.global_min is None or self.global_max is None:
            return True
        return max(self.global_max, pitch) - min(self.global_min, pitch) <= MAX_GLOBAL_RANGE


# A fallback tier receives the generator, the previous note and whether the
# string must change, and returns a note or ``None`` when it has nothing.
Strategy = Callable[["NoteGenerator", Note, bool], Optional[Note]]


class NoteGenerator:
    """Build exercises for one validator.

    The cached list of in-key notes is taken from the validator once at
    construction. Each call to :meth:`generate_tablature` starts from a new
    :class:`GenerationState` so the position box and pitch range are fresh.

    Parameters
    ----------
    validator:
        Fretboard validator bound to the active key and instrument.
    rng:
        Random source for every draw made by this generator.
    """

    def __init__(self, validator: FretboardValidator, rng: Optional[random.Random] = None) -> None:
        self.validator = validator
        self.rng = rng or random.Random()
        self.valid_notes_cache: List[Note] = validator.all_valid_notes()
        self.state = GenerationState()
        self.fallback_counts: Counter = Counter()

    @property
    def position_box(self) -> PositionBox:
        return self.state.box

    @property
    def global_range(self) -> Tuple[Optional[int], Optional[int]]:
        return (self.state.global_min, self.state.global_max)

    def generate_tablature(self, num_notes: int = NUM_NOTES) -> List[Note]:
        """Return a fresh exercise of ``num_notes`` notes.

        The call never fails for a valid validator: when the weighted search
        finds no candidate, the closest-pitch and unchecked tiers take over.
        """

        if num_notes <= 0:
            raise ValueError("num_notes must be positive")

        self.state = GenerationState()
        self.fallback_counts = Counter()

        first = self.generate_first_note()
        self.state.box.initialize(first.fret)
        self.state.append(first, self.validator.pitch(first))

        for _ in range(1, num_notes):
            previous = self.state.notes[-1]
            must_change = self.state.same_string_run >= MAX_CONSECUTIVE_SAME_STRING
            note = self.generate_next_note(previous, must_change)
            self.state.append(note, self.validator.pitch(note))

        logger.debug(
            "Generated %d notes in box %s (fallbacks: %s)",
            len(self.state.notes),
            self.state.box,
            dict(self.fallback_counts) or "none",
        )
        return list(self.state.notes)

    def generate_first_note(self) -> Note:
        """Return an in-key starting note biased toward the middle of the neck."""

        num_strings = self.validator.num_strings
        low_fret, high_fret = FIRST_NOTE_FRETS
        note = None
        for _ in range(FIRST_NOTE_ATTEMPTS):
            # Outermost strings are excluded so the exercise can move either way.
            note = Note(
                self.rng.randint(1, num_strings - 2),
                self.rng.randint(low_fret, high_fret),
            )
            if self.validator.is_note_in_scale(note):
                return note

        if self.valid_notes_cache:
            return self.rng.choice(self.valid_notes_cache)
        # Only reachable with an empty key, which the scale table never yields.
        return note

    def generate_next_note(self, previous: Note, must_change_string: bool) -> Note:
        """Return the next note by trying each strategy in :data:`STRATEGIES`."""

        for strategy in STRATEGIES:
            note = strategy(self, previous, must_change_string)
            if note is not None:
                if strategy is not weighted_search:
                    self.fallback_counts[strategy.__name__] += 1
                return note
        raise AssertionError("unchecked_placement always returns a note")

    def build_candidates(self, previous: Note, must_change_string: bool) -> List[Candidate]:
        """Return every weighted candidate for the step after ``previous``."""

        box = self.state.box
        candidates: List[Candidate] = []
        for string in range(self.validator.num_strings):
            if must_change_string and string == previous.string:
                continue
            for fret in box.frets():
                if string == previous.string and fret == previous.fret:
                    continue
                note = Note(string, fret)
                if not self.validator.is_note_in_scale(note):
                    continue
                pitch = self.validator.pitch(note)
                if not self.state.fits_local_range(pitch):
                    continue
                if not self.state.fits_global_range(pitch):
                    continue
                distance = abs(fret - previous.fret)
                weight = candidate_weight(distance, string == previous.string)
                if weight <= 0:
                    continue
                candidates.append(Candidate(note, weight, distance))
        return candidates

    def find_closest_pitch_note(
        self, previous: Note, must_change_string: bool = False
    ) -> Optional[Note]:
        """Return the cached in-key note nearest in pitch to ``previous``.

        Only notes inside the position box that satisfy both range rules are
        considered. ``previous`` itself is skipped, as is its string when
        ``must_change_string`` is set. The first note found wins ties.
        """

        previous_pitch = self.validator.pitch(previous)
        best: Optional[Note] = None
        best_distance: Optional[int] = None
        for note in self.valid_notes_cache:
            if note == previous:
                continue
            if must_change_string and note.string == previous.string:
                continue
            if not self.state.box.contains(note.fret):
                continue
            pitch = self.validator.pitch(note)
            if not self.state.fits_local_range(pitch) or not self.state.fits_global_range(pitch):
                continue
            distance = abs(pitch - previous_pitch)
            if best_distance is None or distance < best_distance:
                best, best_distance = note, distance
        return best


def weighted_search(gen: NoteGenerator, previous: Note, must_change_string: bool) -> Optional[Note]:
    """Draw from the fully constrained candidate list."""

    candidates = gen.build_candidates(previous, must_change_string)
    if not candidates:
        return None
    chosen = select_weighted(candidates, [c.weight for c in candidates], gen.rng)
    return chosen.note


def closest_pitch(gen: NoteGenerator, previous: Note, must_change_string: bool) -> Optional[Note]:
    """Fall back to the nearest-pitch in-key note that keeps the range rules."""

    note = gen.find_closest_pitch_note(previous, must_change_string)
    if note is not None:
        logger.debug("No weighted candidate after %s; using closest pitch %s", previous, note)
    return note


def unchecked_placement(gen: NoteGenerator, previous: Note, must_change_string: bool) -> Note:
    """Move to the neighbouring string at the same fret without any checks.

    The move heads toward the middle of the neck and is clamped to valid
    string indices. The result may sit outside the key.
    """

    num_strings = gen.validator.num_strings
    string = previous.string + 1 if previous.string < num_strings / 2 else previous.string - 1
    string = max(0, min(num_strings - 1, string))
    note = Note(string, previous.fret)
    logger.warning(
        "Candidate search exhausted after %s; placing unchecked note %s", previous, note
    )
    return note


STRATEGIES: Sequence[Strategy] = (weighted_search, closest_pitch, unchecked_placement)
