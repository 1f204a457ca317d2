"""Instrument geometry, the :class:`Note` value type and fretboard checks.

Two fixed geometries are supported: a six string guitar and a four string
bass, both in standard tuning.  String index ``0`` is always the highest
pitched string so the tablature reads top to bottom the way players expect.

:class:`FretboardValidator` couples a :class:`~tab_generator.scales.ScaleManager`
to one geometry.  :class:`PositionBox` is the fixed fret window that keeps a
generated exercise under one hand position.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Tuple

from .scales import SEMITONES_IN_OCTAVE, ScaleManager

__all__ = [
    "MIN_FRET",
    "MAX_FRET",
    "POSITION_BOX_RADIUS",
    "Instrument",
    "InstrumentConfig",
    "INSTRUMENT_CONFIGS",
    "get_instrument_config",
    "Note",
    "FretboardValidator",
    "PositionBox",
]

MIN_FRET = 0
MAX_FRET = 22

# Half width of the position box. A radius of four keeps the whole exercise
# inside at most nine frets (fewer next to the nut or the last fret).
POSITION_BOX_RADIUS = 4


class Instrument(Enum):
    """Supported fretted instruments."""

    GUITAR = "guitar"
    BASS = "bass"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class InstrumentConfig:
    """Static description of one instrument's strings.

    ``open_pitches`` and ``labels`` are ordered from the highest string to
    the lowest. Pitches are MIDI note numbers.
    """

    name: str
    open_pitches: Tuple[int, ...]
    labels: Tuple[str, ...]
    banner: str
    midi_program: int

    @property
    def num_strings(self) -> int:
        return len(self.open_pitches)

    def validate_string(self, string_index: int) -> bool:
        return 0 <= string_index < self.num_strings


INSTRUMENT_CONFIGS: Dict[Instrument, InstrumentConfig] = {
    # E4 B3 G3 D3 A2 E2
    Instrument.GUITAR: InstrumentConfig(
        name="guitar",
        open_pitches=(64, 59, 55, 50, 45, 40),
        labels=("e", "B", "G", "D", "A", "E"),
        banner="[Electric Guitar - 6 strings, Standard Tuning (E2-A2-D3-G3-B3-E4)]",
        midi_program=27,  # Electric Guitar (clean)
    ),
    # G2 D2 A1 E1
    Instrument.BASS: InstrumentConfig(
        name="bass",
        open_pitches=(43, 38, 33, 28),
        labels=("G", "D", "A", "E"),
        banner="[Bass Guitar - 4 strings, Standard Tuning (E1-A1-D2-G2)]",
        midi_program=33,  # Electric Bass (finger)
    ),
}


def get_instrument_config(instrument) -> InstrumentConfig:
    """Return the configuration for ``instrument``.

    ``instrument`` may be an :class:`Instrument` member or its string value
    (case-insensitive). Anything else raises ``ValueError``.
    """

    if not isinstance(instrument, Instrument):
        try:
            instrument = Instrument(str(instrument).strip().lower())
        except ValueError:
            raise ValueError(
                f"Unknown instrument: {instrument!r} (expected 'guitar' or 'bass')"
            ) from None
    return INSTRUMENT_CONFIGS[instrument]


@dataclass(frozen=True)
class Note:
    """A fretted position: ``string`` index and ``fret`` number.

    Pitch is not stored; it depends on the instrument and is derived on
    demand with :meth:`pitch`.
    """

    string: int
    fret: int

    def pitch(self, config: InstrumentConfig) -> int:
        return config.open_pitches[self.string] + self.fret

    def pitch_class(self, config: InstrumentConfig) -> int:
        return self.pitch(config) % SEMITONES_IN_OCTAVE

    def is_valid(self, config: InstrumentConfig) -> bool:
        return config.validate_string(self.string) and MIN_FRET <= self.fret <= MAX_FRET

    def as_tuple(self) -> Tuple[int, int]:
        return (self.string, self.fret)


class FretboardValidator:
    """Test notes of one instrument against the active key.

    The list returned by :meth:`all_valid_notes` is built on first use and
    cached for the lifetime of the validator. It is the search space of the
    generator's fallback paths only.
    """

    def __init__(self, scale_manager: ScaleManager, instrument=Instrument.GUITAR) -> None:
        self.scale_manager = scale_manager
        self.config = get_instrument_config(instrument)
        self._valid_notes: Optional[List[Note]] = None

    @property
    def num_strings(self) -> int:
        return self.config.num_strings

    def pitch(self, note: Note) -> int:
        return note.pitch(self.config)

    def is_note_in_scale(self, note: Note) -> bool:
        if not note.is_valid(self.config):
            return False
        return self.scale_manager.is_pitch_valid(note.pitch(self.config))

    def all_valid_notes(self) -> List[Note]:
        """Return every in-key note over all strings and frets ``0-22``."""

        if self._valid_notes is None:
            self._valid_notes = [
                Note(string, fret)
                for string in range(self.num_strings)
                for fret in range(MIN_FRET, MAX_FRET + 1)
                if self.is_note_in_scale(Note(string, fret))
            ]
        return self._valid_notes


class PositionBox:
    """Fret window anchored on the first note of an exercise.

    Every later candidate must fall inside ``[min_fret, max_fret]`` while
    string changes stay unrestricted.
    """

    def __init__(self) -> None:
        self.anchor_fret = 0
        self.min_fret = 0
        self.max_fret = 0

    def initialize(self, anchor_fret: int) -> None:
        self.anchor_fret = anchor_fret
        self.min_fret = max(MIN_FRET, anchor_fret - POSITION_BOX_RADIUS)
        self.max_fret = min(MAX_FRET, anchor_fret + POSITION_BOX_RADIUS)

    def contains(self, fret: int) -> bool:
        return self.min_fret <= fret <= self.max_fret

    def frets(self) -> range:
        return range(self.min_fret, self.max_fret + 1)

    def as_tuple(self) -> Tuple[int, int, int]:
        return (self.anchor_fret, self.min_fret, self.max_fret)

    def __repr__(self) -> str:
        return (
            f"PositionBox(anchor_fret={self.anchor_fret}, "
            f"min_fret={self.min_fret}, max_fret={self.max_fret})"
        )
