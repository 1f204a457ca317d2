"""Tablature Generator library.

This package builds short, playable practice exercises for six string guitar
and four string bass.  A typical workflow is to create a
:class:`TablatureGenerator` for an instrument, optionally fixing the key and
scale, and call :meth:`~TablatureGenerator.generate`.  The result carries the
ASCII tablature, a line describing the key and a light-hearted flavor line.
:func:`create_midi_file` renders the same exercise as MIDI.

Underlying Algorithm
--------------------
Every note of the exercise must belong to the chosen key.  The first note is
placed on a middle string between frets 5 and 12 and anchors a *position
box* four frets either side of it.  Each later note is drawn from the in-key
notes inside the box, weighted toward small fret moves and slightly toward
staying on the same string.  A run of more than three notes on one string is
not allowed and the pitch range stays within one octave over any five
consecutive notes and two octaves over the whole exercise.  When no
candidate survives the filters a nearest-pitch fallback and, as a last
resort, an unchecked move to the neighbouring string keep the exercise at
sixteen notes.

Algorithm Pseudocode
--------------------
The following outlines one call to :meth:`TablatureGenerator.generate`::

    first = random_in_key_note(strings 1..n-2, frets 5..12)
    box = [first.fret - 4, first.fret + 4]
    for step in range(15):
        candidates = in_key_notes_in(box) - previous - too_wide_range
        next_note = weighted_choice(candidates) or closest_pitch() or shift()
        notes.append(next_note)

Features include:
- Eighty scales from church modes to exotic and chord-tone sets.
- Guitar and bass fretboards with per-instrument string labels.
- Reproducible output from an injected ``random.Random``.
- JSON and MIDI export from the command line.
"""

__version__ = "0.1.0"

from .fretboard import (
    Instrument,
    InstrumentConfig,
    INSTRUMENT_CONFIGS,
    FretboardValidator,
    Note,
    PositionBox,
    get_instrument_config,
)
from .scales import (
    NOTE_NAMES,
    SCALE_CATEGORIES,
    SCALE_DICTIONARY,
    ScaleManager,
    canonical_scale_name,
    get_all_scale_names,
    parse_key_name,
)
from .weighting import select_weighted
from .generator import NoteGenerator
from .formatter import format_tablature, format_harmonic_info
from .flavor import generate_flavor_text
from .tablature import TablatureGenerator, TablatureResult, generate_tablature
from .midi_io import create_midi_file

__all__ = [
    "__version__",
    "Instrument",
    "InstrumentConfig",
    "INSTRUMENT_CONFIGS",
    "FretboardValidator",
    "Note",
    "PositionBox",
    "get_instrument_config",
    "NOTE_NAMES",
    "SCALE_CATEGORIES",
    "SCALE_DICTIONARY",
    "ScaleManager",
    "canonical_scale_name",
    "get_all_scale_names",
    "parse_key_name",
    "select_weighted",
    "NoteGenerator",
    "format_tablature",
    "format_harmonic_info",
    "generate_flavor_text",
    "TablatureGenerator",
    "TablatureResult",
    "generate_tablature",
    "create_midi_file",
    "run_cli",
    "main",
]


def run_cli():
    from .cli import run_cli as _run_cli
    _run_cli()


def main():
    from .cli import main as _main
    _main()
