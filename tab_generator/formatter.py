"""Plain-text rendering of an exercise.

Each string becomes one row, highest string first.  Every note occupies a
four character column: a leading dash followed by the fret number padded with
dashes, or ``---`` when the note is on another string.

Example
-------
>>> from tab_generator.fretboard import Note
>>> print(format_tablature([Note(0, 5), Note(1, 12)], ("e", "B")))
e|-5------|
B|-----12-|
"""

from __future__ import annotations

from typing import Optional, Sequence

from .fretboard import Note, get_instrument_config

__all__ = [
    "NOTE_WIDTH",
    "EMPTY_POSITION",
    "format_note_position",
    "format_tablature",
    "format_for_instrument",
    "format_harmonic_info",
    "instrument_banner",
]

NOTE_WIDTH = 3
EMPTY_POSITION = "-" * NOTE_WIDTH


def format_note_position(note: Optional[Note], string: int) -> str:
    """Return the fret text for ``note`` on ``string`` or ``---``."""

    if note is None or note.string != string:
        return EMPTY_POSITION
    return str(note.fret)


def format_tablature(notes: Sequence[Optional[Note]], labels: Sequence[str]) -> str:
    """Return the ASCII grid for ``notes`` with one row per entry of ``labels``."""

    rows = []
    for string, label in enumerate(labels):
        cells = "".join(
            "-" + format_note_position(note, string).ljust(NOTE_WIDTH, "-")
            for note in notes
        )
        rows.append(f"{label}|{cells}|")
    return "\n".join(rows)


def format_for_instrument(notes: Sequence[Optional[Note]], instrument) -> str:
    """Format ``notes`` using the string labels of ``instrument``."""

    return format_tablature(notes, get_instrument_config(instrument).labels)


def format_harmonic_info(key_name: str, scale_name: str, scale_notes: str) -> str:
    """Return a one line summary such as ``"A Blues (A C D D# E G A)"``."""

    return f"{key_name} {scale_name} ({scale_notes})"


def instrument_banner(instrument) -> str:
    return get_instrument_config(instrument).banner
