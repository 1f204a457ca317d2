"""Render a finished exercise as a MIDI file.

Each of the sixteen steps becomes one note of equal length on a single track
so the exercise can be loaded into a sequencer or notation program and
practised against a click.  The file is only written when a path is given;
otherwise the in-memory :class:`mido.MidiFile` is returned for the caller to
inspect or save.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Optional, Sequence, Tuple, Union

from .fretboard import Note, get_instrument_config

if TYPE_CHECKING:
    from mido import MidiFile

    from .tablature import TablatureResult

__all__ = ["TICKS_PER_BEAT", "DEFAULT_VELOCITY", "create_midi_file"]

TICKS_PER_BEAT = 480
DEFAULT_VELOCITY = 80


def _as_notes(source) -> Tuple[Sequence[Note], Optional[str]]:
    """Return ``(notes, instrument)`` from a result or a plain note list."""

    if hasattr(source, "notes") and hasattr(source, "instrument"):
        return [Note(s, f) for s, f in source.notes], source.instrument
    return [n if isinstance(n, Note) else Note(*n) for n in source], None


def create_midi_file(
    source: Union["TablatureResult", Sequence[Note], Sequence[Tuple[int, int]]],
    instrument=None,
    bpm: int = 120,
    output_file: Optional[Union[str, Path]] = None,
    note_value: float = 0.25,
) -> "MidiFile":
    """Return a one-track ``MidiFile`` playing ``source`` note by note.

    Parameters
    ----------
    source:
        A :class:`~tab_generator.tablature.TablatureResult` or a sequence of
        notes / ``(string, fret)`` pairs.
    instrument:
        Needed when ``source`` is a plain sequence. Taken from the result
        otherwise.
    bpm:
        Tempo in beats per minute. Must be positive.
    output_file:
        When given, the file is saved there and missing parent directories
        are created.
    note_value:
        Length of each note as a fraction of a whole note (``0.25`` is a
        quarter note).

    Raises
    ------
    ValueError
        For a non-positive ``bpm`` or ``note_value`` or when no instrument
        can be determined.
    """

    try:
        import mido
        from mido import Message, MidiFile, MidiTrack
    except ModuleNotFoundError as exc:
        raise ImportError(
            "mido is required to create MIDI files; install it with 'pip install mido'"
        ) from exc

    if bpm <= 0:
        raise ValueError("bpm must be a positive integer")
    if note_value <= 0:
        raise ValueError("note_value must be positive")

    notes, result_instrument = _as_notes(source)
    instrument = instrument or result_instrument
    if instrument is None:
        raise ValueError("instrument is required when passing a plain note list")
    config = get_instrument_config(instrument)

    mid = MidiFile(ticks_per_beat=TICKS_PER_BEAT)
    track = MidiTrack()
    mid.tracks.append(track)
    track.append(mido.MetaMessage("set_tempo", tempo=mido.bpm2tempo(bpm)))
    track.append(mido.MetaMessage("track_name", name=f"{config.name} exercise"))
    track.append(Message("program_change", program=config.midi_program, time=0))

    # One beat is a quarter note, so a whole note spans four beats.
    duration = int(TICKS_PER_BEAT * 4 * note_value)
    for note in notes:
        pitch = note.pitch(config)
        track.append(Message("note_on", note=pitch, velocity=DEFAULT_VELOCITY, time=0))
        track.append(Message("note_off", note=pitch, velocity=0, time=duration))

    if output_file is not None:
        path = Path(output_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        mid.save(str(path))
        logging.info("Wrote MIDI file %s", path)
    return mid
