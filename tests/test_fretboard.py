"""Tests for instrument geometry, notes, validation and the position box."""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from tab_generator.fretboard import (  # noqa: E402  # isort:skip
    MAX_FRET,
    FretboardValidator,
    Instrument,
    Note,
    PositionBox,
    get_instrument_config,
)
from tab_generator.scales import ScaleManager  # noqa: E402  # isort:skip


def test_guitar_and_bass_geometry():
    guitar = get_instrument_config(Instrument.GUITAR)
    bass = get_instrument_config("BASS")
    assert guitar.open_pitches == (64, 59, 55, 50, 45, 40)
    assert guitar.labels == ("e", "B", "G", "D", "A", "E")
    assert guitar.num_strings == 6
    assert bass.open_pitches == (43, 38, 33, 28)
    assert bass.labels == ("G", "D", "A", "E")
    assert bass.num_strings == 4


def test_unknown_instrument_raises():
    with pytest.raises(ValueError):
        get_instrument_config("ukulele")


def test_note_pitch_depends_on_instrument():
    guitar = get_instrument_config("guitar")
    bass = get_instrument_config("bass")
    note = Note(0, 5)
    assert note.pitch(guitar) == 69
    assert note.pitch(bass) == 48
    assert note.pitch_class(guitar) == 9


def test_note_validity():
    guitar = get_instrument_config("guitar")
    bass = get_instrument_config("bass")
    assert Note(5, 0).is_valid(guitar)
    assert not Note(5, 0).is_valid(bass)
    assert not Note(0, MAX_FRET + 1).is_valid(guitar)
    assert not Note(-1, 3).is_valid(guitar)


def test_validator_checks_key_membership():
    validator = FretboardValidator(ScaleManager(0, "Major"), Instrument.GUITAR)
    assert validator.is_note_in_scale(Note(1, 1))  # C4
    assert not validator.is_note_in_scale(Note(1, 2))  # C#4
    assert not validator.is_note_in_scale(Note(6, 0))


def test_all_valid_notes_is_cached_and_complete():
    validator = FretboardValidator(ScaleManager(9, "Pentatonic Minor"), "bass")
    notes = validator.all_valid_notes()
    assert notes is validator.all_valid_notes()
    assert all(validator.is_note_in_scale(n) for n in notes)
    expected = sum(
        1
        for s in range(4)
        for f in range(MAX_FRET + 1)
        if validator.is_note_in_scale(Note(s, f))
    )
    assert len(notes) == expected


@pytest.mark.parametrize(
    "anchor,low,high",
    [(8, 4, 12), (2, 0, 6), (20, 16, 22), (0, 0, 4)],
)
def test_position_box_clamps(anchor, low, high):
    box = PositionBox()
    box.initialize(anchor)
    assert box.as_tuple() == (anchor, low, high)
    assert box.contains(low) and box.contains(high)
    assert not box.contains(high + 1)
    assert list(box.frets()) == list(range(low, high + 1))
