"""Tests for the ASCII tablature renderer."""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from tab_generator.formatter import (  # noqa: E402  # isort:skip
    EMPTY_POSITION,
    format_for_instrument,
    format_harmonic_info,
    format_note_position,
    format_tablature,
    instrument_banner,
)
from tab_generator.fretboard import Note  # noqa: E402  # isort:skip


def test_single_note_row():
    tab = format_tablature([Note(0, 5)], ("e",))
    assert tab == "e|-5--|"
    assert tab.endswith("-5--|")


def test_two_digit_frets_and_empty_cells():
    tab = format_tablature([Note(0, 5), Note(1, 12)], ("e", "B"))
    assert tab.split("\n") == ["e|-5------|", "B|-----12-|"]


def test_format_note_position():
    assert format_note_position(Note(2, 7), 2) == "7"
    assert format_note_position(Note(2, 7), 3) == EMPTY_POSITION
    assert format_note_position(None, 0) == EMPTY_POSITION


def test_format_for_instrument_uses_labels():
    rows = format_for_instrument([Note(3, 0)], "bass").split("\n")
    assert rows == ["G|----|", "D|----|", "A|----|", "E|-0--|"]


def test_harmonic_info_and_banner():
    assert format_harmonic_info("A", "Blues", "A C D D# E G A") == "A Blues (A C D D# E G A)"
    assert "4 strings" in instrument_banner("bass")
