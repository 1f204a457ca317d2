"""Tests for rendering exercises as MIDI with ``mido``."""

from __future__ import annotations

import random
import sys
from pathlib import Path

import mido
import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from tab_generator import midi_io  # noqa: E402  # isort:skip
from tab_generator.fretboard import Note, get_instrument_config  # noqa: E402  # isort:skip
from tab_generator.tablature import generate_tablature  # noqa: E402  # isort:skip


def _note_ons(mid):
    return [m for m in mid.tracks[0] if m.type == "note_on"]


def test_result_renders_one_note_per_step():
    result = generate_tablature("guitar", 0, "Major", rng=random.Random(6))
    mid = midi_io.create_midi_file(result)
    config = get_instrument_config("guitar")
    expected = [Note(s, f).pitch(config) for s, f in result.notes]
    assert isinstance(mid, mido.MidiFile)
    assert len(mid.tracks) == 1
    assert [m.note for m in _note_ons(mid)] == expected
    programs = [m.program for m in mid.tracks[0] if m.type == "program_change"]
    assert programs == [config.midi_program]


def test_tempo_and_note_length():
    mid = midi_io.create_midi_file([(0, 5), (1, 3)], "bass", bpm=90, note_value=0.5)
    tempos = [m.tempo for m in mid.tracks[0] if m.type == "set_tempo"]
    assert tempos == [mido.bpm2tempo(90)]
    offs = [m for m in mid.tracks[0] if m.type == "note_off"]
    assert [m.time for m in offs] == [midi_io.TICKS_PER_BEAT * 2] * 2
    assert [m.note for m in _note_ons(mid)] == [48, 41]


def test_file_written_only_with_path(tmp_path):
    out = tmp_path / "nested" / "exercise.mid"
    midi_io.create_midi_file([Note(0, 0)], "guitar", output_file=out)
    assert out.exists()
    loaded = mido.MidiFile(str(out))
    assert [m.note for m in _note_ons(loaded)] == [64]


@pytest.mark.parametrize("bpm", [0, -10])
def test_non_positive_bpm_rejected(bpm):
    with pytest.raises(ValueError):
        midi_io.create_midi_file([Note(0, 0)], "guitar", bpm=bpm)


def test_plain_notes_need_instrument():
    with pytest.raises(ValueError):
        midi_io.create_midi_file([Note(0, 0)])
