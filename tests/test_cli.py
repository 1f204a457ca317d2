"""Command line interface tests.

``run_cli`` is driven through ``sys.argv`` exactly as the console script
would be.  Output is captured with ``capsys`` and error paths are checked for
a logged message plus ``SystemExit`` with status ``1``.
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import mido
import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from tab_generator import cli  # noqa: E402  # isort:skip
from tab_generator import scales  # noqa: E402  # isort:skip


def _run(monkeypatch, *args: str) -> None:
    monkeypatch.setattr(sys, "argv", ["tab-generator", *args])
    cli.run_cli()


def test_list_keys(monkeypatch, capsys):
    _run(monkeypatch, "--list-keys")
    assert capsys.readouterr().out.split() == list(scales.NOTE_NAMES)


def test_list_scales(monkeypatch, capsys):
    _run(monkeypatch, "--list-scales")
    lines = capsys.readouterr().out.strip().split("\n")
    assert lines == scales.get_all_scale_names()


def test_text_output(monkeypatch, capsys):
    _run(monkeypatch, "--instrument", "bass", "--key", "A", "--scale", "pentatonic minor", "--seed", "3")
    out = capsys.readouterr().out.strip().split("\n")
    assert out[0].startswith("[Bass Guitar")
    assert [line[0] for line in out[1:5]] == ["G", "D", "A", "E"]
    assert out[5] == "A Pentatonic Minor (A C D E G A)"
    assert out[6].startswith("Did you know that ")


def test_seed_makes_output_reproducible(monkeypatch, capsys):
    _run(monkeypatch, "--seed", "42")
    first = capsys.readouterr().out
    _run(monkeypatch, "--seed", "42")
    assert capsys.readouterr().out == first


def test_json_output_with_count(monkeypatch, capsys):
    _run(monkeypatch, "--key", "C", "--scale", "Major", "--seed", "1", "--count", "3", "--json")
    data = json.loads(capsys.readouterr().out)
    assert len(data) == 3
    for item in data:
        assert (item["key"], item["scale"]) == ("C", "Major")
        assert len(item["notes"]) == 16


def test_single_json_object(monkeypatch, capsys):
    _run(monkeypatch, "--seed", "1", "--json")
    data = json.loads(capsys.readouterr().out)
    assert data["instrument"] == "guitar"


def test_midi_written(monkeypatch, tmp_path, capsys):
    out = tmp_path / "out" / "ex.mid"
    _run(monkeypatch, "--seed", "5", "--midi", str(out), "--bpm", "100")
    assert out.exists()
    mid = mido.MidiFile(str(out))
    assert len([m for m in mid.tracks[0] if m.type == "note_on"]) == 16


@pytest.mark.parametrize(
    "args,message",
    [
        (["--key", "H"], "Invalid key"),
        (["--scale", "Bagpipe Drone"], "Unknown scale"),
        (["--count", "0"], "Count must be a positive integer"),
        (["--bpm", "0"], "BPM must be a positive integer"),
    ],
)
def test_invalid_arguments_exit(monkeypatch, caplog, args, message):
    with caplog.at_level(logging.ERROR):
        with pytest.raises(SystemExit) as exc:
            _run(monkeypatch, *args)
    assert exc.value.code == 1
    assert message in caplog.text


def test_unknown_instrument_rejected_by_argparse(monkeypatch):
    with pytest.raises(SystemExit) as exc:
        _run(monkeypatch, "--instrument", "banjo")
    assert exc.value.code == 2


def test_midi_write_failure_exits(monkeypatch, caplog):
    from tab_generator import midi_io

    def _fail(*_args, **_kwargs):
        raise OSError("permission denied")

    monkeypatch.setattr(midi_io, "create_midi_file", _fail)
    with caplog.at_level(logging.ERROR):
        with pytest.raises(SystemExit) as exc:
            _run(monkeypatch, "--seed", "1", "--midi", "/nowhere/x.mid")
    assert exc.value.code == 1
    assert "Could not write MIDI file" in caplog.text


def test_main_configures_logging(monkeypatch, capsys):
    calls = {}
    monkeypatch.setattr(logging, "basicConfig", lambda **kw: calls.update(kw))
    monkeypatch.setattr(sys, "argv", ["tab-generator", "--list-keys"])
    cli.main()
    assert calls["level"] == logging.INFO
    assert "C#" in capsys.readouterr().out


def test_verbose_enables_debug(monkeypatch, capsys):
    root = logging.getLogger()
    previous = root.level
    try:
        _run(monkeypatch, "--seed", "2", "--verbose")
        assert root.level == logging.DEBUG
    finally:
        root.setLevel(previous)
