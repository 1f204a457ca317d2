"""Command line helpers for the tablature generator.

The ``run_cli`` function parses command line arguments, validates the key and
scale the user asked for and prints one or more exercises.  :func:`main`
configures logging before delegating to :func:`run_cli` so the console
script and ``python -m tab_generator`` behave identically.

Example
-------
Running ``python -m tab_generator --instrument bass --key A --scale
"Pentatonic Minor" --seed 3`` prints a reproducible bass exercise in A minor
pentatonic.  Add ``--midi out.mid`` to also save it as a MIDI file or
``--json`` for machine readable output.
"""

from __future__ import annotations

import argparse
import json
import logging
import random
import sys
from typing import List, Optional

from .fretboard import Instrument
from .scales import NOTE_NAMES, canonical_scale_name, get_all_scale_names, parse_key_name

__all__ = ["build_parser", "run_cli", "main"]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tab-generator",
        description="Generate a random 16 note tablature exercise.",
    )
    parser.add_argument("--list-keys", action="store_true", help="List all supported keys and exit")
    parser.add_argument("--list-scales", action="store_true", help="List all supported scales and exit")
    parser.add_argument(
        "--instrument",
        choices=[i.value for i in Instrument],
        default=Instrument.GUITAR.value,
        help="Instrument to write the exercise for (default: guitar).",
    )
    parser.add_argument("--key", type=str, help="Root note such as C, F# or Bb. Random when omitted.")
    parser.add_argument("--scale", type=str, help="Scale name, e.g. 'Dorian'. Random when omitted.")
    parser.add_argument("--seed", type=int, help="Random seed for reproducible output")
    parser.add_argument("--count", type=int, default=1, metavar="N", help="Number of exercises in the same key (default: 1).")
    parser.add_argument("--json", action="store_true", help="Print the exercises as JSON")
    parser.add_argument("--midi", type=str, metavar="PATH", help="Also write the last exercise to a MIDI file")
    parser.add_argument("--bpm", type=int, default=120, help="Tempo of the MIDI file (default: 120).")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser


def _print_result(result) -> None:
    print(result.banner)
    print(result.tab)
    print(result.info)
    print(result.flavor)


def run_cli(argv: Optional[List[str]] = None) -> None:
    """Parse CLI arguments and print the generated exercises.

    Invalid keys, scales, counts and tempos are logged and terminate the
    process with exit status ``1``.  The same happens when the MIDI file
    cannot be written.
    """

    args_list = sys.argv[1:] if argv is None else argv
    if "--list-keys" in args_list:
        print("\n".join(NOTE_NAMES))
        return
    if "--list-scales" in args_list:
        print("\n".join(get_all_scale_names()))
        return

    args = build_parser().parse_args(args_list)

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    if args.count <= 0:
        logging.error("Count must be a positive integer.")
        sys.exit(1)
    if args.bpm <= 0:
        logging.error("BPM must be a positive integer.")
        sys.exit(1)

    root = None
    if args.key is not None:
        root = parse_key_name(args.key)
        if root < 0:
            logging.error(f"Invalid key: {args.key}")
            sys.exit(1)

    scale = None
    if args.scale is not None:
        try:
            scale = canonical_scale_name(args.scale)
        except ValueError:
            logging.error(f"Unknown scale: {args.scale}")
            sys.exit(1)

    rng = random.Random(args.seed) if args.seed is not None else random.Random()

    from .tablature import TablatureGenerator

    generator = TablatureGenerator(args.instrument, root, scale, rng=rng)
    results = [generator.generate()]
    for _ in range(args.count - 1):
        results.append(generator.regenerate())

    if args.json:
        payload = [r.to_dict() for r in results]
        print(json.dumps(payload[0] if len(payload) == 1 else payload, indent=2))
    else:
        for index, result in enumerate(results):
            if index:
                print()
            _print_result(result)

    if args.midi:
        from .midi_io import create_midi_file

        try:
            create_midi_file(results[-1], bpm=args.bpm, output_file=args.midi)
        except OSError as exc:
            logging.error("Could not write MIDI file: %s", exc)
            sys.exit(1)


def main() -> None:
    """Entry point used by the console script and ``python -m``."""

    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
    run_cli()
