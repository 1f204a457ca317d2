"""High level entry point tying the theory, fretboard and generator together.

:class:`TablatureGenerator` owns one :class:`~tab_generator.scales.ScaleManager`,
one :class:`~tab_generator.fretboard.FretboardValidator` and one
:class:`~tab_generator.generator.NoteGenerator`.  The key context is chosen
once at construction; :meth:`TablatureGenerator.regenerate` produces a new
exercise in the same key with a fresh position box.

Example
-------
>>> import random
>>> gen = TablatureGenerator("bass", "A", "Pentatonic Minor", rng=random.Random(7))
>>> result = gen.generate()
>>> result.key, result.scale, len(result.notes)
('A', 'Pentatonic Minor', 16)
"""

from __future__ import annotations

import logging
import random
from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional, Tuple, Union

from .flavor import generate_flavor_text
from .formatter import format_harmonic_info, format_tablature, instrument_banner
from .fretboard import FretboardValidator, Instrument, Note, get_instrument_config
from .generator import NoteGenerator
from .scales import NUM_KEYS, ScaleManager, parse_key_name

__all__ = ["TablatureResult", "TablatureGenerator", "generate_tablature", "resolve_root"]

RootKey = Union[int, str, None]


@dataclass(frozen=True)
class TablatureResult:
    """Everything produced by one generation call."""

    tab: str
    info: str
    key: str
    scale: str
    scale_notes: str
    instrument: str
    notes: List[Tuple[int, int]]
    flavor: str
    position_box: Tuple[int, int, int]

    @property
    def banner(self) -> str:
        return instrument_banner(self.instrument)

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON friendly dictionary of the result."""

        data = asdict(self)
        data["notes"] = [{"string": s, "fret": f} for s, f in self.notes]
        anchor, low, high = self.position_box
        data["position_box"] = {"anchor": anchor, "min_fret": low, "max_fret": high}
        return data


def resolve_root(root_key: RootKey) -> Optional[int]:
    """Return the pitch class for ``root_key`` or ``None`` when unusable.

    Integers must lie in ``0-11``; strings are parsed with
    :func:`~tab_generator.scales.parse_key_name`.
    """

    if root_key is None:
        return None
    if isinstance(root_key, str):
        index = parse_key_name(root_key)
    else:
        index = int(root_key)
    if 0 <= index < NUM_KEYS:
        return index
    return None


class TablatureGenerator:
    """Generate exercises for one instrument in one key.

    Parameters
    ----------
    instrument:
        ``"guitar"``, ``"bass"`` or an :class:`Instrument` member. Anything
        else raises ``ValueError``.
    root_key:
        Pitch class ``0-11`` or a note name such as ``"F#"``. ``None`` draws a
        random root. An out-of-range value also draws a random root; a
        warning is logged.
    scale_name:
        Name from the scale table. ``None`` draws a random scale; an unknown
        name uses the Major steps.
    rng:
        Random source shared by every component so a seeded instance
        reproduces the same exercises.
    """

    def __init__(
        self,
        instrument=Instrument.GUITAR,
        root_key: RootKey = None,
        scale_name: Optional[str] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.rng = rng or random.Random()
        # Resolve the instrument first so a bad value fails before any draws.
        self.instrument = Instrument(get_instrument_config(instrument).name)

        root = resolve_root(root_key)
        if root_key is not None and root is None:
            logging.warning("Invalid root key %r; choosing a random key instead.", root_key)
        self.scale_manager = ScaleManager(root, scale_name, rng=self.rng)
        self.notes: List[Note] = []
        self._rebuild()

    def _rebuild(self) -> None:
        self.validator = FretboardValidator(self.scale_manager, self.instrument)
        self.note_generator = NoteGenerator(self.validator, rng=self.rng)

    def set_key_and_scale(self, root: int, scale_name: str) -> None:
        """Switch to a new key context and rebuild the generator."""

        self.scale_manager.set_key_and_scale(root, scale_name)
        self._rebuild()

    def generate(self) -> TablatureResult:
        """Build an exercise and package it with its text renderings."""

        self.notes = self.note_generator.generate_tablature()
        mgr = self.scale_manager
        result = TablatureResult(
            tab=format_tablature(self.notes, self.validator.config.labels),
            info=format_harmonic_info(mgr.key_name(), mgr.scale_name(), mgr.scale_notes_display()),
            key=mgr.key_name(),
            scale=mgr.scale_name(),
            scale_notes=mgr.scale_notes_display(),
            instrument=self.instrument.value,
            notes=[n.as_tuple() for n in self.notes],
            flavor=generate_flavor_text(self.rng),
            position_box=self.note_generator.position_box.as_tuple(),
        )
        logging.debug("Generated %s exercise in %s", result.instrument, mgr.full_description())
        return result

    def regenerate(self) -> TablatureResult:
        """Generate again in the same key with a new validator and box."""

        self._rebuild()
        return self.generate()

    @property
    def key_name(self) -> str:
        return self.scale_manager.key_name()

    @property
    def scale_name(self) -> str:
        return self.scale_manager.scale_name()


def generate_tablature(
    instrument=Instrument.GUITAR,
    root_key: RootKey = None,
    scale_name: Optional[str] = None,
    rng: Optional[random.Random] = None,
) -> TablatureResult:
    """Generate a single exercise in one call."""

    return TablatureGenerator(instrument, root_key, scale_name, rng=rng).generate()
