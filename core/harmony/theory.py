"""
core/harmony/theory.py — Theory primitives provider.

The analysis engine never hard-codes scale or chord spellings. It asks a
``TheoryProvider`` for:

    scale(name)        "<root> <type>" → ScaleLookup (empty=True when unknown)
    major_key(root)    7-note major key scale, () when unknown
    minor_key(root)    7-note natural minor key scale, () when unknown
    chroma(note)       pitch class 0–11, None when unknown
    interval(a, b)     short interval name, e.g. "2M", "" when unknown
    chord(token)       chord symbol → Chord (tonic=None when unparseable)
    scale_types        every resolvable scale type
    flavor(type)       flavor text for a scale type

``TableTheory`` is the default provider. Its scale formulas, flavor texts and
chord suffix formulas live in ``data/catalog.yaml`` (loaded once, cached).

Design decisions:
    - Lookup misses are values, not exceptions. Every method returns an empty
      result for text it does not understand.
    - Output notes are spelled with sharps ("C#", never "Db"); input accepts
      sharps and flats. Membership elsewhere in the engine is text equality,
      so a single spelling convention keeps chords and scales comparable.
    - Interval names come from the semitone class alone, which stays
      consistent with sharp-only spelling.
"""

from __future__ import annotations

import functools
import logging
import re
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

import yaml

from core.harmony.types import Chord, Interval, ScaleLookup

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Chromatic pitch classes
# ---------------------------------------------------------------------------

NOTE_NAMES: tuple[str, ...] = (
    "C",
    "C#",
    "D",
    "D#",
    "E",
    "F",
    "F#",
    "G",
    "G#",
    "A",
    "A#",
    "B",
)

_NATURAL_CHROMA: dict[str, int] = {"C": 0, "D": 2, "E": 4, "F": 5, "G": 7, "A": 9, "B": 11}

_NOTE_PATTERN = re.compile(r"^([A-Ga-g])([#b]*)$")
_CHORD_PATTERN = re.compile(r"^([A-Ga-g])([#b]?)(.*)$")

# Semitone class → (short name, long name)
INTERVAL_NAMES: dict[int, tuple[str, str]] = {
    0: ("1P", "perfect unison"),
    1: ("2m", "minor second"),
    2: ("2M", "major second"),
    3: ("3m", "minor third"),
    4: ("3M", "major third"),
    5: ("4P", "perfect fourth"),
    6: ("4A", "augmented fourth"),
    7: ("5P", "perfect fifth"),
    8: ("6m", "minor sixth"),
    9: ("6M", "major sixth"),
    10: ("7m", "minor seventh"),
    11: ("7M", "major seventh"),
}

# ---------------------------------------------------------------------------
# YAML catalog: loaded once, cached
# ---------------------------------------------------------------------------

_CATALOG_PATH: Path = Path(__file__).parent / "data" / "catalog.yaml"


@functools.cache
def load_catalog(path: Path = _CATALOG_PATH) -> dict[str, Any]:
    """Load and cache the scale/chord catalog.

    Args:
        path: YAML file with ``scales`` and ``chords`` sections

    Returns:
        Parsed YAML dict

    Raises:
        ValueError: If the file is missing or lacks a required section
    """
    if not path.exists():
        raise ValueError(f"Theory catalog not found: {path}")

    with path.open(encoding="utf-8") as fh:
        data = yaml.safe_load(fh)

    for section in ("scales", "chords"):
        if not isinstance(data.get(section), dict):
            raise ValueError(f"Theory catalog {path} is missing the {section!r} section")

    logger.debug(
        "Loaded theory catalog: %d scale types, %d chord suffixes",
        len(data["scales"]),
        len(data["chords"]),
    )
    return data  # type: ignore[no-any-return]


# ---------------------------------------------------------------------------
# Provider protocol
# ---------------------------------------------------------------------------


@runtime_checkable
class TheoryProvider(Protocol):
    """
    Protocol for music-theory primitive providers.

    Any class implementing these methods can back the analysis engine.
    Implementations must treat unknown input as "not found" and return an
    empty value instead of raising.
    """

    def scale(self, name: str) -> ScaleLookup:
        """Resolve ``"<root> <type>"``, e.g. ``"G mixolydian"``."""
        ...

    def major_key(self, root: str) -> tuple[str, ...]:
        """Return the 7-note major key scale, or ``()``."""
        ...

    def minor_key(self, root: str) -> tuple[str, ...]:
        """Return the 7-note natural minor key scale, or ``()``."""
        ...

    def chroma(self, note: str) -> int | None:
        """Return the pitch class 0–11 of a note name, or ``None``."""
        ...

    def interval(self, a: str, b: str) -> str:
        """Return the short ascending interval name from ``a`` to ``b``, or ``""``."""
        ...

    def chord(self, token: str) -> Chord:
        """Parse a chord symbol; unparseable tokens give ``tonic=None``."""
        ...

    @property
    def scale_types(self) -> tuple[str, ...]:
        """Every scale type the provider can resolve."""
        ...

    def flavor(self, scale_type: str) -> str:
        """Human-readable description of how a scale type sounds."""
        ...


# ---------------------------------------------------------------------------
# Default table-driven provider
# ---------------------------------------------------------------------------


class TableTheory:
    """Theory provider backed by the YAML catalog.

    Usage:
        theory = TableTheory()
        theory.scale("G mixolydian").notes
        # ('G', 'A', 'B', 'C', 'D', 'E', 'F')
        theory.chord("Am7").notes
        # ('A', 'C', 'E', 'G')
    """

    def __init__(self, catalog: dict[str, Any] | None = None) -> None:
        data = catalog if catalog is not None else load_catalog()
        self._scales: dict[str, dict[str, Any]] = dict(data["scales"])
        self._chords: dict[str, tuple[int, ...]] = {
            str(suffix): tuple(formula) for suffix, formula in data["chords"].items()
        }

    @property
    def scale_types(self) -> tuple[str, ...]:
        """All known scale types, in catalog order."""
        return tuple(self._scales)

    def flavor(self, scale_type: str) -> str:
        """Flavor text for a scale type, with a generic fallback."""
        entry = self._scales.get(scale_type)
        if entry is None:
            return "Unique flavor."
        return str(entry.get("flavor") or "Unique flavor.")

    def chroma(self, note: str) -> int | None:
        match = _NOTE_PATTERN.match(note.strip()) if note else None
        if match is None:
            return None
        letter, accidentals = match.groups()
        offset = accidentals.count("#") - accidentals.count("b")
        return (_NATURAL_CHROMA[letter.upper()] + offset) % 12

    def _spell(self, root_chroma: int, formula: tuple[int, ...]) -> tuple[str, ...]:
        seen: list[str] = []
        for step in formula:
            note = NOTE_NAMES[(root_chroma + step) % 12]
            if note not in seen:
                seen.append(note)
        return tuple(seen)

    def scale(self, name: str) -> ScaleLookup:
        root, _, scale_type = name.strip().partition(" ")
        root_chroma = self.chroma(root)
        entry = self._scales.get(scale_type.strip())
        if root_chroma is None or entry is None:
            logger.debug("Scale lookup miss: %r", name)
            return ScaleLookup(name=name)
        notes = self._spell(root_chroma, tuple(entry["formula"]))
        return ScaleLookup(name=name, empty=False, notes=notes)

    def major_key(self, root: str) -> tuple[str, ...]:
        return self.scale(f"{root} major").notes

    def minor_key(self, root: str) -> tuple[str, ...]:
        return self.scale(f"{root} minor").notes

    def interval(self, a: str, b: str) -> str:
        found = self.interval_between(a, b)
        return found.short if found is not None else ""

    def interval_between(self, a: str, b: str) -> Interval | None:
        """Return the ascending Interval from ``a`` to ``b``, or None."""
        ca, cb = self.chroma(a), self.chroma(b)
        if ca is None or cb is None:
            return None
        semitones = (cb - ca) % 12
        short, long_name = INTERVAL_NAMES[semitones]
        return Interval(semitones=semitones, name=long_name, short=short)

    def chord(self, token: str) -> Chord:
        text = token.strip()
        match = _CHORD_PATTERN.match(text)
        if match is None:
            return Chord(symbol=text)
        letter, accidental, suffix = match.groups()
        formula = self._chords.get(suffix)
        if formula is None:
            logger.debug("Unknown chord suffix %r in %r", suffix, token)
            return Chord(symbol=text)
        root = letter.upper() + accidental
        root_chroma = (_NATURAL_CHROMA[root[0]] + root.count("#") - root.count("b")) % 12
        tonic = NOTE_NAMES[root_chroma]
        return Chord(symbol=root + suffix, tonic=tonic, notes=self._spell(root_chroma, formula))


@functools.cache
def get_theory() -> TableTheory:
    """Return the process-wide default TableTheory."""
    return TableTheory()
