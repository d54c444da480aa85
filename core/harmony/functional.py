"""
core/harmony/functional.py — Roman-numeral labeling and cadence detection.

label_chord() maps a chord onto a scale degree of a key:

    1. Find the chord tonic in the key's scale notes ("outside" if absent)
    2. Take the base numeral for that degree (I..VII)
    3. Adjust for quality, reading the chord symbol:
         minor / diminished / half-diminished  → lower-case
         then the first of:
           dominant seventh on degree V        → "7"
           major seventh                        → "Δ"
           diminished / half-diminished        → lower-case + "°"
           any other "7"                        → "7"

The lower-casing step and the "°" step are separate checks: a diminished
chord is lower-cased by the first and suffixed by the second. Existing
scoring and labels depend on that layering, so keep it.

CADENCE_RULES is the ordered table of recognized two-chord motions. Both the
key detector (score bonuses) and summarize_cadences() (phrases) read it.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from dataclasses import dataclass

from core.harmony.qualities import (
    has_seventh,
    is_diminished,
    is_half_diminished,
    is_major_seventh,
    is_minor,
)
from core.harmony.types import Chord, KeyCandidate

logger = logging.getLogger(__name__)

OUTSIDE = "outside"

ROMAN_NUMERALS: tuple[str, ...] = ("I", "II", "III", "IV", "V", "VI", "VII")

_DOMINANT_DEGREE = 4

NO_KEY_SUMMARY = "Interval-driven movement: no stable key center, follow the chord tones."
NO_CADENCE_SUMMARY = "No strong cadence detected; the progression moves by color rather than resolution."
CADENCE_SEPARATOR = "; "

# ---------------------------------------------------------------------------
# Cadence rule table
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class CadenceRule:
    """A recognized motion from one functional label to the next.

    Attributes:
        name:   Short identifier, e.g. "V-I"
        first:  Pattern the first label must match
        second: Pattern the following label must match
        bonus:  Key-detection score added per occurrence
        phrase: Description used in cadence summaries
    """

    name: str
    first: re.Pattern[str]
    second: re.Pattern[str]
    bonus: float
    phrase: str

    def matches(self, first_label: str, second_label: str) -> bool:
        return bool(self.first.match(first_label) and self.second.match(second_label))


_SUPERTONIC = re.compile(r"^ii(?!i)", re.IGNORECASE)
_DOMINANT = re.compile(r"^v(?!i)", re.IGNORECASE)
_SUBDOMINANT = re.compile(r"^iv", re.IGNORECASE)
# Any upper-case label starting with I, so V→IV and V→III count as V-I
_TONIC = re.compile(r"^I")

# Evaluated top to bottom; order is the order phrases appear in summaries.
CADENCE_RULES: tuple[CadenceRule, ...] = (
    CadenceRule("ii-V", _SUPERTONIC, _DOMINANT, 0.015, "ii→V motion"),
    CadenceRule("V-I", _DOMINANT, _TONIC, 0.03, "authentic V→I cadence"),
    CadenceRule("IV-V", _SUBDOMINANT, _DOMINANT, 0.012, "pre-dominant IV→V setup"),
)

# ---------------------------------------------------------------------------
# Labeling
# ---------------------------------------------------------------------------


def label_chord(chord: Chord, scale_notes: Sequence[str], key_root: str | None = None) -> str:
    """Return the roman-numeral label of a chord within a key.

    Args:
        chord:       Chord to label
        scale_notes: The key's ordered scale notes (degree I first)
        key_root:    Key root, informational; the degree comes from scale_notes

    Returns:
        Roman numeral such as "ii7", "V7", "IΔ", "vii°", or "outside"

    Examples:
        >>> g_major = ("G", "A", "B", "C", "D", "E", "F#")
        >>> label_chord(Chord("D7", "D", ("D", "F#", "A", "C")), g_major, "G")
        'V7'
    """
    if chord.tonic is None or not scale_notes:
        return OUTSIDE
    try:
        idx = list(scale_notes).index(chord.tonic)
    except ValueError:
        return OUTSIDE
    if idx >= len(ROMAN_NUMERALS):
        return OUTSIDE

    symbol = chord.symbol
    diminished = is_diminished(symbol) or is_half_diminished(symbol)
    numeral = ROMAN_NUMERALS[idx]

    if is_minor(symbol) or diminished:
        numeral = numeral.lower()

    if has_seventh(symbol) and not is_major_seventh(symbol) and idx == _DOMINANT_DEGREE:
        numeral += "7"
    elif is_major_seventh(symbol):
        numeral += "Δ"
    elif diminished:
        numeral = numeral.lower() + "°"
    elif has_seventh(symbol):
        numeral += "7"
    return numeral


def label_progression(
    progression: Sequence[Chord],
    scale_notes: Sequence[str],
    key_root: str | None = None,
) -> list[str]:
    """Label every chord of a progression against one key."""
    return [label_chord(chord, scale_notes, key_root) for chord in progression]


# ---------------------------------------------------------------------------
# Cadences
# ---------------------------------------------------------------------------


def find_cadences(labels: Sequence[str]) -> list[CadenceRule]:
    """Return the rule matched by each adjacent label pair, in scan order.

    A pair contributes at most one rule: the first in CADENCE_RULES it matches.
    """
    found: list[CadenceRule] = []
    for first, second in zip(labels, labels[1:]):
        for rule in CADENCE_RULES:
            if rule.matches(first, second):
                found.append(rule)
                break
    return found


def cadence_bonus(labels: Sequence[str], cap: float) -> float:
    """Sum of cadence bonuses over adjacent label pairs, capped at ``cap``."""
    return min(sum(rule.bonus for rule in find_cadences(labels)), cap)


def summarize_cadences(progression: Sequence[Chord], key: KeyCandidate | None) -> str:
    """Describe the cadences of a progression within a chosen key.

    Args:
        progression: Chords in order
        key:         Chosen key, or None when no key was detected

    Returns:
        Deduplicated cadence phrases joined with "; ", or a fixed fallback
        message when there is no key or no recognized motion
    """
    if key is None:
        return NO_KEY_SUMMARY

    labels = label_progression(progression, key.scale_notes, key.root)
    phrases: list[str] = []
    for rule in find_cadences(labels):
        if rule.phrase not in phrases:
            phrases.append(rule.phrase)

    logger.debug("Cadences in %s for %s: %s", key.name, labels, phrases)
    if not phrases:
        return NO_CADENCE_SUMMARY
    return CADENCE_SEPARATOR.join(phrases)
