"""
core/harmony/scale_match.py — Chord → scale and progression → scale matching.

match_scales(chord):
    1. Pick candidate scale types from QUALITY_RULES (first matching rule wins)
    2. Resolve "<tonic> <type>" through the theory provider
    3. Keep only scales that contain every chord note
    4. Order by COMMON_SCALE_PRIORITY (stable for types not listed)

fit_progression_scales(progression):
    Every catalog scale type on every candidate root; keep scales containing
    all progression notes whose chord fit is at least the threshold.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from core.harmony.config import DEFAULT_CONFIG, AnalysisConfig
from core.harmony.keys import analyzable, candidate_roots, collect_notes
from core.harmony.qualities import (
    is_altered_dominant,
    is_diminished,
    is_generic_dominant,
    is_half_diminished,
    is_major_seventh,
    is_minor,
    is_sharp_eleven_dominant,
    is_suspended,
)
from core.harmony.theory import TheoryProvider, get_theory
from core.harmony.types import Chord, ProgressionScaleFit, ScaleOption

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Rule table
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class QualityRule:
    """Candidate scale types for chords whose symbol satisfies ``applies``."""

    tag: str
    applies: Callable[[str], bool]
    scale_types: tuple[str, ...]


def _major_seventh_like(symbol: str) -> bool:
    return is_major_seventh(symbol) and not is_minor(symbol)


# Order matters: half-diminished before minor, #11 and altered before plain dominant.
QUALITY_RULES: tuple[QualityRule, ...] = (
    QualityRule("major seventh", _major_seventh_like, ("ionian", "lydian", "major pentatonic")),
    QualityRule("half-diminished", is_half_diminished, ("locrian", "locrian #2")),
    QualityRule(
        "minor",
        is_minor,
        ("dorian", "aeolian", "minor pentatonic", "phrygian", "melodic minor", "harmonic minor", "blues"),
    ),
    QualityRule("dominant #11", is_sharp_eleven_dominant, ("lydian dominant", "mixolydian")),
    QualityRule(
        "altered dominant",
        is_altered_dominant,
        ("altered", "phrygian dominant", "half-whole diminished"),
    ),
    QualityRule(
        "dominant",
        is_generic_dominant,
        ("mixolydian", "bebop", "lydian dominant", "major pentatonic", "blues"),
    ),
    QualityRule("diminished", is_diminished, ("diminished", "locrian", "half-whole diminished")),
    QualityRule("suspended", is_suspended, ("mixolydian", "dorian", "major pentatonic")),
)

FALLBACK_SCALE_TYPES: tuple[str, ...] = ("ionian", "major pentatonic", "mixolydian")

COMMON_SCALE_PRIORITY: tuple[str, ...] = (
    "ionian",
    "aeolian",
    "dorian",
    "mixolydian",
    "major pentatonic",
    "minor pentatonic",
    "lydian",
    "blues",
    "phrygian",
    "melodic minor",
    "harmonic minor",
    "locrian",
)

# Types listed first when whole-progression fits tie on score.
PROGRESSION_COMMON_TYPES: frozenset[str] = frozenset(
    {"major", "minor", "major pentatonic", "minor pentatonic", "blues"}
)

_PROGRESSION_ROOT_BONUS = 0.1


def candidate_scale_types(symbol: str) -> tuple[str, ...]:
    """Scale types of the first rule matching ``symbol``, else the fallback."""
    for rule in QUALITY_RULES:
        if rule.applies(symbol):
            return rule.scale_types
    return FALLBACK_SCALE_TYPES


def _priority(scale_type: str) -> int:
    try:
        return COMMON_SCALE_PRIORITY.index(scale_type)
    except ValueError:
        return len(COMMON_SCALE_PRIORITY)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def match_scales(chord: Chord, theory: TheoryProvider | None = None) -> list[ScaleOption]:
    """Return the scales that fully contain a chord, most common first.

    Args:
        chord:  Chord to match
        theory: Provider for scale lookup (default provider if None)

    Returns:
        Ordered ScaleOptions; empty for a chord without a tonic

    Examples:
        >>> [o.name for o in match_scales(get_theory().chord("G7"))]
        ['G mixolydian', 'G bebop', 'G lydian dominant']
    """
    if chord.tonic is None:
        return []

    theory = theory or get_theory()
    options: list[ScaleOption] = []
    for scale_type in candidate_scale_types(chord.symbol):
        name = f"{chord.tonic} {scale_type}"
        lookup = theory.scale(name)
        if lookup.empty:
            continue
        if not all(note in lookup.notes for note in chord.notes):
            continue
        options.append(
            ScaleOption(
                root=chord.tonic,
                type=scale_type,
                name=name,
                reason=theory.flavor(scale_type),
                notes=lookup.notes,
            )
        )

    ranked = sorted(options, key=lambda option: _priority(option.type))
    logger.debug("Scales for %s: %s", chord.symbol, [o.name for o in ranked])
    return ranked


def fit_progression_scales(
    progression: Sequence[Chord],
    *,
    theory: TheoryProvider | None = None,
    config: AnalysisConfig = DEFAULT_CONFIG,
) -> list[ProgressionScaleFit]:
    """Find scales that cover the whole progression.

    A scale qualifies when it contains every note of the progression and
    at least ``config.whole_song_threshold`` of the chords fit entirely.
    Ranking favors the first candidate root (the opening chord's tonic), then
    common scale types.

    Returns:
        At most ``config.max_progression_scales`` fits, best first
    """
    chords = analyzable(progression)
    if not chords:
        return []

    theory = theory or get_theory()
    roots = candidate_roots(chords)
    all_notes = collect_notes(chords)

    fits: list[ProgressionScaleFit] = []
    for root in roots:
        for scale_type in theory.scale_types:
            name = f"{root} {scale_type}"
            lookup = theory.scale(name)
            if lookup.empty:
                continue
            members = set(lookup.notes)
            if not all(note in members for note in all_notes):
                continue
            contained = sum(1 for chord in chords if all(n in members for n in chord.notes))
            score = contained / len(chords)
            if score >= config.whole_song_threshold:
                fits.append(
                    ProgressionScaleFit(
                        root=root,
                        type=scale_type,
                        name=name,
                        score=score,
                        reason=theory.flavor(scale_type),
                    )
                )

    def _rank(fit: ProgressionScaleFit) -> tuple[float, int]:
        bonus = _PROGRESSION_ROOT_BONUS if fit.root == roots[0] else 0.0
        return (-(fit.score + bonus), 0 if fit.type in PROGRESSION_COMMON_TYPES else 1)

    ranked = sorted(fits, key=_rank)[: config.max_progression_scales]
    logger.debug("Progression scales: %s", [f.name for f in ranked])
    return ranked
