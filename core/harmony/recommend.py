"""
core/harmony/recommend.py — Best-note recommendation with voice leading.

recommend_note() ranks candidate target notes for one chord. The candidate
pool is the chord's own notes plus the extension pool: the notes of the
chord's best-fitting scale (or the key's scale) that are not chord tones.

Each candidate's score is additive:

    root                                   +1.00
    2nd / 3rd / 4th listed chord note      +0.95 / +0.72 / +0.86
    non-chord tone, by interval from root  +0.58 (9th), +0.55 / +0.30 (11th),
                                           +0.52 (13th), +0.48 / +0.12 (b9, #5, b13),
                                           +0.10 otherwise
    inside the active key                  +0.35
    near the next chord                    +max(0.45 − 0.11·d, 0)
    7th chord (not maj7, not ø) resolving  +0.20

The chord-note weights put the 7th (4th listed) above the 5th (3rd listed)
and below the 3rd (2nd listed). The ranking is a stable sort: ties keep pool
order (chord notes first, then scale order).
"""

from __future__ import annotations

import logging

from core.harmony.config import DEFAULT_CONFIG, AnalysisConfig
from core.harmony.intervals import interval_name, nearest_note
from core.harmony.qualities import (
    is_extension_dominant,
    is_resolving_dominant,
    looks_major_or_minor,
)
from core.harmony.scale_match import match_scales
from core.harmony.theory import TheoryProvider, get_theory
from core.harmony.types import Chord, KeyCandidate, NoteCandidate, NoteRecommendation

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Weights
# ---------------------------------------------------------------------------

ROOT_WEIGHT = 1.0

# 0-based position in Chord.notes → weight
CHORD_NOTE_WEIGHTS: dict[int, float] = {1: 0.95, 2: 0.72, 3: 0.86}

KEY_MEMBER_WEIGHT = 0.35

PROXIMITY_BASE = 0.45
PROXIMITY_STEP = 0.11
RESOLUTION_BONUS = 0.2
RESOLUTION_MAX_DISTANCE = 1

_NINTHS = frozenset({"2M", "9M"})
_ELEVENTHS = frozenset({"4P", "11P"})
_THIRTEENTHS = frozenset({"6M", "13M"})
_ALTERATIONS = frozenset({"2m", "9m", "5A", "6m"})


def extension_score(interval: str, dominant: bool) -> float:
    """Weight of a non-chord tone by its interval above the chord root.

    Args:
        interval: Short interval name from the root, e.g. "2M"
        dominant: Whether the chord carries a 7 other than maj7

    Returns:
        0.58 for a 9th, 0.55/0.3 for an 11th, 0.52 for a 13th,
        0.48/0.12 for b9, #5 or b13, 0.1 for anything else
    """
    if interval in _NINTHS:
        return 0.58
    if interval in _ELEVENTHS:
        return 0.55 if dominant else 0.3
    if interval in _THIRTEENTHS:
        return 0.52
    if interval in _ALTERATIONS:
        return 0.48 if dominant else 0.12
    return 0.1


# ---------------------------------------------------------------------------
# Candidate pool and scoring
# ---------------------------------------------------------------------------


def extension_pool(
    chord: Chord,
    key: KeyCandidate | None = None,
    theory: TheoryProvider | None = None,
) -> list[str]:
    """Scale notes usable as color over a chord, excluding its own notes.

    Uses the chord's best-fitting scale; falls back to the key's scale notes,
    then to nothing.
    """
    options = match_scales(chord, theory)
    if options:
        source: tuple[str, ...] = options[0].notes
    elif key is not None:
        source = key.scale_notes
    else:
        source = ()
    return [note for note in source if note not in chord.notes]


def candidate_pool(
    chord: Chord,
    key: KeyCandidate | None = None,
    theory: TheoryProvider | None = None,
) -> list[str]:
    """Chord notes then extension notes, deduplicated, order preserved."""
    pool: list[str] = []
    for note in (*chord.notes, *extension_pool(chord, key, theory)):
        if note not in pool:
            pool.append(note)
    return pool


def score_note(
    note: str,
    chord: Chord,
    next_chord: Chord | None = None,
    key: KeyCandidate | None = None,
    theory: TheoryProvider | None = None,
) -> float:
    """Additive score of one candidate note over ``chord``."""
    theory = theory or get_theory()
    score = 0.0

    if chord.tonic is not None and note == chord.tonic:
        score += ROOT_WEIGHT
    for position, weight in CHORD_NOTE_WEIGHTS.items():
        if position < len(chord.notes) and chord.notes[position] == note:
            score += weight

    if note not in chord.notes:
        interval = interval_name(chord.tonic, note, theory) if chord.tonic else ""
        score += extension_score(interval, is_extension_dominant(chord.symbol))

    if key is not None and note in key.scale_notes:
        score += KEY_MEMBER_WEIGHT

    if next_chord is not None:
        _, distance = nearest_note(note, next_chord.notes, theory)
        if distance is not None:
            score += max(PROXIMITY_BASE - PROXIMITY_STEP * distance, 0.0)
            if (
                is_resolving_dominant(chord.symbol)
                and looks_major_or_minor(next_chord.symbol)
                and distance <= RESOLUTION_MAX_DISTANCE
            ):
                score += RESOLUTION_BONUS
    return score


def rank_candidates(
    chord: Chord,
    next_chord: Chord | None = None,
    key: KeyCandidate | None = None,
    theory: TheoryProvider | None = None,
) -> list[NoteCandidate]:
    """Score every pool note and rank them, best first (stable for ties)."""
    theory = theory or get_theory()
    scored = [
        NoteCandidate(note=note, score=score_note(note, chord, next_chord, key, theory))
        for note in candidate_pool(chord, key, theory)
    ]
    return sorted(scored, key=lambda c: c.score, reverse=True)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def _reason(
    note: str,
    chord: Chord,
    next_chord: Chord | None,
    key: KeyCandidate | None,
    resolves: bool,
) -> str:
    parts: list[str] = []
    if note in chord.notes:
        parts.append("chord tone")
    if key is not None and note in key.scale_notes:
        parts.append(f"inside {key.name}")
    if next_chord is not None and resolves:
        parts.append(f"steps into {next_chord.symbol}")
    if not parts:
        return f"color tension over {chord.symbol}"
    return ", ".join(parts)


def recommend_note(
    chord: Chord,
    next_chord: Chord | None = None,
    key: KeyCandidate | None = None,
    *,
    theory: TheoryProvider | None = None,
    config: AnalysisConfig = DEFAULT_CONFIG,
) -> NoteRecommendation:
    """Recommend the strongest melodic target note over a chord.

    Args:
        chord:      Current chord
        next_chord: Following chord, None at the end of a progression
        key:        Active key, None when no key was detected
        theory:     Provider for scales, chroma and intervals
        config:     Result sizes

    Returns:
        NoteRecommendation with best note, up to 3 alternatives, a 3-note
        micro line and a reason. Never raises for tonic-less or empty chords;
        those fall back to the symbol text.

    Examples:
        >>> theory = get_theory()
        >>> rec = recommend_note(theory.chord("G7"), theory.chord("Cmaj"))
        >>> rec.best_note, rec.micro_line
        ('G', ('G', 'G', 'C'))
    """
    theory = theory or get_theory()
    ranked = rank_candidates(chord, next_chord, key, theory)

    if ranked:
        best = ranked[0].note
    else:
        best = chord.tonic or chord.symbol

    alternatives = tuple(c.note for c in ranked[1 : 1 + config.max_alternatives])
    if not alternatives:
        alternatives = tuple(chord.notes[: config.max_alternatives])

    target: str | None = None
    distance: int | None = None
    if next_chord is not None:
        target, distance = nearest_note(best, next_chord.notes, theory)
    target = target or best
    resolves = distance is not None and distance <= RESOLUTION_MAX_DISTANCE

    closing = next_chord.tonic if next_chord is not None and next_chord.tonic else best
    micro_line = (best, target, closing)

    recommendation = NoteRecommendation(
        best_note=best,
        alternatives=alternatives,
        micro_line=micro_line,
        reason=_reason(best, chord, next_chord, key, resolves),
        candidates=tuple(ranked),
    )
    logger.debug(
        "Best note over %s → %s (alternatives %s)",
        chord.symbol,
        best,
        list(alternatives),
    )
    return recommendation
