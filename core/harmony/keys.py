"""
core/harmony/keys.py — Key-center detection.

detect_keys() scores every (root, major/minor) pair against a progression:

    score = note_coverage  * 0.55     fraction of progression notes in the key
          + chord_coverage * 0.35     fraction of chords entirely in the key
          + tonic_bonus               0.08 if the first chord's root is the key root
          + cadence_bonus             ii→V, V→I, iv→V motions, capped at 0.09

Roots are tried in a fixed order (chord tonics first, then the rest of the
chromatic scale) and the ranking uses a stable sort, so equal scores keep
that order. Identical input always yields identical output.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from core.harmony.config import DEFAULT_CONFIG, AnalysisConfig
from core.harmony.functional import cadence_bonus, label_progression
from core.harmony.theory import NOTE_NAMES, TheoryProvider, get_theory
from core.harmony.types import Chord, KeyCandidate

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def analyzable(progression: Sequence[Chord]) -> list[Chord]:
    """Drop chords without a tonic; they take no part in key analysis."""
    return [chord for chord in progression if chord.tonic is not None]


def collect_notes(progression: Sequence[Chord]) -> list[str]:
    """Deduplicated union of every chord's notes, first-seen order."""
    notes: list[str] = []
    for chord in progression:
        for note in chord.notes:
            if note not in notes:
                notes.append(note)
    return notes


def candidate_roots(progression: Sequence[Chord]) -> list[str]:
    """Chord tonics in first-occurrence order, then the remaining chromatic names.

    Examples:
        >>> candidate_roots([Chord("Am", "A", ("A", "C", "E"))])[:3]
        ['A', 'C', 'C#']
    """
    roots: list[str] = []
    for chord in progression:
        if chord.tonic is not None and chord.tonic not in roots:
            roots.append(chord.tonic)
    roots.extend(note for note in NOTE_NAMES if note not in roots)
    return roots


def _coverage(progression: Sequence[Chord], all_notes: Sequence[str], scale: Sequence[str]) -> tuple[float, float]:
    members = set(scale)
    note_coverage = sum(1 for n in all_notes if n in members) / len(all_notes) if all_notes else 0.0
    contained = sum(1 for chord in progression if all(n in members for n in chord.notes))
    chord_coverage = contained / len(progression) if progression else 0.0
    return note_coverage, chord_coverage


def score_key(
    progression: Sequence[Chord],
    root: str,
    mode: str,
    scale_notes: Sequence[str],
    *,
    all_notes: Sequence[str] | None = None,
    config: AnalysisConfig = DEFAULT_CONFIG,
) -> KeyCandidate:
    """Score one (root, mode) key against a non-empty progression.

    Args:
        progression: Chords with tonics
        root:        Key root
        mode:        "major" or "minor"
        scale_notes: The key's 7 scale notes
        all_notes:   Precomputed union of progression notes (computed if None)
        config:      Weights and bonuses

    Returns:
        A scored KeyCandidate
    """
    notes = collect_notes(progression) if all_notes is None else all_notes
    note_coverage, chord_coverage = _coverage(progression, notes, scale_notes)

    tonic_bonus = config.tonic_bonus if progression and progression[0].tonic == root else 0.0
    labels = label_progression(progression, scale_notes, root)
    bonus = cadence_bonus(labels, config.cadence_bonus_cap)

    score = (
        note_coverage * config.note_coverage_weight
        + chord_coverage * config.chord_coverage_weight
        + tonic_bonus
        + bonus
    )
    return KeyCandidate(
        root=root,
        mode=mode,
        scale_notes=tuple(scale_notes),
        score=score,
        note_coverage=note_coverage,
        chord_coverage=chord_coverage,
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def detect_keys(
    progression: Sequence[Chord],
    *,
    theory: TheoryProvider | None = None,
    config: AnalysisConfig = DEFAULT_CONFIG,
) -> list[KeyCandidate]:
    """Rank the most probable key centers of a progression.

    Args:
        progression: Chords in order; chords without a tonic are ignored
        theory:      Provider for key scales (default provider if None)
        config:      Weights, bonuses and result size

    Returns:
        At most ``config.max_key_candidates`` KeyCandidates, best first.
        Empty list for an empty (or entirely rootless) progression.

    Examples:
        >>> keys = detect_keys(parse_progression("Am7 D7 Gmaj7"))
        >>> keys[0].name
        'G major'
    """
    chords = analyzable(progression)
    if not chords:
        return []

    theory = theory or get_theory()
    all_notes = collect_notes(chords)

    candidates: list[KeyCandidate] = []
    for root in candidate_roots(chords):
        for mode, lookup in (("major", theory.major_key), ("minor", theory.minor_key)):
            scale_notes = lookup(root)
            if not scale_notes:
                logger.debug("No %s key for root %r, skipping", mode, root)
                continue
            candidates.append(
                score_key(chords, root, mode, scale_notes, all_notes=all_notes, config=config)
            )

    ranked = sorted(candidates, key=lambda k: k.score, reverse=True)[: config.max_key_candidates]
    logger.debug(
        "Key candidates: %s",
        ", ".join(f"{k.name}={k.score:.3f}" for k in ranked),
    )
    return ranked


def key_from_name(name: str, theory: TheoryProvider | None = None) -> KeyCandidate | None:
    """Build an unscored KeyCandidate from a name such as "G major" or "E minor".

    Used when a caller supplies the active key instead of detecting it.
    Returns None for an unknown root or a mode other than major/minor.
    """
    root, _, mode = name.strip().partition(" ")
    mode = mode.strip().lower()
    theory = theory or get_theory()
    if mode == "major":
        scale_notes = theory.major_key(root)
    elif mode == "minor":
        scale_notes = theory.minor_key(root)
    else:
        return None
    if not scale_notes:
        return None
    # Normalize the root spelling to the provider's (e.g. "Bb" → "A#").
    return KeyCandidate(
        root=scale_notes[0],
        mode=mode,
        scale_notes=tuple(scale_notes),
        score=0.0,
        note_coverage=0.0,
        chord_coverage=0.0,
    )
