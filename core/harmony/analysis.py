"""
core/harmony/analysis.py — Whole-progression analysis pipeline.

analyze_progression() runs every engine stage once, in dependency order:

    1. detect_keys               → ranked key centers, top one is the active key
    2. label_chord               → roman numeral per chord in the active key
    3. summarize_cadences        → cadence phrases
    4. match_scales              → scale options per chord
    5. recommend_note            → best note per chord, resolving to its successor
    6. fit_progression_scales    → scales covering the whole progression

Design decisions:
    - Pure: no I/O, no randomness. Re-running on the same chords gives an
      equal ProgressionAnalysis, so callers can recompute instead of caching.
    - parse_progression() is the token filter: unparseable tokens never reach
      the engine.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from core.harmony.config import DEFAULT_CONFIG, AnalysisConfig
from core.harmony.functional import OUTSIDE, label_chord, summarize_cadences
from core.harmony.keys import detect_keys
from core.harmony.recommend import recommend_note
from core.harmony.scale_match import fit_progression_scales, match_scales
from core.harmony.theory import TheoryProvider, get_theory
from core.harmony.types import Chord, ChordAnalysis, ProgressionAnalysis

logger = logging.getLogger(__name__)


def parse_progression(
    chords: str | Iterable[str],
    theory: TheoryProvider | None = None,
) -> tuple[Chord, ...]:
    """Parse chord tokens, dropping the ones the provider cannot read.

    Args:
        chords: Whitespace-separated symbols ("Am7 D7 Gmaj7") or a token list
        theory: Provider used for parsing (default provider if None)

    Returns:
        Tuple of parsed Chords, in input order

    Examples:
        >>> [c.symbol for c in parse_progression("Am7 xyz D7")]
        ['Am7', 'D7']
    """
    theory = theory or get_theory()
    tokens = chords.split() if isinstance(chords, str) else [t for t in chords if t.strip()]
    parsed: list[Chord] = []
    for token in tokens:
        chord = theory.chord(token)
        if chord.tonic is None:
            logger.debug("Dropping unparseable chord token %r", token)
            continue
        parsed.append(chord)
    return tuple(parsed)


def analyze_progression(
    progression: Sequence[Chord],
    *,
    theory: TheoryProvider | None = None,
    config: AnalysisConfig = DEFAULT_CONFIG,
) -> ProgressionAnalysis:
    """Run the full harmonic analysis of a progression.

    Args:
        progression: Parsed chords, in order
        theory:      Provider for every lookup
        config:      Weights and result sizes

    Returns:
        ProgressionAnalysis; for an empty progression, no keys and no
        per-chord entries
    """
    theory = theory or get_theory()
    chords = tuple(progression)
    keys = detect_keys(chords, theory=theory, config=config)
    key = keys[0] if keys else None

    per_chord: list[ChordAnalysis] = []
    for index, chord in enumerate(chords):
        next_chord = chords[index + 1] if index + 1 < len(chords) else None
        label = label_chord(chord, key.scale_notes, key.root) if key is not None else OUTSIDE
        scales = tuple(match_scales(chord, theory)[: config.max_chord_scales])
        recommendation = recommend_note(chord, next_chord, key, theory=theory, config=config)
        per_chord.append(
            ChordAnalysis(chord=chord, label=label, scales=scales, recommendation=recommendation)
        )

    analysis = ProgressionAnalysis(
        chords=chords,
        keys=tuple(keys),
        key=key,
        cadence_summary=summarize_cadences(chords, key),
        progression_scales=tuple(fit_progression_scales(chords, theory=theory, config=config)),
        per_chord=tuple(per_chord),
    )
    logger.info(
        "Analyzed %d chords: key=%s, labels=%s",
        len(chords),
        key.name if key is not None else "none",
        analysis.progression_label,
    )
    return analysis
