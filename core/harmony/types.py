"""
core/harmony/types.py — Frozen value objects for the harmonic analysis engine.

All types are immutable frozen dataclasses — safe to hash, cache, and use as
dict keys. No I/O, no side effects, no external dependencies beyond stdlib.
Chord.quality reads the symbol text the same way the quality predicates do.

Types:
    Chord               — a parsed chord symbol: symbol + tonic + pitch classes
    ScaleLookup         — result of resolving "<root> <type>" in a theory provider
    Interval            — a named semitone distance between two pitch classes
    KeyCandidate        — a scored (root, major/minor) key center
    ScaleOption         — a scale that fully contains one chord
    ProgressionScaleFit — a scale that fits the whole progression
    NoteCandidate       — a scored target note for one chord
    NoteRecommendation  — the best-note recommendation for one chord
    ChordAnalysis       — per-chord slice of a ProgressionAnalysis
    ProgressionAnalysis — full analysis report for a progression
"""

from __future__ import annotations

from dataclasses import dataclass, field

from core.harmony.qualities import quality_text

KEY_MODES: frozenset[str] = frozenset({"major", "minor"})

# ---------------------------------------------------------------------------
# Chord
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Chord:
    """A chord as produced by the chord-symbol parser.

    Attributes:
        symbol: Chord symbol as typed, e.g. "Am7", "G7", "Cmaj7"
        tonic:  Root pitch class, e.g. "A". None for unparseable/rootless chords.
        notes:  Ordered pitch classes, root first, e.g. ("A", "C", "E", "G")
    """

    symbol: str
    tonic: str | None = None
    notes: tuple[str, ...] = ()

    @property
    def quality(self) -> str:
        """Symbol text after the root, e.g. 'm7' for 'Am7'."""
        return quality_text(self.symbol)


# ---------------------------------------------------------------------------
# ScaleLookup
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ScaleLookup:
    """A resolved scale, or an empty result for an unknown name.

    Attributes:
        name:  Requested name, e.g. "G mixolydian"
        empty: True when the provider does not know the root or scale type
        notes: Ordered pitch classes from the root (empty when ``empty``)
    """

    name: str
    empty: bool = True
    notes: tuple[str, ...] = ()


# ---------------------------------------------------------------------------
# Interval
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Interval:
    """A named musical interval between two pitch classes.

    Examples:
        Interval(semitones=0, name="perfect unison", short="1P")
        Interval(semitones=7, name="perfect fifth",  short="5P")
    """

    semitones: int  # 0–11, ascending from the first note
    name: str  # human-readable label, e.g. "major second"
    short: str  # compact label, e.g. "2M"

    def __post_init__(self) -> None:
        if not (0 <= self.semitones <= 11):
            raise ValueError(f"Interval semitones must be in [0, 11], got {self.semitones}")
        if not self.name:
            raise ValueError("Interval name must not be empty")


# ---------------------------------------------------------------------------
# KeyCandidate
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class KeyCandidate:
    """A key center scored against a progression.

    Attributes:
        root:           Key root, e.g. "G"
        mode:           "major" or "minor"
        scale_notes:    The 7 pitch classes of the key
        score:          Weighted total, roughly in [0, 1.5]
        note_coverage:  Fraction of progression notes inside the key
        chord_coverage: Fraction of chords entirely inside the key
    """

    root: str
    mode: str
    scale_notes: tuple[str, ...]
    score: float
    note_coverage: float
    chord_coverage: float

    @property
    def name(self) -> str:
        """Human-readable label, e.g. 'G major'."""
        return f"{self.root} {self.mode}"

    def __post_init__(self) -> None:
        if not self.root:
            raise ValueError("KeyCandidate.root must not be empty")
        if self.mode not in KEY_MODES:
            raise ValueError(f"KeyCandidate.mode must be one of {sorted(KEY_MODES)}, got {self.mode!r}")
        if not (0.0 <= self.note_coverage <= 1.0):
            raise ValueError(f"note_coverage must be in [0, 1], got {self.note_coverage}")
        if not (0.0 <= self.chord_coverage <= 1.0):
            raise ValueError(f"chord_coverage must be in [0, 1], got {self.chord_coverage}")


# ---------------------------------------------------------------------------
# Scale options
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ScaleOption:
    """A scale that contains every note of a chord.

    Attributes:
        root:   Scale root (the chord tonic)
        type:   Scale type, e.g. "mixolydian"
        name:   Full name, e.g. "G mixolydian"
        reason: Flavor text describing how the scale sounds
        notes:  Resolved pitch classes of the scale
    """

    root: str
    type: str
    name: str
    reason: str
    notes: tuple[str, ...] = ()


@dataclass(frozen=True)
class ProgressionScaleFit:
    """A scale containing every note of a progression.

    ``score`` is the fraction of chords whose notes all lie in the scale.
    """

    root: str
    type: str
    name: str
    score: float
    reason: str


# ---------------------------------------------------------------------------
# Note recommendation
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class NoteCandidate:
    """A candidate target note and its additive score."""

    note: str
    score: float


@dataclass(frozen=True)
class NoteRecommendation:
    """The melodic recommendation for one chord.

    Attributes:
        best_note:    Highest-scoring note (falls back to tonic, then symbol)
        alternatives: Up to 3 runner-up notes
        micro_line:   3-note phrase: best note, its target in the next chord,
                      then the next chord's tonic
        reason:       Comma-joined explanation, e.g. "chord tone, inside G major"
        candidates:   Every scored candidate, ranked
    """

    best_note: str
    alternatives: tuple[str, ...]
    micro_line: tuple[str, str, str]
    reason: str
    candidates: tuple[NoteCandidate, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if len(self.alternatives) > 3:
            raise ValueError(f"At most 3 alternatives allowed, got {len(self.alternatives)}")
        if len(self.micro_line) != 3:
            raise ValueError(f"micro_line must have 3 notes, got {len(self.micro_line)}")


# ---------------------------------------------------------------------------
# Progression analysis
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ChordAnalysis:
    """Everything computed for one chord of a progression."""

    chord: Chord
    label: str
    scales: tuple[ScaleOption, ...]
    recommendation: NoteRecommendation


@dataclass(frozen=True)
class ProgressionAnalysis:
    """The full report produced by analyze_progression().

    Attributes:
        chords:             The analyzed chords, in order
        keys:               Ranked key candidates (at most 4)
        key:                Chosen key (the top candidate), None if none found
        cadence_summary:    Human-readable cadence description
        progression_scales: Scales that fit the whole progression
        per_chord:          One ChordAnalysis per chord
    """

    chords: tuple[Chord, ...]
    keys: tuple[KeyCandidate, ...]
    key: KeyCandidate | None
    cadence_summary: str
    progression_scales: tuple[ProgressionScaleFit, ...] = ()
    per_chord: tuple[ChordAnalysis, ...] = ()

    @property
    def progression_label(self) -> str:
        """Roman numerals joined, e.g. 'ii7 - V7 - IΔ'."""
        return " - ".join(c.label for c in self.per_chord)
