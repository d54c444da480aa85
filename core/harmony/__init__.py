"""
core/harmony/ — Pure harmonic analysis engine.

Exports:
    Types:      Chord, KeyCandidate, ScaleOption, ProgressionScaleFit,
                NoteCandidate, NoteRecommendation, ChordAnalysis,
                ProgressionAnalysis, Interval, ScaleLookup
    Theory:     TheoryProvider, TableTheory, get_theory
    Config:     AnalysisConfig, DEFAULT_CONFIG
    Scales:     match_scales, fit_progression_scales
    Keys:       detect_keys
    Functional: label_chord, summarize_cadences
    Recommend:  recommend_note
    Pipeline:   parse_progression, analyze_progression
"""

from core.harmony.analysis import analyze_progression, parse_progression
from core.harmony.config import DEFAULT_CONFIG, AnalysisConfig
from core.harmony.functional import OUTSIDE, label_chord, summarize_cadences
from core.harmony.keys import detect_keys
from core.harmony.qualities import is_dominant
from core.harmony.recommend import recommend_note
from core.harmony.scale_match import fit_progression_scales, match_scales
from core.harmony.theory import TableTheory, TheoryProvider, get_theory
from core.harmony.types import (
    Chord,
    ChordAnalysis,
    Interval,
    KeyCandidate,
    NoteCandidate,
    NoteRecommendation,
    ProgressionAnalysis,
    ProgressionScaleFit,
    ScaleLookup,
    ScaleOption,
)

__all__ = [
    # Types
    "Chord",
    "ChordAnalysis",
    "Interval",
    "KeyCandidate",
    "NoteCandidate",
    "NoteRecommendation",
    "ProgressionAnalysis",
    "ProgressionScaleFit",
    "ScaleLookup",
    "ScaleOption",
    # Theory
    "TheoryProvider",
    "TableTheory",
    "get_theory",
    # Config
    "AnalysisConfig",
    "DEFAULT_CONFIG",
    # Scales
    "match_scales",
    "fit_progression_scales",
    # Keys
    "detect_keys",
    # Functional
    "OUTSIDE",
    "label_chord",
    "summarize_cadences",
    "is_dominant",
    # Recommend
    "recommend_note",
    # Pipeline
    "parse_progression",
    "analyze_progression",
]
