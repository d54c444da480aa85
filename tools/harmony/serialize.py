"""
JSON-friendly views of core/harmony results.

Shared by the harmony tools and the /harmony HTTP routes so both surfaces
return the same shapes. Scores are rounded to 3 decimals for display.
"""

from typing import Any

from core.harmony.types import (
    ChordAnalysis,
    KeyCandidate,
    NoteRecommendation,
    ProgressionAnalysis,
    ProgressionScaleFit,
    ScaleOption,
)


def key_to_dict(key: KeyCandidate) -> dict[str, Any]:
    return {
        "name": key.name,
        "root": key.root,
        "mode": key.mode,
        "scale_notes": list(key.scale_notes),
        "score": round(key.score, 3),
        "note_coverage": round(key.note_coverage, 3),
        "chord_coverage": round(key.chord_coverage, 3),
    }


def scale_to_dict(option: ScaleOption) -> dict[str, Any]:
    return {
        "name": option.name,
        "root": option.root,
        "type": option.type,
        "reason": option.reason,
        "notes": list(option.notes),
    }


def progression_scale_to_dict(fit: ProgressionScaleFit) -> dict[str, Any]:
    return {
        "name": fit.name,
        "root": fit.root,
        "type": fit.type,
        "score": round(fit.score, 3),
        "reason": fit.reason,
    }


def recommendation_to_dict(rec: NoteRecommendation) -> dict[str, Any]:
    return {
        "best_note": rec.best_note,
        "alternatives": list(rec.alternatives),
        "micro_line": list(rec.micro_line),
        "reason": rec.reason,
        "candidates": [{"note": c.note, "score": round(c.score, 3)} for c in rec.candidates],
    }


def chord_analysis_to_dict(entry: ChordAnalysis) -> dict[str, Any]:
    return {
        "symbol": entry.chord.symbol,
        "tonic": entry.chord.tonic,
        "quality": entry.chord.quality,
        "notes": list(entry.chord.notes),
        "label": entry.label,
        "scales": [scale_to_dict(s) for s in entry.scales],
        "recommendation": recommendation_to_dict(entry.recommendation),
    }


def analysis_to_dict(analysis: ProgressionAnalysis) -> dict[str, Any]:
    """Full analysis report as nested dicts and lists."""
    return {
        "key": key_to_dict(analysis.key) if analysis.key is not None else None,
        "keys": [key_to_dict(k) for k in analysis.keys],
        "progression_label": analysis.progression_label,
        "cadence_summary": analysis.cadence_summary,
        "progression_scales": [progression_scale_to_dict(f) for f in analysis.progression_scales],
        "chords": [chord_analysis_to_dict(c) for c in analysis.per_chord],
    }
