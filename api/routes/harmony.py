"""
api/routes/harmony.py — Harmonic analysis endpoints.

Endpoints
=========
    POST /harmony/analyze           — Keys, labels, cadences, scales and target
                                      notes for a progression
    POST /harmony/recommend         — Best note over one chord (optional next
                                      chord and key)
    GET  /harmony/scales/{symbol}   — Scales that contain a chord

Thin HTTP controllers — all logic lives in core/harmony.

Error codes
===========
    422  — No parseable chord, unparseable chord/next chord/key
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException

from api.schemas.harmony import (
    AnalyzeRequest,
    AnalyzeResponse,
    ChordScalesResponse,
    RecommendationOut,
    RecommendRequest,
)
from core.harmony.analysis import analyze_progression, parse_progression
from core.harmony.keys import key_from_name
from core.harmony.recommend import recommend_note
from core.harmony.scale_match import match_scales
from core.harmony.theory import get_theory
from tools.harmony.serialize import analysis_to_dict, recommendation_to_dict, scale_to_dict

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/harmony", tags=["harmony"])


@router.post("/analyze", response_model=AnalyzeResponse)
def analyze(request: AnalyzeRequest) -> AnalyzeResponse:
    """Analyze a chord progression.

    Unparseable symbols are dropped and listed in ``skipped_tokens``.
    """
    theory = get_theory()
    progression = parse_progression(request.chords, theory)
    if not progression:
        raise HTTPException(
            status_code=422,
            detail="No valid chords found. Use symbols like 'Am', 'C', 'G7', 'Gmaj7'.",
        )

    skipped = [token for token in request.chords if theory.chord(token).tonic is None]
    if skipped:
        logger.warning("Skipped unparseable chord tokens: %s", skipped)

    analysis = analyze_progression(progression, theory=theory)
    return AnalyzeResponse(**analysis_to_dict(analysis), skipped_tokens=skipped)


@router.post("/recommend", response_model=RecommendationOut)
def recommend(request: RecommendRequest) -> RecommendationOut:
    """Recommend the best target note over a chord."""
    theory = get_theory()
    chord = theory.chord(request.chord)
    if chord.tonic is None:
        raise HTTPException(status_code=422, detail=f"Cannot parse chord {request.chord!r}")

    next_chord = None
    if request.next_chord:
        next_chord = theory.chord(request.next_chord)
        if next_chord.tonic is None:
            raise HTTPException(
                status_code=422, detail=f"Cannot parse next_chord {request.next_chord!r}"
            )

    key = None
    if request.key:
        key = key_from_name(request.key, theory)
        if key is None:
            raise HTTPException(status_code=422, detail=f"Cannot parse key {request.key!r}")

    recommendation = recommend_note(chord, next_chord, key, theory=theory)
    return RecommendationOut(**recommendation_to_dict(recommendation))


@router.get("/scales/{symbol}", response_model=ChordScalesResponse)
def chord_scales(symbol: str) -> ChordScalesResponse:
    """List the scales that contain every note of a chord."""
    chord = get_theory().chord(symbol)
    if chord.tonic is None:
        raise HTTPException(status_code=422, detail=f"Cannot parse chord {symbol!r}")
    return ChordScalesResponse(
        chord=chord.symbol,
        notes=list(chord.notes),
        scales=[scale_to_dict(option) for option in match_scales(chord)],
    )
