"""
api/schemas/harmony.py — Pydantic request/response schemas for /harmony endpoints.

Covers:
    /harmony/analyze          — AnalyzeRequest / AnalyzeResponse
    /harmony/recommend        — RecommendRequest / RecommendationOut
    /harmony/scales/{symbol}  — ChordScalesResponse
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

# ---------------------------------------------------------------------------
# Shared sub-schemas
# ---------------------------------------------------------------------------


class KeyOut(BaseModel):
    """A ranked key center."""

    name: str
    root: str
    mode: str
    scale_notes: list[str]
    score: float = Field(..., ge=0.0)
    note_coverage: float = Field(..., ge=0.0, le=1.0)
    chord_coverage: float = Field(..., ge=0.0, le=1.0)


class ScaleOut(BaseModel):
    """A scale that contains every note of a chord."""

    name: str
    root: str
    type: str
    reason: str
    notes: list[str]


class ProgressionScaleOut(BaseModel):
    """A scale that fits the whole progression."""

    name: str
    root: str
    type: str
    score: float = Field(..., ge=0.0, le=1.0)
    reason: str


class NoteCandidateOut(BaseModel):
    note: str
    score: float


class RecommendationOut(BaseModel):
    """Best-note recommendation for one chord."""

    best_note: str
    alternatives: list[str] = Field(..., max_length=3)
    micro_line: list[str] = Field(..., min_length=3, max_length=3)
    reason: str
    candidates: list[NoteCandidateOut]


class ChordAnalysisOut(BaseModel):
    symbol: str
    tonic: str | None
    quality: str
    notes: list[str]
    label: str
    scales: list[ScaleOut]
    recommendation: RecommendationOut


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------


class AnalyzeRequest(BaseModel):
    """POST /harmony/analyze — full progression analysis."""

    chords: list[str] = Field(
        ...,
        min_length=1,
        max_length=64,
        description="Chord symbols in order, e.g. ['Am7', 'D7', 'Gmaj7']",
    )

    @field_validator("chords")
    @classmethod
    def strip_blank_tokens(cls, value: list[str]) -> list[str]:
        tokens = [token.strip() for token in value if token.strip()]
        if not tokens:
            raise ValueError("chords must contain at least one non-blank symbol")
        return tokens


class RecommendRequest(BaseModel):
    """POST /harmony/recommend — best note over one chord."""

    chord: str = Field(..., min_length=1, description="Current chord symbol, e.g. 'G7'")
    next_chord: str | None = Field(None, description="Following chord symbol, e.g. 'Cmaj7'")
    key: str | None = Field(None, description="Active key, e.g. 'C major'")


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------


class AnalyzeResponse(BaseModel):
    key: KeyOut | None
    keys: list[KeyOut]
    progression_label: str
    cadence_summary: str
    progression_scales: list[ProgressionScaleOut]
    chords: list[ChordAnalysisOut]
    skipped_tokens: list[str] = Field(default_factory=list)


class ChordScalesResponse(BaseModel):
    chord: str
    notes: list[str]
    scales: list[ScaleOut]
