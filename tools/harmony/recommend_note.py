"""
recommend_note tool — best melodic target note over one chord.

Pure computation: no LLM, no DB, no I/O.
Given a chord, optionally the chord that follows and the active key, returns
the best note, up to 3 alternatives, a 3-note micro line resolving into the
next chord, and why the note was chosen.
"""

from typing import Any

from core.harmony.keys import key_from_name
from core.harmony.recommend import recommend_note
from core.harmony.theory import get_theory
from tools.base import HarmonyTool, ToolParameter, ToolResult
from tools.harmony.serialize import recommendation_to_dict


class RecommendNote(HarmonyTool):
    """
    Recommend a target note for improvising or voice-leading over a chord.
    """

    @property
    def name(self) -> str:
        return "recommend_note"

    @property
    def description(self) -> str:
        return (
            "Recommend the strongest melodic target note over a chord, weighing "
            "chord tones, tasteful extensions, key membership and smooth resolution "
            "into the next chord. Returns the best note, alternatives and a 3-note "
            "line. Use when the user asks which note to land on over a chord or how "
            "to lead from one chord into the next."
        )

    @property
    def parameters(self) -> list[ToolParameter]:
        return [
            ToolParameter(
                name="chord",
                type=str,
                description="Current chord symbol, e.g. 'G7'.",
                required=True,
            ),
            ToolParameter(
                name="next_chord",
                type=str,
                description="Following chord symbol, e.g. 'Cmaj7'. Optional.",
                required=False,
                default="",
            ),
            ToolParameter(
                name="key",
                type=str,
                description="Active key, e.g. 'C major' or 'A minor'. Optional.",
                required=False,
                default="",
            ),
        ]

    def execute(self, **kwargs: Any) -> ToolResult:
        theory = get_theory()
        chord_raw: str = kwargs["chord"].strip()
        next_raw: str = (kwargs.get("next_chord") or "").strip()
        key_raw: str = (kwargs.get("key") or "").strip()

        chord = theory.chord(chord_raw)
        if chord.tonic is None:
            return ToolResult(
                success=False,
                error=f"Cannot parse chord {chord_raw!r}. Use e.g. 'G7', 'Am7', 'Cmaj7'.",
            )

        next_chord = None
        if next_raw:
            next_chord = theory.chord(next_raw)
            if next_chord.tonic is None:
                return ToolResult(success=False, error=f"Cannot parse next_chord {next_raw!r}.")

        key = None
        if key_raw:
            key = key_from_name(key_raw, theory)
            if key is None:
                return ToolResult(
                    success=False,
                    error=f"Cannot parse key {key_raw!r}. Use e.g. 'C major' or 'A minor'.",
                )

        recommendation = recommend_note(chord, next_chord, key, theory=theory)
        return ToolResult(
            success=True,
            data={
                "chord": chord.symbol,
                "next_chord": next_chord.symbol if next_chord is not None else None,
                "key": key.name if key is not None else None,
                **recommendation_to_dict(recommendation),
            },
            metadata={"candidate_count": len(recommendation.candidates)},
        )
