"""
suggest_chord_scales tool — scales that fit a single chord.

Pure computation. Returns every scale that contains all of the chord's notes,
most common first, with a short description of each scale's flavor.
"""

from typing import Any

from core.harmony.scale_match import match_scales
from core.harmony.theory import get_theory
from tools.base import HarmonyTool, ToolParameter, ToolResult
from tools.harmony.serialize import scale_to_dict

DEFAULT_LIMIT = 7


class SuggestChordScales(HarmonyTool):
    """
    Suggest scales to play over one chord.
    """

    @property
    def name(self) -> str:
        return "suggest_chord_scales"

    @property
    def description(self) -> str:
        return (
            "List the scales that contain every note of a chord (e.g. 'G7' → "
            "G mixolydian, G bebop, G lydian dominant), most common first, each "
            "with a one-line description of its sound. Use when the user asks "
            "what scale to solo with over a specific chord."
        )

    @property
    def parameters(self) -> list[ToolParameter]:
        return [
            ToolParameter(
                name="chord",
                type=str,
                description="Chord symbol, e.g. 'Dm7', 'G7', 'Bm7b5'.",
                required=True,
            ),
            ToolParameter(
                name="limit",
                type=int,
                description=f"Maximum number of scales to return (1–20). Default {DEFAULT_LIMIT}.",
                required=False,
                default=DEFAULT_LIMIT,
            ),
        ]

    def execute(self, **kwargs: Any) -> ToolResult:
        chord_raw: str = kwargs["chord"].strip()
        limit: int = kwargs.get("limit", DEFAULT_LIMIT)
        if limit is None:
            limit = DEFAULT_LIMIT
        if not (1 <= limit <= 20):
            return ToolResult(success=False, error=f"limit must be between 1 and 20, got {limit}")

        chord = get_theory().chord(chord_raw)
        if chord.tonic is None:
            return ToolResult(
                success=False,
                error=f"Cannot parse chord {chord_raw!r}. Use e.g. 'G7', 'Am7', 'Cmaj7'.",
            )

        options = match_scales(chord)
        return ToolResult(
            success=True,
            data={
                "chord": chord.symbol,
                "notes": list(chord.notes),
                "scales": [scale_to_dict(o) for o in options[:limit]],
            },
            metadata={"total_matches": len(options)},
        )
