"""
analyze_progression tool — full harmonic guidance for a chord progression.

Pure computation: no LLM, no DB, no I/O.
Given chord symbols ("Am7 D7 Gmaj7"), returns:
  - Ranked key centers with scores and coverage
  - Roman-numeral label per chord in the top key
  - Cadence summary
  - Scale options per chord
  - Best-note recommendation and micro line per chord
  - Scales that fit the whole progression
"""

from typing import Any

from core.harmony.analysis import analyze_progression, parse_progression
from core.harmony.theory import get_theory
from tools.base import HarmonyTool, ToolParameter, ToolResult
from tools.harmony.serialize import analysis_to_dict

MAX_CHORDS = 64


class AnalyzeProgression(HarmonyTool):
    """
    Analyze a chord progression: key, functions, cadences, scales, target notes.

    Unparseable chord symbols are skipped and reported in metadata.
    100% deterministic — same chords, same answer.
    """

    @property
    def name(self) -> str:
        return "analyze_progression"

    @property
    def description(self) -> str:
        return (
            "Analyze a chord progression given as space-separated chord symbols "
            "(e.g. 'Am7 D7 Gmaj7'). Returns the most probable keys, a roman-numeral "
            "label for each chord, detected cadences, the scales that fit each chord "
            "and the whole progression, and the best melodic target note per chord "
            "with a 3-note voice-leading line. Use when the user asks what key a "
            "progression is in, what to solo over it, or which notes to target."
        )

    @property
    def parameters(self) -> list[ToolParameter]:
        return [
            ToolParameter(
                name="chords",
                type=str,
                description="Space-separated chord symbols, e.g. 'Am7 D7 Gmaj7'.",
                required=True,
            ),
        ]

    def execute(self, **kwargs: Any) -> ToolResult:
        raw: str = kwargs["chords"].strip()
        tokens = raw.split()
        if not tokens:
            return ToolResult(success=False, error="chords must contain at least one chord symbol")
        if len(tokens) > MAX_CHORDS:
            return ToolResult(
                success=False,
                error=f"At most {MAX_CHORDS} chords per analysis, got {len(tokens)}",
            )

        progression = parse_progression(tokens)
        if not progression:
            return ToolResult(
                success=False,
                error=(
                    f"No valid chords found in {raw!r}. "
                    "Use symbols like 'Am', 'C', 'G7', 'Gmaj7'."
                ),
            )

        analysis = analyze_progression(progression)
        theory = get_theory()
        skipped = [t for t in tokens if theory.chord(t).tonic is None]

        return ToolResult(
            success=True,
            data=analysis_to_dict(analysis),
            metadata={
                "chord_count": len(progression),
                "skipped_tokens": skipped,
                "key_found": analysis.key is not None,
            },
        )
