"""
Configuration dataclasses for the harmonic analysis engine.

These immutable config objects decouple tuning parameters from function
signatures, making it easy to define standard configurations and reuse them
across analyses. No config files: the default is a module constant.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class AnalysisConfig:
    """
    Tuning parameters for key detection and result sizes.

    Attributes:
        max_key_candidates: Number of ranked key centers retained. Defaults to 4.
        note_coverage_weight: Weight of the fraction of progression notes that
            lie in a candidate key. Defaults to 0.55.
        chord_coverage_weight: Weight of the fraction of chords entirely inside
            a candidate key. Defaults to 0.35.
        tonic_bonus: Added when the first chord's tonic is the key root.
            Defaults to 0.08.
        cadence_bonus_cap: Upper bound of the summed cadence bonuses.
            Defaults to 0.09.
        whole_song_threshold: Minimum chord-fit fraction for a scale to be
            reported as fitting the whole progression. Defaults to 0.8.
        max_progression_scales: Whole-progression scales reported. Defaults to 5.
        max_chord_scales: Scale options reported per chord. Defaults to 7.
        max_alternatives: Runner-up notes per recommendation. Defaults to 3.

    Example:
        >>> config = AnalysisConfig(max_key_candidates=2)
        >>> keys = detect_keys(progression, config=config)
    """

    max_key_candidates: int = 4
    note_coverage_weight: float = 0.55
    chord_coverage_weight: float = 0.35
    tonic_bonus: float = 0.08
    cadence_bonus_cap: float = 0.09
    whole_song_threshold: float = 0.8
    max_progression_scales: int = 5
    max_chord_scales: int = 7
    max_alternatives: int = 3

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        if self.max_key_candidates <= 0:
            raise ValueError(f"max_key_candidates must be positive, got {self.max_key_candidates}")
        for name in ("note_coverage_weight", "chord_coverage_weight", "tonic_bonus", "cadence_bonus_cap"):
            value = getattr(self, name)
            if value < 0:
                raise ValueError(f"{name} must be non-negative, got {value}")
        if not (0.0 <= self.whole_song_threshold <= 1.0):
            raise ValueError(
                f"whole_song_threshold must be in [0, 1], got {self.whole_song_threshold}"
            )
        if self.max_progression_scales <= 0:
            raise ValueError(
                f"max_progression_scales must be positive, got {self.max_progression_scales}"
            )
        if self.max_chord_scales <= 0:
            raise ValueError(f"max_chord_scales must be positive, got {self.max_chord_scales}")
        if not (0 <= self.max_alternatives <= 3):
            raise ValueError(f"max_alternatives must be in [0, 3], got {self.max_alternatives}")


# Pre-defined configurations

DEFAULT_CONFIG = AnalysisConfig()
"""Default configuration: the reference weights, 4 keys, 3 alternatives."""
