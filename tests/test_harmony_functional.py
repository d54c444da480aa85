"""
Tests for core/harmony/functional.py — roman numerals and cadences.
"""

import pytest

from core.harmony.functional import (
    CADENCE_RULES,
    NO_CADENCE_SUMMARY,
    NO_KEY_SUMMARY,
    OUTSIDE,
    cadence_bonus,
    find_cadences,
    label_chord,
    label_progression,
    summarize_cadences,
)
from core.harmony.keys import key_from_name
from core.harmony.types import Chord

G_MAJOR = ("G", "A", "B", "C", "D", "E", "F#")
C_MAJOR = ("C", "D", "E", "F", "G", "A", "B")
A_MINOR = ("A", "B", "C", "D", "E", "F", "G")


class TestLabelChord:
    def test_two_five_one(self, progression):
        assert label_progression(progression("Am7 D7 Gmaj7"), G_MAJOR, "G") == ["ii7", "V7", "IΔ"]

    @pytest.mark.parametrize(
        "symbol, expected",
        [
            ("C", "I"),
            ("Dm", "ii"),
            ("Em", "iii"),
            ("F", "IV"),
            ("G", "V"),
            ("Am", "vi"),
            ("Fmaj7", "IVΔ"),
            ("Dm7", "ii7"),
            ("G7", "V7"),
            ("E7", "III7"),
        ],
    )
    def test_degrees_in_c_major(self, chord, symbol: str, expected: str):
        assert label_chord(chord(symbol), C_MAJOR, "C") == expected

    def test_diminished_is_lowercase_with_circle(self, chord):
        assert label_chord(chord("Bdim"), C_MAJOR) == "vii°"
        assert label_chord(chord("Bm7b5"), C_MAJOR) == "vii°"

    def test_dominant_in_minor_key(self, chord):
        assert label_chord(chord("E7"), A_MINOR, "A") == "V7"

    def test_minor_tonic(self, chord):
        assert label_chord(chord("Am7"), A_MINOR, "A") == "i7"

    def test_tonic_outside_key(self, chord):
        assert label_chord(chord("C#m"), C_MAJOR) == OUTSIDE

    def test_rootless_chord(self):
        assert label_chord(Chord(symbol="N.C."), C_MAJOR) == OUTSIDE

    def test_empty_key(self, chord):
        assert label_chord(chord("C"), ()) == OUTSIDE

    def test_every_chord_gets_a_label(self, progression):
        for c in progression("C C# D D# E F F# G G# A A# B Bm7b5 Cmaj7 F#dim7"):
            label = label_chord(c, C_MAJOR)
            assert label
            assert (label != OUTSIDE) == (c.tonic in C_MAJOR), c.symbol


class TestCadences:
    def test_rules_in_order(self):
        assert [r.name for r in CADENCE_RULES] == ["ii-V", "V-I", "IV-V"]

    def test_find_cadences(self):
        assert [r.name for r in find_cadences(["ii7", "V7", "IΔ"])] == ["ii-V", "V-I"]

    def test_vi_is_not_tonic(self):
        assert find_cadences(["V", "vi"]) == []

    @pytest.mark.parametrize("second", ["IV", "IVΔ", "III7", "II"])
    def test_upper_case_i_prefix_counts_as_tonic(self, second: str):
        assert [r.name for r in find_cadences(["V", second])] == ["V-I"]

    def test_iii_is_not_supertonic(self):
        assert find_cadences(["iii", "V"]) == []

    def test_minor_dominant_counts(self):
        assert [r.name for r in find_cadences(["v7", "I"])] == ["V-I"]

    def test_bonus(self):
        assert cadence_bonus(["ii7", "V7", "IΔ"], cap=0.09) == pytest.approx(0.045)

    def test_bonus_cap(self):
        labels = ["ii7", "V7", "I"] * 3
        assert cadence_bonus(labels, cap=0.09) == pytest.approx(0.09)


class TestSummarizeCadences:
    def test_two_five_one(self, progression):
        summary = summarize_cadences(progression("Am7 D7 Gmaj7"), key_from_name("G major"))
        assert summary == "ii→V motion; authentic V→I cadence"

    def test_phrases_deduplicated(self, progression):
        summary = summarize_cadences(progression("Dm7 G7 C Dm7 G7 C"), key_from_name("C major"))
        assert summary == "ii→V motion; authentic V→I cadence"

    def test_pre_dominant(self, progression):
        summary = summarize_cadences(progression("F G C"), key_from_name("C major"))
        assert summary == "pre-dominant IV→V setup; authentic V→I cadence"

    def test_dominant_into_subdominant(self, progression):
        summary = summarize_cadences(progression("G F"), key_from_name("C major"))
        assert summary == "authentic V→I cadence"

    def test_no_cadence(self, progression):
        summary = summarize_cadences(progression("C Am F C"), key_from_name("C major"))
        assert summary == NO_CADENCE_SUMMARY

    def test_no_key(self, progression):
        assert summarize_cadences(progression("C F G"), None) == NO_KEY_SUMMARY
