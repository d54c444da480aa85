"""
Tests for core/harmony/analysis.py — parsing and the full analysis pipeline.
"""

from core.harmony import analyze_progression, parse_progression
from core.harmony.config import AnalysisConfig
from core.harmony.functional import NO_KEY_SUMMARY, OUTSIDE
from core.harmony.types import Chord


class TestParseProgression:
    def test_string_input(self):
        assert [c.symbol for c in parse_progression("Am7 D7 Gmaj7")] == ["Am7", "D7", "Gmaj7"]

    def test_list_input(self):
        assert [c.symbol for c in parse_progression(["Am7", " ", "D7"])] == ["Am7", "D7"]

    def test_drops_unparseable(self):
        assert [c.symbol for c in parse_progression("Am7 xyz D7 H7")] == ["Am7", "D7"]

    def test_empty(self):
        assert parse_progression("") == ()
        assert parse_progression([]) == ()


class TestAnalyzeProgression:
    def test_two_five_one(self):
        analysis = analyze_progression(parse_progression("Am7 D7 Gmaj7"))
        assert analysis.key is not None
        assert analysis.key.name == "G major"
        assert analysis.keys[0] == analysis.key
        assert analysis.progression_label == "ii7 - V7 - IΔ"
        assert analysis.cadence_summary == "ii→V motion; authentic V→I cadence"

    def test_per_chord_entries(self):
        analysis = analyze_progression(parse_progression("Am7 D7 Gmaj7"))
        assert [entry.chord.symbol for entry in analysis.per_chord] == ["Am7", "D7", "Gmaj7"]
        assert [entry.label for entry in analysis.per_chord] == ["ii7", "V7", "IΔ"]
        first = analysis.per_chord[0]
        assert first.scales[0].name == "A aeolian"

    def test_micro_lines_lead_into_next_chord(self):
        analysis = analyze_progression(parse_progression("Am7 D7 Gmaj7"))
        assert analysis.per_chord[0].recommendation.micro_line[2] == "D"
        assert analysis.per_chord[1].recommendation.micro_line[2] == "G"
        last = analysis.per_chord[2].recommendation
        assert last.micro_line[2] == last.best_note

    def test_progression_scales(self):
        analysis = analyze_progression(parse_progression("Am7 D7 Gmaj7"))
        names = [fit.name for fit in analysis.progression_scales]
        assert names[0] == "A dorian"
        assert "G major" in names

    def test_chord_scale_limit(self):
        config = AnalysisConfig(max_chord_scales=2)
        analysis = analyze_progression(parse_progression("Am7"), config=config)
        assert len(analysis.per_chord[0].scales) == 2

    def test_empty_progression(self):
        analysis = analyze_progression(())
        assert analysis.keys == ()
        assert analysis.key is None
        assert analysis.cadence_summary == NO_KEY_SUMMARY
        assert analysis.per_chord == ()
        assert analysis.progression_label == ""

    def test_rootless_chords_labelled_outside(self):
        analysis = analyze_progression((Chord(symbol="N.C."),))
        assert analysis.key is None
        assert analysis.per_chord[0].label == OUTSIDE
        assert analysis.per_chord[0].recommendation.best_note == "N.C."

    def test_deterministic(self):
        chords = parse_progression("Bm7b5 E7alt Am7 D9 Gmaj7")
        assert analyze_progression(chords) == analyze_progression(chords)
