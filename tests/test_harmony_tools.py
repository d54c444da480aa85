"""
Tests for tools/harmony — analyze_progression, recommend_note, suggest_chord_scales.
"""

from tools.harmony.analyze_progression import MAX_CHORDS, AnalyzeProgression
from tools.harmony.recommend_note import RecommendNote
from tools.harmony.suggest_chord_scales import SuggestChordScales


class TestAnalyzeProgressionTool:
    def test_properties(self):
        tool = AnalyzeProgression()
        assert tool.name == "analyze_progression"
        assert [p.name for p in tool.parameters] == ["chords"]

    def test_two_five_one(self):
        result = AnalyzeProgression()(chords="Am7 D7 Gmaj7")
        assert result.success is True
        assert result.data["key"]["name"] == "G major"
        assert result.data["key"]["score"] == 0.945
        assert result.data["progression_label"] == "ii7 - V7 - IΔ"
        assert [c["label"] for c in result.data["chords"]] == ["ii7", "V7", "IΔ"]
        assert [c["quality"] for c in result.data["chords"]] == ["m7", "7", "maj7"]
        assert result.metadata == {"chord_count": 3, "skipped_tokens": [], "key_found": True}

    def test_skipped_tokens_reported(self):
        result = AnalyzeProgression()(chords="Am7 xyz D7")
        assert result.success is True
        assert result.metadata["skipped_tokens"] == ["xyz"]
        assert result.metadata["chord_count"] == 2

    def test_blank_input(self):
        result = AnalyzeProgression()(chords="   ")
        assert result.success is False
        assert "at least one chord" in result.error

    def test_no_valid_chords(self):
        result = AnalyzeProgression()(chords="xyz foo")
        assert result.success is False
        assert "No valid chords" in result.error

    def test_too_many_chords(self):
        result = AnalyzeProgression()(chords=" ".join(["C"] * (MAX_CHORDS + 1)))
        assert result.success is False
        assert str(MAX_CHORDS) in result.error

    def test_wrong_type(self):
        result = AnalyzeProgression()(chords=123)
        assert result.success is False
        assert "must be str" in result.error

    def test_missing_parameter(self):
        result = AnalyzeProgression()()
        assert result.success is False
        assert "Required parameter 'chords'" in result.error


class TestRecommendNoteTool:
    def test_dominant_into_tonic(self):
        result = RecommendNote()(chord="G7", next_chord="Cmaj")
        assert result.success is True
        assert result.data["best_note"] == "G"
        assert result.data["micro_line"] == ["G", "G", "C"]
        assert result.data["alternatives"] == ["B", "F", "C"]
        assert result.data["next_chord"] == "Cmaj"
        assert result.data["key"] is None

    def test_chord_only(self):
        result = RecommendNote()(chord="Cmaj7")
        assert result.success is True
        assert result.data["best_note"] == "C"
        assert result.data["next_chord"] is None

    def test_with_key(self):
        result = RecommendNote()(chord="G7", next_chord="Cmaj", key="C major")
        assert result.success is True
        assert result.data["key"] == "C major"
        assert "inside C major" in result.data["reason"]

    def test_bad_chord(self):
        result = RecommendNote()(chord="??")
        assert result.success is False
        assert "Cannot parse chord" in result.error

    def test_bad_next_chord(self):
        result = RecommendNote()(chord="G7", next_chord="zz")
        assert result.success is False
        assert "next_chord" in result.error

    def test_bad_key(self):
        result = RecommendNote()(chord="G7", key="C lydian")
        assert result.success is False
        assert "Cannot parse key" in result.error


class TestSuggestChordScalesTool:
    def test_dominant(self):
        result = SuggestChordScales()(chord="G7")
        assert result.success is True
        assert [s["name"] for s in result.data["scales"]] == [
            "G mixolydian",
            "G bebop",
            "G lydian dominant",
        ]
        assert result.data["notes"] == ["G", "B", "D", "F"]
        assert result.metadata == {"total_matches": 3}

    def test_limit(self):
        result = SuggestChordScales()(chord="Am7", limit=2)
        assert result.success is True
        assert len(result.data["scales"]) == 2
        assert result.metadata["total_matches"] == 5

    def test_limit_out_of_range(self):
        for limit in (0, 21):
            result = SuggestChordScales()(chord="Am7", limit=limit)
            assert result.success is False
            assert "limit" in result.error

    def test_limit_wrong_type(self):
        result = SuggestChordScales()(chord="Am7", limit="3")
        assert result.success is False
        assert "must be int" in result.error

    def test_bad_chord(self):
        result = SuggestChordScales()(chord="nope")
        assert result.success is False
