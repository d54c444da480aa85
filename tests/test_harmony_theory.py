"""
Tests for core/harmony/theory.py — the catalog-backed theory provider.

Validates:
    - load_catalog: required sections, missing file
    - chroma: naturals, sharps, flats, unknown text
    - scale / major_key / minor_key: spelled notes, lookup misses
    - interval / interval_between: semitone-class naming
    - chord: symbol parsing, flat roots, unparseable tokens
    - TableTheory satisfies the TheoryProvider protocol
"""

from pathlib import Path

import pytest

from core.harmony.theory import NOTE_NAMES, TableTheory, TheoryProvider, get_theory, load_catalog
from core.harmony.types import Interval

# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------


class TestLoadCatalog:
    def test_has_scales_and_chords(self):
        catalog = load_catalog()
        assert "scales" in catalog
        assert "chords" in catalog

    def test_scale_type_with_hash_is_a_full_key(self):
        scales = load_catalog()["scales"]
        assert "locrian #2" in scales
        assert scales["locrian #2"]["formula"] == [0, 2, 3, 5, 6, 8, 10]

    def test_locrian_sharp_two_resolves(self):
        lookup = TableTheory(load_catalog()).scale("B locrian #2")
        assert not lookup.empty
        assert lookup.notes == ("B", "C#", "D", "E", "F", "G", "A")

    def test_every_catalog_type_resolves(self, theory):
        for scale_type in theory.scale_types:
            assert not theory.scale(f"C {scale_type}").empty, scale_type

    def test_every_scale_has_formula_and_flavor(self):
        for scale_type, entry in load_catalog()["scales"].items():
            assert entry["formula"][0] == 0, scale_type
            assert entry["flavor"], scale_type

    def test_missing_file_raises(self, tmp_path: Path):
        with pytest.raises(ValueError, match="not found"):
            load_catalog(tmp_path / "nope.yaml")

    def test_missing_section_raises(self, tmp_path: Path):
        path = tmp_path / "catalog.yaml"
        path.write_text("scales:\n  major:\n    formula: [0, 2, 4]\n", encoding="utf-8")
        with pytest.raises(ValueError, match="chords"):
            load_catalog(path)

    def test_default_provider_is_shared(self):
        assert get_theory() is get_theory()

    def test_satisfies_protocol(self, theory):
        assert isinstance(theory, TheoryProvider)


# ---------------------------------------------------------------------------
# chroma
# ---------------------------------------------------------------------------


class TestChroma:
    def test_naturals(self, theory):
        assert theory.chroma("C") == 0
        assert theory.chroma("A") == 9
        assert theory.chroma("B") == 11

    def test_sharp_and_flat_agree(self, theory):
        assert theory.chroma("Bb") == theory.chroma("A#") == 10
        assert theory.chroma("Db") == theory.chroma("C#") == 1

    def test_wraps_around_octave(self, theory):
        assert theory.chroma("B#") == 0
        assert theory.chroma("Cb") == 11

    def test_lowercase_letter_accepted(self, theory):
        assert theory.chroma("g") == 7

    def test_unknown_returns_none(self, theory):
        assert theory.chroma("H") is None
        assert theory.chroma("") is None
        assert theory.chroma("C major") is None

    def test_note_names_cover_all_chromas(self, theory):
        assert [theory.chroma(n) for n in NOTE_NAMES] == list(range(12))


# ---------------------------------------------------------------------------
# scale / key lookup
# ---------------------------------------------------------------------------


class TestScaleLookup:
    def test_g_mixolydian(self, theory):
        lookup = theory.scale("G mixolydian")
        assert not lookup.empty
        assert lookup.notes == ("G", "A", "B", "C", "D", "E", "F")

    def test_multi_word_type(self, theory):
        lookup = theory.scale("A minor pentatonic")
        assert lookup.notes == ("A", "C", "D", "E", "G")

    def test_flat_root_spelled_with_sharps(self, theory):
        assert theory.scale("Bb major").notes == ("A#", "C", "D", "D#", "F", "G", "A")

    def test_unknown_type_is_empty(self, theory):
        lookup = theory.scale("G nonsense")
        assert lookup.empty
        assert lookup.notes == ()

    def test_unknown_root_is_empty(self, theory):
        assert theory.scale("H major").empty

    def test_major_key(self, theory):
        assert theory.major_key("G") == ("G", "A", "B", "C", "D", "E", "F#")

    def test_minor_key_is_natural_minor(self, theory):
        assert theory.minor_key("A") == ("A", "B", "C", "D", "E", "F", "G")

    def test_key_lookup_miss_is_empty_tuple(self, theory):
        assert theory.major_key("X") == ()
        assert theory.minor_key("") == ()

    def test_flavor_fallback(self, theory):
        assert "Blues-rock" in theory.flavor("mixolydian")
        assert theory.flavor("no such scale") == "Unique flavor."


# ---------------------------------------------------------------------------
# intervals
# ---------------------------------------------------------------------------


class TestInterval:
    def test_major_second(self, theory):
        assert theory.interval("C", "D") == "2M"

    def test_perfect_fourth_above_dominant_root(self, theory):
        assert theory.interval("G", "C") == "4P"

    def test_minor_sixth(self, theory):
        assert theory.interval("C", "G#") == "6m"

    def test_unison(self, theory):
        assert theory.interval("E", "E") == "1P"

    def test_unknown_note_gives_empty(self, theory):
        assert theory.interval("C", "X") == ""

    def test_interval_between_returns_value_object(self, theory):
        iv = theory.interval_between("A", "E")
        assert iv == Interval(semitones=7, name="perfect fifth", short="5P")

    def test_interval_between_unknown_is_none(self, theory):
        assert theory.interval_between("?", "E") is None


# ---------------------------------------------------------------------------
# chord parsing
# ---------------------------------------------------------------------------


class TestChordParsing:
    def test_minor_seventh(self, theory):
        c = theory.chord("Am7")
        assert c.tonic == "A"
        assert c.notes == ("A", "C", "E", "G")
        assert c.quality == "m7"

    def test_dominant_seventh_order_root_third_fifth_seventh(self, theory):
        assert theory.chord("D7").notes == ("D", "F#", "A", "C")

    def test_major_seventh(self, theory):
        assert theory.chord("Gmaj7").notes == ("G", "B", "D", "F#")

    def test_flat_root_keeps_symbol(self, theory):
        c = theory.chord("Bb7")
        assert c.symbol == "Bb7"
        assert c.tonic == "A#"
        assert c.notes == ("A#", "D", "F", "G#")
        assert c.quality == "7"

    def test_ninth_reduced_to_pitch_class(self, theory):
        assert theory.chord("C9").notes == ("C", "E", "G", "A#", "D")

    def test_major_triad_aliases(self, theory):
        assert theory.chord("Cmaj").notes == theory.chord("C").notes == ("C", "E", "G")

    def test_lowercase_root_is_capitalized(self, theory):
        assert theory.chord("am").symbol == "Am"

    def test_unparseable_token(self, theory):
        c = theory.chord("xyz")
        assert c.tonic is None
        assert c.notes == ()
        assert c.quality == "xyz"

    def test_unknown_suffix(self, theory):
        assert theory.chord("Cfoo").tonic is None
