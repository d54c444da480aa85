"""
core/harmony/qualities.py — Chord-quality predicates over symbol text.

Every predicate takes a chord symbol ("G7", "Am7", "Bm7b5") and looks only at
the text after the root. They are deliberately textual: the scale matcher,
the functional labeler and the note scorer all classify chords from what the
user typed, not from the parsed note set.
"""

from __future__ import annotations

import re

_ROOT_PREFIX = re.compile(r"^[A-Ga-g][#b]?")

_MINOR = re.compile(r"^(m(?!aj)|min|-)")
_MAJOR_SEVENTH = re.compile(r"(maj7|maj9|maj13|Maj7|ma7|M7|M9|M13|Δ)")
_HALF_DIMINISHED = re.compile(r"(m7b5|min7b5|-7b5|ø)")
_DIMINISHED = re.compile(r"(dim|°)")
_SHARP_ELEVEN = re.compile(r"#11")
_ALTERED = re.compile(r"(alt|7b9|7#9|7b5|7#5|7b13|b13)")
_DOMINANT_EXTENSION = re.compile(r"^(7|9|11|13)")
_SUSPENDED = re.compile(r"sus")
_MAJOR_OR_MINOR = re.compile(r"^(|M|maj|maj7|maj9|maj13|M7|M9|ma7|Δ|Δ7|6|69|add9|m|min|-|m7|min7|-7|m6|m9|m11|madd9)$")


def quality_text(symbol: str) -> str:
    """Return the symbol text after the root: 'm7' for 'Am7', '7' for 'Bb7'."""
    return _ROOT_PREFIX.sub("", symbol.strip(), count=1)


def has_seventh(symbol: str) -> bool:
    return "7" in quality_text(symbol)


def is_minor(symbol: str) -> bool:
    """Minor-family quality: m, min, -, m7, mMaj7 (but not maj7)."""
    return bool(_MINOR.match(quality_text(symbol)))


def is_major_seventh(symbol: str) -> bool:
    return bool(_MAJOR_SEVENTH.search(quality_text(symbol)))


def is_half_diminished(symbol: str) -> bool:
    return bool(_HALF_DIMINISHED.search(quality_text(symbol)))


def is_diminished(symbol: str) -> bool:
    """Fully diminished quality (dim, °, dim7). Half-diminished is separate."""
    return bool(_DIMINISHED.search(quality_text(symbol)))


def is_dominant(symbol: str) -> bool:
    """Seventh-bearing chord that is not maj7, half-diminished or diminished.

    Examples:
        >>> is_dominant("G7")
        True
        >>> is_dominant("Cmaj7")
        False
    """
    return (
        has_seventh(symbol)
        and not is_major_seventh(symbol)
        and not is_half_diminished(symbol)
        and not is_diminished(symbol)
    )


def is_extension_dominant(symbol: str) -> bool:
    """Any seventh chord except maj7; m7b5 and dim7 included.

    Decides which extension weights apply to non-chord tones.
    """
    return has_seventh(symbol) and not is_major_seventh(symbol)


def is_resolving_dominant(symbol: str) -> bool:
    """Seventh chord that pulls to a resolution: not maj7, not half-diminished.

    dim7 counts; m7b5 does not.
    """
    return is_extension_dominant(symbol) and not is_half_diminished(symbol)


def is_sharp_eleven_dominant(symbol: str) -> bool:
    return bool(_SHARP_ELEVEN.search(quality_text(symbol))) and not is_major_seventh(symbol)


def is_altered_dominant(symbol: str) -> bool:
    quality = quality_text(symbol)
    return bool(_ALTERED.search(quality)) and not _MINOR.match(quality)


def is_generic_dominant(symbol: str) -> bool:
    """Dominant-family chord: 7, 9, 11, 13 and their suspensions."""
    return is_dominant(symbol) or bool(_DOMINANT_EXTENSION.match(quality_text(symbol)))


def is_suspended(symbol: str) -> bool:
    return bool(_SUSPENDED.search(quality_text(symbol)))


def looks_major_or_minor(symbol: str) -> bool:
    """Stable resolution target: a plain major or minor chord (triad, 6th, 7th, add9)."""
    return bool(_MAJOR_OR_MINOR.match(quality_text(symbol)))
