"""
core/harmony/intervals.py — Note and interval arithmetic.

Thin helpers over a TheoryProvider's chroma and interval lookups:

    chroma_distance(a, b)           circular semitone distance 0–6
    nearest_distance(note, others)  smallest circular distance to any of others
    nearest_note(note, others)      (closest note, distance), first one wins ties
    interval_name(a, b)             short ascending interval name, "" if unknown

Notes whose chroma cannot be resolved are skipped, never raised on.
"""

from __future__ import annotations

from collections.abc import Iterable

from core.harmony.theory import TheoryProvider, get_theory


def chroma_distance(a: str, b: str, theory: TheoryProvider | None = None) -> int | None:
    """Return the circular (mod 12) semitone distance between two notes.

    Args:
        a: Note name, e.g. "B"
        b: Note name, e.g. "C"
        theory: Provider used for chroma lookup (default provider if None)

    Returns:
        Distance in [0, 6], or None if either note is unknown

    Examples:
        >>> chroma_distance("B", "C")
        1
        >>> chroma_distance("C", "G")
        5
    """
    theory = theory or get_theory()
    ca, cb = theory.chroma(a), theory.chroma(b)
    if ca is None or cb is None:
        return None
    diff = abs(ca - cb) % 12
    return min(diff, 12 - diff)


def nearest_note(
    note: str,
    others: Iterable[str],
    theory: TheoryProvider | None = None,
) -> tuple[str | None, int | None]:
    """Find the note in ``others`` closest to ``note``.

    Ties are broken by iteration order: the first note at the minimal
    distance wins.

    Returns:
        (closest note, distance), or (None, None) if nothing is comparable
    """
    best: str | None = None
    best_distance: int | None = None
    for other in others:
        distance = chroma_distance(note, other, theory)
        if distance is None:
            continue
        if best_distance is None or distance < best_distance:
            best, best_distance = other, distance
    return best, best_distance


def nearest_distance(
    note: str,
    others: Iterable[str],
    theory: TheoryProvider | None = None,
) -> int | None:
    """Smallest circular semitone distance from ``note`` to any of ``others``."""
    return nearest_note(note, others, theory)[1]


def interval_name(a: str, b: str, theory: TheoryProvider | None = None) -> str:
    """Short ascending interval name from ``a`` to ``b``, e.g. "2M" for C→D."""
    return (theory or get_theory()).interval(a, b)
