"""
Shared fixtures for the test suite.

Centralizes the default theory provider and chord/progression factories so
individual test files don't repeat parsing boilerplate.
"""

from collections.abc import Callable

import pytest

from core.harmony.analysis import parse_progression
from core.harmony.theory import TableTheory, get_theory
from core.harmony.types import Chord

# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def theory() -> TableTheory:
    """The default catalog-backed provider."""
    return get_theory()


@pytest.fixture()
def chord(theory: TableTheory) -> Callable[[str], Chord]:
    """Parse a single chord symbol: ``chord("G7")``."""
    return theory.chord


@pytest.fixture()
def progression(theory: TableTheory) -> Callable[[str], tuple[Chord, ...]]:
    """Parse a whitespace-separated progression: ``progression("Am7 D7 Gmaj7")``."""

    def _parse(text: str) -> tuple[Chord, ...]:
        return parse_progression(text, theory)

    return _parse
