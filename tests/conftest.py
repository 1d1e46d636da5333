"""
Pytest configuration and fixtures for Snatch Assistant tests.
"""

import json
import sys
from pathlib import Path

import pytest

# Add parent directory to path so we can import the top-level modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from letter_node import LetterObservation
from snatch_solver import AnagramDictionary


FIXTURES_DIR = Path(__file__).parent / "fixtures"

# Small word list covering the snatches exercised in the tests
TEST_WORDS = [
    "pit", "tip", "rip", "trip",
    "tamper", "mare", "ream",
    "cat", "act", "dog", "god",
    "at", "on", "a",  # too short, never indexed
]


def get_available_fixtures():
    """Get list of available fixture files."""
    if not FIXTURES_DIR.exists():
        return []
    return sorted(FIXTURES_DIR.glob("*.json"))


def load_fixture(fixture_name):
    """
    Load a fixture by name (without .json extension).

    Returns:
        dict with fixture data or None if not found
    """
    fixture_path = FIXTURES_DIR / f"{fixture_name}.json"
    if not fixture_path.exists():
        return None

    with open(fixture_path, 'r') as f:
        return json.load(f)


@pytest.fixture
def fixture_loader():
    """Fixture that provides a function to load test fixtures."""
    return load_fixture


@pytest.fixture(params=[f.stem for f in get_available_fixtures()])
def table_fixture(request):
    """
    Parametrized fixture that yields each available observation fixture.

    This automatically creates a test for each fixture file found.
    """
    fixture_data = load_fixture(request.param)
    if fixture_data is None:
        pytest.skip(f"Fixture {request.param} not found")

    return {
        'name': request.param,
        'data': fixture_data,
        'path': FIXTURES_DIR / f"{request.param}.json",
    }


@pytest.fixture
def tile_factory():
    """
    Fixture that provides a factory for square tiles.

    Usage:
        def test_something(tile_factory):
            a = tile_factory('A', 5, 5)
    """
    def factory(letter, center_x, center_y, size=10.0, angle=0.0):
        return LetterObservation(letter, float(center_x), float(center_y),
                                 float(size), float(size), float(angle))

    return factory


@pytest.fixture
def dictionary():
    """Anagram dictionary built from TEST_WORDS."""
    return AnagramDictionary(TEST_WORDS)


@pytest.fixture
def dictionary_file(tmp_path):
    """TEST_WORDS written to a word list file, one word per line."""
    path = tmp_path / "words.txt"
    path.write_text("\n".join(TEST_WORDS) + "\n")
    return path


@pytest.fixture(autouse=True)
def fresh_shared_dictionary():
    """Make sure no test sees another test's shared dictionary."""
    AnagramDictionary.reset_instance()
    yield
    AnagramDictionary.reset_instance()
