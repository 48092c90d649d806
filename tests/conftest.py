"""Pytest configuration and fixtures."""

from pathlib import Path

import pytest

from pattern_optimizer.scoring import ScoreSampler


FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def fibonacci_path() -> Path:
    """Path to a naive recursive Fibonacci in JavaScript."""
    return FIXTURES_DIR / "fibonacci.js"


@pytest.fixture
def render_path() -> Path:
    """Path to JavaScript assigning innerHTML and declaring with var."""
    return FIXTURES_DIR / "render.js"


@pytest.fixture
def matrix_path() -> Path:
    """Path to JavaScript with doubly nested loops."""
    return FIXTURES_DIR / "matrix.js"


@pytest.fixture
def squares_path() -> Path:
    """Path to Python building a list with a guarded append loop."""
    return FIXTURES_DIR / "squares.py"


@pytest.fixture
def notes_path() -> Path:
    """Path to a file no rule recognizes."""
    return FIXTURES_DIR / "notes.txt"


@pytest.fixture
def domains_path() -> Path:
    """Path to a custom knowledge domain seed file."""
    return FIXTURES_DIR / "domains.json"


@pytest.fixture
def sampler() -> ScoreSampler:
    """Seeded placeholder score sampler."""
    return ScoreSampler(seed=1234)
