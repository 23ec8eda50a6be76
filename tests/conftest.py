"""Shared fixtures for heightmap solver tests."""

import pytest

from heightmap_solver.integration.io import parse_height_map


SAMPLE_MAP = """\
Sabqponm
abcryxxl
accszExk
acctuvwj
abdefghi
"""

# Every route to E needs a climb of more than one level
UNREACHABLE_MAP = """\
Sabc
zyxE
"""


@pytest.fixture
def sample_text():
    """Canonical 5x8 elevation map."""
    return SAMPLE_MAP


@pytest.fixture
def sample_map():
    """Canonical 5x8 map parsed into a HeightMap."""
    return parse_height_map(SAMPLE_MAP)


@pytest.fixture
def unreachable_text():
    """Text of a map whose goal cannot be reached."""
    return UNREACHABLE_MAP


@pytest.fixture
def unreachable_map():
    """Map whose goal cannot be reached under the climbing rules."""
    return parse_height_map(UNREACHABLE_MAP)
