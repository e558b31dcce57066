from pathlib import Path

import pytest

from crucible.domain.types import Grid
from crucible.utils.grid_factory import load_grid

DATA_DIR = Path(__file__).parent / "data"


@pytest.fixture
def data_dir() -> Path:
    return DATA_DIR


@pytest.fixture
def sample_grid() -> Grid:
    """The published 13x13 example grid."""
    return load_grid(DATA_DIR / "sample.txt")


@pytest.fixture
def ultra_sample_grid() -> Grid:
    """The published 5x12 example for the long-run rules."""
    return load_grid(DATA_DIR / "sample_ultra.txt")
