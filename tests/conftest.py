"""Pytest configuration and shared fixtures."""

import sys
from pathlib import Path

import pytest

# Add the project root to the path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from orbital.camera import Viewport  # noqa: E402
from orbital.data_models import SimulationConfig, create_body  # noqa: E402


@pytest.fixture
def config():
    """Unsoftened config at unit time scale."""
    return SimulationConfig(G=0.5, time_scale=1.0, softening=0.0, trail_length=100)


@pytest.fixture
def make_body():
    """Factory for bodies with sensible defaults."""
    def _make(pos=(0.0, 0.0), vel=(0.0, 0.0), mass=100.0, is_fixed=False, density=1.0):
        return create_body(pos, vel, mass, (255, 255, 255), is_fixed=is_fixed, density=density)
    return _make


@pytest.fixture
def viewport():
    """Viewport with the world origin at the top-left corner and unit zoom."""
    return Viewport(offset=(0.0, 0.0), zoom=1.0, viewport_size=(800, 600))
