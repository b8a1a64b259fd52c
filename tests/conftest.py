"""Pytest configuration for sdfmarch tests.

Forces the non-interactive matplotlib backend before any viz module picks one.
"""

import os

os.environ.setdefault("SDFMARCH_MPL_BACKEND", "Agg")

import pytest  # noqa: E402

from sdfmarch.geometry import Sphere  # noqa: E402
from sdfmarch.scene import Scene  # noqa: E402


@pytest.fixture
def unit_sphere_scene():
    """Scene holding a single unit sphere at the origin."""
    return Scene.of(Sphere(1.0))
