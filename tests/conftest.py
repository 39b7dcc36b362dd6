"""
Shared fixtures for Feedback Editor tests.

Provides seeded scenes, scratch framebuffers and the sample tick scripts.
"""
import sys
import os
import random
import pytest

# Ensure editor/src is on the path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'editor', 'src'))

# Widget tests run without a display
os.environ.setdefault('QT_QPA_PLATFORM', 'offscreen')


# ── Buffer sizes ─────────────────────────────────────────────────────────

WIDTH = 800
HEIGHT = 600


@pytest.fixture
def size():
    """Default buffer size used across tests"""
    return WIDTH, HEIGHT


@pytest.fixture
def scene():
    """Fresh 800x600 scene with a seeded spawn RNG"""
    from components.scene import Scene
    return Scene(WIDTH, HEIGHT, rng=random.Random(1234))


@pytest.fixture
def small_grid():
    """4x3 grid over a zeroed buffer, plus the buffer itself"""
    from models.pixel_grid import PixelGrid
    buffer = bytearray(4 * 3 * 4)
    return PixelGrid(buffer, 4, 3), buffer


@pytest.fixture
def make_object():
    """Factory for transform objects on an 800x600 canvas"""
    from components.transform_object import TransformObject
    from models.transform import Transform, Vec2

    def _make(x=WIDTH / 2, y=HEIGHT / 2, rotation=0.0, scale=0.6, opacity=200):
        transform = Transform(Vec2(x, y), rotation=rotation, scale=scale, opacity=opacity)
        return TransformObject(transform, WIDTH, HEIGHT)
    return _make


@pytest.fixture
def examples_dir():
    return os.path.join(os.path.dirname(__file__), '..', 'examples')
