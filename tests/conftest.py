"""Test configuration for WishGallery tests."""

import os
import random
import sys
from pathlib import Path

import pytest

# Widgets are created in tests; no display is needed
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

# Add src directory to Python path for imports
src_path = Path(__file__).parent.parent / 'src'
sys.path.insert(0, str(src_path))

# Add tests directory to path for shared_fixtures
tests_path = Path(__file__).parent
sys.path.insert(0, str(tests_path))

from shared_fixtures import RecordingHandleFactory  # noqa: E402

from wish_gallery.core.preferences import ReducedMotionObserver, StaticMotionPreference  # noqa: E402


@pytest.fixture
def motion_source():
    """A settable reduced-motion source, motion allowed by default."""
    return StaticMotionPreference(reduced=False)


@pytest.fixture
def preference(motion_source):
    """Observer over motion_source, closed after the test."""
    observer = ReducedMotionObserver(motion_source)
    yield observer
    observer.close()


@pytest.fixture
def handle_factory():
    return RecordingHandleFactory()


@pytest.fixture
def seeded_rng():
    return random.Random(1234)


@pytest.fixture
def carousel_factory(qtbot, preference, seeded_rng):
    """Build CarouselControllers with short timings; disposes them after the test.

    Usage:
        def test_example(carousel_factory):
            carousel = carousel_factory(count=3)
    """
    from wish_gallery.core.carousel import CarouselController

    controllers = []

    def build(count=3, auto_advance_ms=60_000, transition_ms=50, motion_delay_ms=20, observer=None):
        controller = CarouselController(
            observer if observer is not None else preference,
            count=count,
            auto_advance_ms=auto_advance_ms,
            transition_ms=transition_ms,
            motion_delay_ms=motion_delay_ms,
            motion_duration_ms=1000,
            rng=seeded_rng,
        )
        controllers.append(controller)
        return controller

    yield build

    for controller in reversed(controllers):
        controller.dispose()
