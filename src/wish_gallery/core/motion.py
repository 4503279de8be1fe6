"""Ken Burns motion targets for the carousel.

The generator only hands out discrete target vectors; the renderer animates
towards them over ``animation_duration_ms`` with its own easing.
"""

import random
from typing import Optional

from PySide6.QtCore import QObject, QTimer, Signal

from wish_gallery.core.preferences import ReducedMotionObserver
from wish_gallery.type_defs import NEUTRAL_MOTION, MotionVector
from wish_gallery.utils.logging_config import logger

KEN_BURNS_DIRECTIONS: tuple[MotionVector, ...] = (
    MotionVector(scale=1.1, x_offset=2.0, y_offset=2.0),
    MotionVector(scale=1.1, x_offset=-2.0, y_offset=2.0),
    MotionVector(scale=1.1, x_offset=2.0, y_offset=-2.0),
    MotionVector(scale=1.1, x_offset=-2.0, y_offset=-2.0),
)


def pick_motion_vector(
    rng: random.Random,
    directions: tuple[MotionVector, ...] = KEN_BURNS_DIRECTIONS,
) -> MotionVector:
    return rng.choice(directions)


class MotionGenerator(QObject):
    """Produces a fresh pan/zoom target on every slide change.

    Each change first snaps back to the neutral vector, then applies a random
    direction after ``delay_ms`` so the reset is rendered before the new
    animation starts. Nothing is scheduled while motion is reduced.
    """

    vector_changed: Signal = Signal(object)  # type: ignore[misc]

    def __init__(
        self,
        preference: ReducedMotionObserver,
        rng: Optional[random.Random] = None,
        delay_ms: int = 100,
        animation_duration_ms: int = 8000,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        self._preference: ReducedMotionObserver = preference
        self._rng: random.Random = rng if rng is not None else random.Random()
        self.animation_duration_ms: int = animation_duration_ms
        self._vector: MotionVector = NEUTRAL_MOTION
        self._pending: Optional[MotionVector] = None
        self._has_slide: bool = False

        self._apply_timer: QTimer = QTimer(self)
        self._apply_timer.setSingleShot(True)
        self._apply_timer.setInterval(delay_ms)
        _ = self._apply_timer.timeout.connect(self._apply_pending)

        self._unsubscribe = preference.subscribe(self._on_preference_changed)

    @property
    def vector(self) -> MotionVector:
        return self._vector

    @property
    def pending(self) -> bool:
        return self._apply_timer.isActive()

    def on_slide_changed(self) -> None:
        """Restart the effect for a newly shown slide."""
        self._has_slide = True
        self._apply_timer.stop()
        self._pending = None
        self._set_vector(NEUTRAL_MOTION)
        if self._preference.current_value():
            return
        self._pending = pick_motion_vector(self._rng)
        self._apply_timer.start()

    def reset(self) -> None:
        """Cancel any pending target and return to neutral."""
        self._apply_timer.stop()
        self._pending = None
        self._set_vector(NEUTRAL_MOTION)

    def clear(self) -> None:
        """No slide is shown any more."""
        self._has_slide = False
        self.reset()

    def dispose(self) -> None:
        self._apply_timer.stop()
        self._pending = None
        self._unsubscribe()

    def _apply_pending(self) -> None:
        if self._pending is None:
            return
        vector, self._pending = self._pending, None
        self._set_vector(vector)

    def _set_vector(self, vector: MotionVector) -> None:
        if vector == self._vector:
            return
        self._vector = vector
        self.vector_changed.emit(vector)

    def _on_preference_changed(self, reduced: bool) -> None:
        if reduced:
            logger.debug("Reduced motion enabled, freezing Ken Burns effect")
            self.reset()
        elif self._has_slide:
            self.on_slide_changed()
