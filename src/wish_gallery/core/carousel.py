"""Carousel state machine: current slide, transition guard, auto-advance and fullscreen flag.

Everything runs on the Qt event loop, so transitions never overlap in time;
the transitioning flag is the only guard needed.
"""

import enum
import random
from typing import Optional

from PySide6.QtCore import QObject, QTimer, Signal

from wish_gallery.core.config_manager import GalleryConfig
from wish_gallery.core.motion import MotionGenerator
from wish_gallery.core.preferences import ReducedMotionObserver
from wish_gallery.type_defs import CarouselSnapshot, MotionVector
from wish_gallery.utils.logging_config import log_function, logger


class Direction(enum.Enum):
    NEXT = 1
    PREV = -1


class CarouselController(QObject):
    """Navigation over an ordered sequence of ``count`` slides.

    The index changes synchronously inside advance()/go_to(); only the
    transitioning flag is released later, after ``transition_ms``.

    Auto-advance runs every ``auto_advance_ms`` while there is more than one
    slide, the lightbox is closed and motion is not reduced. The timer is
    rebuilt whenever one of those inputs changes. Manual navigation leaves its
    phase alone.
    """

    index_changed: Signal = Signal(int)  # type: ignore[misc]
    count_changed: Signal = Signal(int)  # type: ignore[misc]
    transitioning_changed: Signal = Signal(bool)  # type: ignore[misc]
    fullscreen_changed: Signal = Signal(bool)  # type: ignore[misc]
    motion_changed: Signal = Signal(object)  # type: ignore[misc]

    def __init__(
        self,
        preference: ReducedMotionObserver,
        count: int = 0,
        auto_advance_ms: int = 5000,
        transition_ms: int = 500,
        motion_delay_ms: int = 100,
        motion_duration_ms: int = 8000,
        rng: Optional[random.Random] = None,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        self._preference: ReducedMotionObserver = preference
        self.auto_advance_ms: int = auto_advance_ms
        self.transition_ms: int = transition_ms

        self._count: int = 0
        self._current_index: Optional[int] = None
        self._transitioning: bool = False
        self._fullscreen: bool = False
        self._disposed: bool = False

        self._motion: MotionGenerator = MotionGenerator(
            preference,
            rng=rng,
            delay_ms=motion_delay_ms,
            animation_duration_ms=motion_duration_ms,
            parent=self,
        )
        _ = self._motion.vector_changed.connect(self.motion_changed)

        self._transition_timer: QTimer = QTimer(self)
        self._transition_timer.setSingleShot(True)
        _ = self._transition_timer.timeout.connect(self._end_transition)

        self._auto_timer: Optional[QTimer] = None
        self._unsubscribe = preference.subscribe(self._on_preference_changed)

        if count:
            self.set_count(count)

    @classmethod
    def from_config(
        cls,
        cfg: GalleryConfig,
        preference: ReducedMotionObserver,
        parent: Optional[QObject] = None,
    ) -> "CarouselController":
        return cls(
            preference,
            auto_advance_ms=cfg.auto_advance_ms,
            transition_ms=cfg.transition_ms,
            motion_delay_ms=cfg.motion_delay_ms,
            motion_duration_ms=cfg.motion_duration_ms,
            parent=parent,
        )

    # ----------------------------- State -----------------------------

    @property
    def count(self) -> int:
        return self._count

    @property
    def current_index(self) -> Optional[int]:
        return self._current_index

    @property
    def is_transitioning(self) -> bool:
        return self._transitioning

    @property
    def is_fullscreen(self) -> bool:
        return self._fullscreen

    @property
    def motion(self) -> MotionGenerator:
        return self._motion

    @property
    def motion_vector(self) -> MotionVector:
        return self._motion.vector

    @property
    def auto_advance_active(self) -> bool:
        return self._auto_timer is not None and self._auto_timer.isActive()

    def snapshot(self) -> CarouselSnapshot:
        return CarouselSnapshot(
            current_index=self._current_index,
            count=self._count,
            is_transitioning=self._transitioning,
            is_fullscreen=self._fullscreen,
            motion=self._motion.vector,
        )

    # ----------------------------- Inputs -----------------------------

    def set_count(self, count: int, current_replaced: bool = False) -> None:
        """Point the carousel at a sequence of ``count`` slides.

        The index falls back to 0 when the old one no longer exists, and is
        None while there are no slides. Pass ``current_replaced`` when the
        index is still valid but now holds a different image (an earlier one
        was removed); that counts as a slide change.
        """
        if count < 0:
            raise ValueError(f"Slide count cannot be negative: {count}")
        count_changed = count != self._count
        if not count_changed and not current_replaced:
            return

        self._count = count
        if count_changed:
            self.count_changed.emit(count)

        if count == 0:
            self._current_index = None
            self._motion.clear()
        elif self._current_index is None or self._current_index >= count:
            self._current_index = 0
            self.index_changed.emit(0)
            self._motion.on_slide_changed()
        elif current_replaced:
            self.index_changed.emit(self._current_index)
            self._motion.on_slide_changed()

        if count_changed:
            self._rebuild_auto_advance()

    def advance(self, direction: Direction = Direction.NEXT) -> bool:
        """Move one slide in ``direction``, wrapping at both ends.

        Returns:
            False when ignored (a transition is running or there is at most one slide)
        """
        if self._transitioning or self._count <= 1 or self._current_index is None:
            return False
        new_index = (self._current_index + direction.value + self._count) % self._count
        self._begin_transition(new_index)
        return True

    def go_to(self, index: int) -> bool:
        """Jump straight to ``index`` under the same guard as advance()."""
        if self._transitioning or self._count <= 1:
            return False
        if not 0 <= index < self._count:
            logger.warning(f"Ignoring jump to slide {index}, only {self._count} available")
            return False
        if index == self._current_index:
            return False
        self._begin_transition(index)
        return True

    def set_fullscreen(self, fullscreen: bool) -> None:
        if fullscreen == self._fullscreen:
            return
        self._fullscreen = fullscreen
        self.fullscreen_changed.emit(fullscreen)
        self._rebuild_auto_advance()

    @log_function
    def dispose(self) -> None:
        """Cancel every timer and drop the preference subscription."""
        if self._disposed:
            return
        self._disposed = True
        self._transition_timer.stop()
        self._teardown_auto_advance()
        self._unsubscribe()
        self._motion.dispose()

    # ----------------------------- Internals -----------------------------

    def _begin_transition(self, new_index: int) -> None:
        self._transitioning = True
        self.transitioning_changed.emit(True)
        self._current_index = new_index
        self.index_changed.emit(new_index)
        self._motion.on_slide_changed()
        self._transition_timer.start(self.transition_ms)

    def _end_transition(self) -> None:
        self._transitioning = False
        self.transitioning_changed.emit(False)

    def _auto_advance_allowed(self) -> bool:
        return (
            not self._disposed
            and self._count > 1
            and not self._fullscreen
            and not self._preference.current_value()
        )

    def _teardown_auto_advance(self) -> None:
        if self._auto_timer is not None:
            self._auto_timer.stop()
            self._auto_timer.deleteLater()
            self._auto_timer = None

    def _rebuild_auto_advance(self) -> None:
        self._teardown_auto_advance()
        if not self._auto_advance_allowed():
            logger.debug("Auto-advance paused")
            return
        timer = QTimer(self)
        timer.setInterval(self.auto_advance_ms)
        _ = timer.timeout.connect(self._on_auto_advance)
        timer.start()
        self._auto_timer = timer

    def _on_auto_advance(self) -> None:
        _ = self.advance(Direction.NEXT)

    def _on_preference_changed(self, reduced: bool) -> None:
        logger.info(f"Reduced motion {'on' if reduced else 'off'}")
        self._rebuild_auto_advance()
