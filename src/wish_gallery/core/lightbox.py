"""Fullscreen lightbox over a CarouselController.

While open, the lightbox listens to key presses application-wide (Left,
Right, Escape). The listener exists only between open() and close().
"""

from typing import Optional, Union

from PySide6.QtCore import QCoreApplication, QEvent, QObject, Qt
from PySide6.QtGui import QKeyEvent
from typing_extensions import override

from wish_gallery.core.carousel import CarouselController, Direction
from wish_gallery.utils.logging_config import logger

KEY_PREV = int(Qt.Key.Key_Left)
KEY_NEXT = int(Qt.Key.Key_Right)
KEY_CLOSE = int(Qt.Key.Key_Escape)


class LightboxController(QObject):
    """Opens and closes fullscreen mode and owns its keyboard scope.

    Opening only flips the carousel's fullscreen flag, which in turn pauses
    auto-advance; the current index is left alone. The key listener follows
    the carousel's fullscreen_changed signal, so it is installed and removed
    however fullscreen gets toggled.
    """

    def __init__(
        self,
        carousel: CarouselController,
        app: Optional[QCoreApplication] = None,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        self._carousel: CarouselController = carousel
        self._app: Optional[QCoreApplication] = app
        self._listening_on: Optional[QCoreApplication] = None
        self._disposed: bool = False
        _ = carousel.fullscreen_changed.connect(self._on_fullscreen_changed)
        if carousel.is_fullscreen:
            self._start_listening()

    @property
    def is_open(self) -> bool:
        return self._carousel.is_fullscreen

    @property
    def is_listening(self) -> bool:
        return self._listening_on is not None

    def open(self) -> None:
        if self._disposed:
            return
        self._carousel.set_fullscreen(True)
        logger.debug(f"Lightbox opened at slide {self._carousel.current_index}")

    def close(self) -> None:
        self._carousel.set_fullscreen(False)
        self._stop_listening()

    def dispose(self) -> None:
        """Close and stop following the carousel."""
        self._disposed = True
        self.close()

    def handle_key(self, key: Union[int, Qt.Key]) -> bool:
        """Apply a key press while open. Returns True when the key was consumed."""
        if not self.is_open:
            return False
        key = int(key)
        if key == KEY_PREV:
            _ = self._carousel.advance(Direction.PREV)
            return True
        if key == KEY_NEXT:
            _ = self._carousel.advance(Direction.NEXT)
            return True
        if key == KEY_CLOSE:
            self.close()
            return True
        return False

    @override
    def eventFilter(self, watched: QObject, event: QEvent) -> bool:
        if event.type() == QEvent.Type.KeyPress and isinstance(event, QKeyEvent):
            if self.handle_key(event.key()):
                return True
        return super().eventFilter(watched, event)

    def _on_fullscreen_changed(self, fullscreen: bool) -> None:
        if fullscreen and not self._disposed:
            self._start_listening()
        else:
            self._stop_listening()
            logger.debug(f"Lightbox closed at slide {self._carousel.current_index}")

    def _start_listening(self) -> None:
        if self._listening_on is not None:
            return
        app = self._app or QCoreApplication.instance()
        if app is None:
            logger.warning("No Qt application running, lightbox keyboard navigation disabled")
            return
        app.installEventFilter(self)
        self._listening_on = app

    def _stop_listening(self) -> None:
        if self._listening_on is None:
            return
        self._listening_on.removeEventFilter(self)
        self._listening_on = None
